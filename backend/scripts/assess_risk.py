from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Sequence

from backend.internal_core.config import load_config
from backend.internal_core.validation import RiskInputError, validate_assessment_inputs
from backend.risk.explanation import explain_result, symptom_catalog_entries
from backend.risk.reference import DOSE_MULTIPLIERS
from backend.risk.scorer import calculate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate montelukast neuropsychiatric risk for one patient.")
    parser.add_argument("--age", type=float, default=None, help="Age in years.")
    parser.add_argument("--dose", choices=sorted(DOSE_MULTIPLIERS), default="5mg")
    parser.add_argument("--duration-weeks", type=float, default=None, help="Treatment duration in weeks.")
    parser.add_argument("--symptom", action="append", default=[], help="Reported symptom (repeatable).")
    parser.add_argument("--temporal", action="store_true", help="Symptoms began close to drug start.")
    parser.add_argument("--brand", default=None)
    parser.add_argument("--combo-drug", action="append", default=[], help="Co-administered drug (repeatable).")
    parser.add_argument("--json", action="store_true", help="Print the result record as JSON.")
    parser.add_argument("--list-symptoms", action="store_true", help="Print the symptom catalog and exit.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config()
    logging.basicConfig(level=config.log_level_name(), format="%(levelname)s %(name)s %(message)s")

    if args.list_symptoms:
        for entry in symptom_catalog_entries():
            marker = "!" if entry.severity == "high" else " "
            print(f"{marker} {entry.name}")
        return 0

    try:
        validate_assessment_inputs(
            age=args.age,
            duration_weeks=args.duration_weeks,
            symptoms=args.symptom,
            config=config,
        )
    except RiskInputError as exc:
        parser.error(str(exc))

    result = calculate(
        args.age,
        args.dose,
        args.duration_weeks,
        args.symptom,
        args.temporal,
        args.brand,
        args.combo_drug,
    )
    if args.json:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
        return 0

    explanation = explain_result(result, brand=args.brand, combo_drugs=args.combo_drug)
    print(result.label)
    for line in explanation.lines():
        print(line)
    print(f"Symptoms reported: {len(args.symptom)} (severity: {explanation.severity_summary})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
