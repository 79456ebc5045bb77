from __future__ import annotations

"""
Rule-based montelukast neuropsychiatric risk scorer.

Design intent:
- Keep scoring pure and synchronous: same inputs, same result, no retained state.
- Absorb missing or unknown inputs through explicit defaults instead of failing.
- Leave input rejection to the hosting boundary (API/CLI).
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from backend.risk.reference import (
    AGE_BASELINES,
    AGE_BRACKET_THRESHOLDS,
    CRITICAL_COMBINATIONS,
    DEFAULT_AGE_BRACKET,
    DEFAULT_DURATION_CATEGORY,
    DOSE_MULTIPLIERS,
    DURATION_MULTIPLIERS,
    FALLBACK_BASELINE,
    HIGH_RISK_CUTOFF,
    HIGH_RISK_SYMPTOMS,
    MEDIUM_DURATION_UP_TO_WEEKS,
    MODERATE_RISK_CUTOFF,
    NEUTRAL_MULTIPLIER,
    NO_SYMPTOM_LOAD,
    RISK_CEILING,
    RISK_FLOOR,
    SEVERITY_CATEGORY,
    SEVERITY_FLOOR,
    SHORT_DURATION_BELOW_WEEKS,
    SYMPTOM_LOAD_STEPS,
    TEMPORAL_ASSOCIATION_FACTOR,
    YOUNGEST_AGE_BRACKET,
    AgeBracket,
    DurationCategory,
    RiskLabel,
    SymptomCategory,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskDetails:
    base: float
    symptom_cat: SymptomCategory
    has_high_severity: bool
    is_critical_combo: bool = False


@dataclass(frozen=True)
class RiskResult:
    percentage: int
    label: RiskLabel
    details: RiskDetails


def calculate(
    age: float | None,
    dose: str | None,
    duration_weeks: float | str | None,
    symptoms: Sequence[str],
    temporal_association: bool,
    brand: str | None = None,
    combo_drugs: Iterable[str] | None = None,
) -> RiskResult:
    """
    Score one assessment.

    `duration_weeks` is in weeks; None or "" means unknown and scores as medium.
    `symptoms` is counted as given (duplicates count toward the load step) but
    severity escalation only checks catalog membership.
    """

    bracket = resolve_age_bracket(age)
    base = age_baseline(bracket)

    dose_mult = dose_multiplier(dose)
    duration_category = resolve_duration_category(duration_weeks)
    dur_mult = duration_multiplier(duration_category)

    risk = base * dose_mult * dur_mult

    reported = list(symptoms or [])
    symptom_cat, adder = symptom_load(len(reported))
    risk += adder

    high_severity = has_high_severity_symptom(reported)
    if high_severity:
        risk = max(risk, SEVERITY_FLOOR)
        symptom_cat = SEVERITY_CATEGORY

    if temporal_association:
        risk *= TEMPORAL_ASSOCIATION_FACTOR

    forced = critical_combination_risk(brand, combo_drugs)
    is_critical_combo = forced is not None
    if forced is not None:
        risk = forced

    risk = clamp_risk(risk)
    label = classify_label(risk)
    percentage = to_percentage(risk)

    logger.debug(
        "risk_assessed bracket=%s dose_mult=%.2f duration=%s symptoms=%d severity=%s temporal=%s critical=%s risk=%.4f",
        bracket,
        dose_mult,
        duration_category,
        len(reported),
        high_severity,
        bool(temporal_association),
        is_critical_combo,
        risk,
    )

    return RiskResult(
        percentage=percentage,
        label=label,
        details=RiskDetails(
            base=base,
            symptom_cat=symptom_cat,
            has_high_severity=high_severity,
            is_critical_combo=is_critical_combo,
        ),
    )


def resolve_age_bracket(age: float | None) -> AgeBracket:
    # Falsy (None/0) and NaN ages fall back to the middle bracket.
    if not age or _is_nan(age):
        return DEFAULT_AGE_BRACKET
    for lower_bound, bracket in AGE_BRACKET_THRESHOLDS:
        if age >= lower_bound:
            return bracket
    return YOUNGEST_AGE_BRACKET


def age_baseline(bracket: str) -> float:
    baseline = AGE_BASELINES.get(bracket)  # type: ignore[call-overload]
    if baseline is None:
        return FALLBACK_BASELINE
    return baseline


def resolve_duration_category(duration_weeks: float | str | None) -> DurationCategory:
    if duration_weeks is None or duration_weeks == "":
        return DEFAULT_DURATION_CATEGORY
    try:
        weeks = float(duration_weeks)
    except (TypeError, ValueError):
        return DEFAULT_DURATION_CATEGORY
    if _is_nan(weeks):
        return DEFAULT_DURATION_CATEGORY
    if weeks < SHORT_DURATION_BELOW_WEEKS:
        return "short"
    if weeks <= MEDIUM_DURATION_UP_TO_WEEKS:
        return "medium"
    return "long"


def dose_multiplier(dose: str | None) -> float:
    if dose is None:
        return NEUTRAL_MULTIPLIER
    multiplier = DOSE_MULTIPLIERS.get(dose)  # type: ignore[call-overload]
    if multiplier is None:
        return NEUTRAL_MULTIPLIER
    return multiplier


def duration_multiplier(category: DurationCategory) -> float:
    multiplier = DURATION_MULTIPLIERS.get(category)
    if multiplier is None:
        return NEUTRAL_MULTIPLIER
    return multiplier


def symptom_load(count: int) -> tuple[SymptomCategory, float]:
    for minimum, category, adder in SYMPTOM_LOAD_STEPS:
        if count >= minimum:
            return category, adder
    return NO_SYMPTOM_LOAD


def has_high_severity_symptom(symptoms: Iterable[str]) -> bool:
    return any(item in HIGH_RISK_SYMPTOMS for item in symptoms)


def critical_combination_risk(brand: str | None, combo_drugs: Iterable[str] | None) -> float | None:
    if not brand or not combo_drugs:
        return None
    matched = [
        CRITICAL_COMBINATIONS[(brand, drug)]
        for drug in combo_drugs
        if (brand, drug) in CRITICAL_COMBINATIONS
    ]
    if not matched:
        return None
    return max(matched)


def critical_combination_pairs(brand: str | None, combo_drugs: Iterable[str] | None) -> list[tuple[str, str]]:
    if not brand or not combo_drugs:
        return []
    pairs: list[tuple[str, str]] = []
    for drug in combo_drugs:
        key = (brand, drug)
        if key in CRITICAL_COMBINATIONS and key not in pairs:
            pairs.append(key)
    return pairs


def clamp_risk(risk: float) -> float:
    return max(RISK_FLOOR, min(RISK_CEILING, risk))


def classify_label(risk: float) -> RiskLabel:
    if risk >= HIGH_RISK_CUTOFF:
        return "High Risk"
    if risk >= MODERATE_RISK_CUTOFF:
        return "Moderate Risk"
    return "Low Risk"


def to_percentage(risk: float) -> int:
    # Half-up, not banker's rounding: 0.125 -> 13.
    return int(math.floor(risk * 100 + 0.5))


def _is_nan(value: float) -> bool:
    try:
        return math.isnan(value)
    except TypeError:
        return False
