from __future__ import annotations

"""
Clinician-facing wording for a scored assessment.

Design intent:
- Derive every line from the RiskResult; never re-score.
- Keep output plain text so API and CLI hosts render it the same way.
"""

from dataclasses import dataclass
from typing import Iterable, Literal

from backend.risk.reference import HIGH_RISK_SYMPTOMS, MODERATE_LOW_RISK_SYMPTOMS, SEVERITY_CATEGORY
from backend.risk.scorer import RiskResult, critical_combination_pairs, to_percentage


RiskTone = Literal["low", "moderate", "high"]
SymptomSeverity = Literal["high", "mod"]
SeveritySummary = Literal["High", "Low/Mod"]


@dataclass(frozen=True)
class RiskExplanation:
    headline: str
    base_line: str
    finding_line: str
    severity_summary: SeveritySummary
    tone: RiskTone

    def lines(self) -> list[str]:
        return [self.headline, self.base_line, self.finding_line]


@dataclass(frozen=True)
class SymptomCatalogEntry:
    name: str
    severity: SymptomSeverity


def explain_result(
    result: RiskResult,
    *,
    brand: str | None = None,
    combo_drugs: Iterable[str] | None = None,
) -> RiskExplanation:
    details = result.details
    if details.is_critical_combo:
        pairs = critical_combination_pairs(brand, combo_drugs)
        if not pairs:
            raise ValueError("Critical combination result requires the brand and combo_drugs it was scored with.")
        combo_text = ", ".join(f"{b} + {d}" for b, d in pairs)
        finding = f"CRITICAL: High Risk Combination ({combo_text})"
    elif details.symptom_cat == SEVERITY_CATEGORY:
        finding = "High Severity Symptom Detected"
    else:
        finding = f"Symptom Load: {details.symptom_cat}"

    return RiskExplanation(
        headline=f"{result.percentage}% Probability",
        base_line=f"Base Risk (Age): {to_percentage(details.base)}%",
        finding_line=finding,
        severity_summary="High" if details.has_high_severity else "Low/Mod",
        tone=risk_tone(result.label),
    )


def risk_tone(label: str) -> RiskTone:
    if "High" in label:
        return "high"
    if "Moderate" in label:
        return "moderate"
    return "low"


def symptom_catalog_entries() -> list[SymptomCatalogEntry]:
    entries = [SymptomCatalogEntry(name=name, severity="high") for name in HIGH_RISK_SYMPTOMS]
    entries.extend(SymptomCatalogEntry(name=name, severity="mod") for name in MODERATE_LOW_RISK_SYMPTOMS)
    return sorted(entries, key=lambda item: (item.name.casefold(), item.name))
