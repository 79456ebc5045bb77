from __future__ import annotations

"""
Static reference data for the montelukast neuropsychiatric risk engine.

Design intent:
- Keep every table read-only for the lifetime of the process.
- Keep keys closed (Literal aliases) so callers and validators share one vocabulary.
- Keep the catalog names verbatim; membership is exact string match.
"""

from types import MappingProxyType
from typing import Literal, Mapping


AgeBracket = Literal["1-3", "4-6", "7-9", "10-12", "13-15", "16-18"]
DoseLevel = Literal["4mg", "5mg", "10mg"]
DurationCategory = Literal["short", "medium", "long"]
SymptomCategory = Literal["Low", "Moderate", "High", "High (Severity)"]
RiskLabel = Literal["Low Risk", "Moderate Risk", "High Risk"]

DURATION_UNIT = "weeks"

# Lower bound (years) per bracket, highest first. First bound met wins.
AGE_BRACKET_THRESHOLDS: tuple[tuple[float, AgeBracket], ...] = (
    (16, "16-18"),
    (13, "13-15"),
    (10, "10-12"),
    (7, "7-9"),
    (4, "4-6"),
)
YOUNGEST_AGE_BRACKET: AgeBracket = "1-3"
DEFAULT_AGE_BRACKET: AgeBracket = "7-9"

# Midpoints of the reported incidence ranges per bracket.
AGE_BASELINES: Mapping[AgeBracket, float] = MappingProxyType(
    {
        "16-18": 0.14,
        "13-15": 0.325,
        "10-12": 0.535,
        "7-9": 0.69,
        "4-6": 0.85,
        "1-3": 0.94,
    }
)
FALLBACK_BASELINE = 0.14

DOSE_MULTIPLIERS: Mapping[DoseLevel, float] = MappingProxyType(
    {
        "4mg": 1.0,
        "5mg": 1.1,
        "10mg": 1.25,
    }
)

# short < 4 weeks, medium 4..24 weeks inclusive, long > 24 weeks.
SHORT_DURATION_BELOW_WEEKS = 4.0
MEDIUM_DURATION_UP_TO_WEEKS = 24.0
DEFAULT_DURATION_CATEGORY: DurationCategory = "medium"

DURATION_MULTIPLIERS: Mapping[DurationCategory, float] = MappingProxyType(
    {
        "short": 1.0,
        "medium": 1.1,
        "long": 1.2,
    }
)

NEUTRAL_MULTIPLIER = 1.0

# (minimum symptom count, category, additive risk), highest first.
SYMPTOM_LOAD_STEPS: tuple[tuple[int, SymptomCategory, float], ...] = (
    (4, "High", 0.25),
    (2, "Moderate", 0.10),
    (1, "Low", 0.05),
)
NO_SYMPTOM_LOAD: tuple[SymptomCategory, float] = ("Low", 0.0)

SEVERITY_FLOOR = 0.75
SEVERITY_CATEGORY: SymptomCategory = "High (Severity)"
TEMPORAL_ASSOCIATION_FACTOR = 1.15

RISK_FLOOR = 0.05
RISK_CEILING = 0.99
HIGH_RISK_CUTOFF = 0.70
MODERATE_RISK_CUTOFF = 0.30

HIGH_RISK_SYMPTOMS: frozenset[str] = frozenset(
    {
        "Suicidal ideation / self-harm thoughts",
        "Suicide attempt",
        "Severe depression",
        "Psychosis / hallucinations",
        "Severe aggression or violent behavior",
        "Extreme mood swings",
        "Severe anxiety with panic attacks",
        "Personality changes (sudden, marked)",
        "Disorientation / confusion",
        "Loss of reality contact",
        "Behavioral regression (in children)",
    }
)

MODERATE_LOW_RISK_SYMPTOMS: frozenset[str] = frozenset(
    {
        "Anxiety",
        "Depression (mild-moderate)",
        "Irritability",
        "Aggressive behavior",
        "Emotional lability",
        "Night terrors",
        "Severe insomnia",
        "Social withdrawal",
        "Poor concentration / attention issues",
        "Sleep disturbance",
        "Restlessness",
        "Nightmares",
        "Crying spells",
        "Fatigue",
        "Headache with mood change",
        "Appetite changes",
        "Mild mood changes",
    }
)

KNOWN_SYMPTOMS: frozenset[str] = HIGH_RISK_SYMPTOMS | MODERATE_LOW_RISK_SYMPTOMS

# (brand, interacting co-drug) -> forced risk fraction.
CRITICAL_COMBINATIONS: Mapping[tuple[str, str], float] = MappingProxyType(
    {
        ("Almont", "Levocetirizine"): 0.96,
    }
)
