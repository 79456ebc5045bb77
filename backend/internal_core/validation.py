from __future__ import annotations

from typing import Iterable

from backend.internal_core.config import RiskServiceConfig
from backend.risk.reference import KNOWN_SYMPTOMS


class RiskInputError(ValueError):
    """Raised when assessment input is well-formed but clinically out of range."""


def validate_assessment_inputs(
    *,
    age: float | None,
    duration_weeks: float | None,
    symptoms: Iterable[str],
    config: RiskServiceConfig,
) -> None:
    if age is not None and age < 0:
        raise RiskInputError("age must be >= 0.")
    if age is not None and age > config.RISK_MAX_AGE_YEARS:
        raise RiskInputError(f"age must be <= {config.RISK_MAX_AGE_YEARS} years.")
    if duration_weeks is not None and duration_weeks < 0:
        raise RiskInputError("duration_weeks must be >= 0.")
    if config.RISK_STRICT_SYMPTOMS:
        unknown = sorted({item for item in symptoms if item not in KNOWN_SYMPTOMS})
        if unknown:
            raise RiskInputError(f"Unknown symptoms: {', '.join(unknown)}")
