from __future__ import annotations

import os
from dataclasses import dataclass


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _getenv_csv(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    items = [item.strip() for item in value.split(",")]
    return tuple(item for item in items if item)


@dataclass(frozen=True)
class RiskServiceConfig:
    RISK_LOG_LEVEL: str
    RISK_STRICT_SYMPTOMS: bool
    RISK_MAX_AGE_YEARS: int
    RISK_CORS_ALLOW_ORIGINS: tuple[str, ...]

    def log_level_name(self) -> str:
        normalized = self.RISK_LOG_LEVEL.strip().upper()
        if normalized in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            return normalized
        return "INFO"


def load_config() -> RiskServiceConfig:
    max_age = _getenv_int("RISK_MAX_AGE_YEARS", 120)
    if max_age <= 0:
        raise ValueError("RISK_MAX_AGE_YEARS must be positive")
    return RiskServiceConfig(
        RISK_LOG_LEVEL=_getenv_str("RISK_LOG_LEVEL", "INFO"),
        RISK_STRICT_SYMPTOMS=_getenv_bool("RISK_STRICT_SYMPTOMS", False),
        RISK_MAX_AGE_YEARS=max_age,
        RISK_CORS_ALLOW_ORIGINS=_getenv_csv("RISK_CORS_ALLOW_ORIGINS", ("*",)),
    )
