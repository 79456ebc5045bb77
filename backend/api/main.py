from __future__ import annotations

"""
HTTP surface for the montelukast risk estimator.

Design intent:
- Keep API orchestration thin and typed.
- Reject out-of-domain input here; the scorer itself stays total.
- Return the scorer's result record unchanged plus display text.
"""

import logging
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from backend.internal_core.config import RiskServiceConfig, load_config
from backend.internal_core.validation import RiskInputError, validate_assessment_inputs
from backend.risk.explanation import explain_result, symptom_catalog_entries
from backend.risk.reference import (
    AGE_BASELINES,
    CRITICAL_COMBINATIONS,
    DOSE_MULTIPLIERS,
    DURATION_MULTIPLIERS,
    DURATION_UNIT,
    MEDIUM_DURATION_UP_TO_WEEKS,
    SHORT_DURATION_BELOW_WEEKS,
    DoseLevel,
)
from backend.risk.scorer import calculate, resolve_age_bracket, resolve_duration_category


class RiskAssessRequest(BaseModel):
    age: float | None = Field(default=None, ge=0.0)
    dose: DoseLevel
    duration_weeks: float | None = Field(default=None, ge=0.0)
    symptoms: list[str] = Field(default_factory=list)
    temporal_association: bool = False
    brand: str | None = Field(default=None, max_length=64)
    combo_drugs: list[str] = Field(default_factory=list)
    gender: str | None = Field(default=None, max_length=32)
    height_cm: float | None = Field(default=None, gt=0.0)
    weight_kg: float | None = Field(default=None, gt=0.0)
    frequency: str | None = Field(default=None, max_length=32)


class RiskDetailsPayload(BaseModel):
    base: float
    symptom_cat: Literal["Low", "Moderate", "High", "High (Severity)"]
    has_high_severity: bool
    is_critical_combo: bool


class RiskExplanationPayload(BaseModel):
    headline: str
    base_line: str
    finding_line: str
    severity_summary: Literal["High", "Low/Mod"]
    tone: Literal["low", "moderate", "high"]


class RiskAssessResponse(BaseModel):
    percentage: int = Field(ge=0, le=100)
    label: Literal["Low Risk", "Moderate Risk", "High Risk"]
    details: RiskDetailsPayload
    explanation: RiskExplanationPayload
    debug: dict[str, Any] = Field(default_factory=dict)


class SymptomCatalogItem(BaseModel):
    name: str
    severity: Literal["high", "mod"]


class SymptomCatalogResponse(BaseModel):
    symptoms: list[SymptomCatalogItem] = Field(default_factory=list)


class CriticalCombinationItem(BaseModel):
    brand: str
    interacting_drug: str
    forced_risk: float


class RiskReferenceResponse(BaseModel):
    age_baselines: dict[str, float]
    dose_multipliers: dict[str, float]
    duration_multipliers: dict[str, float]
    duration_unit: str
    short_duration_below: float
    medium_duration_up_to: float
    critical_combinations: list[CriticalCombinationItem] = Field(default_factory=list)


app = FastAPI(title="montelukast risk estimator")
logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _configure_logging(config: RiskServiceConfig) -> None:
    level = config.log_level_name()
    # basicConfig only attaches a handler when root has none.
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(level)


_startup_config = load_config()
_configure_logging(_startup_config)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_startup_config.RISK_CORS_ALLOW_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_config() -> RiskServiceConfig:
    existing = getattr(app.state, "risk_config", None)
    if isinstance(existing, RiskServiceConfig):
        return existing
    return load_config()


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/risk/symptoms", response_model=SymptomCatalogResponse)
async def risk_symptoms() -> SymptomCatalogResponse:
    return SymptomCatalogResponse(
        symptoms=[
            SymptomCatalogItem(name=item.name, severity=item.severity)
            for item in symptom_catalog_entries()
        ]
    )


@app.get("/risk/reference", response_model=RiskReferenceResponse)
async def risk_reference() -> RiskReferenceResponse:
    return RiskReferenceResponse(
        age_baselines=dict(AGE_BASELINES),
        dose_multipliers=dict(DOSE_MULTIPLIERS),
        duration_multipliers=dict(DURATION_MULTIPLIERS),
        duration_unit=DURATION_UNIT,
        short_duration_below=SHORT_DURATION_BELOW_WEEKS,
        medium_duration_up_to=MEDIUM_DURATION_UP_TO_WEEKS,
        critical_combinations=[
            CriticalCombinationItem(brand=brand, interacting_drug=drug, forced_risk=forced)
            for (brand, drug), forced in sorted(CRITICAL_COMBINATIONS.items())
        ],
    )


@app.post("/risk/assess", response_model=RiskAssessResponse)
async def risk_assess(payload: RiskAssessRequest) -> RiskAssessResponse:
    config = _get_config()
    try:
        validate_assessment_inputs(
            age=payload.age,
            duration_weeks=payload.duration_weeks,
            symptoms=payload.symptoms,
            config=config,
        )
    except RiskInputError as exc:
        logger.info("risk_assess rejected: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    result = calculate(
        payload.age,
        payload.dose,
        payload.duration_weeks,
        payload.symptoms,
        payload.temporal_association,
        payload.brand,
        payload.combo_drugs,
    )
    explanation = explain_result(result, brand=payload.brand, combo_drugs=payload.combo_drugs)

    return RiskAssessResponse(
        percentage=result.percentage,
        label=result.label,
        details=RiskDetailsPayload(
            base=result.details.base,
            symptom_cat=result.details.symptom_cat,
            has_high_severity=result.details.has_high_severity,
            is_critical_combo=result.details.is_critical_combo,
        ),
        explanation=RiskExplanationPayload(
            headline=explanation.headline,
            base_line=explanation.base_line,
            finding_line=explanation.finding_line,
            severity_summary=explanation.severity_summary,
            tone=explanation.tone,
        ),
        debug={
            "age_bracket": resolve_age_bracket(payload.age),
            "duration_category": resolve_duration_category(payload.duration_weeks),
            "duration_unit": DURATION_UNIT,
            "symptom_count": len(payload.symptoms),
            "combo_drug_count": len(payload.combo_drugs),
            "strict_symptoms": config.RISK_STRICT_SYMPTOMS,
            "unscored_fields": {
                "gender": payload.gender,
                "height_cm": payload.height_cm,
                "weight_kg": payload.weight_kg,
                "frequency": payload.frequency,
            },
        },
    )
