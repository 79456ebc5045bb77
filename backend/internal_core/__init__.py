from .config import RiskServiceConfig, load_config
from .validation import RiskInputError, validate_assessment_inputs

__all__ = ["RiskServiceConfig", "load_config", "RiskInputError", "validate_assessment_inputs"]
