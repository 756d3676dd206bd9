"""Advisory validation of realized plans."""

from trainplan.plans.validation.engine import validate_training_plan
from trainplan.plans.validation.types import ValidationReport

__all__ = ["ValidationReport", "validate_training_plan"]
