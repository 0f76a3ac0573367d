"""Plan Validator - rule-based static analysis of task plans.

Checks an ordered plan of steps for feasibility, resource load, timeline
length, dependency structure and risk, then scores the findings and
suggests follow-up actions.
"""

__version__ = "1.0.0"
__description__ = "Rule-based validation and risk scoring for task plans"

from .guardrails import (
    FindingType,
    PlanValidationFinding,
    RuleConfig,
    ValidatorConfig,
    load_validator_config,
)
from .plan import Plan, PlanFormatError, PlanStep
from .scoring import Recommendation, ValidationSummary
from .validator import PlanValidator, ValidationResult, validate

__all__ = [
    "FindingType",
    "Plan",
    "PlanFormatError",
    "PlanStep",
    "PlanValidationFinding",
    "PlanValidator",
    "Recommendation",
    "RuleConfig",
    "ValidationResult",
    "ValidationSummary",
    "ValidatorConfig",
    "load_validator_config",
    "validate",
]
