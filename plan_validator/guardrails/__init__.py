"""Plan validation guardrails.

This package provides the data model, configuration and engine for
validating task plans against a fixed, ordered set of rules.

Classes:
    FindingType: Verdict of a finding (passed, warning, failed)
    PlanValidationFinding: Finding from a validation rule
    PlanValidationContext: Context passed to rules during validation
    PlanValidationRule: Abstract base class for validation rules
    ValidatorConfig: Keyword tables and thresholds
    RuleConfig: Configuration for individual rules
    PlanValidatorEngine: Engine for running the ordered rules
    PlanValidatorEngineConfig: Configuration for the engine
    EngineResult: Aggregated findings from one engine run

Rules:
    FeasibilityRule: Checks each step is actionable
    ResourceRule: Checks resource pool size and critical resources
    TimelineRule: Checks total duration and duration balance
    DependencyRule: Detects circular and complex dependencies
    RiskRule: Flags risk phrases and scores mitigation
"""

from .base import (
    FINDING_WEIGHTS,
    FindingType,
    PlanValidationContext,
    PlanValidationFinding,
    PlanValidationRule,
)
from .config import RuleConfig, ValidatorConfig, load_validator_config
from .engine import (
    EngineResult,
    PlanValidatorEngine,
    PlanValidatorEngineConfig,
    RuleExecutionError,
    RuleExecutionResult,
)
from .rules import (
    DependencyRule,
    FeasibilityRule,
    ResourceRule,
    RiskRule,
    TimelineRule,
    default_rules,
)

__all__ = [
    # Enums
    "FindingType",
    "FINDING_WEIGHTS",
    # Data classes
    "EngineResult",
    "PlanValidationContext",
    "PlanValidationFinding",
    "RuleExecutionResult",
    # Base rule class
    "PlanValidationRule",
    # Engine
    "PlanValidatorEngine",
    "PlanValidatorEngineConfig",
    "RuleExecutionError",
    # Configuration
    "RuleConfig",
    "ValidatorConfig",
    "load_validator_config",
    # Rules
    "DependencyRule",
    "FeasibilityRule",
    "ResourceRule",
    "RiskRule",
    "TimelineRule",
    "default_rules",
]
