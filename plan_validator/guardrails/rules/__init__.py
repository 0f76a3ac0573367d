"""Plan validation rules.

This package contains the 5 core plan validation rules, listed in the
order they run:
- PLAN.FEASIBILITY - Each step has a duration, resources and description
- PLAN.RESOURCES - Distinct resource count and critical resources
- PLAN.TIMELINE - Total duration and duration balance
- PLAN.DEPENDENCIES - Circular and complex dependencies
- PLAN.RISKS - Risk phrases and mitigation planning
"""

from plan_validator.guardrails.base import PlanValidationRule
from plan_validator.guardrails.rules.dependencies import DependencyRule
from plan_validator.guardrails.rules.feasibility import FeasibilityRule
from plan_validator.guardrails.rules.resources import ResourceRule
from plan_validator.guardrails.rules.risks import RiskRule
from plan_validator.guardrails.rules.timeline import TimelineRule


def default_rules() -> list[PlanValidationRule]:
    """Fresh instances of the core rules in execution order."""
    return [
        FeasibilityRule(),
        ResourceRule(),
        TimelineRule(),
        DependencyRule(),
        RiskRule(),
    ]


__all__ = [
    "DependencyRule",
    "FeasibilityRule",
    "ResourceRule",
    "RiskRule",
    "TimelineRule",
    "default_rules",
]
