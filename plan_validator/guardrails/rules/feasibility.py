"""Step feasibility rule.

A step is considered feasible when it gives a duration in hours, names
at least one resource, and has a description with some substance.
"""

import math
from typing import Any

from plan_validator.analysis.duration import mentions_hours
from plan_validator.guardrails.base import (
    FindingType,
    PlanValidationContext,
    PlanValidationFinding,
    PlanValidationRule,
)
from plan_validator.plan import PlanStep


class FeasibilityRule(PlanValidationRule):
    """Checks each step, then the plan as a whole, for feasibility."""

    @property
    def rule_id(self) -> str:
        return "PLAN.FEASIBILITY"

    @property
    def name(self) -> str:
        return "Step Feasibility"

    @property
    def description(self) -> str:
        return (
            "Checks that every step has a duration in hours, at least one "
            "resource and a meaningful description."
        )

    def validate(self, context: PlanValidationContext) -> list[PlanValidationFinding]:
        """Emit one finding per step plus an overall feasibility finding."""
        findings: list[PlanValidationFinding] = []
        min_length = context.config.min_description_length

        for position, step in enumerate(context.plan, start=1):
            is_feasible = self.is_feasible(step, min_length)
            findings.append(
                self._create_finding(
                    finding_id=f"feasibility-{position}",
                    finding_type=(
                        FindingType.PASSED if is_feasible else FindingType.WARNING
                    ),
                    title=f"Step {position} Feasibility",
                    message=(
                        f'"{step.title}" appears feasible'
                        if is_feasible
                        else f'"{step.title}" may require additional resources '
                        "or expertise"
                    ),
                    details={
                        "step_id": step.id,
                        "assessment": "Feasible" if is_feasible else "Needs Review",
                        "factors": self.get_feasibility_factors(step),
                    },
                )
            )

        feasible_count = sum(1 for f in findings if f.passed)
        overall_feasible = feasible_count == len(findings)
        percentage = (
            math.floor(feasible_count / len(findings) * 100 + 0.5)
            if findings
            else 100
        )

        findings.append(
            self._create_finding(
                finding_id="overall-feasibility",
                finding_type=(
                    FindingType.PASSED if overall_feasible else FindingType.WARNING
                ),
                title="Overall Feasibility",
                message=(
                    "The overall plan appears feasible"
                    if overall_feasible
                    else "Some steps may require adjustment for full feasibility"
                ),
                details={
                    "assessment": "Good" if overall_feasible else "Needs Attention",
                    "percentage": percentage,
                },
            )
        )

        return findings

    @staticmethod
    def is_feasible(step: PlanStep, min_description_length: int = 20) -> bool:
        """Check the three feasibility conditions for a step."""
        return (
            mentions_hours(step.duration)
            and len(step.resources) > 0
            and len(step.description) > min_description_length
        )

    @staticmethod
    def get_feasibility_factors(step: PlanStep) -> dict[str, Any]:
        """Describe the signals behind a step's feasibility verdict."""
        return {
            "has_duration": bool(step.duration),
            "has_resources": len(step.resources) > 0,
            "description_length": len(step.description),
            "has_dependencies": len(step.dependencies) > 0,
        }
