"""Timeline assessment rule.

Sums the step durations into a plan total and checks both the total and
the balance between consecutive steps.
"""

import math
from typing import Any

from plan_validator.analysis.duration import (
    format_total_duration,
    parse_duration_midpoint,
    total_hours,
)
from plan_validator.guardrails.base import (
    FindingType,
    PlanValidationContext,
    PlanValidationFinding,
    PlanValidationRule,
)
from plan_validator.plan import Plan


class TimelineRule(PlanValidationRule):
    """Checks the overall timeline and duration balance between steps."""

    @property
    def rule_id(self) -> str:
        return "PLAN.TIMELINE"

    @property
    def name(self) -> str:
        return "Timeline Assessment"

    @property
    def description(self) -> str:
        return (
            "Warns about long or step-heavy timelines and about adjacent "
            "steps with very different durations."
        )

    def validate(self, context: PlanValidationContext) -> list[PlanValidationFinding]:
        """Assess the plan total, then look for unbalanced durations."""
        findings: list[PlanValidationFinding] = []
        config = context.config
        plan = context.plan

        hours = total_hours(plan, config.default_duration_hours)
        total_duration = format_total_duration(hours)
        assessment = self.assess_timeline(
            hours, len(plan), config.max_timeline_weeks, config.max_steps
        )

        findings.append(
            self._create_finding(
                finding_id="timeline-assessment",
                finding_type=assessment["status"],
                title="Timeline Assessment",
                message=assessment["message"],
                details={
                    "total_duration": total_duration,
                    "total_hours": hours,
                    "steps": len(plan),
                    "assessment": assessment["assessment"],
                    "recommendation": assessment["recommendation"],
                },
            )
        )

        unbalanced = self.identify_unbalanced_durations(
            plan, config.unbalanced_duration_hours
        )
        if unbalanced:
            findings.append(
                self._create_finding(
                    finding_id="duration-balance",
                    finding_type=FindingType.WARNING,
                    title="Duration Balance",
                    message=(
                        f"Found {len(unbalanced)} steps with potentially "
                        "unbalanced durations"
                    ),
                    details={
                        "steps": unbalanced,
                        "recommendation": (
                            "Consider rebalancing durations for better workflow"
                        ),
                    },
                )
            )

        return findings

    @staticmethod
    def assess_timeline(
        hours: float, step_count: int, max_weeks: int = 4, max_steps: int = 10
    ) -> dict[str, Any]:
        """Classify a plan total.

        The week check uses the same rounding as the rendered total, so a
        plan shown as "5 weeks" is long and one shown as "4 weeks" is not.
        """
        if hours > 40 and math.ceil(hours / 40) > max_weeks:
            return {
                "status": FindingType.WARNING,
                "message": "Timeline may be too long for effective execution",
                "assessment": "Long",
                "recommendation": "Consider breaking into phases or reducing scope",
            }

        if step_count > max_steps:
            return {
                "status": FindingType.WARNING,
                "message": "Many steps may complicate timeline management",
                "assessment": "Complex",
                "recommendation": "Consider consolidating or parallelizing steps",
            }

        return {
            "status": FindingType.PASSED,
            "message": "Timeline appears reasonable",
            "assessment": "Good",
            "recommendation": "Monitor progress regularly",
        }

    @staticmethod
    def identify_unbalanced_durations(
        plan: Plan, threshold_hours: float = 4.0
    ) -> list[dict[str, Any]]:
        """Find steps whose midpoint jumps away from the previous step's.

        Steps without a parsable range are skipped entirely: they are not
        flagged and the comparison carries over to the next parsable step.
        """
        unbalanced: list[dict[str, Any]] = []
        previous: float | None = None

        for position, step in enumerate(plan, start=1):
            midpoint = parse_duration_midpoint(step.duration)
            if midpoint is None:
                continue

            if previous is not None and abs(midpoint - previous) > threshold_hours:
                unbalanced.append(
                    {
                        "step": position,
                        "title": step.title,
                        "duration": step.duration,
                        "difference": abs(midpoint - previous),
                    }
                )

            previous = midpoint

        return unbalanced
