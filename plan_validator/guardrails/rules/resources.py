"""Resource requirement rule.

Counts the distinct resources a plan needs and flags resources that are
likely hard to obtain (specialised, licensed, rare...).
"""

from collections.abc import Sequence

from plan_validator.guardrails.base import (
    FindingType,
    PlanValidationContext,
    PlanValidationFinding,
    PlanValidationRule,
)
from plan_validator.plan import Plan


class ResourceRule(PlanValidationRule):
    """Checks the size of the resource pool and critical resources."""

    @property
    def rule_id(self) -> str:
        return "PLAN.RESOURCES"

    @property
    def name(self) -> str:
        return "Resource Requirements"

    @property
    def description(self) -> str:
        return (
            "Warns when a plan needs many distinct resources or relies on "
            "critical resources."
        )

    def validate(self, context: PlanValidationContext) -> list[PlanValidationFinding]:
        """Check the distinct resource count and critical resources."""
        findings: list[PlanValidationFinding] = []
        config = context.config

        resource_count = len(self.distinct_resources(context.plan))
        manageable = resource_count <= config.max_distinct_resources

        findings.append(
            self._create_finding(
                finding_id="resource-count",
                finding_type=FindingType.PASSED if manageable else FindingType.WARNING,
                title="Resource Requirements",
                message=(
                    f"Plan requires {resource_count} distinct resources (manageable)"
                    if manageable
                    else f"Plan requires {resource_count} distinct resources "
                    "(consider consolidation)"
                ),
                details={
                    "total_resources": resource_count,
                    "assessment": "Reasonable" if manageable else "High",
                    "recommendation": (
                        "Good" if manageable else "Consider resource consolidation"
                    ),
                },
            )
        )

        critical = self.identify_critical_resources(
            context.plan, config.critical_resource_keywords
        )
        if critical:
            findings.append(
                self._create_finding(
                    finding_id="critical-resources",
                    finding_type=FindingType.WARNING,
                    title="Critical Resources",
                    message=(
                        f"Identified {len(critical)} potentially critical resources"
                    ),
                    details={
                        "resources": critical,
                        "recommendation": (
                            "Ensure availability of critical resources "
                            "before starting"
                        ),
                    },
                )
            )

        return findings

    @staticmethod
    def distinct_resources(plan: Plan) -> list[str]:
        """Resources used anywhere in the plan, first-seen order."""
        return list(dict.fromkeys(r for step in plan for r in step.resources))

    @staticmethod
    def identify_critical_resources(
        plan: Plan, keywords: Sequence[str]
    ) -> list[str]:
        """Resources containing a critical keyword, deduplicated plan-wide."""
        lowered = [k.lower() for k in keywords]
        return [
            resource
            for resource in ResourceRule.distinct_resources(plan)
            if any(k in resource.lower() for k in lowered)
        ]
