"""Dependency structure rule.

Circular dependencies fail the plan outright; over-connected steps and
the resulting structure are reported as warnings.
"""

from plan_validator.analysis.dependency_graph import analyze_dependencies
from plan_validator.guardrails.base import (
    FindingType,
    PlanValidationContext,
    PlanValidationFinding,
    PlanValidationRule,
)


class DependencyRule(PlanValidationRule):
    """Checks the dependency graph for cycles and complexity."""

    @property
    def rule_id(self) -> str:
        return "PLAN.DEPENDENCIES"

    @property
    def name(self) -> str:
        return "Dependency Structure"

    @property
    def description(self) -> str:
        return (
            "Detects circular dependency chains and steps that depend on "
            "too many other steps."
        )

    def validate(self, context: PlanValidationContext) -> list[PlanValidationFinding]:
        """Report cycles, complex steps and an overall verdict."""
        findings: list[PlanValidationFinding] = []
        analysis = analyze_dependencies(
            context.plan, context.config.complex_dependency_threshold
        )

        if analysis.cycles_found:
            findings.append(
                self._create_finding(
                    finding_id="circular-dependencies",
                    finding_type=FindingType.FAILED,
                    title="Circular Dependencies",
                    message=(
                        f"Found {len(analysis.cycles_found)} circular "
                        "dependency chains"
                    ),
                    details={
                        "chains": analysis.cycles_found,
                        "recommendation": (
                            "Resolve circular dependencies before proceeding"
                        ),
                    },
                )
            )

        if analysis.complex_steps:
            findings.append(
                self._create_finding(
                    finding_id="complex-dependencies",
                    finding_type=FindingType.WARNING,
                    title="Complex Dependencies",
                    message=(
                        f"Found {len(analysis.complex_steps)} steps with "
                        "complex dependencies"
                    ),
                    details={
                        "steps": [
                            {**entry, "assessment": "Complex"}
                            for entry in analysis.complex_steps
                        ],
                        "recommendation": "Consider simplifying dependency structure",
                    },
                )
            )

        clean = analysis.is_clean
        findings.append(
            self._create_finding(
                finding_id="dependency-overview",
                finding_type=FindingType.PASSED if clean else FindingType.WARNING,
                title="Dependency Structure",
                message=(
                    "Dependency structure is clean and manageable"
                    if clean
                    else "Some dependency issues need attention"
                ),
                details={
                    "total_dependencies": analysis.total_dependency_count,
                    "max_depth": analysis.max_depth,
                    "assessment": "Good" if clean else "Needs Review",
                },
            )
        )

        return findings
