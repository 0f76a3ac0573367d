"""Score aggregation and recommendation synthesis.

Turns the full list of findings into a 0-100 score, a summary with a
fixed status band, and a short ordered list of follow-up actions.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .guardrails.base import FindingType, PlanValidationFinding

# Lower bound of each band, checked from the bottom up
STATUS_BANDS: tuple[tuple[int, str], ...] = (
    (60, "Needs Major Improvements"),
    (80, "Needs Some Improvements"),
    (90, "Satisfactory"),
)
TOP_STATUS = "Good"
VALID_SCORE = 80


@dataclass
class ValidationSummary:
    """Headline numbers of a validation run."""

    score: int
    status: str
    passed: int = 0
    warnings: int = 0
    failed: int = 0
    overall: str = ""
    risk_level: str = "Low"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "score": self.score,
            "status": self.status,
            "breakdown": {
                "passed": self.passed,
                "warnings": self.warnings,
                "failed": self.failed,
            },
            "overall": self.overall,
            "risk_level": self.risk_level,
        }


@dataclass
class Recommendation:
    """A follow-up action derived from the findings."""

    priority: str  # "High" | "Medium"
    action: str
    reason: str
    related_findings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "priority": self.priority,
            "action": self.action,
            "reason": self.reason,
            "related_findings": self.related_findings,
        }


def calculate_score(findings: Sequence[PlanValidationFinding]) -> int:
    """Weighted average of finding verdicts as a percentage.

    passed counts 1, warning 0.5 and failed 0. Halves round up, except
    that only an all-passed list reaches 100 and only an all-failed list
    reaches 0. An empty list scores 100.
    """
    if not findings:
        return 100
    total = sum(f.type.weight for f in findings)
    score = math.floor(total / len(findings) * 100 + 0.5)
    if score == 100 and total < len(findings):
        return 99
    if score == 0 and total > 0:
        return 1
    return score


def status_for_score(score: int) -> str:
    """Map a score to its fixed status band."""
    for upper, status in STATUS_BANDS:
        if score < upper:
            return status
    return TOP_STATUS


def assess_risk_level(findings: Sequence[PlanValidationFinding]) -> str:
    """Overall risk: High on any failure, Medium on more than two warnings."""
    if any(f.type == FindingType.FAILED for f in findings):
        return "High"
    if sum(1 for f in findings if f.type == FindingType.WARNING) > 2:
        return "Medium"
    return "Low"


def generate_summary(
    findings: Sequence[PlanValidationFinding], score: int
) -> ValidationSummary:
    """Build the summary block for a scored set of findings."""
    return ValidationSummary(
        score=score,
        status=status_for_score(score),
        passed=sum(1 for f in findings if f.type == FindingType.PASSED),
        warnings=sum(1 for f in findings if f.type == FindingType.WARNING),
        failed=sum(1 for f in findings if f.type == FindingType.FAILED),
        overall=(
            "Plan is generally valid" if score >= VALID_SCORE else "Plan needs review"
        ),
        risk_level=assess_risk_level(findings),
    )


def generate_recommendations(
    findings: Sequence[PlanValidationFinding],
) -> list[Recommendation]:
    """Derive follow-up actions from finding patterns.

    Recommendations come out in a fixed rule order (failures, warning
    volume, resources, timeline), not sorted by priority.
    """
    recommendations: list[Recommendation] = []

    warnings = [f for f in findings if f.type == FindingType.WARNING]
    failures = [f for f in findings if f.type == FindingType.FAILED]

    if failures:
        recommendations.append(
            Recommendation(
                priority="High",
                action="Address failed validations before proceeding",
                reason=f"{len(failures)} critical issues need resolution",
                related_findings=[f.id for f in failures],
            )
        )

    if len(warnings) > 3:
        recommendations.append(
            Recommendation(
                priority="Medium",
                action="Review and address warning validations",
                reason=f"Multiple ({len(warnings)}) areas need attention",
                related_findings=[f.id for f in warnings],
            )
        )

    resource_warnings = [f for f in warnings if "Resource" in f.title]
    if resource_warnings:
        recommendations.append(
            Recommendation(
                priority="Medium",
                action="Review resource allocation and availability",
                reason="Resource-related warnings identified",
                related_findings=[f.id for f in resource_warnings],
            )
        )

    timeline_warnings = [f for f in warnings if "Timeline" in f.title]
    if timeline_warnings:
        recommendations.append(
            Recommendation(
                priority="Medium",
                action="Review timeline estimates and dependencies",
                reason="Timeline-related warnings identified",
                related_findings=[f.id for f in timeline_warnings],
            )
        )

    return recommendations


__all__ = [
    "Recommendation",
    "STATUS_BANDS",
    "ValidationSummary",
    "assess_risk_level",
    "calculate_score",
    "generate_recommendations",
    "generate_summary",
    "status_for_score",
]
