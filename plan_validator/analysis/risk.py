"""Risk identification and mitigation scoring.

Risks are found by scanning each step's title and description for fixed
risk phrases. Matching is exhaustive: every phrase found in a step yields
its own entry, so one step can contribute several entries at both levels.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..plan import Plan, PlanStep

HIGH_IMPACT = "Significant delay or failure risk"
MEDIUM_IMPACT = "Moderate delay or quality risk"

# Points per mitigation signal; each step can earn at most 3 x 10
MITIGATION_KEYWORD_POINTS = 20
BACKUP_RESOURCE_POINTS = 15
LOW_DEPENDENCY_POINTS = 10
LOW_DEPENDENCY_LIMIT = 3


@dataclass(frozen=True)
class RiskEntry:
    """A risk phrase matched in a plan step."""

    step: int  # 1-based position in the plan
    title: str
    risk: str
    level: str  # "high" | "medium"
    impact: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "step": self.step,
            "title": self.title,
            "risk": self.risk,
            "level": self.level,
            "impact": self.impact,
        }


def analyze_step_risks(
    step: PlanStep,
    position: int,
    high_factors: Sequence[str],
    medium_factors: Sequence[str],
) -> list[RiskEntry]:
    """Match every risk phrase against one step.

    Args:
        step: Step to scan.
        position: 1-based position of the step in the plan.
        high_factors: High-risk phrases.
        medium_factors: Medium-risk phrases.

    Returns:
        One entry per matched phrase, high-level phrases first.
    """
    text = step.text.lower()
    risks: list[RiskEntry] = []

    for factor in high_factors:
        if factor.lower() in text:
            risks.append(
                RiskEntry(
                    step=position,
                    title=step.title,
                    risk=factor,
                    level="high",
                    impact=HIGH_IMPACT,
                )
            )

    for factor in medium_factors:
        if factor.lower() in text:
            risks.append(
                RiskEntry(
                    step=position,
                    title=step.title,
                    risk=factor,
                    level="medium",
                    impact=MEDIUM_IMPACT,
                )
            )

    return risks


def identify_risks(
    plan: Plan,
    high_factors: Sequence[str],
    medium_factors: Sequence[str],
) -> list[RiskEntry]:
    """Collect risk entries for every step, in plan order."""
    risks: list[RiskEntry] = []
    for position, step in enumerate(plan, start=1):
        risks.extend(analyze_step_risks(step, position, high_factors, medium_factors))
    return risks


def assess_risk_mitigation(
    plan: Plan,
    mitigation_keywords: Sequence[str] = ("mitigat",),
    backup_keywords: Sequence[str] = ("backup",),
) -> int:
    """Score how well the plan's steps prepare for risk, 0-100.

    Each step earns points for a description mentioning mitigation, for a
    backup resource, and for having fewer than three dependencies. The
    total is taken against a maximum of 30 points per step and capped
    at 100.

    Args:
        plan: Plan to score.
        mitigation_keywords: Description substrings that signal mitigation.
        backup_keywords: Resource substrings that signal a fallback.

    Returns:
        Mitigation score; 0 for a plan without steps.
    """
    if len(plan) == 0:
        return 0

    points = 0
    for step in plan:
        description = step.description.lower()
        if any(k.lower() in description for k in mitigation_keywords):
            points += MITIGATION_KEYWORD_POINTS
        if any(
            k.lower() in resource.lower()
            for resource in step.resources
            for k in backup_keywords
        ):
            points += BACKUP_RESOURCE_POINTS
        if len(step.dependencies) < LOW_DEPENDENCY_LIMIT:
            points += LOW_DEPENDENCY_POINTS

    theoretical_max = 3 * len(plan) * 10
    return min(100, math.floor(points / theoretical_max * 100 + 0.5))


__all__ = [
    "RiskEntry",
    "analyze_step_risks",
    "assess_risk_mitigation",
    "identify_risks",
]
