"""Base classes and types for plan validation rules.

This module provides the foundational abstractions shared by the
validation rules: the finding record, the context a rule receives, and
the abstract rule interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..plan import Plan
    from .config import ValidatorConfig


class FindingType(str, Enum):
    """Verdict of a single validation finding."""

    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"

    @property
    def weight(self) -> float:
        """Contribution of this verdict to the validation score."""
        return FINDING_WEIGHTS[self]


FINDING_WEIGHTS: dict[FindingType, float] = {
    FindingType.PASSED: 1.0,
    FindingType.WARNING: 0.5,
    FindingType.FAILED: 0.0,
}


@dataclass
class PlanValidationFinding:
    """A verdict from a validation rule on one aspect of a plan."""

    id: str  # e.g., "feasibility-1", "resource-count"
    type: FindingType
    title: str
    message: str
    details: dict[str, Any] | None = None
    rule_id: str | None = None  # e.g., "PLAN.FEASIBILITY"

    @property
    def passed(self) -> bool:
        return self.type == FindingType.PASSED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        if self.rule_id is not None:
            result["rule_id"] = self.rule_id
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanValidationFinding":
        """Create PlanValidationFinding from dictionary."""
        return cls(
            id=data["id"],
            type=FindingType(data["type"]),
            title=data["title"],
            message=data["message"],
            details=data.get("details"),
            rule_id=data.get("rule_id"),
        )


@dataclass
class PlanValidationContext:
    """Context passed to plan validation rules.

    Holds the plan under validation, the task it was planned for, and the
    read-only configuration tables the rules consult.
    """

    plan: "Plan"
    config: "ValidatorConfig"
    task: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


class PlanValidationRule(ABC):
    """Abstract base class for plan validation rules.

    A rule is a pure function of its context: it must not keep state
    between calls or depend on other rules' findings, so rules can run in
    any order or concurrently.
    """

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier.

        Format: PLAN.RULE_NAME (e.g., 'PLAN.FEASIBILITY')
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name."""

    @property
    def description(self) -> str:
        """Detailed description of what this rule checks."""
        return f"Rule {self.rule_id}: {self.name}"

    @abstractmethod
    def validate(self, context: PlanValidationContext) -> list[PlanValidationFinding]:
        """Run the rule and return its findings.

        Args:
            context: PlanValidationContext with plan, task and config.

        Returns:
            Findings in the order the rule produced them.
        """

    def _create_finding(
        self,
        finding_id: str,
        finding_type: FindingType,
        title: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> PlanValidationFinding:
        """Helper to create a finding tagged with this rule's ID."""
        return PlanValidationFinding(
            id=finding_id,
            type=finding_type,
            title=title,
            message=message,
            details=details,
            rule_id=self.rule_id,
        )

    def __repr__(self) -> str:
        """String representation of the rule."""
        return f"<{self.__class__.__name__} {self.rule_id}>"


__all__ = [
    "FINDING_WEIGHTS",
    "FindingType",
    "PlanValidationContext",
    "PlanValidationFinding",
    "PlanValidationRule",
]
