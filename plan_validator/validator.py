"""Plan validator entry point.

PlanValidator runs the ordered rule set over a plan, scores the findings
and derives recommendations. It never raises on account of the plan: an
unexpected fault anywhere in the pipeline is logged and turned into a
fixed two-finding fallback result.
"""

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .guardrails.base import (
    FindingType,
    PlanValidationContext,
    PlanValidationFinding,
    PlanValidationRule,
)
from .guardrails.config import ValidatorConfig
from .guardrails.engine import PlanValidatorEngine, PlanValidatorEngineConfig
from .guardrails.rules import default_rules
from .plan import Plan, PlanStep
from .scoring import (
    Recommendation,
    ValidationSummary,
    calculate_score,
    generate_recommendations,
    generate_summary,
)
from .validator_logging import get_logger

logger = get_logger()

PlanInput = Plan | Iterable[PlanStep | Mapping[str, Any]] | None


def fallback_findings() -> list[PlanValidationFinding]:
    """The fixed findings reported when validation cannot complete."""
    return [
        PlanValidationFinding(
            id="fallback-1",
            type=FindingType.PASSED,
            title="Basic Structure",
            message="Plan has basic structure and steps",
        ),
        PlanValidationFinding(
            id="fallback-2",
            type=FindingType.WARNING,
            title="Limited Detail",
            message="Plan lacks detailed validation due to system limitations",
        ),
    ]


@dataclass
class ValidationResult:
    """Outcome of one validation call.

    On success every field is populated. On failure ``error`` carries the
    fault message, ``validations`` holds the fallback findings and the
    score, summary and recommendations are absent.
    """

    success: bool
    validations: list[PlanValidationFinding] = field(default_factory=list)
    score: int | None = None
    summary: ValidationSummary | None = None
    recommendations: list[Recommendation] = field(default_factory=list)
    error: str | None = None
    execution_time_ms: float = 0.0

    @property
    def has_failures(self) -> bool:
        """Check if any finding failed."""
        return any(v.type == FindingType.FAILED for v in self.validations)

    def findings_by_type(self) -> dict[FindingType, list[PlanValidationFinding]]:
        """Group findings by verdict."""
        result: dict[FindingType, list[PlanValidationFinding]] = {}
        for finding in self.validations:
            if finding.type not in result:
                result[finding.type] = []
            result[finding.type].append(finding)
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        if not self.success:
            return {
                "success": False,
                "error": self.error,
                "validations": [v.to_dict() for v in self.validations],
            }
        return {
            "success": True,
            "validations": [v.to_dict() for v in self.validations],
            "score": self.score,
            "summary": self.summary.to_dict() if self.summary else None,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "execution_time_ms": self.execution_time_ms,
        }


class PlanValidator:
    """Validates task plans with the standard rule set.

    The configuration is built once and shared read-only by every rule
    and every call; the validator itself keeps no per-call state.
    """

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        engine_config: PlanValidatorEngineConfig | None = None,
        rules: list[PlanValidationRule] | None = None,
    ):
        """Initialize the validator.

        Args:
            config: Keyword tables and thresholds. Defaults to ValidatorConfig().
            engine_config: Optional engine configuration.
            rules: Optional rule list replacing the standard rules.
        """
        self.config = config or ValidatorConfig()
        self.engine = PlanValidatorEngine(engine_config)
        for rule in default_rules() if rules is None else rules:
            self.engine.register(rule)

    def validate(self, task: str, plan: PlanInput) -> ValidationResult:
        """Validate a plan for a task.

        Args:
            task: Task description the plan was made for.
            plan: Plan, PlanStep objects or step mappings.

        Returns:
            ValidationResult; never raises for a bad plan or a failing rule.
        """
        start_time = time.perf_counter()

        try:
            normalized = Plan.from_steps(plan)
            logger.debug(f"Validating plan with {len(normalized)} steps")

            context = PlanValidationContext(
                plan=normalized, config=self.config, task=task or ""
            )
            engine_result = self.engine.validate(context)
            findings = engine_result.findings

            score = calculate_score(findings)
            summary = generate_summary(findings, score)
            recommendations = generate_recommendations(findings)

        except Exception as e:
            logger.exception(f"Plan validation failed, using fallback result: {e}")
            return ValidationResult(
                success=False,
                validations=fallback_findings(),
                error=str(e),
                execution_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        execution_time_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Validated {len(normalized)} steps: score {score} ({summary.status}), "
            f"{summary.passed} passed, {summary.warnings} warnings, "
            f"{summary.failed} failed in {execution_time_ms:.1f}ms"
        )

        return ValidationResult(
            success=True,
            validations=findings,
            score=score,
            summary=summary,
            recommendations=recommendations,
            execution_time_ms=execution_time_ms,
        )


def validate(
    task: str,
    plan: PlanInput,
    config: ValidatorConfig | None = None,
) -> ValidationResult:
    """Validate a plan with the standard rules.

    Args:
        task: Task description the plan was made for.
        plan: Plan, PlanStep objects or step mappings.
        config: Optional configuration override.

    Returns:
        ValidationResult for the plan.
    """
    return PlanValidator(config=config).validate(task, plan)


__all__ = [
    "PlanValidator",
    "ValidationResult",
    "fallback_findings",
    "validate",
]
