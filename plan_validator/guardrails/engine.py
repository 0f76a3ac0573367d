"""Plan validation engine for running the ordered rule set.

This module provides the PlanValidatorEngine class that holds an ordered
list of rules and executes them against a validation context, either one
after another or fanned out over a thread pool. Findings are always
joined back in registration order, so the result does not depend on the
execution mode.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from ..validator_logging import get_logger
from .base import PlanValidationContext, PlanValidationFinding, PlanValidationRule

logger = get_logger("engine")


class RuleExecutionError(RuntimeError):
    """Raised when a rule fails while validating a plan."""

    def __init__(self, rule_id: str, error: Exception):
        super().__init__(f"Rule {rule_id} failed: {error}")
        self.rule_id = rule_id
        self.error = error


@dataclass
class PlanValidatorEngineConfig:
    """Configuration for the plan validation engine."""

    # Fan rules out over a thread pool; results keep registration order
    parallel_execution: bool = False
    max_parallel_workers: int = 4


@dataclass
class RuleExecutionResult:
    """Result from executing a single rule."""

    rule_id: str
    findings: list[PlanValidationFinding] = field(default_factory=list)
    execution_time_ms: float = 0.0


@dataclass
class EngineResult:
    """Aggregated findings from one engine run."""

    findings: list[PlanValidationFinding] = field(default_factory=list)
    rule_results: list[RuleExecutionResult] = field(default_factory=list)
    rules_executed: int = 0
    rules_skipped: int = 0
    execution_time_ms: float = 0.0

    def findings_for_rule(self, rule_id: str) -> list[PlanValidationFinding]:
        """Get the findings produced by one rule."""
        return [f for f in self.findings if f.rule_id == rule_id]


class PlanValidatorEngine:
    """Engine for running plan validation rules.

    Rules form a closed, ordered set fixed at registration time; the
    engine iterates them explicitly rather than looking them up by name.
    """

    def __init__(self, engine_config: PlanValidatorEngineConfig | None = None):
        """Initialize the engine.

        Args:
            engine_config: Optional engine-specific configuration.
        """
        self.engine_config = engine_config or PlanValidatorEngineConfig()
        self._rules: list[PlanValidationRule] = []

    def register(self, rule: PlanValidationRule) -> None:
        """Append a rule to the execution order.

        Args:
            rule: Rule instance to register.

        Raises:
            ValueError: If a rule with the same ID is already registered.
        """
        if self.get_rule(rule.rule_id) is not None:
            raise ValueError(f"Rule {rule.rule_id} is already registered")
        self._rules.append(rule)

    def get_rule(self, rule_id: str) -> PlanValidationRule | None:
        """Get a registered rule by ID."""
        for rule in self._rules:
            if rule.rule_id == rule_id:
                return rule
        return None

    def get_all_rules(self) -> list[PlanValidationRule]:
        """Get all registered rules in execution order."""
        return list(self._rules)

    @property
    def rule_count(self) -> int:
        """Number of registered rules."""
        return len(self._rules)

    def validate(self, context: PlanValidationContext) -> EngineResult:
        """Run every enabled rule and collect findings.

        Args:
            context: PlanValidationContext with plan, task and config.

        Returns:
            EngineResult with findings in rule registration order.

        Raises:
            RuleExecutionError: If any rule raises. No partial result is
                returned.
        """
        start_time = time.perf_counter()

        rules_to_run = [
            r for r in self._rules if context.config.is_rule_enabled(r.rule_id)
        ]
        rules_skipped = len(self._rules) - len(rules_to_run)

        if self.engine_config.parallel_execution and len(rules_to_run) > 1:
            results = self._execute_parallel(rules_to_run, context)
        else:
            results = [self._execute_rule(rule, context) for rule in rules_to_run]

        all_findings: list[PlanValidationFinding] = []
        for result in results:
            all_findings.extend(result.findings)

        total_time_ms = (time.perf_counter() - start_time) * 1000

        return EngineResult(
            findings=all_findings,
            rule_results=results,
            rules_executed=len(results),
            rules_skipped=rules_skipped,
            execution_time_ms=total_time_ms,
        )

    def _execute_parallel(
        self,
        rules: list[PlanValidationRule],
        context: PlanValidationContext,
    ) -> list[RuleExecutionResult]:
        """Fan rules out over a thread pool and join them in order."""
        workers = max(1, min(self.engine_config.max_parallel_workers, len(rules)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._execute_rule, rule, context) for rule in rules
            ]
            return [future.result() for future in futures]

    def _execute_rule(
        self,
        rule: PlanValidationRule,
        context: PlanValidationContext,
    ) -> RuleExecutionResult:
        """Execute a single rule with timing.

        Args:
            rule: Rule to execute.
            context: Validation context.

        Returns:
            RuleExecutionResult with the rule's findings.

        Raises:
            RuleExecutionError: Wrapping any exception raised by the rule.
        """
        start_time = time.perf_counter()

        try:
            findings = rule.validate(context)
        except Exception as e:
            raise RuleExecutionError(rule.rule_id, e) from e

        execution_time_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"{rule.rule_id} produced {len(findings)} finding(s) "
            f"in {execution_time_ms:.2f}ms"
        )

        return RuleExecutionResult(
            rule_id=rule.rule_id,
            findings=findings,
            execution_time_ms=execution_time_ms,
        )


__all__ = [
    "EngineResult",
    "PlanValidatorEngine",
    "PlanValidatorEngineConfig",
    "RuleExecutionError",
    "RuleExecutionResult",
]
