"""Tests for the plan validator engine.

Tests PlanValidatorEngine registration, ordered execution, rule
toggles, parallel execution and error propagation.
"""

import time

import pytest

from plan_validator.guardrails.base import (
    FindingType,
    PlanValidationContext,
    PlanValidationFinding,
    PlanValidationRule,
)
from plan_validator.guardrails.config import ValidatorConfig
from plan_validator.guardrails.engine import (
    EngineResult,
    PlanValidatorEngine,
    PlanValidatorEngineConfig,
    RuleExecutionError,
    RuleExecutionResult,
)
from plan_validator.plan import Plan

# --- Mock Rules for Testing ---


class MockRule(PlanValidationRule):
    """Mock rule emitting a fixed number of findings."""

    def __init__(self, suffix: str, count: int = 1, delay_ms: float = 0.0):
        self.suffix = suffix
        self.count = count
        self.delay_ms = delay_ms

    @property
    def rule_id(self) -> str:
        return f"PLAN.MOCK_{self.suffix}"

    @property
    def name(self) -> str:
        return f"Mock Rule {self.suffix}"

    def validate(self, context: PlanValidationContext) -> list[PlanValidationFinding]:
        if self.delay_ms:
            time.sleep(self.delay_ms / 1000.0)
        return [
            self._create_finding(
                finding_id=f"{self.suffix.lower()}-{i}",
                finding_type=FindingType.PASSED,
                title=f"Mock {self.suffix}",
                message="ok",
            )
            for i in range(self.count)
        ]


class MockErrorRule(PlanValidationRule):
    """Mock rule that raises an error."""

    @property
    def rule_id(self) -> str:
        return "PLAN.MOCK_ERROR"

    @property
    def name(self) -> str:
        return "Mock Error Rule"

    def validate(self, context: PlanValidationContext) -> list[PlanValidationFinding]:
        raise RuntimeError("Mock rule error")


# --- Fixtures ---


@pytest.fixture
def sample_context() -> PlanValidationContext:
    """Create a sample validation context."""
    return PlanValidationContext(
        plan=Plan.from_steps([{"id": 1, "title": "Only step"}]),
        config=ValidatorConfig(),
        task="Sample task",
    )


# --- Test Classes ---


class TestPlanValidatorEngineConfig:
    """Tests for PlanValidatorEngineConfig."""

    def test_default_values(self):
        config = PlanValidatorEngineConfig()
        assert config.parallel_execution is False
        assert config.max_parallel_workers == 4

    def test_custom_values(self):
        config = PlanValidatorEngineConfig(
            parallel_execution=True, max_parallel_workers=8
        )
        assert config.parallel_execution is True
        assert config.max_parallel_workers == 8


class TestRuleExecutionResult:
    """Tests for RuleExecutionResult."""

    def test_basic_creation(self):
        result = RuleExecutionResult(rule_id="TEST.RULE")
        assert result.rule_id == "TEST.RULE"
        assert result.findings == []
        assert result.execution_time_ms == 0.0


class TestEngineRegistration:
    """Tests for rule registration."""

    def test_register_keeps_order(self):
        engine = PlanValidatorEngine()
        engine.register(MockRule("B"))
        engine.register(MockRule("A"))
        assert [r.rule_id for r in engine.get_all_rules()] == [
            "PLAN.MOCK_B",
            "PLAN.MOCK_A",
        ]
        assert engine.rule_count == 2

    def test_register_duplicate_raises(self):
        engine = PlanValidatorEngine()
        engine.register(MockRule("A"))
        with pytest.raises(ValueError, match="already registered"):
            engine.register(MockRule("A"))

    def test_get_rule(self):
        engine = PlanValidatorEngine()
        rule = MockRule("A")
        engine.register(rule)
        assert engine.get_rule("PLAN.MOCK_A") is rule
        assert engine.get_rule("PLAN.MISSING") is None


class TestEngineValidate:
    """Tests for sequential validation."""

    def test_findings_in_registration_order(self, sample_context):
        engine = PlanValidatorEngine()
        engine.register(MockRule("B", count=2))
        engine.register(MockRule("A"))

        result = engine.validate(sample_context)

        assert isinstance(result, EngineResult)
        assert [f.id for f in result.findings] == ["b-0", "b-1", "a-0"]
        assert result.rules_executed == 2
        assert result.rules_skipped == 0
        assert result.execution_time_ms >= 0
        assert len(result.findings_for_rule("PLAN.MOCK_B")) == 2

    def test_disabled_rules_are_skipped(self):
        engine = PlanValidatorEngine()
        engine.register(MockRule("A"))
        engine.register(MockRule("B"))
        context = PlanValidationContext(
            plan=Plan(),
            config=ValidatorConfig(rules={"PLAN.MOCK_A": {"enabled": False}}),
        )

        result = engine.validate(context)

        assert result.rules_executed == 1
        assert result.rules_skipped == 1
        assert [f.rule_id for f in result.findings] == ["PLAN.MOCK_B"]

    def test_empty_engine(self, sample_context):
        result = PlanValidatorEngine().validate(sample_context)
        assert result.findings == []
        assert result.rules_executed == 0

    def test_rule_error_propagates(self, sample_context):
        """A failing rule aborts the run instead of returning partial results."""
        engine = PlanValidatorEngine()
        engine.register(MockRule("A"))
        engine.register(MockErrorRule())

        with pytest.raises(RuleExecutionError) as exc_info:
            engine.validate(sample_context)

        assert exc_info.value.rule_id == "PLAN.MOCK_ERROR"
        assert "Mock rule error" in str(exc_info.value)
        assert isinstance(exc_info.value.error, RuntimeError)


class TestParallelExecution:
    """Tests for parallel rule execution."""

    def test_parallel_matches_sequential(self, sample_context):
        rules = [MockRule("A", count=2), MockRule("B"), MockRule("C", count=3)]

        engine_seq = PlanValidatorEngine()
        for rule in rules:
            engine_seq.register(rule)

        engine_par = PlanValidatorEngine(
            PlanValidatorEngineConfig(parallel_execution=True)
        )
        for rule in rules:
            engine_par.register(rule)

        result_seq = engine_seq.validate(sample_context)
        result_par = engine_par.validate(sample_context)

        assert result_par.findings == result_seq.findings
        assert result_par.rules_executed == result_seq.rules_executed

    def test_parallel_keeps_order_when_first_rule_is_slowest(self, sample_context):
        engine = PlanValidatorEngine(PlanValidatorEngineConfig(parallel_execution=True))
        engine.register(MockRule("SLOW", delay_ms=50))
        engine.register(MockRule("FAST"))

        result = engine.validate(sample_context)

        assert [f.rule_id for f in result.findings] == [
            "PLAN.MOCK_SLOW",
            "PLAN.MOCK_FAST",
        ]

    def test_parallel_error_propagates(self, sample_context):
        engine = PlanValidatorEngine(PlanValidatorEngineConfig(parallel_execution=True))
        engine.register(MockRule("A"))
        engine.register(MockErrorRule())

        with pytest.raises(RuleExecutionError):
            engine.validate(sample_context)

    def test_parallel_with_single_worker(self, sample_context):
        engine = PlanValidatorEngine(
            PlanValidatorEngineConfig(parallel_execution=True, max_parallel_workers=1)
        )
        engine.register(MockRule("A"))
        engine.register(MockRule("B"))
        assert len(engine.validate(sample_context).findings) == 2
