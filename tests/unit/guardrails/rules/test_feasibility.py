"""Tests for FeasibilityRule."""

import pytest

from plan_validator.guardrails.base import FindingType, PlanValidationContext
from plan_validator.guardrails.config import ValidatorConfig
from plan_validator.guardrails.rules.feasibility import FeasibilityRule
from plan_validator.plan import Plan, PlanStep

LONG_DESCRIPTION = "Analyze and document all requirements for the task."


@pytest.fixture
def rule():
    """Create rule instance."""
    return FeasibilityRule()


def make_step(
    step_id: int = 1,
    title: str = "Requirements Analysis",
    description: str = LONG_DESCRIPTION,
    duration: str = "1-2 hours",
    resources: tuple[str, ...] = ("Requirements Template",),
    dependencies: tuple[int, ...] = (),
) -> PlanStep:
    """Helper to create a feasible step by default."""
    return PlanStep(
        id=step_id,
        title=title,
        description=description,
        duration=duration,
        resources=resources,
        dependencies=dependencies,
    )


def make_context(*steps: PlanStep) -> PlanValidationContext:
    return PlanValidationContext(plan=Plan(steps=steps), config=ValidatorConfig())


class TestRuleProperties:
    """Test rule properties."""

    def test_rule_id(self, rule):
        assert rule.rule_id == "PLAN.FEASIBILITY"

    def test_name(self, rule):
        assert rule.name == "Step Feasibility"


class TestStepFeasibility:
    """Test per-step findings."""

    def test_feasible_step_passes(self, rule):
        findings = rule.validate(make_context(make_step()))

        assert [f.id for f in findings] == ["feasibility-1", "overall-feasibility"]
        step_finding = findings[0]
        assert step_finding.type == FindingType.PASSED
        assert step_finding.title == "Step 1 Feasibility"
        assert step_finding.message == '"Requirements Analysis" appears feasible'
        assert step_finding.details["assessment"] == "Feasible"
        assert step_finding.details["step_id"] == 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {"resources": ()},
            {"duration": "2-3 days"},
            {"duration": ""},
            {"description": "Too short"},
            {"description": "x" * 20},
        ],
    )
    def test_infeasible_steps_warn(self, rule, overrides):
        findings = rule.validate(make_context(make_step(**overrides)))
        assert findings[0].type == FindingType.WARNING
        assert findings[0].details["assessment"] == "Needs Review"
        assert "may require additional resources" in findings[0].message

    def test_description_just_over_limit_passes(self, rule):
        findings = rule.validate(make_context(make_step(description="x" * 21)))
        assert findings[0].type == FindingType.PASSED

    def test_feasibility_factors(self, rule):
        step = make_step(description="short", dependencies=(4,))
        factors = rule.validate(make_context(step))[0].details["factors"]
        assert factors == {
            "has_duration": True,
            "has_resources": True,
            "description_length": 5,
            "has_dependencies": True,
        }

    def test_findings_numbered_by_position(self, rule):
        findings = rule.validate(
            make_context(make_step(step_id=7), make_step(step_id=3))
        )
        assert findings[0].id == "feasibility-1"
        assert findings[0].details["step_id"] == 7
        assert findings[1].id == "feasibility-2"


class TestOverallFeasibility:
    """Test the aggregate finding."""

    def test_all_feasible(self, rule):
        findings = rule.validate(make_context(make_step(1), make_step(2)))
        overall = findings[-1]
        assert overall.type == FindingType.PASSED
        assert overall.details == {"assessment": "Good", "percentage": 100}

    def test_partially_feasible(self, rule):
        findings = rule.validate(
            make_context(make_step(1), make_step(2, resources=()))
        )
        overall = findings[-1]
        assert overall.type == FindingType.WARNING
        assert overall.details["percentage"] == 50
        assert overall.details["assessment"] == "Needs Attention"

    def test_percentage_rounds_half_up(self, rule):
        """One feasible step in eight is 12.5%, reported as 13."""
        steps = [make_step(1)] + [make_step(i, resources=()) for i in range(2, 9)]
        overall = rule.validate(make_context(*steps))[-1]
        assert overall.details["percentage"] == 13

    def test_empty_plan(self, rule):
        findings = rule.validate(make_context())
        assert len(findings) == 1
        assert findings[0].id == "overall-feasibility"
        assert findings[0].type == FindingType.PASSED
        assert findings[0].details["percentage"] == 100

    def test_custom_description_length(self, rule):
        context = PlanValidationContext(
            plan=Plan(steps=(make_step(description="Short text"),)),
            config=ValidatorConfig(min_description_length=5),
        )
        assert rule.validate(context)[0].type == FindingType.PASSED
