"""Tests for score aggregation and recommendations."""

import pytest

from plan_validator.guardrails.base import FindingType, PlanValidationFinding
from plan_validator.scoring import (
    Recommendation,
    ValidationSummary,
    assess_risk_level,
    calculate_score,
    generate_recommendations,
    generate_summary,
    status_for_score,
)

P = FindingType.PASSED
W = FindingType.WARNING
F = FindingType.FAILED


def make_findings(*types: FindingType, title: str = "Check") -> list[PlanValidationFinding]:
    """Helper to create findings of the given types."""
    return [
        PlanValidationFinding(
            id=f"finding-{i}", type=finding_type, title=title, message="message"
        )
        for i, finding_type in enumerate(types, start=1)
    ]


def make_finding(finding_id: str, finding_type: FindingType, title: str) -> PlanValidationFinding:
    return PlanValidationFinding(
        id=finding_id, type=finding_type, title=title, message="message"
    )


class TestCalculateScore:
    """Tests for calculate_score."""

    def test_empty_is_perfect(self):
        assert calculate_score([]) == 100

    def test_all_passed(self):
        assert calculate_score(make_findings(P, P, P)) == 100

    def test_all_failed(self):
        assert calculate_score(make_findings(F, F)) == 0

    @pytest.mark.parametrize(
        "types,expected",
        [
            ((P, W), 75),
            ((P, P, W), 83),
            ((P, P, P, W), 88),
            ((P, F), 50),
            ((W, W), 50),
            ((P, W, F), 50),
        ],
    )
    def test_weighted_average(self, types, expected):
        assert calculate_score(make_findings(*types)) == expected

    def test_near_perfect_never_rounds_to_100(self):
        findings = make_findings(*([P] * 199 + [W]))
        assert calculate_score(findings) == 99

    def test_near_zero_never_rounds_to_0(self):
        findings = make_findings(*([W] + [F] * 200))
        assert calculate_score(findings) == 1


class TestStatus:
    """Tests for the status bands."""

    @pytest.mark.parametrize(
        "score,status",
        [
            (0, "Needs Major Improvements"),
            (59, "Needs Major Improvements"),
            (60, "Needs Some Improvements"),
            (79, "Needs Some Improvements"),
            (80, "Satisfactory"),
            (89, "Satisfactory"),
            (90, "Good"),
            (100, "Good"),
        ],
    )
    def test_band_boundaries(self, score, status):
        assert status_for_score(score) == status


class TestRiskLevel:
    """Tests for assess_risk_level."""

    def test_low(self):
        assert assess_risk_level(make_findings(P, W, W)) == "Low"

    def test_medium_on_three_warnings(self):
        assert assess_risk_level(make_findings(W, W, W)) == "Medium"

    def test_high_on_any_failure(self):
        assert assess_risk_level(make_findings(P, F)) == "High"


class TestGenerateSummary:
    """Tests for generate_summary."""

    def test_counts_and_verdict(self):
        findings = make_findings(P, P, W, F)
        summary = generate_summary(findings, calculate_score(findings))

        assert summary.score == 63
        assert summary.status == "Needs Some Improvements"
        assert (summary.passed, summary.warnings, summary.failed) == (2, 1, 1)
        assert summary.overall == "Plan needs review"
        assert summary.risk_level == "High"

    def test_generally_valid_at_80(self):
        summary = generate_summary(make_findings(P), 80)
        assert summary.overall == "Plan is generally valid"

    def test_to_dict(self):
        summary = ValidationSummary(
            score=75, status="Needs Some Improvements", passed=1, warnings=1
        )
        data = summary.to_dict()
        assert data["breakdown"] == {"passed": 1, "warnings": 1, "failed": 0}
        assert data["score"] == 75
        assert data["risk_level"] == "Low"


class TestGenerateRecommendations:
    """Tests for generate_recommendations."""

    def test_no_recommendations_for_clean_findings(self):
        assert generate_recommendations(make_findings(P, P, W)) == []

    def test_failures_first(self):
        findings = [
            make_finding("circular-dependencies", F, "Circular Dependencies"),
            make_finding("x", P, "Other"),
        ]
        recommendations = generate_recommendations(findings)

        assert recommendations == [
            Recommendation(
                priority="High",
                action="Address failed validations before proceeding",
                reason="1 critical issues need resolution",
                related_findings=["circular-dependencies"],
            )
        ]

    def test_many_warnings(self):
        recommendations = generate_recommendations(make_findings(W, W, W, W))
        assert len(recommendations) == 1
        assert recommendations[0].priority == "Medium"
        assert recommendations[0].reason == "Multiple (4) areas need attention"

    def test_three_warnings_not_enough(self):
        assert generate_recommendations(make_findings(W, W, W)) == []

    def test_resource_and_timeline_warnings(self):
        findings = [
            make_finding("resource-count", W, "Resource Requirements"),
            make_finding("timeline-assessment", W, "Timeline Assessment"),
            make_finding("critical-resources", W, "Critical Resources"),
        ]
        actions = [r.action for r in generate_recommendations(findings)]
        assert actions == [
            "Review resource allocation and availability",
            "Review timeline estimates and dependencies",
        ]

    def test_fixed_order(self):
        findings = [
            make_finding("timeline-assessment", W, "Timeline Assessment"),
            make_finding("resource-count", W, "Resource Requirements"),
            make_finding("a", W, "Other"),
            make_finding("b", W, "Other"),
            make_finding("c", F, "Other"),
        ]
        recommendations = generate_recommendations(findings)
        assert [r.priority for r in recommendations] == [
            "High",
            "Medium",
            "Medium",
            "Medium",
        ]
        assert recommendations[2].related_findings == ["resource-count"]

    def test_passed_resource_finding_ignored(self):
        findings = [make_finding("resource-count", P, "Resource Requirements")]
        assert generate_recommendations(findings) == []
