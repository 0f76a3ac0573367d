"""Risk assessment rule.

Reports high and medium risk phrases found in the plan and scores how
well the steps prepare for them.
"""

from plan_validator.analysis.risk import assess_risk_mitigation, identify_risks
from plan_validator.guardrails.base import (
    FindingType,
    PlanValidationContext,
    PlanValidationFinding,
    PlanValidationRule,
)


class RiskRule(PlanValidationRule):
    """Flags risky steps and assesses risk mitigation."""

    @property
    def rule_id(self) -> str:
        return "PLAN.RISKS"

    @property
    def name(self) -> str:
        return "Risk Assessment"

    @property
    def description(self) -> str:
        return (
            "Matches known risk phrases in step text and scores the plan's "
            "mitigation planning."
        )

    def validate(self, context: PlanValidationContext) -> list[PlanValidationFinding]:
        """Report risks by level, then the mitigation score."""
        findings: list[PlanValidationFinding] = []
        config = context.config

        risks = identify_risks(
            context.plan, config.high_risk_factors, config.medium_risk_factors
        )
        high_risks = [r.to_dict() for r in risks if r.level == "high"]
        medium_risks = [r.to_dict() for r in risks if r.level == "medium"]

        if high_risks:
            findings.append(
                self._create_finding(
                    finding_id="high-risks",
                    finding_type=FindingType.WARNING,
                    title="High Risks Identified",
                    message=f"Found {len(high_risks)} high-risk areas",
                    details={
                        "risks": high_risks,
                        "recommendation": (
                            "Address high risks before proceeding with "
                            "implementation"
                        ),
                    },
                )
            )

        if medium_risks:
            findings.append(
                self._create_finding(
                    finding_id="medium-risks",
                    finding_type=FindingType.WARNING,
                    title="Medium Risks",
                    message=f"Found {len(medium_risks)} medium-risk areas to monitor",
                    details={
                        "risks": medium_risks,
                        "recommendation": (
                            "Monitor these risks throughout implementation"
                        ),
                    },
                )
            )

        score = assess_risk_mitigation(
            context.plan, config.mitigation_keywords, config.backup_keywords
        )
        good = score >= config.mitigation_pass_score
        findings.append(
            self._create_finding(
                finding_id="risk-mitigation",
                finding_type=FindingType.PASSED if good else FindingType.WARNING,
                title="Risk Mitigation",
                message=(
                    "Good risk mitigation planning"
                    if good
                    else "Consider enhancing risk mitigation strategies"
                ),
                details={
                    "score": score,
                    "assessment": "Good" if good else "Needs Improvement",
                    "recommendation": (
                        "Add specific mitigation strategies for identified risks"
                    ),
                },
            )
        )

        return findings
