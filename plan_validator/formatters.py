"""Formatters for validation results.

This module renders a ValidationResult as plain text for terminal or
log output.
"""

from typing import TYPE_CHECKING

from .guardrails.base import FindingType

if TYPE_CHECKING:
    from .guardrails.base import PlanValidationFinding
    from .validator import ValidationResult


# Type markers for human-readable output
TYPE_ICONS: dict[FindingType, str] = {
    FindingType.FAILED: "[FAILED]",
    FindingType.WARNING: "[WARNING]",
    FindingType.PASSED: "[PASSED]",
}

TYPE_ORDER = [FindingType.FAILED, FindingType.WARNING, FindingType.PASSED]


def format_validation_for_display(
    result: "ValidationResult",
    include_passed: bool = True,
) -> str:
    """Format a validation result for human-readable display.

    Args:
        result: Result to format.
        include_passed: Whether to list passed findings.

    Returns:
        Formatted multi-line string.
    """
    lines: list[str] = []

    if result.success and result.summary is not None:
        summary = result.summary
        lines.append(
            f"=== Plan Validation: {summary.score}/100 ({summary.status}) ==="
        )
        lines.append(
            f"{summary.passed} passed, {summary.warnings} warnings, "
            f"{summary.failed} failed | Risk level: {summary.risk_level}"
        )
        lines.append(summary.overall)
    else:
        lines.append("=== Plan Validation: incomplete ===")
        lines.append(f"Error: {result.error}")
    lines.append("")

    grouped = result.findings_by_type()
    for finding_type in TYPE_ORDER:
        if finding_type == FindingType.PASSED and not include_passed:
            continue
        for finding in grouped.get(finding_type, []):
            lines.extend(_format_single_finding(finding))

    if result.recommendations:
        lines.append("")
        lines.append("Recommendations:")
        for index, rec in enumerate(result.recommendations, start=1):
            lines.append(f"  {index}. [{rec.priority}] {rec.action}")
            lines.append(f"     {rec.reason}")

    return "\n".join(lines).rstrip()


def _format_single_finding(finding: "PlanValidationFinding") -> list[str]:
    """Format a single finding for human display."""
    icon = TYPE_ICONS.get(finding.type, "[INFO]")
    lines = [f"{icon} {finding.title}", f"  {finding.message}"]

    recommendation = (finding.details or {}).get("recommendation")
    if finding.type != FindingType.PASSED and recommendation:
        lines.append(f"  Suggestion: {recommendation}")

    return lines


__all__ = [
    "TYPE_ICONS",
    "format_validation_for_display",
]
