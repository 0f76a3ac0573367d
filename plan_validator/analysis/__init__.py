"""Plan analysis helpers used by the validation rules.

Modules:
    duration: Duration range parsing and total formatting
    dependency_graph: Graph building, cycle detection and depth
    risk: Risk phrase matching and mitigation scoring
"""

from .dependency_graph import (
    DependencyAnalysis,
    analyze_dependencies,
    build_dependency_graph,
    calculate_max_depth,
    count_total_dependencies,
    detect_cycles,
    find_complex_steps,
)
from .duration import (
    format_total_duration,
    mentions_hours,
    parse_duration_midpoint,
    step_midpoint,
    total_hours,
)
from .risk import RiskEntry, assess_risk_mitigation, identify_risks

__all__ = [
    "DependencyAnalysis",
    "RiskEntry",
    "analyze_dependencies",
    "assess_risk_mitigation",
    "build_dependency_graph",
    "calculate_max_depth",
    "count_total_dependencies",
    "detect_cycles",
    "find_complex_steps",
    "format_total_duration",
    "identify_risks",
    "mentions_hours",
    "parse_duration_midpoint",
    "step_midpoint",
    "total_hours",
]
