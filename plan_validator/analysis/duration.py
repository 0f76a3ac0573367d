"""Duration parsing for plan steps.

Step durations are free text ranges such as "2-3 hours". Only the numeric
range is parsed; anything else falls back to a default midpoint so that a
malformed duration never fails validation.
"""

import math
import re
from collections.abc import Iterable

from ..plan import PlanStep

DEFAULT_DURATION_HOURS = 2.0

# "a-b" anywhere in the text, e.g. "1-2 hours"
DURATION_RANGE = re.compile(r"(\d+)-(\d+)")

HOUR_UNIT = re.compile(r"\bhours?\b", re.IGNORECASE)


def parse_duration_midpoint(duration: str | None) -> float | None:
    """Parse a range duration into its midpoint in hours.

    Args:
        duration: Duration text such as "1-2 hours".

    Returns:
        Midpoint of the range, or None when no range can be found.
    """
    if not duration:
        return None
    match = DURATION_RANGE.search(duration)
    if match is None:
        return None
    return (int(match.group(1)) + int(match.group(2))) / 2


def step_midpoint(
    step: PlanStep, default_hours: float = DEFAULT_DURATION_HOURS
) -> float:
    """Midpoint of a step's duration, or the default when unparsable."""
    midpoint = parse_duration_midpoint(step.duration)
    return default_hours if midpoint is None else midpoint


def total_hours(
    steps: Iterable[PlanStep], default_hours: float = DEFAULT_DURATION_HOURS
) -> float:
    """Sum of step midpoints in hours."""
    return sum(step_midpoint(step, default_hours) for step in steps)


def format_total_duration(hours: float) -> str:
    """Render a total in hours, days (8h) or weeks (40h), rounding up."""
    if hours <= 8:
        return f"{math.ceil(hours)} hours"
    if hours <= 40:
        return f"{math.ceil(hours / 8)} days"
    return f"{math.ceil(hours / 40)} weeks"


def mentions_hours(duration: str | None) -> bool:
    """Check whether a duration is expressed in hours."""
    return bool(duration) and bool(HOUR_UNIT.search(duration))


__all__ = [
    "DEFAULT_DURATION_HOURS",
    "format_total_duration",
    "mentions_hours",
    "parse_duration_midpoint",
    "step_midpoint",
    "total_hours",
]
