"""Plan data models for validation.

Defines PlanStep and Plan, the immutable inputs of a validation call.
Plans usually arrive as JSON-like mappings produced by a planner; the
ingestion helpers here normalise them into a validation-ready form and
tolerate missing optional fields.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


class PlanFormatError(ValueError):
    """Raised when plan input cannot be normalised into steps."""


# A step id, or an unresolvable reference kept as a leaf
DependencyRef = int | float | str


def _coerce_step_id(value: Any, what: str) -> int:
    """Convert an id-like value to a positive int."""
    if isinstance(value, bool):
        raise PlanFormatError(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        step_id = value
    elif isinstance(value, str) and value.strip().isdigit():
        step_id = int(value.strip())
    elif isinstance(value, float) and value.is_integer():
        step_id = int(value)
    else:
        raise PlanFormatError(f"{what} must be an integer, got {value!r}")

    if step_id <= 0:
        raise PlanFormatError(f"{what} must be positive, got {step_id}")
    return step_id


def _dependency_ref(value: Any) -> DependencyRef:
    """Normalise a dependency reference.

    Id-like values become ints. Anything else is kept as an opaque
    reference that matches no step, so it acts as a leaf.
    """
    if isinstance(value, bool):
        return repr(value)
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit() and int(text) > 0:
            return int(text)
        return value
    if isinstance(value, float) and value.is_integer() and value > 0:
        return int(value)
    if isinstance(value, (int, float)):
        return value
    return repr(value)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class PlanStep:
    """Single step of a task plan.

    The duration is free text such as "1-2 hours"; resources keep their
    order and any duplicates the planner produced.
    """

    id: int
    title: str = ""
    description: str = ""
    duration: str = ""
    resources: tuple[str, ...] = field(default_factory=tuple)
    dependencies: tuple[DependencyRef, ...] = field(default_factory=tuple)  # step IDs

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "duration": self.duration,
            "resources": list(self.resources),
            "dependencies": list(self.dependencies),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlanStep":
        """Create from dictionary.

        Missing or null optional fields fall back to empty values. A bare
        string is accepted for ``resources`` and a bare id for
        ``dependencies``. Dependency references that are not valid ids are
        kept unchanged and never match a step.

        Raises:
            PlanFormatError: If the step id is missing or not a positive
                integer.
        """
        if "id" not in data or data["id"] is None:
            raise PlanFormatError("Plan step is missing required field: id")

        step_id = _coerce_step_id(data["id"], "Step id")

        raw_resources = data.get("resources")
        if raw_resources is None:
            resources: tuple[str, ...] = ()
        elif isinstance(raw_resources, str):
            resources = (raw_resources,)
        else:
            resources = tuple(str(r) for r in raw_resources if r is not None)

        raw_dependencies = data.get("dependencies")
        if raw_dependencies is None:
            dependencies: tuple[DependencyRef, ...] = ()
        elif isinstance(raw_dependencies, (int, float, str)):
            dependencies = (_dependency_ref(raw_dependencies),)
        else:
            dependencies = tuple(
                _dependency_ref(dep) for dep in raw_dependencies if dep is not None
            )

        return cls(
            id=step_id,
            title=_as_text(data.get("title")),
            description=_as_text(data.get("description")),
            duration=_as_text(data.get("duration")),
            resources=resources,
            dependencies=dependencies,
        )

    @property
    def text(self) -> str:
        """Title and description joined, as scanned by keyword checks."""
        return f"{self.title} {self.description}"


@dataclass(frozen=True)
class Plan:
    """Ordered, immutable sequence of plan steps.

    Step order is significant: it fixes the numbering of per-step
    findings and the traversal order of the dependency checks.
    """

    steps: tuple[PlanStep, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: set[int] = set()
        for step in self.steps:
            if step.id in seen:
                raise PlanFormatError(f"Duplicate step id: {step.id}")
            seen.add(step.id)

    @classmethod
    def from_steps(
        cls, steps: "Plan | Iterable[PlanStep | Mapping[str, Any]] | None"
    ) -> "Plan":
        """Normalise steps (objects or mappings) into a Plan.

        Args:
            steps: An existing Plan, PlanStep objects or step mappings.

        Returns:
            Plan with steps in input order.

        Raises:
            PlanFormatError: If an entry is neither a PlanStep nor a mapping,
                or the ids are invalid or repeated.
        """
        if steps is None:
            return cls()
        if isinstance(steps, Plan):
            return steps
        if isinstance(steps, (str, bytes, Mapping)):
            raise PlanFormatError("Plan must be a sequence of steps")

        normalized: list[PlanStep] = []
        for index, entry in enumerate(steps, start=1):
            if isinstance(entry, PlanStep):
                normalized.append(entry)
            elif isinstance(entry, Mapping):
                normalized.append(PlanStep.from_dict(entry))
            else:
                raise PlanFormatError(
                    f"Plan step {index} must be a mapping, got {type(entry).__name__}"
                )
        return cls(steps=tuple(normalized))

    @property
    def step_ids(self) -> list[int]:
        """Step ids in plan order."""
        return [step.id for step in self.steps]

    def get_step(self, step_id: int) -> PlanStep | None:
        """Get a step by its id, or None when the plan has no such step."""
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def to_list(self) -> list[dict[str, Any]]:
        """Convert to a list of step dictionaries."""
        return [step.to_dict() for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[PlanStep]:
        return iter(self.steps)


__all__ = ["DependencyRef", "Plan", "PlanFormatError", "PlanStep"]
