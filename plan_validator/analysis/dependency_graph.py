"""Dependency graph analysis for plans.

Builds the step-id -> dependency-ids graph of a plan and inspects it for
circular dependencies, over-connected steps and chain depth.

The graph is not assumed to be acyclic: cycle detection and depth
calculation are independent passes, and both must terminate on any
input. Both walk the graph with an explicit stack and a single shared
bookkeeping structure, so every node and edge is handled a bounded
number of times.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..plan import DependencyRef, Plan

DependencyGraph = dict[int, list[DependencyRef]]

# Marks an exhausted neighbour iterator
_DONE = object()


@dataclass
class DependencyAnalysis:
    """Result of analysing a plan's dependency graph."""

    cycles_found: list[list[int]] = field(default_factory=list)
    complex_steps: list[dict[str, int]] = field(default_factory=list)
    max_depth: int = 0
    total_dependency_count: int = 0

    @property
    def has_cycles(self) -> bool:
        return len(self.cycles_found) > 0

    @property
    def is_clean(self) -> bool:
        """True when there are neither cycles nor complex steps."""
        return not self.cycles_found and not self.complex_steps

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "cycles_found": [list(c) for c in self.cycles_found],
            "complex_steps": [dict(s) for s in self.complex_steps],
            "max_depth": self.max_depth,
            "total_dependency_count": self.total_dependency_count,
        }


def build_dependency_graph(plan: Plan) -> DependencyGraph:
    """Map each step id to its dependency ids, in plan order."""
    return {step.id: list(step.dependencies) for step in plan}


def detect_cycles(graph: Mapping[int, Sequence[DependencyRef]]) -> list[list[int]]:
    """Find circular dependency chains.

    Runs a depth-first search from every unvisited node in graph order.
    Reaching a node that is still on the current search stack reports the
    path from the search root through that revisit, e.g. ``[1, 2, 1]``.
    The search from a root stops at the first cycle it finds, so this
    reports the cycles met during traversal rather than every cycle in the
    graph.

    Ids referenced but not present in the graph are leaves, including
    references that can never name a step.

    Args:
        graph: Step id -> dependency ids.

    Returns:
        List of cycle paths, in discovery order.
    """
    cycles: list[list[int]] = []
    visited: set[DependencyRef] = set()
    on_stack: set[DependencyRef] = set()

    for root in graph:
        if root in visited:
            continue

        visited.add(root)
        on_stack.add(root)
        path = [root]
        pending = [iter(graph.get(root, ()))]

        while pending:
            neighbor = next(pending[-1], _DONE)

            if neighbor is _DONE:
                pending.pop()
                on_stack.discard(path.pop())
                continue

            if neighbor not in visited:
                visited.add(neighbor)
                on_stack.add(neighbor)
                path.append(neighbor)
                pending.append(iter(graph.get(neighbor, ())))
            elif neighbor in on_stack:
                cycles.append(path + [neighbor])
                # Abandon this root; nothing stays marked as on the stack
                on_stack.clear()
                break

    return cycles


def find_complex_steps(
    graph: Mapping[int, Sequence[DependencyRef]], threshold: int = 2
) -> list[dict[str, int]]:
    """List steps with more than ``threshold`` dependencies."""
    return [
        {"step": node, "dependency_count": len(deps)}
        for node, deps in graph.items()
        if len(deps) > threshold
    ]


def calculate_max_depth(graph: Mapping[int, Sequence[DependencyRef]]) -> int:
    """Length of the longest dependency chain, counted in steps.

    A step without dependencies has depth 1; an id that is referenced but
    not defined counts as one more level with nothing below it. An edge
    leading back onto the chain currently being walked is ignored, which
    keeps the walk finite on cyclic input. Depths are memoised, so each
    node is expanded once.

    On a cyclic graph the result is a lower bound: a depth memoised while
    part of a cycle sat on the current chain is reused from other start
    nodes. ``{1: [2], 2: [1], 3: [2]}`` reports 2 although 3 -> 2 -> 1 is
    three steps long. Acyclic graphs get the exact value.

    Args:
        graph: Step id -> dependency ids.

    Returns:
        Maximum depth, 0 for an empty graph.
    """
    depths: dict[DependencyRef, int] = {}

    for root in graph:
        if root in depths:
            continue

        on_path = {root}
        path = [root]
        best = {root: 1}
        pending = [iter(graph.get(root, ()))]

        while pending:
            node = path[-1]
            neighbor = next(pending[-1], _DONE)

            if neighbor is _DONE:
                pending.pop()
                path.pop()
                on_path.discard(node)
                depths[node] = best.pop(node)
                if path:
                    parent = path[-1]
                    best[parent] = max(best[parent], depths[node] + 1)
                continue

            if neighbor in on_path:
                continue

            if neighbor in depths:
                best[node] = max(best[node], depths[neighbor] + 1)
                continue

            on_path.add(neighbor)
            path.append(neighbor)
            best[neighbor] = 1
            pending.append(iter(graph.get(neighbor, ())))

    return max(depths.values(), default=0)


def count_total_dependencies(plan: Plan) -> int:
    """Total number of dependency references across all steps."""
    return sum(len(step.dependencies) for step in plan)


def analyze_dependencies(plan: Plan, complex_threshold: int = 2) -> DependencyAnalysis:
    """Run all dependency checks over a plan.

    Args:
        plan: Plan to analyse.
        complex_threshold: Dependency count above which a step is complex.

    Returns:
        DependencyAnalysis with cycles, complex steps, depth and totals.
    """
    graph = build_dependency_graph(plan)
    return DependencyAnalysis(
        cycles_found=detect_cycles(graph),
        complex_steps=find_complex_steps(graph, complex_threshold),
        max_depth=calculate_max_depth(graph),
        total_dependency_count=count_total_dependencies(plan),
    )


__all__ = [
    "DependencyAnalysis",
    "DependencyGraph",
    "analyze_dependencies",
    "build_dependency_graph",
    "calculate_max_depth",
    "count_total_dependencies",
    "detect_cycles",
    "find_complex_steps",
]
