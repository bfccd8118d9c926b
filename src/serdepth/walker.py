"""
Depth-Bounded Path Walker.

Enumerates every field chain leaving a root type, depth first, and reports
each chain that reaches the maximum serialization depth.

There is deliberately no cycle detection and no memoization: a type that
references itself keeps adding edges until the bound is hit, and is then
reported like any other over-deep chain. Both are unsafe for a serializer
that stops at a fixed depth, and every distinct offending chain is listed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from serdepth.classifier import SerializabilityClassifier
from serdepth.graph import DependencyEdge, DependencyGraph
from serdepth.model import TypeDef, TypeUniverse
from serdepth.rules import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViolationReport:
    """A member chain of exactly max_depth edges, root to leaf."""

    root: TypeDef
    chain: Tuple[DependencyEdge, ...]

    @property
    def depth(self) -> int:
        return len(self.chain)

    def lines(self) -> List[str]:
        """One "<to type> <from type>.<field>" line per hop."""
        return [edge.describe() for edge in self.chain]

    @property
    def field_path(self) -> str:
        return ".".join([self.root.full_name] + [edge.field.name for edge in self.chain])

    @property
    def repeated_types(self) -> List[str]:
        """Types met more than once along the chain (the chain is a cycle)."""
        seen = [self.root.full_name]
        repeated: List[str] = []
        for edge in self.chain:
            name = edge.to_type.full_name
            if name in seen and name not in repeated:
                repeated.append(name)
            seen.append(name)
        return repeated


def _walk(
    root: TypeDef,
    current: str,
    level: int,
    path: List[Optional[DependencyEdge]],
    graph: DependencyGraph,
    reports: List[ViolationReport],
) -> None:
    if level >= len(path):
        reports.append(ViolationReport(root=root, chain=tuple(path)))
        return

    deps = graph.edges_from(current)
    if not deps:
        return

    for dep in deps:
        path[level] = dep
        _walk(root, dep.to_type.full_name, level + 1, path, graph, reports)
        path[level] = None


def walk_type(root: TypeDef, graph: DependencyGraph, max_depth: int = DEFAULT_MAX_DEPTH) -> List[ViolationReport]:
    """
    Report every chain from root that reaches max_depth edges.

    Args:
        root: Type to start from
        graph: Prebuilt dependency graph
        max_depth: Serialization depth bound

    Returns:
        Violation reports in depth-first, field order
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")
    path: List[Optional[DependencyEdge]] = [None] * max_depth
    reports: List[ViolationReport] = []
    _walk(root, root.full_name, 0, path, graph, reports)
    return reports


def find_roots(universe: TypeUniverse, classifier: SerializabilityClassifier) -> List[TypeDef]:
    """Project types deriving from the engine-object root, in load order."""
    return [t for t in universe.iter_project_types() if classifier.is_engine_object(t)]


def find_violations(
    universe: TypeUniverse,
    graph: DependencyGraph,
    classifier: SerializabilityClassifier,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[ViolationReport]:
    """Walk every root of the universe in turn."""
    reports: List[ViolationReport] = []
    for root in find_roots(universe, classifier):
        found = walk_type(root, graph, max_depth)
        if found:
            logger.info("%s: %d over-deep member chain(s)", root.full_name, len(found))
        reports.extend(found)
    return reports
