"""
Depth Check Analyzer: One full run over a Type Universe.

Classifies the universe, builds the dependency graph, walks every root and
collects the results into a read-only report:
    - Type and edge inventory
    - Root types
    - Violation chains
    - Warning flags (no engine root, no roots, cycles)

IMPORTANT: This is the analysis layer. It does NOT modify the universe.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from serdepth.classifier import SerializabilityClassifier
from serdepth.graph import DependencyGraph, build_dependency_graph
from serdepth.model import TypeUniverse
from serdepth.rules import SerializationRules
from serdepth.walker import ViolationReport, find_roots, find_violations

logger = logging.getLogger(__name__)


@dataclass
class DepthCheckReport:
    """Results of a depth check run."""

    max_depth: int
    total_types: int = 0
    project_types: int = 0
    serializable_types: int = 0
    total_edges: int = 0
    roots: List[str] = field(default_factory=list)
    violations: List[ViolationReport] = field(default_factory=list)
    graph: Optional[DependencyGraph] = None

    # Warnings and flags
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def violating_roots(self) -> List[str]:
        names: List[str] = []
        for v in self.violations:
            if v.root.full_name not in names:
                names.append(v.root.full_name)
        return names

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_universe(universe: TypeUniverse, rules: Optional[SerializationRules] = None) -> DepthCheckReport:
    """
    Run the serialization depth check over a universe.

    Returns a DepthCheckReport with the graph, roots, violations and warnings.
    """
    if rules is None:
        rules = SerializationRules.for_universe(universe)
    classifier = SerializabilityClassifier(universe, rules)

    report = DepthCheckReport(max_depth=rules.max_depth)
    report.total_types = len(universe)
    report.project_types = len(universe.project_types)

    graph = build_dependency_graph(universe, classifier=classifier)
    report.graph = graph
    report.serializable_types = len(graph)
    report.total_edges = graph.edge_count

    roots = find_roots(universe, classifier)
    report.roots = [r.full_name for r in roots]

    logger.info("Walking dependency graph from %d root type(s)", len(roots))
    report.violations = find_violations(universe, graph, classifier, rules.max_depth)

    if universe.engine_object is None:
        report.add_warning("No engine object type configured: no root types can be found")
    elif universe.engine_object not in universe:
        report.add_warning(f"Engine object type {universe.engine_object} is not declared in the universe")

    if not roots and universe.project_types:
        report.add_warning("No project type derives from the engine object type")

    for v in report.violations:
        repeated = v.repeated_types
        if repeated:
            report.add_warning(f"Self-referencing serialization cycle through {', '.join(repeated)}")

    return report
