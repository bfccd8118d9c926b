"""
Graphviz DOT diagram generator for serialization dependency graphs.

Converts a DependencyGraph into Graphviz DOT format for visualization.

Supports multiple modes:
    - SIMPLE: Types and nesting edges
    - DETAILED: Field labels, with violation chains highlighted
    - NAMESPACE: Types clustered by namespace
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from serdepth.graph import DependencyEdge, DependencyGraph
from serdepth.walker import ViolationReport


class DotMode(Enum):
    """Visualization modes for DOT output."""
    SIMPLE = "simple"          # Just types and edges
    DETAILED = "detailed"      # Field labels, violations in red
    NAMESPACE = "namespace"    # Clusters per namespace


def _escape_dot_string(s: str) -> str:
    """Escape special characters for DOT labels."""
    if not s:
        return '""'
    s = s.replace('\\', '\\\\')
    s = s.replace('"', '\\"')
    s = s.replace('\n', '\\n')
    return f'"{s}"'


def _escape_dot_id(identifier: str) -> str:
    """Quote an identifier for DOT unless it is a plain word."""
    if identifier and not identifier[0].isdigit() and identifier.replace('_', '').isalnum():
        return identifier
    return _escape_dot_string(identifier)


def _namespace_of(type_name: str) -> str:
    head = type_name.split("<", 1)[0]
    return head.rsplit(".", 1)[0] if "." in head else ""


def _violation_members(violations: Iterable[ViolationReport]) -> Tuple[Set[DependencyEdge], Set[str]]:
    edges: Set[DependencyEdge] = set()
    nodes: Set[str] = set()
    for v in violations:
        nodes.add(v.root.full_name)
        for edge in v.chain:
            edges.add(edge)
            nodes.add(edge.to_type.full_name)
    return edges, nodes


def generate_dot(
    graph: DependencyGraph,
    violations: Optional[List[ViolationReport]] = None,
    mode: DotMode = DotMode.SIMPLE,
    roots: Optional[Iterable[str]] = None,
) -> str:
    """
    Generate Graphviz DOT format for a dependency graph.

    Args:
        graph: Dependency graph to visualize
        violations: Violation chains to highlight (DETAILED mode)
        mode: Visualization mode (SIMPLE, DETAILED, NAMESPACE)
        roots: Root type names, drawn as ellipses

    Returns:
        String containing DOT graph definition
    """
    root_names = set(roots or ())
    bad_edges, bad_nodes = _violation_members(violations or [])

    lines = []

    # Header
    lines.append("digraph serialization {")
    lines.append("  rankdir=LR;")
    lines.append("  node [shape=box, style=filled, fillcolor=lightblue];")

    # =========================================================================
    # NODES
    # =========================================================================

    # Serializable types first, then leaf value types that only appear as targets
    node_names: List[str] = graph.types()
    for edge in graph.edges():
        name = edge.to_type.full_name
        if name not in node_names:
            node_names.append(name)

    for name in node_names:
        attrs = [f"label={_escape_dot_string(name)}"]
        if name in root_names:
            attrs.append("shape=ellipse")
            attrs.append("fillcolor=lightgreen")
        elif name not in graph:
            attrs.append("fillcolor=white")
        if mode == DotMode.DETAILED and name in bad_nodes:
            attrs.append("color=red")
            if name not in root_names:
                attrs.append("fillcolor=salmon")
        lines.append(f"  {_escape_dot_id(name)} [{', '.join(attrs)}];")

    # =========================================================================
    # EDGES
    # =========================================================================

    for edge in graph.edges():
        from_id = _escape_dot_id(edge.from_type.full_name)
        to_id = _escape_dot_id(edge.to_type.full_name)

        edge_attrs = []
        if mode == DotMode.DETAILED:
            edge_attrs.append(f"label={_escape_dot_string(edge.field.name)}")
            if edge in bad_edges:
                edge_attrs.append("color=red")
                edge_attrs.append("penwidth=2")

        attr_str = f" [{', '.join(edge_attrs)}]" if edge_attrs else ""
        lines.append(f"  {from_id} -> {to_id}{attr_str};")

    # =========================================================================
    # NAMESPACES
    # =========================================================================

    if mode == DotMode.NAMESPACE:
        by_namespace: Dict[str, List[str]] = {}
        for name in node_names:
            by_namespace.setdefault(_namespace_of(name), []).append(name)

        for namespace, names in by_namespace.items():
            if not namespace:
                continue
            lines.append(f'  subgraph "cluster_{namespace}" {{')
            lines.append(f'    label={_escape_dot_string(namespace)};')
            lines.append('    style=filled;')
            lines.append('    color=lightgrey;')
            for name in names:
                lines.append(f"    {_escape_dot_id(name)};")
            lines.append("  }")

    # Footer
    lines.append("}")

    return "\n".join(lines)


def save_dot_file(
    graph: DependencyGraph,
    filename: str,
    violations: Optional[List[ViolationReport]] = None,
    mode: DotMode = DotMode.SIMPLE,
    roots: Optional[Iterable[str]] = None,
) -> None:
    """
    Generate DOT and save to file.

    Args:
        graph: Dependency graph to visualize
        filename: Output file path (.dot extension recommended)
        violations: Violation chains to highlight
        mode: Visualization mode
        roots: Root type names
    """
    dot = generate_dot(graph, violations=violations, mode=mode, roots=roots)
    with open(filename, 'w') as f:
        f.write(dot)


__all__ = ["DotMode", "generate_dot", "save_dot_file"]
