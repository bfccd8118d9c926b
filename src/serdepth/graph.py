"""
Dependency Graph Builder: Which serializable types value-nest which others.

For every serializable type in the universe this module records the fields
through which an instance may directly contain another serialized value.
References to engine objects are stored by the host as links, not nested
copies, so they never become edges.

IMPORTANT: The graph is built for the whole universe up front. During a walk
a missing entry therefore means "not serializable", while an empty entry
means "serializable, but nests nothing".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from serdepth.classifier import SerializabilityClassifier
from serdepth.model import FieldDef, TypeDef, TypeUniverse
from serdepth.rules import SerializationRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyEdge:
    """
    An instance of from_type may directly contain a serialized
    instance of to_type through field.
    """

    from_type: TypeDef
    to_type: TypeDef
    field: FieldDef

    def describe(self) -> str:
        return f"{self.to_type.full_name} {self.from_type.full_name}.{self.field.name}"


@dataclass(frozen=True)
class DependencyGraph:
    """
    Outgoing edges per serializable type, in field order.

    Read-only once built: the mapping is a view and each edge list a tuple.
    """

    edges_by_type: Mapping[str, Tuple[DependencyEdge, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {name: tuple(deps) for name, deps in self.edges_by_type.items()}
        object.__setattr__(self, "edges_by_type", MappingProxyType(frozen))

    def __contains__(self, type_name: object) -> bool:
        return type_name in self.edges_by_type

    def __len__(self) -> int:
        return len(self.edges_by_type)

    def edges_from(self, type_name: str) -> Optional[Tuple[DependencyEdge, ...]]:
        """
        Outgoing edges of a type.

        Returns:
            The edge tuple (possibly empty), or None when the type
            is not serializable
        """
        return self.edges_by_type.get(type_name)

    def types(self) -> List[str]:
        return list(self.edges_by_type)

    def edges(self) -> Iterator[DependencyEdge]:
        for deps in self.edges_by_type.values():
            yield from deps

    @property
    def edge_count(self) -> int:
        return sum(len(deps) for deps in self.edges_by_type.values())


def instance_fields(universe: TypeUniverse, t: TypeDef) -> List[FieldDef]:
    """
    The instance fields of a type: its own fields (any visibility) in
    declaration order, then the non-private fields of each base class,
    nearest base first. Private fields of a base class are not part of
    the subclass's field set.
    """
    fields = list(t.fields)
    seen: Set[str] = {t.full_name}
    base = universe.base_of(t)
    while base is not None and base.full_name not in seen:
        seen.add(base.full_name)
        fields.extend(f for f in base.fields if f.is_inherited)
        base = universe.base_of(base)
    return fields


def type_dependencies(classifier: SerializabilityClassifier, t: TypeDef) -> List[DependencyEdge]:
    """Edges leaving one serializable type."""
    deps: List[DependencyEdge] = []
    for f in instance_fields(classifier.universe, t):
        if f.non_serialized:
            continue
        dst = classifier.unwrap(classifier.universe.resolve(f.field_type))
        if classifier.is_engine_object(dst) or not classifier.is_serializable(dst):
            continue
        deps.append(DependencyEdge(from_type=t, to_type=dst, field=f))
    return deps


def build_dependency_graph(
    universe: TypeUniverse,
    rules: Optional[SerializationRules] = None,
    classifier: Optional[SerializabilityClassifier] = None,
) -> DependencyGraph:
    """
    Build the dependency graph of every serializable type in the universe.

    Each type's edges depend only on its own fields, so the result is the
    same whatever order the types are visited in.
    """
    if classifier is None:
        classifier = SerializabilityClassifier(universe, rules)

    edges_by_type: Dict[str, Sequence[DependencyEdge]] = {}
    for t in universe:
        if not classifier.is_serializable(t):
            continue
        deps = type_dependencies(classifier, t)
        edges_by_type[t.full_name] = deps
        logger.debug("%s: %d serialized dependencies", t.full_name, len(deps))

    graph = DependencyGraph(edges_by_type=edges_by_type)
    logger.info(
        "Dependency graph built: %d serializable types, %d edges",
        len(graph),
        graph.edge_count,
    )
    return graph
