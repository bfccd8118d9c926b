"""
Serialization rules of the host engine.

The built-in serializable set starts from a fixed list of primitive types
and is extended with the host engine's own value types before any graph is
built. After that the rules are frozen and shared read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable

from serdepth.model import TypeUniverse


DEFAULT_MAX_DEPTH = 8

ENUM_TYPE = "System.Enum"

PRIMITIVE_TYPES: FrozenSet[str] = frozenset(
    {
        "System.Int32",
        "System.Boolean",
        "System.Single",
        "System.String",
        ENUM_TYPE,
        "System.Char",
    }
)

UNITY_ENGINE_OBJECT = "UnityEngine.Object"

# Value types shipped in UnityEngine.dll that the serializer stores inline
UNITY_VALUE_TYPES = tuple(
    f"UnityEngine.{name}"
    for name in (
        "Color",
        "LayerMask",
        "Vector2",
        "Vector3",
        "Vector4",
        "Rect",
        "AnimationCurve",
        "Bounds",
        "Gradient",
        "Quaternion",
    )
)

SERIALIZABLE_ATTRIBUTE = "System.SerializableAttribute"

LIST_DEFINITION = "System.Collections.Generic.List"


@dataclass(frozen=True)
class SerializationRules:
    """
    Frozen configuration consumed by the classifier, builder and walker.

    Properties:
        builtin_types: Names always considered serializable
        marker_attribute: Declaring type of the "serializable" marker attribute
        list_definition: Generic definition unwrapped like an array
            when it has exactly one type argument
        max_depth: Serialization depth bound
    """

    builtin_types: FrozenSet[str] = field(default_factory=lambda: PRIMITIVE_TYPES)
    marker_attribute: str = SERIALIZABLE_ATTRIBUTE
    list_definition: str = LIST_DEFINITION
    max_depth: int = DEFAULT_MAX_DEPTH

    def with_builtin_types(self, names: Iterable[str]) -> SerializationRules:
        """Return a copy whose built-in set also contains names."""
        return replace(self, builtin_types=self.builtin_types | frozenset(names))

    def with_max_depth(self, max_depth: int) -> SerializationRules:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        return replace(self, max_depth=max_depth)

    @classmethod
    def for_universe(cls, universe: TypeUniverse, max_depth: int = DEFAULT_MAX_DEPTH) -> SerializationRules:
        """Default rules extended with the universe's host value types."""
        return cls().with_builtin_types(universe.engine_value_types).with_max_depth(max_depth)
