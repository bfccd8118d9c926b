"""
Serializability Classifier: Decides whether a type is subject to the host
engine's object-graph serialization rules.

A type qualifies when, after unwrapping one level of array or list, it is
not generic and any of these holds:
    - it is in the built-in serializable set (enumerations included)
    - it is a subclass, direct or transitive, of the engine-object root
    - it carries the serializable marker attribute

Pure functions of the universe and the rules; nothing here mutates state.
"""

from __future__ import annotations

from typing import Optional, Set

from serdepth.model import TypeDef, TypeUniverse
from serdepth.rules import ENUM_TYPE, SerializationRules


class SerializabilityClassifier:
    """Serializability queries bound to one universe and one rule set."""

    def __init__(self, universe: TypeUniverse, rules: Optional[SerializationRules] = None):
        self.universe = universe
        self.rules = rules if rules is not None else SerializationRules.for_universe(universe)

    def unwrap(self, t: TypeDef) -> TypeDef:
        """
        Substitute an array with its element type, or a single-argument
        list with its argument. Exactly one level; nested collections
        keep their inner wrapper.
        """
        if t.is_array:
            return self.universe.resolve(t.element_type)
        if t.generic_definition == self.rules.list_definition and len(t.generic_arguments) == 1:
            return self.universe.resolve(t.generic_arguments[0])
        return t

    def is_engine_object(self, t: TypeDef) -> bool:
        """True for strict subclasses of the engine-object root."""
        root = self.universe.engine_object
        if root is None:
            return False
        seen: Set[str] = {t.full_name}
        current = self.universe.base_of(t)
        while current is not None:
            if current.full_name == root:
                return True
            # malformed inheritance loops end here
            if current.full_name in seen:
                return False
            seen.add(current.full_name)
            current = self.universe.base_of(current)
        return False

    def is_builtin(self, t: TypeDef) -> bool:
        builtin = self.rules.builtin_types
        if t.full_name in builtin:
            return True
        return t.base == ENUM_TYPE and ENUM_TYPE in builtin

    def has_marker_attribute(self, t: TypeDef) -> bool:
        return self.rules.marker_attribute in t.attributes

    def is_serializable(self, t: TypeDef) -> bool:
        t = self.unwrap(t)
        if t.is_generic:
            return False
        return self.is_builtin(t) or self.is_engine_object(t) or self.has_marker_attribute(t)


def unwrap_collection_type(universe: TypeUniverse, t: TypeDef, rules: Optional[SerializationRules] = None) -> TypeDef:
    return SerializabilityClassifier(universe, rules).unwrap(t)


def is_serializable(universe: TypeUniverse, t: TypeDef, rules: Optional[SerializationRules] = None) -> bool:
    return SerializabilityClassifier(universe, rules).is_serializable(t)
