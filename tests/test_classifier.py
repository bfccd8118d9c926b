"""
Tests for the Serializability Classifier.

Tests verify that the classifier:
    - Unwraps arrays and single-argument lists exactly once
    - Rejects every other generic
    - Accepts built-ins (enumerations included), engine objects and
      [Serializable] types
    - Matches the marker attribute by its fully qualified declaring type
"""

import pytest
from serdepth.classifier import SerializabilityClassifier, is_serializable, unwrap_collection_type
from serdepth.examples import build_unity_engine_universe
from serdepth.model import FieldDef, TypeDef, TypeUniverse
from serdepth.rules import SERIALIZABLE_ATTRIBUTE, SerializationRules

LIST = "System.Collections.Generic.List"


def build_universe() -> TypeUniverse:
    project = TypeUniverse.from_types(
        [
            TypeDef(full_name="Game.Player", base="UnityEngine.MonoBehaviour"),
            TypeDef(full_name="Game.Config", base="UnityEngine.ScriptableObject"),
            TypeDef(full_name="Game.Stats", attributes=(SERIALIZABLE_ATTRIBUTE,)),
            TypeDef(full_name="Game.Empty", attributes=(SERIALIZABLE_ATTRIBUTE,)),
            TypeDef(full_name="Game.Plain", fields=(FieldDef(name="x", field_type="System.Int32"),)),
            TypeDef(full_name="Game.Kind", base="System.Enum"),
            TypeDef(full_name="Game.Lookalike", attributes=("Other.SerializableAttribute",)),
            TypeDef(full_name="Game.Derived", base="Game.Stats"),
        ]
    )
    return TypeUniverse.merge(build_unity_engine_universe(), project)


@pytest.fixture
def classifier():
    return SerializabilityClassifier(build_universe())


def check(classifier, name):
    return classifier.is_serializable(classifier.universe.resolve(name))


class TestQualifyingRules:
    """Test the three ways a type becomes serializable."""

    @pytest.mark.parametrize(
        "name",
        ["System.Int32", "System.Boolean", "System.Single", "System.String", "System.Char", "System.Enum"],
    )
    def test_primitives(self, classifier, name):
        assert check(classifier, name)

    def test_enumeration(self, classifier):
        assert check(classifier, "Game.Kind")

    def test_engine_value_types(self, classifier):
        assert check(classifier, "UnityEngine.Vector3")
        assert check(classifier, "UnityEngine.Color")

    def test_engine_value_types_need_rules_extension(self):
        universe = build_universe()
        bare = SerializabilityClassifier(universe, SerializationRules())
        assert not bare.is_serializable(universe.resolve("UnityEngine.Vector3"))

    def test_engine_object_subclass(self, classifier):
        assert check(classifier, "Game.Player")
        assert check(classifier, "Game.Config")
        assert check(classifier, "UnityEngine.MonoBehaviour")

    def test_engine_root_is_not_its_own_subclass(self, classifier):
        root = classifier.universe.resolve("UnityEngine.Object")
        assert not classifier.is_engine_object(root)
        assert not classifier.is_serializable(root)

    def test_marker_attribute(self, classifier):
        assert check(classifier, "Game.Stats")

    def test_zero_field_type_still_qualifies(self, classifier):
        assert check(classifier, "Game.Empty")

    def test_marker_attribute_matched_by_identity(self, classifier):
        assert not check(classifier, "Game.Lookalike")

    def test_marker_attribute_not_inherited(self, classifier):
        assert not check(classifier, "Game.Derived")

    def test_plain_class(self, classifier):
        assert not check(classifier, "Game.Plain")

    def test_undeclared_type(self, classifier):
        assert not check(classifier, "System.IntPtr")


class TestCollectionUnwrap:
    """Test array and list unwrapping."""

    def test_array_of_serializable(self, classifier):
        assert check(classifier, "Game.Stats[]")
        assert check(classifier, "System.Int32[]")

    def test_list_of_serializable(self, classifier):
        assert check(classifier, f"{LIST}<Game.Stats>")

    def test_array_of_non_serializable(self, classifier):
        assert not check(classifier, "Game.Plain[]")
        assert not check(classifier, f"{LIST}<Game.Plain>")

    def test_array_of_list_is_unwrapped_once_only(self, classifier):
        # List<Stats>[] -> List<Stats>, which is still generic
        assert not check(classifier, f"{LIST}<Game.Stats>[]")

    def test_list_of_list_is_unwrapped_once_only(self, classifier):
        assert not check(classifier, f"{LIST}<{LIST}<Game.Stats>>")

    def test_array_of_array_is_unwrapped_once_only(self, classifier):
        assert not check(classifier, "Game.Stats[][]")

    def test_other_generics_are_rejected(self, classifier):
        assert not check(classifier, "System.Collections.Generic.Dictionary<System.String, Game.Stats>")
        assert not check(classifier, "System.Collections.Generic.HashSet<Game.Stats>")

    def test_multi_argument_list_shape_is_not_unwrapped(self, classifier):
        assert not check(classifier, f"{LIST}<Game.Stats, Game.Stats>")

    def test_unwrap_returns_element(self, classifier):
        universe = classifier.universe
        assert classifier.unwrap(universe.resolve("Game.Stats[]")) is universe.get_type("Game.Stats")
        assert classifier.unwrap(universe.resolve(f"{LIST}<Game.Stats>")) is universe.get_type("Game.Stats")
        stats = universe.get_type("Game.Stats")
        assert classifier.unwrap(stats) is stats

    def test_unwrap_keeps_inner_wrapper(self, classifier):
        inner = classifier.unwrap(classifier.universe.resolve(f"{LIST}<Game.Stats>[]"))
        assert inner.is_generic
        assert inner.full_name == f"{LIST}<Game.Stats>"


class TestMalformedInput:
    """The classifier stays total over odd universes."""

    def test_inheritance_loop_terminates(self):
        universe = TypeUniverse.from_types(
            [TypeDef(full_name="Game.A", base="Game.B"), TypeDef(full_name="Game.B", base="Game.A")],
            engine_object="UnityEngine.Object",
        )
        c = SerializabilityClassifier(universe, SerializationRules())
        assert not c.is_serializable(universe.get_type("Game.A"))

    def test_no_engine_object(self):
        universe = TypeUniverse.from_types([TypeDef(full_name="Game.A", base="UnityEngine.Object")])
        c = SerializabilityClassifier(universe)
        assert not c.is_engine_object(universe.get_type("Game.A"))


def test_module_level_helpers():
    universe = build_universe()
    rules = SerializationRules.for_universe(universe)
    array = universe.resolve("Game.Stats[]")
    assert unwrap_collection_type(universe, array, rules) is universe.get_type("Game.Stats")
    assert is_serializable(universe, array, rules)
    assert not is_serializable(universe, universe.get_type("Game.Plain"), rules)
