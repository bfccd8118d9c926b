"""
Tests for the Type Universe data model.

These tests verify:
    - Type and field records
    - Array / generic type name construction
    - Name resolution (declared, constructed, placeholder)
    - Universe merging
"""

import pytest
from serdepth.model import (
    FieldDef,
    TypeDef,
    TypeUniverse,
    construct_type,
    split_generic_arguments,
)


class TestTypeDef:
    """Test TypeDef records."""

    def test_plain_type(self):
        t = TypeDef(full_name="Game.Player", base="UnityEngine.MonoBehaviour")
        assert not t.is_array
        assert not t.is_generic
        assert t.namespace == "Game"
        assert t.name == "Player"

    def test_type_without_namespace(self):
        t = TypeDef(full_name="Global")
        assert t.namespace == ""
        assert t.name == "Global"

    def test_fields_keep_declaration_order(self):
        t = TypeDef(
            full_name="Game.Stats",
            fields=(
                FieldDef(name="health", field_type="System.Int32"),
                FieldDef(name="speed", field_type="System.Single"),
            ),
        )
        assert [f.name for f in t.fields] == ["health", "speed"]
        assert t.get_field("speed").field_type == "System.Single"
        assert t.get_field("missing") is None

    def test_field_defaults(self):
        f = FieldDef(name="x", field_type="System.Int32")
        assert f.non_serialized is False
        assert f.visibility == "public"
        assert f.is_inherited

    def test_type_is_immutable(self):
        t = TypeDef(full_name="Game.A")
        with pytest.raises(AttributeError):
            t.full_name = "Game.B"


class TestConstructedTypes:
    """Test array and generic type names."""

    def test_array(self):
        t = construct_type("Game.Node[]")
        assert t.is_array
        assert t.element_type == "Game.Node"

    def test_array_of_list(self):
        t = construct_type("System.Collections.Generic.List<Game.Node>[]")
        assert t.is_array
        assert t.element_type == "System.Collections.Generic.List<Game.Node>"

    def test_single_argument_generic(self):
        t = construct_type("System.Collections.Generic.List<Game.Node>")
        assert t.is_generic
        assert t.generic_definition == "System.Collections.Generic.List"
        assert t.generic_arguments == ("Game.Node",)

    def test_nested_generic_arguments(self):
        t = construct_type("System.Collections.Generic.Dictionary<System.String, System.Collections.Generic.List<Game.Item>>")
        assert t.generic_definition == "System.Collections.Generic.Dictionary"
        assert t.generic_arguments == ("System.String", "System.Collections.Generic.List<Game.Item>")

    def test_plain_name_is_not_constructed(self):
        assert construct_type("Game.Node") is None

    def test_split_generic_arguments(self):
        assert split_generic_arguments("A, B<C, D>, E[]") == ["A", "B<C, D>", "E[]"]
        assert split_generic_arguments("") == []


class TestTypeUniverse:
    """Test TypeUniverse lookups and merging."""

    def build_universe(self):
        return TypeUniverse.from_types(
            [
                TypeDef(full_name="Game.A", fields=(FieldDef(name="b", field_type="Game.B"),)),
                TypeDef(full_name="Game.B"),
            ],
            engine_object="UnityEngine.Object",
        )

    def test_declared_types_in_order(self):
        u = self.build_universe()
        assert [t.full_name for t in u] == ["Game.A", "Game.B"]
        assert len(u) == 2
        assert "Game.A" in u
        assert "Game.C" not in u

    def test_project_types_default_to_all(self):
        u = self.build_universe()
        assert u.project_types == ("Game.A", "Game.B")
        assert [t.full_name for t in u.iter_project_types()] == ["Game.A", "Game.B"]

    def test_get_type(self):
        u = self.build_universe()
        assert u.get_type("Game.A").full_name == "Game.A"
        assert u.get_type("Game.Missing") is None

    def test_resolve_declared(self):
        u = self.build_universe()
        assert u.resolve("Game.B") is u.get_type("Game.B")

    def test_resolve_constructed(self):
        u = self.build_universe()
        t = u.resolve("Game.B[]")
        assert t.is_array
        assert u.resolve(t.element_type) is u.get_type("Game.B")

    def test_resolve_placeholder(self):
        u = self.build_universe()
        t = u.resolve("System.Int32")
        assert t.full_name == "System.Int32"
        assert t.base is None
        assert t.fields == ()
        assert t.attributes == ()

    def test_base_of(self):
        u = TypeUniverse.from_types(
            [TypeDef(full_name="Game.Child", base="Game.Parent"), TypeDef(full_name="Game.Parent")]
        )
        assert u.base_of(u.get_type("Game.Child")).full_name == "Game.Parent"
        assert u.base_of(u.get_type("Game.Parent")) is None

    def test_duplicate_type_warns(self):
        with pytest.warns(UserWarning, match="Duplicate"):
            u = TypeUniverse.from_types([TypeDef(full_name="Game.A"), TypeDef(full_name="Game.A", base="X")])
        assert u.get_type("Game.A").base is None

    def test_merge(self):
        engine = TypeUniverse.from_types(
            [TypeDef(full_name="UnityEngine.Object")],
            engine_object="UnityEngine.Object",
            engine_value_types=["UnityEngine.Color"],
            project_types=(),
        )
        project = TypeUniverse.from_types([TypeDef(full_name="Game.A", base="UnityEngine.Object")])
        merged = TypeUniverse.merge(engine, project)

        assert merged.engine_object == "UnityEngine.Object"
        assert merged.engine_value_types == ("UnityEngine.Color",)
        assert merged.project_types == ("Game.A",)
        assert [t.full_name for t in merged] == ["UnityEngine.Object", "Game.A"]

    def test_merge_first_definition_wins(self):
        first = TypeUniverse.from_types([TypeDef(full_name="Game.A", base="One")])
        second = TypeUniverse.from_types([TypeDef(full_name="Game.A", base="Two")])
        with pytest.warns(UserWarning):
            merged = TypeUniverse.merge(first, second)
        assert merged.get_type("Game.A").base == "One"
