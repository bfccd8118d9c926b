"""
Built-in engine description and example project universes.

build_unity_engine_universe() stands in for the engine's own assemblies: it
declares the UnityEngine.Object hierarchy that project types derive from
and lists the engine value types the serializer stores inline.
"""
from typing import List

from serdepth.model import FieldDef, TypeDef, TypeUniverse
from serdepth.rules import LIST_DEFINITION, SERIALIZABLE_ATTRIBUTE, UNITY_ENGINE_OBJECT, UNITY_VALUE_TYPES


def build_unity_engine_universe() -> TypeUniverse:
    types = [
        TypeDef(full_name=UNITY_ENGINE_OBJECT, base="System.Object"),
        TypeDef(full_name="UnityEngine.Component", base=UNITY_ENGINE_OBJECT),
        TypeDef(full_name="UnityEngine.Behaviour", base="UnityEngine.Component"),
        TypeDef(full_name="UnityEngine.MonoBehaviour", base="UnityEngine.Behaviour"),
        TypeDef(full_name="UnityEngine.Transform", base="UnityEngine.Component"),
        TypeDef(full_name="UnityEngine.GameObject", base=UNITY_ENGINE_OBJECT),
        TypeDef(full_name="UnityEngine.ScriptableObject", base=UNITY_ENGINE_OBJECT),
        TypeDef(full_name="UnityEngine.Texture", base=UNITY_ENGINE_OBJECT),
    ]
    return TypeUniverse.from_types(
        types,
        engine_object=UNITY_ENGINE_OBJECT,
        engine_value_types=UNITY_VALUE_TYPES,
        project_types=(),
    )


def build_example_project_universe() -> TypeUniverse:
    """
    A small game project on top of the engine description.

    Game.Player nests shallow value data and links engine objects by
    reference. Game.Level holds a tree whose nodes keep a list of child
    nodes, a self-referencing chain the serializer cannot bound.
    """
    serializable = (SERIALIZABLE_ATTRIBUTE,)
    types = [
        TypeDef(
            full_name="Game.Player",
            base="UnityEngine.MonoBehaviour",
            fields=(
                FieldDef(name="stats", field_type="Game.Stats"),
                FieldDef(name="inventory", field_type=f"{LIST_DEFINITION}<Game.Item>"),
                FieldDef(name="target", field_type="UnityEngine.Transform"),
                FieldDef(name="lastPath", field_type="Game.TreeNode", non_serialized=True),
            ),
        ),
        TypeDef(
            full_name="Game.Stats",
            attributes=serializable,
            fields=(
                FieldDef(name="health", field_type="System.Int32"),
                FieldDef(name="speed", field_type="System.Single"),
                FieldDef(name="tint", field_type="UnityEngine.Color"),
            ),
        ),
        TypeDef(
            full_name="Game.Item",
            attributes=serializable,
            fields=(
                FieldDef(name="name", field_type="System.String"),
                FieldDef(name="kind", field_type="Game.ItemKind"),
                FieldDef(name="icon", field_type="UnityEngine.Texture"),
            ),
        ),
        TypeDef(full_name="Game.ItemKind", base="System.Enum"),
        TypeDef(
            full_name="Game.Level",
            base="UnityEngine.MonoBehaviour",
            fields=(FieldDef(name="layout", field_type="Game.TreeNode"),),
        ),
        TypeDef(
            full_name="Game.TreeNode",
            attributes=serializable,
            fields=(
                FieldDef(name="position", field_type="UnityEngine.Vector3"),
                FieldDef(name="children", field_type=f"{LIST_DEFINITION}<Game.TreeNode>"),
            ),
        ),
        TypeDef(
            full_name="Game.Lookup",
            attributes=serializable,
            fields=(FieldDef(name="entries", field_type="System.Collections.Generic.Dictionary<System.String, Game.Item>"),),
        ),
    ]
    project = TypeUniverse.from_types(types)
    return TypeUniverse.merge(build_unity_engine_universe(), project)


def build_chain_universe(length: int, root_base: str = "UnityEngine.MonoBehaviour") -> TypeUniverse:
    """
    A straight chain Chain.T0 -> Chain.T1 -> ... of `length` edges.

    Chain.T0 is a root; every other link is a [Serializable] class with a
    single "next" field, and the last one has no fields.
    """
    types: List[TypeDef] = []
    for i in range(length + 1):
        fields = ()
        if i < length:
            fields = (FieldDef(name="next", field_type=f"Chain.T{i + 1}"),)
        if i == 0:
            types.append(TypeDef(full_name="Chain.T0", base=root_base, fields=fields))
        else:
            types.append(TypeDef(full_name=f"Chain.T{i}", attributes=(SERIALIZABLE_ATTRIBUTE,), fields=fields))
    return TypeUniverse.merge(build_unity_engine_universe(), TypeUniverse.from_types(types))
