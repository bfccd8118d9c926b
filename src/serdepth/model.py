"""
Type Universe Data Model

Defines the closed universe of type definitions the depth check runs over.

These are pure data classes representing:
    - Fields (instance members of a type)
    - Types (fields, attributes, superclass, collection shape)
    - The universe (every type visible to the analysis plus the
      distinguished engine-object root)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about serialization rules
        - Are immutable once built
        - Reference other types by fully qualified name only
        - Are produced by a loader, never by live reflection
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional, Sequence, Tuple


ARRAY_SUFFIX = "[]"

PUBLIC = "public"
PROTECTED = "protected"
INTERNAL = "internal"
PRIVATE = "private"
VISIBILITIES = (PUBLIC, PROTECTED, INTERNAL, PRIVATE)


@dataclass(frozen=True)
class FieldDef:
    """
    An instance field declared by a type.

    Static fields never appear here; the loader drops them.

    Properties:
        name: Field identifier (e.g., "stats")
        field_type: Fully qualified name of the field's type
            (e.g., "Game.Stats", "Game.Node[]",
            "System.Collections.Generic.List<Game.Node>")
        non_serialized: True when the field carries the explicit
            opt-out marker ([NonSerialized])
        visibility: One of "public", "protected", "internal" or
            "private". Every field but a private one is inherited into a
            subclass's field set
    """

    name: str
    field_type: str
    non_serialized: bool = False
    visibility: str = PUBLIC

    @property
    def is_inherited(self) -> bool:
        return self.visibility != PRIVATE


@dataclass(frozen=True)
class TypeDef:
    """
    A single type record.

    Properties:
        full_name:
            Identity of the type (e.g., "Game.Player")

        base:
            Full name of the superclass, if any. At most one.

        fields:
            Declared instance fields, in declaration order

        attributes:
            Fully qualified names of the declaring types of the attributes
            attached to this type (e.g., "System.SerializableAttribute")

        element_type:
            Element type name when this type is an array

        generic_definition / generic_arguments:
            Set when this type is a constructed generic
            (e.g., "System.Collections.Generic.List" with ("Game.Node",))
    """

    full_name: str
    base: Optional[str] = None
    fields: Tuple[FieldDef, ...] = ()
    attributes: Tuple[str, ...] = ()
    element_type: Optional[str] = None
    generic_definition: Optional[str] = None
    generic_arguments: Tuple[str, ...] = ()

    @property
    def is_array(self) -> bool:
        return self.element_type is not None

    @property
    def is_generic(self) -> bool:
        return self.generic_definition is not None

    @property
    def namespace(self) -> str:
        head = self.full_name.split("<", 1)[0]
        return head.rsplit(".", 1)[0] if "." in head else ""

    @property
    def name(self) -> str:
        if self.namespace:
            return self.full_name[len(self.namespace) + 1:]
        return self.full_name

    def get_field(self, field_name: str) -> Optional[FieldDef]:
        for f in self.fields:
            if f.name == field_name:
                return f
        return None


def split_generic_arguments(text: str) -> List[str]:
    """Split "A, B<C, D>, E[]" on top-level commas only."""
    args: List[str] = []
    depth = 0
    current = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        if ch == "," and depth == 0:
            args.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    tail = "".join(current).strip()
    if tail:
        args.append(tail)
    return args


def construct_type(name: str) -> Optional[TypeDef]:
    """
    Build the TypeDef for an array or generic type name.

    Returns None when the name is a plain (non-constructed) type name.

    Examples:
        "Game.Node[]"  -> array of "Game.Node"
        "System.Collections.Generic.List<Game.Node>"
                       -> generic "System.Collections.Generic.List"
                          with arguments ("Game.Node",)
    """
    name = name.strip()
    if name.endswith(ARRAY_SUFFIX):
        return TypeDef(full_name=name, element_type=name[: -len(ARRAY_SUFFIX)].strip())
    if name.endswith(">") and "<" in name:
        lt = name.index("<")
        return TypeDef(
            full_name=name,
            generic_definition=name[:lt].strip(),
            generic_arguments=tuple(split_generic_arguments(name[lt + 1:-1])),
        )
    return None


def with_declared_shape(t: TypeDef) -> TypeDef:
    """
    Give a declared type the array or generic shape its name implies.

    A document may declare "Game.Box<Game.Item>" directly; that record is
    still a constructed generic and must classify as one.
    """
    if t.is_array or t.is_generic:
        return t
    shape = construct_type(t.full_name)
    if shape is None:
        return t
    return replace(
        t,
        element_type=shape.element_type,
        generic_definition=shape.generic_definition,
        generic_arguments=shape.generic_arguments,
    )


@dataclass(frozen=True)
class TypeUniverse:
    """
    Every type, field and attribute record visible to the analysis.

    Built once by a loader and read-only for the rest of the run.

    Properties:
        types:
            Declared types by full name, in load order

        engine_object:
            Full name of the distinguished engine-object root type
            (e.g., "UnityEngine.Object"). Its subclasses are serialization
            roots and are stored by reference.

        engine_value_types:
            Host-defined value types that extend the built-in
            serializable set (e.g., "UnityEngine.Vector3")

        project_types:
            Names of the declared types that belong to the analysed
            project. Roots are drawn from these, never from engine types.
    """

    types: Dict[str, TypeDef] = field(default_factory=dict)
    engine_object: Optional[str] = None
    engine_value_types: Tuple[str, ...] = ()
    project_types: Tuple[str, ...] = ()

    @classmethod
    def from_types(
        cls,
        types: Sequence[TypeDef],
        engine_object: Optional[str] = None,
        engine_value_types: Sequence[str] = (),
        project_types: Optional[Sequence[str]] = None,
    ) -> TypeUniverse:
        """
        Build a universe from a list of type records.

        If project_types is None every declared type counts as a project type.
        """
        table: Dict[str, TypeDef] = {}
        for t in types:
            if t.full_name in table:
                warnings.warn(f"Duplicate type definition ignored: {t.full_name}", UserWarning)
                continue
            table[t.full_name] = with_declared_shape(t)
        if project_types is None:
            project_types = list(table)
        return cls(
            types=table,
            engine_object=engine_object,
            engine_value_types=tuple(engine_value_types),
            project_types=tuple(project_types),
        )

    @classmethod
    def merge(cls, *universes: TypeUniverse) -> TypeUniverse:
        """
        Combine several universes (e.g., engine description + project files).

        The first definition of a type name wins. The engine object is taken
        from the first universe that names one.
        """
        table: Dict[str, TypeDef] = {}
        engine_object: Optional[str] = None
        value_types: List[str] = []
        project: List[str] = []
        for u in universes:
            for name, t in u.types.items():
                if name in table:
                    warnings.warn(f"Duplicate type definition ignored: {name}", UserWarning)
                    continue
                table[name] = with_declared_shape(t)
            if engine_object is None:
                engine_object = u.engine_object
            for name in u.engine_value_types:
                if name not in value_types:
                    value_types.append(name)
            for name in u.project_types:
                if name not in project:
                    project.append(name)
        return cls(
            types=table,
            engine_object=engine_object,
            engine_value_types=tuple(value_types),
            project_types=tuple(project),
        )

    def __iter__(self) -> Iterator[TypeDef]:
        return iter(self.types.values())

    def __len__(self) -> int:
        return len(self.types)

    def __contains__(self, name: object) -> bool:
        return name in self.types

    def get_type(self, name: str) -> Optional[TypeDef]:
        """
        Retrieve a declared type by full name.

        Returns:
            TypeDef or None if the universe does not declare it
        """
        return self.types.get(name)

    def resolve(self, name: str) -> TypeDef:
        """
        Resolve a type name to a TypeDef.

        Declared types are returned as-is. Array and generic names are
        constructed on the fly. Anything else (e.g. "System.Int32", which no
        project declares) resolves to an opaque placeholder with no base,
        fields or attributes.
        """
        declared = self.types.get(name)
        if declared is not None:
            return declared
        constructed = construct_type(name)
        if constructed is not None:
            return constructed
        return TypeDef(full_name=name.strip())

    def base_of(self, t: TypeDef) -> Optional[TypeDef]:
        if t.base is None:
            return None
        return self.resolve(t.base)

    def iter_project_types(self) -> Iterator[TypeDef]:
        """Yield project types in load order."""
        for name in self.project_types:
            t = self.types.get(name)
            if t is not None:
                yield t
