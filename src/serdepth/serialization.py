"""
Loading and saving of Type Universes (TypeDef, FieldDef, TypeUniverse).

Provides JSON/YAML round-trip via an intermediate dict representation, and
the project loader that reads whole directory trees of universe documents.
Unreadable or malformed project files are skipped with a warning so one bad
file never aborts a run.
"""
from __future__ import annotations

import json
import logging
import warnings
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from serdepth.model import PUBLIC, VISIBILITIES, FieldDef, TypeDef, TypeUniverse

logger = logging.getLogger(__name__)

UNIVERSE_SUFFIXES = (".yaml", ".yml", ".json")

PathLike = Union[str, Path]


class UniverseFormatError(ValueError):
    """Raised when a universe document is malformed."""


def _require_name(d: Dict[str, Any], key: str, what: str) -> str:
    value = d.get(key)
    if not isinstance(value, str) or not value.strip():
        raise UniverseFormatError(f"{what} needs a non-empty string '{key}': {d!r}")
    return value.strip()


def _optional_name(d: Dict[str, Any], key: str, what: str) -> Optional[str]:
    if d.get(key) is None:
        return None
    return _require_name(d, key, what)


def _optional_flag(d: Dict[str, Any], key: str, what: str) -> bool:
    value = d.get(key, False)
    if not isinstance(value, bool):
        raise UniverseFormatError(f"{what} '{key}' must be true or false, got {value!r}")
    return value


def _name_list(value: Any, what: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) and v.strip() for v in value):
        raise UniverseFormatError(f"{what} must be a list of type names, got {value!r}")
    return [v.strip() for v in value]


def field_to_dict(f: FieldDef) -> Dict[str, Any]:
    return {
        "name": f.name,
        "type": f.field_type,
        "non_serialized": f.non_serialized,
        "visibility": f.visibility,
    }


def field_from_dict(d: Dict[str, Any]) -> FieldDef:
    if not isinstance(d, dict):
        raise UniverseFormatError(f"Field entry must be a mapping: {d!r}")
    visibility = d.get("visibility", PUBLIC)
    if visibility not in VISIBILITIES:
        raise UniverseFormatError(f"Field visibility must be one of {', '.join(VISIBILITIES)}: {d!r}")
    return FieldDef(
        name=_require_name(d, "name", "Field entry"),
        field_type=_require_name(d, "type", "Field entry"),
        non_serialized=_optional_flag(d, "non_serialized", "Field"),
        visibility=visibility,
    )


def type_to_dict(t: TypeDef) -> Dict[str, Any]:
    return {
        "name": t.full_name,
        "base": t.base,
        "attributes": list(t.attributes),
        "fields": [field_to_dict(f) for f in t.fields],
    }


def type_from_dict(d: Dict[str, Any]) -> TypeDef:
    if not isinstance(d, dict):
        raise UniverseFormatError(f"Type entry must be a mapping: {d!r}")
    name = _require_name(d, "name", "Type entry")
    fields = d.get("fields") or []
    if not isinstance(fields, list):
        raise UniverseFormatError(f"'fields' of {name} must be a list")

    instance_fields: List[FieldDef] = []
    for f in fields:
        # static fields are not part of an instance's serialized state
        if isinstance(f, dict) and _optional_flag(f, "static", f"Field of {name}"):
            continue
        instance_fields.append(field_from_dict(f))

    return TypeDef(
        full_name=name,
        base=_optional_name(d, "base", f"Type {name}"),
        fields=tuple(instance_fields),
        attributes=tuple(_name_list(d.get("attributes"), f"'attributes' of {name}")),
    )


def universe_to_dict(u: TypeUniverse) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "engine_object": u.engine_object,
        "engine_value_types": list(u.engine_value_types),
        "types": [type_to_dict(t) for t in u],
    }
    if list(u.project_types) != list(u.types):
        d["project_types"] = list(u.project_types)
    return d


def universe_from_dict(d: Dict[str, Any], strict: bool = True, source: str = "<document>") -> TypeUniverse:
    """
    Build a universe from its dict form.

    With strict=False a malformed type entry is skipped with a UserWarning
    instead of failing the whole document. Malformed document-level keys
    always raise.
    """
    if not isinstance(d, dict):
        raise UniverseFormatError(f"{source}: universe document must be a mapping")
    entries = d.get("types") or []
    if not isinstance(entries, list):
        raise UniverseFormatError(f"{source}: 'types' must be a list")
    engine_object = _optional_name(d, "engine_object", source)
    value_types = _name_list(d.get("engine_value_types"), f"{source}: 'engine_value_types'")
    project_types = None
    if d.get("project_types") is not None:
        project_types = _name_list(d["project_types"], f"{source}: 'project_types'")

    types: List[TypeDef] = []
    for i, entry in enumerate(entries):
        try:
            types.append(type_from_dict(entry))
        except UniverseFormatError as e:
            if strict:
                raise
            warnings.warn(f"{source}: skipping type entry {i}: {e}", UserWarning)

    return TypeUniverse.from_types(
        types,
        engine_object=engine_object,
        engine_value_types=value_types,
        project_types=project_types,
    )


def universe_to_json(u: TypeUniverse) -> str:
    return json.dumps(universe_to_dict(u), sort_keys=True)


def universe_from_json(s: str) -> TypeUniverse:
    d = json.loads(s)
    return universe_from_dict(d)


def universe_to_yaml(u: TypeUniverse) -> str:
    return yaml.safe_dump(universe_to_dict(u), sort_keys=False)


def universe_from_yaml(s: str) -> TypeUniverse:
    d = yaml.safe_load(s)
    return universe_from_dict(d)


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_universe_file(path: PathLike, strict: bool = True) -> TypeUniverse:
    """
    Load one universe document. The format follows the file suffix
    (.json, anything else is read as YAML).

    Raises:
        FileNotFoundError: If the file does not exist
        UniverseFormatError: If the document is malformed
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Universe file not found: {path}")
    try:
        d = _read_document(path)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise UniverseFormatError(f"{path}: {e}") from e
    return universe_from_dict(d, strict=strict, source=str(path))


def load_engine_universe(path: PathLike) -> TypeUniverse:
    """
    Load a host engine description. Its types never act as roots and it
    must name the engine-object root type.
    """
    u = load_universe_file(path)
    if not u.engine_object:
        raise UniverseFormatError(f"{path}: engine description must set 'engine_object'")
    return TypeUniverse(
        types=u.types,
        engine_object=u.engine_object,
        engine_value_types=u.engine_value_types,
        project_types=(),
    )


def collect_universe_files(directory: PathLike) -> List[Path]:
    """All universe documents under directory, recursively, sorted."""
    root = Path(directory)
    return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in UNIVERSE_SUFFIXES)


def load_project_universe(paths: Iterable[PathLike], engine: Optional[TypeUniverse] = None) -> TypeUniverse:
    """
    Load project universe documents from files and directories.

    Every type loaded here is a project type, unless its document lists
    project_types explicitly. Files that cannot be read or
    parsed are skipped with a UserWarning. When engine is given it is merged
    in first, so engine definitions win over project duplicates.
    """
    files: List[Path] = []
    for p in paths:
        p = Path(p)
        if p.is_dir():
            files.extend(collect_universe_files(p))
        elif p.is_file():
            files.append(p)
        else:
            warnings.warn(f"Could not find {p}, skipping", UserWarning)

    loaded: List[TypeUniverse] = []
    for f in files:
        try:
            u = load_universe_file(f, strict=False)
        except (OSError, UnicodeDecodeError, UniverseFormatError) as e:
            warnings.warn(f"Could not load {f}, skipping ({e})", UserWarning)
            continue
        logger.info("Loaded %s (%d types)", f, len(u))
        loaded.append(u)

    if engine is not None:
        loaded.insert(0, engine)
    return TypeUniverse.merge(*loaded)
