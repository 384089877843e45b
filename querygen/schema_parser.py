"""Discover entities and accessor bindings from a schema source.

Handles:
- Static descriptions (JSON: entities + accessors keyed by type name)
- Live containers (entity registry + annotated collection properties)
- Zero entities or zero accessors (valid, produce empty tuples)
- Duplicate entity shapes (rejected)
"""

from __future__ import annotations

import logging
import typing
from typing import Any, Iterable, Protocol

from .errors import SchemaError
from .model import AccessorBinding, EntityDescriptor, SchemaSnapshot

logger = logging.getLogger(__name__)


class SchemaSource(Protocol):
    """Anything that can enumerate entities and the accessors exposing them."""

    def entities(self) -> Iterable[EntityDescriptor]: ...

    def bindings(self) -> Iterable[AccessorBinding]: ...


def _require_name(item: Any, kind: str, index: int) -> str:
    if not isinstance(item, dict):
        raise SchemaError(f"{kind}[{index}] must be an object")
    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        raise SchemaError(f"{kind}[{index}] is missing a name")
    return name


def _items(description: dict[str, Any], kind: str) -> list[Any]:
    items = description.get(kind, [])
    if not isinstance(items, list):
        raise SchemaError(f"{kind} must be a list, got {type(items).__name__}")
    return items


class StaticSchemaSource:
    """Schema source backed by a JSON-like description.

    Entity shapes are type names; an entity without an explicit ``type`` is
    identified by its name. Accessors reference shapes through ``elementType``.
    """

    def __init__(self, description: dict[str, Any]) -> None:
        if not isinstance(description, dict):
            raise SchemaError("Schema description must be an object")
        self._description = description

    def entities(self) -> list[EntityDescriptor]:
        result = []
        for i, item in enumerate(_items(self._description, "entities")):
            name = _require_name(item, "entities", i)
            shape = item.get("type")
            if shape is None:
                shape = name
            elif not isinstance(shape, str) or not shape.strip():
                raise SchemaError(f"entities[{i}] ({name}) has an invalid type: {shape!r}")
            result.append(EntityDescriptor(name=name, shape=shape))
        return result

    def bindings(self) -> list[AccessorBinding]:
        result = []
        for i, item in enumerate(_items(self._description, "accessors")):
            name = _require_name(item, "accessors", i)
            element = item.get("elementType")
            if not isinstance(element, str) or not element.strip():
                raise SchemaError(f"accessors[{i}] ({name}) is missing an elementType")
            result.append(AccessorBinding(name=name, element_shape=element))
        return result


def _element_type(hint: Any) -> type | None:
    """Return T for a single-argument generic like Query[T] or list[T]."""
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if not isinstance(origin, type) or len(args) != 1:
        return None
    return args[0] if isinstance(args[0], type) else None


class ContainerSchemaSource:
    """Schema source that introspects a live container object.

    Entities come from the container's ``entity_types`` registry; accessors
    are the public annotated attributes of the container class whose type is
    a collection of exactly one class.
    """

    def __init__(self, container: Any) -> None:
        self._container = container

    def entities(self) -> list[EntityDescriptor]:
        registry = getattr(self._container, "entity_types", None)
        if registry is None:
            raise SchemaError(
                f"{type(self._container).__name__} has no entity_types registry"
            )
        result = []
        for t in registry:
            if not isinstance(t, type):
                raise SchemaError(f"entity_types contains a non-class entry: {t!r}")
            result.append(EntityDescriptor(name=t.__name__, shape=t))
        return result

    def bindings(self) -> list[AccessorBinding]:
        try:
            hints = typing.get_type_hints(type(self._container))
        except NameError as exc:
            raise SchemaError(
                f"Cannot resolve annotations of {type(self._container).__name__}: {exc}"
            ) from exc

        result = []
        for name, hint in hints.items():
            if name.startswith("_"):
                continue
            element = _element_type(hint)
            if element is None:
                continue
            result.append(AccessorBinding(name=name, element_shape=element))
        return result


def read_schema(source: SchemaSource, schema_name: str = "-") -> SchemaSnapshot:
    """Take an immutable snapshot of a schema source.

    ``schema_name`` only labels the log lines.
    """
    entities = tuple(source.entities())
    bindings = tuple(source.bindings())

    seen: dict[Any, str] = {}
    for entity in entities:
        if entity.shape in seen:
            raise SchemaError(
                f"Entity {entity.name!r} duplicates the shape of {seen[entity.shape]!r}"
            )
        seen[entity.shape] = entity.name

    logger.info(
        "Read schema: %d entities, %d accessors", len(entities), len(bindings),
        extra={"schema": schema_name},
    )
    return SchemaSnapshot(entities=entities, bindings=bindings)
