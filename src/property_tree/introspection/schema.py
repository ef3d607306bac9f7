"""Field schemas: explicit registration plus annotation-derived fallback.

The introspector never scans objects ad hoc. It asks ``schema_for(target)``
for a list of ``FieldSpec`` rows, which come from, in order of precedence:

1. A schema registered with ``register_schema`` for the target's class or the
   nearest registered base class. Registered schemas are used verbatim.
2. A schema derived from the class's type annotations (dataclass fields,
   ``Annotated`` markers, ``field(metadata=...)`` markers). Derivation runs once
   per class; results are kept in an LRU cache.
3. Instance attributes found in ``vars(target)`` that have no annotation,
   typed by their current value. Only added to derived schemas.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import types
import typing
from collections.abc import Iterable
from typing import Annotated, Any, ClassVar, Union

from cachetools import LRUCache, cached

from property_tree.introspection.metadata import METADATA_KEY, FieldMetadata, FieldSpec

__all__ = [
    "clear_schema_cache",
    "derive_schema",
    "register_schema",
    "registered_schema",
    "schema_for",
    "unregister_schema",
    "unwrap_annotation",
]

logger = logging.getLogger(__name__)

_registry: dict[type, tuple[FieldSpec, ...]] = {}
_derived: LRUCache[Any, tuple[FieldSpec, ...]] = LRUCache(maxsize=512)


def register_schema(cls: type, specs: Iterable[FieldSpec]) -> None:
    """Register an explicit schema for ``cls`` and its subclasses.

    Replaces any schema previously registered for the same class.
    """
    _registry[cls] = tuple(specs)


def unregister_schema(cls: type) -> None:
    _registry.pop(cls, None)


def registered_schema(cls: type) -> tuple[FieldSpec, ...] | None:
    """Return the schema registered for ``cls`` or its nearest base, if any."""
    for klass in cls.__mro__:
        if klass in _registry:
            return _registry[klass]
    return None


def clear_schema_cache() -> None:
    """Drop every derived schema; registered schemas are kept."""
    _derived.clear()


def unwrap_annotation(annotation: Any) -> tuple[Any, list[object]]:
    """Strip ``Annotated`` and ``X | None`` wrappers.

    Returns:
        ``(base_type, extras)`` where extras are the collected ``Annotated``
        metadata objects, outermost first. Unions of more than one non-None
        member are returned unchanged.
    """
    extras: list[object] = []
    while True:
        origin = typing.get_origin(annotation)
        if origin is Annotated:
            extras.extend(annotation.__metadata__)
            annotation = annotation.__origin__
            continue
        if origin is Union or origin is types.UnionType:
            members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
            if len(members) == 1:
                annotation = members[0]
                continue
        return annotation, extras


@cached(cache=_derived)
def derive_schema(cls: type) -> tuple[FieldSpec, ...]:
    """Build a schema from the annotations declared on ``cls`` and its bases.

    Dataclasses contribute only their fields, in field order, with markers from
    ``field(metadata={METADATA_KEY: ...})``. ``ClassVar`` annotations are
    skipped.
    """
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except Exception as exc:
        logger.warning(
            "Could not resolve type hints for %s, falling back to raw annotations: %s",
            cls.__qualname__,
            exc,
        )
        hints = _raw_annotations(cls)

    dataclass_fields: dict[str, dataclasses.Field[Any]] | None = None
    if dataclasses.is_dataclass(cls):
        dataclass_fields = {f.name: f for f in dataclasses.fields(cls)}

    specs: list[FieldSpec] = []
    for name, hint in hints.items():
        if typing.get_origin(hint) is ClassVar:
            continue
        markers: list[object] = []
        if dataclass_fields is not None:
            dc_field = dataclass_fields.get(name)
            if dc_field is None:
                continue
            markers.extend(_field_markers(dc_field))
        base, extras = unwrap_annotation(hint)
        metadata = FieldMetadata.from_markers([*extras, *markers])
        specs.append(FieldSpec(name=name, annotation=base, metadata=metadata))
    return tuple(specs)


def schema_for(target: Any) -> list[FieldSpec]:
    """Return the field schema the introspector should use for ``target``."""
    cls = type(target)
    registered = registered_schema(cls)
    if registered is not None:
        return list(registered)

    specs = list(derive_schema(cls))
    known = {spec.name for spec in specs}
    for name, value in getattr(target, "__dict__", {}).items():
        if name in known:
            continue
        specs.append(FieldSpec(name=name, annotation=type(value)))
    return specs


def _field_markers(dc_field: dataclasses.Field[Any]) -> list[object]:
    raw = dc_field.metadata.get(METADATA_KEY)
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [raw]


def _raw_annotations(cls: type) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        merged.update(inspect.get_annotations(klass))
    return merged
