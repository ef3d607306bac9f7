"""ObjectIntrospector: converts an object's fields into a PropertyGroup tree.

Fields come from the target's schema (see ``schema.py``). Each exposed field is
mapped to a node by its declared type; leaves close over the live object, so
reading a leaf always reflects the object's current state and writing a leaf
writes the object's attribute.

Dispatch order (first match wins):

    Enum subclass          -> EnumPropertyAdapter
    bool / numpy.bool_     -> BoolPropertyAdapter
    float / numpy.floating -> FloatPropertyAdapter
    int / numpy.integer    -> IntPropertyAdapter
    str                    -> StringPropertyAdapter
    Vector2 / Vector3      -> group of X, Y(, Z) float leaves
    Color                  -> group of R, G, B, A float leaves in [0, 1]
    other plain class      -> nested group built from the field's value
    anything else          -> skipped

Enum comes first because IntEnum and StrEnum members are also ints and strs;
bool comes before int because bool subclasses int.

A field whose current value is None produces no node, whatever its type.

Building is best effort: a field whose node cannot be built is logged and left
out, and never aborts the rest of the tree.
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from collections.abc import Collection
from enum import Enum
from functools import partial
from typing import Any

import numpy as np

from property_tree.errors import InvalidArgumentError
from property_tree.introspection.metadata import FieldMetadata, FieldSpec
from property_tree.introspection.options import BuildOptions
from property_tree.introspection.schema import schema_for, unwrap_annotation
from property_tree.tree.group import PropertyGroup
from property_tree.tree.nodes import (
    BoolPropertyAdapter,
    EnumPropertyAdapter,
    FloatPropertyAdapter,
    IntPropertyAdapter,
    Node,
    StringPropertyAdapter,
)
from property_tree.values import Color, Vector2, Vector3

__all__ = ["DEFAULT_GROUP_NAME", "ObjectIntrospector"]

logger = logging.getLogger(__name__)

DEFAULT_GROUP_NAME = "Root"

# Component attribute on the value type -> leaf name.
_VECTOR2_COMPONENTS = ("x", "y")
_VECTOR3_COMPONENTS = ("x", "y", "z")
_COLOR_COMPONENTS = ("r", "g", "b", "a")

# Declared types that are never recursed into even though they are classes.
_CONTAINER_TYPES: tuple[type, ...] = (Collection, bytes, bytearray, memoryview, np.ndarray)

# Declared types that map to a leaf or a composite group of leaves.
_LEAF_TYPES: tuple[type, ...] = (
    Enum,
    bool,
    np.bool_,
    float,
    np.floating,
    int,
    np.integer,
    str,
    Vector2,
    Vector3,
    Color,
)


class ObjectIntrospector:
    """Builds a PropertyGroup mirroring an object's exposed fields.

    Example::

        @dataclass
        class Player:
            speed: Annotated[float, Range(0, 10)] = 5.0
            position: Vector3 = Vector3()

        player = Player()
        tree = ObjectIntrospector().build(player, "player")
        tree.find_by_path("player.position.X").set(2.0)
        player.position   # Vector3(x=2.0, y=0.0, z=0.0)
    """

    def __init__(self, options: BuildOptions | None = None) -> None:
        self._options: BuildOptions = options if options is not None else BuildOptions()

    @property
    def options(self) -> BuildOptions:
        return self._options

    def build(self, target: Any, group_name: str = DEFAULT_GROUP_NAME) -> PropertyGroup:
        """Build a property tree from ``target``.

        Args:
            target:     The object to inspect. Its fields stay the storage
                        behind every produced leaf.
            group_name: Name of the returned root group.

        Returns:
            A root ``PropertyGroup`` named ``group_name``.

        Raises:
            InvalidArgumentError: If ``target`` is None or ``group_name``
                contains the path separator.
        """
        if target is None:
            msg = "target must not be None"
            raise InvalidArgumentError(msg)

        root = PropertyGroup(group_name)
        logger.debug("Building property tree %r from %s", group_name, type(target).__qualname__)
        self._populate(target, root, [id(target)])
        logger.debug(
            "Built property tree %r with %d nodes", group_name, sum(1 for _ in root.walk())
        )
        return root

    # ------------------------------------------------------------------
    # Field discovery
    # ------------------------------------------------------------------

    def _populate(self, target: Any, group: PropertyGroup, active: list[int]) -> None:
        for spec in self._exposed_fields(target):
            try:
                node = self._create_node(target, spec, active)
            except Exception as exc:
                logger.warning("Failed to create property for field %s: %s", spec.name, exc)
                continue
            if node is not None:
                group.add(node)

    def _exposed_fields(self, target: Any) -> list[FieldSpec]:
        """Filter the target's schema down to the fields that become nodes.

        SerializeField-marked fields are always exposed. Otherwise only public
        fields are, minus those excluded by name or declared type.
        """
        exposed: list[FieldSpec] = []
        for spec in schema_for(target):
            spec = _normalized(spec)
            if spec.metadata.serialized:
                exposed.append(spec)
                continue
            if not spec.is_public:
                continue
            if self._options.is_excluded_name(spec.name):
                continue
            if self._options.is_excluded_type(spec.annotation):
                continue
            exposed.append(spec)
        return exposed

    # ------------------------------------------------------------------
    # Field -> node mapping
    # ------------------------------------------------------------------

    def _create_node(self, target: Any, spec: FieldSpec, active: list[int]) -> Node | None:
        declared = spec.annotation
        name = spec.display_name
        if typing.get_origin(declared) is not None or not isinstance(declared, type):
            return None
        if not issubclass(declared, _LEAF_TYPES):
            return self._nested_group(target, spec, active) if _is_nestable(declared) else None
        # A leaf over an absent value would fail on every read.
        if spec.read(target) is None:
            logger.debug("Skipping field %s: value is None", spec.name)
            return None

        if issubclass(declared, Enum):
            return EnumPropertyAdapter(
                name, declared, partial(spec.read, target), partial(spec.write, target)
            )
        if issubclass(declared, (bool, np.bool_)):
            return BoolPropertyAdapter(
                name,
                lambda: bool(spec.read(target)),
                lambda value: spec.write(target, declared(value)),
            )
        if issubclass(declared, (float, np.floating)):
            low, high = self._float_range(spec)
            return FloatPropertyAdapter(
                name,
                low,
                high,
                lambda: float(spec.read(target)),
                lambda value: spec.write(target, declared(value)),
            )
        if issubclass(declared, (int, np.integer)):
            low, high = self._int_range(spec)
            return IntPropertyAdapter(
                name,
                low,
                high,
                lambda: int(spec.read(target)),
                lambda value: spec.write(target, declared(value)),
            )
        if issubclass(declared, str):
            return StringPropertyAdapter(
                name, partial(spec.read, target), partial(spec.write, target)
            )
        if issubclass(declared, Vector2):
            low, high = self._float_range(spec)
            return _component_group(name, target, spec, _VECTOR2_COMPONENTS, low, high)
        if issubclass(declared, Vector3):
            low, high = self._float_range(spec)
            return _component_group(name, target, spec, _VECTOR3_COMPONENTS, low, high)
        if issubclass(declared, Color):
            return _component_group(name, target, spec, _COLOR_COMPONENTS, 0.0, 1.0)
        return None

    def _nested_group(
        self, target: Any, spec: FieldSpec, active: list[int]
    ) -> PropertyGroup | None:
        options = self._options
        if not options.allow_nested_objects:
            return None
        # Exclusions apply to nesting even for SerializeField-marked fields.
        if options.is_excluded_name(spec.name) or options.is_excluded_type(spec.annotation):
            return None

        value = spec.read(target)
        if value is None:
            return None
        if id(value) in active:
            logger.warning(
                "Skipping field %s: %s is already being inspected higher up the tree",
                spec.name,
                type(value).__qualname__,
            )
            return None
        if len(active) >= options.max_depth:
            logger.warning(
                "Skipping field %s: nesting deeper than max_depth=%d", spec.name, options.max_depth
            )
            return None

        group = PropertyGroup(spec.display_name)
        active.append(id(value))
        try:
            self._populate(value, group, active)
        finally:
            active.pop()
        return group

    def _float_range(self, spec: FieldSpec) -> tuple[float, float]:
        range_ = spec.metadata.range
        if range_ is None:
            return self._options.default_float_min, self._options.default_float_max
        return float(range_.min), float(range_.max)

    def _int_range(self, spec: FieldSpec) -> tuple[int, int]:
        range_ = spec.metadata.range
        if range_ is None:
            return self._options.default_int_min, self._options.default_int_max
        return int(range_.min), int(range_.max)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _normalized(spec: FieldSpec) -> FieldSpec:
    """Unwrap Annotated / Optional on the declared type, folding in markers."""
    base, extras = unwrap_annotation(spec.annotation)
    if base is spec.annotation and not extras:
        return spec
    metadata = FieldMetadata.from_markers(extras).merged(spec.metadata)
    return dataclasses.replace(spec, annotation=base, metadata=metadata)


def _is_nestable(declared: type) -> bool:
    if declared.__module__ == "builtins":
        return False
    return not issubclass(declared, _CONTAINER_TYPES)


def _component_group(
    name: str,
    target: Any,
    spec: FieldSpec,
    components: tuple[str, ...],
    low: float,
    high: float,
) -> PropertyGroup:
    group = PropertyGroup(name)
    for component in components:
        group.add(
            FloatPropertyAdapter(
                component.upper(),
                low,
                high,
                partial(_read_component, target, spec, component),
                partial(_write_component, target, spec, component),
            )
        )
    return group


def _read_component(target: Any, spec: FieldSpec, component: str) -> float:
    return float(getattr(spec.read(target), component))


def _write_component(target: Any, spec: FieldSpec, component: str, value: float) -> None:
    # Read-modify-write: the value types are immutable, so build a copy with one
    # component changed and assign the whole value back.
    current = spec.read(target)
    spec.write(target, dataclasses.replace(current, **{component: value}))
