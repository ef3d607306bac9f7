"""property-tree - expose an object's state as a searchable tree of typed properties."""

from __future__ import annotations

import logging

from property_tree.api import build_from_object, search
from property_tree.errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    OwnershipError,
    PropertyTreeError,
    TypeMismatchError,
)
from property_tree.introspection import (
    BuildOptions,
    FieldSpec,
    Header,
    ObjectIntrospector,
    Range,
    SerializeField,
    Tooltip,
    register_schema,
)
from property_tree.tree import (
    ActionProperty,
    BoolProperty,
    BoolPropertyAdapter,
    EnumProperty,
    EnumPropertyAdapter,
    FloatPropertyAdapter,
    IntPropertyAdapter,
    Node,
    NodeKind,
    NumericProperty,
    PropertyGroup,
    StringPropertyAdapter,
    ValueProperty,
)
from property_tree.values import Color, Vector2, Vector3

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "ActionProperty",
    "BoolProperty",
    "BoolPropertyAdapter",
    "BuildOptions",
    "Color",
    "EnumProperty",
    "EnumPropertyAdapter",
    "FieldSpec",
    "FloatPropertyAdapter",
    "Header",
    "IndexOutOfRangeError",
    "IntPropertyAdapter",
    "InvalidArgumentError",
    "Node",
    "NodeKind",
    "NumericProperty",
    "ObjectIntrospector",
    "OwnershipError",
    "PropertyGroup",
    "PropertyTreeError",
    "Range",
    "SerializeField",
    "StringPropertyAdapter",
    "Tooltip",
    "TypeMismatchError",
    "ValueProperty",
    "Vector2",
    "Vector3",
    "build_from_object",
    "register_schema",
    "search",
]
