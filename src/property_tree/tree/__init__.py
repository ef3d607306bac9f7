"""Tree subpackage: the property tree data model and path lookup.

Re-exports the public API for the tree module:
- Node / NodeKind: base element and its runtime variant tag
- PropertyGroup: ordered composite node owning its children
- Leaf family: numeric, bool, string, enum and action properties
- find_by_path / find_by_prefix / find_by_pattern / search: path lookup
"""

from property_tree.tree.group import PropertyGroup
from property_tree.tree.nodes import (
    ActionProperty,
    BoolProperty,
    BoolPropertyAdapter,
    EnumProperty,
    EnumPropertyAdapter,
    EnumValueProperty,
    FloatPropertyAdapter,
    IntPropertyAdapter,
    Node,
    NodeKind,
    NumericProperty,
    StringPropertyAdapter,
    ValueProperty,
)
from property_tree.tree.paths import (
    find_by_path,
    find_by_pattern,
    find_by_prefix,
    iter_descendants,
    search,
)

__all__ = [
    "ActionProperty",
    "BoolProperty",
    "BoolPropertyAdapter",
    "EnumProperty",
    "EnumPropertyAdapter",
    "EnumValueProperty",
    "FloatPropertyAdapter",
    "IntPropertyAdapter",
    "Node",
    "NodeKind",
    "NumericProperty",
    "PropertyGroup",
    "StringPropertyAdapter",
    "ValueProperty",
    "find_by_path",
    "find_by_pattern",
    "find_by_prefix",
    "iter_descendants",
    "search",
]
