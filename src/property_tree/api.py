"""Public API functions for property-tree.

Thin wrappers for the two things most callers do: turn an object into a tree,
and run a search-box query against a tree. Each ``build_from_object`` call uses
a fresh ``ObjectIntrospector``, so calls never share state beyond the per-class
schema cache.
"""

from __future__ import annotations

from typing import Any

from property_tree.introspection.builder import DEFAULT_GROUP_NAME, ObjectIntrospector
from property_tree.introspection.options import BuildOptions
from property_tree.tree import paths
from property_tree.tree.group import PropertyGroup
from property_tree.tree.nodes import Node

__all__ = ["build_from_object", "search"]


def build_from_object(
    target: Any,
    group_name: str = DEFAULT_GROUP_NAME,
    options: BuildOptions | None = None,
) -> PropertyGroup:
    """Build a property tree whose leaves read and write ``target``'s fields.

    Args:
        target:     Object to inspect. Must not be None.
        group_name: Name of the root group. Defaults to ``"Root"``.
        options:    Build configuration. Defaults to ``BuildOptions()`` when None.

    Returns:
        The root ``PropertyGroup``.

    Raises:
        InvalidArgumentError: If ``target`` is None.
    """
    return ObjectIntrospector(options).build(target, group_name)


def search(group: PropertyGroup, term: str) -> list[Node]:
    """Search ``group``'s descendants with a search-box style term.

    ``"root.*.X"`` is a wildcard pattern, ``"root.Movement."`` lists everything
    under ``root.Movement``, and any other term is an exact path.

    Returns:
        Matching nodes in depth-first order; empty when nothing matches.
    """
    return paths.search(group, term)
