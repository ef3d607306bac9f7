"""pytest plugin for property-tree.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from property_tree.tree.group import PropertyGroup
from property_tree.tree.nodes import NodeKind


def tree_shape(group: PropertyGroup) -> list[tuple[str, NodeKind]]:
    """Return ``(full_path, kind)`` for every descendant, depth-first.

    Two trees with equal shapes have the same names, node variants and
    ordering; leaf values are not compared.
    """
    return [(node.full_path(), node.kind) for node in group.walk()]


@pytest.fixture(scope="session")
def assert_same_tree_shape() -> Any:
    """Fixture that returns a callable tree-shape asserter.

    Usage in tests::

        def test_rebuild_is_stable(assert_same_tree_shape):
            first = build_from_object(player)
            second = build_from_object(player)
            assert_same_tree_shape(first, second)

    Returns:
        A callable ``_assert(actual, expected) -> None`` that raises
        ``AssertionError`` listing the first differing entry.
    """

    def _assert(actual: PropertyGroup, expected: PropertyGroup) -> None:
        actual_shape = [(actual.name, actual.kind), *tree_shape(actual)]
        expected_shape = [(expected.name, expected.kind), *tree_shape(expected)]
        if actual_shape == expected_shape:
            return
        for position, (got, want) in enumerate(zip(actual_shape, expected_shape)):
            if got != want:
                raise AssertionError(
                    f"Property trees differ at entry {position}:\n"
                    f"  actual:   {got}\n"
                    f"  expected: {want}"
                )
        raise AssertionError(
            f"Property trees differ in size: "
            f"actual has {len(actual_shape)} entries, expected {len(expected_shape)}"
        )

    return _assert
