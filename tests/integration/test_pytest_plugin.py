"""Integration tests for the property-tree pytest plugin.

These tests verify that the assert_same_tree_shape fixture is auto-discovered
via the pytest11 entry point and behaves correctly.

NOTE: These tests require property-tree to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixture.
"""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from property_tree import BoolProperty, PropertyGroup, build_from_object
from property_tree.integrations._pytest_plugin import tree_shape
from property_tree.tree.nodes import NodeKind


@dataclass
class Door:
    open: bool = False
    width: float = 0.5


def test_tree_shape_lists_descendants() -> None:
    root = build_from_object(Door(), "door")
    assert tree_shape(root) == [
        ("door.open", NodeKind.BOOLEAN),
        ("door.width", NodeKind.NUMBER),
    ]


def test_fixture_passes_rebuilt_tree(assert_same_tree_shape: Any) -> None:
    """Rebuilding from the same object yields the same shape."""
    door = Door()
    assert_same_tree_shape(build_from_object(door, "door"), build_from_object(door, "door"))


def test_fixture_ignores_leaf_values(assert_same_tree_shape: Any) -> None:
    assert_same_tree_shape(
        build_from_object(Door(open=True), "door"), build_from_object(Door(), "door")
    )


def test_fixture_reports_first_difference(assert_same_tree_shape: Any) -> None:
    with pytest.raises(AssertionError, match=r"differ at entry 0"):
        assert_same_tree_shape(build_from_object(Door(), "a"), build_from_object(Door(), "b"))


def test_fixture_reports_size_difference(assert_same_tree_shape: Any) -> None:
    short = PropertyGroup("root", [BoolProperty("open")])
    long = PropertyGroup("root", [BoolProperty("open"), BoolProperty("locked")])
    with pytest.raises(AssertionError, match=r"differ in size"):
        assert_same_tree_shape(short, long)


def test_fixture_returns_callable(assert_same_tree_shape: Any) -> None:
    assert callable(assert_same_tree_shape)


def test_plugin_discovery() -> None:
    """Verify assert_same_tree_shape appears in pytest --fixtures output."""
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "--fixtures", "-q"],
        capture_output=True,
        text=True,
        cwd=str(Path(__file__).resolve().parents[2]),
    )
    assert "assert_same_tree_shape" in result.stdout, (
        f"assert_same_tree_shape not found in pytest --fixtures output.\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )
