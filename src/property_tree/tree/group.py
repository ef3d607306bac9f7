"""PropertyGroup: the composite node of a property tree.

A group owns an ordered list of child nodes. Ownership is single: a node can
sit in exactly one group, and the group is the only place that assigns the
child's parent link. Trees are built once and discarded; there is no removal
or reordering.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterable, Iterator
from typing import TypeVar, overload

from property_tree.errors import IndexOutOfRangeError, OwnershipError, TypeMismatchError
from property_tree.tree import paths
from property_tree.tree.nodes import Node, NodeKind

__all__ = ["PropertyGroup"]

NodeT = TypeVar("NodeT", bound=Node)


class PropertyGroup(Node):
    """Ordered, named collection of child nodes.

    Duplicate child names are allowed; path lookups return the first match in
    depth-first insertion order.

    Example::

        root = PropertyGroup("root", [
            FloatPropertyAdapter("Speed", 0.0, 10.0, get_speed, set_speed),
            PropertyGroup("Flags", [BoolProperty("Jump")]),
        ])
        root.find_by_path("root.Flags.Jump")   # -> BoolProperty
        root.at(1, PropertyGroup).name         # -> "Flags"
    """

    kind = NodeKind.GROUP

    def __init__(self, name: str, items: Iterable[Node] = ()) -> None:
        super().__init__(name)
        self._items: list[Node] = []
        for item in items:
            self.add(item)

    @property
    def items(self) -> tuple[Node, ...]:
        """Direct children in insertion order."""
        return tuple(self._items)

    def add(self, node: NodeT) -> NodeT:
        """Append ``node`` and make this group its parent.

        Returns:
            The node that was added, for chaining.

        Raises:
            OwnershipError: If ``node`` already belongs to a group, or is this
                group or one of its ancestors.
        """
        if node.parent is not None:
            msg = (
                f"{node.full_path()!r} already belongs to a group; "
                f"cannot add it to {self.full_path()!r}"
            )
            raise OwnershipError(msg)
        if node is self or any(node is group for group in self.ancestors()):
            msg = f"adding {node.name!r} to {self.full_path()!r} would create a cycle"
            raise OwnershipError(msg)
        node._parent = weakref.ref(self)
        self._items.append(node)
        return node

    @overload
    def at(self, index: int) -> Node: ...

    @overload
    def at(self, index: int, node_type: type[NodeT]) -> NodeT: ...

    def at(self, index: int, node_type: type[Node] = Node) -> Node:
        """Return the child at ``index`` narrowed to ``node_type``.

        Raises:
            IndexOutOfRangeError: If ``index`` is outside ``[0, len(self))``.
                Negative indices are rejected.
            TypeMismatchError: If the child is not an instance of ``node_type``.
        """
        if not 0 <= index < len(self._items):
            msg = f"index {index} out of range for {self.full_path()!r} ({len(self._items)} items)"
            raise IndexOutOfRangeError(msg)
        node = self._items[index]
        if not isinstance(node, node_type):
            msg = (
                f"item {index} of {self.full_path()!r} is {type(node).__name__}, "
                f"not {node_type.__name__}"
            )
            raise TypeMismatchError(msg)
        return node

    def walk(self) -> Iterator[Node]:
        """Yield every descendant depth-first in insertion order.

        The group itself is not yielded.
        """
        for child in self._items:
            yield child
            if isinstance(child, PropertyGroup):
                yield from child.walk()

    # ------------------------------------------------------------------
    # Path search (see paths.py)
    # ------------------------------------------------------------------

    def find_by_path(self, path: str) -> Node | None:
        return paths.find_by_path(self, path)

    def find_by_prefix(self, prefix: str) -> list[Node]:
        return paths.find_by_prefix(self, prefix)

    def find_by_pattern(self, pattern: str) -> list[Node]:
        return paths.find_by_pattern(self, pattern)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._items)

    def __bool__(self) -> bool:
        # Empty groups are still real nodes; don't let __len__ make them falsy.
        return True
