"""Node base class, NodeKind StrEnum, and the leaf property family.

A property tree is made of two kinds of element: ``PropertyGroup`` (see
``group.py``) and the leaves defined here. Leaves never own the value they
expose. Adapters close over a getter/setter pair bound to storage somewhere
else (usually an attribute of an introspected object); the two owned variants,
``BoolProperty`` and ``EnumProperty``, keep their value on the leaf itself for
hand-built trees that have no backing field.

Every node carries a ``kind`` tag so renderers can pick a widget with a plain
lookup instead of an ``isinstance`` ladder::

    widget_for = {NodeKind.NUMBER: make_slider, NodeKind.BOOLEAN: make_toggle}
    widget_for[node.kind](node)
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterator
from enum import Enum, StrEnum, auto
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from property_tree.errors import IndexOutOfRangeError, InvalidArgumentError

if TYPE_CHECKING:
    from property_tree.tree.group import PropertyGroup

__all__ = [
    "SEPARATOR",
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
    "StringPropertyAdapter",
    "ValueProperty",
]

SEPARATOR = "."

T = TypeVar("T")
N = TypeVar("N", int, float)
E = TypeVar("E", bound=Enum)


class NodeKind(StrEnum):
    """Runtime variant tag carried by every node.

    - GROUP   -> "group"   : PropertyGroup
    - NUMBER  -> "number"  : numeric leaf with an advisory [min, max] range
    - BOOLEAN -> "boolean" : bool leaf
    - STRING  -> "string"  : str leaf
    - ENUM    -> "enum"    : leaf over one Enum type
    - ACTION  -> "action"  : zero-argument callable
    """

    GROUP = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    STRING = auto()
    ENUM = auto()
    ACTION = auto()


class Node:
    """Base element of a property tree.

    The parent link is a weak reference assigned by ``PropertyGroup.add``;
    nodes never set it themselves. A node whose group has been garbage
    collected reports ``parent is None`` and behaves as a root.

    Names may not contain ``SEPARATOR``, so every path segment is one node and
    ``depth()`` always equals the separator count of ``full_path()``.
    """

    kind: ClassVar[NodeKind]

    def __init__(self, name: str) -> None:
        if SEPARATOR in name:
            msg = f"Node name must not contain {SEPARATOR!r}, got {name!r}"
            raise InvalidArgumentError(msg)
        self._name = name
        self._parent: weakref.ref[PropertyGroup] | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> PropertyGroup | None:
        """The owning group, or None for a root."""
        if self._parent is None:
            return None
        return self._parent()

    def ancestors(self) -> Iterator[PropertyGroup]:
        """Yield owning groups from the direct parent up to the root."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def full_path(self) -> str:
        """Dotted path of names from the root down to this node.

        A root's path is its own name: ``root.child.leaf``.
        """
        names = [group.name for group in self.ancestors()]
        names.reverse()
        names.append(self._name)
        return SEPARATOR.join(names)

    def depth(self) -> int:
        """Number of ancestors; a root has depth 0."""
        return sum(1 for _ in self.ancestors())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_path()!r})"


# ---------------------------------------------------------------------------
# Value leaves
# ---------------------------------------------------------------------------


class ValueProperty(Node, Generic[T]):
    """Leaf exposing ``get``/``set`` over a value held elsewhere.

    Subclasses narrow the value type and may normalise incoming values in
    ``_coerce`` before they reach the setter.

    Attributes:
        value: Read/write shorthand for ``get()`` / ``set()``.
    """

    def __init__(
        self,
        name: str,
        getter: Callable[[], T],
        setter: Callable[[T], None],
    ) -> None:
        super().__init__(name)
        self._getter = getter
        self._setter = setter

    def get(self) -> T:
        return self._getter()

    def set(self, value: T) -> None:
        self._setter(self._coerce(value))

    def _coerce(self, value: T) -> T:
        return value

    @property
    def value(self) -> T:
        return self.get()

    @value.setter
    def value(self, value: T) -> None:
        self.set(value)


class NumericProperty(ValueProperty[N]):
    """Numeric leaf with an inclusive ``[min, max]`` range.

    The range is advisory: it tells a renderer how to scale a slider and is
    not enforced by ``set``.
    """

    kind = NodeKind.NUMBER

    def __init__(
        self,
        name: str,
        min: N,  # noqa: A002
        max: N,  # noqa: A002
        getter: Callable[[], N],
        setter: Callable[[N], None],
    ) -> None:
        super().__init__(name, getter, setter)
        self._min = min
        self._max = max

    @property
    def min(self) -> N:
        return self._min

    @property
    def max(self) -> N:
        return self._max


class FloatPropertyAdapter(NumericProperty[float]):
    def _coerce(self, value: float) -> float:
        return float(value)


class IntPropertyAdapter(NumericProperty[int]):
    """Integer leaf. Incoming values are truncated with ``int()``."""

    def _coerce(self, value: int) -> int:
        return int(value)


class BoolPropertyAdapter(ValueProperty[bool]):
    kind = NodeKind.BOOLEAN

    def _coerce(self, value: bool) -> bool:
        return bool(value)


class BoolProperty(BoolPropertyAdapter):
    """Boolean leaf that owns its value.

    Useful for hand-built groups that feed flags to another system and have
    no field to bind to.
    """

    def __init__(self, name: str, value: bool = False) -> None:
        self._value = bool(value)
        super().__init__(name, self._read, self._write)

    def _read(self) -> bool:
        return self._value

    def _write(self, value: bool) -> None:
        self._value = value


class StringPropertyAdapter(ValueProperty[str]):
    kind = NodeKind.STRING

    def _coerce(self, value: str) -> str:
        return str(value)


class EnumValueProperty(ValueProperty[E]):
    """Leaf over a single ``Enum`` type.

    The member list of ``enum_type`` acts as the conversion table between a
    member, its name, and its ordinal position, so renderers can drive a
    dropdown without knowing the concrete enum.

    ``set`` accepts a member or a raw value; raw values go through
    ``enum_type(value)`` and raise ``ValueError`` when they match no member.
    """

    kind = NodeKind.ENUM

    def __init__(
        self,
        name: str,
        enum_type: type[E],
        getter: Callable[[], E],
        setter: Callable[[E], None],
    ) -> None:
        super().__init__(name, getter, setter)
        self._enum_type = enum_type

    @property
    def enum_type(self) -> type[E]:
        return self._enum_type

    def choices(self) -> list[tuple[str, E]]:
        """Return ``(name, member)`` pairs in declaration order."""
        return [(member.name, member) for member in self._enum_type]

    def set_by_name(self, member_name: str) -> None:
        """Set the value by member name. Raises ``KeyError`` for unknown names."""
        self.set(self._enum_type[member_name])

    @property
    def index(self) -> int:
        """Ordinal of the current member in declaration order."""
        return list(self._enum_type).index(self._coerce(self.get()))

    @index.setter
    def index(self, position: int) -> None:
        members = list(self._enum_type)
        if not 0 <= position < len(members):
            msg = (
                f"{self._enum_type.__name__} has {len(members)} members, "
                f"got index {position}"
            )
            raise IndexOutOfRangeError(msg)
        self.set(members[position])

    def _coerce(self, value: E) -> E:
        if isinstance(value, self._enum_type):
            return value
        return self._enum_type(value)


class EnumPropertyAdapter(EnumValueProperty[E]):
    pass


class EnumProperty(EnumValueProperty[E]):
    """Enum leaf that owns its value; defaults to the first member."""

    def __init__(
        self,
        name: str,
        enum_type: type[E],
        value: E | None = None,
    ) -> None:
        self._value: E = value if value is not None else next(iter(enum_type))
        super().__init__(name, enum_type, self._read, self._write)

    def _read(self) -> E:
        return self._value

    def _write(self, value: E) -> None:
        self._value = value


# ---------------------------------------------------------------------------
# Action leaf
# ---------------------------------------------------------------------------


class ActionProperty(Node):
    """Leaf wrapping a zero-argument callable; has no value."""

    kind = NodeKind.ACTION

    def __init__(self, name: str, action: Callable[[], object]) -> None:
        super().__init__(name)
        self._action = action

    def execute(self) -> None:
        self._action()
