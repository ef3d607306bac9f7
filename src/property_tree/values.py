"""Small composite value types recognised by the introspector.

Vector2, Vector3 and Color are immutable value types: a field holding one is
edited by building a modified copy and assigning it back, which is exactly
what the per-component leaves produced by ``ObjectIntrospector`` do::

    current = getattr(target, "position")
    setattr(target, "position", dataclasses.replace(current, x=2.0))
"""

from __future__ import annotations

from dataclasses import astuple, dataclass

__all__ = ["Color", "Vector2", "Vector3"]


@dataclass(frozen=True, slots=True)
class Vector2:
    x: float = 0.0
    y: float = 0.0

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True, slots=True)
class Color:
    """RGBA color with channels normalised to [0, 1].

    Channels are not clamped on construction.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return astuple(self)
