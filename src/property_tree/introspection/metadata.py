"""Per-field metadata markers and the FieldSpec schema entry.

Markers are plain frozen dataclasses. They can be attached to a field in two
ways, both resolved once when a class's schema is derived:

    class Player:
        speed: Annotated[float, Range(0, 10), Header("Move Speed")] = 5.0
        _seed: Annotated[int, SerializeField()] = 0

    @dataclass
    class Light:
        intensity: float = field(default=1.0, metadata={METADATA_KEY: Range(0, 8)})

A ``FieldSpec`` is one row of a schema: the field name, its declared type, its
resolved ``FieldMetadata`` and an optional accessor pair. Without accessors the
spec reads and writes the attribute of the same name.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "METADATA_KEY",
    "FieldMetadata",
    "FieldSpec",
    "Header",
    "Range",
    "SerializeField",
    "Tooltip",
]

# Key under which markers are looked up in dataclasses.field(metadata=...).
METADATA_KEY = "property_tree"


@dataclass(frozen=True, slots=True)
class Range:
    """Inclusive numeric range for a float or int field."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            msg = f"Range min must be <= max, got {self.min} > {self.max}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Header:
    """Display name taking precedence over Tooltip and the field name."""

    text: str


@dataclass(frozen=True, slots=True)
class Tooltip:
    """Descriptive text; used as the display name when no Header is given."""

    text: str


@dataclass(frozen=True, slots=True)
class SerializeField:
    """Exposes a private field and exempts it from the build's exclusion lists."""


@dataclass(frozen=True, slots=True)
class FieldMetadata:
    """Markers resolved for one field. Later markers of the same kind win."""

    range: Range | None = None
    header: str | None = None
    tooltip: str | None = None
    serialized: bool = False

    @classmethod
    def from_markers(cls, markers: Iterable[object]) -> FieldMetadata:
        """Fold markers into a FieldMetadata, ignoring unrelated objects.

        Unrelated objects are expected here: ``Annotated`` extras may carry
        metadata meant for other libraries.
        """
        range_: Range | None = None
        header: str | None = None
        tooltip: str | None = None
        serialized = False
        for marker in markers:
            if isinstance(marker, Range):
                range_ = marker
            elif isinstance(marker, Header):
                header = marker.text
            elif isinstance(marker, Tooltip):
                tooltip = marker.text
            elif isinstance(marker, SerializeField):
                serialized = True
        return cls(range=range_, header=header, tooltip=tooltip, serialized=serialized)

    def merged(self, other: FieldMetadata) -> FieldMetadata:
        """Return metadata where values set in ``other`` override this one."""
        return FieldMetadata(
            range=other.range if other.range is not None else self.range,
            header=other.header if other.header is not None else self.header,
            tooltip=other.tooltip if other.tooltip is not None else self.tooltip,
            serialized=self.serialized or other.serialized,
        )


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One exposed field of an introspectable type.

    Attributes:
        name:       Attribute name on the target object.
        annotation: Declared type used to choose the produced node.
        metadata:   Range / display-name / serialization markers.
        getter:     Optional ``getter(target) -> value``; defaults to getattr.
        setter:     Optional ``setter(target, value)``; defaults to setattr.
    """

    name: str
    annotation: Any
    metadata: FieldMetadata = field(default_factory=FieldMetadata)
    getter: Callable[[Any], Any] | None = None
    setter: Callable[[Any, Any], None] | None = None

    @property
    def display_name(self) -> str:
        """Header text, else tooltip text, else the raw field name."""
        if self.metadata.header is not None:
            return self.metadata.header
        if self.metadata.tooltip is not None:
            return self.metadata.tooltip
        return self.name

    @property
    def is_public(self) -> bool:
        return not self.name.startswith("_")

    def read(self, target: Any) -> Any:
        if self.getter is not None:
            return self.getter(target)
        return getattr(target, self.name)

    def write(self, target: Any, value: Any) -> None:
        if self.setter is not None:
            self.setter(target, value)
        else:
            setattr(target, self.name, value)
