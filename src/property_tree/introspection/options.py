"""BuildOptions: configuration for ObjectIntrospector.

BuildOptions is a frozen (immutable) dataclass. Derive variants with
``dataclasses.replace`` or the ``with_excluded_*`` helpers instead of mutating.
"""

from __future__ import annotations

import dataclasses
import logging
import types
from dataclasses import dataclass, field

from property_tree.tree.nodes import Node

__all__ = ["DEFAULT_EXCLUDED_TYPES", "BuildOptions"]

# Runtime objects that are never useful to inspect and would drag the builder
# into unrelated object graphs.
DEFAULT_EXCLUDED_TYPES: frozenset[type] = frozenset({Node, logging.Logger, types.ModuleType})


@dataclass(frozen=True, slots=True)
class BuildOptions:
    """Immutable configuration for building a property tree from an object.

    Attributes:
        exclude_field_names: Public fields with these names produce no node.
        exclude_types: Fields whose declared type is one of these, or a
            subclass of one, produce no node. Defaults to
            ``DEFAULT_EXCLUDED_TYPES``.
        allow_nested_objects: When False, object-typed fields are skipped
            instead of becoming nested groups.
        default_float_min / default_float_max: Range for float fields without
            a ``Range`` marker, and for vector components.
        default_int_min / default_int_max: Range for int fields without a
            ``Range`` marker.
        max_depth: Deepest nesting level the builder descends to. Nested
            objects below it are skipped with a warning.
    """

    exclude_field_names: frozenset[str] = frozenset()
    exclude_types: frozenset[type] = DEFAULT_EXCLUDED_TYPES
    allow_nested_objects: bool = True
    default_float_min: float = 0.0
    default_float_max: float = 1.0
    default_int_min: int = 0
    default_int_max: int = 100
    max_depth: int = 32
    _type_tuple: tuple[type, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Accept any iterable for the set-valued options.
        object.__setattr__(self, "exclude_field_names", frozenset(self.exclude_field_names))
        object.__setattr__(self, "exclude_types", frozenset(self.exclude_types))
        object.__setattr__(self, "_type_tuple", tuple(self.exclude_types))
        if self.default_float_min > self.default_float_max:
            msg = (
                "default_float_min must be <= default_float_max, "
                f"got {self.default_float_min} > {self.default_float_max}"
            )
            raise ValueError(msg)
        if self.default_int_min > self.default_int_max:
            msg = (
                "default_int_min must be <= default_int_max, "
                f"got {self.default_int_min} > {self.default_int_max}"
            )
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)

    def is_excluded_name(self, name: str) -> bool:
        return name in self.exclude_field_names

    def is_excluded_type(self, declared: object) -> bool:
        """True if ``declared`` is a class matching one of ``exclude_types``."""
        return isinstance(declared, type) and issubclass(declared, self._type_tuple)

    def with_excluded_fields(self, *names: str) -> BuildOptions:
        return dataclasses.replace(
            self, exclude_field_names=self.exclude_field_names | set(names)
        )

    def with_excluded_types(self, *excluded: type) -> BuildOptions:
        return dataclasses.replace(self, exclude_types=self.exclude_types | set(excluded))
