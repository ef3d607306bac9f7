"""Exception types raised by property-tree.

Every error derives from ``PropertyTreeError`` and from the builtin exception
a caller would naturally catch for the same mistake, so ``except IndexError``
keeps working around ``PropertyGroup.at()``.

Field-level build failures inside the introspector are not represented here:
they are logged and the field is skipped.
"""

from __future__ import annotations

__all__ = [
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "OwnershipError",
    "PropertyTreeError",
    "TypeMismatchError",
]


class PropertyTreeError(Exception):
    """Base class for all property-tree errors."""


class InvalidArgumentError(PropertyTreeError, ValueError):
    """A required argument was missing (e.g. a ``None`` build target)."""


class TypeMismatchError(PropertyTreeError, TypeError):
    """A node was narrowed to a variant it is not an instance of."""


class IndexOutOfRangeError(PropertyTreeError, IndexError):
    """A child index was outside ``[0, len(items))``."""


class OwnershipError(PropertyTreeError, ValueError):
    """A node was added to a second group, or adding it would form a cycle."""
