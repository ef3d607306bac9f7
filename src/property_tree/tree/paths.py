"""Path-based lookup over a group's descendants.

Three query modes operate on each descendant's dotted ``full_path()``:

- Exact:    ``find_by_path(group, "root.Movement.Speed")`` -> one node or None
- Prefix:   ``find_by_prefix(group, "root.Movement")`` -> everything strictly
            below ``root.Movement`` (the ``root.Movement`` group itself is NOT
            returned; look it up with ``find_by_path`` if you need it)
- Pattern:  ``find_by_pattern(group, "root.*.X")`` -> ``*`` matches any run of
            characters, including ``.``; the whole path must match

Results are always in depth-first insertion order and never include the group
being searched. No match is not an error: exact lookup returns None, the other
modes return an empty list.

``search`` picks one of the three modes from a free-form search term the way a
search box would.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

from cachetools import LRUCache, cached

from property_tree.tree.nodes import SEPARATOR, Node

if TYPE_CHECKING:
    from property_tree.tree.group import PropertyGroup

__all__ = [
    "SEPARATOR",
    "WILDCARD",
    "find_by_path",
    "find_by_pattern",
    "find_by_prefix",
    "iter_descendants",
    "search",
]

WILDCARD = "*"


def iter_descendants(group: PropertyGroup) -> Iterator[tuple[str, Node]]:
    """Yield ``(full_path, node)`` for every descendant of ``group``."""
    for node in group.walk():
        yield node.full_path(), node


def find_by_path(group: PropertyGroup, path: str) -> Node | None:
    """Return the first descendant whose full path equals ``path``, else None."""
    for node_path, node in iter_descendants(group):
        if node_path == path:
            return node
    return None


def find_by_prefix(group: PropertyGroup, prefix: str) -> list[Node]:
    """Return every descendant whose full path starts with ``prefix + "."``.

    The separator is part of the match, so ``"root.G"`` finds ``root.G.X`` but
    not ``root.GZ``. An empty prefix returns no matches rather than everything.
    """
    if not prefix:
        return []
    head = prefix + SEPARATOR
    return [node for node_path, node in iter_descendants(group) if node_path.startswith(head)]


def find_by_pattern(group: PropertyGroup, pattern: str) -> list[Node]:
    """Return every descendant whose full path matches the wildcard ``pattern``.

    Matching is case-sensitive and anchored at both ends. ``*`` is the only
    special character; everything else, including ``.``, ``?`` and ``[``,
    matches literally.
    """
    if not pattern:
        return []
    compiled = _compile_pattern(pattern)
    return [node for node_path, node in iter_descendants(group) if compiled.fullmatch(node_path)]


def search(group: PropertyGroup, term: str) -> list[Node]:
    """Dispatch a search-box term to the matching lookup mode.

    - contains ``*``     -> ``find_by_pattern``
    - ends with ``.``    -> ``find_by_prefix`` with trailing dots stripped
    - anything else      -> ``find_by_path`` (zero or one result)

    Surrounding whitespace is ignored; an empty term returns no matches.
    """
    term = term.strip()
    if not term:
        return []
    if WILDCARD in term:
        return find_by_pattern(group, term)
    if term.endswith(SEPARATOR):
        return find_by_prefix(group, term.rstrip(SEPARATOR))
    node = find_by_path(group, term)
    return [node] if node is not None else []


@cached(cache=LRUCache(maxsize=256))
def _compile_pattern(pattern: str) -> re.Pattern[str]:
    parts = (re.escape(part) for part in pattern.split(WILDCARD))
    return re.compile(".*".join(parts), re.DOTALL)
