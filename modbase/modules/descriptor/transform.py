"""
Structural normalization for descriptor fields.

Each transform accepts a scalar or a sequence and returns the canonical
collection, raising MalformedField for elements that cannot be coerced.
"""

from typing import Any, FrozenSet, Iterable, List, Tuple

from ...errors import MalformedField
from .models import ALL_PLATFORMS, Author, Reference


def _as_list(value: Any) -> List[Any]:
    """Wrap scalars, expand sequences, map None to an empty list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def transform_authors(value: Any) -> Tuple[Author, ...]:
    """Normalize the Author field to a tuple of Author records."""
    authors = []
    for item in _as_list(value):
        if isinstance(item, Author):
            authors.append(item)
            continue

        author = Author.from_string(item) if isinstance(item, str) else None
        if author is None:
            raise MalformedField("Author", item)
        authors.append(author)

    return tuple(authors)


def transform_arch(value: Any) -> FrozenSet[str]:
    """Normalize the Arch field to a set of architecture names."""
    arches = set()
    for item in _as_list(value):
        if not isinstance(item, str) or not item.strip():
            raise MalformedField("Arch", item)
        arches.add(item.strip())
    return frozenset(arches)


def transform_platforms(value: Any) -> FrozenSet[str]:
    """
    Normalize the Platform field to a set of lowercase platform names.

    Comma separated strings are split. An empty string means all platforms.
    """
    if value == "":
        return frozenset({ALL_PLATFORMS})

    platforms = set()
    for item in _as_list(value):
        if not isinstance(item, str):
            raise MalformedField("Platform", item)
        names = [name.strip().lower() for name in item.split(",")]
        if not all(names):
            raise MalformedField("Platform", item)
        platforms.update(names)

    # "all" alongside concrete platforms still means all of them
    if ALL_PLATFORMS in platforms:
        return frozenset({ALL_PLATFORMS})
    return frozenset(platforms)


def transform_references(value: Any) -> Tuple[Reference, ...]:
    """
    Normalize the References field to a tuple of Reference records.

    Accepts Reference records, (context, value) pairs, and bare strings,
    which become URL references.
    """
    references = []
    for item in _as_list(value):
        references.append(_to_reference(item))
    return tuple(references)


def _to_reference(item: Any) -> Reference:
    if isinstance(item, Reference):
        return item
    if isinstance(item, str) and item.strip():
        return Reference(ctx_id="URL", ctx_val=item.strip())
    if isinstance(item, (list, tuple)) and len(item) == 2 and _all_scalars(item):
        ctx_id, ctx_val = item
        return Reference(ctx_id=str(ctx_id), ctx_val=str(ctx_val))
    raise MalformedField("Ref", item)


def _all_scalars(items: Iterable[Any]) -> bool:
    return all(isinstance(i, (str, int)) and not isinstance(i, bool) for i in items)
