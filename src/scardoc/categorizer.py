"""Group functions into categories by a name-derived key.

The key of a function is, in order of preference:

1. the text before the first ``_`` (``Util_ScarPos`` -> ``Util``),
2. the text before the first ``:`` (``Player:GetName`` -> ``Player``),
3. its first group tag,
4. ``Other``.

Categories are always rebuilt from a flat function collection; the merger
calls :func:`categorize` again after every merge rather than updating
categories in place.
"""

from __future__ import annotations

from typing import Iterable

from scardoc.models import Category, FunctionDoc

FALLBACK_CATEGORY = "Other"


def category_key(function: FunctionDoc) -> str:
    """Return the category name for *function*."""
    name = function.name
    for separator in ("_", ":"):
        head, sep, _ = name.partition(separator)
        if sep:
            return head
    if function.groups:
        return function.groups[0]
    return FALLBACK_CATEGORY


def categorize(functions: Iterable[FunctionDoc]) -> list[Category]:
    """Partition *functions* into categories.

    Args:
        functions: Flat function collection with unique names.

    Returns:
        Non-empty categories sorted by name. Within a category, functions
        keep their input order.
    """
    buckets: dict[str, list[FunctionDoc]] = {}
    for function in functions:
        buckets.setdefault(category_key(function), []).append(function)

    return [
        Category(name=name, functions=members)
        for name, members in sorted(buckets.items())
        if members
    ]
