"""Reconcile canonical documents field by field.

:func:`merge_documents` combines a *base* and an *incoming* document:

* Records are matched by name. Names only present in *incoming* are
  introduced as they are.
* A record present in both is left alone when both copies are equal.
  Otherwise optional scalar fields take the incoming value when it is set,
  and list fields (extended description, parameters, enum values) take the
  incoming list wholesale when it is non-empty. Lists are replaced, never
  unioned.
* Categories are not carried over: the merged function set is passed
  through :func:`~scardoc.categorizer.categorize` again.

:func:`fold_documents` applies the merge over a sequence of documents.

Neither function mutates its arguments.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from pydantic import BaseModel

from scardoc.categorizer import categorize
from scardoc.models import CanonicalDocument, EnumDef, FunctionDoc, GlobalDef

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)

FUNCTION_SCALAR_FIELDS = (
    "short_description",
    "example",
    "return_description",
    "return_type",
    "source_origin",
)
FUNCTION_SEQUENCE_FIELDS = ("extended_description", "parameters")
ENUM_SEQUENCE_FIELDS = ("values",)
GLOBAL_SCALAR_FIELDS = ("description", "type", "value")


# --- Field coalescing ---


def coalesce(base: Optional[Any], incoming: Optional[Any]) -> Optional[Any]:
    """Prefer *incoming* when it is set, else keep *base*."""
    return incoming if incoming is not None else base


def coalesce_sequence(base: Sequence[Any], incoming: Sequence[Any]) -> list[Any]:
    """Take *incoming* wholesale when non-empty, else keep *base*."""
    return list(incoming) if incoming else list(base)


def merge_fields(
    base: R,
    incoming: R,
    scalars: Iterable[str] = (),
    sequences: Iterable[str] = (),
) -> R:
    """Return a copy of *base* with the named fields coalesced from *incoming*.

    Args:
        base: Record being updated.
        incoming: Record whose values take precedence.
        scalars: Optional fields merged with :func:`coalesce`.
        sequences: List fields merged with :func:`coalesce_sequence`.

    Returns:
        A new record; *base* and *incoming* are left untouched.
    """
    update: dict[str, Any] = {}
    for name in scalars:
        update[name] = coalesce(getattr(base, name), getattr(incoming, name))
    for name in sequences:
        update[name] = coalesce_sequence(getattr(base, name), getattr(incoming, name))
    return base.model_copy(update=update)


# --- Per-record rules ---


def merge_function(base: FunctionDoc, incoming: FunctionDoc) -> FunctionDoc:
    """Reconcile two records of the same function; ``name`` and ``groups`` come from *base*."""
    if base == incoming:
        return base
    return merge_fields(
        base,
        incoming,
        scalars=FUNCTION_SCALAR_FIELDS,
        sequences=FUNCTION_SEQUENCE_FIELDS,
    )


def enums_equal(a: EnumDef, b: EnumDef) -> bool:
    """Same name and the same (name, value) pairs, ignoring order."""
    return a.name == b.name and Counter(
        (v.name, v.value) for v in a.values
    ) == Counter((v.name, v.value) for v in b.values)


def merge_enum(base: EnumDef, incoming: EnumDef) -> EnumDef:
    """Replace the values of *base* with those of *incoming* unless equal or empty."""
    if enums_equal(base, incoming):
        return base
    return merge_fields(base, incoming, sequences=ENUM_SEQUENCE_FIELDS)


def merge_global(base: GlobalDef, incoming: GlobalDef) -> GlobalDef:
    if base == incoming:
        return base
    return merge_fields(base, incoming, scalars=GLOBAL_SCALAR_FIELDS)


def _reconcile(
    kind: str,
    base: Iterable[R],
    incoming: Iterable[R],
    is_equal: Callable[[R, R], bool],
    merge: Callable[[R, R], R],
) -> list[R]:
    """Merge two record collections keyed by ``name``, base order first."""
    merged: dict[str, R] = {record.name: record for record in base}  # type: ignore[attr-defined]
    for record in incoming:
        name = record.name  # type: ignore[attr-defined]
        existing = merged.get(name)
        if existing is None:
            logger.info("Introducing %s %s", kind, name)
            merged[name] = record
        elif not is_equal(existing, record):
            logger.info("Merging %s %s", kind, name)
            merged[name] = merge(existing, record)
    return list(merged.values())


# --- Documents ---


def merge_documents(base: CanonicalDocument, incoming: CanonicalDocument) -> CanonicalDocument:
    """Merge *incoming* into *base* and return a new document.

    Args:
        base: The document whose records are kept when *incoming* has
            nothing to add.
        incoming: The document whose set values take precedence.

    Returns:
        The reconciled document with categories rebuilt from the merged
        function set.

    Example::

        merged = merge_documents(load_document("old.json"), load_document("new.json"))
    """
    functions = _reconcile(
        "function",
        base.iter_functions(),
        incoming.iter_functions(),
        lambda a, b: a == b,
        merge_function,
    )
    enums = _reconcile("enum", base.enums, incoming.enums, enums_equal, merge_enum)
    globals_ = _reconcile(
        "global", base.globals, incoming.globals, lambda a, b: a == b, merge_global
    )
    return CanonicalDocument(
        categories=categorize(functions),
        enums=enums,
        globals=globals_,
    )


def fold_documents(
    documents: Sequence[CanonicalDocument],
    cumulative: bool = False,
) -> CanonicalDocument:
    """Merge an ordered sequence of documents.

    By default each step merges the raw document at position ``i - 1`` with
    the raw document at position ``i``, and the previous step's result is
    not carried forward: the outcome equals merging the last two documents.
    With ``cumulative=True`` the running result becomes the base of the
    next step, so every document contributes.

    Args:
        documents: Documents in merge order.
        cumulative: Carry the merged result forward between steps.

    Returns:
        The folded document. An empty sequence gives an empty document and a
        single document is returned unchanged.
    """
    if not documents:
        return CanonicalDocument()
    if len(documents) == 1:
        return documents[0]

    result = documents[0]
    for i in range(1, len(documents)):
        base = result if cumulative else documents[i - 1]
        logger.debug("Merging document %d of %d", i + 1, len(documents))
        result = merge_documents(base, documents[i])
    return result
