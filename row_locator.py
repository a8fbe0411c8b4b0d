"""Row lookups against a materialized window.

A row can be referred to three ways: by its key, by its logical index, or by
its window-local row id. Each of these can go stale independently when the
window moves or the data changes, so each gets its own lookup, and
``find_in_range`` reconciles a possibly stale reference against the visible
range using them in a fixed order: key, then index, then id.
"""
import logging
import operator
from dataclasses import dataclass
from itertools import islice
from typing import Any, Callable, Hashable, Optional, Tuple

from collated_view import CollatedView

logger = logging.getLogger(__name__)

KeyEqual = Callable[[Any, Any], bool]


@dataclass(frozen=True)
class Triple:
    """A fully resolved identity of one row at one point in time."""

    key: Any
    id: Hashable
    index: int


class RangeResponse:
    """Outcome of reconciling a row reference against the visible range."""


@dataclass(frozen=True)
class Yes(RangeResponse):
    pass


@dataclass(frozen=True)
class NoButThisOneIs(RangeResponse):
    triple: Triple


@dataclass(frozen=True)
class Indeterminate(RangeResponse):
    pass


def window_bounds(view: CollatedView) -> Tuple[int, int]:
    """Half-open ``(start, end)`` logical indices of the resident window."""
    return view.window_start, view.window_start + view.window_length


def find_by(view: CollatedView, predicate) -> Optional[Triple]:
    index = view.window_start
    for row_id, (key, _) in view.rows.items():
        if predicate(key, row_id, index):
            return Triple(key=key, id=row_id, index=index)
        index += 1
    return None


def find_by_key(
    view: CollatedView, key, key_equal: KeyEqual = operator.eq
) -> Optional[Triple]:
    return find_by(view, lambda k, _id, _index: key_equal(k, key))


def find_by_index(view: CollatedView, index: int) -> Optional[Triple]:
    rank = index - view.window_start
    if rank < 0 or rank >= view.window_length:
        return None
    # islice stops at the target rank instead of walking the whole window
    for row_id, (key, _) in islice(view.rows.items(), rank, rank + 1):
        return Triple(key=key, id=row_id, index=index)
    return None


def find_by_id(view: CollatedView, row_id: Hashable) -> Optional[Triple]:
    rank = view.rank_of(row_id)
    if rank is None:
        return None
    key, _ = view.rows[row_id]
    return Triple(key=key, id=row_id, index=view.window_start + rank)


def first_some(*thunks):
    """Return the first non-None result, evaluating lazily left to right."""
    for thunk in thunks:
        result = thunk()
        if result is not None:
            return result
    return None


def _fetch_or_fail(view: CollatedView, index: int) -> RangeResponse:
    triple = find_by_index(view, index)
    if triple is None:
        logger.warning(
            "row %d should be in range but the window [%d, %d) cannot supply it",
            index,
            *window_bounds(view),
        )
        return Indeterminate()
    return NoButThisOneIs(triple)


def find_in_range(
    visible_range: Tuple[int, int],
    view: CollatedView,
    key,
    row_id: Hashable,
    index: int,
    key_equal: KeyEqual = operator.eq,
) -> RangeResponse:
    """Decide whether a previously known row is inside ``visible_range``.

    ``visible_range`` is inclusive on both ends. Resolution tries the key,
    then the index, then the row id, and the first hit wins. A row that
    resolves outside the range is replaced by the row at the nearer edge.
    """
    range_start, range_end = visible_range
    if range_end < range_start:
        return Indeterminate()
    col_start, col_end = window_bounds(view)
    if col_start >= col_end or col_start > range_end or col_end <= range_start:
        return Indeterminate()

    triple = first_some(
        lambda: find_by_key(view, key, key_equal),
        lambda: find_by_index(view, index),
        lambda: find_by_id(view, row_id),
    )
    if triple is None:
        fallback = find_by_index(view, range_start)
        return Indeterminate() if fallback is None else NoButThisOneIs(fallback)

    if range_start <= triple.index <= range_end:
        return Yes()
    if triple.index < range_start:
        return _fetch_or_fail(view, range_start)
    return _fetch_or_fail(view, range_end)
