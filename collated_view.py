from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

# Row ids are spaced out so they never line up with logical indices.
ID_STRIDE = 100


@dataclass(frozen=True)
class CollatedView:
    """One materialized window of a filtered and ordered collection.

    ``rows`` maps a window-local row id to ``(key, data)`` in display order.
    Logical index of a row = ``window_start`` + its rank within ``rows``.
    """

    rows: Mapping[Hashable, Tuple[Any, Any]]
    window_start: int = 0
    rows_after: int = 0
    num_filtered: Optional[int] = None
    num_unfiltered: Optional[int] = None
    _ranks: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "_ranks", {row_id: rank for rank, row_id in enumerate(self.rows)}
        )

    @property
    def window_length(self) -> int:
        return len(self.rows)

    @property
    def window_end(self) -> int:
        return self.window_start + self.window_length

    @property
    def total_rows(self) -> int:
        return self.window_start + self.window_length + self.rows_after

    def rank_of(self, row_id) -> Optional[int]:
        return self._ranks.get(row_id)

    def keys(self) -> list:
        return [key for key, _ in self.rows.values()]

    def contains_key(self, key, key_equal: Callable[[Any, Any], bool]) -> bool:
        return any(key_equal(k, key) for k, _ in self.rows.values())

    @classmethod
    def empty(cls) -> "CollatedView":
        return cls(rows={}, num_filtered=0, num_unfiltered=0)


# ---------- pandas collator ----------

FilterSpec = Union[None, str, Callable[[pd.DataFrame], Any]]
OrderSpec = Union[None, str, Sequence[str]]


def _apply_filter(df: pd.DataFrame, filter: FilterSpec) -> pd.DataFrame:
    if filter is None:
        return df
    if isinstance(filter, str):
        return df.query(filter)
    mask = np.asarray(filter(df), dtype=bool)
    if mask.shape != (len(df),):
        raise ValueError("filter mask must have one entry per row")
    return df[mask]


def _apply_order(df: pd.DataFrame, order: OrderSpec, ascending: bool) -> pd.DataFrame:
    if order is None:
        return df
    by = [order] if isinstance(order, str) else list(order)
    if not by:
        return df
    return df.sort_values(by=by, ascending=ascending, kind="mergesort")


def _clamp_rank_range(rank_range, total: int) -> Tuple[int, int]:
    if rank_range is None:
        return 0, total
    start, end = rank_range
    start = max(0, min(int(start), total))
    end = max(start, min(int(end), total))
    return start, end


def collate(
    df: pd.DataFrame,
    filter: FilterSpec = None,
    order: OrderSpec = None,
    ascending: bool = True,
    rank_range: Optional[Tuple[int, int]] = None,
) -> CollatedView:
    """Filter, order and window ``df`` into a :class:`CollatedView`.

    The frame's index labels are the row keys and must be unique.
    ``rank_range`` is half-open over the filtered, ordered collection.
    """
    if not df.index.is_unique:
        raise ValueError("row keys (DataFrame index) must be unique")

    filtered = _apply_filter(df, filter)
    ordered = _apply_order(filtered, order, ascending)
    total = len(ordered)
    start, end = _clamp_rank_range(rank_range, total)

    window = ordered.iloc[start:end]
    ids = (np.arange(len(window)) * ID_STRIDE).tolist()
    records = window.to_dict(orient="records")
    rows = {
        row_id: (key, record)
        for row_id, key, record in zip(ids, window.index.tolist(), records)
    }
    return CollatedView(
        rows=rows,
        window_start=start,
        rows_after=total - end,
        num_filtered=total,
        num_unfiltered=len(df),
    )
