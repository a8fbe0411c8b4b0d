from typing import Tuple


def visible_range_for_scroll(
    scroll_top: int,
    viewport_height: int,
    row_height: int,
    header_height: int,
    total_rows: int,
) -> Tuple[int, int]:
    """Inclusive ``(first, last)`` logical indices under the table body.

    Offsets are body coordinates (row ``i`` starts at ``i * row_height``).
    The header is sticky over the top of the viewport, so the visible body
    region is ``[scroll_top + header_height, scroll_top + viewport_height)``.
    """
    if row_height <= 0:
        raise ValueError("row_height must be positive")
    if total_rows <= 0:
        return 0, 0
    top = max(0, scroll_top + header_height)
    bottom = max(top + 1, scroll_top + viewport_height)
    first = min(top // row_height, total_rows - 1)
    last = min((bottom - 1) // row_height, total_rows - 1)
    return first, max(first, last)


class Paginator:
    """Tracks a simulated viewport and the window that must be resident.

    ``page_start``/``page_end`` (half-open) are the visible range widened by
    ``preload_rows`` on both sides and clamped to the collection.
    """

    def __init__(
        self,
        total_rows: int,
        row_height: int = 20,
        viewport_height: int = 400,
        header_height: int = 0,
        preload_rows: int = 25,
    ):
        if row_height <= 0:
            raise ValueError("row_height must be positive")
        self.row_height = row_height
        self.viewport_height = max(1, viewport_height)
        self.header_height = max(0, header_height)
        self.preload_rows = max(0, preload_rows)
        self.total_rows = max(0, total_rows)
        self.scroll_top = self.min_scroll

    def _clamp(self):
        self.scroll_top = max(self.min_scroll, min(self.scroll_top, self.max_scroll))

    def update_total_rows(self, total_rows: int):
        self.total_rows = max(0, total_rows)
        self._clamp()

    @property
    def min_scroll(self) -> int:
        # row 0 sits just below the sticky header
        return -self.header_height

    @property
    def max_scroll(self) -> int:
        content_height = self.total_rows * self.row_height
        return max(self.min_scroll, content_height - self.viewport_height)

    def scroll_to(self, scroll_top: int):
        self.scroll_top = int(scroll_top)
        self._clamp()

    def apply_scroll_intent(self, intent):
        if intent.anchor == "to_top":
            self.scroll_to(intent.y_px)
        else:
            self.scroll_to(intent.y_px - self.viewport_height)

    def ensure_row_visible(self, row: int):
        if self.total_rows == 0:
            self.scroll_top = self.min_scroll
            return
        row = max(0, min(row, self.total_rows - 1))
        first, last = self.visible_range
        if row <= first:
            self.scroll_to(row * self.row_height - self.header_height)
        elif row >= last:
            self.scroll_to((row + 1) * self.row_height - self.viewport_height)

    @property
    def visible_range(self) -> Tuple[int, int]:
        return visible_range_for_scroll(
            self.scroll_top,
            self.viewport_height,
            self.row_height,
            self.header_height,
            self.total_rows,
        )

    @property
    def page_start(self) -> int:
        first, _ = self.visible_range
        return max(0, first - self.preload_rows)

    @property
    def page_end(self) -> int:
        if self.total_rows == 0:
            return 0
        _, last = self.visible_range
        return min(self.total_rows, last + 1 + self.preload_rows)

    @property
    def page_size(self) -> int:
        return self.page_end - self.page_start
