import pytest

from pagination import Paginator, visible_range_for_scroll
from scroll_intent import ScrollIntent


def _pager(total=100, preload=5):
    return Paginator(
        total, row_height=20, viewport_height=400, header_height=20, preload_rows=preload
    )


def test_initial_view_shows_first_rows_under_header():
    p = _pager()
    assert p.scroll_top == -20
    assert p.visible_range == (0, 18)
    assert (p.page_start, p.page_end) == (0, 24)
    assert p.page_size == 24


def test_scroll_is_clamped_to_content():
    p = _pager()
    p.scroll_to(5000)
    assert p.scroll_top == 1600
    assert p.visible_range == (81, 99)
    assert p.page_end == 100
    p.scroll_to(-999)
    assert p.scroll_top == -20


def test_to_top_intent_puts_row_under_header():
    p = _pager()
    p.apply_scroll_intent(ScrollIntent(50, 50 * 20 - 20, "to_top"))
    assert p.visible_range[0] == 50


def test_to_bottom_intent_puts_row_at_bottom_edge():
    p = _pager()
    p.apply_scroll_intent(ScrollIntent(50, 51 * 20, "to_bottom"))
    assert p.visible_range[1] == 50


def test_ensure_row_visible():
    p = _pager()
    p.ensure_row_visible(60)
    assert p.visible_range[1] == 60
    p.ensure_row_visible(10)
    assert p.visible_range[0] == 10
    p.ensure_row_visible(12)
    assert p.visible_range[0] == 10


def test_shrinking_total_reclamps_scroll():
    p = _pager()
    p.scroll_to(1600)
    p.update_total_rows(10)
    assert p.scroll_top == -20
    assert p.visible_range == (0, 9)
    assert p.page_end == 10


def test_empty_collection():
    p = _pager(total=0)
    assert p.visible_range == (0, 0)
    assert (p.page_start, p.page_end) == (0, 0)
    p.ensure_row_visible(5)
    assert p.scroll_top == -20


@pytest.mark.parametrize(
    "scroll_top, expected",
    [(0, (1, 19)), (-20, (0, 18)), (15, (1, 20)), (10_000, (49, 49))],
)
def test_visible_range_for_scroll(scroll_top, expected):
    assert visible_range_for_scroll(scroll_top, 400, 20, 20, 50) == expected


def test_row_height_must_be_positive():
    with pytest.raises(ValueError):
        visible_range_for_scroll(0, 400, 0, 0, 10)
    with pytest.raises(ValueError):
        Paginator(10, row_height=0)
