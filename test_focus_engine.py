import unittest

import pytest

from collated_view import CollatedView
from focus_engine import FocusEngine
from presence import window_presence
from row_locator import Indeterminate, NoButThisOneIs, Triple, Yes
from scroll_intent import ScrollIntent

RH = 20


def _view(keys, window_start=0, rows_after=0):
    rows = {i * 100: (key, {"n": i}) for i, key in enumerate(keys)}
    return CollatedView(rows=rows, window_start=window_start, rows_after=rows_after)


TEN = _view([f"k{i}" for i in range(10)], rows_after=20)


class FocusEngineCallbackTests(unittest.TestCase):
    def setUp(self):
        self.changes = []
        self.scrolls = []
        self.engine = FocusEngine(
            RH, on_focus_change=self.changes.append, on_scroll=self.scrolls.append
        )
        self.engine.update(view=TEN, visible_range=(2, 5), header_height=0)

    def test_down_from_nothing_focuses_first_visible_row(self):
        self.engine.focus_down()
        self.assertEqual(self.engine.visually_focused_key, "k2")
        self.assertEqual(self.changes, ["k2"])
        self.assertEqual(self.scrolls, [ScrollIntent(2, 2 * RH, "to_top")])

    def test_focus_offscreen_row_scrolls_to_bottom(self):
        self.engine.focus("k9")
        self.assertEqual(self.scrolls, [ScrollIntent(9, 10 * RH, "to_bottom")])
        self.assertEqual(self.changes, ["k9"])

    def test_row_click_is_select(self):
        self.engine.on_row_click("k3")
        self.assertEqual(self.engine.visually_focused_key, "k3")
        self.assertEqual(self.scrolls, [])

    def test_refocusing_same_key_does_not_notify(self):
        self.engine.focus("k3")
        self.engine.focus("k3")
        self.assertEqual(self.changes, ["k3"])

    def test_unfocus_then_down_resumes_after_shadow(self):
        self.engine.focus("k3")
        self.engine.unfocus()
        self.assertIsNone(self.engine.visually_focused_key)
        self.engine.focus_down()
        self.assertEqual(self.changes, ["k3", None, "k4"])

    def test_paging(self):
        self.engine.page_down()
        self.assertEqual(self.engine.visually_focused_key, "k5")
        self.assertEqual(self.scrolls[-1].anchor, "to_top")
        self.engine.page_up()
        self.assertEqual(self.engine.visually_focused_key, "k2")
        self.assertEqual(self.scrolls[-1].anchor, "to_bottom")

    def test_header_height_and_midpoint_flow_into_intents(self):
        self.engine.update(header_height=30, midpoint=120)
        self.engine.focus("k1")
        self.assertEqual(self.scrolls, [ScrollIntent(1, RH - 30, "to_top", 120)])

    def test_last_transition_is_recorded(self):
        self.engine.focus("k4")
        transition = self.engine.last_transition
        self.assertEqual(transition.model, self.engine.model)
        self.assertEqual([c.key for c in transition.focus_changes], ["k4"])


class VisibleStatusTests(unittest.TestCase):
    def setUp(self):
        self.engine = FocusEngine(RH)
        self.engine.update(view=TEN, visible_range=(2, 5))

    def test_unfocused_is_indeterminate(self):
        self.assertEqual(self.engine.visible_status(), Indeterminate())

    def test_focused_row_in_range(self):
        self.engine.focus("k3")
        self.assertEqual(self.engine.visible_status(), Yes())

    def test_focused_row_scrolled_above_range(self):
        self.engine.focus("k3")
        self.engine.update(visible_range=(6, 9))
        self.assertEqual(
            self.engine.visible_status(),
            NoButThisOneIs(Triple(key="k6", id=600, index=6)),
        )


def test_window_presence_follows_residency():
    engine = FocusEngine(RH, presence=window_presence())
    engine.update(view=TEN, visible_range=(0, 9))
    engine.focus("k5")
    assert engine.focused_presence == "k5"

    far = _view([f"k{i}" for i in range(20, 30)], window_start=20)
    engine.update(view=far, visible_range=(20, 29))
    assert engine.focused_presence is None
    assert engine.visually_focused_key == "k5"

    engine.update(view=TEN, visible_range=(0, 9))
    assert engine.focused_presence == "k5"


def test_default_presence_is_identity():
    engine = FocusEngine(RH)
    engine.update(view=TEN, visible_range=(0, 9))
    assert engine.focused_presence is None
    engine.focus("k1")
    assert engine.focused_presence == "k1"


def test_actions_submitted_from_callbacks_are_queued():
    seen = []
    engine = FocusEngine(RH)

    def on_change(key):
        seen.append((key, engine.pending))
        if key == "k1":
            engine.focus_down()
            seen.append(("queued", engine.pending))

    engine.on_focus_change = on_change
    engine.update(view=TEN, visible_range=(0, 9))
    engine.focus("k1")

    assert seen == [("k1", 0), ("queued", 1), ("k2", 0)]
    assert engine.visually_focused_key == "k2"
    assert engine.pending == 0


def test_failing_callback_drops_queued_work():
    engine = FocusEngine(RH)

    def on_change(key):
        engine.focus_down()
        raise RuntimeError("host blew up")

    engine.on_focus_change = on_change
    engine.update(view=TEN, visible_range=(0, 9))
    with pytest.raises(RuntimeError):
        engine.focus("k1")

    assert engine.pending == 0
    assert engine.visually_focused_key == "k1"

    engine.on_focus_change = None
    engine.focus_down()
    assert engine.visually_focused_key == "k2"


def test_custom_key_equal():
    engine = FocusEngine(RH, key_equal=lambda a, b: a.lower() == b.lower())
    engine.update(view=TEN, visible_range=(0, 9))
    engine.focus("K7")
    assert engine.visually_focused_key == "k7"


@pytest.mark.parametrize("row_height", [0, -5])
def test_row_height_must_be_positive(row_height):
    with pytest.raises(ValueError):
        FocusEngine(row_height)
