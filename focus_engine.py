"""Host-facing wrapper around the focus state machine.

The host owns the window snapshot and the visible range and hands them in
through ``update``; the engine owns only the focus model. Navigation calls
are queued and run one at a time, and effects are dispatched to the host
callbacks after each transition.
"""
import logging
import operator
from collections import deque
from typing import Any, Callable, Optional, Tuple

import focus_machine as fm
from collated_view import CollatedView
from presence import identity_presence
from row_locator import Indeterminate, RangeResponse, find_in_range
from scroll_intent import ScrollIntent

logger = logging.getLogger(__name__)


class FocusEngine:
    def __init__(
        self,
        row_height: int,
        on_focus_change: Optional[Callable[[Any], None]] = None,
        on_scroll: Optional[Callable[[ScrollIntent], None]] = None,
        presence: Callable[[Any, CollatedView], Any] = identity_presence,
        key_equal: Callable[[Any, Any], bool] = operator.eq,
    ):
        if row_height <= 0:
            raise ValueError("row_height must be positive")
        self.row_height = row_height
        self.on_focus_change = on_focus_change
        self.on_scroll = on_scroll
        self.presence = presence
        self.key_equal = key_equal

        self.model = fm.EMPTY
        self.view = CollatedView.empty()
        self.visible_range: Tuple[int, int] = (0, 0)
        self.header_height = 0
        self.midpoint = 0

        self._queue: deque = deque()
        self._draining = False
        self.last_transition: Optional[fm.Transition] = None

    # ---------- inputs ----------
    def update(self, view=None, visible_range=None, header_height=None, midpoint=None):
        """Replace any subset of the input snapshot."""
        if view is not None:
            self.view = view
        if visible_range is not None:
            self.visible_range = (int(visible_range[0]), int(visible_range[1]))
        if header_height is not None:
            self.header_height = header_height
        if midpoint is not None:
            self.midpoint = midpoint

    # ---------- outputs ----------
    @property
    def visually_focused_key(self):
        current = self.model.current
        return None if current is None else current.key

    @property
    def focused_presence(self):
        return self.presence(self.visually_focused_key, self.view)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def visible_status(self) -> RangeResponse:
        current = self.model.current
        if current is None:
            return Indeterminate()
        return find_in_range(
            self.visible_range,
            self.view,
            current.key,
            current.id,
            current.index,
            key_equal=self.key_equal,
        )

    # ---------- actions ----------
    def unfocus(self):
        self.submit(fm.Unfocus())

    def focus_up(self):
        self.submit(fm.Up())

    def focus_down(self):
        self.submit(fm.Down())

    def page_up(self):
        self.submit(fm.PageUp())

    def page_down(self):
        self.submit(fm.PageDown())

    def focus(self, key):
        self.submit(fm.Select(key))

    def on_row_click(self, key):
        self.focus(key)

    def submit(self, action: fm.Action):
        self._queue.append(action)
        if self._draining:
            # a callback queued more work; it runs after the current action
            return
        self._draining = True
        try:
            while self._queue:
                self._step(self._queue.popleft())
        except Exception:
            # drop work queued behind a failing callback
            self._queue.clear()
            raise
        finally:
            self._draining = False

    def _step(self, action: fm.Action):
        transition = fm.apply(
            self.model,
            action,
            self.view,
            self.visible_range,
            self.row_height,
            header_height=self.header_height,
            midpoint=self.midpoint,
            key_equal=self.key_equal,
        )
        self.model = transition.model
        self.last_transition = transition
        for effect in transition.effects:
            if isinstance(effect, ScrollIntent):
                if self.on_scroll is not None:
                    self.on_scroll(effect)
            elif isinstance(effect, fm.FocusChanged):
                if self.on_focus_change is not None:
                    self.on_focus_change(effect.key)
