"""Row focus state machine.

``apply`` is a pure transition: one action against one snapshot of the
window and visible range, returning the new model together with the effects
(scroll intents, focus-changed notifications) the host should carry out.
"""
import logging
import operator
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from collated_view import CollatedView
from row_locator import Triple, find_by_index, find_by_key, first_some
from scroll_intent import TO_BOTTOM, TO_TOP, ScrollIntent, scroll_intent_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Model:
    """``current`` is the focused row; ``shadow`` the previously focused one.

    The shadow seeds the next up/down after an unfocus, so navigation
    resumes near where the user left off.
    """

    current: Optional[Triple] = None
    shadow: Optional[Triple] = None


EMPTY = Model()


# ---------- actions ----------
class Action:
    pass


@dataclass(frozen=True)
class Unfocus(Action):
    pass


@dataclass(frozen=True)
class Up(Action):
    pass


@dataclass(frozen=True)
class Down(Action):
    pass


@dataclass(frozen=True)
class PageUp(Action):
    pass


@dataclass(frozen=True)
class PageDown(Action):
    pass


@dataclass(frozen=True)
class Select(Action):
    key: Any


# ---------- effects ----------
@dataclass(frozen=True)
class FocusChanged:
    key: Any


@dataclass(frozen=True)
class Transition:
    model: Model
    effects: Tuple[Any, ...] = ()

    @property
    def scroll_intents(self):
        return [e for e in self.effects if isinstance(e, ScrollIntent)]

    @property
    def focus_changes(self):
        return [e for e in self.effects if isinstance(e, FocusChanged)]


# ---------- candidate resolution ----------
def _down(model: Model, view, visible_range, key_equal) -> Optional[Triple]:
    range_start, _ = visible_range
    current, shadow = model.current, model.shadow
    if current is None and shadow is not None:
        return first_some(
            lambda: find_by_index(view, shadow.index + 1),
            lambda: find_by_index(view, shadow.index),
        )
    if current is None:
        # down from nothing starts at the top of the visible rows
        return find_by_index(view, range_start)
    found = find_by_key(view, current.key, key_equal)
    if found is None:
        # the row is gone; land on whatever now occupies its slot
        return find_by_index(view, current.index)
    return first_some(lambda: find_by_index(view, found.index + 1), lambda: current)


def _up(model: Model, view, visible_range, key_equal) -> Optional[Triple]:
    _, range_end = visible_range
    current, shadow = model.current, model.shadow
    if current is None and shadow is not None:
        return first_some(
            lambda: find_by_index(view, shadow.index - 1),
            lambda: find_by_index(view, shadow.index),
        )
    if current is None:
        # range_end can run past the end of a short table
        start = min(range_end, view.rows_after + view.window_length)
        return first_some(
            lambda: find_by_index(view, start - 1),
            lambda: find_by_index(view, start),
        )
    found = find_by_key(view, current.key, key_equal)
    if found is None:
        return find_by_index(view, current.index - 1)
    return first_some(lambda: find_by_index(view, found.index - 1), lambda: current)


def _candidate(model, action, view, visible_range, key_equal):
    """Return ``(new_focus, forced_anchor)`` for ``action``."""
    range_start, range_end = visible_range
    if isinstance(action, Select):
        return find_by_key(view, action.key, key_equal), None
    if isinstance(action, Unfocus):
        return None, None
    if isinstance(action, Down):
        return _down(model, view, visible_range, key_equal), None
    if isinstance(action, Up):
        return _up(model, view, visible_range, key_equal), None
    if isinstance(action, PageDown):
        return find_by_index(view, range_end), TO_TOP
    if isinstance(action, PageUp):
        return find_by_index(view, range_start), TO_BOTTOM
    raise ValueError(f"unknown focus action: {action!r}")


def _next_shadow(model: Model, action) -> Optional[Triple]:
    if isinstance(action, Unfocus):
        return model.current if model.current is not None else model.shadow
    return None


def _key_of(triple: Optional[Triple]):
    return None if triple is None else triple.key


def _same_key(a: Optional[Triple], b: Optional[Triple], key_equal) -> bool:
    if a is None or b is None:
        return a is None and b is None
    return bool(key_equal(a.key, b.key))


def apply(
    model: Model,
    action: Action,
    view: CollatedView,
    visible_range: Tuple[int, int],
    row_height: int,
    header_height: int = 0,
    midpoint: int = 0,
    key_equal=operator.eq,
) -> Transition:
    range_start, range_end = visible_range
    if range_end < range_start:
        logger.warning(
            "ignoring %r: visible range (%d, %d) is inverted",
            action,
            range_start,
            range_end,
        )
        return Transition(model)

    new_focus, force = _candidate(model, action, view, visible_range, key_equal)

    effects = []
    intent = scroll_intent_for(
        new_focus,
        visible_range,
        row_height,
        header_height,
        force=force,
        midpoint=midpoint,
    )
    if intent is not None:
        effects.append(intent)
    if not _same_key(model.current, new_focus, key_equal):
        effects.append(FocusChanged(_key_of(new_focus)))

    logger.debug(
        "%r: focus %r -> %r",
        action,
        _key_of(model.current),
        _key_of(new_focus),
    )
    new_model = Model(current=new_focus, shadow=_next_shadow(model, action))
    return Transition(new_model, tuple(effects))
