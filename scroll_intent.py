from dataclasses import dataclass
from typing import Optional, Tuple

TO_TOP = "to_top"
TO_BOTTOM = "to_bottom"


@dataclass(frozen=True)
class ScrollIntent:
    """Directive for the host viewport; ``y_px`` is aligned to ``anchor``."""

    index: int
    y_px: int
    anchor: str  # to_top | to_bottom
    x_px: int = 0


def scroll_intent_for(
    triple,
    visible_range: Tuple[int, int],
    row_height: int,
    header_height: int,
    force: Optional[str] = None,
    midpoint: int = 0,
) -> Optional[ScrollIntent]:
    if triple is None:
        return None
    index = triple.index
    range_start, range_end = visible_range

    # the top edge sits header_height above the row, under the sticky header
    to_top = ScrollIntent(index, row_height * index - header_height, TO_TOP, midpoint)
    # the bottom edge is a one pixel element just below the row
    to_bottom = ScrollIntent(index, row_height * (index + 1), TO_BOTTOM, midpoint)

    if force == TO_TOP:
        return to_top
    if force == TO_BOTTOM:
        return to_bottom
    if force is not None:
        raise ValueError(f"unknown scroll anchor: {force!r}")
    if index <= range_start:
        return to_top
    if index >= range_end:
        return to_bottom
    return None
