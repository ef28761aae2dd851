"""
Focus Split Layout

The focused application's largest window takes a wide left column; every
other window shares the column on the right.
"""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

from .layout_base import Layout, LayoutAssignment, LayoutGeometry
from ..protocol import Area

if TYPE_CHECKING:
    from ..window_resolver import EligibleWindow


def select_primary(
    windows: List["EligibleWindow"], focused_owner: Optional[int]
) -> Optional["EligibleWindow"]:
    """Largest window of the focused owner; the first one wins ties."""
    primary = None
    for win in windows:
        if win.pid != focused_owner:
            continue
        if primary is None or win.area > primary.area:
            primary = win
    return primary


def focus_split(
    windows: List["EligibleWindow"],
    area: Area,
    focused_owner: Optional[int],
    ratio: float = 0.7,
    gap: float = 15.0,
) -> LayoutAssignment:
    """Split the screen into a focus column and a shared right column.

    The screen is inset by `gap` on every side. The primary window gets the
    left `ratio` of it at full height. All remaining windows, including the
    focused owner's secondary windows, get the same full-height rectangle on
    the right and keep their natural stacking order. With no remaining
    windows the right column is left alone.
    """
    if not windows:
        return {}

    usable = area.inset(gap)
    left_width = usable.width * ratio - gap / 2

    primary = select_primary(windows, focused_owner)
    others = [w for w in windows if w is not primary]

    result = {}
    if primary is not None:
        result[primary] = LayoutGeometry(
            usable.x, usable.y, left_width, usable.height
        )

    if not others:
        return result

    right = LayoutGeometry(
        usable.x + left_width + gap,
        usable.y,
        usable.width - left_width - gap,
        usable.height,
    )
    for win in others:
        result[win] = right
    return result


class FocusSplitLayout(Layout):
    """
    Focus split layout - one primary window, everything else beside it.
    """

    def __init__(self, ratio: float = 0.7, gap: float = 15.0):
        self.ratio = ratio
        self.gap = gap

    @property
    def name(self) -> str:
        return "focus"

    def calculate(
        self,
        windows: List["EligibleWindow"],
        area: Area,
        focused_owner: Optional[int] = None,
    ) -> LayoutAssignment:
        return focus_split(windows, area, focused_owner, self.ratio, self.gap)

    def raise_order(
        self,
        windows: List["EligibleWindow"],
        result: LayoutAssignment,
        focused_owner: Optional[int] = None,
    ) -> List["EligibleWindow"]:
        primary = select_primary(windows, focused_owner)
        return [primary] if primary is not None else []
