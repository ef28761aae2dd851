"""
Reverse Layout

Mirrors every window horizontally across the screen.
"""

from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING

from .layout_base import Layout, LayoutAssignment, LayoutGeometry
from ..protocol import Area

if TYPE_CHECKING:
    from ..window_resolver import EligibleWindow


def reverse(windows: List["EligibleWindow"], area: Area) -> LayoutAssignment:
    """Swap left and right: a window's gap to the right edge becomes its gap
    to the left edge. Size and vertical position are kept."""
    result = {}
    for win in windows:
        frame = win.frame
        result[win] = LayoutGeometry(
            area.min_x + (area.max_x - frame.max_x),
            frame.y,
            frame.width,
            frame.height,
        )
    return result


class ReverseLayout(Layout):
    """
    Reverse layout - mirror window positions left to right.
    """

    @property
    def name(self) -> str:
        return "reverse"

    def calculate(
        self,
        windows: List["EligibleWindow"],
        area: Area,
        focused_owner: Optional[int] = None,
    ) -> LayoutAssignment:
        return reverse(windows, area)
