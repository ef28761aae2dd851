"""
Cascade Layout

Windows stacked diagonally, each offset from the previous one.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from .layout_base import Layout, LayoutAssignment, LayoutGeometry
from ..protocol import Area

if TYPE_CHECKING:
    from ..window_resolver import EligibleWindow


@dataclass
class CascadeQuadrant:
    """Fan-out parameters for cascading one application's windows."""

    right: bool
    bottom: bool
    width: float
    height: float

    @classmethod
    def for_window(
        cls, frame: Area, area: Area, count: int, delta: float
    ) -> "CascadeQuadrant":
        # Shrink so the whole cascade fits on screen
        max_width = area.width - (count - 1) * delta
        max_height = area.height - (count - 1) * delta
        return cls(
            right=frame.mid_x > area.mid_x,
            bottom=frame.mid_y > area.mid_y,
            width=min(frame.width, max_width),
            height=min(frame.height, max_height),
        )


def cascade(
    windows: List["EligibleWindow"],
    area: Area,
    delta: float,
    focused_owner: Optional[int] = None,
) -> LayoutAssignment:
    """Cascade windows from the screen's top-left corner.

    Without an owner every window keeps its size and is offset by
    `delta * index` on both axes; nothing is clamped to the screen.

    With an owner only that owner's windows are placed. The first one moves
    to the end so it ends up on top, all get the first window's size
    (shrunk to fit), and the cascade fans out away from whichever screen
    edges the first window was closest to.
    """
    if focused_owner is None:
        result = {}
        for i, win in enumerate(windows):
            result[win] = LayoutGeometry(
                area.x + delta * i,
                area.y + delta * i,
                win.frame.width,
                win.frame.height,
            )
        return result

    owned = [w for w in windows if w.pid == focused_owner]
    if not owned:
        return {}

    first = owned[0]
    owned = owned[1:] + [first]
    quadrant = CascadeQuadrant.for_window(first.frame, area, len(owned), delta)

    result = {}
    for i, win in enumerate(owned):
        x = area.x + delta * i
        y = area.y + delta * i
        if quadrant.right:
            x = area.max_x - quadrant.width - delta * i
        # Both axes fan away from the near edge, so the bottom half steps upward
        if quadrant.bottom:
            y = area.max_y - quadrant.height - delta * i
        result[win] = LayoutGeometry(x, y, quadrant.width, quadrant.height)
    return result


class CascadeLayout(Layout):
    """
    Cascade layout - windows stacked diagonally.

    Every placed window is raised in placement order so the last one placed
    ends up on top.
    """

    def __init__(self, delta: float = 30.0):
        self.delta = delta

    @property
    def name(self) -> str:
        return "cascade"

    def calculate(
        self,
        windows: List["EligibleWindow"],
        area: Area,
        focused_owner: Optional[int] = None,
    ) -> LayoutAssignment:
        return cascade(windows, area, self.delta, focused_owner)

    def raise_order(
        self,
        windows: List["EligibleWindow"],
        result: LayoutAssignment,
        focused_owner: Optional[int] = None,
    ) -> List["EligibleWindow"]:
        return list(result)
