"""
Grid Layout

Windows arranged in a uniform grid covering the whole screen.
"""

from __future__ import annotations
import math
from typing import List, Optional, TYPE_CHECKING

from .layout_base import Layout, LayoutAssignment, LayoutGeometry
from ..protocol import Area

if TYPE_CHECKING:
    from ..window_resolver import EligibleWindow


def grid_dimensions(count: int) -> tuple:
    """Return (columns, rows) for `count` windows."""
    columns = math.ceil(math.sqrt(count))
    rows = math.ceil(count / columns)
    return columns, rows


def grid_tile(windows: List["EligibleWindow"], area: Area) -> LayoutAssignment:
    """Tile windows row by row in input order.

    The last row may be partially filled.
    """
    if not windows:
        return {}

    columns, rows = grid_dimensions(len(windows))
    cell_width = area.width / columns
    cell_height = area.height / rows

    result = {}
    for i, win in enumerate(windows):
        col = i % columns
        row = i // columns
        result[win] = LayoutGeometry(
            area.x + cell_width * col,
            area.y + cell_height * row,
            cell_width,
            cell_height,
        )
    return result


class GridLayout(Layout):
    """
    Grid layout - windows arranged in a grid pattern.
    """

    @property
    def name(self) -> str:
        return "grid"

    def calculate(
        self,
        windows: List["EligibleWindow"],
        area: Area,
        focused_owner: Optional[int] = None,
    ) -> LayoutAssignment:
        if focused_owner is not None:
            windows = [w for w in windows if w.pid == focused_owner]
        return grid_tile(windows, area)
