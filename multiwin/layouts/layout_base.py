"""
Window Layout Base Classes

Provides the Layout interface shared by every arrangement policy.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, TYPE_CHECKING

from ..protocol import Area

if TYPE_CHECKING:
    from ..window_resolver import EligibleWindow


@dataclass(frozen=True)
class LayoutGeometry:
    """Calculated geometry for a window in a layout."""

    x: float
    y: float
    width: float
    height: float

    def to_area(self) -> Area:
        return Area(self.x, self.y, self.width, self.height)


# Window -> target geometry, in placement order
LayoutAssignment = Dict["EligibleWindow", LayoutGeometry]


class Layout(ABC):
    """Abstract base class for window layouts."""

    @abstractmethod
    def calculate(
        self,
        windows: List["EligibleWindow"],
        area: Area,
        focused_owner: Optional[int] = None,
    ) -> LayoutAssignment:
        """
        Calculate window positions and sizes.

        Args:
            windows: Eligible windows in resolver order
            area: Usable screen area
            focused_owner: Owner pid the layout should favor (optional)

        Returns:
            Dictionary mapping windows to their calculated geometry, in
            placement order
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Layout name for display."""
        pass

    def raise_order(
        self,
        windows: List["EligibleWindow"],
        result: LayoutAssignment,
        focused_owner: Optional[int] = None,
    ) -> List["EligibleWindow"]:
        """Windows to bring to front after placement, last ends up topmost."""
        return []
