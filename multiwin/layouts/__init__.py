"""
Layout System

Pure geometry for arranging a set of windows on one screen.
"""

from .layout_base import (
    Layout,
    LayoutAssignment,
    LayoutGeometry,
)
from .layout_grid import GridLayout, grid_tile, grid_dimensions
from .layout_cascade import CascadeLayout, CascadeQuadrant, cascade
from .layout_focus import FocusSplitLayout, focus_split, select_primary
from .layout_reverse import ReverseLayout, reverse

__all__ = [
    # Base classes
    "Layout",
    "LayoutAssignment",
    "LayoutGeometry",
    # Layout implementations
    "GridLayout",
    "CascadeLayout",
    "CascadeQuadrant",
    "FocusSplitLayout",
    "ReverseLayout",
    # Geometry functions
    "grid_tile",
    "grid_dimensions",
    "cascade",
    "focus_split",
    "select_primary",
    "reverse",
]
