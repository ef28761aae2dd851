"""
multiwin - multi-window layouts

Arranges the windows on a screen according to a named layout: grid tiling,
cascading, a focus layout whose primary application can be cycled, and a
left/right mirror.

This package provides:
- Window data types and collaborator protocols
- A time-bounded cache for the compositor window list
- Eligible window resolution (ghost window filtering)
- Layout algorithms (grid, cascade, focus split, reverse)
- Focus cycling state
- A dispatcher that maps action names to layouts

Example usage:
    from multiwin import LayoutDispatcher, DispatcherConfig

    dispatcher = LayoutDispatcher(
        accessibility, screen_detector, mover, window_query,
        config=DispatcherConfig(cascade_delta=40),
    )
    dispatcher.handle("focus-next")

Or over the event bus:
    from pubsub import pub
    from multiwin import topics

    pub.sendMessage(topics.CMD_TILE_ALL)
"""

__version__ = "0.1.0"

from .protocol import (
    Area,
    WindowDescriptor,
    CompositorWindowInfo,
    UsableScreens,
    AccessibilityProvider,
    ScreenDetector,
    WindowMover,
    WindowQuery,
)

from .window_cache import WindowInfoCache

from .window_resolver import (
    EligibleWindow,
    ResolvedWindows,
    WindowSetResolver,
    is_visible_info,
    is_eligible_descriptor,
)

from .layouts import (
    Layout,
    LayoutGeometry,
    GridLayout,
    CascadeLayout,
    FocusSplitLayout,
    ReverseLayout,
    grid_tile,
    cascade,
    focus_split,
    reverse,
    select_primary,
)

from .focus_manager import CycleDirection, FocusCycleState, unique_owners

from .dispatcher import Action, DispatcherConfig, LayoutDispatcher

from . import topics

__all__ = [
    # Version
    "__version__",
    # Data types and protocols
    "Area",
    "WindowDescriptor",
    "CompositorWindowInfo",
    "UsableScreens",
    "AccessibilityProvider",
    "ScreenDetector",
    "WindowMover",
    "WindowQuery",
    # Window set
    "WindowInfoCache",
    "EligibleWindow",
    "ResolvedWindows",
    "WindowSetResolver",
    "is_visible_info",
    "is_eligible_descriptor",
    # Layouts
    "Layout",
    "LayoutGeometry",
    "GridLayout",
    "CascadeLayout",
    "FocusSplitLayout",
    "ReverseLayout",
    "grid_tile",
    "cascade",
    "focus_split",
    "reverse",
    "select_primary",
    # Focus
    "CycleDirection",
    "FocusCycleState",
    "unique_owners",
    # Dispatcher
    "Action",
    "DispatcherConfig",
    "LayoutDispatcher",
    # Event topics
    "topics",
]
