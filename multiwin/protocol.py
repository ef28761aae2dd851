"""
Window Data Types and Collaborator Protocols

This module defines the value types shared by every layer of multiwin and
the interfaces of the outside collaborators (accessibility provider, screen
detector, window mover) the layout pipeline talks to.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional, Protocol, Sequence, Tuple


@dataclass(frozen=True)
class Area:
    """Rectangle in top-left-origin, y-down screen coordinates."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        """True when the area has no positive width or height."""
        return self.width <= 0 or self.height <= 0

    def inset(self, amount: float) -> "Area":
        """Shrink the area by `amount` on all four sides."""
        return Area(
            self.x + amount,
            self.y + amount,
            self.width - 2 * amount,
            self.height - 2 * amount,
        )


@dataclass
class WindowDescriptor:
    """A window as reported by the accessibility layer.

    Flags are tri-state: None means the attribute could not be read.
    The frame may be stale relative to the compositor.
    """

    window_id: int
    pid: Optional[int] = None
    frame: Optional[Area] = None
    is_window: Optional[bool] = True
    is_sheet: Optional[bool] = False
    is_minimized: Optional[bool] = False
    is_hidden: Optional[bool] = False
    is_system_dialog: Optional[bool] = False
    title: str = ""

    @property
    def size(self) -> Optional[Tuple[float, float]]:
        """Window size, or None when the frame is unknown."""
        if self.frame is None:
            return None
        return self.frame.size


@dataclass(frozen=True)
class CompositorWindowInfo:
    """A window as reported by the compositor's window list."""

    window_id: int
    level: int
    frame: Area
    pid: int
    process_name: Optional[str] = None
    alpha: float = 1.0


@dataclass(frozen=True)
class UsableScreens:
    """Screen detection result for an anchor window.

    `current_screen` is an opaque token identifying the screen; two windows
    are on the same screen when their tokens compare equal.
    """

    current_screen: Hashable
    usable_frame: Area


# Compositor window list query: (ids or None, include off-screen windows)
WindowQuery = Callable[[Optional[Sequence[int]], bool], Sequence[CompositorWindowInfo]]


class AccessibilityProvider(Protocol):
    """Source of accessibility-level window descriptors."""

    def list_all_windows(self) -> Sequence[WindowDescriptor]:
        ...

    def frontmost_window(self) -> Optional[WindowDescriptor]:
        ...


class ScreenDetector(Protocol):
    """Resolves the screen a window lives on."""

    def detect_screens(self, window: WindowDescriptor) -> Optional[UsableScreens]:
        ...


class WindowMover(Protocol):
    """Applies geometry to real windows. Both calls are best effort."""

    def set_frame(self, window: WindowDescriptor, area: Area) -> Any:
        ...

    def bring_to_front(self, window: WindowDescriptor) -> Any:
        ...
