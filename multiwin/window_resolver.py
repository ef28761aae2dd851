"""
Window Set Resolution

Merges accessibility window descriptors with the compositor window list to
produce the eligible windows on the anchor window's screen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .protocol import (
    AccessibilityProvider,
    Area,
    CompositorWindowInfo,
    ScreenDetector,
    UsableScreens,
    WindowDescriptor,
)
from .window_cache import WindowInfoCache

logger = logging.getLogger(__name__)


class EligibleWindow:
    """A window that passed visibility filtering.

    Equality and hashing use the window id so layouts can key results by window.
    """

    def __init__(self, descriptor: WindowDescriptor):
        self.descriptor = descriptor
        self.window_id = descriptor.window_id
        self.pid = descriptor.pid
        self.frame: Area = descriptor.frame

    @property
    def size(self) -> Tuple[float, float]:
        return self.frame.size

    @property
    def area(self) -> float:
        return self.frame.width * self.frame.height

    def __hash__(self):
        return hash(self.window_id)

    def __eq__(self, other):
        if not isinstance(other, EligibleWindow):
            return False
        return self.window_id == other.window_id

    def __repr__(self):
        return f"EligibleWindow(id={self.window_id}, pid={self.pid}, frame={self.frame})"


@dataclass
class ResolvedWindows:
    """Result of resolving the window set for a screen."""

    screens: UsableScreens
    windows: List[EligibleWindow]


def is_visible_info(info: CompositorWindowInfo) -> bool:
    """Whether the compositor actually draws this window.

    Normal level, non-zero alpha and a non-empty frame. Anything else is a
    ghost: a helper, overlay or minimized window still reporting a frame.
    """
    return info.level == 0 and info.alpha > 0 and not info.frame.is_empty


def visible_window_ids(infos: Iterable[CompositorWindowInfo]) -> Set[int]:
    return {info.window_id for info in infos if is_visible_info(info)}


def is_eligible_descriptor(window: WindowDescriptor) -> bool:
    """Check the accessibility flags and the descriptor's own frame."""
    if window.frame is None or window.frame.is_empty:
        return False
    return (
        window.is_window is True
        and window.is_sheet is not True
        and window.is_minimized is not True
        and window.is_hidden is not True
        and window.is_system_dialog is not True
    )


class WindowSetResolver:
    """Builds the ordered list of eligible windows for a target screen."""

    def __init__(
        self,
        accessibility: AccessibilityProvider,
        screen_detector: ScreenDetector,
        window_cache: WindowInfoCache,
        exclude: Optional[Callable[[WindowDescriptor], bool]] = None,
    ):
        """Initialize the resolver.

        Args:
            accessibility: Accessibility provider listing windows
            screen_detector: Resolves which screen a window is on
            window_cache: Cached compositor window list
            exclude: Optional policy returning True for windows to leave alone
                (e.g. a pinned to-do window)
        """
        self.accessibility = accessibility
        self.screen_detector = screen_detector
        self.window_cache = window_cache
        self.exclude = exclude

    def resolve(
        self,
        anchor: Optional[WindowDescriptor] = None,
        order_by_owner: bool = False,
    ) -> Optional[ResolvedWindows]:
        """Resolve the eligible windows on the anchor window's screen.

        Args:
            anchor: Window whose screen is targeted (defaults to the frontmost)
            order_by_owner: Sort windows by owner pid, highest first

        Returns:
            The anchor's screens and eligible windows, or None when there is
            no anchor window or its screen cannot be detected
        """
        anchor = anchor or self.accessibility.frontmost_window()
        screens = self.screen_detector.detect_screens(anchor) if anchor else None
        if screens is None:
            logger.warning("Can't detect screen for multiple windows")
            return None

        windows = list(self.accessibility.list_all_windows())
        if order_by_owner:
            windows.sort(key=lambda w: w.pid or 0, reverse=True)

        visible_ids = visible_window_ids(self.window_cache.get())

        eligible = []
        seen = set()
        for window in windows:
            if window.window_id in seen:
                continue
            if self.exclude is not None and self.exclude(window):
                continue
            if not is_eligible_descriptor(window):
                continue
            if window.window_id not in visible_ids:
                continue
            if not self._on_screen(window, screens):
                continue
            seen.add(window.window_id)
            eligible.append(EligibleWindow(window))

        logger.debug(
            f"Resolved {len(eligible)} of {len(windows)} windows on screen "
            f"{screens.current_screen!r}"
        )
        return ResolvedWindows(screens=screens, windows=eligible)

    def _on_screen(self, window: WindowDescriptor, screens: UsableScreens) -> bool:
        detected = self.screen_detector.detect_screens(window)
        return detected is not None and detected.current_screen == screens.current_screen
