"""
Layout Dispatcher

Maps named multi-window actions to window set resolution, layout
calculation and window movement.
"""

from __future__ import annotations
import logging
import os
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple, Union

from pubsub import pub

from . import topics
from .focus_manager import CycleDirection, FocusCycleState, unique_owners
from .layouts import (
    CascadeLayout,
    FocusSplitLayout,
    GridLayout,
    Layout,
    ReverseLayout,
)
from .protocol import (
    AccessibilityProvider,
    ScreenDetector,
    WindowDescriptor,
    WindowMover,
    WindowQuery,
)
from .window_cache import WindowInfoCache
from .window_resolver import WindowSetResolver

logger = logging.getLogger(__name__)


class Action(Enum):
    """Multi-window actions understood by the dispatcher."""

    TILE_ALL = "tile-all"
    CASCADE_ALL = "cascade-all"
    CASCADE_ACTIVE_APP = "cascade-active-app"
    TILE_ACTIVE_APP = "tile-active-app"
    FOCUS_NEXT = "focus-next"
    FOCUS_PREV = "focus-prev"
    REVERSE_ALL = "reverse-all"


@dataclass
class DispatcherConfig:
    """Layout parameters."""

    # Offset between cascaded windows
    cascade_delta: float = 30.0

    # Share of the screen width given to the primary focus window
    focus_ratio: float = 0.7

    # Spacing around and between the focus layout columns
    focus_gap: float = 15.0

    # Compositor window list cache lifetime
    cache_timeout_ms: float = 100.0

    def __post_init__(self):
        """Validate parameter ranges."""
        if self.cascade_delta < 0:
            raise ValueError(f"cascade_delta must be >= 0, got {self.cascade_delta}")
        if not 0 < self.focus_ratio < 1:
            raise ValueError(f"focus_ratio must be in (0, 1), got {self.focus_ratio}")
        if self.focus_gap < 0:
            raise ValueError(f"focus_gap must be >= 0, got {self.focus_gap}")
        if self.cache_timeout_ms < 0:
            raise ValueError(
                f"cache_timeout_ms must be >= 0, got {self.cache_timeout_ms}"
            )


class LayoutDispatcher:
    """Runs multi-window actions.

    This component subscribes to the layout command topics and publishes
    LAYOUT_APPLIED, LAYOUT_NO_TARGET and FOCUS_CHANGED.

    Each action resolves the eligible windows on the anchor's screen,
    computes the complete layout and only then moves windows, so a failure
    never leaves a layout half applied. Actions are serialized.

    Responsibilities:
    - CMD_TILE_ALL / CMD_TILE_ACTIVE_APP: grid tiling
    - CMD_CASCADE_ALL / CMD_CASCADE_ACTIVE_APP: cascading
    - CMD_FOCUS_NEXT / CMD_FOCUS_PREV: focus split with owner cycling
    - CMD_REVERSE_ALL: mirror windows left to right
    """

    def __init__(
        self,
        accessibility: AccessibilityProvider,
        screen_detector: ScreenDetector,
        mover: WindowMover,
        window_query: WindowQuery,
        config: Optional[DispatcherConfig] = None,
        focus_state: Optional[FocusCycleState] = None,
        exclude: Optional[Callable[[WindowDescriptor], bool]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the dispatcher.

        Args:
            accessibility: Accessibility provider listing windows
            screen_detector: Resolves which screen a window is on
            mover: Applies frames and raises windows
            window_query: Compositor window list query
            config: Layout parameters (defaults to DispatcherConfig())
            focus_state: Focused owner state, shared across invocations
            exclude: Optional policy for windows that must never be arranged
            clock: Clock for the window list cache
        """
        self.config = config or DispatcherConfig()
        self.accessibility = accessibility
        self.mover = mover
        self.focus_state = focus_state or FocusCycleState()

        self.window_cache = WindowInfoCache(
            window_query, timeout_ms=self.config.cache_timeout_ms, clock=clock
        )
        self.resolver = WindowSetResolver(
            accessibility, screen_detector, self.window_cache, exclude=exclude
        )

        self.grid_layout = GridLayout()
        self.cascade_layout = CascadeLayout(delta=self.config.cascade_delta)
        self.focus_layout = FocusSplitLayout(
            ratio=self.config.focus_ratio, gap=self.config.focus_gap
        )
        self.reverse_layout = ReverseLayout()

        self._lock = threading.RLock()

        # Setup debug event logging if enabled
        if os.getenv("MULTIWIN_DEBUG"):
            pub.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to layout command events."""
        pub.subscribe(self._on_tile_all, topics.CMD_TILE_ALL)
        pub.subscribe(self._on_cascade_all, topics.CMD_CASCADE_ALL)
        pub.subscribe(self._on_cascade_active_app, topics.CMD_CASCADE_ACTIVE_APP)
        pub.subscribe(self._on_tile_active_app, topics.CMD_TILE_ACTIVE_APP)
        pub.subscribe(self._on_reverse_all, topics.CMD_REVERSE_ALL)
        pub.subscribe(self._on_focus_next, topics.CMD_FOCUS_NEXT)
        pub.subscribe(self._on_focus_prev, topics.CMD_FOCUS_PREV)

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
        logger.debug(f"EVENT: {topic.getName()} | {data_str}")

    def handle(
        self,
        action: Union[Action, str],
        anchor: Optional[WindowDescriptor] = None,
    ) -> bool:
        """Run a named action.

        Args:
            action: Action or its name (e.g. "tile-all")
            anchor: Window whose screen is arranged (defaults to the frontmost)

        Returns:
            False if the action is not a multi-window action, True otherwise,
            including when there was nothing to arrange

        Moving and raising are best effort: a window the mover fails on is
        logged and skipped, the rest of the layout is still applied.
        """
        try:
            action = Action(action)
        except ValueError:
            logger.debug(f"Not a multi-window action: {action!r}")
            return False

        with self._lock:
            self._run(action, anchor)
        return True

    def _run(self, action: Action, anchor: Optional[WindowDescriptor]):
        resolved = self.resolver.resolve(anchor, order_by_owner=True)
        if resolved is None:
            pub.sendMessage(topics.LAYOUT_NO_TARGET, action=action.value)
            return

        windows = resolved.windows
        if not windows:
            logger.debug(f"{action.value}: no eligible windows")
            return

        plan = self._plan(action, windows)
        if plan is None:
            return
        layout, owner = plan

        area = resolved.screens.usable_frame
        result = layout.calculate(windows, area, owner)
        if not result:
            logger.debug(f"{action.value}: nothing to arrange for owner {owner}")
            return
        raised = layout.raise_order(windows, result, owner)

        for win, geom in result.items():
            try:
                self.mover.set_frame(win.descriptor, geom.to_area())
            except Exception as e:
                logger.warning(
                    f"{action.value}: could not move window {win.window_id}: {e}"
                )
        for win in raised:
            try:
                self.mover.bring_to_front(win.descriptor)
            except Exception as e:
                logger.warning(
                    f"{action.value}: could not raise window {win.window_id}: {e}"
                )

        logger.info(f"{action.value}: arranged {len(result)} windows with {layout.name}")
        pub.sendMessage(
            topics.LAYOUT_APPLIED, action=action.value, window_count=len(result)
        )

    def _plan(self, action: Action, windows) -> Optional[Tuple[Layout, Optional[int]]]:
        """Pick the layout and owner for an action, advancing focus if needed."""
        if action == Action.TILE_ALL:
            return self.grid_layout, None
        if action == Action.CASCADE_ALL:
            return self.cascade_layout, None
        if action == Action.REVERSE_ALL:
            return self.reverse_layout, None

        front = self.accessibility.frontmost_window()
        front_pid = front.pid if front is not None else None

        if action in (Action.CASCADE_ACTIVE_APP, Action.TILE_ACTIVE_APP):
            if front_pid is None:
                logger.debug(f"{action.value}: no frontmost application")
                return None
            if action == Action.CASCADE_ACTIVE_APP:
                return self.cascade_layout, front_pid
            return self.grid_layout, front_pid

        direction = (
            CycleDirection.NEXT if action == Action.FOCUS_NEXT else CycleDirection.PREV
        )
        owner = self.focus_state.advance(direction, unique_owners(windows), front_pid)
        if owner is None:
            return None
        pub.sendMessage(topics.FOCUS_CHANGED, owner=owner)
        return self.focus_layout, owner

    # Command event handlers
    def _on_tile_all(self):
        """Handle CMD_TILE_ALL command."""
        self.handle(Action.TILE_ALL)

    def _on_cascade_all(self):
        """Handle CMD_CASCADE_ALL command."""
        self.handle(Action.CASCADE_ALL)

    def _on_cascade_active_app(self):
        """Handle CMD_CASCADE_ACTIVE_APP command."""
        self.handle(Action.CASCADE_ACTIVE_APP)

    def _on_tile_active_app(self):
        """Handle CMD_TILE_ACTIVE_APP command."""
        self.handle(Action.TILE_ACTIVE_APP)

    def _on_reverse_all(self):
        """Handle CMD_REVERSE_ALL command."""
        self.handle(Action.REVERSE_ALL)

    def _on_focus_next(self):
        """Handle CMD_FOCUS_NEXT command."""
        self.handle(Action.FOCUS_NEXT)

    def _on_focus_prev(self):
        """Handle CMD_FOCUS_PREV command."""
        self.handle(Action.FOCUS_PREV)
