"""
Event Topics for multiwin

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>

Command topics are published by key bindings or URL handlers; the
LayoutDispatcher subscribes to them. Notification topics are published by
the dispatcher after it acts.
"""

# Layout commands
CMD_TILE_ALL = "cmd.tile_all"
"""Command: Tile every eligible window on the anchor's screen in a grid."""

CMD_CASCADE_ALL = "cmd.cascade_all"
"""Command: Cascade every eligible window on the anchor's screen."""

CMD_CASCADE_ACTIVE_APP = "cmd.cascade_active_app"
"""Command: Cascade the frontmost application's windows."""

CMD_TILE_ACTIVE_APP = "cmd.tile_active_app"
"""Command: Tile the frontmost application's windows in a grid."""

CMD_REVERSE_ALL = "cmd.reverse_all"
"""Command: Mirror every eligible window horizontally on its screen."""

# Focus layout commands
CMD_FOCUS_NEXT = "cmd.focus_next"
"""Command: Give the focus column to the next application."""

CMD_FOCUS_PREV = "cmd.focus_prev"
"""Command: Give the focus column to the previous application."""

# Notifications
LAYOUT_APPLIED = "layout.applied"
"""Published after a layout was applied. Params: action, window_count"""

LAYOUT_NO_TARGET = "layout.no_target"
"""Published when no anchor window or screen could be found. Params: action

The surrounding application plays its alert sound on this topic.
"""

FOCUS_CHANGED = "focus.changed"
"""Published when the focus layout picks an owner. Params: owner"""
