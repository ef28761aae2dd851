"""
Unit tests for the layout dispatcher.
"""

import logging

import pytest
from pubsub import pub

from multiwin import topics
from multiwin.dispatcher import Action, DispatcherConfig, LayoutDispatcher
from multiwin.focus_manager import FocusCycleState
from multiwin.protocol import Area

A, B, C = 300, 200, 100


@pytest.fixture
def make_dispatcher(desktop, clock):
    def factory(**config):
        return LayoutDispatcher(
            accessibility=desktop,
            screen_detector=desktop,
            mover=desktop,
            window_query=desktop.query,
            config=DispatcherConfig(**config),
            focus_state=FocusCycleState(),
            clock=clock,
        )

    return factory


@pytest.fixture
def three_apps(desktop, make_descriptor):
    """One window each for owners A (frontmost), B and C."""
    a = desktop.add(make_descriptor(1, pid=A, x=100, y=100, width=500, height=400))
    b = desktop.add(make_descriptor(2, pid=B, x=200, y=150, width=600, height=500))
    c = desktop.add(make_descriptor(3, pid=C, x=300, y=200, width=400, height=300))
    desktop.front = a
    return a, b, c


def spans_left_column(area):
    return area.x == pytest.approx(0) and area.x + area.width == pytest.approx(700)


def spans_right_column(area):
    return area.x == pytest.approx(700) and area.x + area.width == pytest.approx(1000)


@pytest.mark.unit
class TestDispatcherConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        config = DispatcherConfig()
        assert config.cascade_delta == 30.0
        assert config.focus_ratio == 0.7
        assert config.focus_gap == 15.0
        assert config.cache_timeout_ms == 100.0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"cascade_delta": -1},
            {"focus_ratio": 0},
            {"focus_ratio": 1.5},
            {"focus_gap": -5},
            {"cache_timeout_ms": -1},
        ],
    )
    def test_rejects_out_of_range_values(self, overrides):
        with pytest.raises(ValueError):
            DispatcherConfig(**overrides)


@pytest.mark.unit
class TestLayoutDispatcher:
    """Test action dispatch end to end against a fake desktop."""

    def test_unknown_action_not_handled(self, make_dispatcher, desktop, three_apps):
        dispatcher = make_dispatcher()

        assert dispatcher.handle("maximize") is False
        assert desktop.frames == []

    def test_accepts_enum_and_name(self, make_dispatcher, three_apps):
        dispatcher = make_dispatcher()

        assert dispatcher.handle(Action.TILE_ALL) is True
        assert dispatcher.handle("tile-all") is True

    def test_no_target_is_handled_without_moving(
        self, make_dispatcher, desktop, make_descriptor
    ):
        desktop.add(make_descriptor(1, pid=A))
        notified = []

        def on_no_target(action):
            notified.append(action)

        pub.subscribe(on_no_target, topics.LAYOUT_NO_TARGET)
        dispatcher = make_dispatcher()

        assert dispatcher.handle("cascade-all") is True
        assert desktop.frames == []
        assert notified == ["cascade-all"]

    def test_empty_screen_is_a_silent_no_op(
        self, make_dispatcher, desktop, make_descriptor
    ):
        desktop.front = desktop.add(make_descriptor(1, pid=A, is_hidden=True))
        applied = []

        def on_applied(action, window_count):
            applied.append(action)

        pub.subscribe(on_applied, topics.LAYOUT_APPLIED)
        dispatcher = make_dispatcher()

        assert dispatcher.handle("focus-next") is True
        assert desktop.frames == []
        assert applied == []
        assert dispatcher.focus_state.focused_owner is None

    def test_compositor_failure_moves_nothing(
        self, make_dispatcher, desktop, three_apps
    ):
        desktop.query_error = RuntimeError("boom")
        dispatcher = make_dispatcher()

        assert dispatcher.handle("tile-all") is True
        assert desktop.frames == []

    def test_tile_all_orders_by_owner(self, make_dispatcher, desktop, make_descriptor):
        desktop.front = desktop.add(make_descriptor(1, pid=C))
        desktop.add(make_descriptor(2, pid=A))
        desktop.add(make_descriptor(3, pid=B))
        dispatcher = make_dispatcher()

        dispatcher.handle("tile-all")

        assert [wid for wid, _ in desktop.frames] == [2, 3, 1]
        assert desktop.frame_of(2) == Area(0, 0, 500, 500)
        assert desktop.frame_of(3) == Area(500, 0, 500, 500)
        assert desktop.frame_of(1) == Area(0, 500, 500, 500)
        assert desktop.raised == []

    def test_cascade_all_raises_every_window(
        self, make_dispatcher, desktop, three_apps
    ):
        dispatcher = make_dispatcher(cascade_delta=40)

        dispatcher.handle("cascade-all")

        assert desktop.frame_of(1) == Area(0, 0, 500, 400)
        assert desktop.frame_of(2) == Area(40, 40, 600, 500)
        assert desktop.frame_of(3) == Area(80, 80, 400, 300)
        assert desktop.raised == [1, 2, 3]

    def test_cascade_active_app_only_moves_frontmost_owner(
        self, make_dispatcher, desktop, three_apps, make_descriptor
    ):
        desktop.add(make_descriptor(4, pid=A, width=300, height=300))
        dispatcher = make_dispatcher()

        dispatcher.handle("cascade-active-app")

        assert {wid for wid, _ in desktop.frames} == {1, 4}
        # the previously first window is placed last and ends up on top
        assert desktop.raised == [4, 1]
        assert desktop.frame_of(1) == Area(30, 30, 500, 400)

    def test_tile_active_app(self, make_dispatcher, desktop, three_apps, make_descriptor):
        desktop.add(make_descriptor(4, pid=A))
        dispatcher = make_dispatcher()

        dispatcher.handle("tile-active-app")

        assert desktop.frame_of(1) == Area(0, 0, 500, 1000)
        assert desktop.frame_of(4) == Area(500, 0, 500, 1000)
        assert desktop.frame_of(2) is None

    def test_active_app_actions_need_frontmost_window(
        self, make_dispatcher, desktop, three_apps
    ):
        dispatcher = make_dispatcher()
        anchor = three_apps[0]
        desktop.front = None

        assert dispatcher.handle("tile-active-app", anchor) is True
        assert desktop.frames == []

    def test_tile_all_counts_repeated_window_once(
        self, make_dispatcher, desktop, make_descriptor
    ):
        desktop.front = desktop.add(make_descriptor(1, pid=A))
        desktop.add(make_descriptor(2, pid=B))
        desktop.windows.append(make_descriptor(1, pid=A))
        dispatcher = make_dispatcher()

        dispatcher.handle("tile-all")

        assert desktop.frames == [
            (1, Area(0, 0, 500, 1000)),
            (2, Area(500, 0, 500, 1000)),
        ]

    def test_active_app_off_screen_is_not_applied(
        self, make_dispatcher, desktop, three_apps, make_descriptor
    ):
        elsewhere = desktop.add(make_descriptor(9, pid=999))
        desktop.screen_of[9] = "external"
        desktop.front = elsewhere
        applied = []

        def on_applied(action, window_count):
            applied.append((action, window_count))

        pub.subscribe(on_applied, topics.LAYOUT_APPLIED)
        dispatcher = make_dispatcher()

        assert dispatcher.handle("cascade-active-app", three_apps[0]) is True
        assert dispatcher.handle("tile-active-app", three_apps[0]) is True
        assert desktop.frames == []
        assert applied == []

    def test_mover_failure_does_not_stop_layout(
        self, make_dispatcher, desktop, three_apps, caplog
    ):
        moved = []

        def set_frame(window, area):
            if window.window_id == 1:
                raise RuntimeError("window closed")
            moved.append(window.window_id)

        def bring_to_front(window):
            raise RuntimeError("app not responding")

        desktop.set_frame = set_frame
        desktop.bring_to_front = bring_to_front
        dispatcher = make_dispatcher()

        with caplog.at_level(logging.WARNING, logger="multiwin.dispatcher"):
            assert dispatcher.handle("cascade-all") is True

        assert moved == [2, 3]
        assert any("could not move window 1" in r.message for r in caplog.records)
        assert any("could not raise window" in r.message for r in caplog.records)

    def test_reverse_all(self, make_dispatcher, desktop, three_apps):
        dispatcher = make_dispatcher()

        dispatcher.handle("reverse-all")

        assert desktop.frame_of(1) == Area(400, 100, 500, 400)

    def test_focus_next_cycles_owners(self, make_dispatcher, desktop, three_apps):
        dispatcher = make_dispatcher(focus_gap=0)

        dispatcher.handle("focus-next")

        assert spans_left_column(desktop.frame_of(1))
        assert spans_right_column(desktop.frame_of(2))
        assert spans_right_column(desktop.frame_of(3))
        assert desktop.raised == [1]

        desktop.frames.clear()
        dispatcher.handle("focus-next")

        assert spans_left_column(desktop.frame_of(2))
        assert spans_right_column(desktop.frame_of(1))
        assert spans_right_column(desktop.frame_of(3))
        assert desktop.raised == [1, 2]

    def test_focus_prev_wraps_around(self, make_dispatcher, desktop, three_apps):
        dispatcher = make_dispatcher()
        owners = []

        def on_focus(owner):
            owners.append(owner)

        pub.subscribe(on_focus, topics.FOCUS_CHANGED)

        for _ in range(4):
            dispatcher.handle("focus-prev")

        assert owners == [A, C, B, A]

    def test_focus_recovers_when_owner_disappears(
        self, make_dispatcher, desktop, three_apps, clock
    ):
        dispatcher = make_dispatcher(focus_gap=0)
        dispatcher.handle("focus-next")
        dispatcher.handle("focus-next")
        assert dispatcher.focus_state.focused_owner == B

        desktop.windows = [w for w in desktop.windows if w.pid != B]
        desktop.frames.clear()
        clock.advance_ms(200)
        dispatcher.handle("focus-next")

        assert dispatcher.focus_state.focused_owner == A
        assert spans_left_column(desktop.frame_of(1))

    def test_focus_state_is_per_dispatcher(self, make_dispatcher, three_apps):
        first = make_dispatcher()
        second = make_dispatcher()

        first.handle("focus-next")
        first.handle("focus-next")
        second.handle("focus-next")

        assert first.focus_state.focused_owner == B
        assert second.focus_state.focused_owner == A

    def test_applied_notification(self, make_dispatcher, three_apps):
        applied = []

        def on_applied(action, window_count):
            applied.append((action, window_count))

        pub.subscribe(on_applied, topics.LAYOUT_APPLIED)
        dispatcher = make_dispatcher()

        dispatcher.handle("tile-all")

        assert applied == [("tile-all", 3)]

    def test_command_topics_trigger_actions(
        self, make_dispatcher, desktop, three_apps
    ):
        dispatcher = make_dispatcher()

        pub.sendMessage(topics.CMD_CASCADE_ALL)

        assert dispatcher.focus_state.focused_owner is None
        assert desktop.raised == [1, 2, 3]

        pub.sendMessage(topics.CMD_FOCUS_NEXT)

        assert dispatcher.focus_state.focused_owner == A

    def test_debug_event_logger(
        self, make_dispatcher, three_apps, monkeypatch, caplog
    ):
        monkeypatch.setenv("MULTIWIN_DEBUG", "1")
        dispatcher = make_dispatcher()

        with caplog.at_level(logging.DEBUG, logger="multiwin.dispatcher"):
            dispatcher.handle("tile-all")

        assert any("EVENT: layout.applied" in r.message for r in caplog.records)
