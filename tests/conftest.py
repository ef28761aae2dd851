"""
Shared pytest fixtures for multiwin tests.
"""

import pytest
from pubsub import pub

from multiwin.protocol import (
    Area,
    CompositorWindowInfo,
    UsableScreens,
    WindowDescriptor,
)
from multiwin.window_resolver import EligibleWindow


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without real windows")


@pytest.fixture(autouse=True)
def clean_bus():
    """Drop pubsub listeners left over from a previous test."""
    yield
    pub.unsubAll()


@pytest.fixture
def make_descriptor():
    """Factory fixture for accessibility window descriptors."""

    def factory(window_id, pid, x=0, y=0, width=800, height=600, **flags):
        return WindowDescriptor(
            window_id=window_id,
            pid=pid,
            frame=Area(x, y, width, height),
            **flags,
        )

    return factory


@pytest.fixture
def make_window(make_descriptor):
    """Factory fixture for eligible windows."""

    def factory(window_id, pid, x=0, y=0, width=800, height=600):
        return EligibleWindow(make_descriptor(window_id, pid, x, y, width, height))

    return factory


@pytest.fixture
def make_info():
    """Factory fixture for compositor window info."""

    def factory(window_id, pid=1, level=0, alpha=1.0, x=0, y=0, width=800, height=600):
        return CompositorWindowInfo(
            window_id=window_id,
            level=level,
            frame=Area(x, y, width, height),
            pid=pid,
            alpha=alpha,
        )

    return factory


@pytest.fixture
def screen_area():
    """1000x1000 screen for layout tests."""
    return Area(0, 0, 1000, 1000)


@pytest.fixture
def standard_area():
    """Standard 1920x1080 area with a menu bar inset."""
    return Area(0, 25, 1920, 1055)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance_ms(self, ms):
        self.now += ms / 1000


@pytest.fixture
def clock():
    return FakeClock()


class FakeDesktop:
    """Accessibility provider, screen detector, mover and compositor in one.

    Windows are placed on screen "main" unless listed in `screen_of`.
    """

    def __init__(self, usable_frame):
        self.usable_frame = usable_frame
        self.windows = []
        self.infos = []
        self.front = None
        self.screen_of = {}
        self.undetectable = set()
        self.frames = []
        self.raised = []
        self.queries = 0
        self.query_error = None

    def add(self, descriptor, info=None):
        """Add a window, visible to the compositor unless info is given."""
        self.windows.append(descriptor)
        if info is None:
            info = CompositorWindowInfo(
                window_id=descriptor.window_id,
                level=0,
                frame=descriptor.frame,
                pid=descriptor.pid,
            )
        self.infos.append(info)
        return descriptor

    # AccessibilityProvider
    def list_all_windows(self):
        return list(self.windows)

    def frontmost_window(self):
        return self.front

    # ScreenDetector
    def detect_screens(self, window):
        if window.window_id in self.undetectable:
            return None
        screen = self.screen_of.get(window.window_id, "main")
        return UsableScreens(current_screen=screen, usable_frame=self.usable_frame)

    # WindowMover
    def set_frame(self, window, area):
        self.frames.append((window.window_id, area))

    def bring_to_front(self, window):
        self.raised.append(window.window_id)

    # Compositor query
    def query(self, ids, include_offscreen):
        self.queries += 1
        if self.query_error is not None:
            raise self.query_error
        if ids is None:
            return list(self.infos)
        return [info for info in self.infos if info.window_id in ids]

    def frame_of(self, window_id):
        """Last frame applied to a window."""
        for wid, area in reversed(self.frames):
            if wid == window_id:
                return area
        return None


@pytest.fixture
def desktop(screen_area):
    return FakeDesktop(screen_area)
