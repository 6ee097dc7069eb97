import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from orrery.canvas import Canvas
from orrery.data_models import Body
from orrery.loop import FrameScheduler
from orrery.presets_loader import load_template


class RecordingCanvas(Canvas):
    """Off-screen canvas that records every primitive in device coordinates."""

    def __init__(self, width=600, height=800):
        super().__init__(width, height)
        self.calls = []

    def clear(self):
        self.calls.append(("clear", self.width, self.height))

    def fill_circle(self, x, y, radius, color):
        dx, dy = self.to_device(x, y)
        self.calls.append(("fill_circle", dx, dy, radius, color))

    def stroke_circle(self, x, y, radius, color):
        dx, dy = self.to_device(x, y)
        self.calls.append(("stroke_circle", dx, dy, radius, color))

    def present(self):
        self.calls.append(("present",))

    def fills(self):
        return [c for c in self.calls if c[0] == "fill_circle"]

    def fill_for(self, color):
        return [c for c in self.fills() if c[4] == color]


class ManualScheduler(FrameScheduler):
    """Runs the pending callback only when a test fires a frame."""

    def fire(self, timestamp):
        callback = self.take_pending()
        assert callback is not None, "no frame requested"
        callback(timestamp)


class FixedSpeed:
    def __init__(self, factor=1.0):
        self.factor = factor
        self.reads = 0

    def speed_factor(self):
        self.reads += 1
        return self.factor


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def sun_earth_moon():
    sun = Body("Sun", 0, 20, "yellow")
    earth = sun.attach(Body("Earth", 150, 10, "blue"))
    earth.attach(Body("Moon", 20, 3, "gray"))
    return sun


@pytest.fixture
def solar_system():
    root, _, _ = load_template("solar_system.json")
    return root


@pytest.fixture
def speed():
    return FixedSpeed(1.0)
