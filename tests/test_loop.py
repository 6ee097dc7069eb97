import math

import pytest

from orrery.loop import FrameLoop, FrameScheduler
from orrery.renderer import OrreryView
from orrery.speed import SpeedControl


@pytest.fixture
def loop_parts(sun_earth_moon, canvas, speed, scheduler):
    view = OrreryView(canvas, sun_earth_moon)
    loop = FrameLoop(sun_earth_moon, view, speed, scheduler)
    return loop, view


def test_first_tick_draws_even_when_paused(loop_parts, speed, scheduler, sun_earth_moon):
    loop, view = loop_parts
    speed.factor = 0
    loop.start()
    scheduler.fire(5000.0)

    assert view.frames_drawn == 1
    assert loop.drawn_once
    assert loop.last_timestamp == 5000.0
    assert all(b.angle == 0 for b in sun_earth_moon.walk())


def test_first_tick_uses_zero_delta(loop_parts, scheduler, sun_earth_moon):
    loop, view = loop_parts
    loop.start()
    scheduler.fire(123456.0)
    assert all(b.angle == 0 for b in sun_earth_moon.walk())
    assert view.frames_drawn == 1


def test_delta_time_is_wall_clock_seconds(loop_parts, scheduler, sun_earth_moon):
    loop, _ = loop_parts
    loop.start()
    scheduler.fire(1000.0)
    scheduler.fire(2000.0)

    assert sun_earth_moon.find("Earth").angle == pytest.approx(math.pi / 150 ** 1.5)
    assert sun_earth_moon.find("Moon").angle == pytest.approx(math.pi / 20 ** 1.5)
    assert sun_earth_moon.angle == 0


def test_frame_rate_does_not_change_revolution(sun_earth_moon, canvas, speed):
    def run(frames_per_second):
        for body in sun_earth_moon.walk():
            body.angle = 0.0
        scheduler = _Manual()
        loop = FrameLoop(sun_earth_moon, OrreryView(canvas, sun_earth_moon), speed, scheduler)
        loop.start()
        for i in range(frames_per_second + 1):
            scheduler.fire(i * 1000.0 / frames_per_second)
        return sun_earth_moon.find("Moon").angle

    assert run(60) == pytest.approx(run(20))
    assert run(60) == pytest.approx(math.pi / 20 ** 1.5)


def test_paused_ticks_skip_work_but_track_time(loop_parts, speed, scheduler, sun_earth_moon):
    loop, view = loop_parts
    loop.start()
    scheduler.fire(0.0)
    scheduler.fire(500.0)
    earth = sun_earth_moon.find("Earth")
    angle = earth.angle
    drawn = view.frames_drawn

    speed.factor = 0
    scheduler.fire(1500.0)
    scheduler.fire(2500.0)
    assert earth.angle == angle
    assert view.frames_drawn == drawn
    assert loop.last_timestamp == 2500.0

    # Resuming only counts the time since the last paused tick
    speed.factor = 1
    scheduler.fire(3500.0)
    assert earth.angle == pytest.approx(angle + math.pi / 150 ** 1.5)


def test_speed_read_every_tick(loop_parts, speed, scheduler):
    loop, _ = loop_parts
    loop.start()
    for t in (0.0, 16.0, 32.0):
        scheduler.fire(t)
    assert speed.reads == 3


def test_update_happens_before_draw(sun_earth_moon, speed, scheduler):
    events = []

    class SpyView:
        def draw(self):
            events.append(("draw", sun_earth_moon.find("Earth").angle))

    loop = FrameLoop(sun_earth_moon, SpyView(), speed, scheduler)
    loop.start()
    scheduler.fire(0.0)
    scheduler.fire(1000.0)
    assert events[1][1] == pytest.approx(math.pi / 150 ** 1.5)


def test_loop_reschedules_until_closed(loop_parts, scheduler):
    loop, view = loop_parts
    loop.start()
    scheduler.fire(0.0)
    assert scheduler.take_pending() is not None

    loop.tick(16.0)
    scheduler.close()
    loop.tick(32.0)
    assert scheduler.take_pending() is None
    assert scheduler.request_frame(loop.tick) is False


def test_loop_requires_collaborators(sun_earth_moon, speed, scheduler):
    with pytest.raises(ValueError):
        FrameLoop(sun_earth_moon, None, speed, scheduler)
    with pytest.raises(ValueError):
        FrameLoop(sun_earth_moon, object(), speed, None)


def test_speed_control_feeds_loop(sun_earth_moon, canvas, scheduler):
    control = SpeedControl(0)
    view = OrreryView(canvas, sun_earth_moon)
    loop = FrameLoop(sun_earth_moon, view, control, scheduler)
    loop.start()
    scheduler.fire(0.0)
    scheduler.fire(1000.0)
    assert sun_earth_moon.find("Earth").angle == 0

    control.set_value(2)
    scheduler.fire(2000.0)
    assert sun_earth_moon.find("Earth").angle == pytest.approx(math.pi / 150 ** 1.5 * 2 ** 1.75)


class _Manual(FrameScheduler):
    def fire(self, timestamp):
        self.take_pending()(timestamp)
