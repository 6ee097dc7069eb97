import threading

import pytest

from orrery.constants import SPEED_MAX, SPEED_MIN
from orrery.speed import SpeedControl, speed_factor_for


def test_zero_means_paused():
    assert speed_factor_for(0) == 0
    assert SpeedControl().speed_factor() == 0


def test_response_curve():
    assert speed_factor_for(1) == 1
    assert speed_factor_for(16) == pytest.approx(16 ** 1.75)
    assert speed_factor_for(500) == pytest.approx(500 ** 1.75)


def test_curve_is_monotonic():
    factors = [speed_factor_for(v) for v in range(SPEED_MIN, SPEED_MAX + 1)]
    assert all(a < b for a, b in zip(factors, factors[1:]))


def test_value_is_clamped_to_slider_range():
    control = SpeedControl(42)
    assert control.value == 42
    assert control.set_value(-5) == SPEED_MIN
    assert control.set_value(10_000) == SPEED_MAX
    assert control.set_value("7") == 7


def test_concurrent_writes_leave_a_valid_value():
    control = SpeedControl()

    def writer(v):
        for _ in range(200):
            control.set_value(v)

    threads = [threading.Thread(target=writer, args=(v,)) for v in (3, 300)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert control.value in (3, 300)
