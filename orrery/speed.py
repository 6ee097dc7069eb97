#!/usr/bin/env python3
"""
Speed slider model.

The slider value is written by the controls UI thread and read once per tick
by the frame loop; access is guarded by a lock.
"""
import threading

from .constants import SPEED_EXPONENT, SPEED_MAX, SPEED_MIN
from .vector_utils import clamp


def speed_factor_for(value: int) -> float:
    """Non-linear response curve: fine control at low values, large range at the top."""
    return float(value) ** SPEED_EXPONENT


class SpeedControl:
    """Holds the raw integer slider value in [SPEED_MIN, SPEED_MAX]."""

    def __init__(self, value: int = SPEED_MIN):
        self.lock = threading.RLock()
        self._value = SPEED_MIN
        self.set_value(value)

    @property
    def value(self) -> int:
        with self.lock:
            return self._value

    def set_value(self, value) -> int:
        with self.lock:
            self._value = int(clamp(int(value), SPEED_MIN, SPEED_MAX))
            return self._value

    def speed_factor(self) -> float:
        with self.lock:
            return speed_factor_for(self._value)
