#!/usr/bin/env python3
"""
Frame loop for Orrery Simulator.

FrameLoop is driven by a FrameScheduler: every tick it reads the speed input,
advances the Body tree by the wall-clock time since the previous tick, draws,
and asks the scheduler for the next tick.

States
- not yet drawn: the first tick always updates (with delta 0) and draws, even
  when the speed is 0, so something is on screen at startup.
- running: ticks with speed 0 skip update and draw; the last frame stays up.

The scheduler is a port so tests can feed synthetic timestamps.
"""
import logging
from typing import Callable, Optional

from .constants import MS_PER_SECOND

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler:
    """
    Callback registration for the next display frame.

    request_frame() stores one callback which the platform invokes with a
    monotonic timestamp in milliseconds. After close() nothing is scheduled.
    """

    def __init__(self):
        self.closed = False
        self._pending: Optional[FrameCallback] = None

    def request_frame(self, callback: FrameCallback) -> bool:
        if self.closed:
            return False
        self._pending = callback
        return True

    def take_pending(self) -> Optional[FrameCallback]:
        callback, self._pending = self._pending, None
        return callback

    def close(self) -> None:
        self.closed = True
        self._pending = None


class FrameLoop:
    """Ties the Body tree, the renderer and the speed input to a scheduler."""

    def __init__(self, root, view, speed_input, scheduler: FrameScheduler):
        for label, collaborator in (("root body", root), ("view", view),
                                    ("speed input", speed_input), ("scheduler", scheduler)):
            if collaborator is None:
                raise ValueError(f"FrameLoop needs a {label}")
        self.root = root
        self.view = view
        self.speed_input = speed_input
        self.scheduler = scheduler
        self.drawn_once = False
        self.last_timestamp = 0.0
        self._paused = False

    def start(self) -> None:
        self.scheduler.request_frame(self.tick)

    def tick(self, timestamp: float) -> None:
        speed_factor = self.speed_input.speed_factor()
        if speed_factor > 0 or not self.drawn_once:
            delta_time = (timestamp - self.last_timestamp) / MS_PER_SECOND if self.drawn_once else 0.0
            self.root.update(delta_time, speed_factor)
            self.view.draw()
            self.drawn_once = True
        self._note_pause_state(speed_factor == 0)
        self.last_timestamp = timestamp
        if not self.scheduler.closed:
            self.scheduler.request_frame(self.tick)

    def _note_pause_state(self, paused: bool) -> None:
        if paused != self._paused:
            self._paused = paused
            logger.debug("Orbits %s", "paused" if paused else "resumed")
