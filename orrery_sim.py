#!/usr/bin/env python3
"""
Orrery Simulator application entry point and UI/viewport coordination.

What this module does
- Loads a system template (orrery/templates/*.json or a path) into a Body tree.
- Runs the pygame viewport: a frame scheduler that pumps window events and
  calls the FrameLoop once per display frame.
- Runs a Dear PyGui controls window with the speed slider (on the main thread).

Threading model
- ViewportThread owns the Body tree, the drawing surface, the renderer and the
  frame loop. Nothing else touches them, so ticks and resize redraws are
  strictly sequential.
- The controls UI only writes the slider value into SpeedControl, which is
  lock-protected. It polls the viewport every few frames and shuts itself down
  once the viewport window is closed.
- With --no-controls the viewport runs on the main thread and the speed stays
  at the value given on the command line.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python orrery_sim.py [--template solar_system] [--speed 60]`
"""

import argparse
import logging
import sys
import threading
import time
from typing import Optional

# GUI and Rendering libs
import pygame
import dearpygui.dearpygui as dpg

from orrery.canvas import PygameCanvas
from orrery.constants import (
    DEFAULT_TEMPLATE,
    MS_PER_SECOND,
    SPEED_MAX,
    SPEED_MIN,
    SPEED_STEP,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from orrery.data_models import Body
from orrery.loop import FrameLoop, FrameScheduler
from orrery.presets_loader import PresetError, list_templates, load_template
from orrery.renderer import OrreryView
from orrery.speed import SpeedControl

logger = logging.getLogger("orrery")

# ============================================================
# Pygame frame scheduler
# ============================================================

class PygameFrameScheduler(FrameScheduler):
    """
    Calls the pending frame callback once per display frame, capped at fps.

    Window events are handled before each frame: QUIT closes the scheduler,
    VIDEORESIZE is forwarded to on_resize so the view redraws at once.
    """
    def __init__(self, fps: int = TARGET_FPS):
        super().__init__()
        self.fps = fps
        self.clock = None
        self.on_resize = None

    def run(self):
        self.clock = pygame.time.Clock()
        while not self.closed:
            self.handle_events()
            callback = self.take_pending()
            if callback is None:
                break
            callback(time.perf_counter() * MS_PER_SECOND)
            self.clock.tick(self.fps)

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("Viewport closed")
                self.close()
            elif event.type == pygame.VIDEORESIZE and self.on_resize is not None:
                self.on_resize(event.w, event.h)

# ============================================================
# Viewport thread
# ============================================================

class ViewportThread(threading.Thread):
    """
    Pygame side of the application: window, renderer and frame loop.
    """
    def __init__(self, root: Body, speed: SpeedControl, title: str,
                 width: int = VIEW_WIDTH, height: int = VIEW_HEIGHT, fps: int = TARGET_FPS):
        super().__init__(daemon=True)
        self.root = root
        self.speed = speed
        self.title = title
        self.size = (width, height)
        self.scheduler = PygameFrameScheduler(fps)
        self.error: Optional[Exception] = None

    def run(self):
        try:
            canvas = PygameCanvas.open_window(self.size[0], self.size[1], f"Orrery - {self.title}")
        except RuntimeError as exc:
            logger.error("%s", exc)
            self.error = exc
            self.scheduler.close()
            return

        try:
            view = OrreryView(canvas, self.root)
            self.scheduler.on_resize = view.on_resize
            loop = FrameLoop(self.root, view, self.speed, self.scheduler)
            loop.start()
            self.scheduler.run()
        finally:
            self.scheduler.close()
            pygame.quit()

    @property
    def running(self) -> bool:
        return not self.scheduler.closed

    def stop(self):
        self.scheduler.close()

# ============================================================
# Dear PyGui UI
# ============================================================

class ControlsUI:
    """
    Dear PyGui interface: speed slider, speed factor readout, status line.
    """
    def __init__(self, speed: SpeedControl, viewport: ViewportThread, title: str):
        self.speed = speed
        self.viewport = viewport
        self.title = title

        self.slider_id = None
        self.factor_text_id = None
        self.status_msg_id = None

        self._build_ui()
        self._update_factor_text()
        self._set_status(f"Loaded template: {title}")

        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic viewport check (~10Hz at 60 FPS)."""
        current = dpg.get_frame_count()
        dpg.set_frame_callback(current + 6, self._sync_with_viewport)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Orrery - Controls', width=420, height=170)

        with dpg.window(label="Controls", width=400, height=150, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Speed:")
                self.slider_id = dpg.add_slider_int(min_value=SPEED_MIN, max_value=SPEED_MAX,
                                                    default_value=self.speed.value, width=300,
                                                    callback=lambda s, a, u: self._on_speed_changed(a),
                                                    tag="speed_slider")
            self.factor_text_id = dpg.add_text("")
            dpg.add_separator()
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _on_speed_changed(self, value):
        # Slider step is SPEED_STEP; snap in case the widget reports anything else
        value = int(value) // SPEED_STEP * SPEED_STEP
        self.speed.set_value(value)
        self._update_factor_text()
        self._set_status("Paused" if self.speed.value == 0 else "Running")

    def _update_factor_text(self):
        dpg.set_value(self.factor_text_id, f"Speed factor: {self.speed.speed_factor():,.1f}")

    def _sync_with_viewport(self):
        if self.viewport.error is not None:
            self._set_error(str(self.viewport.error))
        if not self.viewport.running:
            dpg.stop_dearpygui()
            return
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Animated orrery of nested orbiting bodies.")
    parser.add_argument("--template", default=DEFAULT_TEMPLATE,
                        help="bundled template name or path to a template JSON file")
    parser.add_argument("--list-templates", action="store_true",
                        help="print the bundled templates and exit")
    parser.add_argument("--speed", type=int, default=None,
                        help=f"initial slider value ({SPEED_MIN}-{SPEED_MAX}); defaults to the template's")
    parser.add_argument("--width", type=int, default=VIEW_WIDTH)
    parser.add_argument("--height", type=int, default=VIEW_HEIGHT)
    parser.add_argument("--fps", type=int, default=TARGET_FPS)
    parser.add_argument("--no-controls", action="store_true",
                        help="run the viewport only, at the initial speed")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.list_templates:
        for fn, display in list_templates():
            print(f"{fn:<24} {display}")
        return

    try:
        root, template_speed, display_name = load_template(args.template)
    except PresetError as exc:
        raise SystemExit(f"orrery-sim: {exc}")

    initial = args.speed if args.speed is not None else (template_speed or SPEED_MIN)
    speed = SpeedControl(initial)
    viewport = ViewportThread(root, speed, display_name, args.width, args.height, args.fps)

    if args.no_controls:
        viewport.run()
    else:
        # Start pygame viewport thread
        viewport.start()
        ControlsUI(speed, viewport, display_name)
        try:
            dpg.start_dearpygui()
        finally:
            viewport.stop()
            viewport.join(timeout=2.0)
            dpg.destroy_context()

    if viewport.error is not None:
        raise SystemExit(f"orrery-sim: {viewport.error}")


if __name__ == "__main__":
    main(sys.argv[1:])
