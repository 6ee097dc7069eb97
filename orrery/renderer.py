#!/usr/bin/env python3
"""
Orrery renderer.

Draws a Body tree onto a Canvas. Every orbit is expressed as "rotate by the
body's angle, then translate along the local x-axis by its distance", nested
once per tree level, so a moon lands on its planet's position plus its own
orbital offset without absolute coordinates being computed anywhere.

Scaling
- One distance-to-pixel scale per frame: the farthest immediate child of the
  root (the reach body), plus its radius, is fitted to the smaller half-extent
  of the canvas.
- If every child sits at distance 0 the root itself is the reach body.
- A root with no children is drawn alone with FALLBACK_SCALE.

Drawing order is pre-order with children nearest first, which fixes layering.
"""
import logging
import math

from .canvas import Canvas
from .constants import FALLBACK_SCALE, ORBIT_RING_COLOR, ORBIT_RING_OVERLAY_COLOR
from .data_models import Body

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def reach_body(root: Body) -> Body:
    """
    Immediate child of root with the largest positive distance; first one wins
    ties. The root itself when nothing orbits farther out than distance 0.
    """
    reach = root
    farthest = 0.0
    for child in root.children:
        if child.distance > farthest:
            farthest = child.distance
            reach = child
    return reach


def compute_scale(root: Body, width: float, height: float) -> float:
    """Pixels per orrery unit that fit the reach body's orbit into the canvas."""
    if not root.children:
        return FALLBACK_SCALE
    reach = reach_body(root)
    extent = reach.distance + reach.radius
    if extent <= 0:
        return FALLBACK_SCALE
    return min(width / 2, height / 2) / extent


class OrreryView:
    """Renders the current state of a Body tree, auto-scaled to the canvas."""

    def __init__(self, canvas: Canvas, root: Body):
        if canvas is None:
            raise ValueError("OrreryView needs a drawing surface")
        if root is None:
            raise ValueError("OrreryView needs a root body")
        self.canvas = canvas
        self.root = root
        self.scale = FALLBACK_SCALE
        self.frames_drawn = 0

    def draw(self) -> None:
        """Clear the canvas and paint the whole tree."""
        canvas = self.canvas
        canvas.reset_transform()
        canvas.clear()
        center_x = canvas.width / 2
        center_y = canvas.height / 2
        self.scale = compute_scale(self.root, canvas.width, canvas.height)
        self.draw_body(self.root, center_x, center_y)
        canvas.present()
        self.frames_drawn += 1

    def draw_body(self, body: Body, origin_x: float, origin_y: float) -> None:
        canvas = self.canvas
        scale = self.scale

        canvas.save()
        canvas.translate(origin_x, origin_y)
        canvas.fill_circle(0, 0, body.radius * scale, body.color)

        for child in body.children_by_distance():
            orbit_radius = child.distance * scale
            canvas.stroke_circle(0, 0, orbit_radius, ORBIT_RING_COLOR)
            canvas.stroke_circle(0, 0, orbit_radius, ORBIT_RING_OVERLAY_COLOR)
            canvas.save()
            canvas.rotate(child.angle % TWO_PI)
            canvas.translate(orbit_radius, 0)
            self.draw_body(child, 0, 0)
            canvas.restore()

        canvas.restore()

    def on_resize(self, width: int, height: int) -> None:
        """Adopt the new canvas size and redraw immediately; angles are kept."""
        logger.debug("Viewport resized to %dx%d", width, height)
        self.canvas.resize(width, height)
        self.draw()
