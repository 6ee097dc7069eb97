#!/usr/bin/env python3
"""
2D drawing surfaces with an affine transform stack.

Canvas keeps the current transform and a save/restore stack with the same
composition rules as the HTML canvas: translate() and rotate() apply in the
current local frame, so nested frames compose from the root outwards.
Subclasses only implement the primitives, receiving device (pixel)
coordinates.

PygameCanvas draws onto a pygame Surface with gfxdraw so translucent colors
are alpha-blended.
"""
import logging
from typing import List, Optional, Tuple

import pygame
from pygame import gfxdraw

from .constants import BACKGROUND_COLOR, SAFE_COORD_LIMIT
from .vector_utils import (
    IDENTITY,
    Affine,
    affine_apply,
    affine_multiply,
    rotation,
    translation,
)

logger = logging.getLogger(__name__)


class Canvas:
    """Transform-stack bookkeeping shared by every drawing surface."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.transform: Affine = IDENTITY
        self._stack: List[Affine] = []

    # -----------------------
    # Transform stack
    # -----------------------

    def save(self) -> None:
        self._stack.append(self.transform)

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore() without a matching save()")
        self.transform = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        self.transform = affine_multiply(self.transform, translation(dx, dy))

    def rotate(self, angle: float) -> None:
        self.transform = affine_multiply(self.transform, rotation(angle))

    def reset_transform(self) -> None:
        self.transform = IDENTITY
        self._stack.clear()

    @property
    def depth(self) -> int:
        return len(self._stack)

    def to_device(self, x: float, y: float) -> Tuple[float, float]:
        return affine_apply(self.transform, (x, y))

    # -----------------------
    # Surface
    # -----------------------

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def clear(self) -> None:
        raise NotImplementedError

    def fill_circle(self, x: float, y: float, radius: float, color) -> None:
        raise NotImplementedError

    def stroke_circle(self, x: float, y: float, radius: float, color) -> None:
        raise NotImplementedError

    def present(self) -> None:
        """Make the finished frame visible. No-op for off-screen surfaces."""


def _safe_point(pt) -> Optional[Tuple[int, int]]:
    try:
        x, y = int(round(pt[0])), int(round(pt[1]))
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def _pixel_radius(radius: float) -> Optional[int]:
    try:
        r = int(round(radius))
    except (ValueError, OverflowError):
        return None
    if r > SAFE_COORD_LIMIT:
        return None
    return r


class PygameCanvas(Canvas):
    """
    Canvas backed by a pygame Surface.

    When display is True the surface is the pygame display: resize() re-creates
    the window and present() flips it.
    """

    def __init__(self, surface: pygame.Surface, display: bool = False,
                 background=BACKGROUND_COLOR):
        width, height = surface.get_size()
        super().__init__(width, height)
        self.surface = surface
        self.display = display
        self.background = pygame.Color(background)

    @classmethod
    def open_window(cls, width: int, height: int, caption: str) -> "PygameCanvas":
        """Open a resizable pygame window; raises RuntimeError if no display is available."""
        try:
            pygame.display.init()
            pygame.display.set_caption(caption)
            surface = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        except pygame.error as exc:
            raise RuntimeError(f"Drawing surface unavailable: {exc}") from exc
        logger.info("Opened %dx%d viewport", width, height)
        return cls(surface, display=True)

    def resize(self, width: int, height: int) -> None:
        if self.display:
            self.surface = pygame.display.set_mode((width, height), pygame.RESIZABLE)
            width, height = self.surface.get_size()
        super().resize(width, height)

    def clear(self) -> None:
        self.surface.fill(self.background)

    def fill_circle(self, x: float, y: float, radius: float, color) -> None:
        center = _safe_point(self.to_device(x, y))
        r = _pixel_radius(radius)
        if center is None or r is None:
            return
        c = pygame.Color(color)
        if r < 1:
            gfxdraw.pixel(self.surface, center[0], center[1], c)
            return
        gfxdraw.filled_circle(self.surface, center[0], center[1], r, c)
        gfxdraw.aacircle(self.surface, center[0], center[1], r, c)

    def stroke_circle(self, x: float, y: float, radius: float, color) -> None:
        center = _safe_point(self.to_device(x, y))
        r = _pixel_radius(radius)
        if center is None or r is None or r < 1:
            return
        gfxdraw.aacircle(self.surface, center[0], center[1], r, pygame.Color(color))

    def present(self) -> None:
        if self.display:
            pygame.display.flip()
