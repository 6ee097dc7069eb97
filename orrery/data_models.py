#!/usr/bin/env python3
"""
Data models for Orrery Simulator.

This module defines the Body dataclass: one node of the orbital tree.

Units and usage
- distance is the radial offset from the parent's center and radius the visual
  size, both in orrery units; the renderer converts them to pixels.
- angle is in radians and grows without bound; it is reduced modulo 2*pi only
  when drawing.
- period is derived from distance once, at construction.
- A Body owns its children. parent is a back-reference used only to decide
  whether the body revolves.
"""
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from .constants import DEFAULT_BODY_COLOR, PERIOD_EXPONENT

Color = Union[Tuple[int, int, int], Tuple[int, int, int, int], str]


@dataclass(eq=False)
class Body:
    """
    Represents a celestial body and the root of its own orbiting subtree.

    Fields:
    - name: Display name
    - distance: Distance from the parent's center (0 for the root)
    - radius: Visual radius, must be positive
    - color: RGB(A) tuple or color name used for rendering
    - angle: Current position along the orbit in radians
    - children: Bodies orbiting this one
    - parent: Body this one orbits, set by attach()
    - period: distance ** 1.5, larger means slower revolution
    """
    name: str
    distance: float
    radius: float
    color: Color = DEFAULT_BODY_COLOR
    angle: float = 0.0
    children: List["Body"] = field(default_factory=list, repr=False)
    parent: Optional["Body"] = field(default=None, repr=False)
    period: float = field(init=False)

    def __post_init__(self):
        if not self.radius > 0:
            raise ValueError(f"{self.name}: radius must be positive, got {self.radius!r}")
        if not self.distance >= 0:
            raise ValueError(f"{self.name}: distance must be non-negative, got {self.distance!r}")
        self.period = self.distance ** PERIOD_EXPONENT

    def attach(self, child: "Body") -> "Body":
        """Make child orbit this body. Returns child for chaining."""
        if child is self:
            raise ValueError(f"{self.name}: a body cannot orbit itself")
        if child.parent is not None:
            raise ValueError(f"{child.name} already orbits {child.parent.name}")
        child.parent = self
        self.children.append(child)
        return child

    @property
    def revolves(self) -> bool:
        return self.parent is not None

    def update(self, delta_time: float, speed_factor: float) -> None:
        """
        Advance this body's angle and, recursively, its descendants'.

        Args:
            delta_time: Wall-clock seconds since the previous frame
            speed_factor: User-controlled multiplier; 0 freezes every orbit
        """
        if self.revolves and self.period > 0:
            self.angle += (math.pi / self.period) * delta_time * speed_factor
        for child in self.children:
            child.update(delta_time, speed_factor)

    def children_by_distance(self) -> List["Body"]:
        """Children sorted nearest first; equal distances keep insertion order."""
        return sorted(self.children, key=lambda b: b.distance)

    def space_needed(self) -> float:
        """
        Radius of this body plus the diameters of every descendant.

        The minimum radial thickness needed to draw the subtree without
        overlap. Informational; layout uses the renderer's auto-scale.
        """
        return self.radius + self._descendant_diameters()

    def _descendant_diameters(self) -> float:
        return sum(child.radius * 2 + child._descendant_diameters() for child in self.children)

    def walk(self) -> Iterator["Body"]:
        """Yield this body and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, name: str) -> Optional["Body"]:
        for body in self.walk():
            if body.name == name:
                return body
        return None
