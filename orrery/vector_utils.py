#!/usr/bin/env python3
"""
Vector and affine helpers for 2D drawing.

Affine transforms are 6-tuples (a, b, c, d, e, f) laid out like the HTML
canvas matrix:

    x' = a * x + c * y + e
    y' = b * x + d * y + f
"""
import math
from typing import Tuple

Affine = Tuple[float, float, float, float, float, float]

IDENTITY: Affine = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def translation(tx: float, ty: float) -> Affine:
    return (1.0, 0.0, 0.0, 1.0, tx, ty)


def rotation(angle: float) -> Affine:
    c = math.cos(angle)
    s = math.sin(angle)
    return (c, s, -s, c, 0.0, 0.0)


def affine_multiply(m: Affine, n: Affine) -> Affine:
    """Return the transform that applies n first, then m."""
    ma, mb, mc, md, me, mf = m
    na, nb, nc, nd, ne, nf = n
    return (
        ma * na + mc * nb,
        mb * na + md * nb,
        ma * nc + mc * nd,
        mb * nc + md * nd,
        ma * ne + mc * nf + me,
        mb * ne + md * nf + mf,
    )


def affine_apply(m: Affine, point: Tuple[float, float]) -> Tuple[float, float]:
    a, b, c, d, e, f = m
    x, y = point
    return (a * x + c * y + e, b * x + d * y + f)
