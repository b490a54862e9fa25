#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, fast functions for vector math used throughout the app.
Vectors are plain (x, y) tuples.
"""
import math
from typing import Tuple

Vec2 = Tuple[float, float]


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(a: Vec2, s: float) -> Vec2:
    return (a[0] * s, a[1] * s)


def vec_len(a: Vec2) -> float:
    return math.hypot(a[0], a[1])


def vec_norm(a: Vec2) -> Vec2:
    l = vec_len(a)
    if l == 0:
        return (0.0, 0.0)
    return (a[0] / l, a[1] / l)


def vec_from_polar(radius: float, angle: float) -> Vec2:
    return (math.cos(angle) * radius, math.sin(angle) * radius)


def vec_tangent(angle: float, speed: float) -> Vec2:
    """Counter-clockwise tangent of the unit circle at `angle`, scaled to `speed`."""
    return (-math.sin(angle) * speed, math.cos(angle) * speed)


def vec_is_finite(a: Vec2) -> bool:
    return math.isfinite(a[0]) and math.isfinite(a[1])
