#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

Vectors are immutable ``Vector2`` named tuples, so every helper returns a new
value and plain ``(x, y)`` tuples are accepted wherever a vector is read.
"""
import math
from typing import NamedTuple, Sequence


class Vector2(NamedTuple):
    x: float
    y: float


ZERO = Vector2(0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Sequence[float], b: Sequence[float]) -> Vector2:
    return Vector2(a[0] + b[0], a[1] + b[1])


def vec_sub(a: Sequence[float], b: Sequence[float]) -> Vector2:
    return Vector2(a[0] - b[0], a[1] - b[1])


def vec_scale(a: Sequence[float], s: float) -> Vector2:
    return Vector2(a[0] * s, a[1] * s)


def vec_len(a: Sequence[float]) -> float:
    return math.hypot(a[0], a[1])


def vec_len_sq(a: Sequence[float]) -> float:
    """Squared length; use for distance comparisons to skip the sqrt."""
    return a[0] * a[0] + a[1] * a[1]


def vec_norm(a: Sequence[float]) -> Vector2:
    """Unit vector along a, or the zero vector when a has zero length."""
    l = vec_len(a)
    if l == 0:
        return ZERO
    return Vector2(a[0] / l, a[1] / l)


def vec_dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1]


def vec_copy(a: Sequence[float]) -> Vector2:
    return Vector2(float(a[0]), float(a[1]))
