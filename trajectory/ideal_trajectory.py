#!/usr/bin/env python3
"""
Closed-form reference trajectory (no drag, no bounce).

The overlay drawn behind a run is the textbook parabola

    x(t) = x0 + v0x * t
    y(t) = y0 + v0y * t - g * t^2 / 2

sampled at IDEAL_TRAJECTORY_STEPS even steps over a window slightly longer
than the flight. The sample that would land below ground is replaced by the
exact ground crossing, so the overlay always ends on y = 0.
"""
import math
from typing import Iterator, List, Optional, Tuple

from .constants import IDEAL_MIN_WINDOW, IDEAL_TRAJECTORY_STEPS, IDEAL_WINDOW_FACTOR
from .data_models import LaunchParameters
from .vector_utils import Vector2


def time_of_flight(v0y: float, y0: float, gravity: float) -> Optional[float]:
    """
    Time at which the ideal trajectory returns to y = 0.

    This is the larger root of y0 + v0y t - g t^2 / 2 = 0. With no downward
    gravity the body only reaches the ground when launched downward.

    Returns:
        Non-negative time in seconds, or None if the ground is never reached.
    """
    if gravity > 0:
        disc = v0y * v0y + 2.0 * gravity * y0
        if disc < 0:
            return None
        return max(0.0, (v0y + math.sqrt(disc)) / gravity)
    if v0y < 0:
        return max(0.0, -y0 / v0y)
    if y0 <= 0 and v0y == 0:
        return 0.0
    return None


def analytic_range(params: LaunchParameters) -> Optional[float]:
    """Horizontal distance covered by the ideal trajectory, or None if it never lands."""
    v0 = params.initial_velocity()
    tof = time_of_flight(v0.y, params.initial_position().y, params.gravity)
    if tof is None:
        return None
    return params.initial_position().x + v0.x * tof


class IdealTrajectory:
    """
    Lazy, finite sequence of (time, position) samples along the ideal parabola.

    Iterating twice yields the same samples; nothing is cached.
    """

    def __init__(self, params: LaunchParameters, steps: int = IDEAL_TRAJECTORY_STEPS):
        self.origin = params.initial_position()
        self.v0 = params.initial_velocity()
        self.gravity = float(params.gravity)
        self.steps = max(1, int(steps))
        self.flight_time = time_of_flight(self.v0.y, self.origin.y, self.gravity)
        window = IDEAL_WINDOW_FACTOR * self.flight_time if self.flight_time is not None else 0.0
        self.window = max(IDEAL_MIN_WINDOW, window)

    def position_at(self, t: float) -> Vector2:
        x = self.origin.x + self.v0.x * t
        y = self.origin.y + self.v0.y * t - 0.5 * self.gravity * t * t
        return Vector2(x, y)

    def __iter__(self) -> Iterator[Tuple[float, Vector2]]:
        for i in range(self.steps + 1):
            t = (i / self.steps) * self.window
            pos = self.position_at(t)
            if pos.y < 0 and i > 0 and self.flight_time is not None:
                t_ground = self.flight_time
                yield t_ground, Vector2(self.position_at(t_ground).x, 0.0)
                return
            yield t, pos


def ideal_points(params: LaunchParameters) -> List[Vector2]:
    """Positions of the ideal trajectory, ready to be drawn as a polyline."""
    return [pos for _, pos in IdealTrajectory(params)]
