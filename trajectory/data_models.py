#!/usr/bin/env python3
"""
Data models for the Projectile Simulator.

This module defines the Projectile dataclass shared between physics, rendering
and the simulation driver, plus the small value types that cross the boundary
to the control panel.

Units and usage
- position is in meters [m], velocity in meters per second [m/s], mass in kg.
- World space is y-up with the ground at y = 0 and the launch point at x = 0.
- radius is in pixels; it only matters for drawing.
- path stores decimated trajectory samples and is mutated by the physics step.
- A Projectile is owned by exactly one ProjectileSimulation.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from .constants import (
    DEFAULT_ANGLE_DEG,
    DEFAULT_GRAVITY,
    DEFAULT_HEIGHT,
    DEFAULT_MASS,
    DEFAULT_RESTITUTION,
    DEFAULT_SPEED,
    DEFAULT_TARGET_WIDTH,
    DEFAULT_TARGET_X,
    PROJECTILE_COLOR,
    PROJECTILE_RADIUS,
)
from .vector_utils import ZERO, Vector2, vec_copy


@dataclass
class Projectile:
    """
    The simulated body.

    Fields:
    - position, velocity, acceleration: world-space vectors
    - mass: kilograms; zero or negative mass yields zero acceleration
    - radius, color: drawing only
    - path: trajectory samples, seeded with the launch position
    - is_active: False once the projectile has come to rest (terminal)
    - bounce_count: ground bounces so far, at most MAX_BOUNCES
    - hit_target: set by the simulation driver, never by the physics step
    - restitution: fraction of vertical speed kept on a bounce
    - use_air_resistance, drag_coefficient: linear drag settings
    - max_height: running maximum of position.y
    - elapsed_time: integrated time in seconds
    - final_range: position.x when the projectile stopped, 0 until then
    """
    position: Vector2
    velocity: Vector2
    mass: float = DEFAULT_MASS
    radius: int = PROJECTILE_RADIUS
    color: Tuple[int, int, int] = PROJECTILE_COLOR
    acceleration: Vector2 = ZERO
    path: List[Vector2] = field(default_factory=list)
    is_active: bool = True
    bounce_count: int = 0
    hit_target: bool = False
    restitution: float = DEFAULT_RESTITUTION
    use_air_resistance: bool = False
    drag_coefficient: float = 0.0
    max_height: float = field(init=False, default=0.0)
    elapsed_time: float = 0.0
    final_range: float = 0.0

    def __post_init__(self):
        self.position = vec_copy(self.position)
        self.velocity = vec_copy(self.velocity)
        self.acceleration = vec_copy(self.acceleration)
        if not self.path:
            self.path.append(self.position)
        self.max_height = self.position.y

    def add_path_point(self) -> None:
        """Append the current position to the path."""
        self.path.append(self.position)


@dataclass(frozen=True)
class LaunchParameters:
    """Parameter bundle supplied by the control panel (angle in degrees)."""
    initial_speed: float = DEFAULT_SPEED
    launch_angle_deg: float = DEFAULT_ANGLE_DEG
    initial_height: float = DEFAULT_HEIGHT
    mass: float = DEFAULT_MASS
    gravity: float = DEFAULT_GRAVITY
    restitution: float = DEFAULT_RESTITUTION
    target_x: float = DEFAULT_TARGET_X
    target_width: float = DEFAULT_TARGET_WIDTH
    use_air_resistance: bool = False
    show_ideal: bool = False

    @property
    def launch_angle_rad(self) -> float:
        return math.radians(self.launch_angle_deg)

    def initial_position(self) -> Vector2:
        return Vector2(0.0, float(self.initial_height))

    def initial_velocity(self) -> Vector2:
        angle = self.launch_angle_rad
        return Vector2(self.initial_speed * math.cos(angle), self.initial_speed * math.sin(angle))


@dataclass(frozen=True)
class FlightStats:
    """Live statistics pushed to the stats sink every tick."""
    max_height: float
    range: float
    elapsed_time: float
    bounce_count: int

    @classmethod
    def from_projectile(cls, projectile: Projectile) -> "FlightStats":
        # Current x while flying, the recorded range once at rest
        rng = projectile.position.x if projectile.is_active else projectile.final_range
        return cls(
            max_height=projectile.max_height,
            range=rng,
            elapsed_time=projectile.elapsed_time,
            bounce_count=projectile.bounce_count,
        )


class TargetStatus(Enum):
    PENDING = "pending"
    HIT = "hit"
    MISS = "miss"
