#!/usr/bin/env python3
"""
Core Physics Engine for the Projectile Simulator

Responsibilities
- Compute the net force on a projectile: gravity plus optional linear drag.
- Advance the projectile state with a semi-implicit (symplectic) Euler step.
- Decimate trajectory samples and hand ground contact to the collision module.

Units and conventions
- World space positions are in meters [m], y-up, ground at y = 0.
- Velocities are in meters per second [m/s].
- Masses are in kilograms [kg]; forces in newtons [N].
- Time steps are in seconds [s].

Numerical notes
- Semi-implicit Euler updates velocity first and moves with the new velocity.
  It is first order like explicit Euler but does not pump energy into bouncing
  motion, which keeps bounce peaks from growing.
- Drag is linear in velocity (F = -c v), not the quadratic drag of real air.
- Zero or negative mass is accepted: the acceleration is defined to be zero
  instead of dividing by the mass.

State machine
- Flying -> Bounced (same tick) -> Flying, or Flying -> Stopped.
- Stopped is terminal; stepping a stopped projectile does nothing.
"""

from typing import Optional, Sequence

from .collisions import resolve_ground_contact
from .constants import PATH_SAMPLE_DISTANCE
from .data_models import Projectile
from .vector_utils import ZERO, Vector2, vec_add, vec_len_sq, vec_scale, vec_sub


def gravity_force(mass: float, gravity: float) -> Vector2:
    """
    Weight of a projectile, pointing down.

    Args:
        mass: Mass in kg
        gravity: Gravitational acceleration magnitude in m/s^2

    Returns:
        Force vector (0, -mass * gravity) in newtons
    """
    return Vector2(0.0, -mass * gravity)


class ProjectilePhysics:
    """
    Single-projectile physics engine with gravity and optional linear drag.

    The net force on the projectile is:
    F = F_gravity - c * v   (drag term only when air resistance is enabled)

    Where c is the projectile's drag coefficient.
    """

    def __init__(self, path_sample_distance: float = PATH_SAMPLE_DISTANCE):
        """
        Initialize the physics engine.

        Args:
            path_sample_distance: Minimum distance in meters between stored path samples
        """
        self.path_sample_distance = max(0.0, float(path_sample_distance))

    def compute_net_force(self, projectile: Projectile, gravity_force_vec: Sequence[float]) -> Vector2:
        """
        Total force acting on the projectile right now.

        Args:
            projectile: Projectile whose velocity and drag settings are used.
            gravity_force_vec: Weight vector (mass * g), already pointing down.

        Returns:
            Net force vector in newtons.
        """
        net_force = Vector2(gravity_force_vec[0], gravity_force_vec[1])
        if projectile.use_air_resistance and projectile.mass > 0 and projectile.drag_coefficient > 0:
            drag = vec_scale(projectile.velocity, -projectile.drag_coefficient)
            net_force = vec_add(net_force, drag)
        return net_force

    def integration_step(self, projectile: Projectile, timestep: float,
                         gravity_force_vec: Sequence[float]) -> Optional[str]:
        """
        Advance the projectile by one semi-implicit Euler step.

        Workflow:
        1) net force from gravity and drag
        2) a = F / m (zero vector when m <= 0)
        3) v += a * dt
        4) x += v * dt, using the updated v
        5) accumulate time, track max height
        6) store a path sample if it moved far enough since the last one
        7) resolve ground contact (bounce or stop)

        Args:
            projectile: Projectile to integrate (modified in place).
            timestep: Time step size in seconds (> 0).
            gravity_force_vec: Weight vector (mass * g), pointing down.

        Returns:
            GroundContact.BOUNCED or GroundContact.STOPPED on ground contact, else None.
        """
        if not projectile.is_active:
            return None

        net_force = self.compute_net_force(projectile, gravity_force_vec)

        if projectile.mass > 0:
            projectile.acceleration = vec_scale(net_force, 1.0 / projectile.mass)
        else:
            projectile.acceleration = ZERO

        projectile.velocity = vec_add(projectile.velocity, vec_scale(projectile.acceleration, timestep))
        projectile.position = vec_add(projectile.position, vec_scale(projectile.velocity, timestep))

        projectile.elapsed_time += timestep
        if projectile.position.y > projectile.max_height:
            projectile.max_height = projectile.position.y

        min_dist_sq = self.path_sample_distance * self.path_sample_distance
        if not projectile.path or vec_len_sq(vec_sub(projectile.position, projectile.path[-1])) > min_dist_sq:
            projectile.add_path_point()

        return resolve_ground_contact(projectile)
