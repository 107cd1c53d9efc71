#!/usr/bin/env python3
"""
Collision handling for the Projectile Simulator.

Two kinds of contact are resolved here:
- Ground: the projectile crosses y = 0 while moving down. It either bounces,
  keeping a restitution fraction of its vertical speed, or comes to rest.
- Target: an axis-aligned band standing on the ground. Entering it marks the
  projectile as having hit the target.

Ground contact is part of the physics step; the target test is run by the
simulation driver once per tick.
"""
from typing import Optional, Sequence

from .constants import MAX_BOUNCES, MIN_BOUNCE_VELOCITY, TARGET_HEIGHT
from .data_models import Projectile
from .vector_utils import ZERO, Vector2, clamp


class GroundContact:
    """Outcome labels returned by resolve_ground_contact."""
    BOUNCED = "bounced"
    STOPPED = "stopped"


class TargetZone:
    """Target rectangle centred on center_x, spanning [0, height] vertically."""
    def __init__(self, center_x: float, width: float, height: float = TARGET_HEIGHT):
        self.center_x = float(center_x)
        self.width = max(0.0, float(width))
        self.height = float(height)

    @property
    def left(self) -> float:
        return self.center_x - self.width / 2

    @property
    def right(self) -> float:
        return self.center_x + self.width / 2

    @property
    def bottom(self) -> float:
        return 0.0

    @property
    def top(self) -> float:
        return self.height

    def contains(self, point: Sequence[float]) -> bool:
        return self.left <= point[0] <= self.right and self.bottom <= point[1] <= self.top

    def __repr__(self) -> str:
        return f"TargetZone(center_x={self.center_x}, width={self.width}, height={self.height})"


def resolve_ground_contact(projectile: Projectile) -> Optional[str]:
    """
    Detect and resolve contact with the ground plane.

    Contact happens when the projectile is at or below y = 0 and still moving
    down. Its height is clamped to 0, then:
    - it bounces if restitution is positive, the impact speed exceeds
      MIN_BOUNCE_VELOCITY and fewer than MAX_BOUNCES bounces have happened;
    - otherwise it stops for good and its final range is recorded.

    Returns GroundContact.BOUNCED, GroundContact.STOPPED, or None when there
    was no contact.
    """
    pos = projectile.position
    vel = projectile.velocity
    if not (pos.y <= 0 and vel.y < 0):
        return None

    projectile.position = Vector2(pos.x, 0.0)

    e = clamp(projectile.restitution, 0.0, 1.0)
    if e > 0 and abs(vel.y) > MIN_BOUNCE_VELOCITY and projectile.bounce_count < MAX_BOUNCES:
        projectile.velocity = Vector2(vel.x, -vel.y * e)
        projectile.bounce_count += 1
        projectile.add_path_point()
        return GroundContact.BOUNCED

    projectile.velocity = ZERO
    projectile.acceleration = ZERO
    projectile.is_active = False
    projectile.final_range = projectile.position.x
    if not projectile.path or projectile.path[-1] != projectile.position:
        projectile.add_path_point()
    return GroundContact.STOPPED


def check_target_hit(projectile: Projectile, target: TargetZone) -> bool:
    """
    Mark the projectile as having hit the target if it is inside the zone.

    Returns True only on the tick where hit_target flips from False to True.
    """
    if projectile.hit_target:
        return False
    if target.contains(projectile.position):
        projectile.hit_target = True
        return True
    return False
