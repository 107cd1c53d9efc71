#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.
"""
from typing import Sequence, Tuple

from .constants import GROUND_Y_OFFSET, PIXELS_PER_METER, VIEW_HEIGHT, VIEW_WIDTH
from .vector_utils import Vector2


class GroundCamera:
    """
    Fixed-scale camera anchored to the ground line.

    World x = 0 sits at the left edge of the surface and world y = 0 sits
    GROUND_Y_OFFSET pixels above the bottom edge. Screen y grows downward.
    """

    def __init__(self, pixels_per_meter: float = PIXELS_PER_METER, ground_offset: int = GROUND_Y_OFFSET):
        self.ppm = float(pixels_per_meter)
        self.ground_offset = ground_offset
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    @property
    def ground_y(self) -> float:
        """Screen y of the ground line."""
        return self.viewport_size[1] - self.ground_offset

    @property
    def world_width(self) -> float:
        """Meters of ground visible across the surface."""
        return self.viewport_size[0] / self.ppm

    def world_to_screen(self, pos: Sequence[float]) -> Tuple[float, float]:
        return (pos[0] * self.ppm, self.ground_y - pos[1] * self.ppm)

    def screen_to_world(self, screen: Sequence[float]) -> Vector2:
        return Vector2(screen[0] / self.ppm, (self.ground_y - screen[1]) / self.ppm)
