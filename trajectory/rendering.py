#!/usr/bin/env python3
"""
Scene drawing for the Projectile Simulator.

Everything here draws through a RenderSurface, a minimal pixel-space drawing
capability. The application backs it with pygame; tests back it with a
recorder. World coordinates are converted with a GroundCamera before they
reach the surface.
"""
from typing import List, Optional, Protocol, Sequence, Tuple

from .camera import GroundCamera
from .collisions import TargetZone
from .constants import (
    BACKGROUND_COLOR,
    GROUND_COLOR,
    IDEAL_PATH_COLOR,
    MARKER_COLOR,
    MARKER_TEXT_COLOR,
    PATH_COLOR,
    PROJECTILE_HIT_COLOR,
    TARGET_BORDER_COLOR,
    TARGET_FILL_COLOR,
)
from .data_models import Projectile
from .vector_utils import Vector2

Color = Tuple[int, int, int]
Point = Tuple[float, float]


class RenderSurface(Protocol):
    """Drawing primitives the simulation needs, in surface pixels."""

    @property
    def size(self) -> Tuple[int, int]: ...

    def clear(self, color: Color) -> None: ...

    def fill_circle(self, center: Point, radius: int, color: Color) -> None: ...

    def draw_rect(self, rect: Tuple[float, float, float, float], fill: Optional[Color],
                  border: Optional[Color] = None, width: int = 1) -> None: ...

    def draw_line(self, start: Point, end: Point, color: Color, width: int = 1) -> None: ...

    def draw_polyline(self, points: Sequence[Point], color: Color, width: int = 1,
                      dashed: bool = False) -> None: ...

    def draw_text(self, text: str, pos: Point, color: Color) -> None: ...


def marker_interval(world_width: float) -> int:
    """Spacing in meters between distance markers for the visible ground width."""
    if world_width > 200:
        return 50
    if world_width > 50:
        return 20
    return 10


def draw_ground(surface: RenderSurface, camera: GroundCamera) -> None:
    """Ground line plus tick marks labelled with their distance from the launch point."""
    w, _ = surface.size
    gy = camera.ground_y
    surface.draw_line((0, gy), (w, gy), GROUND_COLOR, 2)

    step = marker_interval(camera.world_width)
    x_m = 0
    while x_m * camera.ppm < w:
        sx, _ = camera.world_to_screen((x_m, 0))
        surface.draw_line((sx, gy - 5), (sx, gy + 5), MARKER_COLOR, 1)
        if x_m > 0:
            surface.draw_text(f"{x_m}m", (sx + 5, gy - 18), MARKER_TEXT_COLOR)
        x_m += step


def draw_target(surface: RenderSurface, camera: GroundCamera, target: TargetZone) -> None:
    left, top = camera.world_to_screen((target.left, target.top))
    right, bottom = camera.world_to_screen((target.right, target.bottom))
    surface.draw_rect((left, top, right - left, bottom - top), TARGET_FILL_COLOR, TARGET_BORDER_COLOR, 2)


def draw_ideal_path(surface: RenderSurface, camera: GroundCamera, points: Sequence[Vector2]) -> None:
    if len(points) < 2:
        return
    pts = [camera.world_to_screen(p) for p in points]
    surface.draw_polyline(pts, IDEAL_PATH_COLOR, 1, dashed=True)


def draw_path(surface: RenderSurface, camera: GroundCamera, projectile: Projectile) -> None:
    """Trajectory so far, ending at the projectile's current position."""
    if len(projectile.path) < 2:
        return
    pts: List[Point] = [camera.world_to_screen(p) for p in projectile.path]
    surface.draw_polyline(pts, PATH_COLOR, 2)


def draw_projectile(surface: RenderSurface, camera: GroundCamera, projectile: Projectile) -> None:
    color = PROJECTILE_HIT_COLOR if projectile.hit_target else projectile.color
    surface.fill_circle(camera.world_to_screen(projectile.position), projectile.radius, color)


def draw_static_scene(surface: RenderSurface, camera: GroundCamera, target: TargetZone) -> None:
    surface.clear(BACKGROUND_COLOR)
    draw_ground(surface, camera)
    draw_target(surface, camera, target)


def draw_scene(surface: RenderSurface, camera: GroundCamera, target: TargetZone,
               projectile: Optional[Projectile], ideal: Sequence[Vector2]) -> None:
    """Full frame: static scene, ideal overlay, path, then the projectile on top."""
    draw_static_scene(surface, camera, target)
    draw_ideal_path(surface, camera, ideal)
    if projectile is not None:
        draw_path(surface, camera, projectile)
        draw_projectile(surface, camera, projectile)
