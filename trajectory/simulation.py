#!/usr/bin/env python3
"""
Simulation driver for the Projectile Simulator.

ProjectileSimulation owns the active projectile and the per-run configuration
(gravity, target zone, ideal overlay). An external frame loop calls tick()
once per frame with a timestamp in seconds; each tick integrates one physics
step, checks the target, redraws the scene and reports stats. The driver
never schedules itself: stop() and reset() simply disarm it, after which
tick() does nothing.

Collaborators are injected:
- surface: a RenderSurface to draw on (required to launch)
- stats_sink: called with FlightStats every tick, or None for "no data"
- target_sink: called with a TargetStatus when the outcome changes
"""
import logging
from typing import Callable, List, Optional

from .camera import GroundCamera
from .collisions import TargetZone, check_target_hit
from .constants import (
    DEFAULT_DRAG_COEFFICIENT,
    DEFAULT_GRAVITY,
    DEFAULT_TARGET_WIDTH,
    DEFAULT_TARGET_X,
    MAX_FRAME_DT,
)
from .data_models import FlightStats, LaunchParameters, Projectile, TargetStatus
from .ideal_trajectory import ideal_points
from .physics import ProjectilePhysics, gravity_force
from .rendering import RenderSurface, draw_ideal_path, draw_scene, draw_static_scene
from .vector_utils import Vector2, clamp

log = logging.getLogger("trajectory.simulation")

StatsSink = Callable[[Optional[FlightStats]], None]
TargetSink = Callable[[TargetStatus], None]


class SimulationError(Exception):
    """Base class for simulation driver errors."""


class SurfaceUnavailableError(SimulationError):
    """Raised when a run is started without a render surface."""


class ProjectileSimulation:
    """
    Drives a single projectile run, one tick per frame.

    Only one projectile exists at a time; starting a new run stops the
    previous one before the new projectile is built.
    """

    def __init__(self, surface: Optional[RenderSurface] = None,
                 stats_sink: Optional[StatsSink] = None,
                 target_sink: Optional[TargetSink] = None,
                 camera: Optional[GroundCamera] = None,
                 physics: Optional[ProjectilePhysics] = None):
        self.surface = surface
        self.stats_sink = stats_sink
        self.target_sink = target_sink
        self.camera = camera or GroundCamera()
        self.physics = physics or ProjectilePhysics()

        self.gravity = DEFAULT_GRAVITY
        self.target = TargetZone(DEFAULT_TARGET_X, DEFAULT_TARGET_WIDTH)
        self.show_ideal = False
        self._ideal_points: List[Vector2] = []

        self._projectile: Optional[Projectile] = None
        self._running = False
        self._last_timestamp: Optional[float] = None
        self._target_status = TargetStatus.PENDING

        if surface is not None:
            self._sync_viewport()

    # -----------------------
    # Read-only state
    # -----------------------

    @property
    def projectile(self) -> Optional[Projectile]:
        return self._projectile

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ideal_points(self) -> List[Vector2]:
        return list(self._ideal_points)

    @property
    def target_status(self) -> TargetStatus:
        return self._target_status

    # -----------------------
    # Lifecycle
    # -----------------------

    def initialize(self, surface: Optional[RenderSurface],
                   stats_sink: Optional[StatsSink] = None,
                   target_sink: Optional[TargetSink] = None) -> None:
        """Bind collaborators and draw the static scene."""
        self.surface = surface
        self.stats_sink = stats_sink
        self.target_sink = target_sink
        if surface is None:
            log.error("No render surface available; launches will be refused.")
        else:
            self._sync_viewport()
        self.reset()
        log.debug("Simulation initialized.")

    def start(self, params: LaunchParameters) -> Projectile:
        """
        Begin a new run with the given launch parameters.

        Any previous run is stopped and discarded first.

        Raises:
            SurfaceUnavailableError: no render surface is bound.
        """
        if self.surface is None:
            raise SurfaceUnavailableError("Render surface not available; cannot start a run.")
        log.info("Starting run with %s", params)

        self._apply_config(params)
        self.reset()

        projectile = Projectile(params.initial_position(), params.initial_velocity(), params.mass)
        projectile.restitution = params.restitution
        projectile.use_air_resistance = params.use_air_resistance
        projectile.drag_coefficient = DEFAULT_DRAG_COEFFICIENT if params.use_air_resistance else 0.0
        self._projectile = projectile

        if self.show_ideal:
            self._ideal_points = ideal_points(params)
            draw_ideal_path(self.surface, self.camera, self._ideal_points)

        self._last_timestamp = None
        self._running = True
        return projectile

    def preview(self, params: LaunchParameters) -> None:
        """Show the target and optional ideal overlay for params without launching."""
        self._apply_config(params)
        self.reset()
        if self.show_ideal:
            self._ideal_points = ideal_points(params)
            if self.surface is not None:
                draw_ideal_path(self.surface, self.camera, self._ideal_points)

    def tick(self, frame_timestamp: float) -> bool:
        """
        Run one frame of the simulation.

        Args:
            frame_timestamp: Monotonic frame time in seconds.

        Returns:
            True if another tick is wanted, False once the run is over or the
            driver was stopped.
        """
        projectile = self._projectile
        if not self._running or projectile is None or self.surface is None or not projectile.is_active:
            self.stop()
            return False

        if self._last_timestamp is None:
            self._last_timestamp = frame_timestamp
        dt = clamp(frame_timestamp - self._last_timestamp, 0.0, MAX_FRAME_DT)
        self._last_timestamp = frame_timestamp

        if dt > 0:
            self.physics.integration_step(projectile, dt, gravity_force(projectile.mass, self.gravity))

        if check_target_hit(projectile, self.target):
            log.info("Target hit at (%.2f, %.2f).", projectile.position.x, projectile.position.y)
            self._report_target(TargetStatus.HIT)

        draw_scene(self.surface, self.camera, self.target, projectile,
                   self._ideal_points if self.show_ideal else [])

        if self.stats_sink is not None:
            self.stats_sink(FlightStats.from_projectile(projectile))

        if projectile.is_active:
            return True

        log.info(
            "Projectile stopped. range: %.2fm max height: %.2fm time: %.2fs bounces: %d",
            projectile.final_range, projectile.max_height, projectile.elapsed_time, projectile.bounce_count,
        )
        if not projectile.hit_target:
            self._report_target(TargetStatus.MISS)
        self.stop()
        return False

    def stop(self) -> None:
        """Disarm the frame loop. Safe to call at any time, any number of times."""
        if self._running:
            log.debug("Animation loop stopped.")
        self._running = False
        self._last_timestamp = None

    def reset(self) -> None:
        """Stop, discard the projectile and overlay, redraw the static scene, clear stats."""
        self.stop()
        self._projectile = None
        self._ideal_points = []
        if self.surface is not None:
            draw_static_scene(self.surface, self.camera, self.target)
        if self.stats_sink is not None:
            self.stats_sink(None)
        self._report_target(TargetStatus.PENDING)
        log.debug("Simulation reset.")

    def resize(self, width: int, height: int) -> None:
        """Track a new surface size; redraw the static scene when idle."""
        self.camera.set_viewport_size(width, height)
        if not self._running:
            self.reset()

    def run(self, params: LaunchParameters, frame_dt: float = 1 / 60.0,
            max_frames: int = 100_000) -> FlightStats:
        """
        Run a launch to completion with synthetic frame timestamps.

        Returns:
            The stats of the projectile when the loop ended.
        """
        projectile = self.start(params)
        t = 0.0
        frames = 0
        while self.tick(t) and frames < max_frames:
            t += frame_dt
            frames += 1
        self.stop()
        return FlightStats.from_projectile(projectile)

    # -----------------------
    # Internals
    # -----------------------

    def _apply_config(self, params: LaunchParameters) -> None:
        self.gravity = float(params.gravity)
        self.target = TargetZone(params.target_x, params.target_width)
        self.show_ideal = bool(params.show_ideal)

    def _sync_viewport(self) -> None:
        w, h = self.surface.size
        self.camera.set_viewport_size(w, h)

    def _report_target(self, status: TargetStatus) -> None:
        self._target_status = status
        if self.target_sink is not None:
            self.target_sink(status)
