#!/usr/bin/env python3
"""
Projectile Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SimulationController holding queued commands and the latest
  stats; all access is guarded by a re-entrant lock for thread-safety.
- Provides the Pygame-backed render surface and a Dear PyGui control panel for setting
  launch parameters, loading JSON presets, and launching/resetting runs.

Threading model
- PygameRenderer runs in a background thread and is the only thread that touches the
  ProjectileSimulation: it drains queued commands, ticks the simulation, and draws.
- The UI class runs in the main thread via Dear PyGui. It queues commands on the
  controller and refreshes its readouts on a periodic frame callback; both sides
  lock the controller around short critical sections.

Units and conventions
- SI units throughout: meters [m], kilograms [kg], seconds [s]. Angles in the UI are degrees.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python projectile_sim.py`

Windows/OS notes
- Two windows will open: the viewport (Pygame) and the controls (Dear PyGui). Closing either
  will shut down the application cleanly.
"""

import logging
import threading
import time
from collections import deque
from typing import Deque, Optional, Sequence, Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from trajectory.constants import (
    ANGLE_RANGE,
    BACKGROUND_COLOR,
    DASH_LENGTH,
    GRAVITY_RANGE,
    HEIGHT_RANGE,
    HUD_TEXT_COLOR,
    MASS_RANGE,
    RESTITUTION_RANGE,
    SAFE_COORD_LIMIT,
    SPEED_RANGE,
    TARGET_WIDTH_RANGE,
    TARGET_X_RANGE,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from trajectory.data_models import FlightStats, LaunchParameters, TargetStatus
from trajectory.presets_loader import list_presets, load_preset
from trajectory.simulation import ProjectileSimulation, SimulationError
from trajectory.vector_utils import vec_len, vec_sub

log = logging.getLogger("projectile_sim")

# ============================================================
# Pygame render surface
# ============================================================

_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 14)
        except (pygame.error, OSError):
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


class PygameSurface:
    """RenderSurface backed by a pygame Surface."""

    def __init__(self, surf: pygame.Surface):
        self.surf = surf

    @property
    def size(self) -> Tuple[int, int]:
        return self.surf.get_size()

    def clear(self, color):
        self.surf.fill(color)

    def fill_circle(self, center, radius, color):
        c = _safe_point(center)
        if c is None:
            return
        gfxdraw.filled_circle(self.surf, c[0], c[1], radius, color)
        gfxdraw.aacircle(self.surf, c[0], c[1], radius, color)

    def draw_rect(self, rect, fill, border=None, width=1):
        tl = _safe_point(rect[:2])
        br = _safe_point((rect[0] + rect[2], rect[1] + rect[3]))
        if tl is None or br is None:
            return
        r = pygame.Rect(tl[0], tl[1], br[0] - tl[0], br[1] - tl[1])
        if fill is not None:
            pygame.draw.rect(self.surf, fill, r)
        if border is not None:
            pygame.draw.rect(self.surf, border, r, width)

    def draw_line(self, start, end, color, width=1):
        s = _safe_point(start)
        e = _safe_point(end)
        if s and e:
            pygame.draw.line(self.surf, color, s, e, width)

    def draw_polyline(self, points: Sequence, color, width=1, dashed=False):
        pts = [p for p in (_safe_point(pt) for pt in points) if p]
        if len(pts) < 2:
            return
        if not dashed:
            pygame.draw.lines(self.surf, color, False, pts, width)
            return
        # Walk the polyline, alternating on/off every DASH_LENGTH pixels
        on = True
        left = float(DASH_LENGTH)
        for a, b in zip(pts, pts[1:]):
            seg = vec_sub(b, a)
            seg_len = vec_len(seg)
            pos = 0.0
            while pos < seg_len:
                step = min(left, seg_len - pos)
                if on:
                    p0 = (a[0] + seg[0] * pos / seg_len, a[1] + seg[1] * pos / seg_len)
                    p1 = (a[0] + seg[0] * (pos + step) / seg_len, a[1] + seg[1] * (pos + step) / seg_len)
                    pygame.draw.line(self.surf, color, p0, p1, width)
                pos += step
                left -= step
                if left <= 0:
                    on = not on
                    left = float(DASH_LENGTH)

    def draw_text(self, text, pos, color):
        p = _safe_point(pos)
        if p:
            draw_text(self.surf, text, p[0], p[1], color)

# ============================================================
# Simulation Controller (Shared State)
# ============================================================


class SimulationController:
    """
    Shared state between UI thread (DearPyGui) and rendering thread (Pygame).
    Commands flow UI -> renderer; stats and target status flow renderer -> UI.
    """
    def __init__(self):
        self.lock = threading.RLock()
        self.running = True  # app running
        self.commands: Deque[Tuple[str, Optional[LaunchParameters]]] = deque()
        self.stats: Optional[FlightStats] = None
        self.target_status = TargetStatus.PENDING
        self.run_active = False
        self.last_error: Optional[str] = None

    def launch(self, params: LaunchParameters):
        with self.lock:
            self.commands.append(("launch", params))

    def reset(self, params: Optional[LaunchParameters] = None):
        with self.lock:
            self.commands.append(("reset", params))

    def preview(self, params: LaunchParameters):
        with self.lock:
            # Only the newest preview matters while the user drags a slider
            if self.commands and self.commands[-1][0] == "preview":
                self.commands.pop()
            self.commands.append(("preview", params))

    def take_commands(self):
        with self.lock:
            cmds = list(self.commands)
            self.commands.clear()
        return cmds

    def on_stats(self, stats: Optional[FlightStats]):
        with self.lock:
            self.stats = stats

    def on_target(self, status: TargetStatus):
        with self.lock:
            self.target_status = status

# ============================================================
# Pygame Renderer Thread
# ============================================================


class PygameRenderer(threading.Thread):
    """
    Pygame loop: applies queued commands, ticks the simulation, draws the HUD.
    """
    def __init__(self, controller: SimulationController):
        super().__init__(daemon=True)
        self.controller = controller
        self.sim = ProjectileSimulation()
        self.surface: Optional[PygameSurface] = None
        self.clock = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Projectile Simulator - Viewport")
        self.surface = PygameSurface(pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE))
        self.sim.initialize(self.surface, self.controller.on_stats, self.controller.on_target)
        self.clock = pygame.time.Clock()

        while self.running and self.controller.running:
            self.handle_events()
            self.apply_commands()

            if self.sim.running:
                self.sim.tick(time.perf_counter())
            with self.controller.lock:
                self.controller.run_active = self.sim.running

            self.draw_hud()
            pygame.display.flip()

            # Limit FPS
            self.clock.tick(60)

        self.sim.stop()
        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.controller.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface.surf = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                log.debug("Viewport resized to %dx%d", event.w, event.h)
                self.sim.resize(event.w, event.h)

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.sim.reset()

    def apply_commands(self):
        for name, params in self.controller.take_commands():
            try:
                if name == "launch":
                    self.sim.start(params)
                elif name == "preview":
                    if not self.sim.running:
                        self.sim.preview(params)
                elif name == "reset":
                    if params is not None:
                        self.sim.preview(params)
                    else:
                        self.sim.reset()
            except SimulationError as exc:
                log.error("Command %s failed: %s", name, exc)
                with self.controller.lock:
                    self.controller.last_error = str(exc)

    def draw_hud(self):
        # HUD sits over the sky area, so it is redrawn on a cleared strip each frame
        surf = self.surface.surf
        pygame.draw.rect(surf, BACKGROUND_COLOR, pygame.Rect(0, 0, surf.get_width(), 24))
        state = "Running" if self.sim.running else "Idle"
        draw_text(surf, f"Launch/Reset from the Controls window | Esc: reset  [{state}]", 10, 6, HUD_TEXT_COLOR)

# ============================================================
# Dear PyGui UI
# ============================================================

STATUS_COLORS = {
    TargetStatus.PENDING: (180, 180, 180),
    TargetStatus.HIT: (34, 197, 94),
    TargetStatus.MISS: (239, 68, 68),
}

STATUS_TEXT = {
    TargetStatus.PENDING: "Pending...",
    TargetStatus.HIT: "Hit!",
    TargetStatus.MISS: "Miss",
}


def format_stat(value, unit: str, precision: int = 2) -> str:
    if value is None:
        return "--"
    return f"{value:.{precision}f}{unit}"


class UI:
    """
    Dear PyGui interface: launch parameter sliders, presets, launch/reset, live stats.
    """
    # (tag, label, (min, max), display format)
    SLIDERS = (
        ("initial_speed", "Initial speed (m/s)", SPEED_RANGE, "%.0f"),
        ("launch_angle_deg", "Launch angle (deg)", ANGLE_RANGE, "%.0f"),
        ("initial_height", "Initial height (m)", HEIGHT_RANGE, "%.1f"),
        ("mass", "Mass (kg)", MASS_RANGE, "%.1f"),
        ("gravity", "Gravity (m/s^2)", GRAVITY_RANGE, "%.2f"),
        ("restitution", "Restitution", RESTITUTION_RANGE, "%.2f"),
        ("target_x", "Target X (m)", TARGET_X_RANGE, "%.0f"),
        ("target_width", "Target width (m)", TARGET_WIDTH_RANGE, "%.0f"),
    )

    def __init__(self, controller: SimulationController):
        self.controller = controller
        self.status_msg_id = None
        self.max_height_id = None
        self.range_id = None
        self.time_id = None
        self.bounces_id = None
        self.target_status_id = None
        self._preset_map = {}

        self._build_ui()

        dpg.set_frame_callback(1, self._on_param_changed)
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        current = dpg.get_frame_count()
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Projectile Simulator - Controls', width=440, height=640)

        defaults = LaunchParameters()
        with dpg.window(label="Controls", width=420, height=620, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                self._preset_map = {display: fn for fn, display in list_presets()}
                preset_items = list(self._preset_map.keys()) or ["No presets found"]
                dpg.add_combo(preset_items, default_value=preset_items[0], width=220, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_preset(dpg.get_value("preset_combo")))

            dpg.add_separator()
            dpg.add_text("Launch Parameters")
            for tag, label, (lo, hi), fmt in self.SLIDERS:
                dpg.add_slider_float(label=label, tag=tag, min_value=lo, max_value=hi,
                                     default_value=float(getattr(defaults, tag)), format=fmt, width=220,
                                     callback=lambda s, a, u: self._on_param_changed())
            dpg.add_checkbox(label="Air resistance (linear drag)", tag="use_air_resistance",
                             default_value=defaults.use_air_resistance)
            dpg.add_checkbox(label="Show ideal trajectory", tag="show_ideal", default_value=defaults.show_ideal,
                             callback=lambda s, a, u: self._on_param_changed())

            with dpg.group(horizontal=True):
                dpg.add_button(label="Launch", callback=self._on_launch_clicked, width=120)
                dpg.add_button(label="Reset", callback=self._on_reset_clicked, width=120)
            self.status_msg_id = dpg.add_text("")

            dpg.add_separator()
            dpg.add_text("Flight Stats")
            self.max_height_id = dpg.add_text("Max height: --")
            self.range_id = dpg.add_text("Range: --")
            self.time_id = dpg.add_text("Time: --")
            self.bounces_id = dpg.add_text("Bounces: --")
            with dpg.group(horizontal=True):
                dpg.add_text("Target:")
                self.target_status_id = dpg.add_text(STATUS_TEXT[TargetStatus.PENDING],
                                                     color=STATUS_COLORS[TargetStatus.PENDING])

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def read_parameters(self) -> LaunchParameters:
        values = {tag: float(dpg.get_value(tag)) for tag, _, _, _ in self.SLIDERS}
        return LaunchParameters(
            use_air_resistance=bool(dpg.get_value("use_air_resistance")),
            show_ideal=bool(dpg.get_value("show_ideal")),
            **values,
        )

    def _on_launch_clicked(self):
        params = self.read_parameters()
        self.controller.launch(params)
        self._set_status(f"Launched at {params.initial_speed:.0f} m/s, {params.launch_angle_deg:.0f} deg.")

    def _on_reset_clicked(self):
        self.controller.reset(self.read_parameters())
        self._set_status("Simulation reset.")

    def _on_param_changed(self):
        with self.controller.lock:
            active = self.controller.run_active
        if not active:
            self.controller.preview(self.read_parameters())

    def load_preset(self, name: str):
        fn = self._preset_map.get(name)
        if fn is None:
            self._set_error("No preset selected.")
            return
        loaded = load_preset(fn)
        if loaded is None:
            self._set_error(f"Failed to load preset '{name}'.")
            return
        params, display_name = loaded
        for tag, _, _, _ in self.SLIDERS:
            dpg.set_value(tag, float(getattr(params, tag)))
        dpg.set_value("use_air_resistance", params.use_air_resistance)
        dpg.set_value("show_ideal", params.show_ideal)
        self._on_param_changed()
        self._set_status(f"Loaded preset: {display_name}")

    def _sync_ui_with_sim(self):
        """
        Periodic UI update to reflect the latest flight stats and target status.
        """
        with self.controller.lock:
            stats = self.controller.stats
            status = self.controller.target_status
            err = self.controller.last_error
            self.controller.last_error = None

        dpg.set_value(self.max_height_id, f"Max height: {format_stat(stats.max_height if stats else None, ' m')}")
        dpg.set_value(self.range_id, f"Range: {format_stat(stats.range if stats else None, ' m')}")
        dpg.set_value(self.time_id, f"Time: {format_stat(stats.elapsed_time if stats else None, ' s')}")
        dpg.set_value(self.bounces_id, f"Bounces: {stats.bounce_count if stats else '--'}")
        dpg.set_value(self.target_status_id, STATUS_TEXT[status])
        dpg.configure_item(self.target_status_id, color=STATUS_COLORS[status])
        if err:
            self._set_error(err)

        # Reschedule next sync
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    controller = SimulationController()
    renderer = PygameRenderer(controller)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(controller)

    # Keyboard shortcut in UI window to launch (Space)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._on_launch_clicked()
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop simulation and renderer
        controller.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
