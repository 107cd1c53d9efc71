import logging

import pytest

from trajectory.constants import PROJECTILE_HIT_COLOR
from trajectory.data_models import FlightStats, LaunchParameters, TargetStatus
from trajectory.ideal_trajectory import analytic_range
from trajectory.simulation import ProjectileSimulation, SurfaceUnavailableError
from trajectory.vector_utils import Vector2

FRAME = 1 / 120.0


def _run_to_end(sim, max_frames=20_000):
    """Tick with synthetic timestamps until the driver stops; returns the number of ticks."""
    t = 0.0
    ticks = 1
    while sim.tick(t):
        t += FRAME
        ticks += 1
        assert ticks < max_frames
    return ticks


def test_start_requires_surface():
    sim = ProjectileSimulation()
    with pytest.raises(SurfaceUnavailableError):
        sim.start(LaunchParameters())
    assert not sim.running
    assert sim.projectile is None


def test_initialize_without_surface_is_logged(caplog):
    sim = ProjectileSimulation()
    with caplog.at_level(logging.ERROR, logger="trajectory.simulation"):
        sim.initialize(None)
    assert "No render surface" in caplog.text
    with pytest.raises(SurfaceUnavailableError):
        sim.start(LaunchParameters())


def test_initialize_draws_static_scene(surface):
    sim = ProjectileSimulation()
    sim.initialize(surface)
    assert surface.of_kind("clear")
    assert surface.of_kind("rect")
    assert surface.of_kind("line")
    assert sim.target_status is TargetStatus.PENDING


def test_start_builds_projectile_from_parameters(sim):
    params = LaunchParameters(initial_speed=10.0, launch_angle_deg=90.0, initial_height=3.0, mass=2.5,
                              restitution=0.3, use_air_resistance=True)
    p = sim.start(params)
    assert sim.running
    assert sim.projectile is p
    assert p.position == Vector2(0.0, 3.0)
    assert p.velocity.x == pytest.approx(0.0, abs=1e-12)
    assert p.velocity.y == pytest.approx(10.0)
    assert p.mass == 2.5
    assert p.restitution == 0.3
    assert p.use_air_resistance
    assert p.drag_coefficient == pytest.approx(0.1)


def test_drag_coefficient_zero_without_air_resistance(sim):
    p = sim.start(LaunchParameters(use_air_resistance=False))
    assert p.drag_coefficient == 0.0


def test_first_tick_does_not_integrate(sim, sinks):
    stats, _ = sinks
    p = sim.start(LaunchParameters())
    assert sim.tick(100.0)
    assert p.elapsed_time == 0.0
    assert p.position == Vector2(0.0, 0.0)
    assert stats[-1] == FlightStats(max_height=0.0, range=0.0, elapsed_time=0.0, bounce_count=0)


def test_frame_gap_is_clamped(sim):
    p = sim.start(LaunchParameters())
    sim.tick(0.0)
    sim.tick(5.0)
    assert p.elapsed_time == pytest.approx(0.1)


def test_timestamps_going_backwards_do_not_integrate(sim):
    p = sim.start(LaunchParameters())
    sim.tick(1.0)
    sim.tick(1.05)
    elapsed = p.elapsed_time
    sim.tick(0.5)
    assert p.elapsed_time == elapsed


def test_stop_prevents_further_ticks(sim):
    p = sim.start(LaunchParameters())
    sim.tick(0.0)
    sim.tick(0.016)
    sim.stop()
    sim.stop()
    snapshot = (p.position, p.velocity, p.elapsed_time)
    assert not sim.tick(0.032)
    assert not sim.tick(0.048)
    assert (p.position, p.velocity, p.elapsed_time) == snapshot
    assert not sim.running


def test_reset_clears_run(sim, sinks):
    stats, statuses = sinks
    sim.start(LaunchParameters(show_ideal=True))
    sim.tick(0.0)
    sim.tick(0.02)
    sim.reset()
    assert sim.projectile is None
    assert not sim.running
    assert sim.ideal_points == []
    assert stats[-1] is None
    assert statuses[-1] is TargetStatus.PENDING
    assert not sim.tick(0.04)


def test_stats_emitted_every_tick(sim, sinks):
    stats, _ = sinks
    sim.start(LaunchParameters(initial_speed=15.0, restitution=0.0))
    emitted_before = len(stats)
    ticks = _run_to_end(sim)
    assert len(stats) - emitted_before == ticks
    final = stats[-1]
    assert final.range == sim.projectile.final_range
    assert final.bounce_count == sim.projectile.bounce_count


def test_live_range_follows_position(sim, sinks):
    stats, _ = sinks
    p = sim.start(LaunchParameters())
    sim.tick(0.0)
    sim.tick(0.05)
    assert stats[-1].range == p.position.x
    assert stats[-1].elapsed_time == pytest.approx(0.05)


def test_reference_shot_without_bounce(sim):
    params = LaunchParameters(initial_speed=20.0, launch_angle_deg=45.0, initial_height=0.0,
                              gravity=9.81, restitution=0.0, show_ideal=True)
    final = sim.run(params, frame_dt=FRAME)
    p = sim.projectile

    assert not p.is_active
    assert p.bounce_count == 0
    assert final.bounce_count == 0
    assert p.final_range == pytest.approx(40.77, abs=0.5)
    assert final.range == p.final_range
    assert p.final_range == pytest.approx(analytic_range(params), abs=0.5)
    assert sim.ideal_points[-1].x == pytest.approx(analytic_range(params))
    assert not sim.running


def test_target_hit_reported_once(sim, sinks):
    _, statuses = sinks
    params = LaunchParameters(initial_speed=20.0, launch_angle_deg=45.0, restitution=0.0,
                              target_x=40.7, target_width=10.0)
    p = sim.start(params)
    _run_to_end(sim)
    assert p.hit_target
    assert statuses == [TargetStatus.PENDING, TargetStatus.HIT]
    assert sim.target_status is TargetStatus.HIT


def test_hit_projectile_drawn_in_hit_color(sim, surface):
    sim.start(LaunchParameters(initial_speed=20.0, launch_angle_deg=45.0, restitution=0.0,
                               target_x=40.7, target_width=10.0))
    _run_to_end(sim)
    last_circle = surface.of_kind("circle")[-1]
    assert last_circle[3] == PROJECTILE_HIT_COLOR


def test_miss_reported_once(sim, sinks):
    _, statuses = sinks
    p = sim.start(LaunchParameters(initial_speed=20.0, launch_angle_deg=45.0, restitution=0.5,
                                   target_x=250.0, target_width=10.0))
    _run_to_end(sim)
    assert not p.hit_target
    assert statuses == [TargetStatus.PENDING, TargetStatus.MISS]
    assert not sim.tick(1000.0)
    assert statuses.count(TargetStatus.MISS) == 1


def test_ideal_overlay_drawn_when_enabled(sim, surface):
    sim.start(LaunchParameters(show_ideal=True))
    points = sim.ideal_points
    assert len(points) > 2
    assert points[-1].y == pytest.approx(0.0, abs=1e-9)
    dashed = [c for c in surface.of_kind("polyline") if c[3]]
    assert dashed


def test_ideal_overlay_skipped_when_disabled(sim, surface):
    sim.start(LaunchParameters(show_ideal=False))
    sim.tick(0.0)
    assert sim.ideal_points == []
    assert not [c for c in surface.of_kind("polyline") if c[3]]


def test_preview_shows_configuration_without_launching(sim):
    sim.preview(LaunchParameters(target_x=80.0, target_width=6.0, gravity=3.71, show_ideal=True))
    assert not sim.running
    assert sim.projectile is None
    assert sim.target.center_x == 80.0
    assert sim.target.width == 6.0
    assert sim.gravity == 3.71
    assert sim.ideal_points


def test_new_run_replaces_previous(sim):
    first = sim.start(LaunchParameters(initial_speed=30.0))
    sim.tick(0.0)
    sim.tick(0.05)
    frozen = first.elapsed_time
    second = sim.start(LaunchParameters(initial_speed=10.0))
    assert second is not first
    assert sim.projectile is second
    sim.tick(1.0)
    sim.tick(1.05)
    assert first.elapsed_time == frozen
    assert second.elapsed_time == pytest.approx(0.05)


def test_resize_redraws_when_idle(sim, surface):
    surface.calls.clear()
    sim.resize(800, 400)
    assert sim.camera.viewport_size == (800, 400)
    assert surface.of_kind("clear")


def test_resize_keeps_active_run(sim):
    p = sim.start(LaunchParameters())
    sim.tick(0.0)
    sim.resize(800, 400)
    assert sim.running
    assert sim.projectile is p


def test_zero_mass_follows_launch_velocity(sim):
    p = sim.start(LaunchParameters(initial_speed=10.0, launch_angle_deg=45.0, mass=0.0))
    v0 = p.velocity
    t = 0.0
    sim.tick(t)
    for _ in range(60):
        t += FRAME
        assert sim.tick(t)
        assert p.acceleration == Vector2(0.0, 0.0)
    assert p.velocity == v0
    assert p.position.x == pytest.approx(v0.x * p.elapsed_time)
    assert p.position.y == pytest.approx(v0.y * p.elapsed_time)
