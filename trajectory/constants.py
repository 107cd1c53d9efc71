#!/usr/bin/env python3
"""
Shared constants for the Projectile Simulator (SI units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Physics controls
MIN_BOUNCE_VELOCITY = 0.1  # m/s; slower vertical impacts come to rest
MAX_BOUNCES = 5
DEFAULT_DRAG_COEFFICIENT = 0.1  # kg/s; linear drag F = -c * v
PATH_SAMPLE_DISTANCE = 4.0  # m; minimum spacing between stored path samples
MAX_FRAME_DT = 0.1  # seconds; cap per tick so long frame gaps stay stable

# Ideal (no drag, no bounce) overlay
IDEAL_TRAJECTORY_STEPS = 100
IDEAL_WINDOW_FACTOR = 1.5  # sample this multiple of the time of flight
IDEAL_MIN_WINDOW = 1.0  # seconds

# Scene
TARGET_HEIGHT = 20.0  # m; the target band spans [0, TARGET_HEIGHT]
PIXELS_PER_METER = 10.0
GROUND_Y_OFFSET = 30  # pixels between the surface bottom and the ground line
PROJECTILE_RADIUS = 5  # pixels

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 600
BACKGROUND_COLOR = (17, 24, 39)
GROUND_COLOR = (34, 197, 94)
MARKER_COLOR = (156, 163, 175)
MARKER_TEXT_COLOR = (107, 114, 128)
TARGET_FILL_COLOR = (251, 191, 36)
TARGET_BORDER_COLOR = (217, 119, 6)
IDEAL_PATH_COLOR = (163, 163, 163)
PROJECTILE_COLOR = (239, 68, 68)
PROJECTILE_HIT_COLOR = (250, 204, 21)
PATH_COLOR = (239, 140, 140)
HUD_TEXT_COLOR = (200, 200, 200)
DASH_LENGTH = 5  # pixels on / pixels off for the dashed overlay

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

# Launch defaults
DEFAULT_SPEED = 40.0  # m/s
DEFAULT_ANGLE_DEG = 45.0
DEFAULT_HEIGHT = 0.0  # m
DEFAULT_MASS = 1.0  # kg
DEFAULT_GRAVITY = 9.81  # m/s^2
DEFAULT_RESTITUTION = 0.6
DEFAULT_TARGET_X = 150.0  # m
DEFAULT_TARGET_WIDTH = 10.0  # m

# Control panel slider ranges (min, max)
SPEED_RANGE = (1.0, 100.0)
ANGLE_RANGE = (0.0, 90.0)
HEIGHT_RANGE = (0.0, 50.0)
MASS_RANGE = (0.1, 20.0)
GRAVITY_RANGE = (0.5, 30.0)
RESTITUTION_RANGE = (0.0, 1.0)
TARGET_X_RANGE = (10.0, 300.0)
TARGET_WIDTH_RANGE = (2.0, 50.0)
