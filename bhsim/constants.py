#!/usr/bin/env python3
"""
Shared constants for the Black Hole Simulator (simulation units).

World units are arbitrary "visual" units: the attractor sits at the origin and
its mass is a dimensionless slider value. Keeping constants in one place keeps
the integrator and the lens consistent with each other.
"""

# Physical constants (simulation scale)
G = 1000.0  # gravitational constant for the simulation's unit system
RS_FACTOR = 1.5  # horizon radius = mass * RS_FACTOR

# Integration
BASE_DT = 0.016  # simulated seconds per frame before time scaling
SINGULARITY_EPSILON = 1e-6  # bodies closer than this to the origin are captured

# Lensing
LENS_EPSILON = 0.001  # below this distance a source forms an Einstein ring
MAGNIFICATION_CAP = 8.0
SECONDARY_MIN_MAGNIFICATION = 0.02  # fainter secondary images are not drawn

# Trails
MAX_TRAIL_LENGTH = 100

# Viewport zoom bounds
MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
DEFAULT_ZOOM = 1.0
WHEEL_ZOOM_SENSITIVITY = 0.001

# Attractor mass bounds (control panel slider)
DEFAULT_BLACK_HOLE_MASS = 10.0
MIN_BLACK_HOLE_MASS = 1.0
MAX_BLACK_HOLE_MASS = 50.0

# Time scale bounds (control panel slider)
DEFAULT_TIME_SCALE = 1.0
MIN_TIME_SCALE = 0.1
MAX_TIME_SCALE = 5.0

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
GRID_COLOR = (6, 60, 72)
HUD_COLOR = (160, 170, 180)
HORIZON_LABEL_COLOR = (245, 158, 11)
DEFAULT_GRID_DENSITY = 60
GRID_SAMPLE_STEP = 20  # world units between lensed samples along a grid line
SHADOW_FACTOR = 2.6  # apparent shadow radius relative to the horizon radius
ACCRETION_DISK_FACTOR = 6.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
