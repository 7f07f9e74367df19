from __future__ import annotations

# ==============================================================================
# Playfield
# ==============================================================================

# Visible/interactable area in simulation units (one unit per canvas pixel).
FIELD_WIDTH = 800.0
FIELD_HEIGHT = 400.0

# A projectile may drift this far past the right edge before it is retired.
FIELD_X_MARGIN = 50.0

# ==============================================================================
# Launcher
# ==============================================================================

# Cannon muzzle; every shot starts here.
MUZZLE_X = 60.0
MUZZLE_Y = 320.0

# Input ranges offered by the controls.
ANGLE_MIN_DEG = 15.0
ANGLE_MAX_DEG = 75.0
POWER_MIN = 5.0
POWER_MAX = 20.0

# Launch speed = power * VELOCITY_SCALE (power 20 -> 10 units/tick).
VELOCITY_SCALE = 0.5

# ==============================================================================
# Physics
# ==============================================================================

# Added to vy once per tick, after the position update. +y points down.
GRAVITY = 0.35

# Sliding window of recent positions kept on a projectile.
TRAIL_MAX_POINTS = 50

# ==============================================================================
# Target
# ==============================================================================

TARGET_Y = 280.0
TARGET_X_MIN = 550.0
TARGET_X_MAX = 650.0

# Drawn radius vs. detection radius (detection is deliberately forgiving).
TARGET_VISUAL_RADIUS = 20.0
TARGET_HIT_RADIUS = 40.0

# ==============================================================================
# Session
# ==============================================================================

# Hits required to complete a session.
MAX_HITS = 3

# Feedback label thresholds.
ANGLE_FLAT_BELOW_DEG = 30.0
ANGLE_GOOD_BELOW_DEG = 50.0
POWER_WEAK_BELOW = 8.0
POWER_GOOD_BELOW = 15.0
