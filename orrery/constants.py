#!/usr/bin/env python3
"""
Shared constants for Orrery Simulator.

Distances and radii in presets are abstract "orrery units"; the renderer turns
them into pixels with a single scale factor computed every frame.
"""

# Orbital model
PERIOD_EXPONENT = 1.5  # period = distance ** PERIOD_EXPONENT

# Speed slider (raw integer value) and its response curve
SPEED_MIN = 0
SPEED_MAX = 500
SPEED_STEP = 1
SPEED_EXPONENT = 1.75  # speed factor = value ** SPEED_EXPONENT

# Frame loop
TARGET_FPS = 60
MS_PER_SECOND = 1000.0

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (10, 12, 18)
ORBIT_RING_COLOR = (0, 0, 0, 255)
ORBIT_RING_OVERLAY_COLOR = (255, 255, 255, 26)
DEFAULT_BODY_COLOR = (200, 200, 255)

# Pixels per orrery unit when the root has nothing orbiting it
FALLBACK_SCALE = 1.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

# Presets
DEFAULT_TEMPLATE = "solar_system.json"
