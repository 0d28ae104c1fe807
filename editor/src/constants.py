"""
Circuit Canvas - Constants and Configuration

This module contains all constant values used throughout the application:
- Colors for signal states, bodies, grid and previews
- Transistor geometry and terminal radii
- Viewport zoom/pan tuning
- Hit-test tolerances
- Wire drawing grid
"""

# ======================================================================
# SIGNAL COLORS
# ======================================================================
# Hex strings are #RRGGBBAA, parsed by the painter surface

COLOR_TRUE = '#3eff24ff'
COLOR_FALSE = '#ff2424ff'
COLOR_BODY = '#3d3d3dff'
COLOR_GRID = '#266fffff'
COLOR_BACKGROUND = '#f5f5f5ff'
COLOR_LABEL = '#202020ff'
COLOR_PREVIEW = '#808080ff'
COLOR_HOVER = '#ffd24aff'

# ======================================================================
# TRANSISTOR GEOMETRY
# ======================================================================
# Body is WIDTH x HEIGHT world units for up/down, rotated 90 degrees
# for left/right

TRANSISTOR_WIDTH = 120
TRANSISTOR_HEIGHT = 40

# Terminal dot radius, in screen pixels (not scaled by zoom)
CONNECTION_RADIUS = 9

TRANSISTOR_ORIENTATIONS = ('up', 'down', 'left', 'right')
TRANSISTOR_TERMINALS = ('source', 'drain', 'gate')

# ======================================================================
# POINTS
# ======================================================================

# Drawn radius of a control/controlled point, in world units
POINT_RADIUS = 8

# Name used for the single terminal every point exposes
POINT_TERMINAL = 'point'

# ======================================================================
# HIT TESTING
# ======================================================================

# Generic point tolerance in world units (multiplied by scale on screen)
POINT_HIT_RADIUS = 15

# Terminal tolerance in screen pixels (unscaled)
TERMINAL_HIT_RADIUS = CONNECTION_RADIUS

# ======================================================================
# VIEWPORT
# ======================================================================

ZOOM_FACTOR = 1.07

DEFAULT_SCALE = 1.0

# Optional zoom bounds - None means unbounded
MIN_SCALE = None
MAX_SCALE = None

DEFAULT_CANVAS_WIDTH = 1280
DEFAULT_CANVAS_HEIGHT = 720

# Half-length of the world axes drawn through the origin
AXIS_EXTENT = 1000

# ======================================================================
# WIRES
# ======================================================================

# Grid step for interior wire bends, in world units
GRID_STEP = 20

WIRE_WIDTH = 2
WIRE_PREVIEW_WIDTH = 1

# ======================================================================
# REDRAW
# ======================================================================

# Coalescing interval for scheduled repaints (roughly one 60Hz frame)
REDRAW_INTERVAL_MS = 16
