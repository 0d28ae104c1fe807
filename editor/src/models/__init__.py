"""
Circuit Canvas - Data Models

Points, wires, transistors, the point dependency graph and the per-canvas
session that holds them together with the viewport.
"""

from .transform import Vec2, Viewport
from .points import ControlPoint, ControlledPoint, PointKind, match_point
from .wire import Wire, WireSegment
from .transistor import Transistor, TransistorPosition
from .terminal import Terminal, TerminalRole
from .point_graph import PointGraph, CircuitConfigurationError
from .session import CircuitSession

__all__ = [
    'Vec2', 'Viewport',
    'ControlPoint', 'ControlledPoint', 'PointKind', 'match_point',
    'Wire', 'WireSegment',
    'Transistor', 'TransistorPosition',
    'Terminal', 'TerminalRole',
    'PointGraph', 'CircuitConfigurationError',
    'CircuitSession',
]
