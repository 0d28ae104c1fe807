"""Coordinate and viewport data structures."""
import math
from dataclasses import dataclass, field

from constants import DEFAULT_SCALE


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across both spaces:
    - World units (unbounded, where circuit elements live)
    - Screen pixels (top-left origin, Y-down)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def distance_to(self, other) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class Viewport:
    """Pan/zoom state of one canvas.

    scale multiplies world units into pixels and must stay positive.
    offset is the world point shown at the canvas center.
    min_scale/max_scale are optional zoom bounds (None = unbounded).
    """
    scale: float = DEFAULT_SCALE
    offset: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))
    min_scale: float = None
    max_scale: float = None

    def __setattr__(self, name, value):
        if name == 'scale':
            value = self._validate_scale(value)
        super().__setattr__(name, value)

    def __post_init__(self):
        if self.min_scale is not None:
            self.min_scale = self._validate_scale(self.min_scale)
        if self.max_scale is not None:
            self.max_scale = self._validate_scale(self.max_scale)
        if self.min_scale is not None and self.max_scale is not None and self.min_scale > self.max_scale:
            raise ValueError(f"Viewport min_scale {self.min_scale} exceeds max_scale {self.max_scale}")

    @staticmethod
    def _validate_scale(value):
        value = float(value)
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"Viewport scale must be a positive finite number, got {value}")
        return value

    def clamp_scale(self, value):
        """Clamp a candidate scale to the configured bounds, if any."""
        if self.min_scale is not None:
            value = max(self.min_scale, value)
        if self.max_scale is not None:
            value = min(self.max_scale, value)
        return value

    def reset(self):
        """Back to 100% zoom centered on the world origin."""
        self.scale = DEFAULT_SCALE
        self.offset = Vec2(0.0, 0.0)
