"""Transistor element model.

Transistors are data-only: source, drain and gate are independent flags
used for coloring. Only the terminal geometry is computed here.
"""
from dataclasses import dataclass, field
from typing import Dict, List

from models.transform import Vec2
from constants import (
    TRANSISTOR_WIDTH, TRANSISTOR_HEIGHT,
    TRANSISTOR_ORIENTATIONS, TRANSISTOR_TERMINALS
)


# orientation -> terminal -> ((x, y) multiples of WIDTH/2, (x, y) multiples of HEIGHT/2)
_TERMINAL_LAYOUT = {
    'down': {
        'source': ((-1, 0), (0, 0)),
        'drain': ((1, 0), (0, 0)),
        'gate': ((0, 0), (0, 1)),
    },
    'up': {
        'source': ((1, 0), (0, 0)),
        'drain': ((-1, 0), (0, 0)),
        'gate': ((0, 0), (0, -1)),
    },
    'left': {
        'source': ((0, 1), (0, 0)),
        'drain': ((0, -1), (0, 0)),
        'gate': ((0, 0), (-1, 0)),
    },
    'right': {
        'source': ((0, -1), (0, 0)),
        'drain': ((0, 1), (0, 0)),
        'gate': ((0, 0), (1, 0)),
    },
}


def terminal_offsets(orientation, width=TRANSISTOR_WIDTH, height=TRANSISTOR_HEIGHT):
    """Get terminal offsets from the transistor center.

    Args:
        orientation: 'up', 'down', 'left' or 'right'
        width: Body length along the source-drain axis
        height: Body thickness (gate side)

    Returns:
        dict: terminal name -> Vec2 offset

    Raises:
        ValueError: unknown orientation
    """
    if orientation not in _TERMINAL_LAYOUT:
        raise ValueError(f"Unknown orientation '{orientation}', expected one of {TRANSISTOR_ORIENTATIONS}")
    half_w = width / 2
    half_h = height / 2
    offsets = {}
    for name, (width_factors, height_factors) in _TERMINAL_LAYOUT[orientation].items():
        offsets[name] = Vec2(
            width_factors[0] * half_w + height_factors[0] * half_h,
            width_factors[1] * half_w + height_factors[1] * half_h,
        )
    return offsets


@dataclass
class TransistorPosition:
    x_center: float
    y_center: float
    orientation: str = 'up'

    def __post_init__(self):
        if self.orientation not in TRANSISTOR_ORIENTATIONS:
            raise ValueError(f"Unknown orientation '{self.orientation}', expected one of {TRANSISTOR_ORIENTATIONS}")

    @property
    def center(self):
        return Vec2(self.x_center, self.y_center)


@dataclass
class Transistor:
    id: str
    position: TransistorPosition
    source: bool = False
    drain: bool = False
    gate: bool = False
    drain_dependencies: List[str] = field(default_factory=list)
    source_dependencies: List[str] = field(default_factory=list)

    def terminal_state(self, name) -> bool:
        if name not in TRANSISTOR_TERMINALS:
            raise ValueError(f"Unknown terminal '{name}'")
        return getattr(self, name)

    def terminal_positions(self) -> Dict[str, Vec2]:
        """World positions of source, drain and gate."""
        center = self.position.center
        return {
            name: center + offset
            for name, offset in terminal_offsets(self.position.orientation).items()
        }

    def body_size(self):
        """(width, height) of the body rectangle in world units."""
        if self.position.orientation in ('up', 'down'):
            return TRANSISTOR_WIDTH, TRANSISTOR_HEIGHT
        return TRANSISTOR_HEIGHT, TRANSISTOR_WIDTH

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=str(data['id']),
            position=TransistorPosition(
                float(data['x']), float(data['y']), data.get('orientation', 'up')
            ),
            source=bool(data.get('source', False)),
            drain=bool(data.get('drain', False)),
            gate=bool(data.get('gate', False)),
            drain_dependencies=[str(d) for d in data.get('drain_dependencies', [])],
            source_dependencies=[str(d) for d in data.get('source_dependencies', [])],
        )
