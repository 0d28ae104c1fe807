"""Signal point models.

A point is one of two variants:
- ControlPoint: state flipped directly by a click
- ControlledPoint: state derived as the OR of its driving control points

Code that branches on the variant goes through match_point() so both
kinds are always handled.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, TypeVar, Union

from models.transform import Vec2


class PointKind(Enum):
    CONTROL = 'control'
    CONTROLLED = 'controlled'


@dataclass
class ControlPoint:
    """Point toggled by user interaction."""
    id: str
    position: Vec2
    state: bool = False

    @property
    def kind(self):
        return PointKind.CONTROL


@dataclass
class ControlledPoint:
    """Point whose state follows the OR of driven_by control ids."""
    id: str
    position: Vec2
    driven_by: FrozenSet[str] = field(default_factory=frozenset)
    state: bool = False

    def __post_init__(self):
        self.driven_by = frozenset(self.driven_by)

    @property
    def kind(self):
        return PointKind.CONTROLLED


Point = Union[ControlPoint, ControlledPoint]

T = TypeVar('T')


def match_point(point: Point,
                on_control: Callable[[ControlPoint], T],
                on_controlled: Callable[[ControlledPoint], T]) -> T:
    """Dispatch on the point variant.

    Args:
        point: ControlPoint or ControlledPoint
        on_control: Called with the point if it is a ControlPoint
        on_controlled: Called with the point if it is a ControlledPoint

    Returns:
        Whatever the selected callback returns

    Raises:
        TypeError: point is neither variant
    """
    if isinstance(point, ControlPoint):
        return on_control(point)
    if isinstance(point, ControlledPoint):
        return on_controlled(point)
    raise TypeError(f"Not a point: {point!r}")


def point_from_dict(data: dict) -> Point:
    """Build a point from its declarative form.

    Expected keys: id, type ('control' | 'controlled'), x, y,
    optional state, and driven_by for controlled points.
    """
    kind = PointKind(data.get('type', 'control'))
    position = Vec2(float(data['x']), float(data['y']))
    if kind is PointKind.CONTROL:
        return ControlPoint(str(data['id']), position, bool(data.get('state', False)))
    return ControlledPoint(
        str(data['id']),
        position,
        frozenset(str(i) for i in data.get('driven_by', ())),
        bool(data.get('state', False)),
    )
