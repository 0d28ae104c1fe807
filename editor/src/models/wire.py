"""Wire models: axis-aligned segments chained into a polyline."""
from dataclasses import dataclass, field
from typing import List

from models.transform import Vec2
from constants import POINT_TERMINAL


@dataclass
class WireSegment:
    start: Vec2
    end: Vec2

    @property
    def is_horizontal(self):
        return self.start.y == self.end.y

    @property
    def is_vertical(self):
        return self.start.x == self.end.x

    @property
    def length(self):
        return self.start.distance_to(self.end)

    @classmethod
    def from_list(cls, coords):
        """Build from [x1, y1, x2, y2]."""
        x1, y1, x2, y2 = (float(c) for c in coords)
        return cls(Vec2(x1, y1), Vec2(x2, y2))


@dataclass
class Wire:
    """Routed connection from a driving terminal to a driven terminal.

    state mirrors the driving point and is kept in sync by PointGraph.
    """
    id: str
    segments: List[WireSegment] = field(default_factory=list)
    source_point_id: str = None
    target_point_id: str = None
    source_terminal: str = POINT_TERMINAL
    target_terminal: str = POINT_TERMINAL
    state: bool = False

    @property
    def start(self):
        return self.segments[0].start if self.segments else None

    @property
    def end(self):
        return self.segments[-1].end if self.segments else None

    def is_connected(self):
        """True if every segment starts where the previous one ended."""
        return all(a.end == b.start for a, b in zip(self.segments, self.segments[1:]))

    def vertices(self):
        """Polyline vertices: start of the first segment then every segment end."""
        if not self.segments:
            return []
        return [self.segments[0].start] + [s.end for s in self.segments]
