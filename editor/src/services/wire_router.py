"""Wire routing: L-shaped auto routes and interactive wire drawing.

L-routes join a driver to a driven point with one horizontal and one
vertical segment. Interactive wires are built one axis-aligned segment at
a time by WireDrawing, with interior bends snapped to the grid and the two
ends attached exactly to their terminals.
"""
import logging
from enum import Enum

from models.terminal import Terminal, TerminalRole
from models.transform import Vec2
from models.wire import Wire, WireSegment
from constants import GRID_STEP, POINT_TERMINAL

logger = logging.getLogger(__name__)


def snap_to_grid(value, step=GRID_STEP):
    """Round value to the nearest multiple of step."""
    return round(value / step) * step


def l_route(start: Vec2, end: Vec2):
    """Two-segment orthogonal route: horizontal from start, then vertical to end.

    The bend sits at (end.x, start.y). Degenerate segments (start and end
    already aligned) are kept so the route always has exactly two.
    """
    bend = Vec2(end.x, start.y)
    return [
        WireSegment(Vec2(start.x, start.y), bend),
        WireSegment(Vec2(bend.x, bend.y), Vec2(end.x, end.y)),
    ]


def route_dependency_wires(graph):
    """Build one L-routed wire per control -> controlled edge of a PointGraph.

    Returns:
        list[Wire]: wires with id 'wire-{control}-to-{controlled}'
    """
    wires = []
    for control_id, controlled_id in graph.edges():
        source = graph.get(control_id)
        target = graph.get(controlled_id)
        wires.append(Wire(
            id=f"wire-{control_id}-to-{controlled_id}",
            segments=l_route(source.position, target.position),
            source_point_id=control_id,
            target_point_id=controlled_id,
            source_terminal=POINT_TERMINAL,
            target_terminal=POINT_TERMINAL,
            state=source.state,
        ))
    return wires


def axis_snapped_end(anchor: Vec2, cursor: Vec2, step=GRID_STEP) -> Vec2:
    """End point of an axis-aligned segment from anchor toward cursor.

    Horizontal when the horizontal displacement dominates, vertical
    otherwise (ties go vertical). Only the moving coordinate is snapped.
    """
    dx = cursor.x - anchor.x
    dy = cursor.y - anchor.y
    if abs(dx) > abs(dy):
        return Vec2(snap_to_grid(cursor.x, step), anchor.y)
    return Vec2(anchor.x, snap_to_grid(cursor.y, step))


class DrawingState(Enum):
    IDLE = 'idle'
    DRAWING = 'drawing'


class WireDrawing:
    """Interactive wire drawing state machine.

    IDLE --begin(source terminal)--> DRAWING
    DRAWING --preview(cursor)--> DRAWING   (updates the dashed segment)
    DRAWING --add_bend(cursor)--> DRAWING  (confirms the preview)
    DRAWING --finish(target terminal)--> IDLE  (returns the Wire)
    DRAWING --cancel()--> IDLE  (discards everything)
    """

    def __init__(self, grid_step=GRID_STEP):
        self.grid_step = grid_step
        self.state = DrawingState.IDLE
        self.source = None
        self.segments = []
        self.preview_segment = None

    @property
    def is_drawing(self):
        return self.state is DrawingState.DRAWING

    @property
    def last_point(self):
        """Where the next segment starts: last confirmed bend or the anchor."""
        if self.segments:
            return self.segments[-1].end
        if self.source is not None:
            return self.source.position
        return None

    def begin(self, terminal: Terminal) -> bool:
        """Start a wire on a source terminal. Returns False if not allowed."""
        if self.is_drawing:
            return False
        if terminal.role is not TerminalRole.SOURCE:
            logger.debug("Cannot start wire on %s.%s (not a source)", terminal.owner_id, terminal.name)
            return False
        self.state = DrawingState.DRAWING
        self.source = terminal
        self.segments = []
        self.preview_segment = None
        logger.debug("Wire started at %s.%s", terminal.owner_id, terminal.name)
        return True

    def preview(self, cursor: Vec2):
        """Recompute the preview segment toward the cursor."""
        if not self.is_drawing:
            return None
        start = self.last_point
        end = axis_snapped_end(start, cursor, self.grid_step)
        self.preview_segment = WireSegment(Vec2(start.x, start.y), end)
        return self.preview_segment

    def add_bend(self, cursor: Vec2):
        """Confirm the segment toward cursor as permanent."""
        if not self.is_drawing:
            return None
        segment = self.preview(cursor)
        if segment.length == 0:
            # Zero-length click on the current bend; nothing to confirm
            return None
        self.segments.append(segment)
        self.preview_segment = None
        return segment

    def can_finish_on(self, terminal: Terminal) -> bool:
        return (self.is_drawing
                and terminal.role is TerminalRole.TARGET
                and terminal.owner_id != self.source.owner_id)

    def finish(self, terminal: Terminal, wire_id) -> Wire:
        """Attach the final segment to terminal and return the completed wire.

        Returns None (and stays DRAWING) if terminal is not a valid target.
        """
        if not self.can_finish_on(terminal):
            return None
        start = self.last_point
        segments = list(self.segments)
        segments.append(WireSegment(Vec2(start.x, start.y), Vec2(terminal.position.x, terminal.position.y)))
        wire = Wire(
            id=wire_id,
            segments=segments,
            source_point_id=self.source.owner_id,
            target_point_id=terminal.owner_id,
            source_terminal=self.source.name,
            target_terminal=terminal.name,
        )
        logger.debug("Wire %s finished with %d segment(s)", wire_id, len(segments))
        self._reset()
        return wire

    def cancel(self):
        if self.is_drawing:
            logger.debug("Wire drawing cancelled")
        self._reset()

    def _reset(self):
        self.state = DrawingState.IDLE
        self.source = None
        self.segments = []
        self.preview_segment = None
