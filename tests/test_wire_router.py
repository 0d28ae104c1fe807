"""
Tests for L-routing and the interactive wire drawing state machine.

Covers:
- l_route shape (two segments, bend at (end.x, start.y))
- Dependency wire generation from a point graph
- Axis snapping of preview segments
- begin / preview / add_bend / finish / cancel transitions
- Exact attachment to source and target terminals
"""
import pytest

from models.terminal import Terminal, TerminalRole
from models.transform import Vec2
from services.wire_router import (
    DrawingState, WireDrawing, axis_snapped_end, l_route, route_dependency_wires, snap_to_grid
)


def source_terminal(x=0.0, y=0.0, owner='C1'):
    return Terminal(owner, 'point', Vec2(x, y), TerminalRole.SOURCE)


def target_terminal(x, y, owner='P1', name='point', on_transistor=False):
    return Terminal(owner, name, Vec2(x, y), TerminalRole.TARGET, on_transistor)


# ══════════════════════════════════════════════════════════════════════════
# L-routing
# ══════════════════════════════════════════════════════════════════════════

class TestLRoute:

    def test_bend_at_end_x_start_y(self):
        first, second = l_route(Vec2(0, 0), Vec2(-240, 80))
        assert (first.start, first.end) == (Vec2(0, 0), Vec2(-240, 0))
        assert (second.start, second.end) == (Vec2(-240, 0), Vec2(-240, 80))
        assert first.is_horizontal and second.is_vertical

    def test_aligned_points_keep_two_segments(self):
        segments = l_route(Vec2(5, 5), Vec2(5, 50))
        assert len(segments) == 2
        assert segments[0].length == 0
        assert segments[1].end == Vec2(5, 50)

    def test_route_is_copy_of_endpoints(self):
        start = Vec2(1, 2)
        segments = l_route(start, Vec2(3, 4))
        segments[0].start.x = 99
        assert start.x == 1

    def test_dependency_wires(self, session):
        wires = route_dependency_wires(session.graph)
        assert [w.id for w in wires] == ['wire-C1-to-P1', 'wire-C2-to-P1', 'wire-C1-to-P2']
        c2_wire = wires[1]
        assert c2_wire.start == Vec2(0, 160)
        assert c2_wire.vertices()[1] == Vec2(-240, 160)
        assert c2_wire.end == Vec2(-240, 80)
        assert all(w.is_connected() for w in wires)


# ══════════════════════════════════════════════════════════════════════════
# Snapping
# ══════════════════════════════════════════════════════════════════════════

class TestSnapping:

    @pytest.mark.parametrize("value, expected", [(0, 0), (9, 0), (11, 20), (-29, -20), (-31, -40)])
    def test_snap_to_grid(self, value, expected):
        assert snap_to_grid(value, 20) == expected

    def test_horizontal_when_dx_dominates(self):
        assert axis_snapped_end(Vec2(3, 7), Vec2(95, 20), 20) == Vec2(100, 7)

    def test_vertical_when_dy_dominates(self):
        assert axis_snapped_end(Vec2(3, 7), Vec2(10, -48), 20) == Vec2(3, -40)

    def test_tie_goes_vertical(self):
        assert axis_snapped_end(Vec2(0, 0), Vec2(30, 30), 20) == Vec2(0, 40)


# ══════════════════════════════════════════════════════════════════════════
# Drawing state machine
# ══════════════════════════════════════════════════════════════════════════

class TestWireDrawing:

    @pytest.fixture
    def drawing(self):
        return WireDrawing(grid_step=20)

    def test_starts_idle(self, drawing):
        assert drawing.state is DrawingState.IDLE
        assert drawing.last_point is None
        assert drawing.preview(Vec2(10, 10)) is None
        assert drawing.add_bend(Vec2(10, 10)) is None

    def test_begin_requires_source(self, drawing):
        assert drawing.begin(target_terminal(0, 0)) is False
        assert not drawing.is_drawing
        assert drawing.begin(source_terminal()) is True
        assert drawing.is_drawing

    def test_begin_while_drawing_is_refused(self, drawing):
        drawing.begin(source_terminal())
        assert drawing.begin(source_terminal(50, 50, owner='C2')) is False
        assert drawing.source.owner_id == 'C1'

    def test_preview_is_axis_aligned_from_anchor(self, drawing):
        drawing.begin(source_terminal(3, 7))
        segment = drawing.preview(Vec2(95, 20))
        assert segment.start == Vec2(3, 7)
        assert segment.end == Vec2(100, 7)
        assert drawing.segments == []

    def test_add_bend_confirms_and_chains(self, drawing):
        drawing.begin(source_terminal(3, 7))
        drawing.add_bend(Vec2(95, 20))
        drawing.add_bend(Vec2(110, 85))
        assert [(s.start, s.end) for s in drawing.segments] == [
            (Vec2(3, 7), Vec2(100, 7)),
            (Vec2(100, 7), Vec2(100, 80)),
        ]
        assert drawing.preview_segment is None
        assert drawing.last_point == Vec2(100, 80)

    def test_zero_length_bend_ignored(self, drawing):
        drawing.begin(source_terminal(0, 0))
        assert drawing.add_bend(Vec2(4, 2)) is None
        assert drawing.segments == []

    def test_finish_attaches_exactly(self, drawing):
        drawing.begin(source_terminal(3, 7))
        drawing.add_bend(Vec2(95, 20))
        wire = drawing.finish(target_terminal(101.5, 63.25, owner='T2', name='gate', on_transistor=True), 'drawn-1')

        assert wire.id == 'drawn-1'
        assert wire.start == Vec2(3, 7)
        assert wire.end == Vec2(101.5, 63.25)
        assert wire.is_connected()
        assert len(wire.segments) == 2
        assert (wire.source_point_id, wire.source_terminal) == ('C1', 'point')
        assert (wire.target_point_id, wire.target_terminal) == ('T2', 'gate')
        assert drawing.state is DrawingState.IDLE
        assert drawing.segments == []

    def test_finish_without_bends_is_single_segment(self, drawing):
        drawing.begin(source_terminal(0, 0))
        wire = drawing.finish(target_terminal(-240, 80), 'drawn-1')
        assert len(wire.segments) == 1
        assert (wire.start, wire.end) == (Vec2(0, 0), Vec2(-240, 80))

    def test_finish_on_source_is_refused(self, drawing):
        drawing.begin(source_terminal())
        assert drawing.finish(source_terminal(50, 0, owner='C2'), 'drawn-1') is None
        assert drawing.is_drawing

    def test_finish_on_same_owner_is_refused(self, drawing):
        drawing.begin(Terminal('T1', 'drain', Vec2(140, 200), TerminalRole.SOURCE, True))
        own_gate = target_terminal(200, 180, owner='T1', name='gate', on_transistor=True)
        assert drawing.can_finish_on(own_gate) is False
        assert drawing.finish(own_gate, 'drawn-1') is None

    def test_cancel_discards_everything(self, drawing):
        drawing.begin(source_terminal())
        drawing.add_bend(Vec2(100, 0))
        drawing.preview(Vec2(100, 60))
        drawing.cancel()
        assert drawing.state is DrawingState.IDLE
        assert drawing.source is None
        assert drawing.segments == []
        assert drawing.preview_segment is None
