"""
Tests for the toolkit-independent interaction controller.

Screen positions assume the 800x600 canvas from conftest: at scale 1 and
offset (0, 0) a world point (x, y) sits at (x + 400, y + 300).

Covers:
- Zoom at cursor keeps the world point under the cursor fixed
- Wheel direction, zoom bounds and reset
- Drag panning moves content with the pointer
- Clicking control points toggles them; controlled points do not
- Full wire drawing flow, including transistor terminals
- Escape and mode switches cancel an in-progress wire
- Redraw requests are coalesced
"""
import pytest

from conftest import screen_of
from components.interaction_controller import InteractionMode, PointerButton
from models.transform import Vec2


# ══════════════════════════════════════════════════════════════════════════
# Zoom
# ══════════════════════════════════════════════════════════════════════════

class TestZoom:

    @pytest.mark.parametrize("mx, my", [(400, 300), (123, 456), (0, 0), (799, 1)])
    @pytest.mark.parametrize("direction", [1, -1])
    def test_world_point_under_cursor_is_fixed(self, controller, mx, my, direction):
        controller.pan_by(37, -12)
        before = controller.screen_to_world(mx, my)
        for _ in range(5):
            controller.zoom_at(mx, my, direction)
            after = controller.screen_to_world(mx, my)
            assert after.x == pytest.approx(before.x, abs=1e-9)
            assert after.y == pytest.approx(before.y, abs=1e-9)

    def test_zoom_factor(self, controller):
        assert controller.zoom_at(400, 300, 1) == pytest.approx(1.07)
        assert controller.zoom_at(400, 300, -1) == pytest.approx(1.0)

    def test_zoom_at_center_keeps_offset(self, controller):
        controller.zoom_at(400, 300, 1)
        assert controller.viewport.offset.x == pytest.approx(0)
        assert controller.viewport.offset.y == pytest.approx(0)

    def test_wheel_up_zooms_in(self, controller):
        controller.wheel(200, 200, 120)
        assert controller.viewport.scale > 1.0
        controller.wheel(200, 200, -120)
        assert controller.viewport.scale == pytest.approx(1.0)

    def test_wheel_zero_is_noop(self, controller, scheduler):
        controller.wheel(200, 200, 0)
        assert controller.viewport.scale == 1.0
        assert not scheduler.dirty

    def test_zoom_bounds(self, controller):
        controller.viewport.max_scale = 1.1
        controller.zoom_in()
        controller.zoom_in()
        assert controller.viewport.scale == 1.1

    def test_zoom_percent_and_reset(self, controller):
        controller.zoom_in()
        assert controller.get_zoom_percent() == 107
        controller.pan_by(50, 50)
        controller.reset_view()
        assert controller.get_zoom_percent() == 100
        assert controller.viewport.offset == Vec2(0, 0)


# ══════════════════════════════════════════════════════════════════════════
# Pan and toggle
# ══════════════════════════════════════════════════════════════════════════

class TestPanMode:

    def test_drag_pans_with_pointer(self, controller):
        assert controller.pointer_down(50, 50, PointerButton.LEFT)
        assert controller.is_panning
        controller.pointer_move(60, 70)
        assert controller.viewport.offset == Vec2(-10, -20)
        # The world origin followed the pointer by (10, 20)
        assert controller.world_to_screen(0, 0) == Vec2(410, 320)
        assert controller.pointer_up(PointerButton.LEFT)
        assert not controller.is_panning

    def test_pan_scaled_by_zoom(self, controller):
        controller.viewport.scale = 2.0
        controller.pointer_down(50, 50, PointerButton.MIDDLE)
        controller.pointer_move(70, 50)
        assert controller.viewport.offset == Vec2(-10, 0)

    def test_click_toggles_control_point(self, controller):
        events = []
        controller.add_listener(lambda event, payload: events.append((event, payload)))
        assert controller.pointer_down(*screen_of(0, 0))
        graph = controller.session.graph
        assert graph.get('C1').state is True
        assert graph.get('P1').state is True
        assert graph.get('P2').state is True
        assert not controller.is_panning
        assert ('toggle', 'C1') in events

    def test_click_inside_scaled_radius(self, controller):
        controller.viewport.scale = 2.0
        # C2 at world (0, 160) -> screen (400, 620); 28px away is inside 15 * 2
        assert controller.point_at(428, 620).id == 'C2'

    def test_click_controlled_point_pans(self, controller):
        controller.pointer_down(*screen_of(-240, 80))
        assert controller.session.graph.get('P1').state is False
        assert controller.is_panning

    def test_right_button_ignored(self, controller):
        assert controller.pointer_down(50, 50, PointerButton.RIGHT) is False
        assert not controller.is_panning

    def test_leave_ends_pan(self, controller):
        controller.pointer_down(50, 50)
        controller.pointer_leave()
        assert not controller.is_panning
        assert controller.pointer_move(80, 80) is False


# ══════════════════════════════════════════════════════════════════════════
# Wire drawing
# ══════════════════════════════════════════════════════════════════════════

class TestDrawMode:

    @pytest.fixture
    def drawing_controller(self, controller):
        controller.set_mode(InteractionMode.DRAW)
        return controller

    def test_draw_control_to_controlled(self, drawing_controller):
        c = drawing_controller
        events = []
        c.add_listener(lambda event, payload: events.append((event, payload)))

        assert c.pointer_down(*screen_of(0, 160))           # C2
        assert c.drawing.is_drawing
        c.pointer_move(*screen_of(120, 167))
        assert c.drawing.preview_segment.end == Vec2(120, 160)
        assert c.pointer_down(*screen_of(120, 167))         # bend
        assert c.pointer_down(*screen_of(-200, -140))       # P2

        assert not c.drawing.is_drawing
        wire = c.session.graph.wires[-1]
        assert wire.id == 'drawn-1'
        assert wire.start == Vec2(0, 160)
        assert wire.vertices()[1] == Vec2(120, 160)
        assert wire.end == Vec2(-200, -140)
        assert ('wire', wire) in events

        # The new wire also makes C2 a driver of P2
        graph = c.session.graph
        assert graph.get('P2').driven_by == {'C1', 'C2'}
        graph.toggle('C2')
        assert graph.get('P2').state is True
        assert wire.state is True

    def test_draw_from_transistor_drain(self, drawing_controller):
        c = drawing_controller
        assert c.pointer_down(*screen_of(140, 200))   # transistor 1 drain
        assert c.drawing.source.key == ('1', 'drain')
        assert c.pointer_down(*screen_of(-240, 80))   # P1
        wire = c.session.graph.wires[-1]
        assert (wire.source_point_id, wire.source_terminal) == ('1', 'drain')
        assert wire.state is True
        assert c.session.graph.get('P1').driven_by == {'C1', 'C2'}

    def test_draw_to_transistor_gate(self, drawing_controller):
        c = drawing_controller
        c.pointer_down(*screen_of(0, 0))              # C1
        c.pointer_down(*screen_of(400, 180))          # transistor 2 gate
        wire = c.session.graph.wires[-1]
        assert (wire.target_point_id, wire.target_terminal) == ('2', 'gate')
        assert wire.end == Vec2(400, 180)

    def test_cannot_start_on_target(self, drawing_controller):
        assert drawing_controller.pointer_down(*screen_of(-240, 80)) is False
        assert not drawing_controller.drawing.is_drawing

    def test_source_terminal_does_not_finish(self, drawing_controller):
        c = drawing_controller
        c.pointer_down(*screen_of(0, 0))
        assert c.pointer_down(*screen_of(0, 160)) is False
        assert c.drawing.is_drawing
        assert c.drawing.source.owner_id == 'C1'

    def test_click_does_not_toggle_in_draw_mode(self, drawing_controller):
        drawing_controller.pointer_down(*screen_of(0, 0))
        assert drawing_controller.session.graph.get('C1').state is False

    def test_escape_cancels(self, drawing_controller):
        c = drawing_controller
        wire_count = len(c.session.graph.wires)
        c.pointer_down(*screen_of(0, 0))
        c.pointer_down(*screen_of(100, 5))
        assert c.cancel() is True
        assert not c.drawing.is_drawing
        assert c.drawing.segments == []
        assert len(c.session.graph.wires) == wire_count
        assert c.cancel() is False

    def test_leaving_draw_mode_cancels(self, drawing_controller):
        c = drawing_controller
        c.pointer_down(*screen_of(0, 0))
        c.set_mode(InteractionMode.PAN)
        assert not c.drawing.is_drawing
        assert c.mode is InteractionMode.PAN

    def test_hover_tracks_terminal(self, drawing_controller):
        c = drawing_controller
        c.pointer_move(*screen_of(200, 180))
        assert c.hover_terminal.key == ('1', 'gate')
        c.pointer_leave()
        assert c.hover_terminal is None

    def test_toggle_mode(self, controller):
        assert controller.toggle_mode() is InteractionMode.DRAW
        assert controller.toggle_mode() is InteractionMode.PAN


# ══════════════════════════════════════════════════════════════════════════
# Redraw scheduling
# ══════════════════════════════════════════════════════════════════════════

class TestRedrawScheduling:

    def test_moves_coalesce_into_one_redraw(self, controller, scheduler):
        controller.pointer_down(10, 10)
        for i in range(20):
            controller.pointer_move(10 + i, 10 + i)
        assert scheduler.redraw_count == 0
        assert scheduler.run_pending() is True
        assert scheduler.redraw_count == 1
        assert scheduler.run_pending() is False

    def test_toggle_requests_redraw(self, controller, scheduler):
        controller.pointer_down(*screen_of(0, 0))
        assert scheduler.dirty

    def test_redraw_callback(self, controller, scheduler):
        calls = []
        scheduler.redraw = lambda: calls.append(1)
        controller.zoom_in()
        controller.zoom_out()
        scheduler.run_pending()
        assert calls == [1]
