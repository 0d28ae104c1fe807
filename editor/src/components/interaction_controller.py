"""Pointer/wheel/key interaction state machine for the circuit canvas.

Toolkit-independent: handlers take screen pixel coordinates and a
PointerButton, so the Qt widget only translates events. Every mutation
requests a redraw through the scheduler instead of drawing directly.
"""
import logging
from enum import Enum

from models.transform import Vec2
from models.points import PointKind
from services.hit_tester import find_point, find_terminal
from services.redraw_scheduler import ManualScheduler
from services.wire_router import WireDrawing
from utils.coordinate_transforms import ViewportTransform
from constants import (
    ZOOM_FACTOR, GRID_STEP, POINT_HIT_RADIUS, TERMINAL_HIT_RADIUS,
    DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT
)

logger = logging.getLogger(__name__)


class PointerButton(Enum):
    LEFT = 'left'
    MIDDLE = 'middle'
    RIGHT = 'right'


class InteractionMode(Enum):
    PAN = 'pan'    # drag pans, click toggles control points
    DRAW = 'draw'  # clicks build wires


class InteractionController:
    """Pan, zoom-at-cursor, point toggling and wire drawing over one session.

    Owns the session, its viewport transform and the wire-drawing state.
    """

    def __init__(self, session, scheduler=None, width=DEFAULT_CANVAS_WIDTH, height=DEFAULT_CANVAS_HEIGHT,
                 zoom_factor=ZOOM_FACTOR, grid_step=GRID_STEP):
        self.session = session
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.transform = ViewportTransform(session.viewport, width, height)
        self.drawing = WireDrawing(grid_step)
        self.zoom_factor = zoom_factor
        self.mode = InteractionMode.PAN

        self.is_panning = False
        self.last_mouse_pos = None
        self.hover_terminal = None

        # Listeners notified with (event_name, payload) after state changes
        self._listeners = []

    # ========================================
    # Listeners
    # ========================================

    def add_listener(self, callback):
        self._listeners.append(callback)

    def _notify(self, event, payload=None):
        for callback in self._listeners:
            callback(event, payload)

    def _changed(self):
        self.scheduler.request()

    # ========================================
    # Viewport
    # ========================================

    @property
    def viewport(self):
        return self.session.viewport

    def screen_to_world(self, sx, sy) -> Vec2:
        return self.transform.screen_to_world(sx, sy)

    def world_to_screen(self, wx, wy) -> Vec2:
        return self.transform.world_to_screen(wx, wy)

    def resize(self, width, height):
        self.transform.resize(width, height)
        self._changed()

    def zoom_at(self, mx, my, direction):
        """Zoom one step keeping the world point under (mx, my) fixed.

        Args:
            mx, my: Cursor position in screen pixels
            direction: > 0 zooms in, < 0 zooms out, 0 does nothing

        Returns:
            float: the new scale
        """
        if direction == 0:
            return self.viewport.scale
        factor = self.zoom_factor if direction > 0 else 1 / self.zoom_factor

        world_before = self.transform.screen_to_world(mx, my)
        self.viewport.scale = self.viewport.clamp_scale(self.viewport.scale * factor)
        world_after = self.transform.screen_to_world(mx, my)

        offset = self.viewport.offset
        self.viewport.offset = Vec2(offset.x + world_before.x - world_after.x,
                                    offset.y + world_before.y - world_after.y)
        self._changed()
        self._notify('zoom', self.viewport.scale)
        return self.viewport.scale

    def zoom_in(self):
        center = self.transform.center
        return self.zoom_at(center.x, center.y, 1)

    def zoom_out(self):
        center = self.transform.center
        return self.zoom_at(center.x, center.y, -1)

    def reset_view(self):
        self.viewport.reset()
        self._changed()
        self._notify('zoom', self.viewport.scale)

    def get_zoom_percent(self):
        return int(round(self.viewport.scale * 100))

    def pan_by(self, dx, dy):
        """Pan by a screen-pixel delta; content follows the pointer."""
        scale = self.viewport.scale
        offset = self.viewport.offset
        self.viewport.offset = Vec2(offset.x - dx / scale, offset.y - dy / scale)
        self._changed()

    # ========================================
    # Mode
    # ========================================

    def set_mode(self, mode):
        mode = InteractionMode(mode)
        if mode is self.mode:
            return
        if self.mode is InteractionMode.DRAW:
            self.drawing.cancel()
        self._end_pan()
        self.mode = mode
        logger.debug("Interaction mode: %s", mode.value)
        self._changed()
        self._notify('mode', mode)

    def toggle_mode(self):
        self.set_mode(InteractionMode.PAN if self.mode is InteractionMode.DRAW else InteractionMode.DRAW)
        return self.mode

    # ========================================
    # Hit testing
    # ========================================

    def point_at(self, sx, sy, radius=POINT_HIT_RADIUS):
        return find_point(sx, sy, self.session.graph.points, self.transform, radius)

    def terminal_at(self, sx, sy):
        return find_terminal(sx, sy, self.session.terminals(), self.transform,
                             TERMINAL_HIT_RADIUS, POINT_HIT_RADIUS)

    # ========================================
    # Pointer events
    # ========================================

    def pointer_down(self, sx, sy, button=PointerButton.LEFT):
        """Handle a press. Returns True if the event was consumed."""
        if self.mode is InteractionMode.DRAW:
            if button is PointerButton.LEFT:
                return self._draw_press(sx, sy)
            return False

        if button is PointerButton.LEFT:
            point = self.point_at(sx, sy)
            if point is not None and point.kind is PointKind.CONTROL:
                self.session.graph.toggle(point.id)
                self._changed()
                self._notify('toggle', point.id)
                return True
            self._start_pan(sx, sy)
            return True
        if button is PointerButton.MIDDLE:
            self._start_pan(sx, sy)
            return True
        return False

    def pointer_move(self, sx, sy):
        """Handle pointer motion. Returns True if a redraw was requested."""
        if self.is_panning and self.last_mouse_pos is not None:
            dx = sx - self.last_mouse_pos.x
            dy = sy - self.last_mouse_pos.y
            self.last_mouse_pos = Vec2(sx, sy)
            if dx or dy:
                self.pan_by(dx, dy)
            return True

        if self.mode is InteractionMode.DRAW:
            hover = self.terminal_at(sx, sy)
            if self.drawing.is_drawing:
                self.drawing.preview(self.screen_to_world(sx, sy))
                self.hover_terminal = hover
                self._changed()
                return True
            if hover != self.hover_terminal:
                self.hover_terminal = hover
                self._changed()
                return True
        return False

    def pointer_up(self, button=PointerButton.LEFT):
        if self.is_panning and button in (PointerButton.LEFT, PointerButton.MIDDLE):
            self._end_pan()
            return True
        return False

    def pointer_leave(self):
        self._end_pan()
        if self.hover_terminal is not None:
            self.hover_terminal = None
            self._changed()

    def wheel(self, mx, my, delta):
        """Wheel delta > 0 (scroll up) zooms in."""
        return self.zoom_at(mx, my, delta)

    def cancel(self):
        """Escape: drop the in-progress wire."""
        if self.drawing.is_drawing:
            self.drawing.cancel()
            self._changed()
            self._notify('cancel')
            return True
        return False

    # ========================================
    # Internals
    # ========================================

    def _start_pan(self, sx, sy):
        self.is_panning = True
        self.last_mouse_pos = Vec2(sx, sy)
        self._notify('pan', True)

    def _end_pan(self):
        if self.is_panning:
            self.is_panning = False
            self.last_mouse_pos = None
            self._notify('pan', False)

    def _draw_press(self, sx, sy):
        terminal = self.terminal_at(sx, sy)

        if not self.drawing.is_drawing:
            if terminal is None:
                logger.debug("Press at (%.1f, %.1f) hit nothing", sx, sy)
                return False
            if self.drawing.begin(terminal):
                self.drawing.preview(self.screen_to_world(sx, sy))
                self._changed()
                return True
            return False

        if terminal is not None:
            if self.drawing.can_finish_on(terminal):
                wire = self.drawing.finish(terminal, self.session.next_wire_id())
                self.session.add_wire(wire)
                self._changed()
                self._notify('wire', wire)
                return True
            # Source terminals and the wire's own owner are not targets
            logger.debug("Ignoring press on %s.%s while drawing", terminal.owner_id, terminal.name)
            return False

        self.drawing.add_bend(self.screen_to_world(sx, sy))
        self._changed()
        return True
