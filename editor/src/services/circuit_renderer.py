"""Immediate-mode circuit rendering.

CircuitRenderer walks a CircuitSession and issues drawing calls against a
DrawingSurface. The surface is the only thing that knows how to rasterize;
the Qt canvas wraps a QPainter, tests use RecordingSurface.
"""
from abc import ABC, abstractmethod

from models.points import match_point
from constants import (
    COLOR_TRUE, COLOR_FALSE, COLOR_BODY, COLOR_GRID, COLOR_BACKGROUND,
    COLOR_LABEL, COLOR_PREVIEW, COLOR_HOVER, CONNECTION_RADIUS, POINT_RADIUS,
    AXIS_EXTENT, WIRE_WIDTH, WIRE_PREVIEW_WIDTH
)


def state_color(state):
    return COLOR_TRUE if state else COLOR_FALSE


class DrawingSurface(ABC):
    """Minimal 2D raster capability the renderer draws into.

    All coordinates are screen pixels.
    """

    @abstractmethod
    def clear(self, width, height, color):
        pass

    @abstractmethod
    def set_stroke(self, color, width=1, dashed=False):
        pass

    @abstractmethod
    def set_fill(self, color):
        pass

    @abstractmethod
    def draw_line(self, x1, y1, x2, y2):
        pass

    @abstractmethod
    def draw_circle(self, cx, cy, radius):
        """Filled circle using the current fill."""
        pass

    @abstractmethod
    def draw_rect(self, x, y, width, height):
        """Filled rectangle using the current fill."""
        pass

    @abstractmethod
    def draw_text(self, x, y, text):
        pass


class RecordingSurface(DrawingSurface):
    """Surface that records calls as (name, args) tuples."""

    def __init__(self):
        self.calls = []

    def clear(self, width, height, color):
        self.calls.append(('clear', (width, height, color)))

    def set_stroke(self, color, width=1, dashed=False):
        self.calls.append(('set_stroke', (color, width, dashed)))

    def set_fill(self, color):
        self.calls.append(('set_fill', (color,)))

    def draw_line(self, x1, y1, x2, y2):
        self.calls.append(('draw_line', (x1, y1, x2, y2)))

    def draw_circle(self, cx, cy, radius):
        self.calls.append(('draw_circle', (cx, cy, radius)))

    def draw_rect(self, x, y, width, height):
        self.calls.append(('draw_rect', (x, y, width, height)))

    def draw_text(self, x, y, text):
        self.calls.append(('draw_text', (x, y, text)))

    def names(self):
        return [name for name, _ in self.calls]

    def of(self, name):
        return [args for call_name, args in self.calls if call_name == name]


class CircuitRenderer:
    """Draws axes, wires, the wire preview, transistors and points."""

    def __init__(self, show_labels=True):
        self.show_labels = show_labels

    def render(self, surface, session, transform, drawing=None, hover=None):
        """Draw one frame.

        Args:
            surface: DrawingSurface, or None if not attached yet (no-op)
            session: CircuitSession to draw
            transform: ViewportTransform for world -> screen
            drawing: Optional WireDrawing whose in-progress wire is shown dashed
            hover: Optional Terminal under the pointer, marked with a dot

        Returns:
            bool: True if anything was drawn
        """
        if surface is None:
            return False

        surface.clear(transform.width, transform.height, COLOR_BACKGROUND)
        self._draw_axes(surface, transform)
        for wire in session.graph.wires:
            self._draw_polyline(surface, transform, wire.segments, state_color(wire.state), WIRE_WIDTH)
        if drawing is not None and drawing.is_drawing:
            self._draw_preview(surface, transform, drawing)
        for transistor in session.transistors:
            self._draw_transistor(surface, transform, transistor)
        for point in session.graph.points:
            self._draw_point(surface, transform, point)
        if hover is not None:
            self._draw_hover(surface, transform, hover)
        return True

    def _draw_axes(self, surface, transform):
        surface.set_stroke(COLOR_GRID, 1)
        left = transform.world_to_screen(-AXIS_EXTENT, 0)
        right = transform.world_to_screen(AXIS_EXTENT, 0)
        top = transform.world_to_screen(0, -AXIS_EXTENT)
        bottom = transform.world_to_screen(0, AXIS_EXTENT)
        surface.draw_line(left.x, left.y, right.x, right.y)
        surface.draw_line(top.x, top.y, bottom.x, bottom.y)

    def _draw_polyline(self, surface, transform, segments, color, width, dashed=False):
        surface.set_stroke(color, width, dashed)
        for segment in segments:
            start = transform.world_to_screen(segment.start.x, segment.start.y)
            end = transform.world_to_screen(segment.end.x, segment.end.y)
            surface.draw_line(start.x, start.y, end.x, end.y)

    def _draw_preview(self, surface, transform, drawing):
        segments = list(drawing.segments)
        if drawing.preview_segment is not None:
            segments.append(drawing.preview_segment)
        self._draw_polyline(surface, transform, segments, COLOR_PREVIEW, WIRE_PREVIEW_WIDTH, dashed=True)

    def _draw_transistor(self, surface, transform, transistor):
        center = transform.world_to_screen(transistor.position.x_center, transistor.position.y_center)
        body_w, body_h = transistor.body_size()
        w = transform.world_length_to_screen(body_w)
        h = transform.world_length_to_screen(body_h)
        surface.set_fill(COLOR_BODY)
        surface.draw_rect(center.x - w / 2, center.y - h / 2, w, h)

        for name, position in transistor.terminal_positions().items():
            screen = transform.world_to_screen(position.x, position.y)
            surface.set_fill(state_color(transistor.terminal_state(name)))
            surface.draw_circle(screen.x, screen.y, CONNECTION_RADIUS)

        if self.show_labels:
            surface.draw_text(center.x, center.y, transistor.id)

    def _draw_point(self, surface, transform, point):
        screen = transform.world_to_screen(point.position.x, point.position.y)
        radius = transform.world_length_to_screen(POINT_RADIUS)
        surface.set_fill(state_color(point.state))
        surface.draw_circle(screen.x, screen.y, radius)
        # Controlled points are underlined
        match_point(
            point,
            on_control=lambda p: None,
            on_controlled=lambda p: self._underline(surface, screen, radius),
        )
        if self.show_labels:
            surface.draw_text(screen.x + radius + 4, screen.y - radius - 4, point.id)

    def _underline(self, surface, screen, radius):
        surface.set_stroke(COLOR_LABEL, 1)
        surface.draw_line(screen.x - radius, screen.y + radius + 3, screen.x + radius, screen.y + radius + 3)

    def _draw_hover(self, surface, transform, terminal):
        screen = transform.world_to_screen(terminal.position.x, terminal.position.y)
        surface.set_fill(COLOR_HOVER)
        surface.draw_circle(screen.x, screen.y, 3)
