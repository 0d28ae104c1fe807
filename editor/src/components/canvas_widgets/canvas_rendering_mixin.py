"""Canvas rendering mixin - paints the session through the circuit renderer."""

from PyQt5.QtGui import QPainter

from components.canvas_widgets.painter_surface import QPainterSurface
from services.circuit_renderer import CircuitRenderer


class CanvasRenderingMixin:
	"""Paint handling for the circuit canvas.

	Requires the following from the parent class:
	- self.controller (InteractionController)
	- self.renderer (CircuitRenderer), created lazily if missing
	"""

	def paintEvent(self, event):
		"""Draw one frame with a QPainter-backed surface"""
		painter = QPainter(self)
		try:
			self.render_frame(QPainterSurface(painter))
		finally:
			painter.end()

	def render_frame(self, surface):
		"""Render the current session to any DrawingSurface (None is a no-op)"""
		if getattr(self, 'renderer', None) is None:
			self.renderer = CircuitRenderer()
		controller = self.controller
		return self.renderer.render(
			surface,
			controller.session,
			controller.transform,
			drawing=controller.drawing,
			hover=controller.hover_terminal,
		)
