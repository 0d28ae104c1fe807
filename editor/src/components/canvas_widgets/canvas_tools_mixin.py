"""Canvas tool mode system - interactive wire drawing."""
from PyQt5.QtCore import Qt

from components.interaction_controller import InteractionMode
from components.canvas_widgets.canvas_zoom_pan_mixin import pointer_button


class CanvasToolsMixin:
	"""Mixin for the canvas draw-wire tool.

	Keeps canvas_widget.py from growing too large by separating tool functionality.
	"""

	def set_tool_mode(self, mode):
		"""Switch between pan and draw mode

		Args:
			mode: InteractionMode or its value ('pan', 'draw')
		"""
		self.controller.set_mode(mode)
		self._update_cursor()
		toolbar = getattr(self, 'toolbar', None)
		if toolbar is not None:
			toolbar.set_draw_mode(self.controller.mode is InteractionMode.DRAW, emit_signal=False)

	def toggle_tool_mode(self):
		"""Flip between pan and draw mode"""
		new_mode = InteractionMode.PAN if self.controller.mode is InteractionMode.DRAW else InteractionMode.DRAW
		self.set_tool_mode(new_mode)

	def _on_tool_mouse_press(self, event):
		"""Route a press to the wire tool. Returns True if event was handled."""
		if self.controller.mode is not InteractionMode.DRAW:
			return False
		button = pointer_button(event.button())
		if button is None:
			return False
		pos = event.pos()
		return self.controller.pointer_down(pos.x(), pos.y(), button)

	def _on_tool_mouse_move(self, event):
		"""Update wire preview / hover highlight. Returns True if event was handled."""
		if self.controller.mode is not InteractionMode.DRAW:
			return False
		pos = event.pos()
		return self.controller.pointer_move(pos.x(), pos.y())

	def _on_tool_key_press(self, event):
		"""Handle tool shortcuts. Returns True if event was handled."""
		key = event.key()
		if key == Qt.Key_Escape:
			return self.controller.cancel()
		if key == Qt.Key_D:
			self.toggle_tool_mode()
			return True
		if key == Qt.Key_0:
			self.zoom_reset()
			return True
		return False
