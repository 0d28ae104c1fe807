"""Mixin for handling zoom and pan in the circuit canvas.

Provides viewport navigation including:
- Zoom in/out/reset with zoom-to-cursor on the wheel
- Pan with left or middle mouse drag (outside draw mode)
"""

from PyQt5.QtCore import Qt

from components.interaction_controller import PointerButton, InteractionMode


QT_BUTTONS = {
	Qt.LeftButton: PointerButton.LEFT,
	Qt.MiddleButton: PointerButton.MIDDLE,
	Qt.RightButton: PointerButton.RIGHT,
}


def pointer_button(qt_button):
	"""Map a Qt mouse button to a PointerButton (None if unsupported)."""
	return QT_BUTTONS.get(qt_button)


class CanvasZoomPanMixin:
	"""Mixin providing zoom and pan functionality for canvas."""

	# Expected state variables (initialized in main class):
	# - controller: InteractionController
	# - toolbar: optional CanvasToolbar to keep in sync

	def zoom_in(self):
		"""Zoom in one step about the canvas center."""
		self.controller.zoom_in()
		self._update_zoom_toolbar()

	def zoom_out(self):
		"""Zoom out one step about the canvas center."""
		self.controller.zoom_out()
		self._update_zoom_toolbar()

	def zoom_reset(self):
		"""Reset zoom to 100% centered on the world origin."""
		self.controller.reset_view()
		self._update_zoom_toolbar()

	def get_zoom_percent(self):
		"""Get current zoom percentage."""
		return self.controller.get_zoom_percent()

	def _update_zoom_toolbar(self):
		"""Update zoom toolbar display."""
		toolbar = getattr(self, 'toolbar', None)
		if toolbar is not None:
			toolbar.set_zoom_percent(self.get_zoom_percent())

	# ========================================
	# Mouse Event Handlers
	# ========================================

	def wheelEvent(self, event):
		"""Handle mouse wheel for zoom at cursor."""
		delta = event.angleDelta().y()
		if delta == 0:
			return
		pos = event.pos()
		self.controller.wheel(pos.x(), pos.y(), delta)
		self._update_zoom_toolbar()
		event.accept()

	def _handle_pan_mouse_press(self, event):
		"""Handle mouse press for panning/toggling. Returns True if event was handled."""
		if self.controller.mode is InteractionMode.DRAW:
			return False
		button = pointer_button(event.button())
		if button is None:
			return False
		pos = event.pos()
		handled = self.controller.pointer_down(pos.x(), pos.y(), button)
		if self.controller.is_panning:
			self.setCursor(Qt.ClosedHandCursor)
		return handled

	def _handle_pan_mouse_move(self, event):
		"""Handle mouse move for panning. Returns True if event was handled."""
		if not self.controller.is_panning:
			return False
		pos = event.pos()
		return self.controller.pointer_move(pos.x(), pos.y())

	def _handle_pan_mouse_release(self, event):
		"""Handle mouse release for panning. Returns True if event was handled."""
		button = pointer_button(event.button())
		if button is not None and self.controller.pointer_up(button):
			self._update_cursor()
			return True
		return False

	def _update_cursor(self):
		if self.controller.mode is InteractionMode.DRAW:
			self.setCursor(Qt.CrossCursor)
		elif self.controller.is_panning:
			self.setCursor(Qt.ClosedHandCursor)
		else:
			self.setCursor(Qt.OpenHandCursor)
