"""
Circuit Canvas - Canvas Widget

Pannable/zoomable circuit drawing surface. Qt events are translated into
InteractionController calls; repaints go through a coalescing scheduler
so a burst of mouse moves produces a single update().
"""

import logging

from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QSize, pyqtSignal

from components.interaction_controller import InteractionController, InteractionMode
from components.canvas_widgets.canvas_zoom_pan_mixin import CanvasZoomPanMixin
from components.canvas_widgets.canvas_tools_mixin import CanvasToolsMixin
from components.canvas_widgets.canvas_rendering_mixin import CanvasRenderingMixin
from services.circuit_renderer import CircuitRenderer
from services.redraw_scheduler import QtTimerScheduler
from constants import DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT

logger = logging.getLogger(__name__)


class CircuitCanvas(CanvasRenderingMixin, CanvasToolsMixin, CanvasZoomPanMixin, QWidget):
	"""Interactive circuit canvas widget"""

	# Signals
	pointToggled = pyqtSignal(str)  # control point id
	wireAdded = pyqtSignal(str)  # wire id
	modeChanged = pyqtSignal(str)  # 'pan' or 'draw'
	zoomChanged = pyqtSignal(int)  # zoom percent

	def __init__(self, session, parent=None, scheduler=None):
		super().__init__(parent)
		self.setMouseTracking(True)
		self.setFocusPolicy(Qt.StrongFocus)
		self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

		self.scheduler = scheduler if scheduler is not None else QtTimerScheduler()
		self.scheduler.redraw = self.update
		self.controller = InteractionController(
			session, self.scheduler,
			width=max(self.width(), 1), height=max(self.height(), 1),
		)
		self.controller.add_listener(self._on_controller_event)
		self.renderer = CircuitRenderer()

		self.toolbar = None  # Set by main window
		self._update_cursor()

	@property
	def session(self):
		return self.controller.session

	def set_session(self, session):
		"""Replace the circuit (e.g. after loading a definition file)"""
		self.controller = InteractionController(
			session, self.scheduler,
			width=self.controller.transform.width, height=self.controller.transform.height,
		)
		self.controller.add_listener(self._on_controller_event)
		# New controllers start in pan mode
		if self.toolbar is not None:
			self.toolbar.set_draw_mode(False, emit_signal=False)
		self.modeChanged.emit(self.controller.mode.value)
		self._update_cursor()
		self._update_zoom_toolbar()
		self.scheduler.request()

	def sizeHint(self):
		return QSize(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT)

	def resizeEvent(self, event):
		"""Keep the viewport half-extent in sync with the widget size"""
		super().resizeEvent(event)
		self.controller.resize(self.width(), self.height())

	def _on_controller_event(self, event, payload):
		if event == 'toggle':
			self.pointToggled.emit(payload)
		elif event == 'wire':
			self.wireAdded.emit(payload.id)
		elif event == 'mode':
			self.modeChanged.emit(payload.value)
		elif event == 'zoom':
			self.zoomChanged.emit(self.get_zoom_percent())

	# ========================================
	# Qt event routing
	# ========================================

	def mousePressEvent(self, event):
		"""Tool mode takes priority, then pan/toggle"""
		self.setFocus()
		if self._on_tool_mouse_press(event) or self._handle_pan_mouse_press(event):
			event.accept()
		else:
			super().mousePressEvent(event)

	def mouseMoveEvent(self, event):
		if self._handle_pan_mouse_move(event) or self._on_tool_mouse_move(event):
			event.accept()
		else:
			super().mouseMoveEvent(event)

	def mouseReleaseEvent(self, event):
		if self._handle_pan_mouse_release(event):
			event.accept()
		else:
			super().mouseReleaseEvent(event)

	def leaveEvent(self, event):
		"""Leaving the canvas ends any pan"""
		self.controller.pointer_leave()
		self._update_cursor()
		super().leaveEvent(event)

	def keyPressEvent(self, event):
		if self._on_tool_key_press(event):
			event.accept()
		else:
			super().keyPressEvent(event)

	def is_draw_mode(self):
		return self.controller.mode is InteractionMode.DRAW
