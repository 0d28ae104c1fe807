"""Canvas toolbar with mode toggle and zoom controls."""

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QToolButton, QLabel
from PyQt5.QtCore import pyqtSignal, Qt


class CanvasToolbar(QWidget):
    """Toolbar with draw-mode toggle, zoom in/out/reset and zoom display"""

    draw_mode_toggled = pyqtSignal(bool)  # True when draw mode is engaged
    zoom_in_requested = pyqtSignal()
    zoom_out_requested = pyqtSignal()
    zoom_reset_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)

        layout = QHBoxLayout()
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        # Mode toggle button (checked = draw wires)
        self.draw_btn = QToolButton()
        self.draw_btn.setText("Draw wire")
        self.draw_btn.setCheckable(True)
        self.draw_btn.setToolTip("Toggle wire drawing (D), Esc cancels")
        self.draw_btn.toggled.connect(self.draw_mode_toggled.emit)
        layout.addWidget(self.draw_btn)

        layout.addStretch(1)

        # Zoom out button
        self.zoom_out_btn = QToolButton()
        self.zoom_out_btn.setText("−")
        self.zoom_out_btn.setToolTip("Zoom Out")
        self.zoom_out_btn.clicked.connect(self.zoom_out_requested.emit)
        layout.addWidget(self.zoom_out_btn)

        # Zoom level display (shows actual zoom)
        self.zoom_display = QLabel("100%")
        self.zoom_display.setMinimumWidth(60)
        self.zoom_display.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.zoom_display)

        # Zoom in button
        self.zoom_in_btn = QToolButton()
        self.zoom_in_btn.setText("+")
        self.zoom_in_btn.setToolTip("Zoom In")
        self.zoom_in_btn.clicked.connect(self.zoom_in_requested.emit)
        layout.addWidget(self.zoom_in_btn)

        self.reset_btn = QToolButton()
        self.reset_btn.setText("1:1")
        self.reset_btn.setToolTip("Reset view (0)")
        self.reset_btn.clicked.connect(self.zoom_reset_requested.emit)
        layout.addWidget(self.reset_btn)

        self.setLayout(layout)

    def set_zoom_percent(self, percent):
        """Update the zoom display"""
        self.zoom_display.setText(f"{percent}%")

    def set_draw_mode(self, enabled, emit_signal=True):
        """Check/uncheck the draw button, optionally without re-emitting"""
        if not emit_signal:
            self.draw_btn.blockSignals(True)
        self.draw_btn.setChecked(enabled)
        if not emit_signal:
            self.draw_btn.blockSignals(False)
