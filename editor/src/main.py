import sys
import os
import logging
import argparse

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 imports
from PyQt5.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QApplication, QFileDialog, QMessageBox, QLabel
from PyQt5.QtGui import QKeySequence

# Component imports
from components.canvas_widget import CircuitCanvas
from components.gui_widgets.canvas_toolbar import CanvasToolbar
from components.interaction_controller import InteractionMode

# Model / service imports
from models.point_graph import CircuitConfigurationError
from services.circuit_loader import default_circuit, load_circuit_from_file

# Utility imports
from utils.logger import configure_logging, loggerRaise, set_main_window

logger = logging.getLogger(__name__)


class CircuitCanvasEditor(QMainWindow):
    def __init__(self, circuit_path=None):
        super().__init__()
        self.setWindowTitle("Circuit Canvas")
        self.resize(1280, 720)

        self.circuit_path = None
        session = default_circuit()

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.toolbar = CanvasToolbar()
        layout.addWidget(self.toolbar)

        self.canvas = CircuitCanvas(session)
        self.canvas.toolbar = self.toolbar
        layout.addWidget(self.canvas, stretch=1)
        self.setCentralWidget(central)

        # Toolbar -> canvas
        self.toolbar.draw_mode_toggled.connect(
            lambda checked: self.canvas.set_tool_mode(InteractionMode.DRAW if checked else InteractionMode.PAN))
        self.toolbar.zoom_in_requested.connect(self.canvas.zoom_in)
        self.toolbar.zoom_out_requested.connect(self.canvas.zoom_out)
        self.toolbar.zoom_reset_requested.connect(self.canvas.zoom_reset)

        # Canvas -> status bar
        self.status_label = QLabel()
        self.statusBar().addWidget(self.status_label)
        self.canvas.pointToggled.connect(self._on_point_toggled)
        self.canvas.wireAdded.connect(lambda wire_id: self.statusBar().showMessage(f"Added {wire_id}", 3000))
        self.canvas.modeChanged.connect(lambda _mode: self._update_status())
        self.canvas.zoomChanged.connect(lambda _percent: self._update_status())

        self._create_menus()

        # Initialize global logger with main window reference
        set_main_window(self)

        if circuit_path:
            self.load_circuit(circuit_path)
        self._update_status()

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("&File")
        open_action = file_menu.addAction("&Open Circuit...")
        open_action.setShortcut(QKeySequence.Open)
        open_action.triggered.connect(self._open_circuit_dialog)
        reload_action = file_menu.addAction("&Reload")
        reload_action.setShortcut(QKeySequence("Ctrl+R"))
        reload_action.triggered.connect(self.reload_circuit)
        file_menu.addSeparator()
        quit_action = file_menu.addAction("&Quit")
        quit_action.setShortcut(QKeySequence.Quit)
        quit_action.triggered.connect(self.close)

    def _open_circuit_dialog(self):
        filename, _ = QFileDialog.getOpenFileName(self, "Open Circuit", "", "Circuit JSON (*.json);;All Files (*)")
        if filename:
            self.load_circuit(filename)

    def load_circuit(self, filename):
        """Replace the canvas session with a circuit definition file.

        A broken definition is reported and the current circuit is kept.
        """
        try:
            session = load_circuit_from_file(filename)
        except CircuitConfigurationError as e:
            logger.error("Invalid circuit definition %s: %s", filename, e)
            QMessageBox.warning(self, "Invalid Circuit", f"{filename}\n\n{e}")
            return False
        except OSError as e:
            loggerRaise(e, f"Cannot read circuit file {filename}")

        self.circuit_path = filename
        self.canvas.set_session(session)
        self.setWindowTitle(f"Circuit Canvas - {os.path.basename(filename)}")
        self._update_status()
        return True

    def reload_circuit(self):
        """Reload the static definition (or the demo circuit), discarding live state"""
        if self.circuit_path:
            self.load_circuit(self.circuit_path)
        else:
            self.canvas.set_session(default_circuit())
            self._update_status()

    def _on_point_toggled(self, point_id):
        point = self.canvas.session.graph.get(point_id)
        self.statusBar().showMessage(f"{point_id} -> {'ON' if point.state else 'OFF'}", 3000)

    def _update_status(self):
        mode = "Draw" if self.canvas.is_draw_mode() else "Pan"
        self.status_label.setText(f"Mode: {mode}   Zoom: {self.canvas.get_zoom_percent()}%")
        self.toolbar.set_zoom_percent(self.canvas.get_zoom_percent())


def main():
    parser = argparse.ArgumentParser(description='Interactive circuit canvas.')
    parser.add_argument('--circuit', help='Circuit definition JSON file (default: built-in demo).')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging.')
    args = parser.parse_args()

    configure_logging(args.verbose)

    app = QApplication(sys.argv)
    window = CircuitCanvasEditor(args.circuit)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
