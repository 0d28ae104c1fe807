"""Headless circuit runner - CLI entry point.

Loads a circuit definition (or the built-in demo), applies control point
toggles in order, prints the resulting point and wire states and can
render one frame to a PNG without showing a window.

Usage:
    python editor/src/headless.py [CIRCUIT] [--toggle ID ...] [--render OUT.png] [--size WxH]

Examples:
    python editor/src/headless.py
    python editor/src/headless.py examples/demo_circuit.json --toggle C1
    python editor/src/headless.py --toggle C1 --toggle C2 --render frame.png --size 800x600
"""

import sys
import os
import argparse
import logging

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from models.point_graph import CircuitConfigurationError
from services.circuit_loader import default_circuit, load_circuit_from_file
from utils.coordinate_transforms import ViewportTransform
from utils.logger import configure_logging
from constants import DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT

logger = logging.getLogger(__name__)


def _parse_size(text):
    """'WxH' -> (W, H) for argparse."""
    try:
        width, height = (int(part) for part in text.lower().split('x'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"size must look like 1280x720, got {text!r}")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {text!r}")
    return width, height


def format_states(session):
    """One line per point and wire, e.g. 'P1  controlled  ON'."""
    lines = []
    for point in session.graph.points:
        lines.append(f"{point.id:<12} {point.kind.value:<11} {'ON' if point.state else 'OFF'}")
    for transistor in session.transistors:
        flags = ' '.join(f"{name}={'ON' if transistor.terminal_state(name) else 'OFF'}"
                         for name in ('source', 'drain', 'gate'))
        lines.append(f"{transistor.id:<12} {'transistor':<11} {flags}")
    for wire in session.graph.wires:
        lines.append(f"{wire.id:<12} {'wire':<11} {'ON' if wire.state else 'OFF'}")
    return '\n'.join(lines)


def render_to_png(session, out_file, size):
    """Render one frame of the session to a PNG with an offscreen QPainter."""
    os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')
    from PyQt5.QtGui import QGuiApplication, QImage, QPainter
    from components.canvas_widgets.painter_surface import QPainterSurface
    from services.circuit_renderer import CircuitRenderer

    app = QGuiApplication.instance() or QGuiApplication(sys.argv[:1])  # noqa: F841

    width, height = size
    image = QImage(width, height, QImage.Format_ARGB32)
    painter = QPainter(image)
    try:
        transform = ViewportTransform(session.viewport, width, height)
        CircuitRenderer().render(QPainterSurface(painter), session, transform)
    finally:
        painter.end()

    if not image.save(out_file, 'PNG'):
        raise OSError(f"Could not write {out_file}")
    logger.info("Rendered %dx%d frame to %s", width, height, out_file)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Load a circuit, toggle control points and report (or render) the result.',
    )
    parser.add_argument(
        'circuit',
        nargs='?',
        help='Circuit definition JSON file (default: built-in demo).',
    )
    parser.add_argument(
        '-t', '--toggle',
        action='append',
        default=[],
        metavar='ID',
        help='Toggle a control point; may be repeated, applied in order.',
    )
    parser.add_argument(
        '-r', '--render',
        metavar='OUT.png',
        help='Render the final state to a PNG file.',
    )
    parser.add_argument(
        '-s', '--size',
        type=_parse_size,
        default=(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT),
        metavar='WxH',
        help='Render size in pixels (default: %dx%d).' % (DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT),
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        if args.circuit:
            session = load_circuit_from_file(os.path.abspath(args.circuit))
        else:
            session = default_circuit()
        for control_id in args.toggle:
            session.graph.toggle(control_id)
    except (CircuitConfigurationError, OSError) as e:
        logger.error("%s", e)
        print(f"Error: {e}")
        return 1

    print(format_states(session))

    if args.render:
        try:
            render_to_png(session, os.path.abspath(args.render), args.size)
        except OSError as e:
            print(f"Error: {e}")
            return 1
        print(f"\nRendered {args.size[0]}x{args.size[1]} frame to {args.render}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
