"""
Shared fixtures for Circuit Canvas tests.

Provides the demo circuit definition, sessions, a controller driven by a
manual redraw scheduler and a recording drawing surface.
"""
import sys
import os
import copy
import pytest

# Run Qt headless when no display is available
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


# ── Canvas geometry used by controller tests ────────────────────────────
# At scale 1 with offset (0, 0): screen = world + (400, 300)

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600


def screen_of(world_x, world_y):
    """Screen position of a world point on an untouched 800x600 canvas."""
    return world_x + CANVAS_WIDTH / 2, world_y + CANVAS_HEIGHT / 2


# ── Circuit definitions ─────────────────────────────────────────────────

@pytest.fixture
def demo_definition():
    """Deep copy of the built-in demo circuit definition."""
    from services.circuit_loader import DEFAULT_CIRCUIT
    return copy.deepcopy(DEFAULT_CIRCUIT)


@pytest.fixture
def small_definition():
    """Two controls driving one point, no transistors."""
    return {
        "points": [
            {"id": "A", "type": "control", "x": -100, "y": 0},
            {"id": "B", "type": "control", "x": 100, "y": 0},
            {"id": "Q", "type": "controlled", "x": 0, "y": 100, "driven_by": ["A", "B"]},
        ],
        "wires": "auto",
    }


# ── Sessions and controllers ────────────────────────────────────────────

@pytest.fixture
def session():
    """Fresh session for the demo circuit."""
    from services.circuit_loader import default_circuit
    return default_circuit()


@pytest.fixture
def scheduler():
    from services.redraw_scheduler import ManualScheduler
    return ManualScheduler()


@pytest.fixture
def controller(session, scheduler):
    """Controller over the demo circuit on an 800x600 canvas."""
    from components.interaction_controller import InteractionController
    return InteractionController(session, scheduler, width=CANVAS_WIDTH, height=CANVAS_HEIGHT)


@pytest.fixture
def recording_surface():
    from services.circuit_renderer import RecordingSurface
    return RecordingSurface()
