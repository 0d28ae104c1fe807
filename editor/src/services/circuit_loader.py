"""
Circuit Canvas - Circuit Loading Service

Builds a CircuitSession from a declarative circuit definition (a dict,
usually read from JSON). Definitions are only read, never written back.

Format:
    {
        "points": [{"id", "type": "control"|"controlled", "x", "y",
                    "state"?, "driven_by"?}],
        "transistors": [{"id", "x", "y", "orientation"?, "source"?,
                         "drain"?, "gate"?}],
        "wires": "auto" | [{"id", "source", "target", "source_terminal"?,
                            "target_terminal"?, "segments": [[x1, y1, x2, y2]]}]
    }
"""
import json
import logging

from models.point_graph import CircuitConfigurationError, PointGraph
from models.points import point_from_dict
from models.session import CircuitSession
from models.transform import Viewport
from models.transistor import Transistor
from models.wire import Wire, WireSegment
from services.wire_router import route_dependency_wires
from constants import MIN_SCALE, MAX_SCALE, POINT_TERMINAL

logger = logging.getLogger(__name__)


DEFAULT_CIRCUIT = {
    "points": [
        {"id": "C1", "type": "control", "x": 0, "y": 0},
        {"id": "C2", "type": "control", "x": 0, "y": 160},
        {"id": "P1", "type": "controlled", "x": -240, "y": 80, "driven_by": ["C1", "C2"]},
        {"id": "P2", "type": "controlled", "x": -200, "y": -140, "driven_by": ["C1"]},
    ],
    "transistors": [
        {"id": "1", "x": 200, "y": 200, "orientation": "up", "drain": True},
        {"id": "2", "x": 400, "y": 200, "orientation": "up", "drain": True},
    ],
    "wires": "auto",
}


def _wire_from_dict(data):
    segments = [WireSegment.from_list(coords) for coords in data.get('segments', [])]
    if not segments:
        raise CircuitConfigurationError(f"Wire '{data.get('id')}' has no segments")
    return Wire(
        id=str(data['id']),
        segments=segments,
        source_point_id=str(data['source']),
        target_point_id=str(data['target']),
        source_terminal=data.get('source_terminal', POINT_TERMINAL),
        target_terminal=data.get('target_terminal', POINT_TERMINAL),
    )


def circuit_from_dict(data, min_scale=MIN_SCALE, max_scale=MAX_SCALE):
    """Build and validate a session from a circuit definition.

    Args:
        data: Circuit definition dictionary (see module docstring)
        min_scale, max_scale: Optional zoom bounds for the viewport

    Returns:
        CircuitSession with propagated initial states

    Raises:
        CircuitConfigurationError: Missing fields, bad values, dangling references
            or wires that do not join a source terminal to a target terminal
    """
    if not isinstance(data, dict):
        raise CircuitConfigurationError("Circuit definition must be a JSON object")

    try:
        points = [point_from_dict(p) for p in data.get('points', [])]
        transistors = [Transistor.from_dict(t) for t in data.get('transistors', [])]
        graph = PointGraph(points)

        wires_value = data.get('wires', 'auto')
        if wires_value == 'auto':
            wires = route_dependency_wires(graph)
        elif isinstance(wires_value, list):
            wires = [_wire_from_dict(w) for w in wires_value]
        else:
            raise CircuitConfigurationError(f"'wires' must be \"auto\" or a list, got {wires_value!r}")

        session = CircuitSession(
            graph=graph,
            transistors=transistors,
            viewport=Viewport(min_scale=min_scale, max_scale=max_scale),
        )
        # Loaded wires follow the same rules and linking as drawn ones
        for wire in wires:
            session.add_wire(wire)
    except CircuitConfigurationError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise CircuitConfigurationError(f"Invalid circuit definition: {e!r}") from e

    logger.info("Loaded circuit: %d point(s), %d transistor(s), %d wire(s)",
                len(graph.points), len(transistors), len(graph.wires))
    return session


def load_circuit_from_file(filename, **kwargs):
    """Load a circuit definition JSON file into a session.

    Raises:
        OSError: File cannot be read
        CircuitConfigurationError: File is not a valid circuit definition
    """
    with open(filename, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CircuitConfigurationError(f"{filename} is not valid JSON: {e}") from e

    logger.info("Circuit definition read from %s", filename)
    return circuit_from_dict(data, **kwargs)


def default_circuit(**kwargs):
    """Session for the built-in demo circuit."""
    return circuit_from_dict(DEFAULT_CIRCUIT, **kwargs)
