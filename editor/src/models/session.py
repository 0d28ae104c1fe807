"""Per-canvas circuit state.

A CircuitSession replaces module-level point/wire/transistor lists: the
interaction controller owns exactly one and passes it to every operation.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from models.point_graph import CircuitConfigurationError, PointGraph
from models.points import PointKind, match_point
from models.terminal import Terminal, TerminalRole
from models.transform import Viewport
from models.transistor import Transistor
from models.wire import Wire
from constants import POINT_TERMINAL, TRANSISTOR_TERMINALS

logger = logging.getLogger(__name__)


@dataclass
class CircuitSession:
    graph: PointGraph = field(default_factory=PointGraph)
    transistors: List[Transistor] = field(default_factory=list)
    viewport: Viewport = field(default_factory=Viewport)

    def __post_init__(self):
        seen = set()
        for transistor in self.transistors:
            if transistor.id in seen or transistor.id in self.graph:
                raise CircuitConfigurationError(f"Duplicate element id '{transistor.id}'")
            seen.add(transistor.id)
        for wire in self.graph.wires:
            self._validate_wire(wire)
            self._sync_transistor_wire(wire)
            self._link_points(wire)

    def get_transistor(self, transistor_id) -> Transistor:
        for transistor in self.transistors:
            if transistor.id == transistor_id:
                return transistor
        return None

    def terminals(self) -> List[Terminal]:
        """Every connection site, points first then transistor terminals.

        Control points and transistor drains start wires; controlled
        points, transistor sources and gates end them.
        """
        terminals = []
        for point in self.graph.points:
            role = match_point(
                point,
                on_control=lambda p: TerminalRole.SOURCE,
                on_controlled=lambda p: TerminalRole.TARGET,
            )
            terminals.append(Terminal(point.id, POINT_TERMINAL, point.position, role))
        for transistor in self.transistors:
            for name, position in transistor.terminal_positions().items():
                role = TerminalRole.SOURCE if name == 'drain' else TerminalRole.TARGET
                terminals.append(Terminal(transistor.id, name, position, role, on_transistor=True))
        return terminals

    def _validate_transistor_ends(self, wire: Wire):
        for owner_id, terminal in ((wire.source_point_id, wire.source_terminal),
                                   (wire.target_point_id, wire.target_terminal)):
            if terminal == POINT_TERMINAL:
                continue
            if terminal not in TRANSISTOR_TERMINALS:
                raise CircuitConfigurationError(
                    f"Wire '{wire.id}' uses unknown terminal '{terminal}'")
            if self.get_transistor(owner_id) is None:
                raise CircuitConfigurationError(
                    f"Wire '{wire.id}' references unknown transistor '{owner_id}'")

    def _terminal_for(self, wire: Wire, owner_id, name) -> Terminal:
        for terminal in self.terminals():
            if terminal.key == (owner_id, name):
                return terminal
        raise CircuitConfigurationError(
            f"Wire '{wire.id}' references unknown point '{owner_id}'")

    def _validate_wire(self, wire: Wire):
        """Wires run from a source-role terminal to a target-role terminal
        on another element, as one connected polyline ending exactly on both.
        """
        self._validate_transistor_ends(wire)
        source = self._terminal_for(wire, wire.source_point_id, wire.source_terminal)
        target = self._terminal_for(wire, wire.target_point_id, wire.target_terminal)

        if source.role is not TerminalRole.SOURCE:
            raise CircuitConfigurationError(
                f"Wire '{wire.id}' cannot start on {source.owner_id}.{source.name}")
        if target.role is not TerminalRole.TARGET or target.owner_id == source.owner_id:
            raise CircuitConfigurationError(
                f"Wire '{wire.id}' cannot end on {target.owner_id}.{target.name}")

        if not wire.segments:
            raise CircuitConfigurationError(f"Wire '{wire.id}' has no segments")
        if not wire.is_connected():
            raise CircuitConfigurationError(f"Wire '{wire.id}' segments are not connected")
        if wire.start != source.position:
            raise CircuitConfigurationError(
                f"Wire '{wire.id}' starts at {tuple(wire.start)}, not at "
                f"{source.owner_id}.{source.name} {tuple(source.position)}")
        if wire.end != target.position:
            raise CircuitConfigurationError(
                f"Wire '{wire.id}' ends at {tuple(wire.end)}, not at "
                f"{target.owner_id}.{target.name} {tuple(target.position)}")

    def _sync_transistor_wire(self, wire: Wire):
        if wire.source_terminal != POINT_TERMINAL:
            wire.state = self.get_transistor(wire.source_point_id).terminal_state(wire.source_terminal)

    def _link_points(self, wire: Wire):
        if wire.source_terminal == POINT_TERMINAL and wire.target_terminal == POINT_TERMINAL:
            source = self.graph.get(wire.source_point_id)
            target = self.graph.get(wire.target_point_id)
            if source.kind is PointKind.CONTROL and target.kind is PointKind.CONTROLLED:
                self.graph.connect(source.id, target.id)

    def add_wire(self, wire: Wire) -> Wire:
        """Validate and store a wire, linking control -> controlled points it joins.

        Raises:
            CircuitConfigurationError: bad endpoints, roles or geometry
        """
        if any(w.id == wire.id for w in self.graph.wires):
            raise CircuitConfigurationError(f"Duplicate wire id '{wire.id}'")
        self._validate_wire(wire)
        self.graph.add_wire(wire)
        self._sync_transistor_wire(wire)
        self._link_points(wire)
        logger.info("Added wire %s (%s.%s -> %s.%s)", wire.id,
                    wire.source_point_id, wire.source_terminal,
                    wire.target_point_id, wire.target_terminal)
        return wire

    def next_wire_id(self, prefix='drawn'):
        existing = {w.id for w in self.graph.wires}
        n = 1
        while f"{prefix}-{n}" in existing:
            n += 1
        return f"{prefix}-{n}"
