"""
Tests for transistor geometry and the per-canvas circuit session.

Covers:
- Terminal offsets for every orientation
- Body size rotation
- Session terminal listing and roles
- Adding wires through the session
- Wire terminal roles and endpoint geometry
"""
import pytest

from models.point_graph import CircuitConfigurationError
from models.terminal import TerminalRole
from models.transform import Vec2
from models.transistor import Transistor, TransistorPosition, terminal_offsets
from models.wire import Wire, WireSegment


class TestTransistorGeometry:

    @pytest.mark.parametrize("orientation, source, drain, gate", [
        ('down', (-60, 0), (60, 0), (0, 20)),
        ('up', (60, 0), (-60, 0), (0, -20)),
        ('left', (0, 60), (0, -60), (-20, 0)),
        ('right', (0, -60), (0, 60), (20, 0)),
    ])
    def test_terminal_offsets(self, orientation, source, drain, gate):
        offsets = terminal_offsets(orientation)
        assert offsets['source'] == Vec2(*source)
        assert offsets['drain'] == Vec2(*drain)
        assert offsets['gate'] == Vec2(*gate)

    def test_unknown_orientation(self):
        with pytest.raises(ValueError):
            terminal_offsets('diagonal')
        with pytest.raises(ValueError):
            TransistorPosition(0, 0, 'diagonal')

    def test_terminal_positions_are_absolute(self):
        transistor = Transistor('T', TransistorPosition(200, 200, 'up'))
        positions = transistor.terminal_positions()
        assert positions == {
            'source': Vec2(260, 200),
            'drain': Vec2(140, 200),
            'gate': Vec2(200, 180),
        }

    def test_body_size_rotates(self):
        assert Transistor('T', TransistorPosition(0, 0, 'down')).body_size() == (120, 40)
        assert Transistor('T', TransistorPosition(0, 0, 'left')).body_size() == (40, 120)

    def test_terminal_flags_are_independent(self):
        transistor = Transistor('T', TransistorPosition(0, 0), source=False, drain=True, gate=False)
        assert transistor.terminal_state('drain') is True
        assert transistor.terminal_state('gate') is False
        with pytest.raises(ValueError):
            transistor.terminal_state('collector')


class TestSession:

    def test_terminals_points_first(self, session):
        terminals = session.terminals()
        assert [t.key for t in terminals[:4]] == [
            ('C1', 'point'), ('C2', 'point'), ('P1', 'point'), ('P2', 'point')]
        assert len(terminals) == 4 + 3 * 2
        assert not any(t.on_transistor for t in terminals[:4])
        assert all(t.on_transistor for t in terminals[4:])

    def test_terminal_roles(self, session):
        roles = {t.key: t.role for t in session.terminals()}
        assert roles[('C1', 'point')] is TerminalRole.SOURCE
        assert roles[('P1', 'point')] is TerminalRole.TARGET
        assert roles[('1', 'drain')] is TerminalRole.SOURCE
        assert roles[('1', 'source')] is TerminalRole.TARGET
        assert roles[('1', 'gate')] is TerminalRole.TARGET

    def test_get_transistor(self, session):
        assert session.get_transistor('2').position.x_center == 400
        assert session.get_transistor('nope') is None

    def test_next_wire_id(self, session):
        assert session.next_wire_id() == 'drawn-1'
        session.add_wire(Wire('drawn-1', [WireSegment(Vec2(0, 0), Vec2(-200, -140))], 'C1', 'P2'))
        assert session.next_wire_id() == 'drawn-2'

    def test_add_wire_duplicate_id(self, session):
        with pytest.raises(CircuitConfigurationError):
            session.add_wire(Wire('wire-C1-to-P1', [], 'C1', 'P1'))

    def test_add_wire_connects_control_to_controlled(self, session):
        session.add_wire(Wire('drawn-1', [WireSegment(Vec2(0, 160), Vec2(-200, -140))], 'C2', 'P2'))
        session.graph.toggle('C2')
        assert session.graph.get('P2').state is True
        assert session.graph.wires[-1].state is True

    @pytest.mark.parametrize("source, source_terminal, target, target_terminal, start, end", [
        ('C1', 'point', 'C2', 'point', (0, 0), (0, 160)),           # control is not a target
        ('P1', 'point', 'P2', 'point', (-240, 80), (-200, -140)),  # controlled is not a source
        ('1', 'gate', 'P1', 'point', (200, 180), (-240, 80)),       # gate is not a source
        ('1', 'drain', '1', 'gate', (140, 200), (200, 180)),       # same element
        ('C1', 'point', 'Q9', 'point', (0, 0), (5, 5)),           # unknown point
    ])
    def test_add_wire_rejects_bad_terminals(self, session, source, source_terminal, target, target_terminal,
                                            start, end):
        wire = Wire('drawn-1', [WireSegment(Vec2(*start), Vec2(*end))],
                    source, target, source_terminal, target_terminal)
        with pytest.raises(CircuitConfigurationError):
            session.add_wire(wire)
        assert 'drawn-1' not in [w.id for w in session.graph.wires]

    def test_add_wire_rejects_disconnected_segments(self, session):
        wire = Wire('drawn-1', [WireSegment(Vec2(0, 0), Vec2(-100, 0)),
                                  WireSegment(Vec2(-120, 0), Vec2(-200, -140))], 'C1', 'P2')
        with pytest.raises(CircuitConfigurationError, match="not connected"):
            session.add_wire(wire)

    def test_add_wire_rejects_misplaced_ends(self, session):
        with pytest.raises(CircuitConfigurationError, match="starts at"):
            session.add_wire(Wire('drawn-1', [WireSegment(Vec2(1, 0), Vec2(-200, -140))], 'C1', 'P2'))
        with pytest.raises(CircuitConfigurationError, match="ends at"):
            session.add_wire(Wire('drawn-1', [WireSegment(Vec2(0, 0), Vec2(-200, -141))], 'C1', 'P2'))
