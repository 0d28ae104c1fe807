"""Point dependency graph and OR-propagation.

PointGraph owns the control/controlled points and the wires whose state
follows them. All validation happens when the graph is built or extended,
so toggle() never discovers a broken reference.
"""
import logging
from typing import Dict, Iterable, List

from models.points import ControlPoint, ControlledPoint, Point, PointKind, match_point
from models.wire import Wire
from constants import POINT_TERMINAL

logger = logging.getLogger(__name__)


class CircuitConfigurationError(ValueError):
    """Circuit definition references something that does not exist."""


class PointGraph:
    """Control/controlled points plus the wires they drive.

    Invariants after every public call:
    - ids are unique
    - every driven_by id names an existing ControlPoint
    - every ControlledPoint.state == OR of its drivers' states
    - every wire sourced on a ControlPoint has wire.state == control.state
    """

    def __init__(self, points: Iterable[Point] = (), wires: Iterable[Wire] = ()):
        self._points: Dict[str, Point] = {}
        self._wires: List[Wire] = []

        for point in points:
            if point.id in self._points:
                raise CircuitConfigurationError(f"Duplicate point id '{point.id}'")
            self._points[point.id] = point

        for point in self.controlled():
            self._validate_drivers(point.id, point.driven_by)

        for wire in wires:
            self.add_wire(wire)

        self.propagate_all()

    # ========================================
    # Lookups
    # ========================================

    @property
    def points(self) -> List[Point]:
        return list(self._points.values())

    @property
    def wires(self) -> List[Wire]:
        return list(self._wires)

    def get(self, point_id) -> Point:
        return self._points.get(point_id)

    def __contains__(self, point_id):
        return point_id in self._points

    def controls(self) -> List[ControlPoint]:
        return [p for p in self._points.values() if p.kind is PointKind.CONTROL]

    def controlled(self) -> List[ControlledPoint]:
        return [p for p in self._points.values() if p.kind is PointKind.CONTROLLED]

    def dependents_of(self, control_id) -> List[ControlledPoint]:
        return [p for p in self.controlled() if control_id in p.driven_by]

    def wires_from(self, point_id) -> List[Wire]:
        return [w for w in self._wires
                if w.source_point_id == point_id and w.source_terminal == POINT_TERMINAL]

    def edges(self):
        """(control_id, controlled_id) pairs in point order, drivers sorted."""
        return [(driver, point.id)
                for point in self.controlled()
                for driver in sorted(point.driven_by)]

    # ========================================
    # Validation
    # ========================================

    def _validate_drivers(self, point_id, driver_ids):
        for driver_id in driver_ids:
            driver = self._points.get(driver_id)
            if driver is None:
                raise CircuitConfigurationError(
                    f"Point '{point_id}' is driven by unknown control point '{driver_id}'")
            if driver.kind is not PointKind.CONTROL:
                raise CircuitConfigurationError(
                    f"Point '{point_id}' is driven by '{driver_id}', which is not a control point")

    def _require_control(self, control_id) -> ControlPoint:
        point = self._points.get(control_id)
        if point is None:
            raise CircuitConfigurationError(f"Unknown control point '{control_id}'")
        return match_point(
            point,
            on_control=lambda p: p,
            on_controlled=lambda p: self._reject_controlled(p),
        )

    @staticmethod
    def _reject_controlled(point):
        raise CircuitConfigurationError(
            f"Point '{point.id}' is a controlled point and cannot be toggled")

    # ========================================
    # Propagation
    # ========================================

    def _driven_state(self, point: ControlledPoint) -> bool:
        return any(self._points[driver_id].state for driver_id in point.driven_by)

    def _sync_wire(self, wire: Wire):
        if wire.source_terminal != POINT_TERMINAL:
            return
        source = self._points[wire.source_point_id]
        wire.state = match_point(
            source,
            on_control=lambda p: p.state,
            on_controlled=lambda p: p.state,
        )

    def propagate_all(self):
        """Recompute every controlled point and every point-sourced wire."""
        for point in self.controlled():
            point.state = self._driven_state(point)
        for wire in self._wires:
            self._sync_wire(wire)

    def _propagate_from(self, control_id):
        for point in self.dependents_of(control_id):
            point.state = self._driven_state(point)
        for wire in self.wires_from(control_id):
            self._sync_wire(wire)

    def toggle(self, control_id) -> bool:
        """Flip a control point and propagate.

        Args:
            control_id: id of an existing ControlPoint

        Returns:
            bool: the control point's new state

        Raises:
            CircuitConfigurationError: unknown id or not a control point
        """
        control = self._require_control(control_id)
        control.state = not control.state
        self._propagate_from(control_id)
        logger.info("Toggled %s -> %s", control_id, control.state)
        return control.state

    def set_state(self, control_id, value) -> bool:
        """Set a control point to value (no-op if already there)."""
        control = self._require_control(control_id)
        if control.state != bool(value):
            return self.toggle(control_id)
        return control.state

    # ========================================
    # Mutation
    # ========================================

    def connect(self, control_id, controlled_id):
        """Add control_id to controlled_id's drivers and re-propagate."""
        self._require_control(control_id)
        target = self._points.get(controlled_id)
        if target is None or target.kind is not PointKind.CONTROLLED:
            raise CircuitConfigurationError(f"'{controlled_id}' is not a controlled point")
        target.driven_by = target.driven_by | {control_id}
        target.state = self._driven_state(target)
        logger.debug("Connected %s -> %s", control_id, controlled_id)

    def add_wire(self, wire: Wire) -> Wire:
        """Validate a wire's point endpoints, sync its state and store it.

        Endpoints on transistor terminals are not validated here; the
        session checks those against its transistor list.
        """
        if any(w.id == wire.id for w in self._wires):
            raise CircuitConfigurationError(f"Duplicate wire id '{wire.id}'")
        for point_id, terminal in ((wire.source_point_id, wire.source_terminal),
                                   (wire.target_point_id, wire.target_terminal)):
            if terminal == POINT_TERMINAL and point_id not in self._points:
                raise CircuitConfigurationError(
                    f"Wire '{wire.id}' references unknown point '{point_id}'")
        self._sync_wire(wire)
        self._wires.append(wire)
        return wire
