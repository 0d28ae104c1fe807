"""Pointer hit testing against points and terminals.

All comparisons happen in screen pixels. Candidates keep their world
positions; the viewport transform projects them before measuring.

The boundary is inclusive (distance <= radius) and the FIRST candidate
in iteration order within the radius wins, even if a later one is
closer. Callers control priority by ordering the candidates.
"""
import numpy as np

from constants import POINT_HIT_RADIUS, TERMINAL_HIT_RADIUS


def _default_position(candidate):
    return candidate.position


def find_nearest(screen_x, screen_y, candidates, radius, transform=None, position_of=_default_position):
    """Find the first candidate within radius of a screen position.

    Args:
        screen_x, screen_y: Pointer position in screen pixels
        candidates: Iterable of objects with a position
        radius: Tolerance in screen pixels (inclusive)
        transform: ViewportTransform used to project world positions;
            None means positions are already in screen pixels
        position_of: Callable returning a candidate's Vec2 position

    Returns:
        The first matching candidate, or None
    """
    candidates = list(candidates)
    if not candidates:
        return None

    positions = []
    for candidate in candidates:
        pos = position_of(candidate)
        if transform is not None:
            pos = transform.world_to_screen(pos.x, pos.y)
        positions.append((pos.x, pos.y))

    deltas = np.asarray(positions, dtype=float) - np.array([screen_x, screen_y], dtype=float)
    distances = np.hypot(deltas[:, 0], deltas[:, 1])
    hits = np.flatnonzero(distances <= radius)
    if hits.size == 0:
        return None
    return candidates[int(hits[0])]


def find_point(screen_x, screen_y, points, transform, radius=POINT_HIT_RADIUS):
    """Hit test control/controlled points.

    radius is in world units and grows with zoom.
    """
    return find_nearest(screen_x, screen_y, points,
                        transform.world_length_to_screen(radius), transform)


def find_terminal(screen_x, screen_y, terminals, transform, radius=TERMINAL_HIT_RADIUS, point_radius=POINT_HIT_RADIUS):
    """Hit test wire terminals.

    Transistor leads use the fixed screen radius; point terminals use the
    zoom-scaled point radius, so anything clickable as a point can also be
    wired from or to.
    """
    terminals = list(terminals)
    point_terminals = [t for t in terminals if not t.on_transistor]
    transistor_terminals = [t for t in terminals if t.on_transistor]

    hit = find_point(screen_x, screen_y, point_terminals, transform, point_radius)
    if hit is not None:
        return hit
    return find_nearest(screen_x, screen_y, transistor_terminals, radius, transform)
