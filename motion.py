# motion.py
"""
Per-tick motion and wall reflection.

`advance` moves one particle by one tick. When the straight-line path leaves
the arena it is clipped at the first wall struck, the direction is mirrored
off that wall and the leftover travel is resolved recursively from the
contact point, so several bounces can happen within a single tick.

`advance_all_numba` applies the same algorithm to the whole particle
population in place. It is the hot path used by the particle store; the
arithmetic mirrors `advance` step for step so both produce the same result.
"""
import math
from typing import NamedTuple, Tuple

import numpy as np
from numba import jit

from arena import Arena
from geometry import Point, Segment, distance

# --- Data Contracts ---
#
# advance(position: Point, velocity: Velocity, arena: Arena) -> Tuple[Point, Velocity]:
#   - Inputs:
#     - position: current particle position.
#     - velocity: direction in radians and distance travelled per tick.
#     - arena: the immutable arena and its walls.
#   - Outputs: the position one tick later and the velocity to use next
#     tick. The returned direction is the post-bounce direction; the
#     returned distance is always the input distance.
#   - Invariants: a position inside the closed arena stays inside it.
#
# advance_all_numba(positions, directions, speeds, width, height) -> None:
#   - Inputs: positions (N, 2) float64, directions (N,) float64,
#     speeds (N,) float64, arena width and height.
#   - Side Effects: overwrites positions and directions in place.

# Distances are compared at this precision when choosing the nearest wall,
# so near-equal hits resolve to the x-wall.
DISTANCE_KEY_SCALE = 10_000.0


class Velocity(NamedTuple):
    direction: float  # radians
    distance: float


def _clamp(value: float, upper: float) -> float:
    return min(max(value, 0.0), upper)


def advance(position: Point, velocity: Velocity, arena: Arena) -> Tuple[Point, Velocity]:
    """
    Advances a single particle by one tick, bouncing off the arena walls.

    Args:
        position (Point): The particle's current position.
        velocity (Velocity): The particle's direction and per-tick distance.
        arena (Arena): The arena whose walls the particle reflects off.

    Returns:
        Tuple[Point, Velocity]: The new position and velocity.
    """
    position = Point(*position)
    candidate = Point(
        position.x + velocity.distance * math.cos(velocity.direction),
        position.y + velocity.distance * math.sin(velocity.direction),
    )

    walls = arena.walls
    x_contact = None
    y_contact = None
    if candidate.x < 0.0:
        x_contact = walls.left
    elif candidate.x >= arena.width:
        x_contact = walls.right
    if candidate.y < 0.0:
        y_contact = walls.top
    elif candidate.y >= arena.height:
        y_contact = walls.bottom

    traveled = Segment(position, candidate)
    hits = []
    for wall, is_x_wall in ((x_contact, True), (y_contact, False)):
        if wall is None:
            continue
        contact = traveled.intersect(wall)
        if contact is not None:
            hits.append((contact, is_x_wall))

    if not hits:
        # A corner graze can round both contacts off their walls; the particle
        # stays on the wall it crossed and bounces from there next tick.
        return Point(_clamp(candidate.x, arena.width), _clamp(candidate.y, arena.height)), velocity

    # min() keeps the first of equal keys, so the x-wall wins ties.
    contact, is_x_wall = min(
        hits, key=lambda hit: int(distance(position, hit[0]) * DISTANCE_KEY_SCALE)
    )
    # Snap onto the struck wall so the next leg starts inside the arena.
    if is_x_wall:
        contact = Point(x_contact.start.x, _clamp(contact.y, arena.height))
    else:
        contact = Point(_clamp(contact.x, arena.width), y_contact.start.y)
    remaining = velocity.distance - distance(position, contact)
    multiplier = 1.0 if is_x_wall else 2.0

    new_position, bounced = advance(
        contact,
        Velocity(direction=multiplier * math.pi - velocity.direction, distance=remaining),
        arena,
    )
    return new_position, Velocity(direction=bounced.direction, distance=velocity.distance)


@jit(nopython=True)
def _intersect_numba(x1, y1, x2, y2, x3, y3, x4, y4):
    """Scalar form of geometry.intersect: returns (found, x, y)."""
    denominator = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if denominator == 0.0:
        return False, 0.0, 0.0

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denominator
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denominator

    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return True, x1 + t * (x2 - x1), y1 + t * (y2 - y1)
    return False, 0.0, 0.0


@jit(nopython=True)
def _advance_numba(x, y, direction, dist, width, height):
    """
    Numba-jitted single-particle resolver.

    Unrolls the recursion of `advance` into a loop: each iteration either
    finishes unobstructed or moves the particle to the first wall struck and
    carries the remaining distance into the next iteration.
    """
    while True:
        cx = x + dist * math.cos(direction)
        cy = y + dist * math.sin(direction)

        # Contact walls are vertical at x=wx and horizontal at y=wy.
        has_x = False
        wx = 0.0
        if cx < 0.0:
            has_x = True
            wx = 0.0
        elif cx >= width:
            has_x = True
            wx = width
        has_y = False
        wy = 0.0
        if cy < 0.0:
            has_y = True
            wy = 0.0
        elif cy >= height:
            has_y = True
            wy = height

        hit_x = False
        px_x = 0.0
        py_x = 0.0
        if has_x:
            hit_x, px_x, py_x = _intersect_numba(x, y, cx, cy, wx, 0.0, wx, height)
        hit_y = False
        px_y = 0.0
        py_y = 0.0
        if has_y:
            hit_y, px_y, py_y = _intersect_numba(x, y, cx, cy, 0.0, wy, width, wy)

        if not hit_x and not hit_y:
            return min(max(cx, 0.0), width), min(max(cy, 0.0), height), direction

        use_x = hit_x
        if hit_x and hit_y:
            key_x = int(math.hypot(px_x - x, py_x - y) * DISTANCE_KEY_SCALE)
            key_y = int(math.hypot(px_y - x, py_y - y) * DISTANCE_KEY_SCALE)
            use_x = key_x <= key_y

        # Contacts are snapped onto the struck wall, as in `advance`.
        if use_x:
            px = wx
            py = min(max(py_x, 0.0), height)
            direction = math.pi - direction
        else:
            px = min(max(px_y, 0.0), width)
            py = wy
            direction = 2.0 * math.pi - direction
        dist = dist - math.hypot(px - x, py - y)
        x, y = px, py


@jit(nopython=True)
def advance_all_numba(positions, directions, speeds, width, height):
    """
    Numba-jitted batch resolver. Updates positions and directions in place,
    in particle index order.
    """
    for i in range(positions.shape[0]):
        x, y, direction = _advance_numba(
            positions[i, 0], positions[i, 1], directions[i], speeds[i], width, height
        )
        positions[i, 0] = x
        positions[i, 1] = y
        directions[i] = direction


def advance_all(positions: np.ndarray, directions: np.ndarray, speeds: np.ndarray, arena: Arena) -> None:
    """Pure-Python batch form of `advance_all_numba`, built on `advance`."""
    for i in range(positions.shape[0]):
        new_position, new_velocity = advance(
            Point(positions[i, 0], positions[i, 1]),
            Velocity(direction=directions[i], distance=speeds[i]),
            arena,
        )
        positions[i] = new_position
        directions[i] = new_velocity.direction
