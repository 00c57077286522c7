# geometry.py
"""
2D geometry primitives used by the motion resolver.

Points are plain (x, y) float pairs and segments are ordered pairs of
points. The only non-trivial operation is segment-segment intersection,
which the resolver uses to find where a particle's path crosses a wall.
"""
import math
from typing import NamedTuple, Optional

# --- Data Contracts ---
#
# intersect(a: Segment, b: Segment) -> Optional[Point]:
#   - Inputs: two finite segments.
#   - Outputs: the intersection point computed from a's parametrization,
#     or None when the segments are parallel (determinant exactly zero)
#     or when either parameter t, u lies outside [0, 1].
#   - Invariants: endpoint contact counts as an intersection.


class Point(NamedTuple):
    x: float
    y: float


class Segment(NamedTuple):
    start: Point
    end: Point

    def intersect(self, other: "Segment") -> Optional[Point]:
        return intersect(self, other)


def intersect(a: Segment, b: Segment) -> Optional[Point]:
    """
    Computes the intersection of two finite segments.

    Args:
        a (Segment): The segment whose parametrization yields the result.
        b (Segment): The other segment.

    Returns:
        Optional[Point]: The intersection point, or None if there is none.
    """
    (x1, y1), (x2, y2) = a
    (x3, y3), (x4, y4) = b

    denominator = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if denominator == 0.0:
        # Parallel, identical or degenerate
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denominator
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denominator

    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return Point(x1 + t * (x2 - x1), y1 + t * (y2 - y1))
    return None


def distance(p: Point, q: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(q[0] - p[0], q[1] - p[1])
