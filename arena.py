# arena.py
"""
The rectangular, walled arena particles move in.

An Arena is built once at startup from the configured width and height and
shared read-only by every call into the motion resolver.
"""
import logging
import math
from typing import NamedTuple

from geometry import Point, Segment
from utils import ConfigurationError

# --- Data Contracts ---
#
# class Arena:
#   - Arena.from_size(width: float, height: float) -> Arena
#     - Inputs: positive, finite arena dimensions.
#     - Outputs: an Arena whose walls are derived from the dimensions.
#     - Invariants: walls never change after construction. Raises
#       ConfigurationError for a zero-sized or non-finite arena.


class Walls(NamedTuple):
    left: Segment
    right: Segment
    top: Segment
    bottom: Segment

    @classmethod
    def from_size(cls, width: float, height: float) -> "Walls":
        return cls(
            left=Segment(Point(0.0, 0.0), Point(0.0, height)),
            right=Segment(Point(width, 0.0), Point(width, height)),
            top=Segment(Point(0.0, 0.0), Point(width, 0.0)),
            bottom=Segment(Point(0.0, height), Point(width, height)),
        )


class Arena(NamedTuple):
    width: float
    height: float
    walls: Walls

    @classmethod
    def from_size(cls, width: float, height: float) -> "Arena":
        """
        Validates the dimensions and builds the arena with its wall set.

        Args:
            width (float): Extent of the arena along x.
            height (float): Extent of the arena along y.
        """
        width, height = float(width), float(height)
        for name, value in (("width", width), ("height", height)):
            if not math.isfinite(value) or value <= 0.0:
                msg = f"Configuration error: arena {name} must be a positive number, got {value}."
                logging.critical(msg)
                raise ConfigurationError(msg)

        logging.debug(f"Arena walls built for a {width}x{height} arena.")
        return cls(width, height, Walls.from_size(width, height))

    def contains(self, point: Point) -> bool:
        """True if the point lies in the closed arena rectangle."""
        return 0.0 <= point[0] <= self.width and 0.0 <= point[1] <= self.height
