from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from hexterrain.config import OUTER_RADIUS

SQRT3_2 = math.sqrt(3.0) / 2.0


@dataclass(frozen=True)
class HexLayout:
    """Pointy-top hexagons on an offset-row grid.

    Odd rows are pushed half a tile to +x. Corners are ordered top (+z),
    upper-right, lower-right, bottom, lower-left, upper-left; the stitching
    tables in :mod:`hexterrain.world.tiles` index into this order.
    """

    outer_radius: float = OUTER_RADIUS
    corners: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        r = float(self.outer_radius)
        i = self.inner_radius
        corners = np.array(
            [
                [0.0, 0.0, r],
                [i, 0.0, 0.5 * r],
                [i, 0.0, -0.5 * r],
                [0.0, 0.0, -r],
                [-i, 0.0, -0.5 * r],
                [-i, 0.0, 0.5 * r],
            ],
            dtype=np.float64,
        )
        corners.setflags(write=False)
        object.__setattr__(self, "corners", corners)

    @property
    def inner_radius(self) -> float:
        return float(self.outer_radius) * SQRT3_2

    def to_world(self, x: float, y: float, z: float) -> np.ndarray:
        """Offset coordinate (x, height, z) -> world position.

        Height passes through unchanged. Works for negative rows too, which the
        seam pass uses for tiles just outside a chunk.
        """
        wx = (x + z * 0.5 - math.floor(z / 2.0)) * (self.inner_radius * 2.0)
        wz = z * self.outer_radius * 1.5
        return np.array([wx, y, wz], dtype=np.float64)

    def corner(self, position: np.ndarray, i: int) -> np.ndarray:
        return position + self.corners[i]
