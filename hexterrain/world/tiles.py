from __future__ import annotations

from enum import IntEnum
from typing import Tuple

import numpy as np

from hexterrain.world.buffers import MeshBuffers
from hexterrain.world.hex_layout import HexLayout

TILE_STRIDE = 7  # center + 6 corners


class Direction(IntEnum):
    """Neighbour directions, north = +z (corner 0).

    Ordered so that direction ``d`` shares this tile's edge between corners
    ``d + 1`` and ``d + 2`` (mod 6), and ``d + 3`` is the opposite direction.
    """

    EAST = 0
    SOUTH_EAST = 1
    SOUTH_WEST = 2
    WEST = 3
    NORTH_WEST = 4
    NORTH_EAST = 5

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 3) % 6)


# Each tile stitches these; the other three come from its neighbours.
FORWARD_DIRECTIONS = (Direction.EAST, Direction.NORTH_EAST, Direction.NORTH_WEST)

# (dx, dz) per direction, first for even rows then odd rows.
_NEIGHBOR_OFFSETS = {
    Direction.EAST: ((1, 0), (1, 0)),
    Direction.SOUTH_EAST: ((0, -1), (1, -1)),
    Direction.SOUTH_WEST: ((-1, -1), (0, -1)),
    Direction.WEST: ((-1, 0), (-1, 0)),
    Direction.NORTH_WEST: ((-1, 1), (0, 1)),
    Direction.NORTH_EAST: ((0, 1), (1, 1)),
}


def tile_base(x: int, z: int, chunk_size: int) -> int:
    """Arena offset of tile (x, z)'s center vertex."""
    return x * TILE_STRIDE + z * chunk_size * TILE_STRIDE


def corner_index(base: int, i: int) -> int:
    return base + 1 + i


def edge_corners(direction: Direction) -> Tuple[int, int]:
    """Corners of the edge facing ``direction``, in hexagon order."""
    d = int(direction)
    return (d + 1) % 6, (d + 2) % 6


def neighbor_offset(parity: int, direction: Direction) -> Tuple[int, int, Tuple[int, int], Tuple[int, int]]:
    """Return (dx, dz, own edge corners, neighbour edge corners).

    The neighbour's pair is its edge facing back, so own[0] coincides with
    theirs[1] and own[1] with theirs[0].
    """
    direction = Direction(direction)
    dx, dz = _NEIGHBOR_OFFSETS[direction][parity & 1]
    return dx, dz, edge_corners(direction), edge_corners(direction.opposite)


def build_tile_cap(position: np.ndarray, layout: HexLayout, buffers: MeshBuffers) -> int:
    """Append a flat hexagon (center + 6 corners) and its upward fan.

    Returns the arena offset of the center vertex.
    """
    base = buffers.add_vertex(position)
    for i in range(6):
        buffers.add_vertex(layout.corner(position, i))
    for i in range(6):
        buffers.add_triangle(base, corner_index(base, i), corner_index(base, (i + 1) % 6))
    return base


def add_quad(buffers: MeshBuffers, v1: int, v2: int, v3: int, v4: int, *, skip_flat: bool = False) -> bool:
    """Bridge edge (v1, v2) to edge (v3, v4); v4 sits above/below v1.

    With ``skip_flat`` a quad whose sides are at the same height is dropped
    since it has no area. Returns whether the quad was emitted.
    """
    if skip_flat and buffers.height(v1) == buffers.height(v3):
        return False
    buffers.add_triangle(v1, v3, v2)
    buffers.add_triangle(v1, v4, v3)
    return True


def stitch_neighbors(x: int, z: int, chunk_size: int, buffers: MeshBuffers, *, skip_flat: bool = False) -> int:
    """Emit skirts from tile (x, z) to its forward neighbours in the same chunk.

    All tile caps of the chunk must already be in ``buffers``. Returns the
    number of quads emitted.
    """
    base = tile_base(x, z, chunk_size)
    quads = 0
    for direction in FORWARD_DIRECTIONS:
        dx, dz, own, theirs = neighbor_offset(z % 2, direction)
        nx, nz = x + dx, z + dz
        if not (0 <= nx < chunk_size and 0 <= nz < chunk_size):
            continue
        n_base = tile_base(nx, nz, chunk_size)
        if add_quad(
            buffers,
            corner_index(base, own[0]),
            corner_index(base, own[1]),
            corner_index(n_base, theirs[0]),
            corner_index(n_base, theirs[1]),
            skip_flat=skip_flat,
        ):
            quads += 1
    return quads
