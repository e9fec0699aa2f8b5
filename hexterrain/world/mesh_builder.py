from __future__ import annotations

import math
from typing import Dict, Tuple

from hexterrain.config import MAX_INDEX
from hexterrain.world.buffers import ChunkBuildError, MeshBuffers
from hexterrain.world.chunk import ChunkMesh
from hexterrain.world.hex_layout import HexLayout
from hexterrain.world.tiles import (
    FORWARD_DIRECTIONS,
    TILE_STRIDE,
    add_quad,
    build_tile_cap,
    corner_index,
    neighbor_offset,
    stitch_neighbors,
    tile_base,
)


def max_chunk_vertices(chunk_size: int) -> int:
    """Upper bound on vertices in one chunk: caps plus seam corners.

    The seam pass reaches the column east of the chunk, the row north of it
    and, through the north-west neighbours of even rows, the column west of
    it. Each neighbour tile adds at most 3 new corners, so 6 * (2n + 2) is a
    loose bound.
    """
    n = int(chunk_size)
    return TILE_STRIDE * n * n + 6 * (2 * n + 2)


def max_chunk_size() -> int:
    """Largest chunk size whose vertices are all addressable by uint32 indices."""
    n = math.isqrt((MAX_INDEX + 1) // TILE_STRIDE)
    while max_chunk_vertices(n) > MAX_INDEX + 1:
        n -= 1
    return n


def build_chunk(
    cx: int,
    cz: int,
    chunk_size: int,
    height_field,
    *,
    layout: HexLayout | None = None,
    map_size: int = 1,
    seams: bool = True,
    skip_flat: bool = False,
) -> ChunkMesh:
    """Mesh one chunk of ``chunk_size`` x ``chunk_size`` hex tiles.

    Vertices are chunk-local; the returned mesh carries the world origin.
    Pass 1 writes every tile cap in row-major order so that
    ``tile_base(x, z)`` addresses them; pass 2 stitches neighbouring caps;
    pass 3 (``seams``) stitches to tiles of neighbouring chunks in the map.

    ``height_field`` is anything with ``sample(x, z) -> float`` taking global
    tile coordinates.
    """
    layout = layout or HexLayout()
    n = int(chunk_size)
    buffers = MeshBuffers()

    for z in range(n):
        for x in range(n):
            try:
                height = height_field.sample(x + cx * n, z + cz * n)
                pos = layout.to_world(x, height, z)
                base = build_tile_cap(pos, layout, buffers)
            except Exception as e:
                raise ChunkBuildError(f"chunk ({cx},{cz}) tile ({x},{z}): cap failed: {e}") from e
            if base != tile_base(x, z, n):
                raise ChunkBuildError(f"chunk ({cx},{cz}) tile ({x},{z}): cap at {base}, expected {tile_base(x, z, n)}")

    for z in range(n):
        for x in range(n):
            try:
                stitch_neighbors(x, z, n, buffers, skip_flat=skip_flat)
            except Exception as e:
                raise ChunkBuildError(f"chunk ({cx},{cz}) tile ({x},{z}): stitching failed: {e}") from e

    if seams:
        stitch_chunk_seams(cx, cz, n, map_size, height_field, layout, buffers, skip_flat=skip_flat)

    origin = layout.to_world(cx * n, 0.0, cz * n)
    return buffers.to_mesh(cx, cz, origin)


def stitch_chunk_seams(
    cx: int,
    cz: int,
    chunk_size: int,
    map_size: int,
    height_field,
    layout: HexLayout,
    buffers: MeshBuffers,
    *,
    skip_flat: bool = False,
) -> int:
    """Skirts from boundary tiles to tiles owned by neighbouring chunks.

    Uses the same forward directions as the in-chunk pass, so across the
    whole map every shared edge gets exactly one skirt. The neighbour's edge
    corners are recomputed in this chunk's frame (valid because chunk sizes
    are even whenever there is more than one chunk) and appended once per
    corner. Returns the number of quads emitted.
    """
    n = chunk_size
    span = map_size * n
    heights: Dict[Tuple[int, int], float] = {}
    seam_verts: Dict[Tuple[int, int, int], int] = {}
    quads = 0

    for z in range(n):
        for x in range(n):
            base = tile_base(x, z, n)
            for direction in FORWARD_DIRECTIONS:
                dx, dz, own, theirs = neighbor_offset(z % 2, direction)
                nx, nz = x + dx, z + dz
                if 0 <= nx < n and 0 <= nz < n:
                    continue
                gx, gz = cx * n + nx, cz * n + nz
                if not (0 <= gx < span and 0 <= gz < span):
                    continue
                try:
                    if (nx, nz) not in heights:
                        heights[(nx, nz)] = height_field.sample(gx, gz)
                    h = heights[(nx, nz)]
                    v1 = corner_index(base, own[0])
                    if skip_flat and buffers.height(v1) == h:
                        continue
                    n_pos = layout.to_world(nx, h, nz)
                    edge = []
                    for c in theirs:
                        key = (nx, nz, c)
                        if key not in seam_verts:
                            seam_verts[key] = buffers.add_vertex(layout.corner(n_pos, c))
                        edge.append(seam_verts[key])
                    add_quad(buffers, v1, corner_index(base, own[1]), edge[0], edge[1])
                    quads += 1
                except Exception as e:
                    raise ChunkBuildError(
                        f"chunk ({cx},{cz}) tile ({x},{z}): seam {direction.name} to ({gx},{gz}) failed: {e}"
                    ) from e
    return quads
