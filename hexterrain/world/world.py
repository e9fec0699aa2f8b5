from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from hexterrain.config import (
    CHUNK_SIZE,
    DEFAULT_SEAMS,
    DEFAULT_SEED,
    DEFAULT_SKIP_FLAT_QUADS,
    MAP_SIZE,
    NOISE_SCALE,
    OUTER_RADIUS,
)
from hexterrain.world.chunk import ChunkMesh
from hexterrain.world.hex_layout import HexLayout
from hexterrain.world.mesh_builder import build_chunk, max_chunk_size
from hexterrain.world.noise import HeightField


@dataclass(frozen=True)
class WorldParams:
    map_size: int = MAP_SIZE
    chunk_size: int = CHUNK_SIZE
    outer_radius: float = OUTER_RADIUS
    seams: bool = DEFAULT_SEAMS
    skip_flat_quads: bool = DEFAULT_SKIP_FLAT_QUADS
    noise_scale: float = NOISE_SCALE
    seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        if self.map_size < 1:
            raise ValueError(f"map_size must be >= 1, got {self.map_size}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.outer_radius <= 0:
            raise ValueError(f"outer_radius must be positive, got {self.outer_radius}")
        if not self.noise_scale > 0:
            raise ValueError(f"noise_scale must be positive, got {self.noise_scale}")
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise ValueError(f"seed must be an int, got {self.seed!r}")
        limit = max_chunk_size()
        if self.chunk_size > limit:
            raise ValueError(f"chunk_size {self.chunk_size} overflows uint32 indices (max {limit})")
        # Row parity has to agree between neighbouring chunks.
        if self.map_size > 1 and self.chunk_size % 2:
            raise ValueError(f"chunk_size must be even when map_size > 1, got {self.chunk_size}")

    @property
    def layout(self) -> HexLayout:
        return HexLayout(self.outer_radius)

    def height_field(self) -> HeightField:
        return HeightField(seed=self.seed, scale=self.noise_scale)

    @property
    def tiles_per_side(self) -> int:
        return self.map_size * self.chunk_size


def chunk_coords(map_size: int) -> List[Tuple[int, int]]:
    """All chunk coordinates, row-major over z then x."""
    return [(cx, cz) for cz in range(map_size) for cx in range(map_size)]


def chunk_origin(cx: int, cz: int, chunk_size: int, layout: HexLayout) -> np.ndarray:
    return layout.to_world(cx * chunk_size, 0.0, cz * chunk_size)


def build_one(params: WorldParams, height_field, cx: int, cz: int) -> ChunkMesh:
    return build_chunk(
        cx,
        cz,
        params.chunk_size,
        height_field,
        layout=params.layout,
        map_size=params.map_size,
        seams=params.seams,
        skip_flat=params.skip_flat_quads,
    )


def build_map(
    params: WorldParams,
    height_field,
    *,
    workers: int = 0,
    debug: bool = False,
) -> List[Tuple[np.ndarray, ChunkMesh]]:
    """Build every chunk of the map and return (world origin, mesh) pairs.

    Chunks are independent, so ``workers > 0`` hands them to a thread pool;
    the result order is row-major either way.
    """
    coords = chunk_coords(params.map_size)
    t0 = time.perf_counter()

    if workers > 0:
        from hexterrain.world.chunk_manager import ChunkManager

        cm = ChunkManager(params=params, height_field=height_field, workers=workers)
        try:
            meshes = cm.build_all(coords)
        finally:
            cm.shutdown()
    else:
        meshes = []
        for cx, cz in coords:
            t = time.perf_counter()
            mesh = build_one(params, height_field, cx, cz)
            if debug:
                print(
                    f"[hexterrain] chunk ({cx},{cz}) verts={mesh.vertex_count} "
                    f"tris={mesh.triangle_count} {1000.0 * (time.perf_counter() - t):.1f}ms"
                )
            meshes.append(mesh)

    if debug:
        total = sum(m.triangle_count for m in meshes)
        print(f"[hexterrain] map {params.map_size}x{params.map_size} tris={total} in {time.perf_counter() - t0:.2f}s")

    return [(m.origin, m) for m in meshes]
