from __future__ import annotations

from typing import List, Tuple

import numpy as np

from hexterrain.world.chunk import ChunkMesh

UP = (0.0, 1.0, 0.0)


class ChunkBuildError(RuntimeError):
    """Fatal failure while meshing a chunk; the message names chunk and tile."""


class MeshBuffers:
    """Growing vertex arena for one chunk.

    Positions, UVs and normals are parallel lists; UV is the XZ projection of
    the position and every normal points up. Vertices are addressed purely by
    their offset in the arena.
    """

    def __init__(self) -> None:
        self.positions: List[Tuple[float, float, float]] = []
        self.uvs: List[Tuple[float, float]] = []
        self.normals: List[Tuple[float, float, float]] = []
        self.indices: List[int] = []

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def add_vertex(self, pos) -> int:
        idx = len(self.positions)
        x, y, z = float(pos[0]), float(pos[1]), float(pos[2])
        self.positions.append((x, y, z))
        self.uvs.append((x, z))
        self.normals.append(UP)
        return idx

    def add_triangle(self, a: int, b: int, c: int) -> None:
        self.indices.extend((a, b, c))

    def height(self, idx: int) -> float:
        return self.positions[idx][1]

    def to_mesh(self, cx: int, cz: int, origin) -> ChunkMesh:
        """Freeze into numpy arrays after checking the arena invariants."""
        n = len(self.positions)
        if not (n == len(self.uvs) == len(self.normals)):
            raise ChunkBuildError(
                f"chunk ({cx},{cz}): buffer lengths differ "
                f"(pos={n} uv={len(self.uvs)} norm={len(self.normals)})"
            )
        if len(self.indices) % 3 != 0:
            raise ChunkBuildError(f"chunk ({cx},{cz}): {len(self.indices)} indices is not a triangle list")

        idx = np.array(self.indices, dtype=np.uint32)
        if idx.size and int(idx.max()) >= n:
            raise ChunkBuildError(f"chunk ({cx},{cz}): index {int(idx.max())} out of range for {n} vertices")

        pos = np.array(self.positions, dtype=np.float32).reshape(-1, 3)
        uv = np.array(self.uvs, dtype=np.float32).reshape(-1, 2)
        nrm = np.array(self.normals, dtype=np.float32).reshape(-1, 3)
        for a in (pos, uv, nrm, idx):
            a.setflags(write=False)
        return ChunkMesh(
            cx=cx,
            cz=cz,
            origin=np.asarray(origin, dtype=np.float32),
            positions=pos,
            uvs=uv,
            normals=nrm,
            indices=idx,
        )
