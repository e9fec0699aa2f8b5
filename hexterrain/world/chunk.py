from __future__ import annotations

from dataclasses import dataclass

import moderngl
import numpy as np


@dataclass(frozen=True)
class ChunkMesh:
    cx: int
    cz: int
    origin: np.ndarray  # world translation of the chunk, float32 (3,)
    positions: np.ndarray  # float32 (N,3), chunk-local
    uvs: np.ndarray  # float32 (N,2)
    normals: np.ndarray  # float32 (N,3)
    indices: np.ndarray  # uint32 (M,), triangle list

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.size) // 3

    def interleaved(self) -> np.ndarray:
        """pos (3) + uv (2) + norm (3) per vertex, float32 (N,8)."""
        return np.concatenate([self.positions, self.uvs, self.normals], axis=1).astype(np.float32)


@dataclass
class ChunkGPU:
    cx: int
    cz: int
    origin: tuple[float, float, float]
    vao: moderngl.VertexArray
    vbo: moderngl.Buffer
    ibo: moderngl.Buffer
