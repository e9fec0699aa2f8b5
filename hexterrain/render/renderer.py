from __future__ import annotations

from typing import Dict, Tuple

import moderngl
import numpy as np

from hexterrain.config import CLEAR_COLOR, FAR, FOV_DEG, NEAR, WIREFRAME_COLOR
from hexterrain.render.gizmos import gizmo_lines
from hexterrain.render.shaders import line_shader_sources, shader_sources
from hexterrain.render.textures import build_debug_texture
from hexterrain.util.math import perspective
from hexterrain.world.chunk import ChunkGPU, ChunkMesh
from hexterrain.world.hex_layout import HexLayout


class Renderer:
    def __init__(self, ctx: moderngl.Context, width: int, height: int, layout: HexLayout) -> None:
        self.ctx = ctx
        self.width = width
        self.height = height

        vert, frag = shader_sources(ctx.version_code)
        self.prog = self.ctx.program(vertex_shader=vert, fragment_shader=frag)
        lvert, lfrag = line_shader_sources(ctx.version_code)
        self.line_prog = self.ctx.program(vertex_shader=lvert, fragment_shader=lfrag)

        self.texture = build_debug_texture(ctx)

        self._proj = perspective(FOV_DEG, width / height, NEAR, FAR).astype(np.float32)
        for p in (self.prog, self.line_prog):
            p["u_proj"].write(self._proj.tobytes())

        self.ctx.enable(moderngl.DEPTH_TEST)
        self.ctx.disable(moderngl.CULL_FACE)

        gizmo = gizmo_lines(layout)
        self._gizmo_vbo = self.ctx.buffer(gizmo.tobytes())
        self._gizmo_vao = self.ctx.vertex_array(
            self.line_prog, [(self._gizmo_vbo, "3f 3f", "in_pos", "in_color")]
        )

        self.chunks: Dict[Tuple[int, int], ChunkGPU] = {}

    @property
    def proj(self) -> np.ndarray:
        return self._proj

    def upload_chunk(self, mesh: ChunkMesh) -> ChunkGPU:
        vbo = self.ctx.buffer(mesh.interleaved().tobytes())
        ibo = self.ctx.buffer(np.ascontiguousarray(mesh.indices, dtype=np.uint32).tobytes())
        vao = self.ctx.vertex_array(
            self.prog,
            [
                (vbo, "3f 2f 3f", "in_pos", "in_uv", "in_norm"),
            ],
            ibo,
            index_element_size=4,
        )
        origin = (float(mesh.origin[0]), float(mesh.origin[1]), float(mesh.origin[2]))
        gpu = ChunkGPU(cx=mesh.cx, cz=mesh.cz, origin=origin, vao=vao, vbo=vbo, ibo=ibo)
        old = self.chunks.pop((mesh.cx, mesh.cz), None)
        if old is not None:
            self._release_chunk(old)
        self.chunks[(mesh.cx, mesh.cz)] = gpu
        return gpu

    def _release_chunk(self, ch: ChunkGPU) -> None:
        ch.vao.release()
        ch.vbo.release()
        ch.ibo.release()

    def release(self) -> None:
        for ch in self.chunks.values():
            self._release_chunk(ch)
        self.chunks.clear()
        for obj in [self._gizmo_vao, self._gizmo_vbo, self.texture, self.line_prog, self.prog]:
            obj.release()

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.ctx.viewport = (0, 0, width, height)
        self._proj = perspective(FOV_DEG, width / height, NEAR, FAR).astype(np.float32)
        for p in (self.prog, self.line_prog):
            p["u_proj"].write(self._proj.tobytes())

    def begin_frame(self) -> None:
        self.ctx.clear(*CLEAR_COLOR, 1.0)

    def set_common_uniforms(self, view: np.ndarray, light_dir: np.ndarray) -> None:
        view32 = view.astype(np.float32).tobytes()
        self.prog["u_view"].write(view32)
        self.line_prog["u_view"].write(view32)
        self.prog["u_light_dir"].value = (float(light_dir[0]), float(light_dir[1]), float(light_dir[2]))

    def draw_chunks(self, *, wireframe: bool) -> None:
        self.texture.use(location=0)
        if "u_tex" in self.prog:
            self.prog["u_tex"].value = 0
        self.prog["u_flat"].value = False
        for ch in self.chunks.values():
            self.prog["u_offset"].value = ch.origin
            ch.vao.render()

        if not wireframe:
            return
        # Overlay edges on top of the filled surface.
        self.prog["u_flat"].value = True
        self.prog["u_flat_color"].value = WIREFRAME_COLOR
        self.ctx.depth_func = "<="
        self.ctx.wireframe = True
        for ch in self.chunks.values():
            self.prog["u_offset"].value = ch.origin
            ch.vao.render()
        self.ctx.wireframe = False
        self.ctx.depth_func = "<"

    def draw_gizmos(self) -> None:
        self.ctx.disable(moderngl.DEPTH_TEST)
        self._gizmo_vao.render(mode=moderngl.LINES)
        self.ctx.enable(moderngl.DEPTH_TEST)
