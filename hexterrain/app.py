from __future__ import annotations

import time
import numpy as np
import pygame
import moderngl

from hexterrain.config import (
    WINDOW_WIDTH, WINDOW_HEIGHT, FPS_CAP,
    LIGHT_DIR, CAMERA_START_HEIGHT, ORBIT_SENSITIVITY, ZOOM_STEP,
)
from hexterrain.render.camera import OrbitCamera
from hexterrain.render.renderer import Renderer
from hexterrain.util.math import map_center, normalize
from hexterrain.world.world import WorldParams, build_map


def _init_pygame_gl() -> None:
    pygame.init()
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE)
    pygame.display.gl_set_attribute(pygame.GL_DEPTH_SIZE, 24)
    pygame.display.gl_set_attribute(pygame.GL_DOUBLEBUFFER, 1)


def _chunk_extent(params: WorldParams) -> np.ndarray:
    layout = params.layout
    n = params.chunk_size
    return np.array([n * 2.0 * layout.inner_radius, 0.0, n * 1.5 * layout.outer_radius], dtype=np.float32)


def run_app(
    *,
    params: WorldParams,
    wireframe: bool,
    gizmos: bool,
    workers: int,
    debug: bool,
) -> None:
    chunks = build_map(params, params.height_field(), workers=workers, debug=debug)

    _init_pygame_gl()

    flags = pygame.OPENGL | pygame.DOUBLEBUF | pygame.RESIZABLE
    pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), flags)
    pygame.display.set_caption(f"hexterrain (seed={params.seed} map={params.map_size} chunk={params.chunk_size})")

    try:
        ctx = moderngl.create_context()
    except Exception as e:
        pygame.quit()
        raise RuntimeError("Failed to create ModernGL context (need OpenGL 3.2+)") from e

    if debug:
        print(f"[hexterrain] moderngl ctx version_code={ctx.version_code} vendor={ctx.info.get('GL_VENDOR')} renderer={ctx.info.get('GL_RENDERER')}")

    ctx.viewport = (0, 0, WINDOW_WIDTH, WINDOW_HEIGHT)
    renderer = Renderer(ctx, WINDOW_WIDTH, WINDOW_HEIGHT, params.layout)
    for _, mesh in chunks:
        renderer.upload_chunk(mesh)

    center = map_center([origin for origin, _ in chunks], _chunk_extent(params))
    eye = np.array([0.0, CAMERA_START_HEIGHT, 0.0], dtype=np.float32)
    cam = OrbitCamera.looking_at(eye, center)

    light_dir = normalize(np.array(LIGHT_DIR, dtype=np.float32))

    clock = pygame.time.Clock()
    running = True
    dragging = False
    last_log = time.perf_counter()
    frames = 0

    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_f:
                        wireframe = not wireframe
                    elif event.key == pygame.K_g:
                        gizmos = not gizmos
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                    dragging = True
                elif event.type == pygame.MOUSEBUTTONUP and event.button in (1, 3):
                    dragging = False
                elif event.type == pygame.MOUSEMOTION and dragging:
                    dx, dy = event.rel
                    cam.orbit(-dx * ORBIT_SENSITIVITY, dy * ORBIT_SENSITIVITY)
                elif event.type == pygame.MOUSEWHEEL:
                    cam.zoom(ZOOM_STEP ** event.y)
                elif event.type == pygame.VIDEORESIZE:
                    w, h = max(64, event.w), max(64, event.h)
                    pygame.display.set_mode((w, h), flags)
                    renderer.resize(w, h)

            renderer.begin_frame()
            renderer.set_common_uniforms(view=cam.view_matrix(), light_dir=light_dir)
            renderer.draw_chunks(wireframe=wireframe)
            if gizmos:
                renderer.draw_gizmos()

            pygame.display.flip()
            frames += 1

            now = time.perf_counter()
            if debug and now - last_log >= 1.0:
                print(f"[hexterrain] fps~{frames / (now - last_log):.0f} chunks={len(renderer.chunks)} radius={cam.radius:.1f}")
                frames = 0
                last_log = now

            if FPS_CAP and FPS_CAP > 0:
                clock.tick(FPS_CAP)
            else:
                clock.tick()
    finally:
        renderer.release()
        pygame.quit()
