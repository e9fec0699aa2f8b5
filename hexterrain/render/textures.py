from __future__ import annotations

import numpy as np
import moderngl

DEBUG_TEXTURE_SIZE = 8

# One row of 8 RGBA colours.
_PALETTE = np.array(
    [
        [255, 102, 159, 255],
        [255, 159, 102, 255],
        [236, 255, 102, 255],
        [121, 255, 102, 255],
        [102, 255, 198, 255],
        [102, 198, 255, 255],
        [121, 102, 255, 255],
        [236, 102, 255, 255],
    ],
    dtype=np.uint8,
)


def uv_debug_texture_data() -> np.ndarray:
    """8x8 RGBA8 checker of the palette, each row shifted right by one pixel."""
    rows = [np.roll(_PALETTE, y, axis=0) for y in range(DEBUG_TEXTURE_SIZE)]
    return np.stack(rows, axis=0)


def build_debug_texture(ctx: moderngl.Context) -> moderngl.Texture:
    data = uv_debug_texture_data()
    h, w = data.shape[:2]
    # sRGB bytes; the terrain shader decodes them.
    tex = ctx.texture((w, h), 4, data=data.tobytes(order="C"))
    tex.repeat_x = True
    tex.repeat_y = True
    tex.filter = (moderngl.NEAREST, moderngl.NEAREST)
    return tex
