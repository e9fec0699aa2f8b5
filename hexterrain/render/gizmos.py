from __future__ import annotations

import numpy as np

from hexterrain.world.hex_layout import HexLayout

AXIS_LENGTH = 1.5
_RED = (1.0, 0.0, 0.0)
_GREEN = (0.0, 1.0, 0.0)
_BLUE = (0.0, 0.0, 1.0)
_ALICE_BLUE = (0.94, 0.97, 1.0)


def gizmo_lines(layout: HexLayout) -> np.ndarray:
    """Line-list vertices (pos3 + color3) for the debug overlay.

    Three axis arrows from the origin, plus a vertical marker on each hex
    corner whose height is its index + 1, which makes the corner order
    readable in the viewer.
    """
    lines = [
        ((0.0, 0.0, 0.0), (0.0, AXIS_LENGTH, 0.0), _GREEN),
        ((0.0, 0.0, 0.0), (0.0, 0.0, AXIS_LENGTH), _BLUE),
        ((0.0, 0.0, 0.0), (AXIS_LENGTH, 0.0, 0.0), _RED),
    ]
    for i, c in enumerate(layout.corners):
        top = (c[0], c[1] + (i + 1), c[2])
        lines.append((tuple(c), top, _ALICE_BLUE))

    out = np.zeros((len(lines) * 2, 6), dtype=np.float32)
    for k, (a, b, col) in enumerate(lines):
        out[2 * k, :3] = a
        out[2 * k, 3:] = col
        out[2 * k + 1, :3] = b
        out[2 * k + 1, 3:] = col
    return out
