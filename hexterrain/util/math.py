"""Vector and matrix helpers for the terrain viewer.

Matrices are float32 and laid out the way moderngl uploads them (column-major
when written with ``.tobytes()``), so they go straight into ``uniform mat4``.
"""
from __future__ import annotations
import numpy as np

def normalize(v: np.ndarray) -> np.ndarray:
    """Unit-length float32 copy of ``v``; a zero vector comes back as zeros."""
    v = np.asarray(v, dtype=np.float32)
    n = float(np.linalg.norm(v))
    if n == 0.0:
        return v.copy()
    return v / np.float32(n)

def look_at(eye: np.ndarray, target: np.ndarray, up: np.ndarray) -> np.ndarray:
    eye = np.asarray(eye, dtype=np.float32)
    f = normalize(np.asarray(target, dtype=np.float32) - eye)
    s = normalize(np.cross(f, up))
    u = np.cross(s, f)

    m = np.eye(4, dtype=np.float32)
    m[:3, 0] = s
    m[:3, 1] = u
    m[:3, 2] = -f
    m[3, :3] = (-np.dot(s, eye), -np.dot(u, eye), np.dot(f, eye))
    return m

def perspective(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    if aspect <= 0 or not 0 < near < far:
        raise ValueError(f"bad projection: aspect={aspect} near={near} far={far}")
    f = 1.0 / np.tan(np.radians(fov_deg) * 0.5)
    depth = near - far
    m = np.zeros((4, 4), dtype=np.float32)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / depth
    m[2, 3] = -1.0
    m[3, 2] = 2.0 * far * near / depth
    return m

def map_center(origins: list[np.ndarray], extent: np.ndarray) -> np.ndarray:
    """Midpoint of the XZ bounding box spanned by chunk origins plus one chunk extent."""
    pts = np.asarray(origins, dtype=np.float32).reshape(-1, 3)
    lo = pts.min(axis=0)
    hi = pts.max(axis=0) + np.asarray(extent, dtype=np.float32)
    c = (lo + hi) * 0.5
    c[1] = 0.0
    return c
