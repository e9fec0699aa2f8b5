from __future__ import annotations

import numpy as np

from hexterrain.util.math import look_at


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


class OrbitCamera:
    """Orbits a target point; yaw around +Y, pitch above the ground plane."""

    MIN_PITCH = 0.05
    MAX_PITCH = 1.55
    MIN_RADIUS = 2.0

    def __init__(self, target: np.ndarray, radius: float, *, yaw: float = 0.0, pitch: float = 1.0) -> None:
        self.target = np.asarray(target, dtype=np.float32)
        self.radius = max(float(radius), self.MIN_RADIUS)
        self.yaw = float(yaw)
        self.pitch = _clamp(float(pitch), self.MIN_PITCH, self.MAX_PITCH)

    @classmethod
    def looking_at(cls, eye: np.ndarray, target: np.ndarray) -> "OrbitCamera":
        eye = np.asarray(eye, dtype=np.float32)
        target = np.asarray(target, dtype=np.float32)
        d = eye - target
        radius = float(np.linalg.norm(d))
        horiz = float(np.hypot(d[0], d[2]))
        yaw = float(np.arctan2(d[0], d[2]))
        pitch = float(np.arctan2(d[1], horiz))
        return cls(target, radius, yaw=yaw, pitch=pitch)

    def orbit(self, d_yaw: float, d_pitch: float) -> None:
        self.yaw += float(d_yaw)
        self.pitch = _clamp(self.pitch + float(d_pitch), self.MIN_PITCH, self.MAX_PITCH)

    def zoom(self, factor: float) -> None:
        self.radius = max(self.radius * float(factor), self.MIN_RADIUS)

    def eye(self) -> np.ndarray:
        cp = float(np.cos(self.pitch))
        offset = np.array(
            [np.sin(self.yaw) * cp, np.sin(self.pitch), np.cos(self.yaw) * cp],
            dtype=np.float32,
        )
        return self.target + offset * self.radius

    def view_matrix(self) -> np.ndarray:
        up = np.array([0.0, 1.0, 0.0], dtype=np.float32)
        return look_at(self.eye(), self.target, up)
