from __future__ import annotations

from dataclasses import dataclass, field

from opensimplex import OpenSimplex

from hexterrain.config import DEFAULT_SEED, NOISE_SCALE


@dataclass
class HeightField:
    """Simplex height in roughly [-1, 1] for integer tile coordinates.

    The generator is seeded once and only read afterwards, so one instance can
    be shared by any number of chunk builds (including worker threads).
    """

    seed: int = DEFAULT_SEED
    scale: float = NOISE_SCALE
    _simp: OpenSimplex = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError(f"noise scale must be positive, got {self.scale}")
        self.seed = int(self.seed)
        self._simp = OpenSimplex(self.seed)

    def sample(self, x: int, z: int) -> float:
        return float(self._simp.noise2(x / self.scale, z / self.scale))


@dataclass(frozen=True)
class FlatHeightField:
    """Constant height. Handy for tests and for previewing pure topology."""

    height: float = 0.0

    def sample(self, x: int, z: int) -> float:
        return float(self.height)
