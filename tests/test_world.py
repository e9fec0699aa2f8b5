"""Tests for world.py: map assembly, params validation, threaded builds."""

from __future__ import annotations

import numpy as np
import pytest

from hexterrain.world.buffers import ChunkBuildError
from hexterrain.world.hex_layout import HexLayout
from hexterrain.world.noise import FlatHeightField, HeightField
from hexterrain.world.world import WorldParams, build_map, chunk_coords, chunk_origin


class _ExplodingAt:
    def __init__(self, gx):
        self.gx = gx

    def sample(self, x, z):
        if x == self.gx:
            raise ZeroDivisionError("bad column")
        return 0.0


def test_chunk_coords_row_major():
    assert chunk_coords(2) == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_map_of_two_has_four_chunks_at_layout_origins():
    params = WorldParams(map_size=2, chunk_size=4)
    out = build_map(params, FlatHeightField())
    assert len(out) == 4
    layout = HexLayout()
    for (origin, mesh), (cx, cz) in zip(out, chunk_coords(2)):
        assert (mesh.cx, mesh.cz) == (cx, cz)
        expected = layout.to_world(cx * 4, 0, cz * 4)
        assert origin.tolist() == pytest.approx(expected.tolist())
        assert chunk_origin(cx, cz, 4, layout).tolist() == pytest.approx(expected.tolist())


def test_outer_radius_reaches_the_mesh():
    params = WorldParams(map_size=1, chunk_size=1, outer_radius=2.0)
    (_, mesh), = build_map(params, FlatHeightField())
    assert np.allclose(np.linalg.norm(mesh.positions[1:], axis=1), 2.0)


class TestParams:
    def test_defaults_are_valid(self):
        params = WorldParams()
        assert params.tiles_per_side == params.map_size * params.chunk_size

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"map_size": 0},
            {"chunk_size": 0},
            {"outer_radius": 0.0},
            {"map_size": 2, "chunk_size": 3},
            {"map_size": 1, "chunk_size": 30000},
            {"noise_scale": 0.0},
            {"noise_scale": -2.5},
            {"seed": "abc"},
            {"seed": 1.5},
        ],
    )
    def test_rejects(self, kwargs):
        with pytest.raises(ValueError):
            WorldParams(**kwargs)

    def test_odd_chunk_ok_for_single_chunk_map(self):
        assert WorldParams(map_size=1, chunk_size=3).chunk_size == 3

    def test_height_field_uses_seed_and_scale(self):
        hf = WorldParams(noise_scale=2.0, seed=5).height_field()
        assert (hf.seed, hf.scale) == (5, 2.0)
        assert hf.sample(3, 4) == HeightField(seed=5, scale=2.0).sample(3, 4)


class TestParallel:
    def test_matches_sequential(self):
        params = WorldParams(map_size=3, chunk_size=4)
        hf = HeightField(seed=77)
        seq = build_map(params, hf)
        par = build_map(params, hf, workers=3)
        assert [(m.cx, m.cz) for _, m in par] == [(m.cx, m.cz) for _, m in seq]
        for (_, a), (_, b) in zip(seq, par):
            assert np.array_equal(a.positions, b.positions)
            assert np.array_equal(a.indices, b.indices)

    def test_worker_errors_reach_caller(self):
        params = WorldParams(map_size=2, chunk_size=2)
        with pytest.raises(ChunkBuildError, match=r"chunk \(1,[01]\) tile \(1,[01]\)"):
            build_map(params, _ExplodingAt(gx=3), workers=2)


def test_debug_output(capsys):
    build_map(WorldParams(map_size=1, chunk_size=2), FlatHeightField(), debug=True)
    out = capsys.readouterr().out
    assert "[hexterrain] chunk (0,0) verts=28 tris=34" in out
    assert "[hexterrain] map 1x1 tris=34" in out
