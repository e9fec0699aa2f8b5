"""Tests for hex_layout.py: offset-row shear transform and corner table."""

from __future__ import annotations

import math

import numpy as np
import pytest

from hexterrain.world.hex_layout import HexLayout


R = 1.0
INNER = R * math.sqrt(3.0) / 2.0


def test_origin_maps_to_origin():
    assert HexLayout().to_world(0, 0, 0).tolist() == pytest.approx([0.0, 0.0, 0.0])


def test_one_step_east_is_two_inner_radii():
    assert HexLayout().to_world(1, 0, 0).tolist() == pytest.approx([2 * INNER, 0.0, 0.0])


def test_odd_row_is_sheared_half_a_tile():
    assert HexLayout().to_world(0, 0, 1).tolist() == pytest.approx([INNER, 0.0, 1.5 * R])


def test_even_rows_are_not_sheared():
    assert HexLayout().to_world(0, 0, 2).tolist() == pytest.approx([0.0, 0.0, 3.0 * R])
    assert HexLayout().to_world(3, 0, 4).tolist() == pytest.approx([6 * INNER, 0.0, 6.0 * R])


def test_negative_odd_row_shears_like_positive_odd_row():
    assert HexLayout().to_world(0, 0, -1).tolist() == pytest.approx([INNER, 0.0, -1.5 * R])


def test_height_passes_through():
    assert HexLayout().to_world(2, 0.75, 3)[1] == 0.75


def test_radius_scales_everything():
    layout = HexLayout(2.0)
    assert layout.inner_radius == pytest.approx(math.sqrt(3.0))
    assert layout.to_world(1, 0, 1).tolist() == pytest.approx([3 * math.sqrt(3.0), 0.0, 3.0])


class TestCorners:
    def test_six_corners_on_outer_radius(self):
        corners = HexLayout().corners
        assert corners.shape == (6, 3)
        assert np.allclose(np.linalg.norm(corners, axis=1), R)
        assert np.all(corners[:, 1] == 0.0)

    def test_corner_order(self):
        c = HexLayout().corners
        # top, upper-right, lower-right, bottom, lower-left, upper-left
        assert c[0].tolist() == pytest.approx([0.0, 0.0, R])
        assert c[1].tolist() == pytest.approx([INNER, 0.0, 0.5 * R])
        assert c[2].tolist() == pytest.approx([INNER, 0.0, -0.5 * R])
        assert c[3].tolist() == pytest.approx([0.0, 0.0, -R])
        assert c[4].tolist() == pytest.approx([-INNER, 0.0, -0.5 * R])
        assert c[5].tolist() == pytest.approx([-INNER, 0.0, 0.5 * R])

    def test_corners_are_read_only(self):
        with pytest.raises(ValueError):
            HexLayout().corners[0, 0] = 5.0

    def test_corner_offsets_position(self):
        layout = HexLayout()
        pos = np.array([1.0, 2.0, 3.0])
        assert layout.corner(pos, 3).tolist() == pytest.approx([1.0, 2.0, 3.0 - R])
