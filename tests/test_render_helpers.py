"""Tests for the GL-free parts of the viewer: debug texture, gizmos, camera."""

from __future__ import annotations

import numpy as np
import pytest

from hexterrain.render.camera import OrbitCamera
from hexterrain.render.gizmos import gizmo_lines
from hexterrain.render.textures import DEBUG_TEXTURE_SIZE, uv_debug_texture_data
from hexterrain.util.math import look_at, map_center, normalize, perspective
from hexterrain.world.hex_layout import HexLayout


class TestDebugTexture:
    def test_shape_and_format(self):
        data = uv_debug_texture_data()
        assert data.shape == (DEBUG_TEXTURE_SIZE, DEBUG_TEXTURE_SIZE, 4)
        assert data.dtype == np.uint8
        assert len(data.tobytes()) == 8 * 8 * 4

    def test_rows_rotate_right_by_one_pixel(self):
        data = uv_debug_texture_data()
        for y in range(1, DEBUG_TEXTURE_SIZE):
            assert np.array_equal(data[y, 1:], data[y - 1, :-1])
            assert np.array_equal(data[y, 0], data[y - 1, -1])

    def test_opaque(self):
        assert np.all(uv_debug_texture_data()[..., 3] == 255)

    def test_first_pixel(self):
        assert uv_debug_texture_data()[0, 0].tolist() == [255, 102, 159, 255]


class TestGizmos:
    def test_line_count(self):
        lines = gizmo_lines(HexLayout())
        # 3 axes + 6 corner markers, two vertices each
        assert lines.shape == (18, 6)

    def test_corner_markers_grow_with_index(self):
        layout = HexLayout()
        lines = gizmo_lines(layout)
        for i in range(6):
            a, b = lines[6 + 2 * i], lines[6 + 2 * i + 1]
            assert np.allclose(a[:3], layout.corners[i])
            assert b[1] - a[1] == pytest.approx(i + 1)


class TestOrbitCamera:
    def test_looking_at_reproduces_eye(self):
        eye = np.array([0.0, 50.0, 0.0])
        target = np.array([50.0, 0.0, 50.0])
        cam = OrbitCamera.looking_at(eye, target)
        assert np.allclose(cam.eye(), eye, atol=1e-3)

    def test_pitch_is_clamped(self):
        cam = OrbitCamera(np.zeros(3), 10.0)
        cam.orbit(0.0, 10.0)
        assert cam.pitch == OrbitCamera.MAX_PITCH
        cam.orbit(0.0, -10.0)
        assert cam.pitch == OrbitCamera.MIN_PITCH

    def test_zoom_keeps_minimum_radius(self):
        cam = OrbitCamera(np.zeros(3), 10.0)
        cam.zoom(0.5)
        assert cam.radius == pytest.approx(5.0)
        cam.zoom(0.0)
        assert cam.radius == OrbitCamera.MIN_RADIUS

    def test_view_matrix_moves_target_in_front(self):
        cam = OrbitCamera(np.array([1.0, 0.0, 2.0]), 10.0)
        view = cam.view_matrix()
        # column-major: transform a row vector by the transposed layout
        p = np.array([1.0, 0.0, 2.0, 1.0], dtype=np.float32) @ view
        assert p[2] == pytest.approx(-10.0, abs=1e-4)


def test_map_center_ignores_height():
    c = map_center([np.array([0.0, 0.0, 0.0]), np.array([4.0, 0.0, 6.0])], np.array([2.0, 9.0, 2.0]))
    assert c.tolist() == pytest.approx([3.0, 0.0, 4.0])


class TestMatrices:
    def test_normalize_returns_float32_unit(self):
        v = normalize([3, 0, 4])
        assert v.dtype == np.float32
        assert np.allclose(v, [0.6, 0.0, 0.8])

    def test_normalize_zero_vector(self):
        zero = np.zeros(3, dtype=np.float32)
        out = normalize(zero)
        assert np.array_equal(out, zero)
        assert out is not zero

    def test_look_at_maps_eye_to_origin_and_target_ahead(self):
        eye = np.array([0.0, 5.0, 5.0], dtype=np.float32)
        target = np.zeros(3, dtype=np.float32)
        m = look_at(eye, target, np.array([0.0, 1.0, 0.0], dtype=np.float32))
        assert m.dtype == np.float32
        # row vectors times m, the transpose of the GL column-major convention
        eye_view = np.append(eye, 1.0) @ m
        target_view = np.append(target, 1.0) @ m
        assert np.allclose(eye_view[:3], 0.0, atol=1e-5)
        assert target_view[2] == pytest.approx(-np.linalg.norm(eye), rel=1e-5)
        assert np.allclose(target_view[:2], 0.0, atol=1e-5)

    def test_perspective_depth_range(self):
        near, far = 0.5, 100.0
        m = perspective(60.0, 1.5, near, far)
        for depth, ndc in ((near, -1.0), (far, 1.0)):
            clip = np.array([0.0, 0.0, -depth, 1.0], dtype=np.float32) @ m
            assert clip[2] / clip[3] == pytest.approx(ndc, abs=1e-4)
        assert m[0, 0] == pytest.approx(m[1, 1] / 1.5)

    def test_perspective_rejects_bad_planes(self):
        with pytest.raises(ValueError):
            perspective(60.0, 1.0, 10.0, 1.0)
