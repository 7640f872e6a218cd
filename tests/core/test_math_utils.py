"""Tests for math_utils module."""

import math

import numpy as np
import pytest

from poseforge.core.math_utils import (
    vec3, normalize, clamp, deg_to_rad,
    quat_identity, quat_from_axis_angle, quat_from_rotvec,
    mat4_identity, mat4_translation, mat4_rotation_z, mat4_from_quaternion,
    mat4_compose, mat4_perspective, mat4_look_at, mat3_normal, transform_points,
)


def test_vec3():
    v = vec3(1, 2, 3)
    assert v.shape == (3,)
    np.testing.assert_array_equal(v, [1, 2, 3])


def test_normalize():
    np.testing.assert_array_almost_equal(normalize((3, 0, 4)), [0.6, 0, 0.8])
    np.testing.assert_array_equal(normalize((0, 0, 0)), [0, 0, 0])


def test_clamp_and_deg_to_rad():
    assert clamp(5, 0, 1) == 1
    assert clamp(-5, 0, 1) == 0
    assert clamp(0.5, 0, 1) == 0.5
    assert math.isclose(deg_to_rad(180), math.pi)


def test_translation_moves_points():
    p = transform_points(mat4_translation(1, 2, 3), vec3(0, 0, 0))
    np.testing.assert_array_almost_equal(p, [1, 2, 3])


def test_transform_points_batch():
    pts = np.array([[1, 0, 0], [0, 1, 0]], dtype=np.float64)
    out = transform_points(mat4_rotation_z(math.pi / 2), pts)
    np.testing.assert_array_almost_equal(out, [[0, 1, 0], [-1, 0, 0]])


def test_identity_quaternion_matrix():
    np.testing.assert_array_almost_equal(mat4_from_quaternion(quat_identity()), mat4_identity())


def test_axis_angle_quarter_turn_about_y():
    m = mat4_from_quaternion(quat_from_axis_angle(vec3(0, 1, 0), math.pi / 2))
    np.testing.assert_array_almost_equal(transform_points(m, vec3(1, 0, 0)), [0, 0, -1])


def test_quaternion_matrix_is_orthonormal():
    q = quat_from_axis_angle(vec3(1, 2, 3), 1.1)
    r = mat4_from_quaternion(q)[:3, :3]
    np.testing.assert_array_almost_equal(r @ r.T, np.eye(3))
    assert np.linalg.det(r) == pytest.approx(1.0)


def test_quat_from_rotvec():
    np.testing.assert_array_equal(quat_from_rotvec([0, 0, 0]), [0, 0, 0, 1])
    np.testing.assert_array_equal(quat_from_rotvec([1e-5, 0, 0], epsilon=1e-4), [0, 0, 0, 1])
    np.testing.assert_array_almost_equal(
        quat_from_rotvec([0, 0, math.pi]), [0, 0, 1, 0]
    )


def test_compose_rotates_then_translates():
    q = quat_from_axis_angle(vec3(0, 1, 0), math.pi / 2)
    m = mat4_compose(vec3(1, 2, 3), q, vec3(1, 1, 1))
    np.testing.assert_array_almost_equal(transform_points(m, vec3(1, 0, 0)), [1, 2, 2])


def test_compose_scales():
    m = mat4_compose(vec3(0, 0, 0), quat_identity(), vec3(2, 3, 4))
    np.testing.assert_array_almost_equal(transform_points(m, vec3(1, 1, 1)), [2, 3, 4])


def test_look_at_puts_target_ahead():
    view = mat4_look_at(vec3(0, 1.5, 4), vec3(0, 1, 0), vec3(0, 1, 0))
    p = transform_points(view, vec3(0, 1, 0))
    np.testing.assert_array_almost_equal(p[:2], [0, 0])
    assert p[2] < 0


def test_look_at_straight_down_is_finite():
    view = mat4_look_at(vec3(0, 5, 0), vec3(0, 0, 0), vec3(0, 1, 0))
    assert np.all(np.isfinite(view))
    np.testing.assert_array_almost_equal(transform_points(view, vec3(0, 0, 0)), [0, 0, -5])


def test_perspective_maps_near_and_far_planes():
    proj = mat4_perspective(math.radians(60), 1.5, 0.1, 100.0)
    for z, ndc in ((-0.1, -1.0), (-100.0, 1.0)):
        clip = proj @ np.array([0.0, 0.0, z, 1.0])
        assert clip[2] / clip[3] == pytest.approx(ndc)


def test_normal_matrix_of_rotation_is_rotation():
    m = mat4_rotation_z(0.3)
    np.testing.assert_array_almost_equal(mat3_normal(m), m[:3, :3])
