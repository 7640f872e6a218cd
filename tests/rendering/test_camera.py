"""Tests for the config-driven camera."""

import numpy as np
import pytest

from poseforge.core.state import CameraConfig
from poseforge.rendering.camera import Camera


def test_defaults_come_from_config():
    cam = Camera()
    np.testing.assert_array_equal(cam.position, [0, 1.5, 4])
    np.testing.assert_array_equal(cam.target, [0, 1, 0])
    assert cam.fov == 45.0


def test_apply_config_rebuilds_matrices():
    cam = Camera()
    view = cam.get_view_matrix()
    proj = cam.get_projection_matrix()
    cam.apply_config(CameraConfig(position=(3.0, 1.0, 0.0), fov=70.0))
    assert not np.allclose(cam.get_view_matrix(), view)
    assert not np.allclose(cam.get_projection_matrix(), proj)


def test_matrices_cached_until_changed():
    cam = Camera()
    assert cam.get_view_matrix() is cam.get_view_matrix()
    first = cam.get_projection_matrix()
    cam.set_aspect(800, 0)
    assert cam.get_projection_matrix() is first
    cam.set_aspect(800, 400)
    assert cam.aspect == 2.0
    assert cam.get_projection_matrix() is not first


def test_setting_position_invalidates_view():
    cam = Camera()
    view = cam.get_view_matrix()
    cam.position = (0.0, 1.0, 10.0)
    eye_in_view = cam.get_view_matrix() @ np.array([0.0, 1.0, 0.0, 1.0])
    assert eye_in_view[2] == pytest.approx(-10.0)
    assert cam.get_view_matrix() is not view
