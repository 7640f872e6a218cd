"""Tests for orbit and zoom controls."""

import math

import numpy as np
import pytest

from poseforge.rendering.camera import Camera
from poseforge.rendering.orbit_controls import (
    BUTTON_LEFT, BUTTON_MIDDLE, MAX_RADIUS, MIN_RADIUS, POLE_MARGIN, OrbitControls,
    from_spherical, to_spherical,
)


def _distance(cam):
    return float(np.linalg.norm(cam.position - cam.target))


def test_spherical_round_trip():
    offset = np.array([1.0, 2.0, -3.0])
    np.testing.assert_array_almost_equal(from_spherical(*to_spherical(offset)), offset)


def test_left_drag_orbits_at_constant_distance():
    cam = Camera()
    controls = OrbitControls(cam)
    target = cam.target.copy()
    before = _distance(cam)
    controls.on_mouse_press(0, 0, BUTTON_LEFT)
    assert controls.on_mouse_move(100, 20)
    assert _distance(cam) == pytest.approx(before)
    np.testing.assert_array_equal(cam.target, target)
    assert cam.position[0] != pytest.approx(0.0)


def test_move_without_press_does_nothing():
    cam = Camera()
    controls = OrbitControls(cam)
    position = cam.position.copy()
    assert not controls.on_mouse_move(50, 50)
    controls.on_mouse_press(0, 0, 3)
    assert not controls.on_mouse_move(50, 50)
    np.testing.assert_array_equal(cam.position, position)


def test_vertical_orbit_stops_short_of_pole():
    cam = Camera()
    controls = OrbitControls(cam)
    controls.on_mouse_press(0, 0, BUTTON_LEFT)
    controls.on_mouse_move(0, 100000)
    offset = cam.position - cam.target
    assert math.acos(offset[1] / np.linalg.norm(offset)) == pytest.approx(POLE_MARGIN)


def test_zoom_is_clamped():
    cam = Camera()
    controls = OrbitControls(cam)
    for _ in range(200):
        controls.on_scroll(1.0)
    assert _distance(cam) == pytest.approx(MIN_RADIUS)
    controls.on_mouse_press(0, 0, BUTTON_MIDDLE)
    for step in range(1, 200):
        controls.on_mouse_move(0, step * 50)
    assert _distance(cam) == pytest.approx(MAX_RADIUS)
