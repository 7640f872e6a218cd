"""Orbit and zoom around a fixed target, driven by mouse input."""

import math

import numpy as np

from poseforge.core.math_utils import clamp
from poseforge.rendering.camera import Camera

BUTTON_LEFT = 1
BUTTON_MIDDLE = 2

MIN_RADIUS = 0.5
MAX_RADIUS = 50.0
# Keeps the view direction away from the poles, where look-at degenerates
POLE_MARGIN = 0.05

ROTATE_SPEED = 0.005
DRAG_ZOOM_SPEED = 0.005
WHEEL_ZOOM_SPEED = 0.1


def to_spherical(offset: np.ndarray) -> tuple[float, float, float]:
    """(radius, polar angle from +Y, azimuth from +Z toward +X)."""
    radius = float(np.linalg.norm(offset))
    if radius < 1e-6:
        return 1.0, math.pi / 2, 0.0
    polar = math.acos(clamp(float(offset[1]) / radius, -1.0, 1.0))
    azimuth = math.atan2(float(offset[0]), float(offset[2]))
    return radius, polar, azimuth


def from_spherical(radius: float, polar: float, azimuth: float) -> np.ndarray:
    ring = radius * math.sin(polar)
    return np.array((ring * math.sin(azimuth), radius * math.cos(polar), ring * math.cos(azimuth)))


class OrbitControls:
    """Left drag orbits, middle drag and the wheel zoom. There is no pan:
    the target always stays where the camera config puts it."""

    def __init__(self, camera: Camera) -> None:
        self.camera = camera
        self._radius = 1.0
        self._polar = math.pi / 2
        self._azimuth = 0.0
        self._button: int | None = None
        self._last = (0.0, 0.0)
        self.sync_from_camera()

    def sync_from_camera(self) -> None:
        """Re-derive the orbit from the camera after it was moved externally."""
        self._radius, self._polar, self._azimuth = to_spherical(
            self.camera.position - self.camera.target
        )

    def on_mouse_press(self, x: float, y: float, button: int) -> None:
        self._button = button
        self._last = (x, y)

    def on_mouse_release(self) -> None:
        self._button = None

    def on_mouse_move(self, x: float, y: float) -> bool:
        """Returns True when the camera moved."""
        if self._button is None:
            return False
        dx, dy = x - self._last[0], y - self._last[1]
        self._last = (x, y)

        if self._button == BUTTON_LEFT:
            self._azimuth -= dx * ROTATE_SPEED
            self._polar = clamp(self._polar - dy * ROTATE_SPEED, POLE_MARGIN, math.pi - POLE_MARGIN)
        elif self._button == BUTTON_MIDDLE:
            self._zoom(1.0 + dy * DRAG_ZOOM_SPEED)
        else:
            return False
        self._place_camera()
        return True

    def on_scroll(self, notches: float) -> None:
        """Positive *notches* zoom in."""
        self._zoom(1.0 - notches * WHEEL_ZOOM_SPEED)
        self._place_camera()

    def _zoom(self, factor: float) -> None:
        self._radius = clamp(self._radius * factor, MIN_RADIUS, MAX_RADIUS)

    def _place_camera(self) -> None:
        self.camera.position = self.camera.target + from_spherical(
            self._radius, self._polar, self._azimuth
        )
