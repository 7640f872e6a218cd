"""Perspective camera fed from a :class:`CameraConfig`."""

import numpy as np

from poseforge.constants import CAMERA_FAR, CAMERA_NEAR
from poseforge.core.math_utils import Mat4, Vec3, deg_to_rad, mat4_look_at, mat4_perspective
from poseforge.core.state import CameraConfig

_UP = np.array((0.0, 1.0, 0.0))


class Camera:
    """View and projection matrices, rebuilt lazily when inputs change.

    ``position`` and ``target`` are properties so orbit controls can move
    the camera without tracking dirty flags themselves.
    """

    def __init__(self, config: CameraConfig | None = None,
                 near: float = CAMERA_NEAR, far: float = CAMERA_FAR) -> None:
        config = config or CameraConfig()
        self.near = near
        self.far = far
        self.aspect = 1.0
        self.fov = config.fov
        self._position = np.array(config.position, dtype=np.float64)
        self._target = np.array(config.target, dtype=np.float64)
        self._view: Mat4 | None = None
        self._proj: Mat4 | None = None

    @property
    def position(self) -> Vec3:
        return self._position

    @position.setter
    def position(self, value) -> None:
        self._position = np.array(value, dtype=np.float64)
        self._view = None

    @property
    def target(self) -> Vec3:
        return self._target

    @target.setter
    def target(self, value) -> None:
        self._target = np.array(value, dtype=np.float64)
        self._view = None

    def set_aspect(self, width: int, height: int) -> None:
        if height > 0:
            self.aspect = width / height
            self._proj = None

    def set_fov(self, fov: float) -> None:
        if fov != self.fov:
            self.fov = fov
            self._proj = None

    def apply_config(self, config: CameraConfig) -> None:
        self.position = config.position
        self.target = config.target
        self.set_fov(config.fov)

    def get_view_matrix(self) -> Mat4:
        if self._view is None:
            self._view = mat4_look_at(self._position, self._target, _UP)
        return self._view

    def get_projection_matrix(self) -> Mat4:
        if self._proj is None:
            self._proj = mat4_perspective(deg_to_rad(self.fov), self.aspect, self.near, self.far)
        return self._proj
