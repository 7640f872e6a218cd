"""Application state: SMPL-X parameters, camera config, and the state owner."""

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

import numpy as np

from poseforge.constants import (
    BODY_POSE_SIZE, HAND_POSE_SIZE, NUM_BETAS, NUM_EXPRESSION,
    DEFAULT_CAMERA_POS, DEFAULT_CAMERA_TARGET, DEFAULT_FOV, FOV_MIN, FOV_MAX,
)
from poseforge.core.errors import ParameterFileError
from poseforge.core.events import EventBus, EventType


# Fixed length of every array field, in declaration order
PARAM_SIZES: dict[str, int] = {
    "betas": NUM_BETAS,
    "body_pose": BODY_POSE_SIZE,
    "jaw_pose": 3,
    "leye_pose": 3,
    "reye_pose": 3,
    "left_hand_pose": HAND_POSE_SIZE,
    "right_hand_pose": HAND_POSE_SIZE,
    "expression": NUM_EXPRESSION,
    "transl": 3,
}

_AXES = ("x", "y", "z")


def _zeros(n: int) -> tuple[float, ...]:
    return (0.0,) * n


def coerce_array(name: str, value: Any, size: int) -> tuple[float, ...]:
    """Flatten *value* to a tuple of exactly *size* floats.

    Short inputs are zero-padded and long inputs truncated. ``transl``
    additionally accepts a ``{"x", "y", "z"}`` mapping.
    """
    if isinstance(value, Mapping):
        if name != "transl":
            raise ParameterFileError(f"'{name}' must be a list of numbers, got an object")
        value = [value.get(axis, 0.0) for axis in _AXES]
    if isinstance(value, (str, bytes)):
        raise ParameterFileError(f"'{name}' must be a list of numbers, got a string")
    try:
        arr = np.asarray(value, dtype=np.float64).ravel()
    except (TypeError, ValueError) as e:
        raise ParameterFileError(f"'{name}' must contain only numbers: {e}") from e
    if not np.all(np.isfinite(arr)):
        raise ParameterFileError(f"'{name}' contains NaN or infinite values")
    out = np.zeros(size, dtype=np.float64)
    n = min(size, arr.size)
    out[:n] = arr[:n]
    return tuple(float(v) for v in out)


@dataclass(frozen=True)
class PoseParameters:
    """Full SMPL-X parameter set. Immutable: every edit produces a new value."""
    betas: tuple[float, ...] = _zeros(NUM_BETAS)
    body_pose: tuple[float, ...] = _zeros(BODY_POSE_SIZE)
    jaw_pose: tuple[float, ...] = _zeros(3)
    leye_pose: tuple[float, ...] = _zeros(3)
    reye_pose: tuple[float, ...] = _zeros(3)
    left_hand_pose: tuple[float, ...] = _zeros(HAND_POSE_SIZE)
    right_hand_pose: tuple[float, ...] = _zeros(HAND_POSE_SIZE)
    expression: tuple[float, ...] = _zeros(NUM_EXPRESSION)
    transl: tuple[float, ...] = _zeros(3)

    @classmethod
    def default(cls) -> "PoseParameters":
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PoseParameters":
        """Build a full parameter set; absent fields are zero."""
        return cls().merge(data)

    def merge(self, partial: Mapping[str, Any]) -> "PoseParameters":
        """Return a copy with the fields present in *partial* replaced.

        Unknown keys and ``None`` values are ignored.
        """
        if not isinstance(partial, Mapping):
            raise ParameterFileError(
                f"Parameters must be a JSON object, got {type(partial).__name__}"
            )
        updates = {}
        for name, size in PARAM_SIZES.items():
            value = partial.get(name)
            if value is None:
                continue
            updates[name] = coerce_array(name, value, size)
        if not updates:
            return self
        return replace(self, **updates)

    def replace_value(self, name: str, index: int, value: float) -> "PoseParameters":
        """Return a copy with a single component of an array field changed."""
        if name not in PARAM_SIZES:
            raise KeyError(name)
        current = list(getattr(self, name))
        current[index] = float(value)
        return replace(self, **{name: tuple(current)})

    def as_array(self, name: str) -> np.ndarray:
        return np.asarray(getattr(self, name), dtype=np.float64)

    def to_dict(self) -> dict[str, Any]:
        """JSON-serialisable form (``transl`` as an x/y/z object)."""
        d: dict[str, Any] = {f.name: list(getattr(self, f.name)) for f in fields(self)}
        d["transl"] = dict(zip(_AXES, self.transl))
        return d


@dataclass(frozen=True)
class CameraConfig:
    """Camera placement. ``fov`` is clamped to a renderable range."""
    position: tuple[float, float, float] = DEFAULT_CAMERA_POS
    target: tuple[float, float, float] = DEFAULT_CAMERA_TARGET
    fov: float = DEFAULT_FOV

    def __post_init__(self):
        object.__setattr__(self, "fov", max(FOV_MIN, min(FOV_MAX, float(self.fov))))

    def with_fov(self, fov: float) -> "CameraConfig":
        return replace(self, fov=fov)

    def with_position_axis(self, axis: int, value: float) -> "CameraConfig":
        pos = list(self.position)
        pos[axis] = float(value)
        return replace(self, position=tuple(pos))


class StateManager:
    """Single owner of the authoritative parameter and camera state.

    Every mutation replaces the held value wholesale and publishes the new
    snapshot, so subscribers never observe a partially-updated value.
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._bus = event_bus
        self._params = PoseParameters.default()
        self._camera = CameraConfig()

        # UI flags
        self.ai_busy: bool = False

        # Frame stats
        self.frame_count: int = 0
        self.fps: float = 0.0

    @property
    def params(self) -> PoseParameters:
        return self._params

    @property
    def camera(self) -> CameraConfig:
        return self._camera

    def set_params(self, params: PoseParameters) -> None:
        self._params = params
        if self._bus is not None:
            self._bus.publish(EventType.PARAMS_CHANGED, params=params)

    def merge_params(self, partial: Mapping[str, Any]) -> PoseParameters:
        """Merge a partial parameter dict into the current state.

        Raises :class:`ParameterFileError` before any state change if the
        partial set is unusable.
        """
        merged = self._params.merge(partial)
        self.set_params(merged)
        return merged

    def set_camera(self, camera: CameraConfig) -> None:
        self._camera = camera
        if self._bus is not None:
            self._bus.publish(EventType.CAMERA_CHANGED, camera=camera)

    def reset(self) -> None:
        self.set_params(PoseParameters.default())
