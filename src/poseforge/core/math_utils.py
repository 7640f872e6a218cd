"""Small linear-algebra helpers on top of numpy.

Points and directions are float64 arrays of shape (3,). Quaternions are
``[x, y, z, w]``. Matrices are row-major 4x4 arrays that act on column
vectors; :class:`~poseforge.rendering.shader_program.ShaderProgram`
transposes them on upload.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

Vec3 = NDArray[np.float64]
Mat3 = NDArray[np.float64]
Mat4 = NDArray[np.float64]
Quat = NDArray[np.float64]


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vec3:
    return np.array((x, y, z), dtype=np.float64)


def normalize(v: ArrayLike) -> Vec3:
    """Unit vector along *v*; the zero vector maps to itself."""
    v = np.asarray(v, dtype=np.float64)
    length = np.linalg.norm(v)
    return v / length if length >= 1e-10 else np.zeros_like(v)


def clamp(value: float, lo: float, hi: float) -> float:
    return lo if value < lo else hi if value > hi else value


def deg_to_rad(degrees: float) -> float:
    return float(np.radians(degrees))


# ── Quaternions ──

def quat_identity() -> Quat:
    return np.array((0.0, 0.0, 0.0, 1.0))


def quat_from_axis_angle(axis: ArrayLike, angle: float) -> Quat:
    half = 0.5 * angle
    return np.append(normalize(axis) * np.sin(half), np.cos(half))


def quat_from_rotvec(rotvec: ArrayLike, epsilon: float = 0.0) -> Quat:
    """Quaternion for a rotation vector (axis scaled by angle in radians).

    Vectors no longer than *epsilon* give the identity.
    """
    rv = np.asarray(rotvec, dtype=np.float64)
    angle = float(np.linalg.norm(rv))
    if angle <= epsilon or angle == 0.0:
        return quat_identity()
    return quat_from_axis_angle(rv / angle, angle)


# ── Matrices ──

def mat4_identity() -> Mat4:
    return np.eye(4)


def mat4_translation(x: float, y: float, z: float) -> Mat4:
    m = np.eye(4)
    m[:3, 3] = (x, y, z)
    return m


def mat4_rotation_z(angle_rad: float) -> Mat4:
    return mat4_from_quaternion(quat_from_axis_angle((0.0, 0.0, 1.0), angle_rad))


def mat4_from_quaternion(q: Quat) -> Mat4:
    """Rotation matrix of a unit quaternion."""
    x, y, z, w = q
    v = np.array((x, y, z))
    # R = (w^2 - |v|^2) I + 2 v v^T + 2 w [v]x
    cross = np.array((
        (0.0, -z, y),
        (z, 0.0, -x),
        (-y, x, 0.0),
    ))
    m = np.eye(4)
    m[:3, :3] = (w * w - v @ v) * np.eye(3) + 2.0 * np.outer(v, v) + 2.0 * w * cross
    return m


def mat4_compose(position: ArrayLike, quaternion: Quat, scale: ArrayLike) -> Mat4:
    """Translation @ rotation @ scale."""
    m = mat4_from_quaternion(quaternion)
    m[:3, :3] *= np.asarray(scale, dtype=np.float64)
    m[:3, 3] = position
    return m


def mat4_perspective(fov_rad: float, aspect: float, near: float, far: float) -> Mat4:
    """OpenGL-style projection with clip-space depth in [-1, 1]."""
    f = 1.0 / np.tan(0.5 * fov_rad)
    depth = near - far
    return np.array((
        (f / aspect, 0.0, 0.0, 0.0),
        (0.0, f, 0.0, 0.0),
        (0.0, 0.0, (far + near) / depth, 2.0 * far * near / depth),
        (0.0, 0.0, -1.0, 0.0),
    ))


def mat4_look_at(eye: Vec3, target: Vec3, up: Vec3) -> Mat4:
    """View matrix for a camera at *eye* looking at *target*."""
    forward = normalize(np.subtract(target, eye))
    right = normalize(np.cross(forward, up))
    if not right.any():
        # Looking straight along *up*
        right = normalize(np.cross(forward, (0.0, 0.0, -1.0)))
    true_up = np.cross(right, forward)
    m = np.eye(4)
    m[0, :3], m[1, :3], m[2, :3] = right, true_up, -forward
    m[:3, 3] = -m[:3, :3] @ eye
    return m


def mat3_normal(m: Mat4) -> Mat3:
    """Inverse transpose of the upper 3x3, for transforming normals."""
    return np.linalg.inv(m[:3, :3]).T


def transform_points(m: Mat4, points: ArrayLike) -> NDArray[np.float64]:
    """Apply *m* to an (N, 3) array of points, or to a single point."""
    pts = np.asarray(points, dtype=np.float64)
    return pts @ m[:3, :3].T + m[:3, 3]
