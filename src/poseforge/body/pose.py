"""Map SMPL-X pose and shape parameters onto skeleton joint transforms."""

from typing import Sequence

import numpy as np

from poseforge.body.skeleton import Skeleton
from poseforge.constants import ROTATION_EPSILON, STATURE_COEFF, WIDTH_COEFF
from poseforge.core.math_utils import Quat, quat_from_rotvec
from poseforge.core.state import PoseParameters


def rotation_from_axis_angle(rv: Sequence[float]) -> Quat:
    """Convert a rotation vector to an ``[x, y, z, w]`` quaternion.

    Vectors with magnitude at or below ``ROTATION_EPSILON`` give identity.
    """
    return quat_from_rotvec(rv, ROTATION_EPSILON)


def shaped_offset(rest_offset: np.ndarray, betas: np.ndarray) -> np.ndarray:
    """Scale a rest offset by the stature (betas[0]) and width (betas[1])
    coefficients. Depth is unscaled."""
    b0 = betas[0] if betas.size > 0 else 0.0
    b1 = betas[1] if betas.size > 1 else 0.0
    return np.array([
        rest_offset[0] * (1.0 + b1 * WIDTH_COEFF),
        rest_offset[1] * (1.0 + b0 * STATURE_COEFF),
        rest_offset[2],
    ], dtype=np.float64)


def apply_pose(skeleton: Skeleton, params: PoseParameters) -> None:
    """Write local rotations and shape-dependent offsets for every joint.

    Rotations are recomputed from scratch each call, so applying the same
    parameters twice leaves the same state as applying them once. Joints
    whose three rotation components lie past the end of ``body_pose`` are
    left untouched.
    """
    body_pose = params.as_array("body_pose")
    betas = params.as_array("betas")
    transl = params.as_array("transl")

    root = skeleton.root_index
    skeleton.positions[root] = skeleton.rest_offsets[root] + transl[:3]

    for i in range(skeleton.joint_count):
        start = i * 3
        if start + 2 >= body_pose.size:
            continue
        skeleton.quaternions[i] = rotation_from_axis_angle(body_pose[start:start + 3])
        if i != root:
            skeleton.positions[i] = shaped_offset(skeleton.rest_offsets[i], betas)
