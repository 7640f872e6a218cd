"""Tests for applying pose and shape parameters to the skeleton."""

import math

import numpy as np
from scipy.spatial.transform import Rotation

from poseforge.body.joint_table import JOINT_TABLE, JointDescriptor
from poseforge.body.pose import apply_pose, rotation_from_axis_angle, shaped_offset
from poseforge.body.skeleton import build_skeleton
from poseforge.core.state import PoseParameters


def _assert_same_rotation(q, expected):
    # q and -q encode the same rotation
    if np.dot(q, expected) < 0:
        expected = -np.asarray(expected)
    np.testing.assert_array_almost_equal(q, expected)


def test_zero_vector_is_identity():
    np.testing.assert_array_equal(rotation_from_axis_angle([0, 0, 0]), [0, 0, 0, 1])


def test_tiny_vector_snaps_to_identity():
    np.testing.assert_array_equal(rotation_from_axis_angle([5e-5, 0, 5e-5]), [0, 0, 0, 1])


def test_matches_scipy_rotvec():
    for rv in ([0.001, 0, 0], [0, math.pi / 2, 0], [math.pi, 0, 0], [0.3, -0.2, 0.5]):
        expected = Rotation.from_rotvec(rv).as_quat()
        _assert_same_rotation(rotation_from_axis_angle(rv), expected)


def test_shaped_offset_coefficients():
    offset = shaped_offset(np.array([0.1, -0.4, 0.2]), np.array([1.0, 2.0]))
    np.testing.assert_array_almost_equal(offset, [0.1 * 1.2, -0.4 * 1.05, 0.2])


def test_default_params_give_rest_pose():
    sk = build_skeleton()
    apply_pose(sk, PoseParameters.default())
    np.testing.assert_array_almost_equal(sk.positions, sk.rest_offsets)
    np.testing.assert_array_almost_equal(sk.quaternions[:, 3], np.ones(22))


def test_apply_is_idempotent():
    params = PoseParameters.default().merge({
        "body_pose": np.linspace(-0.5, 0.5, 66).tolist(),
        "betas": [0.5, -0.5],
    })
    sk = build_skeleton()
    apply_pose(sk, params)
    once = (sk.positions.copy(), sk.quaternions.copy())
    apply_pose(sk, params)
    np.testing.assert_array_almost_equal(sk.positions, once[0])
    np.testing.assert_array_almost_equal(sk.quaternions, once[1])


def test_shoulder_quarter_turn_moves_elbow():
    sk = build_skeleton()
    shoulder = sk.index_of("L_Shoulder")
    elbow = sk.index_of("L_Elbow")
    body_pose = [0.0] * 66
    body_pose[shoulder * 3:shoulder * 3 + 3] = [0.0, math.pi / 2, 0.0]
    apply_pose(sk, PoseParameters.default().merge({"body_pose": body_pose}))

    world = sk.world_positions()
    np.testing.assert_array_almost_equal(world[shoulder], [0.17, 1.46, 0.0])
    np.testing.assert_array_almost_equal(world[elbow] - world[shoulder], [0.0, 0.0, -0.25])


def test_root_translation_and_shape():
    sk = build_skeleton()
    params = PoseParameters.default().merge({"betas": [1.0, 1.0], "transl": [0.5, 0.0, -1.0]})
    apply_pose(sk, params)
    np.testing.assert_array_almost_equal(sk.positions[0], [0.5, 1.0, -1.0])
    knee = sk.index_of("L_Knee")
    np.testing.assert_array_almost_equal(sk.positions[knee], [0.0, -0.4 * 1.05, 0.0])
    hip = sk.index_of("L_Hip")
    np.testing.assert_array_almost_equal(sk.positions[hip], [0.08 * 1.1, -0.05 * 1.05, 0.0])


def test_joints_past_body_pose_are_untouched():
    table = JOINT_TABLE + (JointDescriptor("L_Index1", 20, (0.05, 0.0, 0.0)),)
    sk = build_skeleton(table)
    extra = sk.index_of("L_Index1")
    sk.positions[extra] = [0.3, 0.2, 0.1]
    sk.quaternions[extra] = [0.0, 0.0, math.sin(0.5), math.cos(0.5)]
    position = sk.positions[extra].copy()
    quat = sk.quaternions[extra].copy()

    apply_pose(sk, PoseParameters.default().merge({"body_pose": [0.4] * 66, "betas": [2.0]}))

    np.testing.assert_array_equal(sk.positions[extra], position)
    np.testing.assert_array_equal(sk.quaternions[extra], quat)
    assert not np.allclose(sk.quaternions[extra - 1], [0.0, 0.0, 0.0, 1.0])
