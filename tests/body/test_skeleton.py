"""Tests for the skeleton arena."""

import numpy as np
import pytest

from poseforge.body.joint_table import JointDescriptor
from poseforge.body.skeleton import build_skeleton
from poseforge.core.errors import JointTableError


def test_build_rest_pose():
    sk = build_skeleton()
    assert sk.joint_count == 22
    np.testing.assert_array_equal(sk.positions, sk.rest_offsets)
    np.testing.assert_array_equal(sk.quaternions[:, 3], np.ones(22))
    np.testing.assert_array_equal(sk.quaternions[:, :3], np.zeros((22, 3)))


def test_rest_world_positions_accumulate_offsets():
    sk = build_skeleton()
    world = sk.world_positions()
    np.testing.assert_array_almost_equal(world[sk.index_of("Pelvis")], [0, 1, 0])
    np.testing.assert_array_almost_equal(world[sk.index_of("L_Knee")], [0.08, 0.55, 0])
    np.testing.assert_array_almost_equal(world[sk.index_of("L_Shoulder")], [0.17, 1.46, 0])


def test_children_of():
    sk = build_skeleton()
    children = {sk.names[i] for i in sk.children_of(sk.index_of("Spine3"))}
    assert children == {"Neck", "L_Collar", "R_Collar"}


def test_copy_is_independent_and_assign_keeps_buffers():
    sk = build_skeleton()
    scratch = sk.copy()
    scratch.positions[3] = [9, 9, 9]
    assert not np.allclose(sk.positions[3], [9, 9, 9])

    buf = sk.positions
    sk.assign_from(scratch)
    assert sk.positions is buf
    np.testing.assert_array_equal(sk.positions[3], [9, 9, 9])


def test_build_rejects_bad_table():
    with pytest.raises(JointTableError):
        build_skeleton([JointDescriptor("A", -1, (0, 0, 0)), JointDescriptor("B", 3, (0, 0, 0))])
