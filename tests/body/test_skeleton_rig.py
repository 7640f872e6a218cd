"""Tests for the scene-graph skeleton rig."""

import math

import numpy as np

from poseforge.body.skeleton import build_skeleton
from poseforge.body.skeleton_rig import SkeletonRig
from poseforge.core.scene_graph import Scene
from poseforge.core.state import PoseParameters


def _rig():
    return SkeletonRig(build_skeleton())


def test_joint_nodes_follow_parent_indices():
    rig = _rig()
    parents = rig.skeleton.parents
    for i, node in enumerate(rig.joint_nodes):
        assert node.name == rig.skeleton.names[i]
        if parents[i] >= 0:
            assert node.parent is rig.joint_nodes[parents[i]]
    assert rig.root.parent is None


def test_marker_and_proxy_counts():
    rig = _rig()
    names = [m.name for m in rig.meshes()]
    assert sum(n.endswith("_marker") for n in names) == 22
    assert sum(n.endswith("_proxy") for n in names) == 19
    assert rig.joint_nodes[0].find("Pelvis_proxy") is not None
    assert rig.joint_nodes[rig.skeleton.index_of("Neck")].find("Neck_proxy") is None


def test_attach_and_world_positions_match_arena():
    rig = _rig()
    scene = Scene()
    rig.attach(scene)
    rig.attach(scene)
    assert rig.attached
    assert scene.children.count(rig.root) == 1
    scene.update()
    world = np.array([n.get_world_position() for n in rig.joint_nodes])
    np.testing.assert_array_almost_equal(world, rig.skeleton.world_positions())


def test_apply_commits_pose():
    rig = _rig()
    body_pose = [0.0] * 66
    body_pose[0:3] = [0.0, math.pi / 2, 0.0]
    assert rig.apply(PoseParameters.default().merge({"body_pose": body_pose}))
    np.testing.assert_array_almost_equal(
        rig.root.quaternion, [0, math.sin(math.pi / 4), 0, math.cos(math.pi / 4)]
    )
    np.testing.assert_array_almost_equal(
        rig.skeleton.quaternions[1:], np.tile([0.0, 0.0, 0.0, 1.0], (21, 1))
    )


def test_failed_apply_keeps_previous_pose():
    rig = _rig()
    rig.apply(PoseParameters.default().merge({"body_pose": [0.2] * 66}))
    positions = rig.skeleton.positions.copy()
    quats = rig.skeleton.quaternions.copy()
    assert not rig.apply(object())
    np.testing.assert_array_equal(rig.skeleton.positions, positions)
    np.testing.assert_array_equal(rig.skeleton.quaternions, quats)


def test_detach_releases_every_mesh():
    rig = _rig()
    scene = Scene()
    rig.attach(scene)
    released = []
    rig.detach(release=released.append)
    assert not rig.attached
    assert rig.root not in scene.children
    assert len(released) == len(rig.meshes())
    assert all(a is b for a, b in zip(released, rig.meshes()))
