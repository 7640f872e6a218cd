"""Tests for the static joint table and its validation."""

import pytest

from poseforge.body.joint_table import (
    JOINT_NAMES, JOINT_TABLE, JointDescriptor, validate_joint_table,
)
from poseforge.core.errors import JointTableError


def test_table_has_22_joints_rooted_at_pelvis():
    assert len(JOINT_TABLE) == 22
    assert JOINT_TABLE[0].name == "Pelvis"
    assert JOINT_TABLE[0].parent_index == -1


def test_parents_precede_children():
    for i, joint in enumerate(JOINT_TABLE[1:], start=1):
        assert 0 <= joint.parent_index < i


def test_names_unique():
    assert len(set(JOINT_NAMES)) == len(JOINT_NAMES)


def test_builtin_table_validates():
    validate_joint_table(JOINT_TABLE)


@pytest.mark.parametrize("table", [
    (),
    (JointDescriptor("A", 0, (0, 0, 0)),),
    (JointDescriptor("A", -1, (0, 0, 0)), JointDescriptor("A", 0, (0, 0, 0))),
    (JointDescriptor("A", -1, (0, 0, 0)), JointDescriptor("B", 1, (0, 0, 0))),
    (JointDescriptor("A", -1, (0, 0, 0)), JointDescriptor("B", 5, (0, 0, 0))),
    (JointDescriptor("A", -1, (0, 0)),),
    (JointDescriptor("", -1, (0, 0, 0)),),
])
def test_malformed_tables_rejected(table):
    with pytest.raises(JointTableError):
        validate_joint_table(table)
