"""Static SMPL-X body joint table: names, parent indices, rest offsets."""

from dataclasses import dataclass
from typing import Sequence

from poseforge.core.errors import JointTableError


@dataclass(frozen=True)
class JointDescriptor:
    name: str
    parent_index: int
    rest_offset: tuple[float, float, float]


# 22 body joints in SMPL-X order. Offsets are local translations from the
# parent in a T-pose; the pelvis offset places the root 1 unit above ground.
JOINT_TABLE: tuple[JointDescriptor, ...] = (
    JointDescriptor("Pelvis", -1, (0.0, 1.0, 0.0)),
    JointDescriptor("L_Hip", 0, (0.08, -0.05, 0.0)),
    JointDescriptor("R_Hip", 0, (-0.08, -0.05, 0.0)),
    JointDescriptor("Spine1", 0, (0.0, 0.1, 0.0)),
    JointDescriptor("L_Knee", 1, (0.0, -0.4, 0.0)),
    JointDescriptor("R_Knee", 2, (0.0, -0.4, 0.0)),
    JointDescriptor("Spine2", 3, (0.0, 0.12, 0.0)),
    JointDescriptor("L_Ankle", 4, (0.0, -0.4, 0.0)),
    JointDescriptor("R_Ankle", 5, (0.0, -0.4, 0.0)),
    JointDescriptor("Spine3", 6, (0.0, 0.12, 0.0)),
    JointDescriptor("L_Foot", 7, (0.0, -0.05, 0.1)),
    JointDescriptor("R_Foot", 8, (0.0, -0.05, 0.1)),
    JointDescriptor("Neck", 9, (0.0, 0.15, 0.0)),
    JointDescriptor("L_Collar", 9, (0.05, 0.12, 0.0)),
    JointDescriptor("R_Collar", 9, (-0.05, 0.12, 0.0)),
    JointDescriptor("Head", 12, (0.0, 0.1, 0.0)),
    JointDescriptor("L_Shoulder", 13, (0.12, 0.0, 0.0)),
    JointDescriptor("R_Shoulder", 14, (-0.12, 0.0, 0.0)),
    JointDescriptor("L_Elbow", 16, (0.25, 0.0, 0.0)),
    JointDescriptor("R_Elbow", 17, (-0.25, 0.0, 0.0)),
    JointDescriptor("L_Wrist", 18, (0.22, 0.0, 0.0)),
    JointDescriptor("R_Wrist", 19, (-0.22, 0.0, 0.0)),
)

JOINT_NAMES: tuple[str, ...] = tuple(j.name for j in JOINT_TABLE)


def validate_joint_table(table: Sequence[JointDescriptor]) -> None:
    """Raise :class:`JointTableError` unless *table* is a single-rooted forest
    ordered so that every parent precedes its children."""
    if len(table) == 0:
        raise JointTableError("Joint table is empty")

    seen: set[str] = set()
    for i, joint in enumerate(table):
        if not joint.name:
            raise JointTableError(f"Joint {i} has no name")
        if joint.name in seen:
            raise JointTableError(f"Duplicate joint name '{joint.name}'")
        seen.add(joint.name)

        parent = joint.parent_index
        if not isinstance(parent, int) or isinstance(parent, bool):
            raise JointTableError(f"Joint '{joint.name}' has invalid parent index {parent!r}")
        if i == 0:
            if parent != -1:
                raise JointTableError(f"Root joint '{joint.name}' must have parent -1, got {parent}")
        elif not 0 <= parent < i:
            raise JointTableError(
                f"Joint '{joint.name}' (index {i}) has parent {parent}; "
                f"parents must precede their children"
            )

        if len(joint.rest_offset) != 3:
            raise JointTableError(f"Joint '{joint.name}' rest offset must have 3 components")
