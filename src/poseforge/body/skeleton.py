"""Owned skeleton arena: flat per-joint arrays indexed by joint table order."""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from poseforge.body.joint_table import JOINT_TABLE, JointDescriptor, validate_joint_table
from poseforge.core.math_utils import Mat4, mat4_compose


@dataclass
class Skeleton:
    """Joint hierarchy plus the current local transform of every joint.

    ``positions`` and ``quaternions`` are local (relative to the parent);
    quaternions are ``[x, y, z, w]``. Arrays are mutated in place by
    :func:`poseforge.body.pose.apply_pose` and never reallocated.
    """
    names: tuple[str, ...]
    parents: NDArray[np.int64]
    rest_offsets: NDArray[np.float64]   # (N, 3)
    positions: NDArray[np.float64]      # (N, 3)
    quaternions: NDArray[np.float64]    # (N, 4)

    @property
    def joint_count(self) -> int:
        return len(self.names)

    @property
    def root_index(self) -> int:
        return 0

    def index_of(self, name: str) -> int:
        return self.names.index(name)

    def children_of(self, index: int) -> list[int]:
        return [i for i, p in enumerate(self.parents) if p == index]

    def copy(self) -> "Skeleton":
        return Skeleton(
            names=self.names,
            parents=self.parents.copy(),
            rest_offsets=self.rest_offsets.copy(),
            positions=self.positions.copy(),
            quaternions=self.quaternions.copy(),
        )

    def assign_from(self, other: "Skeleton") -> None:
        """Copy *other*'s transforms into this arena's existing buffers."""
        self.positions[...] = other.positions
        self.quaternions[...] = other.quaternions

    def local_matrix(self, index: int) -> Mat4:
        return mat4_compose(self.positions[index], self.quaternions[index], np.ones(3))

    def world_matrices(self) -> NDArray[np.float64]:
        """Forward kinematics in a single pass over the table order."""
        n = self.joint_count
        world = np.empty((n, 4, 4), dtype=np.float64)
        for i in range(n):
            local = self.local_matrix(i)
            parent = self.parents[i]
            world[i] = local if parent < 0 else world[parent] @ local
        return world

    def world_positions(self) -> NDArray[np.float64]:
        return self.world_matrices()[:, :3, 3].copy()


def build_skeleton(table: Sequence[JointDescriptor] = JOINT_TABLE) -> Skeleton:
    """Validate *table* and build a skeleton in its rest pose.

    Raises :class:`~poseforge.core.errors.JointTableError` for a malformed
    table.
    """
    validate_joint_table(table)
    n = len(table)
    rest = np.array([j.rest_offset for j in table], dtype=np.float64).reshape(n, 3)
    quats = np.zeros((n, 4), dtype=np.float64)
    quats[:, 3] = 1.0
    return Skeleton(
        names=tuple(j.name for j in table),
        parents=np.array([j.parent_index for j in table], dtype=np.int64),
        rest_offsets=rest,
        positions=rest.copy(),
        quaternions=quats,
    )
