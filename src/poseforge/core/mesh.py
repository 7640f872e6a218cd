"""CPU-side mesh data (no GL dependencies)."""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from poseforge.core.material import Material
from poseforge.core.math_utils import Mat4, mat3_normal, transform_points


@dataclass
class BufferGeometry:
    """Flat float32 position and normal arrays, three floats per vertex,
    plus optional uint32 triangle indices."""
    positions: NDArray[np.float32]
    normals: NDArray[np.float32]
    indices: Optional[NDArray[np.uint32]] = None

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def triangle_count(self) -> int:
        if self.indices is not None:
            return len(self.indices) // 3
        return self.vertex_count // 3

    def apply_matrix(self, m: Mat4) -> "BufferGeometry":
        """Bake *m* into the vertices in place and return self.

        Used to offset or reorient proxy geometry relative to its joint origin.
        """
        pos = transform_points(m, self.positions.reshape(-1, 3))
        nrm = self.normals.reshape(-1, 3) @ mat3_normal(m).T
        nrm /= np.maximum(np.linalg.norm(nrm, axis=1, keepdims=True), 1e-10)
        self.positions = pos.astype(np.float32).ravel()
        self.normals = nrm.astype(np.float32).ravel()
        return self

    def get_bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """(min, max) corners of the axis-aligned bounding box."""
        pos = self.positions.reshape(-1, 3).astype(np.float64)
        return pos.min(axis=0), pos.max(axis=0)


@dataclass(eq=False)
class MeshInstance:
    """Geometry plus material, hung on a scene node.

    Compared by identity: the renderer keys its GPU buffers on the instance.
    """
    name: str
    geometry: BufferGeometry
    material: Material = field(default_factory=Material)
    visible: bool = True
