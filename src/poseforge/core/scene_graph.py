"""Transform hierarchy: nodes with local TRS and cached world matrices."""

from typing import Iterator, Optional

from poseforge.core.math_utils import Mat4, Quat, Vec3, mat4_compose, mat4_identity, quat_identity, vec3
from poseforge.core.mesh import MeshInstance


class SceneNode:
    """A transform with optional mesh and any number of children.

    ``world_matrix = parent.world_matrix @ local_matrix``. The local matrix
    is rebuilt only after ``set_position`` / ``set_quaternion``; world
    matrices are refreshed top-down by :meth:`update_world_matrix`.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.parent: Optional["SceneNode"] = None
        self.children: list["SceneNode"] = []
        self.mesh: Optional[MeshInstance] = None
        self.visible = True

        self.position: Vec3 = vec3()
        self.quaternion: Quat = quat_identity()
        self.scale: Vec3 = vec3(1.0, 1.0, 1.0)
        self.local_matrix: Mat4 = mat4_identity()
        self.world_matrix: Mat4 = mat4_identity()
        self._local_stale = True

    def add(self, child: "SceneNode") -> "SceneNode":
        """Adopt *child*, detaching it from any previous parent."""
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return self

    def remove(self, child: "SceneNode") -> "SceneNode":
        if child.parent is self:
            self.children.remove(child)
            child.parent = None
        return self

    def set_position(self, x: float, y: float, z: float) -> "SceneNode":
        self.position = vec3(x, y, z)
        self._local_stale = True
        return self

    def set_quaternion(self, q: Quat) -> "SceneNode":
        self.quaternion = q.copy()
        self._local_stale = True
        return self

    def update_world_matrix(self, force: bool = False) -> None:
        """Refresh this node's world matrix and every descendant's."""
        if self._local_stale or force:
            self.local_matrix = mat4_compose(self.position, self.quaternion, self.scale)
            self._local_stale = False
        if self.parent is None:
            self.world_matrix = self.local_matrix.copy()
        else:
            self.world_matrix = self.parent.world_matrix @ self.local_matrix
        for child in self.children:
            child.update_world_matrix(force)

    def walk(self, visible_only: bool = False) -> Iterator["SceneNode"]:
        """Depth-first pre-order; hidden nodes prune their subtree when
        *visible_only* is set."""
        if visible_only and not self.visible:
            return
        yield self
        for child in self.children:
            yield from child.walk(visible_only)

    def find(self, name: str) -> Optional["SceneNode"]:
        return next((node for node in self.walk() if node.name == name), None)

    def get_world_position(self) -> Vec3:
        return self.world_matrix[:3, 3].copy()


class Scene(SceneNode):
    def __init__(self):
        super().__init__(name="scene")

    def update(self) -> None:
        self.update_world_matrix()

    def collect_meshes(self) -> list[tuple[MeshInstance, Mat4]]:
        """Visible meshes with their world matrices, in draw order."""
        return [
            (node.mesh, node.world_matrix)
            for node in self.walk(visible_only=True)
            if node.mesh is not None and node.mesh.visible
        ]
