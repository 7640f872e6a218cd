"""Bind the skeleton arena to scene-graph nodes with marker and proxy meshes."""

import logging
from typing import Callable, Optional

from poseforge.body.pose import apply_pose
from poseforge.body.proxies import (
    make_bone_material, make_marker_geometry, make_marker_material,
    make_proxy_geometry, select_proxy,
)
from poseforge.body.skeleton import Skeleton
from poseforge.core.mesh import MeshInstance
from poseforge.core.scene_graph import SceneNode
from poseforge.core.state import PoseParameters

logger = logging.getLogger(__name__)


class SkeletonRig:
    """Scene-graph view of a :class:`Skeleton`.

    One joint node per table entry, parented by ``parent_index``. Each joint
    node carries a marker child and, where :func:`select_proxy` picks one,
    a proxy child. Proxy nodes are children of the joint so they inherit its
    rotation without extra bookkeeping.
    """

    def __init__(self, skeleton: Skeleton):
        self.skeleton = skeleton
        self.joint_nodes: list[SceneNode] = []
        self._meshes: list[MeshInstance] = []
        self._parent: Optional[SceneNode] = None
        self._build()

    def _build(self) -> None:
        bone_mat = make_bone_material()
        marker_mat = make_marker_material()
        sk = self.skeleton

        for i, name in enumerate(sk.names):
            node = SceneNode(name=name)

            marker = SceneNode(name=f"{name}_marker")
            marker.mesh = MeshInstance(f"{name}_marker", make_marker_geometry(), marker_mat)
            node.add(marker)
            self._meshes.append(marker.mesh)

            kind = select_proxy(name)
            if kind is not None:
                proxy = SceneNode(name=f"{name}_proxy")
                proxy.mesh = MeshInstance(f"{name}_proxy", make_proxy_geometry(kind, name), bone_mat)
                node.add(proxy)
                self._meshes.append(proxy.mesh)

            parent = int(sk.parents[i])
            if parent >= 0:
                self.joint_nodes[parent].add(node)
            self.joint_nodes.append(node)

        self.sync()
        logger.info("Skeleton rig built: %d joints, %d meshes",
                    len(self.joint_nodes), len(self._meshes))

    @property
    def root(self) -> SceneNode:
        return self.joint_nodes[self.skeleton.root_index]

    @property
    def attached(self) -> bool:
        return self._parent is not None

    def attach(self, parent: SceneNode) -> None:
        """Hang the root joint under *parent* (normally the scene)."""
        if self._parent is parent:
            return
        parent.add(self.root)
        self._parent = parent

    def detach(self, release: Optional[Callable[[MeshInstance], None]] = None) -> None:
        """Remove the rig from its parent.

        *release* is called once per mesh so the renderer can free the GPU
        buffers it uploaded for it.
        """
        if self._parent is not None:
            self._parent.remove(self.root)
            self._parent = None
        if release is not None:
            for mesh in self._meshes:
                release(mesh)
        logger.info("Skeleton rig detached")

    def meshes(self) -> list[MeshInstance]:
        return list(self._meshes)

    def sync(self) -> None:
        """Copy arena transforms into the joint nodes."""
        sk = self.skeleton
        for i, node in enumerate(self.joint_nodes):
            px, py, pz = sk.positions[i]
            node.set_position(px, py, pz)
            node.set_quaternion(sk.quaternions[i])

    def apply(self, params: PoseParameters) -> bool:
        """Pose the skeleton from *params* and update the nodes.

        The pose is computed on a scratch copy and committed only if the
        whole computation succeeds. Returns False (and keeps the previous
        pose) on failure.
        """
        scratch = self.skeleton.copy()
        try:
            apply_pose(scratch, params)
        except Exception:
            logger.exception("Failed to apply pose; keeping previous state")
            return False
        self.skeleton.assign_from(scratch)
        self.sync()
        return True
