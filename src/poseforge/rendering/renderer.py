"""Draws a :class:`Scene` with the Phong shader.

Opaque meshes go first; blended meshes follow, farthest first, with depth
writes off so the proxies stay see-through over the markers.
"""

import logging

import numpy as np
from OpenGL.GL import (
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_LESS,
    GL_MULTISAMPLE,
    glClear,
    glClearColor,
    glDepthFunc,
    glEnable,
    glViewport,
)

from poseforge.core.material import hex_color
from poseforge.core.math_utils import Mat4, mat3_normal
from poseforge.core.mesh import MeshInstance
from poseforge.core.scene_graph import Scene
from poseforge.rendering.camera import Camera
from poseforge.rendering.gl_material import apply_material, restore_material_defaults
from poseforge.rendering.gl_mesh import GLMesh
from poseforge.rendering.lights import LightSetup
from poseforge.rendering.shader_program import ShaderProgram

logger = logging.getLogger(__name__)

CLEAR_COLOR = (*hex_color(0x050505), 1.0)


def sort_for_drawing(
    items: list[tuple[MeshInstance, Mat4]], eye: np.ndarray,
) -> list[tuple[MeshInstance, Mat4]]:
    """Opaque meshes in scene order, then blended meshes back to front."""
    opaque = [item for item in items if not item[0].material.is_transparent]
    blended = [item for item in items if item[0].material.is_transparent]
    blended.sort(key=lambda item: float(np.linalg.norm(item[1][:3, 3] - eye)), reverse=True)
    return opaque + blended


class GLRenderer:
    """Owns the shader program and one :class:`GLMesh` per drawn mesh.

    All methods except construction need the widget's context current.
    Meshes are uploaded the first time they are drawn and released by
    :meth:`remove_mesh` or :meth:`destroy`.
    """

    def __init__(self) -> None:
        self._shader: ShaderProgram | None = None
        self._gl_meshes: dict[MeshInstance, GLMesh] = {}
        self._size = (1, 1)

    @property
    def initialised(self) -> bool:
        return self._shader is not None

    @property
    def uploaded_mesh_count(self) -> int:
        return len(self._gl_meshes)

    def init_gl(self) -> None:
        glClearColor(*CLEAR_COLOR)
        glEnable(GL_DEPTH_TEST)
        glDepthFunc(GL_LESS)
        glEnable(GL_MULTISAMPLE)
        shader = ShaderProgram.from_files("default.vert", "phong.frag")
        shader.compile()
        self._shader = shader
        logger.info("Renderer ready")

    def resize(self, width: int, height: int) -> None:
        self._size = (max(width, 1), max(height, 1))

    def render(self, scene: Scene, camera: Camera, lights: LightSetup) -> None:
        shader = self._shader
        if shader is None:
            return

        glViewport(0, 0, *self._size)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        scene.update()

        view = camera.get_view_matrix()
        shader.use()
        shader.set_uniform_mat4("uProjection", camera.get_projection_matrix())
        lights.apply(shader, view)

        for mesh, world in sort_for_drawing(scene.collect_meshes(), camera.position):
            model_view = view @ world
            shader.set_uniform_mat4("uModelView", model_view)
            try:
                shader.set_uniform_mat3("uNormalMatrix", mat3_normal(model_view))
            except np.linalg.LinAlgError:
                shader.set_uniform_mat3("uNormalMatrix", np.eye(3))
            apply_material(shader, mesh.material)
            self._gl_mesh_for(mesh).draw()

        restore_material_defaults()

    def _gl_mesh_for(self, mesh: MeshInstance) -> GLMesh:
        gl_mesh = self._gl_meshes.get(mesh)
        if gl_mesh is None:
            gl_mesh = GLMesh(mesh.geometry)
            gl_mesh.upload()
            self._gl_meshes[mesh] = gl_mesh
        return gl_mesh

    def remove_mesh(self, mesh: MeshInstance) -> None:
        gl_mesh = self._gl_meshes.pop(mesh, None)
        if gl_mesh is not None:
            gl_mesh.destroy()

    def destroy(self) -> None:
        """Release every GL object. Safe to call twice."""
        for gl_mesh in self._gl_meshes.values():
            gl_mesh.destroy()
        self._gl_meshes.clear()
        if self._shader is not None:
            self._shader.destroy()
            self._shader = None
            logger.info("Renderer destroyed")
