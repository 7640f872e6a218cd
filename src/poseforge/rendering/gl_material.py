"""Upload :class:`Material` uniforms and set blend/cull state for a draw."""

from OpenGL.GL import (
    GL_BACK,
    GL_BLEND,
    GL_CULL_FACE,
    GL_ONE_MINUS_SRC_ALPHA,
    GL_SRC_ALPHA,
    glBlendFunc,
    glCullFace,
    glDepthMask,
    glDisable,
    glEnable,
)

from poseforge.core.material import Material
from poseforge.rendering.shader_program import ShaderProgram


def apply_material(shader: ShaderProgram, material: Material) -> None:
    """Call between ``shader.use()`` and the draw call."""
    shader.set_uniform_vec3("uColor", material.color)
    shader.set_uniform_float("uOpacity", material.opacity)
    shader.set_uniform_float("uShininess", material.shininess)
    shader.set_uniform_vec3("uEmissive", material.emissive)
    shader.set_uniform_float("uEmissiveIntensity", material.emissive_intensity)

    blended = material.is_transparent
    (glEnable if blended else glDisable)(GL_BLEND)
    if blended:
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
    glDepthMask(not blended)

    (glDisable if material.double_sided else glEnable)(GL_CULL_FACE)
    glCullFace(GL_BACK)


def restore_material_defaults() -> None:
    glDisable(GL_BLEND)
    glDepthMask(True)
    glEnable(GL_CULL_FACE)
