"""Viewport lighting: ambient fill, one key light, two coloured point lights."""

from dataclasses import dataclass

import numpy as np

from poseforge.core.material import RGB
from poseforge.core.math_utils import Mat4, normalize, transform_points
from poseforge.rendering.shader_program import ShaderProgram

# Array size of the point-light uniforms in phong.frag
MAX_POINT_LIGHTS = 2


@dataclass(frozen=True)
class PointLight:
    """World-space light whose contribution falls linearly to zero at ``range``."""
    position: tuple[float, float, float]
    color: RGB
    intensity: float
    range: float


class LightSetup:
    def __init__(self) -> None:
        self.ambient_color: RGB = (0.4, 0.4, 0.4)
        # Points toward the light
        self.key_direction = normalize((5.0, 15.0, 10.0))
        self.key_color: RGB = (1.2, 1.2, 1.2)
        self.point_lights: list[PointLight] = [
            PointLight((-5.0, 5.0, -5.0), (0.0, 0.8, 1.0), 1.5, 20.0),   # cyan rim
            PointLight((5.0, 2.0, 0.0), (1.0, 0.0, 1.0), 1.0, 15.0),     # magenta accent
        ]

    def apply(self, shader: ShaderProgram, view: Mat4) -> None:
        """Upload everything in view space. ``shader`` must be in use."""
        shader.set_uniform_vec3("uAmbientColor", self.ambient_color)
        shader.set_uniform_vec3("uLightDir", view[:3, :3] @ self.key_direction)
        shader.set_uniform_vec3("uLightColor", self.key_color)

        lights = self.point_lights[:MAX_POINT_LIGHTS]
        shader.set_uniform_int("uPointLightCount", len(lights))
        if not lights:
            return
        view_positions = transform_points(view, np.array([pl.position for pl in lights]))
        for i, (pl, pos) in enumerate(zip(lights, view_positions)):
            shader.set_uniform_vec3(f"uPointLightPos[{i}]", pos)
            shader.set_uniform_vec3(f"uPointLightColor[{i}]", pl.color)
            shader.set_uniform_float(f"uPointLightIntensity[{i}]", pl.intensity)
            shader.set_uniform_float(f"uPointLightRange[{i}]", pl.range)
