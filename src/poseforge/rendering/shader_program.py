"""GLSL program wrapper: build from the packaged shader files, set uniforms."""

import logging

import numpy as np
from OpenGL.GL import (
    GL_COMPILE_STATUS,
    GL_FRAGMENT_SHADER,
    GL_LINK_STATUS,
    GL_VERTEX_SHADER,
    glAttachShader,
    glCompileShader,
    glCreateProgram,
    glCreateShader,
    glDeleteProgram,
    glDeleteShader,
    glGetProgramInfoLog,
    glGetProgramiv,
    glGetShaderInfoLog,
    glGetShaderiv,
    glGetUniformLocation,
    glLinkProgram,
    glShaderSource,
    glUniform1f,
    glUniform1i,
    glUniform3f,
    glUniformMatrix3fv,
    glUniformMatrix4fv,
    glUseProgram,
)

from poseforge.constants import SHADER_DIR

logger = logging.getLogger(__name__)

_STAGE_NAMES = {GL_VERTEX_SHADER: "vertex", GL_FRAGMENT_SHADER: "fragment"}


def load_shader_source(filename: str) -> str:
    return (SHADER_DIR / filename).read_text(encoding="utf-8")


def _text(log) -> str:
    return log.decode("utf-8", errors="replace") if isinstance(log, bytes) else str(log)


def _compile_stage(stage: int, source: str) -> int:
    shader = glCreateShader(stage)
    glShaderSource(shader, source)
    glCompileShader(shader)
    if glGetShaderiv(shader, GL_COMPILE_STATUS) != 1:
        log = _text(glGetShaderInfoLog(shader))
        glDeleteShader(shader)
        raise RuntimeError(f"{_STAGE_NAMES[stage]} shader failed to compile:\n{log}")
    return shader


class ShaderProgram:
    """Vertex + fragment program.

    Uniform locations are looked up once per name. Names the driver
    optimised away resolve to -1 and their setters do nothing.
    """

    def __init__(self, vertex_source: str, fragment_source: str) -> None:
        self._sources = {GL_VERTEX_SHADER: vertex_source, GL_FRAGMENT_SHADER: fragment_source}
        self.program_id = 0
        self._locations: dict[str, int] = {}

    @classmethod
    def from_files(cls, vertex_file: str, fragment_file: str) -> "ShaderProgram":
        return cls(load_shader_source(vertex_file), load_shader_source(fragment_file))

    def compile(self) -> None:
        """Compile and link. Raises ``RuntimeError`` with the driver log on failure."""
        stages = [_compile_stage(stage, src) for stage, src in self._sources.items()]
        program = glCreateProgram()
        for shader in stages:
            glAttachShader(program, shader)
        glLinkProgram(program)
        for shader in stages:
            glDeleteShader(shader)

        if glGetProgramiv(program, GL_LINK_STATUS) != 1:
            log = _text(glGetProgramInfoLog(program))
            glDeleteProgram(program)
            raise RuntimeError(f"Shader program failed to link:\n{log}")

        self.program_id = program
        self._locations.clear()
        logger.debug("Linked shader program %d", program)

    def use(self) -> None:
        glUseProgram(self.program_id)

    def get_uniform_location(self, name: str) -> int:
        loc = self._locations.get(name)
        if loc is None:
            loc = glGetUniformLocation(self.program_id, name)
            self._locations[name] = loc
            if loc < 0:
                logger.debug("Uniform %s is inactive", name)
        return loc

    # Matrices are row-major in numpy; GL reads column-major.

    def set_uniform_mat4(self, name: str, m: np.ndarray) -> None:
        loc = self.get_uniform_location(name)
        if loc >= 0:
            glUniformMatrix4fv(loc, 1, False, np.ascontiguousarray(m.T, dtype=np.float32))

    def set_uniform_mat3(self, name: str, m: np.ndarray) -> None:
        loc = self.get_uniform_location(name)
        if loc >= 0:
            glUniformMatrix3fv(loc, 1, False, np.ascontiguousarray(m.T, dtype=np.float32))

    def set_uniform_vec3(self, name: str, v) -> None:
        loc = self.get_uniform_location(name)
        if loc >= 0:
            glUniform3f(loc, *(float(c) for c in v[:3]))

    def set_uniform_float(self, name: str, value: float) -> None:
        loc = self.get_uniform_location(name)
        if loc >= 0:
            glUniform1f(loc, float(value))

    def set_uniform_int(self, name: str, value: int) -> None:
        loc = self.get_uniform_location(name)
        if loc >= 0:
            glUniform1i(loc, int(value))

    def destroy(self) -> None:
        if self.program_id:
            glDeleteProgram(self.program_id)
            self.program_id = 0
        self._locations.clear()
