"""GPU buffers for one :class:`BufferGeometry`.

Positions and normals are interleaved into a single VBO (stride 24 bytes)
bound to attribute locations 0 and 1, matching ``default.vert``.
"""

import ctypes
import logging

import numpy as np
from OpenGL.GL import (
    GL_ARRAY_BUFFER,
    GL_ELEMENT_ARRAY_BUFFER,
    GL_FALSE,
    GL_FLOAT,
    GL_STATIC_DRAW,
    GL_TRIANGLES,
    GL_UNSIGNED_INT,
    glBindBuffer,
    glBindVertexArray,
    glBufferData,
    glDeleteBuffers,
    glDeleteVertexArrays,
    glDrawArrays,
    glDrawElements,
    glEnableVertexAttribArray,
    glGenBuffers,
    glGenVertexArrays,
    glVertexAttribPointer,
)

from poseforge.core.mesh import BufferGeometry

logger = logging.getLogger(__name__)

_FLOAT_SIZE = 4
_STRIDE = 6 * _FLOAT_SIZE


class GLMesh:
    """Static VAO for geometry that never changes after upload.

    Joint motion only changes the model matrix, so buffers are written
    once. Must be created and destroyed with the owning context current.
    """

    def __init__(self, geometry: BufferGeometry) -> None:
        self._geometry = geometry
        self._vao = 0
        self._buffers: list[int] = []
        self._count = 0
        self._indexed = False

    @property
    def uploaded(self) -> bool:
        return self._vao != 0

    def upload(self) -> None:
        if self.uploaded:
            self.destroy()
        geo = self._geometry
        interleaved = np.hstack((
            geo.positions.reshape(-1, 3),
            geo.normals.reshape(-1, 3),
        )).astype(np.float32)

        self._vao = glGenVertexArrays(1)
        glBindVertexArray(self._vao)

        vbo = glGenBuffers(1)
        self._buffers.append(vbo)
        glBindBuffer(GL_ARRAY_BUFFER, vbo)
        glBufferData(GL_ARRAY_BUFFER, interleaved.nbytes, interleaved, GL_STATIC_DRAW)
        for location, offset in ((0, 0), (1, 3 * _FLOAT_SIZE)):
            glVertexAttribPointer(location, 3, GL_FLOAT, GL_FALSE, _STRIDE, ctypes.c_void_p(offset))
            glEnableVertexAttribArray(location)

        self._indexed = geo.indices is not None and len(geo.indices) > 0
        if self._indexed:
            indices = geo.indices.astype(np.uint32)
            ebo = glGenBuffers(1)
            self._buffers.append(ebo)
            glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, ebo)
            glBufferData(GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices, GL_STATIC_DRAW)
            self._count = len(indices)
        else:
            self._count = geo.vertex_count

        # VAO first, so the element buffer binding stays recorded in it
        glBindVertexArray(0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)
        logger.debug("Uploaded %d vertices (%d elements)", geo.vertex_count, self._count)

    def draw(self) -> None:
        if not self.uploaded:
            return
        glBindVertexArray(self._vao)
        if self._indexed:
            glDrawElements(GL_TRIANGLES, self._count, GL_UNSIGNED_INT, None)
        else:
            glDrawArrays(GL_TRIANGLES, 0, self._count)
        glBindVertexArray(0)

    def destroy(self) -> None:
        if self._buffers:
            glDeleteBuffers(len(self._buffers), self._buffers)
            self._buffers = []
        if self._vao:
            glDeleteVertexArrays(1, [self._vao])
            self._vao = 0
