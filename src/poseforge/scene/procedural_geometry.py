"""Procedural meshes for joint proxies and the floor grid.

Every builder returns an indexed :class:`BufferGeometry` centred on the
origin, with per-vertex unit normals.
"""

import numpy as np

from poseforge.core.mesh import BufferGeometry


def _geometry(positions, normals, indices) -> BufferGeometry:
    return BufferGeometry(
        positions=np.asarray(positions, dtype=np.float32).ravel(),
        normals=np.asarray(normals, dtype=np.float32).ravel(),
        indices=np.asarray(indices, dtype=np.uint32).ravel(),
    )


def _quad_indices(quad_count: int) -> np.ndarray:
    """Two triangles per quad for quads stored as 4 consecutive vertices."""
    base = 4 * np.arange(quad_count, dtype=np.uint32)[:, None]
    return base + np.array((0, 1, 2, 0, 2, 3), dtype=np.uint32)


def make_box(width: float, height: float, depth: float) -> BufferGeometry:
    """Axis-aligned box, 4 vertices per face so each face has a flat normal."""
    half = np.array((width, height, depth)) / 2
    corners, normals = [], []
    for axis in range(3):
        u, v = (axis + 1) % 3, (axis + 2) % 3
        for sign in (1.0, -1.0):
            normal = np.zeros(3)
            normal[axis] = sign
            # Counter-clockwise seen from outside
            for a, b in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
                p = np.empty(3)
                p[axis] = sign * half[axis]
                p[u] = a * half[u] * sign
                p[v] = b * half[v]
                corners.append(p)
                normals.append(normal)
    return _geometry(corners, normals, _quad_indices(6))


def make_sphere(radius: float, width_segments: int = 16, height_segments: int = 12) -> BufferGeometry:
    """UV sphere; the seam column is duplicated so rings close cleanly."""
    polar = np.linspace(0.0, np.pi, height_segments + 1)[:, None]
    azimuth = np.linspace(0.0, 2 * np.pi, width_segments + 1)[None, :]
    normals = np.stack((
        -np.cos(azimuth) * np.sin(polar),
        np.cos(polar) * np.ones_like(azimuth),
        np.sin(azimuth) * np.sin(polar),
    ), axis=-1).reshape(-1, 3)

    cols = width_segments + 1
    indices = []
    for row in range(height_segments):
        for col in range(width_segments):
            top = row * cols + col
            bottom = top + cols
            # Pole rows collapse to a single triangle per segment
            if row != 0:
                indices.append((top + 1, top, bottom + 1))
            if row != height_segments - 1:
                indices.append((top, bottom, bottom + 1))
    return _geometry(normals * radius, normals, indices)


def make_cylinder(radius_top: float, radius_bottom: float, height: float,
                  segments: int = 12) -> BufferGeometry:
    """Capped, optionally tapered cylinder along Y."""
    angles = np.linspace(0.0, 2 * np.pi, segments + 1)
    ring = np.stack((np.cos(angles), np.zeros_like(angles), np.sin(angles)), axis=1)
    half = height / 2
    up = np.array((0.0, 1.0, 0.0))

    # Side: bottom/top vertex pairs; normals lean outward along the taper
    slope = (radius_bottom - radius_top) / height if height else 0.0
    side_normals = ring + slope * up
    side_normals /= np.linalg.norm(side_normals, axis=1, keepdims=True)
    bottom = ring * radius_bottom - half * up
    top = ring * radius_top + half * up
    positions = list(np.stack((bottom, top), axis=1).reshape(-1, 3))
    normals = list(np.repeat(side_normals, 2, axis=0))
    indices = []
    for i in range(segments):
        b = 2 * i
        indices += [(b, b + 1, b + 2), (b + 1, b + 3, b + 2)]

    # Caps: centre vertex plus one rim vertex per segment
    for y, r, facing in ((half, radius_top, 1.0), (-half, radius_bottom, -1.0)):
        centre = len(positions)
        positions.append(y * up)
        positions.extend(ring[:segments] * r + y * up)
        normals.extend([facing * up] * (segments + 1))
        for i in range(segments):
            a = centre + 1 + i
            b = centre + 1 + (i + 1) % segments
            indices.append((centre, b, a) if facing > 0 else (centre, a, b))

    return _geometry(positions, normals, indices)


def make_grid(size: float, divisions: int, line_width: float = 0.01) -> BufferGeometry:
    """Floor grid on the XZ plane, one thin upward-facing quad per line.

    Lines are quads because the core profile has no wide GL lines.
    """
    half, hw = size / 2, line_width / 2
    quads = []
    for c in np.linspace(-half, half, divisions + 1):
        quads.append(((c - hw, -half), (c - hw, half), (c + hw, half), (c + hw, -half)))
        quads.append(((-half, c - hw), (half, c - hw), (half, c + hw), (-half, c + hw)))
    xz = np.array(quads, dtype=np.float64).reshape(-1, 2)
    positions = np.column_stack((xz[:, 0], np.zeros(len(xz)), xz[:, 1]))
    normals = np.tile((0.0, 1.0, 0.0), (len(xz), 1))
    return _geometry(positions, normals, _quad_indices(len(quads)))
