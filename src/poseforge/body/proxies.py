"""Joint proxy selection and geometry.

Each joint gets a small marker sphere; limbs and the torso additionally get
a simple solid (sphere, box or tapered cylinder) positioned relative to the
joint origin so that it follows the joint's rotation.
"""

import math
from enum import Enum, auto
from typing import Optional

from poseforge.core.material import Material
from poseforge.core.math_utils import mat4_rotation_z, mat4_translation
from poseforge.core.mesh import BufferGeometry
from poseforge.scene.procedural_geometry import make_box, make_cylinder, make_sphere

MARKER_RADIUS = 0.025
HEAD_RADIUS = 0.12
TORSO_SIZE = (0.22, 0.12, 0.18)
TORSO_LIFT = 0.05
LEG_RADII = (0.06, 0.04)
LEG_LENGTH = 0.35
ARM_RADII = (0.05, 0.03)
ARM_LENGTH = 0.25

BONE_COLOR = 0x0088FF
BONE_EMISSIVE = 0x001133
BONE_OPACITY = 0.85


class ProxyKind(Enum):
    HEAD = auto()
    TORSO = auto()
    LEG = auto()
    ARM = auto()


_LEG_KEYS = ("Hip", "Knee", "Ankle")
_ARM_KEYS = ("Shoulder", "Elbow", "Wrist", "Collar")


def select_proxy(name: str) -> Optional[ProxyKind]:
    """Pick the proxy shape for a joint by name.

    Rules are checked in order; the first match wins. Returns ``None`` for
    joints that only get a marker (Neck, feet, unknown names).
    """
    if name == "Head":
        return ProxyKind.HEAD
    if name == "Pelvis" or "Spine" in name:
        return ProxyKind.TORSO
    if any(k in name for k in _LEG_KEYS):
        return ProxyKind.LEG
    if any(k in name for k in _ARM_KEYS):
        return ProxyKind.ARM
    return None


def make_marker_geometry() -> BufferGeometry:
    return make_sphere(MARKER_RADIUS, 8, 8)


def make_proxy_geometry(kind: ProxyKind, name: str) -> BufferGeometry:
    """Build the proxy mesh for *kind*, already offset into joint-local space.

    Legs hang below the joint along -Y. Arms are turned onto the X axis and
    extend toward +X for left-side joints, -X otherwise.
    """
    if kind is ProxyKind.HEAD:
        return make_sphere(HEAD_RADIUS, 16, 16)

    if kind is ProxyKind.TORSO:
        geo = make_box(*TORSO_SIZE)
        return geo.apply_matrix(mat4_translation(0.0, TORSO_LIFT, 0.0))

    if kind is ProxyKind.LEG:
        geo = make_cylinder(LEG_RADII[0], LEG_RADII[1], LEG_LENGTH, 8)
        return geo.apply_matrix(mat4_translation(0.0, -LEG_LENGTH / 2, 0.0))

    geo = make_cylinder(ARM_RADII[0], ARM_RADII[1], ARM_LENGTH, 8)
    geo.apply_matrix(mat4_rotation_z(math.pi / 2))
    direction = 1.0 if name.startswith("L_") else -1.0
    return geo.apply_matrix(mat4_translation(direction * ARM_LENGTH / 2, 0.0, 0.0))


def make_bone_material() -> Material:
    return Material.from_hex(
        BONE_COLOR,
        opacity=BONE_OPACITY,
        transparent=True,
        emissive=BONE_EMISSIVE,
        shininess=60.0,
    )


def make_marker_material() -> Material:
    return Material(
        color=(1.0, 1.0, 1.0),
        emissive=(1.0, 1.0, 1.0),
        emissive_intensity=0.8,
    )
