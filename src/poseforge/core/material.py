"""Surface appearance shared by proxies, markers and the floor."""

from dataclasses import dataclass

RGB = tuple[float, float, float]


def hex_color(value: int) -> RGB:
    """``0xRRGGBB`` to an RGB triple in [0, 1]."""
    return tuple(((value >> shift) & 0xFF) / 255.0 for shift in (16, 8, 0))


@dataclass
class Material:
    color: RGB = (0.8, 0.8, 0.8)
    opacity: float = 1.0
    shininess: float = 30.0
    emissive: RGB = (0.0, 0.0, 0.0)
    emissive_intensity: float = 1.0
    transparent: bool = False
    double_sided: bool = False

    @classmethod
    def from_hex(cls, color: int, emissive: int = 0x000000, **kwargs) -> "Material":
        return cls(color=hex_color(color), emissive=hex_color(emissive), **kwargs)

    @property
    def is_transparent(self) -> bool:
        """Blended, drawn after opaque meshes without writing depth."""
        return self.transparent or self.opacity < 1.0
