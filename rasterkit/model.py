"""Triangle meshes read from Wavefront OBJ files, with optional textures."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Sequence, Union

from rasterkit.geometry import Vec2, Vec3
from rasterkit.tgaimage import TGAColor, TGAError, TGAImage

StrPath = Union[str, "PathLike[str]"]

_TEXTURE_SUFFIXES = {
    "diffusemap": "_diffuse.tga",
    "normalmap": "_nm_tangent.tga",
    "specularmap": "_spec.tga",
}


def _leading_floats(tokens: Sequence[str], count: int) -> list[float]:
    """Parse up to ``count`` numbers, stopping at the first bad token; pad with 0."""
    values: list[float] = []
    for token in tokens[:count]:
        try:
            values.append(float(token))
        except ValueError:
            break
    return values + [0.0] * (count - len(values))


def _face_corners(tokens: Sequence[str]) -> list[tuple[int, int, int]]:
    """Zero-based vertex/uv/normal index triples, up to the first malformed one."""
    corners: list[tuple[int, int, int]] = []
    for token in tokens:
        parts = token.split("/")
        if len(parts) != 3:
            break
        try:
            v, vt, vn = (int(part) - 1 for part in parts)
        except ValueError:
            break
        corners.append((v, vt, vn))
    return corners


def _texel(image: TGAImage, uv: Sequence[float]) -> TGAColor:
    return image.get(int(uv[0] * image.width), int(uv[1] * image.height))


@dataclass
class Model:
    """Vertices, texture coordinates, normals and faces of a mesh."""

    verts: list[Vec3] = field(default_factory=list)
    faces: list[list[tuple[int, int, int]]] = field(default_factory=list)
    norms: list[Vec3] = field(default_factory=list)
    uvs: list[Vec2] = field(default_factory=list)
    diffusemap: TGAImage = field(default_factory=TGAImage)
    normalmap: TGAImage = field(default_factory=TGAImage)
    specularmap: TGAImage = field(default_factory=TGAImage)

    @classmethod
    def from_obj_text(cls, text: str) -> "Model":
        """Parse the v, vt, vn and f records of OBJ text."""
        model = cls()
        for line in text.splitlines():
            tokens = line.split()[1:]
            if line.startswith("v "):
                model.verts.append(Vec3(*_leading_floats(tokens, 3)))
            elif line.startswith("vn "):
                model.norms.append(Vec3(*_leading_floats(tokens, 3)))
            elif line.startswith("vt "):
                model.uvs.append(Vec2(*_leading_floats(tokens, 2)))
            elif line.startswith("f "):
                model.faces.append(_face_corners(tokens))
        return model

    @classmethod
    def load(cls, path: StrPath) -> "Model":
        """Read an OBJ file and the textures named after it, where present."""
        name = str(path)
        model = cls.from_obj_text(Path(path).read_text())
        dot = name.rfind(".")
        if dot != -1:
            for attribute, suffix in _TEXTURE_SUFFIXES.items():
                try:
                    texture = TGAImage.read_tga_file(name[:dot] + suffix)
                except (OSError, TGAError):
                    texture = TGAImage()
                texture.flip_vertically()
                setattr(model, attribute, texture)
        return model

    def nverts(self) -> int:
        return len(self.verts)

    def nfaces(self) -> int:
        return len(self.faces)

    def face(self, index: int) -> list[int]:
        """Vertex indices of a face."""
        return [corner[0] for corner in self.faces[index]]

    def vert(self, index: int) -> Vec3:
        return self.verts[index]

    def face_vert(self, iface: int, nthvert: int) -> Vec3:
        """Position of the n-th corner of a face."""
        return self.verts[self.faces[iface][nthvert][0]]

    def uv(self, iface: int, nthvert: int) -> Vec2:
        """Texture coordinate of the n-th corner of a face."""
        return self.uvs[self.faces[iface][nthvert][1]]

    def normal(self, iface: int, nthvert: int) -> Vec3:
        """Unit normal of the n-th corner of a face."""
        return self.norms[self.faces[iface][nthvert][2]].normalize()

    def normal_at(self, uv: Sequence[float]) -> Vec3:
        """Normal decoded from the normal map at texture coordinate ``uv``."""
        color = _texel(self.normalmap, uv)
        b, g, r = (color[i] / 255.0 * 2.0 - 1.0 for i in range(3))
        return Vec3(r, g, b)

    def diffuse(self, uv: Sequence[float]) -> TGAColor:
        """Colour of the diffuse map at texture coordinate ``uv``."""
        return _texel(self.diffusemap, uv)

    def specular(self, uv: Sequence[float]) -> float:
        """First channel of the specular map at texture coordinate ``uv``."""
        return float(_texel(self.specularmap, uv)[0])