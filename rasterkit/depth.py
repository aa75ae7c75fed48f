"""Hidden-surface removal with a one-dimensional y-buffer and a z-buffer."""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence, Union

from rasterkit.geometry import Vec2, Vec3
from rasterkit.model import Model
from rasterkit.tgaimage import Format, TGAColor, TGAImage
from rasterkit.triangles import DEFAULT_LIGHT, barycentric, face_intensity

INT_MIN = -(2**31)

ShadeFn = Callable[[Optional[Vec2]], TGAColor]
Shade = Union[TGAColor, ShadeFn]


def new_ybuffer(width: int) -> list[int]:
    """A y-buffer of ``width`` entries, each at the lowest possible height."""
    return [INT_MIN] * width


def draw_column(image: TGAImage, x: int, color: TGAColor, height: Optional[int] = None) -> None:
    """Paint the first ``height`` rows of column ``x`` (the whole column by default)."""
    rows = image.height if height is None else height
    for y in range(rows):
        image.set(x, y, color)


def ybuffer_line(image: TGAImage, ybuffer: list[int], a: Vec2, b: Vec2, color: TGAColor) -> None:
    """Draw the parts of segment a-b that lie above what the y-buffer holds.

    Each visible x paints a whole column of ``image`` and raises the buffer.
    """
    x0, y0, x1, y1 = int(a.x), int(a.y), int(b.x), int(b.y)
    if x0 > x1:
        x0, y0, x1, y1 = x1, y1, x0, y0
    for x in range(x0, x1 + 1):
        if not 0 <= x < len(ybuffer):
            continue
        if x1 == x0:
            y = float(max(y0, y1))
        else:
            y = y0 + (x - x0) * (y1 - y0) / (x1 - x0)
        if y < ybuffer[x]:
            continue
        ybuffer[x] = int(y)
        draw_column(image, x, color)


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


def render_ybuffer(image: TGAImage, ybuffer: Sequence[int]) -> None:
    """Show the buffer as grey columns, a third of the stored height each."""
    for x, value in enumerate(ybuffer):
        level = _trunc_div(value, 3)
        draw_column(image, x, TGAColor.rgba(level, level, level, 255))


def new_zbuffer(width: int, height: int) -> list[float]:
    """A z-buffer of ``width * height`` entries, each at the lowest depth."""
    return [float(INT_MIN)] * (width * height)


def world_to_screen3(p: Vec3, width: int, height: int) -> Vec3:
    """Map x and y from [-1, 1] onto the screen, keeping z."""
    return Vec3((p.x + 1.0) * width / 2, (p.y + 1.0) * height / 2, p.z)


def _shader(shade: Shade) -> ShadeFn:
    if isinstance(shade, TGAColor):
        return lambda _uv: shade
    return shade


def zbuffer_triangle(
    image: TGAImage,
    zbuffer: list[float],
    v0: Vec3,
    v1: Vec3,
    v2: Vec3,
    uvs: Optional[Sequence[Vec2]],
    shade: Shade,
) -> None:
    """Fill a screen-space triangle, keeping only pixels nearer than the buffer.

    ``shade`` is a colour, or a function of the interpolated texture
    coordinate (``None`` when ``uvs`` is not given) returning a colour.
    """
    if v0.y == v1.y == v2.y:
        return
    colour_at = _shader(shade)
    width, height = image.width, image.height
    max_x = max(v0.x, v1.x, v2.x, 0)
    max_y = max(v0.y, v1.y, v2.y, 0)
    min_x = min(v0.x, v1.x, v2.x, width)
    min_y = min(v0.y, v1.y, v2.y, height)
    corners = [Vec2(int(v.x), int(v.y)) for v in (v0, v1, v2)]
    for x in range(int(min_x), math.ceil(max_x)):
        if not 0 <= x < width:
            continue
        for y in range(int(min_y), math.ceil(max_y)):
            if not 0 <= y < height:
                continue
            weights = barycentric(Vec2(x, y), *corners)
            if weights.x < 0 or weights.y < 0 or weights.z < 0:
                continue
            z = weights.x * v0.z + weights.y * v1.z + weights.z * v2.z
            index = y * width + x
            if zbuffer[index] <= z:
                zbuffer[index] = z
                uv = None
                if uvs is not None:
                    uv = Vec2(
                        weights.x * uvs[0].x + weights.y * uvs[1].x + weights.z * uvs[2].x,
                        weights.x * uvs[0].y + weights.y * uvs[1].y + weights.z * uvs[2].y,
                    )
                image.set(x, y, colour_at(uv))


def _render(
    model: Model,
    width: int,
    height: int,
    light: Vec3,
    with_uvs: bool,
    shade_for: Callable[[float], Shade],
) -> TGAImage:
    image = TGAImage(width, height, Format.RGB)
    zbuffer = new_zbuffer(width, height)
    for index in range(model.nfaces()):
        intensity = face_intensity(model, index, light)
        if intensity <= 0:
            continue
        corners = [world_to_screen3(model.vert(i), width, height) for i in model.face(index)[:3]]
        uvs = [model.uv(index, k) for k in range(3)] if with_uvs else None
        zbuffer_triangle(image, zbuffer, *corners, uvs, shade_for(intensity))
    image.flip_vertically()
    return image


def _grey(intensity: float) -> TGAColor:
    level = 255 * intensity
    return TGAColor.rgba(level, level, level, 255)


def render_zbuffer(model: Model, width: int, height: int, light: Vec3 = DEFAULT_LIGHT) -> TGAImage:
    """Flat-shaded faces with hidden surfaces removed."""
    return _render(model, width, height, light, False, _grey)


def render_depth_display(
    model: Model, width: int, height: int, light: Vec3 = DEFAULT_LIGHT
) -> TGAImage:
    """Flat-shaded faces, interpolating texture coordinates along the way."""
    return _render(model, width, height, light, True, _grey)


def render_textured(model: Model, width: int, height: int, light: Vec3 = DEFAULT_LIGHT) -> TGAImage:
    """Faces turned towards the light, coloured from the diffuse map."""
    return _render(model, width, height, light, True, lambda _i: model.diffuse)


def render_diffuse(model: Model, width: int, height: int, light: Vec3 = DEFAULT_LIGHT) -> TGAImage:
    """Faces coloured from the diffuse map and dimmed by their intensity."""
    return _render(
        model,
        width,
        height,
        light,
        True,
        lambda intensity: (lambda uv: model.diffuse(uv) * intensity),
    )