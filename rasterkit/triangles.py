"""Triangle rasterisation: outlines, scan-line filling and barycentric filling."""

from __future__ import annotations

import random
from typing import Optional

from rasterkit.geometry import Vec2, Vec3, cross
from rasterkit.lines import WHITE, line
from rasterkit.model import Model
from rasterkit.tgaimage import Format, TGAColor, TGAImage

DEFAULT_LIGHT = Vec3(0.0, 0.0, 1.0)


def barycentric(p: Vec2, v0: Vec2, v1: Vec2, v2: Vec2) -> Vec3:
    """Barycentric coordinates of ``p`` in the triangle (v0, v1, v2).

    A degenerate triangle yields coordinates with negative components, so
    every point counts as outside it.
    """
    u = cross(
        Vec3(v0.x - p.x, v1.x - v0.x, v2.x - v0.x),
        Vec3(v0.y - p.y, v1.y - v0.y, v2.y - v0.y),
    )
    if u.x == 0:
        u = Vec3(-1, 1, 1)
    return Vec3(1.0 - (u.y + u.z) / u.x, u.y / u.x, u.z / u.x)


def point_in_triangle(p: Vec2, v0: Vec2, v1: Vec2, v2: Vec2) -> bool:
    """True when ``p`` lies inside or on the edges of the triangle."""
    weights = barycentric(p, v0, v1, v2)
    return all(w >= 0 for w in weights)


def triangle_outline(image: TGAImage, v0: Vec2, v1: Vec2, v2: Vec2, color: TGAColor) -> None:
    """Draw the three edges of a triangle."""
    for a, b in ((v0, v1), (v1, v2), (v2, v0)):
        line(image, int(a.x), int(a.y), int(b.x), int(b.y), color)


def _lerp(a: Vec2, b: Vec2, t: float) -> Vec2:
    return Vec2(a.x + int((b.x - a.x) * t), a.y + int((b.y - a.y) * t))


def triangle_sweep(image: TGAImage, v0: Vec2, v1: Vec2, v2: Vec2, color: TGAColor) -> None:
    """Fill a triangle row by row between its left and right edges."""
    if v0.y == v1.y == v2.y:
        return
    v0, v1, v2 = sorted(
        (Vec2(int(v.x), int(v.y)) for v in (v0, v1, v2)), key=lambda v: v.y
    )
    total_height = v2.y - v0.y
    first_height = v1.y - v0.y
    second_height = v2.y - v1.y
    for i in range(total_height + 1):
        if i >= first_height:
            t = (i - first_height) / second_height if second_height else 0.0
            a = _lerp(v1, v2, t)
        else:
            a = _lerp(v0, v1, i / first_height)
        b = _lerp(v0, v2, i / total_height)
        left, right = sorted((a.x, b.x))
        for x in range(left, right + 1):
            image.set(x, v0.y + i, color)


def triangle_barycentric(image: TGAImage, v0: Vec2, v1: Vec2, v2: Vec2, color: TGAColor) -> None:
    """Fill a triangle by testing every pixel of its bounding box.

    The box runs up to, but not including, its largest x and y.
    """
    if v0.y == v1.y == v2.y:
        return
    v0, v1, v2 = (Vec2(int(v.x), int(v.y)) for v in (v0, v1, v2))
    max_x = max(v0.x, v1.x, v2.x, 0)
    max_y = max(v0.y, v1.y, v2.y, 0)
    min_x = min(v0.x, v1.x, v2.x, image.width)
    min_y = min(v0.y, v1.y, v2.y, image.height)
    for x in range(min_x, max_x):
        for y in range(min_y, max_y):
            if point_in_triangle(Vec2(x, y), v0, v1, v2):
                image.set(x, y, color)


def world_to_screen(p: Vec3, width: int, height: int) -> Vec2:
    """Map x and y from [-1, 1] onto integer pixel coordinates."""
    return Vec2(int((p.x + 1.0) * width / 2), int((p.y + 1.0) * height / 2))


def face_intensity(model: Model, index: int, light: Vec3 = DEFAULT_LIGHT) -> float:
    """Cosine between a face's normal and the light direction; 0 for a degenerate face."""
    a, b, c = (model.vert(i) for i in model.face(index)[:3])
    normal = (a - b).cross(a - c)
    if normal.norm() == 0:
        return 0.0
    return normal.normalize().dot(light)


def _screen_corners(model: Model, index: int, width: int, height: int) -> list[Vec2]:
    return [world_to_screen(model.vert(i), width, height) for i in model.face(index)[:3]]


def render_random_colors(
    model: Model, width: int, height: int, rng: Optional[random.Random] = None
) -> TGAImage:
    """Fill every face of ``model`` with a random colour."""
    rng = rng if rng is not None else random.Random()
    image = TGAImage(width, height, Format.RGB)
    for index in range(model.nfaces()):
        color = TGAColor.rgba(rng.randrange(255), rng.randrange(255), rng.randrange(255), 255)
        triangle_barycentric(image, *_screen_corners(model, index, width, height), color)
    image.flip_vertically()
    return image


def render_illuminated(
    model: Model, width: int, height: int, light: Vec3 = DEFAULT_LIGHT
) -> TGAImage:
    """Fill the faces turned towards the light in grey shaded by intensity."""
    image = TGAImage(width, height, Format.RGB)
    for index in range(model.nfaces()):
        intensity = face_intensity(model, index, light)
        if intensity > 0:
            level = 255 * intensity
            color = TGAColor.rgba(level, level, level, 255)
            triangle_barycentric(image, *_screen_corners(model, index, width, height), color)
    image.flip_vertically()
    return image