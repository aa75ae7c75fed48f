"""Line rasterisation, from naive sampling up to integer Bresenham."""

from __future__ import annotations

import struct
from typing import Callable

from rasterkit.geometry import Vec2
from rasterkit.model import Model
from rasterkit.tgaimage import Format, TGAColor, TGAImage

RED = TGAColor.rgba(255, 0, 0, 255)
GREEN = TGAColor.rgba(0, 255, 0, 255)
BLUE = TGAColor.rgba(0, 0, 255, 255)
WHITE = TGAColor.rgba(255, 255, 255, 255)

LineDrawer = Callable[[TGAImage, int, int, int, int, TGAColor], None]

# End points of the fan of lines drawn from (50, 50) in the line demos.
_FAN = (
    (10, 10, BLUE),
    (10, 20, GREEN), (10, 30, BLUE), (10, 40, GREEN), (10, 50, BLUE),
    (10, 60, GREEN), (10, 70, BLUE), (10, 80, GREEN),
    (10, 90, BLUE),
    (20, 90, BLUE), (30, 90, BLUE), (40, 90, BLUE), (50, 90, BLUE),
    (60, 90, BLUE), (70, 90, BLUE), (80, 90, BLUE), (90, 90, BLUE),
    (90, 90, BLUE),
    (90, 80, GREEN), (90, 70, BLUE), (90, 60, GREEN), (90, 50, BLUE),
    (90, 40, GREEN), (90, 30, BLUE), (90, 20, GREEN),
    (90, 10, BLUE),
)


def _f32(value: float) -> float:
    """Round to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def line_parametric(image: TGAImage, x0: int, y0: int, x1: int, y1: int, color: TGAColor) -> None:
    """Sample the segment at fixed parameter steps of 0.01."""
    step = _f32(0.01)
    t = 0.0
    while t < 1:
        x = int(_f32(x0 + _f32((x1 - x0) * t)))
        y = int(_f32(y0 + _f32((y1 - y0) * t)))
        image.set(x, y, color)
        t = _f32(t + step)


def line_x_step(image: TGAImage, x0: int, y0: int, x1: int, y1: int, color: TGAColor) -> None:
    """Step x one pixel at a time from x0 to x1; draws nothing when x1 <= x0."""
    if x1 == x0:
        return
    for x in range(x0, x1 + 1):
        t = _f32((x - x0) / float(x1 - x0))
        image.set(x, int(y0 * (1.0 - t) + y1 * t), color)


def line_transposed(image: TGAImage, x0: int, y0: int, x1: int, y1: int, color: TGAColor) -> None:
    """Step along the longer axis, in either direction."""
    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0, x1, y1 = y0, x0, y1, x1
    if x0 > x1:
        x0, y0, x1, y1 = x1, y1, x0, y0
    if x0 == x1:
        return
    for x in range(x0, x1 + 1):
        t = _f32((x - x0) / float(x1 - x0))
        y = int(y0 * (1.0 - t) + y1 * t)
        if steep:
            image.set(y, x, color)
        else:
            image.set(x, y, color)


def line_float_error(image: TGAImage, x0: int, y0: int, x1: int, y1: int, color: TGAColor) -> None:
    """Step along the longer axis, moving the other one when the error passes 0.5."""
    dx = abs(x0 - x1)
    dy = abs(y0 - y1)
    steep = dx < dy
    if steep:
        x0, y0, x1, y1 = y0, x0, y1, x1
        dx, dy = dy, dx
    if x0 > x1:
        x0, y0, x1, y1 = x1, y1, x0, y0
    derror = _f32(abs(dy / float(dx))) if dx else 0.0
    error = 0.0
    y = y0
    for x in range(x0, x1 + 1):
        if steep:
            image.set(y, x, color)
        else:
            image.set(x, y, color)
        error = _f32(error + derror)
        if error > 0.5:
            y += 1 if y1 > y0 else -1
            error = _f32(error - 1)


def line(image: TGAImage, x0: int, y0: int, x1: int, y1: int, color: TGAColor) -> None:
    """Integer Bresenham line from (x0, y0) to (x1, y1), both ends included."""
    dx = abs(x0 - x1)
    dy = abs(y0 - y1)
    steep = dx < dy
    if steep:
        x0, y0, x1, y1 = y0, x0, y1, x1
        dx, dy = dy, dx
    if x0 > x1:
        x0, y0, x1, y1 = x1, y1, x0, y0
    derror = dy * 2
    error = 0
    y = y0
    ystep = 1 if y1 > y0 else -1
    for x in range(x0, x1 + 1):
        if steep:
            image.set(y, x, color)
        else:
            image.set(x, y, color)
        error += derror
        if error > dx:
            y += ystep
            error -= dx * 2


def line_between(image: TGAImage, a: Vec2, b: Vec2, color: TGAColor) -> None:
    """Bresenham line between two integer points."""
    line(image, int(a.x), int(a.y), int(b.x), int(b.y), color)


def draw_fan(image: TGAImage, draw: LineDrawer) -> None:
    """Draw the demo fan of lines from (50, 50) with the given line routine."""
    for x1, y1, color in _FAN:
        draw(image, 50, 50, x1, y1, color)


def render_wireframe(model: Model, width: int, height: int, color: TGAColor = WHITE) -> TGAImage:
    """Draw every face edge of ``model`` projected onto the xy plane."""
    image = TGAImage(width, height, Format.RGB)
    for index in range(model.nfaces()):
        face = model.face(index)
        for j in range(3):
            v0 = model.vert(face[j])
            v1 = model.vert(face[(j + 1) % 3])
            line(
                image,
                int((v0.x + 1.0) * width / 2),
                int((v0.y + 1.0) * height / 2),
                int((v1.x + 1.0) * width / 2),
                int((v1.y + 1.0) * height / 2),
                color,
            )
    image.flip_vertically()
    return image