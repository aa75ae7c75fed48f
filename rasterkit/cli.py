"""Command-line entry point that renders the demo scenes to TGA files."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from rasterkit.depth import (
    new_ybuffer,
    render_depth_display,
    render_diffuse,
    render_textured,
    render_ybuffer,
    render_zbuffer,
    ybuffer_line,
)
from rasterkit.geometry import Vec2
from rasterkit.lines import (
    BLUE,
    GREEN,
    RED,
    WHITE,
    draw_fan,
    line,
    line_between,
    line_float_error,
    line_parametric,
    line_transposed,
    line_x_step,
    render_wireframe,
)
from rasterkit.model import Model
from rasterkit.tgaimage import Format, TGAImage
from rasterkit.triangles import (
    render_illuminated,
    render_random_colors,
    triangle_barycentric,
    triangle_outline,
    triangle_sweep,
)

LINE_METHODS = {
    "parametric": line_parametric,
    "x-step": line_x_step,
    "transposed": line_transposed,
    "float-error": line_float_error,
    "bresenham": line,
}

TRIANGLE_METHODS = {
    "outline": triangle_outline,
    "sweep": triangle_sweep,
    "barycentric": triangle_barycentric,
}

_DEMO_TRIANGLES = (
    ((Vec2(10, 70), Vec2(50, 160), Vec2(70, 80)), RED),
    ((Vec2(180, 50), Vec2(150, 1), Vec2(70, 180)), WHITE),
    ((Vec2(180, 150), Vec2(120, 160), Vec2(130, 180)), GREEN),
)

_YBUFFER_SEGMENTS = (
    (Vec2(20, 34), Vec2(744, 400), RED),
    (Vec2(120, 434), Vec2(444, 400), GREEN),
    (Vec2(330, 463), Vec2(594, 200), BLUE),
)


def getting_started() -> TGAImage:
    """A 100 x 100 image with two red pixels flipped to the bottom and two blue ones."""
    image = TGAImage(100, 100, Format.RGB)
    image.set(0, 10, RED)
    image.set(0, 11, RED)
    image.flip_vertically()
    image.set(0, 10, BLUE)
    image.set(0, 11, BLUE)
    return image


def draw_lines(width: int = 800, height: int = 800) -> TGAImage:
    """A flat 2D scene of three segments above a white screen line."""
    scene = TGAImage(width, height, Format.RGB)
    line_between(scene, Vec2(20, 34), Vec2(744, 400), RED)
    line_between(scene, Vec2(120, 434), Vec2(444, 400), GREEN)
    line_between(scene, Vec2(330, 463), Vec2(594, 200), BLUE)
    line_between(scene, Vec2(10, 10), Vec2(790, 10), WHITE)
    scene.flip_vertically()
    return scene


def _fan(method: str) -> TGAImage:
    image = TGAImage(100, 100, Format.RGB)
    draw_fan(image, LINE_METHODS[method])
    return image


def _triangles(method: str) -> TGAImage:
    image = TGAImage(200, 200, Format.RGB)
    fill = TRIANGLE_METHODS[method]
    for corners, color in _DEMO_TRIANGLES:
        # The filling demos paint every triangle white whatever colour is given.
        fill(image, *corners, color if method == "outline" else WHITE)
    image.flip_vertically()
    return image


def _ybuffer_demo(directory: Path) -> None:
    width, height = 800, 16
    render = TGAImage(width, height, Format.RGB)
    buffer = TGAImage(width, height, Format.RGB)
    ybuffer = new_ybuffer(width)
    for number, (a, b, color) in enumerate(_YBUFFER_SEGMENTS, start=1):
        ybuffer_line(render, ybuffer, a, b, color)
        render.write_tga_file(directory / f"output{number}.tga")
        render_ybuffer(buffer, ybuffer)
        buffer.write_tga_file(directory / f"buffer{number}.tga")


_MODEL_RENDERERS: dict[str, Callable[..., TGAImage]] = {
    "wireframe": render_wireframe,
    "illuminate": render_illuminated,
    "zbuffer": render_zbuffer,
    "depth-display": render_depth_display,
    "textured": render_textured,
    "diffuse": render_diffuse,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rasterkit", description="Render demo scenes to TGA files.")
    commands = parser.add_subparsers(dest="command", required=True)

    def with_output(sub: argparse.ArgumentParser) -> argparse.ArgumentParser:
        sub.add_argument("-o", "--output", default="output.tga", help="file to write")
        return sub

    with_output(commands.add_parser("getting-started", help="pixels and flipping"))
    lines = with_output(commands.add_parser("draw-lines", help="flat 2D scene of lines"))
    lines.add_argument("--width", type=int, default=800)
    lines.add_argument("--height", type=int, default=800)

    fan = with_output(commands.add_parser("fan", help="fan of lines from the centre"))
    fan.add_argument("--method", choices=sorted(LINE_METHODS), default="bresenham")

    tri = with_output(commands.add_parser("triangles", help="three demo triangles"))
    tri.add_argument("--method", choices=sorted(TRIANGLE_METHODS), default="barycentric")

    ybuf = commands.add_parser("ybuffer", help="y-buffer demo, six files")
    ybuf.add_argument("-d", "--directory", default=".", help="directory for the files")

    for name in (*_MODEL_RENDERERS, "random-colors"):
        sub = with_output(commands.add_parser(name, help=f"{name} rendering of an OBJ model"))
        sub.add_argument("model", help="Wavefront OBJ file")
        sub.add_argument("--width", type=int, default=800)
        sub.add_argument("--height", type=int, default=800)
        if name == "random-colors":
            sub.add_argument("--seed", type=int, default=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one demo; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    command = args.command

    if command == "ybuffer":
        _ybuffer_demo(Path(args.directory))
        return 0

    if command == "getting-started":
        image = getting_started()
    elif command == "draw-lines":
        image = draw_lines(args.width, args.height)
    elif command == "fan":
        image = _fan(args.method)
    elif command == "triangles":
        image = _triangles(args.method)
    else:
        try:
            model = Model.load(args.model)
        except OSError as error:
            print(f"cannot read model {args.model}: {error}", file=sys.stderr)
            return 1
        if command == "random-colors":
            image = render_random_colors(model, args.width, args.height, random.Random(args.seed))
        else:
            image = _MODEL_RENDERERS[command](model, args.width, args.height)

    image.write_tga_file(args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())