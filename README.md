# rasterkit

A small software rasterizer in pure Python, with no third-party
dependencies. It covers the basic steps of turning a 3D mesh into pixels:

- reading and writing TGA images, raw and RLE-compressed
  (`rasterkit.tgaimage`)
- small vector and matrix types: `Vec2`, `Vec3`, `Matrix`
  (`rasterkit.geometry`)
- loading Wavefront OBJ models and their diffuse, normal and specular
  textures (`rasterkit.model`)
- line drawing, from naive parametric stepping up to integer Bresenham, and
  wireframe rendering (`rasterkit.lines`)
- triangle drawing by outline, sweep line and barycentric coordinates, with
  flat shading (`rasterkit.triangles`)
- hidden-surface removal with a y-buffer and a z-buffer, plus textured and
  diffuse-lit rendering (`rasterkit.depth`)
- a `rasterkit` command that renders demo scenes (`rasterkit.cli`)

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install .[test]
pytest
```

## Drawing into an image

```python
from rasterkit.tgaimage import Format, TGAColor, TGAImage
from rasterkit.lines import line

red = TGAColor.rgba(255, 0, 0, 255)

image = TGAImage(100, 100, Format.RGB)
line(image, 13, 20, 80, 40, red)
image.flip_vertically()          # put the origin at the bottom-left corner
image.write_tga_file("output.tga")
```

`TGAImage.set` ignores pixels outside the image and returns `False` for
them; `TGAImage.get` returns a blank colour there, so drawing code does not
need to clip. `write_tga_file` writes RLE-compressed data unless given
`rle=False`; `to_tga_bytes` and `from_tga_bytes` work in memory. Data that
cannot be decoded raises `TGAError`.

## Rendering a model

```python
from rasterkit.geometry import Vec3
from rasterkit.model import Model
from rasterkit.depth import render_diffuse

model = Model.load("african_head.obj")
image = render_diffuse(model, 800, 800, Vec3(0.0, 0.0, 1.0))
image.write_tga_file("output.tga")
```

The `render_*` functions return an image already flipped so that the
origin is at the bottom-left corner.

`Model.load` also looks for textures next to the OBJ file, named after it
with the suffixes `_diffuse.tga`, `_nm_tangent.tga` and `_spec.tga`; a
texture that is missing or unreadable is left empty. `Model.from_obj_text`
parses OBJ text held in memory.

Other renderers take the same arguments: `render_zbuffer`,
`render_depth_display` and `render_textured` in `rasterkit.depth`, and
`render_illuminated` in `rasterkit.triangles`. `render_wireframe` in
`rasterkit.lines` draws the edges of every face, and
`render_random_colors` in `rasterkit.triangles` fills each face with a
colour from an optional `random.Random`.

## Command line

`rasterkit` takes one sub-command naming the scene to render. Most write a
single file, `output.tga` unless `-o/--output` says otherwise.

```
rasterkit getting-started
rasterkit draw-lines --width 800 --height 800
rasterkit fan --method bresenham -o fan.tga
rasterkit triangles --method sweep
rasterkit ybuffer -d out/
rasterkit wireframe african_head.obj
rasterkit random-colors african_head.obj --seed 1
```

- `fan --method` is one of `parametric`, `x-step`, `transposed`,
  `float-error`, `bresenham` (the default).
- `triangles --method` is one of `outline`, `sweep`, `barycentric` (the
  default); the filling methods paint every triangle white.
- `ybuffer` writes `output1.tga` to `output3.tga` and `buffer1.tga` to
  `buffer3.tga` into the given directory (the current one by default).
- The model commands are `wireframe`, `illuminate`, `zbuffer`,
  `depth-display`, `textured`, `diffuse` and `random-colors`. Each takes an
  OBJ file and `--width`/`--height` (800 by default); `random-colors` also
  takes `--seed`. If the model file cannot be read, the command prints a
  message and exits with status 1.

## What it does not do

Rendering is orthographic: the model's x and y are mapped straight onto the
image, with no camera, perspective projection or view transformation. There
is no window or viewer; results are only written as TGA files.