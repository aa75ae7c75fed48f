"""A small software rasterizer: TGA images, OBJ models, lines, triangles and depth buffers."""

__version__ = "0.1.0"

__all__ = ["cli", "depth", "geometry", "lines", "model", "tgaimage", "triangles"]