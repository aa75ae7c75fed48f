import pytest

from rasterkit.depth import (
    INT_MIN,
    draw_column,
    new_ybuffer,
    new_zbuffer,
    render_depth_display,
    render_diffuse,
    render_textured,
    render_ybuffer,
    render_zbuffer,
    world_to_screen3,
    ybuffer_line,
    zbuffer_triangle,
)
from rasterkit.geometry import Vec2, Vec3
from rasterkit.model import Model
from rasterkit.tgaimage import Format, TGAColor, TGAImage

RED = TGAColor.rgba(255, 0, 0, 255)
GREEN = TGAColor.rgba(0, 255, 0, 255)

FACING = """v -0.5 -0.5 0
v 0.5 -0.5 0
v 0 0.5 0
vt 0.5 0.5
vn 0 0 1
f 1/1/1 2/1/1 3/1/1
"""

BACK = FACING.replace("f 1/1/1 2/1/1 3/1/1", "f 1/1/1 3/1/1 2/1/1")


def _bgr(image, x, y):
    return image.get(x, y).bgra[:3]


def _textured_model(text=FACING):
    model = Model.from_obj_text(text)
    texture = TGAImage(4, 4, Format.RGB)
    colour = TGAColor.rgba(10, 20, 30, 255)
    for x in range(4):
        for y in range(4):
            texture.set(x, y, colour)
    model.diffusemap = texture
    return model


def test_new_ybuffer_starts_at_int_min():
    buffer = new_ybuffer(5)
    assert buffer == [-(2**31)] * 5


def test_draw_column_fills_every_row():
    image = TGAImage(3, 16, Format.RGB)
    draw_column(image, 1, RED)
    assert all(_bgr(image, 1, y) == (0, 0, 255) for y in range(16))
    assert all(_bgr(image, 0, y) == (0, 0, 0) for y in range(16))


def test_ybuffer_line_records_heights_and_paints():
    image = TGAImage(800, 16, Format.RGB)
    ybuffer = new_ybuffer(800)
    ybuffer_line(image, ybuffer, Vec2(20, 34), Vec2(744, 400), RED)
    assert ybuffer[20] == 34
    assert ybuffer[744] == 400
    assert ybuffer[19] == INT_MIN
    assert ybuffer[745] == INT_MIN
    assert _bgr(image, 20, 0) == (0, 0, 255)
    assert _bgr(image, 19, 0) == (0, 0, 0)


def test_ybuffer_line_direction_does_not_matter():
    first = TGAImage(800, 16, Format.RGB)
    second = TGAImage(800, 16, Format.RGB)
    buf_a, buf_b = new_ybuffer(800), new_ybuffer(800)
    ybuffer_line(first, buf_a, Vec2(330, 463), Vec2(594, 200), RED)
    ybuffer_line(second, buf_b, Vec2(594, 200), Vec2(330, 463), RED)
    assert buf_a == buf_b
    assert first == second


def test_lower_line_is_hidden():
    image = TGAImage(800, 16, Format.RGB)
    ybuffer = new_ybuffer(800)
    ybuffer_line(image, ybuffer, Vec2(20, 34), Vec2(744, 400), RED)
    before = list(ybuffer)
    ybuffer_line(image, ybuffer, Vec2(20, 0), Vec2(100, 0), GREEN)
    assert ybuffer == before
    assert _bgr(image, 50, 5) == (0, 0, 255)


def test_higher_line_wins():
    image = TGAImage(800, 16, Format.RGB)
    ybuffer = new_ybuffer(800)
    ybuffer_line(image, ybuffer, Vec2(20, 34), Vec2(744, 400), RED)
    ybuffer_line(image, ybuffer, Vec2(120, 434), Vec2(444, 400), GREEN)
    assert ybuffer[120] == 434
    assert _bgr(image, 120, 0) == (0, 255, 0)
    assert _bgr(image, 500, 0) == (0, 0, 255)


def test_render_ybuffer_shows_a_third_of_height():
    image = TGAImage(2, 16, Format.RGB)
    render_ybuffer(image, [300, 0])
    assert _bgr(image, 0, 7) == (100, 100, 100)
    assert _bgr(image, 1, 7) == (0, 0, 0)


def test_new_zbuffer_size_and_value():
    buffer = new_zbuffer(4, 3)
    assert len(buffer) == 12
    assert set(buffer) == {float(-(2**31))}


def test_world_to_screen3():
    assert world_to_screen3(Vec3(0, 0, 0.5), 800, 800) == Vec3(400, 400, 0.5)
    assert world_to_screen3(Vec3(-1, -1, -0.25), 800, 600) == Vec3(0, 0, -0.25)


def _tri(z):
    return Vec3(0, 0, z), Vec3(9, 0, z), Vec3(0, 9, z)


def test_zbuffer_triangle_fills_and_records_depth():
    image = TGAImage(10, 10, Format.RGB)
    zbuffer = new_zbuffer(10, 10)
    zbuffer_triangle(image, zbuffer, *_tri(0.0), None, RED)
    assert _bgr(image, 1, 1) == (0, 0, 255)
    assert zbuffer[1 * 10 + 1] == pytest.approx(0.0)
    assert _bgr(image, 8, 8) == (0, 0, 0)
    assert zbuffer[8 * 10 + 8] == float(INT_MIN)


def test_zbuffer_triangle_respects_depth():
    image = TGAImage(10, 10, Format.RGB)
    zbuffer = new_zbuffer(10, 10)
    zbuffer_triangle(image, zbuffer, *_tri(0.0), None, RED)
    zbuffer_triangle(image, zbuffer, *_tri(-1.0), None, GREEN)
    assert _bgr(image, 1, 1) == (0, 0, 255)
    zbuffer_triangle(image, zbuffer, *_tri(1.0), None, GREEN)
    assert _bgr(image, 1, 1) == (0, 255, 0)
    assert zbuffer[11] == pytest.approx(1.0)


def test_zbuffer_triangle_skips_flat_triangle():
    image = TGAImage(10, 10, Format.RGB)
    zbuffer = new_zbuffer(10, 10)
    zbuffer_triangle(image, zbuffer, Vec3(0, 3, 0), Vec3(5, 3, 0), Vec3(9, 3, 0), None, RED)
    assert image == TGAImage(10, 10, Format.RGB)
    assert zbuffer == new_zbuffer(10, 10)


def test_zbuffer_triangle_passes_interpolated_uv():
    image = TGAImage(10, 10, Format.RGB)
    zbuffer = new_zbuffer(10, 10)
    seen = []

    def shade(uv):
        seen.append(uv)
        return RED

    uvs = [Vec2(0.5, 0.25)] * 3
    zbuffer_triangle(image, zbuffer, *_tri(0.0), uvs, shade)
    assert _bgr(image, 1, 1) == (0, 0, 255)
    assert zbuffer[11] == pytest.approx(0.0)
    assert _bgr(image, 8, 8) == (0, 0, 0)
    assert seen
    assert all(uv.x == pytest.approx(0.5) and uv.y == pytest.approx(0.25) for uv in seen)


def test_render_zbuffer_lights_facing_triangle():
    image = render_zbuffer(Model.from_obj_text(FACING), 20, 20)
    assert _bgr(image, 10, 11) == (255, 255, 255)
    assert _bgr(image, 0, 0) == (0, 0, 0)


def test_render_zbuffer_skips_back_face():
    image = render_zbuffer(Model.from_obj_text(BACK), 20, 20)
    assert image == TGAImage(20, 20, Format.RGB)


def test_depth_display_matches_zbuffer_render():
    model = Model.from_obj_text(FACING)
    assert render_depth_display(model, 20, 20) == render_zbuffer(model, 20, 20)


def test_render_textured_uses_diffuse_map():
    image = render_textured(_textured_model(), 20, 20)
    assert _bgr(image, 10, 11) == (30, 20, 10)
    assert _bgr(image, 0, 0) == (0, 0, 0)


def test_render_diffuse_full_light_equals_textured():
    model = _textured_model()
    assert render_diffuse(model, 20, 20) == render_textured(model, 20, 20)


def test_render_diffuse_dims_by_intensity():
    model = _textured_model()
    image = render_diffuse(model, 20, 20, Vec3(0.0, 0.0, 0.5))
    expected = TGAColor.rgba(10, 20, 30, 255) * 0.5
    assert _bgr(image, 10, 11) == expected.bgra[:3]
    assert _bgr(image, 10, 11) != (30, 20, 10)


def test_render_textured_skips_back_face():
    image = render_textured(_textured_model(BACK), 20, 20)
    assert image == TGAImage(20, 20, Format.RGB)