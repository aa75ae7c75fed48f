import pytest

from rasterkit.geometry import Vec2
from rasterkit.lines import (
    BLUE,
    GREEN,
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


def lit(image):
    return {
        (x, y)
        for x in range(image.width)
        for y in range(image.height)
        if image.get(x, y).bgra[:3] != (0, 0, 0)
    }


def blank(size=100):
    return TGAImage(size, size, Format.RGB)


def is_connected(pixels):
    """Every pixel has a neighbour (8-connectivity) unless only one exists."""
    if len(pixels) < 2:
        return True
    return all(
        any((x + dx, y + dy) in pixels for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy)
        for x, y in pixels
    )


@pytest.mark.parametrize("end", [(90, 10), (10, 90), (20, 30), (50, 90), (90, 50), (10, 10)])
def test_bresenham_endpoints_and_count(end):
    image = blank()
    line(image, 50, 50, *end, WHITE)
    pixels = lit(image)
    assert (50, 50) in pixels
    assert end in pixels
    assert len(pixels) == max(abs(end[0] - 50), abs(end[1] - 50)) + 1
    assert is_connected(pixels)


def test_bresenham_direction_does_not_matter():
    forward, backward = blank(), blank()
    line(forward, 3, 7, 80, 41, WHITE)
    line(backward, 80, 41, 3, 7, WHITE)
    assert forward == backward


def test_bresenham_horizontal_exact():
    image = blank(10)
    line(image, 2, 4, 6, 4, WHITE)
    assert lit(image) == {(x, 4) for x in range(2, 7)}


def test_bresenham_single_point():
    image = blank(10)
    line(image, 3, 3, 3, 3, WHITE)
    assert lit(image) == {(3, 3)}


def test_line_clipped_outside_image():
    image = blank(10)
    line(image, -5, 2, 20, 2, WHITE)
    assert lit(image) == {(x, 2) for x in range(10)}


def test_line_between_matches_line():
    a, b = blank(), blank()
    line_between(a, Vec2(5, 9), Vec2(60, 70), WHITE)
    line(b, 5, 9, 60, 70, WHITE)
    assert a == b


def test_line_colour_stored():
    image = blank(10)
    line(image, 0, 0, 4, 0, GREEN)
    assert image.get(2, 0).bgra[:3] == GREEN.bgra[:3]


def test_x_step_needs_left_to_right():
    image = blank()
    line_x_step(image, 50, 50, 10, 10, WHITE)
    assert lit(image) == set()


def test_x_step_shallow_line():
    image = blank()
    line_x_step(image, 10, 10, 50, 10, WHITE)
    assert lit(image) == {(x, 10) for x in range(10, 51)}


def test_x_step_vertical_draws_nothing():
    image = blank()
    line_x_step(image, 50, 50, 50, 90, WHITE)
    assert lit(image) == set()


def test_transposed_steep_line_covers_every_row():
    image = blank()
    line_transposed(image, 50, 50, 60, 90, WHITE)
    rows = {y for _, y in lit(image)}
    assert rows == set(range(50, 91))


def test_transposed_matches_in_both_directions():
    a, b = blank(), blank()
    line_transposed(a, 50, 50, 10, 90, WHITE)
    line_transposed(b, 10, 90, 50, 50, WHITE)
    assert a == b


@pytest.mark.parametrize("end", [(10, 30), (70, 90), (90, 20), (30, 10)])
def test_float_error_line_is_connected(end):
    image = blank()
    line_float_error(image, 50, 50, *end, WHITE)
    pixels = lit(image)
    assert (50, 50) in pixels
    assert end in pixels
    assert is_connected(pixels)


def test_float_error_single_point():
    image = blank(10)
    line_float_error(image, 4, 4, 4, 4, WHITE)
    assert lit(image) == {(4, 4)}


def test_parametric_starts_at_origin_and_stays_on_segment():
    image = blank()
    line_parametric(image, 10, 10, 90, 10, WHITE)
    pixels = lit(image)
    assert (10, 10) in pixels
    assert all(y == 10 and 10 <= x < 90 for x, y in pixels)


def test_draw_fan_calls_from_centre():
    calls = []

    def record(image, x0, y0, x1, y1, color):
        calls.append((x0, y0, x1, y1, color))
        line(image, x0, y0, x1, y1, color)

    recorded = blank()
    draw_fan(recorded, record)
    reference = blank()
    draw_fan(reference, line)
    assert recorded == reference
    assert (50, 50) in lit(recorded)
    assert len(calls) == 26
    assert all((c[0], c[1]) == (50, 50) for c in calls)
    assert calls[0][2:] == (10, 10, BLUE)
    assert calls[-1][2:] == (90, 10, BLUE)


def test_draw_fan_with_bresenham_reaches_all_ends():
    image = blank()
    draw_fan(image, line)
    pixels = lit(image)
    for end in [(10, 10), (10, 90), (90, 90), (90, 10), (50, 90)]:
        assert end in pixels


def test_render_wireframe_corners():
    mesh = Model.from_obj_text(
        "v -1 -1 0\nv 0.8 -1 0\nv -1 0.8 0\nf 1/1/1 2/1/1 3/1/1\n"
    )
    image = render_wireframe(mesh, 10, 10)
    pixels = lit(image)
    # origin (0, 0) ends up on the bottom row after the vertical flip
    assert (0, 9) in pixels
    assert (0, 0) in pixels
    assert (9, 9) in pixels
    assert image.get(0, 9).bgra[:3] == WHITE.bgra[:3]


def test_render_wireframe_empty_model():
    image = render_wireframe(Model(), 8, 8)
    assert (image.width, image.height) == (8, 8)
    assert lit(image) == set()