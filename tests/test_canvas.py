"""Canvas grid and rasterization tests."""

import numpy as np
import pytest

from canvas import Canvas
from conftest import cells


def test_new_canvas_is_blank():
    canvas = Canvas(4, 3)
    assert canvas.is_blank()
    assert canvas.grid.shape == (3, 4)


@pytest.mark.parametrize("size", [(0, 5), (5, 0), (-1, 3)])
def test_non_positive_size_rejected(size):
    with pytest.raises(ValueError):
        Canvas(*size)


def test_line_endpoints_and_truncated_steps(canvas):
    canvas.draw_line(0, 0, 9, 4)
    expected = {(i, 4 * i // 9) for i in range(10)}
    assert cells(canvas) == expected


def test_line_truncates_toward_zero_for_negative_steps():
    canvas = Canvas(5, 5)
    canvas.draw_line(4, 4, 0, 1)
    # floor division would put the second point at (3, 3)
    assert cells(canvas) == {(4, 4), (3, 4), (2, 3), (1, 2), (0, 1)}


def test_degenerate_line_plots_one_point(canvas):
    canvas.draw_line(2, 3, 2, 3)
    assert cells(canvas) == {(2, 3)}


def test_out_of_bounds_points_are_clipped(canvas):
    canvas.draw_line(-5, -5, 20, 20)
    canvas.draw_circle(100, 100, 3)
    canvas.draw_rect(-3, -3, 30, 30)
    assert canvas.grid.shape == (5, 10)
    assert all(0 <= x < 10 and 0 <= y < 5 for x, y in cells(canvas))
    assert canvas.get(0, 0) == "*"


def test_rect_small_outline(canvas):
    canvas.draw_rect(1, 1, 3, 2)
    assert cells(canvas) == {(1, 1), (2, 1), (3, 1), (1, 2), (2, 2), (3, 2)}


def test_rect_leaves_interior_blank():
    canvas = Canvas(8, 6)
    canvas.draw_rect(1, 1, 4, 3)
    assert (2, 2) not in cells(canvas)
    assert (3, 2) not in cells(canvas)
    assert {(1, 1), (4, 1), (1, 3), (4, 3), (1, 2), (4, 2)} <= cells(canvas)
    assert len(cells(canvas)) == 10


@pytest.mark.parametrize("w,h", [(0, 3), (3, 0), (-2, 4)])
def test_empty_rect_is_noop(canvas, w, h):
    canvas.draw_rect(1, 1, w, h)
    assert canvas.is_blank()


def test_circle_of_radius_one_samples_axis_points_and_centre():
    canvas = Canvas(11, 11)
    canvas.draw_circle(5, 5, 1)
    # Every off-axis sample truncates back onto the centre cell.
    assert cells(canvas) == {(6, 5), (5, 6), (4, 5), (5, 4), (5, 5)}


def test_circle_hits_cardinal_points():
    canvas = Canvas(21, 21)
    canvas.draw_circle(10, 10, 8)
    assert {(18, 10), (10, 18), (2, 10), (10, 2)} <= cells(canvas)
    assert canvas.get(10, 10) == " "


def test_zero_radius_circle_is_noop(canvas):
    canvas.draw_circle(5, 2, 0)
    assert canvas.is_blank()


def test_pen_change_and_reset():
    canvas = Canvas(3, 3)
    canvas.set_pen("#")
    canvas.plot(0, 0)
    assert canvas.get(0, 0) == "#"
    canvas.reset()
    assert canvas.is_blank()
    assert canvas.pen == "#"


def test_get_outside_canvas_raises(canvas):
    with pytest.raises(IndexError):
        canvas.get(10, 0)


def test_render_frame():
    canvas = Canvas(3, 2)
    canvas.plot(0, 0)
    assert canvas.render() == ["+---+", "|*  |", "|   |", "+---+"]


def test_snapshot_is_a_copy(canvas):
    before = canvas.snapshot()
    canvas.plot(1, 1)
    assert not np.array_equal(before, canvas.grid)


def test_png_export(tmp_path):
    from PIL import Image

    canvas = Canvas(4, 2)
    canvas.plot(1, 0)
    path = tmp_path / "out.png"
    canvas.save_to_png(str(path))
    with Image.open(path) as img:
        assert img.size == (4, 2)
        assert img.getpixel((1, 0)) == 0
        assert img.getpixel((0, 0)) == 255


def _reference_line(width, height, x0, y0, x1, y1):
    """Cells of the plain step-by-step line, clipped to the canvas."""
    n = max(abs(x1 - x0), abs(y1 - y0))
    points = [(x0, y0)]
    for i in range(1, n + 1):
        points.append((x0 + int((i * (x1 - x0)) / n), y0 + int((i * (y1 - y0)) / n)))
    return {(x, y) for x, y in points if 0 <= x < width and 0 <= y < height}


@pytest.mark.parametrize(
    "line",
    [
        (-30, -7, 40, 12),
        (40, 12, -30, -7),
        (25, -3, -14, 9),
        (-5, 2, 60, 3),
        (3, 40, 6, -40),
        (9, 4, 0, 0),
        (-100, 2, -50, 2),
    ],
)
def test_clipped_line_matches_plain_stepping(line):
    canvas = Canvas(10, 5)
    canvas.draw_line(*line)
    assert cells(canvas) == _reference_line(10, 5, *line)


def test_very_long_line_only_visits_visible_steps():
    canvas = Canvas(10, 5)
    canvas.draw_line(0, 0, 2_000_000_000, 0)
    canvas.draw_line(-2_000_000_000, 4, 2_000_000_000, 4)
    assert cells(canvas) == {(x, 0) for x in range(10)} | {(x, 4) for x in range(10)}


def test_huge_radius_circle_does_not_fail(canvas):
    canvas.draw_circle(0, 0, 2 ** 31 - 1)
    assert canvas.grid.shape == (5, 10)
