import math

import numpy as np
from PIL import Image

BLANK = " "


def _trunc_div(num, den):
    """Integer division truncated toward zero."""
    q = abs(num) // abs(den)
    return q if (num >= 0) == (den > 0) else -q


def _first(pred, lo, hi):
    """Smallest i in [lo, hi) with pred(i) true, or hi; pred must be monotone."""
    while lo < hi:
        mid = (lo + hi) // 2
        if pred(mid):
            hi = mid
        else:
            lo = mid + 1
    return lo


def _step_range(start, delta, n, size):
    """Steps i in [1, n] whose coordinate start + trunc(i*delta/n) lies in [0, size)."""
    def coord(i):
        return start + _trunc_div(i * delta, n)

    if delta >= 0:
        lo = _first(lambda i: coord(i) >= 0, 1, n + 1)
        hi = _first(lambda i: coord(i) >= size, 1, n + 1)
    else:
        lo = _first(lambda i: coord(i) < size, 1, n + 1)
        hi = _first(lambda i: coord(i) < 0, 1, n + 1)
    return lo, hi


class Canvas:
    """
    Manages the character grid, the active pen glyph and the drawing primitives.
    """
    def __init__(self, width, height, pen="*"):
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pen = pen
        # Row-major: grid[y, x]
        self.grid = np.full((height, width), BLANK, dtype="<U1")

    def reset(self):
        """Blanks every cell. Dimensions and pen are kept."""
        self.grid[:, :] = BLANK

    def set_pen(self, pen):
        self.pen = pen

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def plot(self, x, y):
        """Writes the pen at (x, y); points outside the canvas are clipped."""
        if self.in_bounds(x, y):
            self.grid[y, x] = self.pen

    def get(self, x, y):
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self.width}x{self.height} canvas")
        return str(self.grid[y, x])

    def is_blank(self):
        return bool((self.grid == BLANK).all())

    def snapshot(self):
        """Returns a copy of the cell grid."""
        return self.grid.copy()

    def draw_line(self, x0, y0, x1, y1):
        """Draws a line by stepping along the longer axis."""
        n = max(abs(x1 - x0), abs(y1 - y0))
        self.plot(x0, y0)
        if n == 0:
            return
        # Both coordinates move monotonically with i, so only one contiguous
        # run of steps can land on the canvas.
        x_lo, x_hi = _step_range(x0, x1 - x0, n, self.width)
        y_lo, y_hi = _step_range(y0, y1 - y0, n, self.height)
        for i in range(max(x_lo, y_lo), min(x_hi, y_hi)):
            x = x0 + _trunc_div(i * (x1 - x0), n)
            y = y0 + _trunc_div(i * (y1 - y0), n)
            self.plot(x, y)

    def draw_rect(self, x0, y0, width, height):
        """Draws the outline of a width x height rectangle anchored at (x0, y0)."""
        if width <= 0 or height <= 0:
            return
        x1 = x0 + width - 1
        y1 = y0 + height - 1
        self.draw_line(x0, y0, x1, y0)
        self.draw_line(x0, y1, x1, y1)
        self.draw_line(x0, y0, x0, y1)
        self.draw_line(x1, y0, x1, y1)

    def draw_circle(self, x0, y0, r):
        """Draws a circle by sampling one point per degree."""
        if r <= 0:
            return
        for deg in range(360):
            rad = deg * math.pi / 180.0
            x = x0 + int(r * math.cos(rad))
            y = y0 + int(r * math.sin(rad))
            self.plot(x, y)

    def render(self):
        """Returns the bordered frame as a list of text rows."""
        border = "+" + "-" * self.width + "+"
        rows = [border]
        for row in self.grid:
            rows.append("|" + "".join(row) + "|")
        rows.append(border)
        return rows

    def to_image(self):
        """Converts the bitmap to a grayscale image: set cells black, blank cells white."""
        pixels = np.where(self.grid == BLANK, 255, 0).astype(np.uint8)
        return Image.fromarray(pixels)

    def save_to_png(self, filename="drawing.png"):
        """Saves the canvas to a PNG file."""
        self.to_image().save(filename)
