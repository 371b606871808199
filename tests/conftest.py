"""
Pytest configuration for the painter tests.
"""
import os
import sys

import pytest

# The painter modules live at the repository root.
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from canvas import Canvas  # noqa: E402
from config import PainterConfig  # noqa: E402
from history import History  # noqa: E402
from interpreter import Interpreter  # noqa: E402


@pytest.fixture
def canvas():
    return Canvas(10, 5)


@pytest.fixture
def interpreter(tmp_path):
    config = PainterConfig(width=10, height=5, history_file=str(tmp_path / "history.txt"))
    canvas = Canvas(config.width, config.height, config.pen)
    return Interpreter(canvas, History(), config)


def cells(canvas):
    """Set of (x, y) coordinates that are not blank."""
    return {(x, y) for y in range(canvas.height) for x in range(canvas.width) if canvas.get(x, y) != " "}
