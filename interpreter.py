"""Turns command lines into canvas changes.

Grammar (whitespace separated, verbs are case sensitive)::

    chpen <char>
    line x0 y0 x1 y1
    rect x0 y0 w h
    circle x0 y0 r
    undo
    save [filename]
    load [filename]
    quit

``parse`` only validates. ``apply`` runs a drawing or pen command against a
canvas. ``Interpreter`` adds the session commands on top and decides what goes
into the history.
"""
import logging
import re
from typing import NamedTuple, Optional, Tuple, Union

from canvas import Canvas
from config import PainterConfig
from history import Command, History, HistoryFullError, undo as undo_history
from persistence import load_history, save_history
from result import MUTATING_VERBS, Result, is_error, message_for

__all__ = ["Interpreter", "Parsed", "Result", "apply", "is_error", "message_for", "parse"]

logger = logging.getLogger(__name__)

INT_RE = re.compile(r"[+-]?[0-9]+")

# Integer arguments are clamped to the C int range; the canvas clips the rest.
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

# Number of integer arguments for each drawing verb.
ARITY = {"line": 4, "rect": 4, "circle": 3}

Arg = Union[int, str, None]


class Parsed(NamedTuple):
    result: Result
    args: Tuple[Arg, ...] = ()


def _clamped_int(token):
    # Skip int() on huge tokens: it is slow and capped by the str digit limit.
    if len(token.lstrip("+-").lstrip("0")) > 10:
        return INT_MIN if token.startswith("-") else INT_MAX
    return min(max(int(token), INT_MIN), INT_MAX)


def _parse_ints(tokens):
    values = []
    for token in tokens:
        if not INT_RE.fullmatch(token):
            return None
        values.append(_clamped_int(token))
    return tuple(values)


def parse(text: str) -> Parsed:
    """Validates one command line without executing it."""
    words = text.split()
    if not words:
        return Parsed(Result.UNKNOWN)
    verb, rest = words[0], words[1:]

    if verb == "chpen":
        if not rest or len(rest[0]) != 1:
            return Parsed(Result.ERRLACKARGS)
        if len(rest) > 1:
            return Parsed(Result.UNKNOWN)
        return Parsed(Result.CHPEN, (rest[0],))

    if verb in ARITY:
        arity = ARITY[verb]
        if len(rest) < arity:
            return Parsed(Result.ERRLACKARGS)
        if len(rest) > arity:
            return Parsed(Result.UNKNOWN)
        values = _parse_ints(rest)
        if values is None:
            return Parsed(Result.ERRNONINT)
        return Parsed(MUTATING_VERBS[verb], values)

    if verb in ("save", "load"):
        if len(rest) > 1:
            return Parsed(Result.UNKNOWN)
        result = Result.SAVE if verb == "save" else Result.LOAD
        return Parsed(result, (rest[0] if rest else None,))

    if verb in ("undo", "quit") and not rest:
        return Parsed(Result.UNDO if verb == "undo" else Result.EXIT)

    return Parsed(Result.UNKNOWN)


def _draw(parsed: Parsed, canvas: Canvas) -> Result:
    result, args = parsed
    if result is Result.LINE:
        canvas.draw_line(*args)
    elif result is Result.RECT:
        canvas.draw_rect(*args)
    elif result is Result.CIRCLE:
        canvas.draw_circle(*args)
    elif result is Result.CHPEN:
        canvas.set_pen(args[0])
    else:
        raise ValueError(f"{result.name} does not draw")
    return result


def apply(command: Union[str, Parsed], canvas: Canvas) -> Result:
    """Executes a drawing or pen command, given as text or already parsed.

    Other verbs come back as UNKNOWN.
    """
    parsed = command if isinstance(command, Parsed) else parse(command)
    if parsed.result in MUTATING_VERBS.values():
        return _draw(parsed, canvas)
    if is_error(parsed.result):
        return parsed.result
    return Result.UNKNOWN


class Interpreter:
    """Executes command lines for one session.

    Live calls log every accepted drawing or pen command to the history. Replay
    calls (used by undo and load) run the same code path but never log.
    """

    def __init__(self, canvas: Canvas, history: History, config: Optional[PainterConfig] = None) -> None:
        self.canvas = canvas
        self.history = history
        self.config = config or PainterConfig(width=canvas.width, height=canvas.height, pen=canvas.pen)
        # Pen restored before every replay so rebuilt canvases match the original.
        self.initial_pen = self.config.pen

    def execute(self, text: str, replay: bool = False) -> Result:
        parsed = parse(text)
        result = parsed.result

        if result in MUTATING_VERBS.values():
            if not replay and self.history.full:
                raise HistoryFullError(f"history holds at most {self.history.capacity} commands")
            apply(parsed, self.canvas)
            logger.debug("%s %r", "replayed" if replay else "executed", text.strip())
            if not replay:
                self.history.append(Command(text.strip()))
            return result

        if replay:
            # Only drawing and pen commands may be replayed.
            return Result.UNKNOWN if not is_error(result) else result

        if result is Result.UNDO:
            return self.undo()
        if result is Result.SAVE:
            return save_history(self.history, parsed.args[0] or self.config.history_file)
        if result is Result.LOAD:
            return self.load(parsed.args[0])
        return result

    def replay(self, text: str) -> Result:
        return self.execute(text, replay=True)

    def undo(self) -> Result:
        if not undo_history(self.history, self.canvas, self.replay, pen=self.initial_pen):
            return Result.NOCOMMAND
        return Result.UNDO

    def load(self, filename: Optional[str] = None) -> Result:
        return load_history(
            filename or self.config.history_file,
            self.canvas,
            self.history,
            self.replay,
            pen=self.initial_pen,
            max_line_length=self.config.max_line_length,
        )
