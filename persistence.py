"""Reading and writing the command history as a flat text file.

The file holds one command per line in the order the commands were accepted,
so any line can be fed back to the interpreter unchanged.
"""
import logging
from typing import Callable, Optional

from canvas import Canvas
from history import Command, History
from result import MUTATING_VERBS, Result

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_FILE = "history.txt"
MAX_LINE_LENGTH = 1000


def save_history(history: History, filename: Optional[str] = None) -> Result:
    """Writes every history entry, one per line. The history is never modified."""
    path = filename or DEFAULT_HISTORY_FILE
    try:
        with open(path, "w", encoding="utf-8") as fh:
            for command in history:
                fh.write(command.text + "\n")
    except OSError as exc:
        logger.warning("cannot open %s for writing: %s", path, exc)
        return Result.ERRFILE
    logger.info("saved %d commands to %s", len(history), path)
    return Result.SAVE


def load_history(
    filename: Optional[str],
    canvas: Canvas,
    history: History,
    replay: Callable[[str], Result],
    pen: Optional[str] = None,
    max_line_length: int = MAX_LINE_LENGTH,
) -> Result:
    """Resets ``canvas`` and rebuilds it and ``history`` from a saved file.

    Lines whose first word is a drawing or pen verb are replayed and, when they
    succeed, logged again; anything else is skipped. A malformed drawing line
    aborts the load with its error, and the canvas stays as far as it got.
    """
    path = filename or DEFAULT_HISTORY_FILE
    canvas.reset()
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if pen is not None:
                canvas.set_pen(pen)
            history.clear()
            for lineno, raw in enumerate(fh, start=1):
                text = raw.strip()
                if len(text) > max_line_length:
                    logger.warning("%s:%d: command too long", path, lineno)
                    return Result.ERRFILE
                if not text:
                    continue
                command = Command(text)
                if command.verb not in MUTATING_VERBS:
                    continue
                if history.full:
                    logger.warning("%s:%d: history capacity reached, rest of file ignored", path, lineno)
                    return Result.ERRFILE
                result = replay(text)
                if result in (Result.ERRNONINT, Result.ERRLACKARGS):
                    logger.warning("%s:%d: %r rejected (%s)", path, lineno, text, result.name)
                    return result
                if result is MUTATING_VERBS[command.verb]:
                    history.append(command)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("cannot read %s: %s", path, exc)
        return Result.ERRFILE
    logger.info("loaded %d commands from %s", len(history), path)
    return Result.LOAD
