"""Command log backing undo, save and load."""
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)


class HistoryFullError(Exception):
    """Raised when appending to a history that reached its capacity."""


@dataclass(frozen=True)
class Command:
    """The accepted text of one mutating directive, re-parseable as is."""

    text: str

    @property
    def verb(self) -> str:
        return self.text.split(maxsplit=1)[0]


class History:
    """Ordered log of accepted commands, oldest first.

    With ``capacity`` set the log is bounded: ``full`` turns true once that many
    commands are stored and further appends raise ``HistoryFullError``.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is not None and capacity <= 0:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._commands: List[Command] = []

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands))

    def __bool__(self) -> bool:
        return bool(self._commands)

    @property
    def full(self) -> bool:
        return self.capacity is not None and len(self._commands) >= self.capacity

    def append(self, command: Command) -> None:
        if self.full:
            raise HistoryFullError(f"history holds at most {self.capacity} commands")
        self._commands.append(command)
        logger.debug("history += %r (%d entries)", command.text, len(self._commands))

    def drop_last(self) -> Command:
        command = self._commands.pop()
        logger.debug("history -= %r (%d entries)", command.text, len(self._commands))
        return command

    def clear(self) -> None:
        self._commands.clear()

    def texts(self) -> List[str]:
        return [command.text for command in self._commands]


def undo(history: History, canvas, replay, pen: Optional[str] = None) -> bool:
    """Rebuilds ``canvas`` from every logged command but the last, then drops it.

    ``replay`` executes one command text without logging it. ``pen`` is the glyph
    the session started with; it is restored before replaying so that undoing a
    ``chpen`` reverts the pen as well. Returns False, touching nothing, when the
    history is empty.
    """
    if not history:
        return False
    canvas.reset()
    if pen is not None:
        canvas.set_pen(pen)
    kept = list(history)[:-1]
    for command in kept:
        replay(command.text)
    dropped = history.drop_last()
    logger.debug("undo: replayed %d commands, dropped %r", len(kept), dropped.text)
    return True
