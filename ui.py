import sys
from typing import Iterable, Optional, TextIO

from rich.console import Console

ESC = "\x1b"


class Terminal:
    """
    Writes canvas frames, prompts and status messages to a text stream.

    Cursor control (rewind, clear line, clear screen) is only emitted when
    ``ansi`` is true, which defaults to whether the stream is a tty.
    """
    def __init__(self, stream: Optional[TextIO] = None, ansi: Optional[bool] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        if ansi is None:
            isatty = getattr(self.stream, "isatty", None)
            ansi = bool(isatty and isatty())
        self.ansi = ansi
        self.console = Console(file=self.stream, force_terminal=ansi, highlight=False, soft_wrap=True)

    def _escape(self, code: str) -> None:
        if self.ansi:
            self.stream.write(f"{ESC}[{code}")
            self.stream.flush()

    def rewind(self, lines: int) -> None:
        """Moves the cursor up ``lines`` rows."""
        if lines > 0:
            self._escape(f"{lines}A")

    def clear_line(self) -> None:
        self._escape("2K")

    def clear_screen(self) -> None:
        self._escape("2J")

    def draw_frame(self, rows: Iterable[str]) -> None:
        for row in rows:
            self.stream.write(row + "\n")
        self.stream.flush()

    def prompt(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def status(self, message: str, error: bool = False) -> None:
        self.clear_line()
        # Markup off: command text echoed back may contain brackets.
        self.console.print(message, style="bold red" if error else "green", markup=False)
