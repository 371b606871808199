import logging
from typing import Optional, TextIO

import click
from rich.console import Console
from rich.logging import RichHandler

from canvas import Canvas
from config import PainterConfig
from history import History
from interpreter import INT_RE, Interpreter
from result import Result, is_error, message_for
from ui import Terminal

logger = logging.getLogger(__name__)

PROMPT = "* > "


class PaintSession:
    """One interactive drawing session: a canvas, its history and the read loop."""

    def __init__(self, config: PainterConfig, terminal: Optional[Terminal] = None) -> None:
        self.config = config
        self.canvas = Canvas(config.width, config.height, config.pen)
        self.history = History(capacity=config.max_history)
        self.interpreter = Interpreter(self.canvas, self.history, config)
        self.terminal = terminal or Terminal()

    def prompt_text(self) -> str:
        # A bounded history shows how many commands are logged so far.
        if self.history.capacity is None:
            return PROMPT
        return f"{len(self.history)} > "

    def handle(self, line: str) -> Result:
        """Executes one input line and reports its outcome."""
        result = self.interpreter.execute(line)
        if result is not Result.EXIT:
            self.terminal.status(message_for(result), error=is_error(result))
        return result

    def run(self, stdin: TextIO) -> None:
        """Reads commands until quit, end of input or a full history."""
        while not self.history.full:
            self.terminal.draw_frame(self.canvas.render())
            self.terminal.prompt(self.prompt_text())
            line = stdin.readline()
            if not line:
                break
            if self.handle(line) is Result.EXIT:
                break
            # Step back over the status and input lines, then over the frame.
            self.terminal.rewind(2)
            self.terminal.clear_line()
            self.terminal.rewind(self.canvas.height + 2)
        if self.history.full:
            logger.warning("history reached %d commands, ending session", self.history.capacity)
        self.terminal.clear_screen()


class CanvasSize(click.ParamType):
    """A positive base-10 integer, rejecting any trailing characters."""

    name = "size"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        if not INT_RE.fullmatch(value):
            self.fail(f"{value}: irregular character found", param, ctx)
        size = int(value)
        if size <= 0:
            self.fail(f"{value}: must be positive", param, ctx)
        return size


def configure_logging(level: str) -> None:
    # Logs go to stderr so they never land inside the canvas frame.
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("width", type=CanvasSize())
@click.argument("height", type=CanvasSize())
@click.option("--pen", default=None, help="Initial pen glyph (default '*').")
@click.option("--history-file", default=None, help="Default file for save and load.")
@click.option("--max-history", type=click.IntRange(min=1), default=None,
              help="End the session once this many commands are logged.")
@click.option("--png", "png_path", type=click.Path(dir_okay=False), default=None,
              help="Write the final canvas to this PNG file on exit.")
@click.option("--log-level", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def cli(width, height, pen, history_file, max_history, png_path, log_level):
    """Draw on a WIDTH x HEIGHT character canvas with line commands read from stdin."""
    configure_logging(log_level)
    try:
        config = PainterConfig.from_env(width, height).override(
            pen=pen, history_file=history_file, max_history=max_history
        )
    except ValueError as exc:
        raise click.UsageError(str(exc))

    session = PaintSession(config)
    session.run(click.get_text_stream("stdin"))
    if png_path:
        session.canvas.save_to_png(png_path)
        logger.info("canvas written to %s", png_path)


if __name__ == "__main__":
    cli()
