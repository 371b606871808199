import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from persistence import DEFAULT_HISTORY_FILE, MAX_LINE_LENGTH

ENV_PREFIX = "PAINTER_"


@dataclass(frozen=True)
class PainterConfig:
    width: int = 80
    height: int = 24
    pen: str = "*"
    history_file: str = DEFAULT_HISTORY_FILE
    # None keeps every command; a number ends the session once that many are logged.
    max_history: Optional[int] = None
    max_line_length: int = MAX_LINE_LENGTH

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"canvas size must be positive, got {self.width}x{self.height}")
        if len(self.pen) != 1 or self.pen.isspace():
            raise ValueError(f"pen must be a single visible character, got {self.pen!r}")
        if self.max_history is not None and self.max_history <= 0:
            raise ValueError(f"max_history must be positive, got {self.max_history}")

    @classmethod
    def from_env(cls, width: int, height: int, environ: Optional[Mapping[str, str]] = None) -> "PainterConfig":
        """Builds a config for the given size, reading PAINTER_* overrides."""
        env = os.environ if environ is None else environ
        config = cls(width=width, height=height)
        if env.get(ENV_PREFIX + "PEN"):
            config = replace(config, pen=env[ENV_PREFIX + "PEN"])
        if env.get(ENV_PREFIX + "HISTORY_FILE"):
            config = replace(config, history_file=env[ENV_PREFIX + "HISTORY_FILE"])
        if env.get(ENV_PREFIX + "MAX_HISTORY"):
            config = replace(config, max_history=int(env[ENV_PREFIX + "MAX_HISTORY"]))
        return config

    def override(self, **changes) -> "PainterConfig":
        """Returns a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
