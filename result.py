"""Outcomes of interpreting one command line."""
from enum import Enum


class Result(Enum):
    EXIT = "exit"
    LINE = "line"
    RECT = "rect"
    CIRCLE = "circle"
    CHPEN = "chpen"
    UNDO = "undo"
    SAVE = "save"
    LOAD = "load"
    UNKNOWN = "unknown"
    ERRFILE = "errfile"
    ERRNONINT = "errnonint"
    ERRLACKARGS = "errlackargs"
    NOCOMMAND = "nocommand"


# Verbs that change the canvas and therefore go into the history.
MUTATING_VERBS = {
    "line": Result.LINE,
    "rect": Result.RECT,
    "circle": Result.CIRCLE,
    "chpen": Result.CHPEN,
}

ERRORS = frozenset(
    {Result.UNKNOWN, Result.ERRFILE, Result.ERRNONINT, Result.ERRLACKARGS, Result.NOCOMMAND}
)

MESSAGES = {
    Result.EXIT: "",
    Result.LINE: "1 line drawn",
    Result.RECT: "1 rectangle drawn",
    Result.CIRCLE: "1 circle drawn",
    Result.CHPEN: "pen changed",
    Result.UNDO: "undo!",
    Result.SAVE: "history saved",
    Result.LOAD: "loaded history file",
    Result.UNKNOWN: "error: unknown command",
    Result.ERRFILE: "error: file not open or line too long",
    Result.ERRNONINT: "error: non-int value is included",
    Result.ERRLACKARGS: "error: too few arguments",
    Result.NOCOMMAND: "error: no command in history",
}


def message_for(result: Result) -> str:
    return MESSAGES[result]


def is_error(result: Result) -> bool:
    return result in ERRORS
