"""Leveled structured logger writing JSON lines, and interceptor options."""

from __future__ import annotations

import enum
import json
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, TextIO

from atlaskit.rpc.errdetails import Code

RFC3339 = "rfc3339"
RFC3339_NANO = "rfc3339nano"


class Level(enum.IntEnum):
    """Log levels; a lower value is more severe."""

    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5
    TRACE = 6


_LEVEL_NAMES = {
    Level.PANIC: "panic",
    Level.FATAL: "fatal",
    Level.ERROR: "error",
    Level.WARN: "warning",
    Level.INFO: "info",
    Level.DEBUG: "debug",
    Level.TRACE: "trace",
}

_PARSE_NAMES = {name: level for level, name in _LEVEL_NAMES.items()}
_PARSE_NAMES["warn"] = Level.WARN

_RESERVED_KEYS = ("time", "msg", "level")


def parse_level(text: str) -> Level:
    """Return the level named by ``text``, ignoring case.

    Raises ValueError for an unknown name.
    """
    level = _PARSE_NAMES.get(text.lower())
    if level is None:
        raise ValueError(f"not a valid log level: {json.dumps(text)}")
    return level


def _format_rfc3339(moment: datetime, fmt: str) -> str:
    """Format ``moment`` as RFC 3339, with trimmed fractional seconds for the nano form."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if fmt == RFC3339_NANO:
        frac = f"{moment.microsecond:06d}".rstrip("0")
        if frac:
            text += "." + frac
    offset = moment.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    if minutes == 0:
        return text + "Z"
    sign = "+" if minutes > 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{mins:02d}"


Hook = Callable[[Level, str, dict], None]


class LoggerPanic(RuntimeError):
    """Raised after a message is logged at PANIC level."""


@dataclass
class Logger:
    """A logger that writes one JSON object per message to ``out``."""

    out: TextIO = field(default_factory=lambda: sys.stderr)
    level: Level = Level.INFO
    timestamp_format: str = RFC3339
    hooks: dict[Level, list[Hook]] = field(default_factory=dict)
    report_caller: bool = False
    exit_func: Callable[[int], Any] = sys.exit

    def with_fields(self, fields: dict[str, Any]) -> Entry:
        """Return an entry of this logger carrying ``fields``."""
        return Entry(self, dict(fields))

    def log(self, level: Level, message: str, fields: dict[str, Any] | None = None) -> None:
        """Write ``message`` with ``fields`` if ``level`` is enabled.

        FATAL calls ``exit_func(1)`` afterwards; PANIC raises LoggerPanic.
        """
        data = dict(fields or {})
        if level <= self.level:
            for hook in self.hooks.get(level, ()):
                hook(level, message, data)
            record = dict(data)
            for key in _RESERVED_KEYS:
                if key in record:
                    record["fields." + key] = record.pop(key)
            record["time"] = _format_rfc3339(datetime.now().astimezone(), self.timestamp_format)
            record["msg"] = message
            record["level"] = _LEVEL_NAMES[Level(level)]
            self.out.write(json.dumps(record, sort_keys=True, default=str) + "\n")
        if level == Level.PANIC:
            raise LoggerPanic(message)
        if level == Level.FATAL:
            self.exit_func(1)


@dataclass
class Entry:
    """A logger together with the fields attached to its messages."""

    logger: Logger
    data: dict[str, Any] = field(default_factory=dict)

    def with_fields(self, fields: dict[str, Any]) -> Entry:
        """Return a new entry with ``fields`` added to a copy of this one's."""
        return Entry(self.logger, {**self.data, **fields})

    def log(self, level: Level, message: str) -> None:
        """Log ``message`` with this entry's fields."""
        self.logger.log(level, message, self.data)


def new_logger(level: str) -> Logger:
    """Return a JSON logger at the named level.

    An unknown level name is reported and the logger stays at INFO.
    """
    logger = Logger(timestamp_format=RFC3339_NANO)
    try:
        logger.level = parse_level(level)
    except ValueError:
        logger.log(Level.ERROR, f"Invalid {json.dumps(level)} level provided for log")
        logger.level = Level.INFO
    return logger


CodeToLevel = Callable[[int], Level]

_CODE_LEVELS = {
    Code.OK: Level.INFO,
    Code.CANCELLED: Level.INFO,
    Code.UNKNOWN: Level.ERROR,
    Code.INVALID_ARGUMENT: Level.INFO,
    Code.DEADLINE_EXCEEDED: Level.WARN,
    Code.NOT_FOUND: Level.INFO,
    Code.ALREADY_EXISTS: Level.INFO,
    Code.PERMISSION_DENIED: Level.WARN,
    Code.UNAUTHENTICATED: Level.INFO,
    Code.RESOURCE_EXHAUSTED: Level.WARN,
    Code.FAILED_PRECONDITION: Level.WARN,
    Code.ABORTED: Level.WARN,
    Code.OUT_OF_RANGE: Level.WARN,
    Code.UNIMPLEMENTED: Level.ERROR,
    Code.INTERNAL: Level.ERROR,
    Code.UNAVAILABLE: Level.WARN,
    Code.DATA_LOSS: Level.ERROR,
}


def default_code_to_level(code: int) -> Level:
    """Map an RPC status code to the level a finished call is logged at."""
    return _CODE_LEVELS.get(code, Level.ERROR)


@dataclass
class Options:
    """Settings of the logging interceptors."""

    code_to_level: CodeToLevel = default_code_to_level
    fields: list[str] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)


Option = Callable[[Options], None]


def with_levels(f: CodeToLevel) -> Option:
    """Use ``f`` to map status codes to log levels."""

    def apply(options: Options) -> None:
        options.code_to_level = f

    return apply


def with_custom_fields(fields: list[str]) -> Option:
    """Log the given token fields."""

    def apply(options: Options) -> None:
        options.fields = fields

    return apply


def with_custom_headers(headers: list[str]) -> Option:
    """Log the given request headers."""

    def apply(options: Options) -> None:
        options.headers = headers

    return apply


def init_options(opts: Iterable[Option]) -> Options:
    """Return default options with ``opts`` applied in order."""
    options = Options()
    for opt in opts:
        opt(options)
    return options


_LEVEL_LOGGED = {Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR, Level.FATAL, Level.PANIC}


def level_log(entry: Entry, level: Level, message: str) -> None:
    """Log ``message`` at ``level``; TRACE and unknown levels are dropped."""
    if level in _LEVEL_LOGGED:
        entry.log(Level(level), message)