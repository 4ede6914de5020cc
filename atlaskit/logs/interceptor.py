"""Per-request log levels, gateway log annotations and logger helpers."""

from __future__ import annotations

import dataclasses
import posixpath
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Iterable, Union

from atlaskit.callcontext import CallContext, header
from atlaskit.logs.log import (
    RFC3339_NANO,
    Entry,
    Level,
    Logger,
    _format_rfc3339,
    parse_level,
)

LOG_LEVEL_HEADER_KEY = "log-level"
LOG_FLAG_HEADER_KEY = "log-trace-key"
LOG_LEVEL_META_KEY = "log-level"
LOG_FLAG_META_KEY = "log-trace-key"
LOG_FLAG_FIELD_NAME = "log-trace-key"

SYSTEM_FIELD = "system"
KIND_FIELD = "span.kind"

DEFAULT_ACCOUNT_ID_KEY = "account_id"
DEFAULT_REQUEST_ID_KEY = "request_id"
DEFAULT_SUBJECT_KEY = "subject"
DEFAULT_DURATION_KEY = "grpc.time_ms"
DEFAULT_GRPC_CODE_KEY = "grpc.code"
DEFAULT_GRPC_METHOD_KEY = "grpc.method"
DEFAULT_GRPC_SERVICE_KEY = "grpc.service"
DEFAULT_GRPC_START_TIME_KEY = "grpc.start_time"
DEFAULT_CLIENT_KIND_VALUE = "client"
DEFAULT_SERVER_KIND_VALUE = "server"

HeaderValue = Union[str, Iterable[str]]


def _header_value(headers: Mapping[str, HeaderValue], name: str) -> str:
    for key, value in headers.items():
        if key.lower() == name:
            if isinstance(value, str):
                return value
            return next(iter(value), "")
    return ""


def annotator(headers: Mapping[str, HeaderValue]) -> dict[str, list[str]]:
    """Return metadata carrying the logging headers of an HTTP request."""
    metadata: dict[str, list[str]] = {}
    level = _header_value(headers, LOG_LEVEL_HEADER_KEY)
    if level:
        metadata[LOG_LEVEL_META_KEY] = [level]
    flag = _header_value(headers, LOG_FLAG_HEADER_KEY)
    if flag:
        metadata[LOG_FLAG_META_KEY] = [flag]
    return metadata


def copy_logger_with_level(logger: Logger, level: Level) -> Logger:
    """Return a copy of ``logger`` at ``level`` with its own hook table."""
    hooks = {lvl: list(entries) for lvl, entries in logger.hooks.items()}
    return dataclasses.replace(logger, level=level, hooks=hooks)


def new_logger_fields(full_method: str, start: datetime, kind: str) -> dict[str, Any]:
    """Return the standard fields of an RPC log entry for ``/service/method``."""
    return {
        SYSTEM_FIELD: "grpc",
        KIND_FIELD: kind,
        DEFAULT_GRPC_SERVICE_KEY: posixpath.dirname(full_method)[1:],
        DEFAULT_GRPC_METHOD_KEY: posixpath.basename(full_method),
        DEFAULT_GRPC_START_TIME_KEY: _format_rfc3339(start, RFC3339_NANO),
    }


Handler = Callable[[Entry, CallContext, Any], Any]


def log_level_interceptor(
    default_level: Level,
) -> Callable[[Entry, CallContext, Any, Any, Handler], Any]:
    """Return an interceptor that runs the handler with a per-request log level.

    The level comes from the call's ``log-level`` metadata, else
    ``default_level``; a ``log-trace-key`` value is added to the entry's fields.
    The handler receives a new entry; fields it adds are copied back to the
    original entry when it returns.
    """

    def intercept(entry: Entry, ctx: CallContext, req: Any, info: Any, handler: Handler) -> Any:
        level = default_level
        flag = header(ctx, LOG_FLAG_META_KEY)
        if flag is not None:
            entry.data[LOG_FLAG_FIELD_NAME] = flag
        requested = header(ctx, LOG_LEVEL_META_KEY)
        if requested is not None:
            entry.log(Level.DEBUG, f'Using custom log-level of "{requested}"')
            try:
                level = parse_level(requested)
            except ValueError:
                level = default_level
        new_entry = copy_logger_with_level(entry.logger, level).with_fields(entry.data)
        try:
            return handler(new_entry, ctx, req)
        finally:
            entry.data.update(new_entry.data)

    return intercept