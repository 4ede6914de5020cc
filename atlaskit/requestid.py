"""Request IDs taken from call metadata or generated for each request."""

from __future__ import annotations

import uuid
from typing import Any, Callable

from atlaskit.callcontext import CallContext, header

DEPRECATED_REQUEST_ID_KEY = "Request-Id"
DEFAULT_REQUEST_ID_KEY = "X-Request-ID"
REQUEST_ID_LOG_KEY = "request_id"

UnaryHandler = Callable[[CallContext, Any], Any]
StreamHandler = Callable[[Any, Any], Any]


def new_request_id() -> str:
    """Return a fresh random request ID."""
    return str(uuid.uuid4())


def from_context(ctx: CallContext) -> str | None:
    """Return the request ID found in the context's metadata, or None."""
    for key in (DEFAULT_REQUEST_ID_KEY, DEPRECATED_REQUEST_ID_KEY):
        req_id = header(ctx, key)
        if req_id is not None:
            return req_id
    return None


def handle_request_id(ctx: CallContext) -> str:
    """Return the context's non-empty request ID, or a newly generated one."""
    return from_context(ctx) or new_request_id()


def new_context(ctx: CallContext, req_id: str) -> CallContext:
    """Return a context whose outgoing metadata carries ``req_id``."""
    return ctx.with_outgoing({DEFAULT_REQUEST_ID_KEY: req_id})


def _prepare(ctx: CallContext) -> CallContext:
    req_id = handle_request_id(ctx)
    ctx.log_fields[REQUEST_ID_LOG_KEY] = req_id
    return new_context(ctx, req_id)


class _ContextStream:
    """A server stream seen through a different context."""

    def __init__(self, stream: Any, context: CallContext) -> None:
        self._stream = stream
        self.context = context

    def __getattr__(self, name: str) -> Any:
        return getattr(self._stream, name)


def unary_server_interceptor() -> Callable[[CallContext, Any, Any, UnaryHandler], Any]:
    """Return an interceptor that attaches a request ID before calling the handler."""

    def intercept(ctx: CallContext, req: Any, info: Any, handler: UnaryHandler) -> Any:
        return handler(_prepare(ctx), req)

    return intercept


def stream_server_interceptor() -> Callable[[Any, Any, Any, StreamHandler], Any]:
    """Return a stream interceptor that attaches a request ID to the stream's context.

    The stream must expose its CallContext as ``context``.
    """

    def intercept(srv: Any, stream: Any, info: Any, handler: StreamHandler) -> Any:
        wrapped = _ContextStream(stream, _prepare(stream.context))
        return handler(srv, wrapped)

    return intercept