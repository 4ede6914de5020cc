import uuid
from dataclasses import dataclass

from atlaskit.callcontext import CallContext
from atlaskit.requestid import (
    DEFAULT_REQUEST_ID_KEY,
    DEPRECATED_REQUEST_ID_KEY,
    REQUEST_ID_LOG_KEY,
    from_context,
    handle_request_id,
    new_context,
    new_request_id,
    stream_server_interceptor,
    unary_server_interceptor,
)


@dataclass
class MockServerStream:
    context: CallContext
    name: str = "mock"


def test_new_request_id_is_uuid():
    req_id = new_request_id()
    assert str(uuid.UUID(req_id)) == req_id
    assert new_request_id() != req_id


def test_from_context_missing():
    assert from_context(CallContext()) is None


def test_from_context_default_key():
    ctx = CallContext().with_incoming({DEFAULT_REQUEST_ID_KEY: "abc"})
    assert from_context(ctx) == "abc"


def test_from_context_deprecated_key():
    ctx = CallContext().with_incoming({DEPRECATED_REQUEST_ID_KEY: "old"})
    assert from_context(ctx) == "old"


def test_handle_request_id_keeps_existing():
    ctx = CallContext().with_incoming({DEFAULT_REQUEST_ID_KEY: "keep-me"})
    assert handle_request_id(ctx) == "keep-me"


def test_handle_request_id_generates_for_empty():
    ctx = CallContext().with_incoming({DEFAULT_REQUEST_ID_KEY: ""})
    req_id = handle_request_id(ctx)
    assert str(uuid.UUID(req_id)) == req_id


def test_new_context_sets_outgoing():
    ctx = new_context(CallContext(), "rid")
    assert ctx.outgoing == {"x-request-id": ("rid",)}
    assert from_context(ctx) == "rid"


def test_unary_server_interceptor_without_request_id():
    seen = {}

    def handler(ctx, req):
        seen["id"] = from_context(ctx)
        return "response"

    ctx = CallContext()
    result = unary_server_interceptor()(ctx, object(), None, handler)
    assert result == "response"
    assert seen["id"]
    assert str(uuid.UUID(seen["id"])) == seen["id"]
    assert ctx.log_fields[REQUEST_ID_LOG_KEY] == seen["id"]


def test_unary_server_interceptor_with_dummy_request_id():
    dummy = new_request_id()
    seen = {}

    def handler(ctx, req):
        seen["id"] = from_context(ctx)
        return req

    ctx = CallContext().with_incoming({DEFAULT_REQUEST_ID_KEY: dummy})
    result = unary_server_interceptor()(ctx, "request", None, handler)
    assert result == "request"
    assert seen["id"] == dummy
    assert ctx.log_fields[REQUEST_ID_LOG_KEY] == dummy


def test_stream_server_interceptor_without_request_id():
    seen = {}

    def handler(srv, stream):
        seen["id"] = from_context(stream.context)
        seen["name"] = stream.name
        return None

    stream = MockServerStream(CallContext())
    assert stream_server_interceptor()(object(), stream, None, handler) is None
    assert seen["id"]
    assert str(uuid.UUID(seen["id"])) == seen["id"]
    assert seen["name"] == "mock"


def test_stream_server_interceptor_with_dummy_request_id():
    dummy = new_request_id()
    seen = {}

    def handler(srv, stream):
        seen["id"] = from_context(stream.context)
        return "done"

    ctx = CallContext().with_incoming({DEFAULT_REQUEST_ID_KEY: dummy})
    result = stream_server_interceptor()(object(), MockServerStream(ctx), None, handler)
    assert result == "done"
    assert seen["id"] == dummy
    assert ctx.log_fields[REQUEST_ID_LOG_KEY] == dummy