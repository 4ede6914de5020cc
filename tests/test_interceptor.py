import io
from datetime import datetime, timezone

import pytest

from atlaskit.callcontext import CallContext
from atlaskit.logs.interceptor import (
    LOG_FLAG_FIELD_NAME,
    LOG_FLAG_HEADER_KEY,
    LOG_FLAG_META_KEY,
    LOG_LEVEL_HEADER_KEY,
    LOG_LEVEL_META_KEY,
    annotator,
    copy_logger_with_level,
    log_level_interceptor,
    new_logger_fields,
)
from atlaskit.logs.log import Level, Logger


@pytest.mark.parametrize(
    "headers, expected",
    [
        ({}, {}),
        ({LOG_LEVEL_HEADER_KEY: "info"}, {LOG_LEVEL_META_KEY: ["info"]}),
        ({"unused": "info"}, {}),
        ({LOG_FLAG_HEADER_KEY: "unique-id"}, {LOG_FLAG_META_KEY: ["unique-id"]}),
        (
            {LOG_LEVEL_HEADER_KEY: "info", LOG_FLAG_HEADER_KEY: "unique-id"},
            {LOG_FLAG_META_KEY: ["unique-id"], LOG_LEVEL_META_KEY: ["info"]},
        ),
    ],
)
def test_annotator(headers, expected):
    assert annotator(headers) == expected


def test_annotator_header_names_ignore_case():
    assert annotator({"Log-Level": ["debug", "info"]}) == {LOG_LEVEL_META_KEY: ["debug"]}


CASES = [
    dict(orig=Level.DEBUG, extra={}, default=Level.INFO, expect=Level.WARN, md_level="warning", tag=""),
    dict(orig=Level.DEBUG, extra={}, default=Level.INFO, expect=Level.INFO, md_level="invalid", tag=""),
    dict(
        orig=Level.WARN,
        extra={"post-interceptor": "backpropagated?"},
        default=Level.WARN,
        expect=Level.INFO,
        md_level="info",
        tag="",
    ),
    dict(
        orig=Level.WARN,
        extra={"post-interceptor": "backpropagated?"},
        default=Level.WARN,
        expect=Level.WARN,
        md_level="",
        tag="special value",
    ),
    dict(
        orig=Level.WARN,
        extra={"post-interceptor": "backpropagated?"},
        default=Level.WARN,
        expect=Level.INFO,
        md_level="info",
        tag="special value",
    ),
]


@pytest.mark.parametrize("case", CASES)
def test_interceptor(case):
    metadata = {LOG_LEVEL_META_KEY: case["md_level"]}
    if case["tag"]:
        metadata[LOG_FLAG_META_KEY] = case["tag"]
    ctx = CallContext(incoming=metadata)
    entry = Logger(out=io.StringIO(), level=case["orig"]).with_fields({"source": "testing"})

    start_fields = {"source": "testing"}
    if case["tag"]:
        start_fields[LOG_FLAG_FIELD_NAME] = case["tag"]

    seen = {}

    def handler(handler_entry, handler_ctx, req):
        seen["level"] = handler_entry.logger.level
        seen["data"] = dict(handler_entry.data)
        handler_entry.data.update(case["extra"])
        return "result"

    result = log_level_interceptor(case["default"])(entry, ctx, None, None, handler)

    assert result == "result"
    assert seen["level"] == case["expect"]
    assert seen["data"] == start_fields
    assert entry.logger.level == case["orig"]
    assert entry.data == {**start_fields, **case["extra"]}


def test_interceptor_propagates_fields_on_error():
    entry = Logger(out=io.StringIO()).with_fields({})

    def handler(handler_entry, ctx, req):
        handler_entry.data["added"] = True
        raise RuntimeError("failed")

    with pytest.raises(RuntimeError):
        log_level_interceptor(Level.INFO)(entry, CallContext(), None, None, handler)
    assert entry.data == {"added": True}


def test_copy_logger_with_level_keeps_settings_and_separates_hooks():
    out = io.StringIO()
    hook = lambda level, message, data: None  # noqa: E731
    logger = Logger(out=out, level=Level.WARN, hooks={Level.INFO: [hook]})
    copy = copy_logger_with_level(logger, Level.DEBUG)
    copy.hooks[Level.INFO].append(hook)
    assert copy.level == Level.DEBUG
    assert copy.out is out
    assert logger.level == Level.WARN
    assert len(logger.hooks[Level.INFO]) == 1


def test_new_logger_fields():
    start = datetime(2020, 1, 2, 3, 4, 5, 120000, tzinfo=timezone.utc)
    assert new_logger_fields("/pkg.Service/Method", start, "client") == {
        "system": "grpc",
        "span.kind": "client",
        "grpc.service": "pkg.Service",
        "grpc.method": "Method",
        "grpc.start_time": "2020-01-02T03:04:05.12Z",
    }