"""Resource and operation information derived from HTTP requests."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from atlaskit.callcontext import METADATA_PREFIX, CallContext, header
from atlaskit.rpc.resource import Identifier

APP_NAME_META_KEY = "request_info_app_name"
RESOURCE_TYPE_META_KEY = "request_info_resource_type"
RESOURCE_ID_META_KEY = "request_info_resource_id"
OPERATION_TYPE_META_KEY = "request_info_operation_type"


class RequestInfoError(ValueError):
    """Request information cannot be determined."""


class HTTPRequestMissingError(RequestInfoError):
    def __init__(self) -> None:
        super().__init__("request is missing")


class InvalidHTTPRequestPathError(RequestInfoError):
    def __init__(self) -> None:
        super().__init__("invalid HTTP request path")


class AppNameMissingError(RequestInfoError):
    def __init__(self) -> None:
        super().__init__("application name is missing in the context object")


class ResourceTypeMissingError(RequestInfoError):
    def __init__(self) -> None:
        super().__init__("resource type is missing in the context object")


class OperationType(enum.IntEnum):
    """Kind of operation a request performs on a resource."""

    CREATE = 0
    REPLACE = 1
    UPDATE = 2
    DELETE = 3
    READ = 4
    LIST = 5
    UNKNOWN = 6

    def __str__(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str | None) -> OperationType:
        """Return the operation with display name ``name``, or UNKNOWN."""
        for op in cls:
            if str(op) == name:
                return op
        return cls.UNKNOWN


@dataclass
class RequestInfo:
    """The resource a request addresses and what it does to it."""

    identifier: Identifier = field(default_factory=Identifier)
    operation_type: OperationType = OperationType.CREATE


_METHOD_OPERATIONS = {
    "POST": OperationType.CREATE,
    "PUT": OperationType.REPLACE,
    "PATCH": OperationType.UPDATE,
    "DELETE": OperationType.DELETE,
}


def operation_type_from_request(method: str, has_identifier: bool) -> OperationType:
    """Map an HTTP method to an operation; GET reads with an id, lists without."""
    if method == "GET":
        return OperationType.READ if has_identifier else OperationType.LIST
    return _METHOD_OPERATIONS.get(method, OperationType.UNKNOWN)


def new_request_info(method: str | None, url: str | None) -> RequestInfo:
    """Build request info from a ``/<app>/<type>[/<id>]`` request URL.

    Raises HTTPRequestMissingError when no request is given and
    InvalidHTTPRequestPathError when the path has the wrong shape.
    """
    if method is None or url is None:
        raise HTTPRequestMissingError()
    path = urlsplit(url).path
    if path.startswith("/"):
        path = path[1:]
    parts = path.split("/")
    if not 2 <= len(parts) <= 3:
        raise InvalidHTTPRequestPathError()
    has_id = len(parts) == 3
    app_name, resource_type = parts[0], parts[1]
    resource_id = parts[2] if has_id else ""
    return RequestInfo(
        identifier=Identifier(app_name, resource_type, resource_id),
        operation_type=operation_type_from_request(method, has_id),
    )


def request_info_to_map(info: RequestInfo) -> dict[str, str]:
    """Return the gateway metadata that carries ``info``."""
    try:
        op_name = str(OperationType(info.operation_type))
    except ValueError:
        op_name = str(OperationType.UNKNOWN)
    return {
        METADATA_PREFIX + APP_NAME_META_KEY: info.identifier.application_name,
        METADATA_PREFIX + RESOURCE_TYPE_META_KEY: info.identifier.resource_type,
        METADATA_PREFIX + RESOURCE_ID_META_KEY: info.identifier.resource_id,
        METADATA_PREFIX + OPERATION_TYPE_META_KEY: op_name,
    }


def metadata_annotator(method: str | None, url: str | None) -> dict[str, list[str]]:
    """Return request info as metadata, or empty metadata when it cannot be built."""
    try:
        info = new_request_info(method, url)
    except RequestInfoError:
        return {}
    return {key.lower(): [value] for key, value in request_info_to_map(info).items()}


def from_context(ctx: CallContext) -> RequestInfo:
    """Read request info from a call's metadata.

    Raises AppNameMissingError or ResourceTypeMissingError when those are
    absent. A missing resource id is empty; a missing or unknown operation
    is UNKNOWN.
    """
    app_name = header(ctx, APP_NAME_META_KEY)
    if app_name is None:
        raise AppNameMissingError()
    resource_type = header(ctx, RESOURCE_TYPE_META_KEY)
    if resource_type is None:
        raise ResourceTypeMissingError()
    resource_id = header(ctx, RESOURCE_ID_META_KEY) or ""
    operation = OperationType.from_name(header(ctx, OPERATION_TYPE_META_KEY))
    return RequestInfo(Identifier(app_name, resource_type, resource_id), operation)