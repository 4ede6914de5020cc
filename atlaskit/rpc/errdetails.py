"""Error details that point at a target, with a gRPC status code."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass


class Code(enum.IntEnum):
    """Canonical RPC status codes."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


_NOT_IMPLEMENTED = "NOT_IMPLEMENTED"


def _code_name(code: int) -> str:
    if code == Code.UNIMPLEMENTED:
        return _NOT_IMPLEMENTED
    try:
        return Code(code).name
    except ValueError:
        return str(code)


def _code_value(name: str | None) -> int:
    if not name:
        return Code.OK
    upper = name.upper()
    if upper in Code.__members__:
        return Code[upper]
    if upper == _NOT_IMPLEMENTED:
        return Code.UNIMPLEMENTED
    return Code.UNKNOWN


@dataclass
class TargetInfo:
    """A status code and message concerning a particular target."""

    code: int = Code.OK
    message: str = ""
    target: str = ""

    def to_json(self) -> str:
        """Serialise to JSON; the code is written by name.

        UNIMPLEMENTED is written as ``"NOT_IMPLEMENTED"``.
        """
        data = {"code": _code_name(self.code)}
        if self.message:
            data["message"] = self.message
        if self.target:
            data["target"] = self.target
        return json.dumps(data, sort_keys=True, separators=(",", ":"))

    @classmethod
    def from_json(cls, data: str | bytes) -> TargetInfo:
        """Deserialise from JSON.

        A missing, null or empty code means OK; an unknown name means UNKNOWN.
        Raises ValueError when the data is not an object of strings.
        """
        decoded = json.loads(data)
        if decoded is None:
            decoded = {}
        if not isinstance(decoded, dict):
            raise ValueError("target info must be a JSON object")
        for key, value in decoded.items():
            if value is not None and not isinstance(value, str):
                raise ValueError(f"target info field {key!r} must be a string")
        values = {key: value or "" for key, value in decoded.items()}
        return cls(
            code=int(_code_value(values.get("code"))),
            message=values.get("message", ""),
            target=values.get("target", ""),
        )


def new_target_info(code: int, target: str, msg: str) -> TargetInfo:
    """Return a TargetInfo for ``code``, ``target`` and ``msg``."""
    return TargetInfo(code=int(code), message=msg, target=target)


def newf(code: int, target: str, format: str, *args: object) -> TargetInfo:
    """Return a TargetInfo whose message is ``format % args``."""
    message = format % args if args else format
    return new_target_info(code, target, message)