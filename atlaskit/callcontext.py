"""Per-call context carrying incoming and outgoing metadata and log fields.

Metadata keys are case-insensitive and stored in lower case; every key maps
to a tuple of string values.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Union

METADATA_PREFIX = "grpcgateway-"
"""Prefix a gateway puts in front of metadata keys it forwards."""

MetadataInput = Mapping[str, Union[str, Iterable[str]]]


def _normalize(metadata: MetadataInput) -> dict[str, tuple[str, ...]]:
    result: dict[str, tuple[str, ...]] = {}
    for key, value in metadata.items():
        values = (value,) if isinstance(value, str) else tuple(value)
        name = key.lower()
        result[name] = result.get(name, ()) + values
    return result


@dataclass(frozen=True)
class CallContext:
    """Metadata and log fields of a single call.

    Derived contexts share the same ``log_fields`` mapping, so fields added
    further down a call chain are seen by the callers.
    """

    incoming: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    outgoing: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    log_fields: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "incoming", _normalize(self.incoming))
        object.__setattr__(self, "outgoing", _normalize(self.outgoing))

    def with_incoming(self, metadata: MetadataInput) -> CallContext:
        """Return a context whose incoming metadata is ``metadata``."""
        return replace(self, incoming=_normalize(metadata))

    def with_outgoing(self, metadata: MetadataInput) -> CallContext:
        """Return a context whose outgoing metadata is ``metadata``."""
        return replace(self, outgoing=_normalize(metadata))

    def append_outgoing(self, key: str, value: str) -> CallContext:
        """Return a context with ``value`` appended to outgoing ``key``."""
        outgoing = dict(self.outgoing)
        name = key.lower()
        outgoing[name] = outgoing.get(name, ()) + (value,)
        return replace(self, outgoing=outgoing)


def header(ctx: CallContext, key: str) -> str | None:
    """Return the first value of ``key`` in the context's metadata.

    Incoming metadata is searched before outgoing; in each, the plain key is
    tried before the gateway-prefixed one. Returns None when nothing is found.
    """
    name = key.lower()
    for metadata in (ctx.incoming, ctx.outgoing):
        for candidate in (name, METADATA_PREFIX + name):
            values = metadata.get(candidate)
            if values:
                return values[0]
    return None