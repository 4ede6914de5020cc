"""Resource identifiers in the ``<application>/<type>/<id>`` reference format."""

from __future__ import annotations

from dataclasses import dataclass

DELIMITER = "/"


def build_string(aname: str, rtype: str, rid: str) -> str:
    """Join the non-blank, stripped parts with the delimiter."""
    parts = (part.strip() for part in (aname, rtype, rid))
    return DELIMITER.join(part for part in parts if part)


def parse_string(id: str) -> tuple[str, str, str]:
    """Split an identifier into (application name, resource type, resource id).

    Leading and trailing delimiters are removed; the id is filled first,
    then the type and last the application name.
    """
    parts = id.strip(DELIMITER).split(DELIMITER, 2)
    if len(parts) == 1:
        return "", "", parts[0]
    if len(parts) == 2:
        return "", parts[0], parts[1]
    return parts[0], parts[1], parts[2]


@dataclass
class Identifier:
    """A reference to a resource."""

    application_name: str = ""
    resource_type: str = ""
    resource_id: str = ""

    def __str__(self) -> str:
        return build_string(self.application_name, self.resource_type, self.resource_id)

    def marshal_text(self) -> bytes:
        """Return the reference string as bytes."""
        return str(self).encode()

    def to_json(self) -> str:
        """Return the identifier as a JSON string; an empty one becomes ``"null"``."""
        return '"' + (str(self) or "null") + '"'

    @classmethod
    def from_json(cls, data: str | bytes) -> Identifier:
        """Build an identifier from a JSON string; ``"null"`` gives an empty one."""
        if isinstance(data, (bytes, bytearray)):
            data = data.decode()
        value = data.strip('"')
        if value == "null":
            value = ""
        return cls(*parse_string(value))


_PB_NIL = "<nil>"


def is_nil(identifier: Identifier | None) -> bool:
    """Return whether the identifier is missing or renders as an empty string."""
    if identifier is None:
        return True
    text = str(identifier)
    return text in ("", _PB_NIL)