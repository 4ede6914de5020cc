"""Per-field error descriptions."""

from __future__ import annotations

import json
from dataclasses import dataclass, field


@dataclass
class FieldInfo:
    """Messages grouped by the field they concern."""

    fields: dict[str, list[str]] = field(default_factory=dict)

    def add_field(self, target: str, msg: str) -> None:
        """Append ``msg`` to the messages of ``target``."""
        self.fields.setdefault(target, []).append(msg)

    def to_json(self) -> str:
        """Serialise as a JSON object of message lists."""
        return json.dumps(self.fields, sort_keys=True, separators=(",", ":"))

    @classmethod
    def from_json(cls, data: str | bytes) -> FieldInfo:
        """Deserialise from a JSON object of message lists.

        Raises ValueError when the data does not have that shape.
        """
        decoded = json.loads(data)
        if decoded is None:
            decoded = {}
        if not isinstance(decoded, dict):
            raise ValueError("field info must be a JSON object")
        info = cls()
        for target, messages in decoded.items():
            if messages is None:
                continue
            if not isinstance(messages, list) or not all(isinstance(m, str) for m in messages):
                raise ValueError(f"messages of {target!r} must be a list of strings")
            for msg in messages:
                info.add_field(target, msg)
        return info