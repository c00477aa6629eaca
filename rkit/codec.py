"""Text message encoding with '::', ';;' and ',,' separators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

SEP_LARGE = "::"
SEP_MEDIUM = ";;"
SEP_SMALL = ",,"


@dataclass
class Message:
    """An action, a type, a flat list of items and a table of rows."""

    action: str = ""
    kind: str = ""
    items: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)


def encode(message: Message) -> bytes:
    """Serialise a message to UTF-8 bytes."""
    table = SEP_MEDIUM.join(SEP_SMALL.join(row) for row in message.rows)
    text = SEP_LARGE.join(
        [message.action, message.kind, SEP_MEDIUM.join(message.items), table]
    )
    return text.encode("utf-8")


def decode(data: Union[bytes, str]) -> Message:
    """Parse bytes produced by encode; missing trailing sections stay empty."""
    text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    parts = text.split(SEP_LARGE)
    message = Message(action=parts[0])
    if len(parts) < 2:
        return message
    message.kind = parts[1]
    if len(parts) < 3:
        return message
    message.items = parts[2].split(SEP_MEDIUM)
    if len(parts) < 4:
        return message
    message.rows = [chunk.split(SEP_SMALL) for chunk in parts[3].split(SEP_MEDIUM)]
    return message