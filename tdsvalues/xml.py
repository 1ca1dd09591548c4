"""XML values and their schema information."""

from __future__ import annotations

import struct
from dataclasses import dataclass

_UNKNOWN_PLP_LENGTH = 0xFFFFFFFFFFFFFFFE
_PLP_TERMINATOR = 0


@dataclass(frozen=True)
class XmlSchema:
    """Where the XML schema collection bound to a value is defined."""

    db_name: str
    owner: str
    collection: str


@dataclass(frozen=True)
class XmlData:
    """XML text with optional schema information; validation happens in the server."""

    data: str
    schema: XmlSchema | None = None

    def __str__(self) -> str:
        return self.data

    def encode(self) -> bytes:
        """Encode as a partially length-prefixed value in a single chunk."""
        payload = self.data.encode("utf-16-le")
        return (
            struct.pack("<QI", _UNKNOWN_PLP_LENGTH, len(payload))
            + payload
            + struct.pack("<I", _PLP_TERMINATOR)
        )