"""Exceptions raised while encoding, decoding or exchanging TDS data."""

from __future__ import annotations


class TdsError(Exception):
    """Base class for every error raised by this package."""


class ProtocolError(TdsError):
    """The data on the wire does not follow the protocol."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ServerError(TdsError):
    """The server reported an error."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"{self.message} (code {self.code})"


class RoutingError(TdsError):
    """The server asked the client to reconnect to another host."""

    def __init__(self, host: str, port: int) -> None:
        super().__init__(f"server requested a connection to {host}:{port}")
        self.host = host
        self.port = port