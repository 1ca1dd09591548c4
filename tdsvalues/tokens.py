"""Tokens received from the server and helpers that drain a token sequence."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .errors import ProtocolError, RoutingError, ServerError


class TokenKind(Enum):
    """The kinds of token a server response is made of."""

    NEW_RESULTSET = auto()
    ROW = auto()
    DONE = auto()
    DONE_IN_PROC = auto()
    DONE_PROC = auto()
    RETURN_STATUS = auto()
    RETURN_VALUE = auto()
    ORDER = auto()
    ENV_CHANGE = auto()
    INFO = auto()
    LOGIN_ACK = auto()
    SSPI = auto()
    FEATURE_EXT_ACK = auto()
    ERROR = auto()


@dataclass(frozen=True)
class ReceivedToken:
    """One token of a server response.

    The value depends on the kind: column metadata for ``NEW_RESULTSET``, the
    row's values for ``ROW``, a ``ServerError`` for ``ERROR``.  An environment
    change whose value is a ``RoutingError`` asks the client to reconnect.
    """

    kind: TokenKind
    value: Any = None


def _as_server_error(value: Any) -> ServerError:
    if isinstance(value, ServerError):
        return value
    return ServerError(str(value))


def flush_done(tokens: Iterable[ReceivedToken]) -> Any:
    """Consume tokens up to the first DONE token and return its value.

    The first server error seen before DONE is raised instead; failing that,
    a routing request is raised as ``RoutingError``.
    """
    first_error: ServerError | None = None
    routing: RoutingError | None = None

    for token in tokens:
        if token.kind is TokenKind.ERROR:
            if first_error is None:
                first_error = _as_server_error(token.value)
        elif token.kind is TokenKind.DONE:
            if first_error is not None:
                raise first_error
            if routing is not None:
                raise routing
            return token.value
        elif token.kind is TokenKind.ENV_CHANGE and isinstance(
            token.value, RoutingError
        ):
            routing = token.value

    raise ProtocolError("Never got DONE token.")


def flush_sspi(tokens: Iterable[ReceivedToken]) -> Any:
    """Consume tokens up to the first SSPI token and return its value.

    If the tokens run out first, the first server error seen is raised, or a
    ``ProtocolError`` when there was none.
    """
    first_error: ServerError | None = None

    for token in tokens:
        if token.kind is TokenKind.ERROR:
            if first_error is None:
                first_error = _as_server_error(token.value)
        elif token.kind is TokenKind.SSPI:
            return token.value

    if first_error is not None:
        raise first_error
    raise ProtocolError("Never got SSPI token.")