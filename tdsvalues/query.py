"""Result sets streamed from a query: metadata items and rows."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .column_data import ColumnData
from .conversions import from_tds
from .errors import ProtocolError
from .time import Date, DateTime, DateTime2, DateTimeOffset, SmallDateTime, Time
from .tokens import ReceivedToken, TokenKind

_WIRE_TIME_TYPES = (Date, Time, DateTime, SmallDateTime, DateTime2, DateTimeOffset)
_END = object()


@dataclass(frozen=True)
class Column:
    """A column of a result set."""

    name: str
    column_type: Any = None


def _plain(value: Any) -> Any:
    if isinstance(value, ColumnData):
        value = value.value
    if isinstance(value, _WIRE_TIME_TYPES):
        return from_tds(value)
    return value


@dataclass(frozen=True)
class Row:
    """One row of a result set, with the columns it belongs to."""

    columns: tuple[Column, ...]
    data: tuple[Any, ...]
    result_index: int

    def get(self, key: int | str) -> Any:
        """The value at a column index or name, or None when it is NULL or absent."""
        if isinstance(key, bool):
            raise TypeError("a column key is an index or a name")
        if isinstance(key, int):
            if not 0 <= key < len(self.data):
                return None
            return _plain(self.data[key])
        if isinstance(key, str):
            for column, value in zip(self.columns, self.data):
                if column.name == key:
                    return _plain(value)
            return None
        raise TypeError("a column key is an index or a name")

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)


@dataclass(frozen=True)
class ResultMetadata:
    """The columns of the rows that follow, and the position of their result set."""

    columns: tuple[Column, ...]
    result_index: int


@dataclass(frozen=True)
class QueryItem:
    """Either a row or the metadata of the next result set."""

    value: Row | ResultMetadata

    def as_metadata(self) -> ResultMetadata | None:
        return self.value if isinstance(self.value, ResultMetadata) else None

    def as_row(self) -> Row | None:
        return self.value if isinstance(self.value, Row) else None


class QueryStream:
    """Iterates over the metadata and rows of one or more result sets.

    Every result set starts with a metadata item followed by its rows.
    Tokens other than metadata and rows are skipped.
    """

    def __init__(self, tokens: Iterable[ReceivedToken]) -> None:
        self._tokens = iter(tokens)
        self._peeked: Any = None
        self._has_peeked = False
        self._columns: tuple[Column, ...] | None = None
        self._result_index: int | None = None

    def __repr__(self) -> str:
        return f"QueryStream(result_index={self._result_index!r})"

    def _peek(self) -> Any:
        if not self._has_peeked:
            self._peeked = next(self._tokens, _END)
            self._has_peeked = True
        return self._peeked

    def _take(self) -> Any:
        item = self._peek()
        self._has_peeked = False
        self._peeked = None
        return item

    def forward_to_metadata(self) -> None:
        """Skip ahead until the next item is metadata or the stream ends."""
        while True:
            token = self._peek()
            if token is _END or token.kind is TokenKind.NEW_RESULTSET:
                return
            self._take()

    def columns(self) -> tuple[Column, ...] | None:
        """Columns of the current result set, or of the next one if it comes next."""
        while True:
            token = self._peek()
            if token is _END or token.kind is TokenKind.ROW:
                break
            if token.kind is TokenKind.NEW_RESULTSET:
                self._columns = tuple(token.value)
                break
            self._take()
        return self._columns

    def __iter__(self) -> QueryStream:
        return self

    def __next__(self) -> QueryItem:
        while True:
            token = self._take()
            if token is _END:
                raise StopIteration
            if token.kind is TokenKind.NEW_RESULTSET:
                self._columns = tuple(token.value)
                self._result_index = (
                    0 if self._result_index is None else self._result_index + 1
                )
                return QueryItem(ResultMetadata(self._columns, self._result_index))
            if token.kind is TokenKind.ROW:
                if self._columns is None or self._result_index is None:
                    raise ProtocolError("row received before result metadata")
                row = Row(self._columns, tuple(token.value), self._result_index)
                return QueryItem(row)

    def into_results(self) -> list[list[Row]]:
        """Collect the rows of every result set, in order."""
        results: list[list[Row]] = []
        current: list[Row] | None = None

        for item in self:
            row = item.as_row()
            if row is not None:
                if current is None:
                    current = [row]
                else:
                    current.append(row)
            elif current is None:
                current = []
            else:
                results.append(current)
                current = None

        if current is not None:
            results.append(current)
        return results

    def into_first_result(self) -> list[Row]:
        """The rows of the first result set; further results are dropped."""
        results = self.into_results()
        return results[0] if results else []

    def into_row(self) -> Row | None:
        """The first row of the first result set, if any."""
        rows = self.into_first_result()
        return rows[0] if rows else None

    def into_row_stream(self) -> Iterator[Row]:
        """Iterate over the rows only, skipping metadata items."""
        for item in self:
            row = item.as_row()
            if row is not None:
                yield row