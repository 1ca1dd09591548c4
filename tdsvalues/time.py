"""Wire representations of the server's date and time types."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

from .errors import ProtocolError

_I16 = (-(2**15), 2**15 - 1)
_U16 = (0, 2**16 - 1)
_I32 = (-(2**31), 2**31 - 1)
_U32 = (0, 2**32 - 1)
_U64 = (0, 2**64 - 1)
_U8 = (0, 255)
_DATE_LIMIT = 1 << 24


def _check_range(name: str, value: int, bounds: tuple[int, int]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"{name} {value} out of range {low}..{high}")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise ProtocolError(f"unexpected end of stream: wanted {size} bytes")
    return data


def _length_for_scale(scale: int) -> int | None:
    if 0 <= scale <= 2:
        return 3
    if 3 <= scale <= 4:
        return 4
    if 5 <= scale <= 7:
        return 5
    return None


@dataclass(frozen=True)
class DateTime:
    """The `datetime` type: days since 1900-01-01 and 1/300 second fragments."""

    days: int
    seconds_fragments: int

    def __post_init__(self) -> None:
        _check_range("days", self.days, _I32)
        _check_range("seconds_fragments", self.seconds_fragments, _U32)

    def encode(self) -> bytes:
        return struct.pack("<iI", self.days, self.seconds_fragments)

    @classmethod
    def decode(cls, stream: BinaryIO) -> DateTime:
        days, fragments = struct.unpack("<iI", _read_exact(stream, 8))
        return cls(days, fragments)


@dataclass(frozen=True)
class SmallDateTime:
    """The `smalldatetime` type: days since 1900-01-01 and a time part."""

    days: int
    seconds_fragments: int

    def __post_init__(self) -> None:
        _check_range("days", self.days, _U16)
        _check_range("seconds_fragments", self.seconds_fragments, _U16)

    def encode(self) -> bytes:
        return struct.pack("<HH", self.days, self.seconds_fragments)

    @classmethod
    def decode(cls, stream: BinaryIO) -> SmallDateTime:
        days, fragments = struct.unpack("<HH", _read_exact(stream, 4))
        return cls(days, fragments)


@dataclass(frozen=True)
class Date:
    """The `date` type: days since 0001-01-01, stored in three bytes."""

    days: int

    def __post_init__(self) -> None:
        if not 0 <= self.days < _DATE_LIMIT:
            raise ValueError(f"date days {self.days} does not fit in three bytes")

    def encode(self) -> bytes:
        return self.days.to_bytes(3, "little")

    @classmethod
    def decode(cls, stream: BinaryIO) -> Date:
        return cls(int.from_bytes(_read_exact(stream, 3), "little"))


@dataclass(frozen=True, eq=False)
class Time:
    """The `time` type: 10^-scale second increments since midnight."""

    increments: int
    scale: int

    def __post_init__(self) -> None:
        _check_range("increments", self.increments, _U64)
        _check_range("scale", self.scale, _U8)

    def _seconds(self) -> float:
        return self.increments / 10.0**self.scale

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._seconds() == other._seconds()

    def __hash__(self) -> int:
        return hash(self._seconds())

    def byte_length(self) -> int:
        """Number of bytes the value takes on the wire."""
        length = _length_for_scale(self.scale)
        if length is None:
            raise ProtocolError(f"timen: invalid scale {self.scale}")
        return length

    def encode(self) -> bytes:
        length = self.byte_length()
        if self.increments >> (8 * length):
            raise ValueError(
                f"increments {self.increments} do not fit in {length} bytes"
            )
        return self.increments.to_bytes(length, "little")

    @classmethod
    def decode(cls, stream: BinaryIO, scale: int, length: int) -> Time:
        if _length_for_scale(scale) != length:
            raise ProtocolError(f"timen: invalid length {scale}")
        increments = int.from_bytes(_read_exact(stream, length), "little")
        return cls(increments, scale)


@dataclass(frozen=True)
class DateTime2:
    """The `datetime2` type: a time part followed by a date part."""

    date: Date
    time: Time

    def encode(self) -> bytes:
        return self.time.encode() + self.date.encode()

    @classmethod
    def decode(cls, stream: BinaryIO, scale: int, length: int) -> DateTime2:
        time = Time.decode(stream, scale, length)
        date = Date.decode(stream)
        return cls(date, time)


@dataclass(frozen=True)
class DateTimeOffset:
    """The `datetimeoffset` type: a `datetime2` and an offset in minutes from UTC."""

    datetime2: DateTime2
    offset: int

    def __post_init__(self) -> None:
        _check_range("offset", self.offset, _I16)

    def encode(self) -> bytes:
        return self.datetime2.encode() + struct.pack("<h", self.offset)

    @classmethod
    def decode(cls, stream: BinaryIO, scale: int, length: int) -> DateTimeOffset:
        datetime2 = DateTime2.decode(stream, scale, length)
        (offset,) = struct.unpack("<h", _read_exact(stream, 2))
        return cls(datetime2, offset)