"""Typed parameter values and the conversion of Python values into them."""

from __future__ import annotations

import datetime as dt
import struct
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from .conversions import to_tds
from .time import Date, DateTime, DateTime2, DateTimeOffset, SmallDateTime, Time
from .xml import XmlData


class ColumnKind(Enum):
    """The server type a value is sent as."""

    BIT = "bit"
    U8 = "tinyint"
    I16 = "smallint"
    I32 = "int"
    I64 = "bigint"
    F32 = "real"
    F64 = "float"
    STRING = "nvarchar"
    BINARY = "varbinary"
    NUMERIC = "numeric"
    XML = "xml"
    GUID = "uniqueidentifier"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    SMALLDATETIME = "smalldatetime"
    DATETIME2 = "datetime2"
    DATETIMEOFFSET = "datetimeoffset"


@dataclass(frozen=True)
class ColumnData:
    """A value of a given server type; a value of None is SQL NULL."""

    kind: ColumnKind
    value: Any = None

    def is_null(self) -> bool:
        return self.value is None


_INT_BOUNDS = {
    ColumnKind.U8: (0, 2**8 - 1),
    ColumnKind.I16: (-(2**15), 2**15 - 1),
    ColumnKind.I32: (-(2**31), 2**31 - 1),
    ColumnKind.I64: (-(2**63), 2**63 - 1),
}

_WIRE_KINDS: dict[type, ColumnKind] = {
    Date: ColumnKind.DATE,
    Time: ColumnKind.TIME,
    DateTime: ColumnKind.DATETIME,
    SmallDateTime: ColumnKind.SMALLDATETIME,
    DateTime2: ColumnKind.DATETIME2,
    DateTimeOffset: ColumnKind.DATETIMEOFFSET,
}


def _mismatch(value: Any, kind: ColumnKind) -> TypeError:
    return TypeError(f"cannot send {type(value).__name__} as {kind.value}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _integer(kind: ColumnKind) -> Callable[[Any], int]:
    low, high = _INT_BOUNDS[kind]

    def convert(value: Any) -> int:
        if not _is_int(value):
            raise _mismatch(value, kind)
        if not low <= value <= high:
            raise ValueError(f"{value} does not fit in {kind.value}")
        return value

    return convert


def _bit(value: Any) -> bool:
    if not isinstance(value, bool):
        raise _mismatch(value, ColumnKind.BIT)
    return value


def _float64(value: Any) -> float:
    if not (isinstance(value, float) or _is_int(value)):
        raise _mismatch(value, ColumnKind.F64)
    return float(value)


def _float32(value: Any) -> float:
    if not (isinstance(value, float) or _is_int(value)):
        raise _mismatch(value, ColumnKind.F32)
    try:
        (rounded,) = struct.unpack("<f", struct.pack("<f", float(value)))
    except (OverflowError, struct.error) as exc:
        raise ValueError(f"{value} does not fit in real") from exc
    return rounded


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise _mismatch(value, ColumnKind.STRING)
    return value


def _binary(value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise _mismatch(value, ColumnKind.BINARY)
    return bytes(value)


def _numeric(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if _is_int(value):
        return Decimal(value)
    raise _mismatch(value, ColumnKind.NUMERIC)


def _xml(value: Any) -> XmlData:
    if not isinstance(value, XmlData):
        raise _mismatch(value, ColumnKind.XML)
    return value


def _guid(value: Any) -> uuid.UUID:
    if not isinstance(value, uuid.UUID):
        raise _mismatch(value, ColumnKind.GUID)
    return value


def _date(value: Any) -> Date:
    if isinstance(value, Date):
        return value
    if isinstance(value, dt.date) and not isinstance(value, dt.datetime):
        return to_tds(value)
    raise _mismatch(value, ColumnKind.DATE)


def _time(value: Any) -> Time:
    if isinstance(value, Time):
        return value
    if isinstance(value, dt.time):
        return to_tds(value)
    raise _mismatch(value, ColumnKind.TIME)


def _is_naive_datetime(value: Any) -> bool:
    return isinstance(value, dt.datetime) and value.utcoffset() is None


def _is_aware_datetime(value: Any) -> bool:
    return isinstance(value, dt.datetime) and value.utcoffset() is not None


def _datetime(value: Any) -> DateTime:
    if isinstance(value, DateTime):
        return value
    if _is_naive_datetime(value):
        return to_tds(value, legacy=True)
    raise _mismatch(value, ColumnKind.DATETIME)


def _smalldatetime(value: Any) -> SmallDateTime:
    if isinstance(value, SmallDateTime):
        return value
    raise _mismatch(value, ColumnKind.SMALLDATETIME)


def _datetime2(value: Any) -> DateTime2:
    if isinstance(value, DateTime2):
        return value
    if _is_naive_datetime(value):
        return to_tds(value)
    raise _mismatch(value, ColumnKind.DATETIME2)


def _datetimeoffset(value: Any) -> DateTimeOffset:
    if isinstance(value, DateTimeOffset):
        return value
    if _is_aware_datetime(value):
        return to_tds(value)
    raise _mismatch(value, ColumnKind.DATETIMEOFFSET)


_CONVERTERS: dict[ColumnKind, Callable[[Any], Any]] = {
    ColumnKind.BIT: _bit,
    ColumnKind.U8: _integer(ColumnKind.U8),
    ColumnKind.I16: _integer(ColumnKind.I16),
    ColumnKind.I32: _integer(ColumnKind.I32),
    ColumnKind.I64: _integer(ColumnKind.I64),
    ColumnKind.F32: _float32,
    ColumnKind.F64: _float64,
    ColumnKind.STRING: _string,
    ColumnKind.BINARY: _binary,
    ColumnKind.NUMERIC: _numeric,
    ColumnKind.XML: _xml,
    ColumnKind.GUID: _guid,
    ColumnKind.DATE: _date,
    ColumnKind.TIME: _time,
    ColumnKind.DATETIME: _datetime,
    ColumnKind.SMALLDATETIME: _smalldatetime,
    ColumnKind.DATETIME2: _datetime2,
    ColumnKind.DATETIMEOFFSET: _datetimeoffset,
}


def _infer_kind(value: Any) -> ColumnKind:
    if isinstance(value, bool):
        return ColumnKind.BIT
    if isinstance(value, int):
        low, high = _INT_BOUNDS[ColumnKind.I32]
        return ColumnKind.I32 if low <= value <= high else ColumnKind.I64
    if isinstance(value, float):
        return ColumnKind.F64
    if isinstance(value, str):
        return ColumnKind.STRING
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ColumnKind.BINARY
    if isinstance(value, Decimal):
        return ColumnKind.NUMERIC
    if isinstance(value, XmlData):
        return ColumnKind.XML
    if isinstance(value, uuid.UUID):
        return ColumnKind.GUID
    if isinstance(value, dt.datetime):
        if value.utcoffset() is None:
            return ColumnKind.DATETIME2
        return ColumnKind.DATETIMEOFFSET
    if isinstance(value, dt.date):
        return ColumnKind.DATE
    if isinstance(value, dt.time):
        return ColumnKind.TIME
    kind = _WIRE_KINDS.get(type(value))
    if kind is None:
        raise TypeError(f"no server type for {type(value).__name__}")
    return kind


def to_sql(value: Any, kind: ColumnKind | None = None) -> ColumnData:
    """Turn a Python value into a typed parameter value.

    Without ``kind`` the server type follows from the value: integers become
    ``int`` (or ``bigint`` when too large), floats ``float``, and so on.
    A None value needs an explicit ``kind`` and becomes a NULL of that type.
    """
    if isinstance(value, ColumnData):
        if kind is None or kind is value.kind:
            return value
        raise TypeError(f"value of {value.kind.value} cannot be sent as {kind.value}")
    if kind is None:
        if value is None:
            raise TypeError("a null value needs an explicit column kind")
        kind = _infer_kind(value)
    if value is None:
        return ColumnData(kind)
    return ColumnData(kind, _CONVERTERS[kind](value))