"""Conversions between Python date and time values and their wire forms."""

from __future__ import annotations

import datetime as dt

from .errors import ProtocolError
from .time import Date, DateTime, DateTime2, DateTimeOffset, SmallDateTime, Time

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_DAY = 86_400 * _NANOS_PER_SECOND
_ORDINAL_YEAR_1 = dt.date(1, 1, 1).toordinal()
_ORDINAL_YEAR_1900 = dt.date(1900, 1, 1).toordinal()
_TIME_SCALE = 7

WireValue = Date | Time | DateTime | SmallDateTime | DateTime2 | DateTimeOffset
PythonValue = dt.date | dt.time | dt.datetime


def _nanos_since_midnight(value: dt.time) -> int:
    seconds = (value.hour * 60 + value.minute) * 60 + value.second
    return seconds * _NANOS_PER_SECOND + value.microsecond * 1000


def _time_from_nanos(nanos: int) -> dt.time:
    """Build a time of day, wrapping around midnight like clock arithmetic."""
    micros = (nanos % _NANOS_PER_DAY) // 1000
    seconds, microsecond = divmod(micros, 1_000_000)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return dt.time(hour, minute, second, microsecond)


def _nanos_from_increments(value: Time) -> int:
    if value.scale > 9:
        raise ProtocolError(f"timen: invalid scale {value.scale}")
    return value.increments * 10 ** (9 - value.scale)


def _day(base_ordinal: int, days: int) -> dt.date:
    try:
        return dt.date.fromordinal(base_ordinal + days)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"day count {days} is outside the supported range") from exc


def _combine(base_ordinal: int, days: int, nanos: int) -> dt.datetime:
    return dt.datetime.combine(_day(base_ordinal, days), _time_from_nanos(nanos))


def _wire_date(value: dt.date) -> Date:
    return Date(value.toordinal() - _ORDINAL_YEAR_1)


def _wire_time(value: dt.time) -> Time:
    return Time(_nanos_since_midnight(value) // 100, _TIME_SCALE)


def _wire_datetime2(value: dt.datetime) -> DateTime2:
    return DateTime2(_wire_date(value.date()), _wire_time(value.time()))


def to_tds(value: PythonValue, legacy: bool = False) -> WireValue:
    """Convert a Python date, time or datetime into its wire representation.

    With ``legacy`` set, only naive datetimes are accepted and they become the
    older ``datetime`` type; otherwise dates, times, naive datetimes and aware
    datetimes become ``date``, ``time``, ``datetime2`` and ``datetimeoffset``.
    """
    if isinstance(value, dt.datetime):
        offset = value.utcoffset()
        if legacy:
            if offset is not None:
                raise TypeError("the legacy datetime type holds only naive datetimes")
            days = value.toordinal() - _ORDINAL_YEAR_1900
            fragments = _nanos_since_midnight(value.time()) * 300 // _NANOS_PER_SECOND
            return DateTime(days, fragments)
        if offset is None:
            return _wire_datetime2(value)
        minutes = int(offset / dt.timedelta(minutes=1))
        utc = value.astimezone(dt.timezone.utc).replace(tzinfo=None)
        return DateTimeOffset(_wire_datetime2(utc), minutes)
    if legacy:
        raise TypeError(
            f"cannot convert {type(value).__name__} to the legacy datetime type"
        )
    if isinstance(value, dt.date):
        return _wire_date(value)
    if isinstance(value, dt.time):
        return _wire_time(value)
    raise TypeError(f"cannot convert {type(value).__name__} to a date or time value")


def from_tds(value: WireValue | None) -> PythonValue | None:
    """Convert a wire date or time value into a Python value; None stays None."""
    if value is None:
        return None
    if isinstance(value, DateTimeOffset):
        inner = value.datetime2
        naive = _combine(
            _ORDINAL_YEAR_1, inner.date.days, _nanos_from_increments(inner.time)
        )
        zone = dt.timezone(dt.timedelta(minutes=value.offset))
        return naive.replace(tzinfo=dt.timezone.utc).astimezone(zone)
    if isinstance(value, DateTime2):
        return _combine(
            _ORDINAL_YEAR_1, value.date.days, _nanos_from_increments(value.time)
        )
    if isinstance(value, SmallDateTime):
        return _combine(
            _ORDINAL_YEAR_1900,
            value.days,
            value.seconds_fragments * 60 * _NANOS_PER_SECOND,
        )
    if isinstance(value, DateTime):
        return _combine(
            _ORDINAL_YEAR_1900,
            value.days,
            value.seconds_fragments * _NANOS_PER_SECOND // 300,
        )
    if isinstance(value, Date):
        return _day(_ORDINAL_YEAR_1, value.days)
    if isinstance(value, Time):
        return _time_from_nanos(_nanos_from_increments(value))
    raise TypeError(f"{type(value).__name__} is not a date or time wire value")