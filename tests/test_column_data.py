import datetime as dt
import math
import uuid
from decimal import Decimal

import pytest

from tdsvalues.column_data import ColumnData, ColumnKind, to_sql
from tdsvalues.time import Date, DateTime, DateTime2, DateTimeOffset, SmallDateTime, Time
from tdsvalues.xml import XmlData


@pytest.mark.parametrize(
    "kind",
    [
        ColumnKind.U8,
        ColumnKind.I16,
        ColumnKind.I32,
        ColumnKind.I64,
        ColumnKind.F32,
        ColumnKind.F64,
        ColumnKind.STRING,
        ColumnKind.BINARY,
        ColumnKind.XML,
        ColumnKind.GUID,
        ColumnKind.BIT,
        ColumnKind.TIME,
    ],
)
def test_null_values(kind):
    data = to_sql(None, kind)
    assert data == ColumnData(kind, None)
    assert data.is_null() is True


def test_null_without_kind_is_rejected():
    with pytest.raises(TypeError):
        to_sql(None)


def test_tinyint_bounds():
    assert to_sql(0, ColumnKind.U8).value == 0
    assert to_sql(255, ColumnKind.U8).value == 255
    with pytest.raises(ValueError):
        to_sql(256, ColumnKind.U8)
    with pytest.raises(ValueError):
        to_sql(-1, ColumnKind.U8)


def test_numbers_with_explicit_kinds():
    assert to_sql(1, ColumnKind.U8) == ColumnData(ColumnKind.U8, 1)
    assert to_sql(-4, ColumnKind.I16) == ColumnData(ColumnKind.I16, -4)
    assert to_sql(-4, ColumnKind.I64) == ColumnData(ColumnKind.I64, -4)
    assert to_sql(math.pi, ColumnKind.F64).value == math.pi


def test_real_is_rounded_to_single_precision():
    data = to_sql(math.pi, ColumnKind.F32)
    assert data.value == 3.1415927410125732
    assert data.is_null() is False


def test_real_overflow():
    with pytest.raises(ValueError):
        to_sql(1e300, ColumnKind.F32)


def test_integer_inference():
    assert to_sql(-4) == ColumnData(ColumnKind.I32, -4)
    assert to_sql(2**40) == ColumnData(ColumnKind.I64, 2**40)
    with pytest.raises(ValueError):
        to_sql(2**63)


def test_bool_and_float_inference():
    assert to_sql(True) == ColumnData(ColumnKind.BIT, True)
    assert to_sql(4.20) == ColumnData(ColumnKind.F64, 4.20)


def test_bool_is_not_an_integer():
    with pytest.raises(TypeError):
        to_sql(True, ColumnKind.I32)


def test_strings():
    assert to_sql("foo") == ColumnData(ColumnKind.STRING, "foo")
    kanji = "余ったものを後で皆に分けようと思っていただけなのに"
    assert to_sql(kanji).value == kanji


def test_bytes():
    data = bytes([1, 6, 2, 0])
    assert to_sql(data) == ColumnData(ColumnKind.BINARY, data)
    assert to_sql(bytearray(data)).value == data
    assert to_sql(memoryview(data), ColumnKind.BINARY).value == data


def test_xml():
    xml = XmlData('<root><child attr="attr-value"/></root>')
    assert to_sql(xml) == ColumnData(ColumnKind.XML, xml)


def test_guid():
    guid = uuid.UUID("c97dbc01-fb45-4384-a194-e39a4560cf4a")
    assert to_sql(guid) == ColumnData(ColumnKind.GUID, guid)


def test_numeric():
    assert to_sql(Decimal("0.2")) == ColumnData(ColumnKind.NUMERIC, Decimal("0.2"))
    assert to_sql(7, ColumnKind.NUMERIC).value == Decimal(7)


def test_mismatched_kind_is_rejected():
    with pytest.raises(TypeError):
        to_sql("abc", ColumnKind.I32)
    with pytest.raises(TypeError):
        to_sql(b"abc", ColumnKind.STRING)


def test_unknown_type_is_rejected():
    with pytest.raises(TypeError):
        to_sql(object())


def test_naive_datetime_defaults_to_datetime2():
    value = dt.datetime(2020, 4, 20, 16, 20)
    data = to_sql(value)
    assert data.kind is ColumnKind.DATETIME2
    assert isinstance(data.value, DateTime2)


def test_naive_datetime_as_legacy_datetime():
    data = to_sql(dt.datetime(1900, 1, 1, 0, 0, 1), ColumnKind.DATETIME)
    assert data == ColumnData(ColumnKind.DATETIME, DateTime(0, 300))


def test_aware_datetime_becomes_datetimeoffset():
    zone = dt.timezone(dt.timedelta(hours=3))
    data = to_sql(dt.datetime(2020, 4, 20, 19, 20, tzinfo=zone))
    assert data.kind is ColumnKind.DATETIMEOFFSET
    assert isinstance(data.value, DateTimeOffset)
    assert data.value.offset == 180


def test_aware_datetime_rejected_for_datetime2():
    with pytest.raises(TypeError):
        to_sql(dt.datetime(2020, 4, 20, tzinfo=dt.timezone.utc), ColumnKind.DATETIME2)


def test_date_and_time():
    assert to_sql(dt.date(1, 1, 1)) == ColumnData(ColumnKind.DATE, Date(0))
    assert to_sql(dt.time(0, 0, 1)) == ColumnData(ColumnKind.TIME, Time(10_000_000, 7))


def test_datetime_is_not_a_date_column():
    with pytest.raises(TypeError):
        to_sql(dt.datetime(2020, 4, 20), ColumnKind.DATE)


def test_wire_values_keep_their_kind():
    small = SmallDateTime(1, 60)
    assert to_sql(small) == ColumnData(ColumnKind.SMALLDATETIME, small)
    assert to_sql(DateTime(5, 6)).kind is ColumnKind.DATETIME


def test_column_data_passes_through():
    data = ColumnData(ColumnKind.U8, 4)
    assert to_sql(data) is data
    with pytest.raises(TypeError):
        to_sql(data, ColumnKind.I32)