# tdsvalues

Value types, conversions and result-stream handling for the TDS protocol
spoken by SQL Server. Everything works on in-memory values and binary
streams; there are no dependencies beyond the standard library.

## Modules

- `tdsvalues.time`: the server's date and time representations:
  `DateTime` (days since 1900-01-01 and 1/300 second fragments),
  `SmallDateTime`, `Date` (days since 0001-01-01 in three bytes), `Time`
  (10^-scale second increments since midnight), `DateTime2` and
  `DateTimeOffset` (a `DateTime2` plus an offset in minutes). Each has
  `encode()` returning bytes and a `decode(...)` class method that reads
  from a binary stream. `Time.byte_length()` gives the 3, 4 or 5 bytes a
  scale takes; out-of-range scales and short streams raise `ProtocolError`,
  values that do not fit their field raise `ValueError`.
- `tdsvalues.xml`: `XmlData` (text plus an optional `XmlSchema`).
  `XmlData.encode()` produces a partially length-prefixed UTF-16 blob with
  a single chunk and a terminator.
- `tdsvalues.conversions`: `to_tds(value, legacy=False)` turns a
  `datetime.date`, `datetime.time`, naive or aware `datetime.datetime` into
  `Date`, `Time`, `DateTime2` or `DateTimeOffset`; with `legacy=True` a naive
  datetime becomes the older `DateTime` type. `from_tds(value)` converts any
  of the wire types back, leaving `None` as `None`.
- `tdsvalues.column_data`: `ColumnKind`, `ColumnData` and
  `to_sql(value, kind=None)`, which turns a Python value into a typed
  parameter value. Without a kind, the type follows from the value (`bool`
  to `bit`, `int` to `int` or `bigint`, `float` to `float`, `str` to
  `nvarchar`, bytes to `varbinary`, `Decimal` to `numeric`, `XmlData`,
  `uuid.UUID`, dates and times). A `None` value needs an explicit kind and
  becomes a NULL; `ColumnData.is_null()` tells them apart.
- `tdsvalues.tokens`: `TokenKind` and `ReceivedToken` describe the tokens
  of a server response. `flush_done(tokens)` consumes tokens up to DONE and
  raises the first server error or a routing request seen on the way;
  `flush_sspi(tokens)` does the same for an SSPI token.
- `tdsvalues.query`: `QueryStream` turns a sequence of tokens into
  `QueryItem`s, each holding either a `ResultMetadata` or a `Row`.
  `columns()` peeks at the column list, `forward_to_metadata()` skips to the
  next result set, and `into_results()`, `into_first_result()`,
  `into_row()` and `into_row_stream()` collect the rows. `Row.get(key)`
  takes a column index or name and returns the plain value, converting
  date and time wire values with `from_tds`.
- `tdsvalues.errors`: `TdsError` and its subclasses `ProtocolError`,
  `ServerError` and `RoutingError`.

## Examples

Encoding and decoding a `datetime2` value:

```python
import datetime
import io

from tdsvalues.conversions import from_tds, to_tds
from tdsvalues.time import DateTime2

value = to_tds(datetime.datetime(2020, 4, 20, 16, 20))
raw = value.encode()
decoded = DateTime2.decode(io.BytesIO(raw), 7, 5)
assert from_tds(decoded) == datetime.datetime(2020, 4, 20, 16, 20)
```

Reading rows from a token sequence:

```python
from tdsvalues.column_data import to_sql
from tdsvalues.query import Column, QueryStream
from tdsvalues.tokens import ReceivedToken, TokenKind

tokens = [
    ReceivedToken(TokenKind.NEW_RESULTSET, [Column("first")]),
    ReceivedToken(TokenKind.ROW, [to_sql(1)]),
    ReceivedToken(TokenKind.DONE),
]
row = QueryStream(tokens).into_row()
assert row.get(0) == 1
assert row.get("first") == 1
```

## What it does not do

The package opens no connections and speaks to no server: there is no
client, no login, no TLS and no packet handling. Tokens are not parsed from
raw bytes either; a `QueryStream` or `flush_done` works on `ReceivedToken`
values that the caller builds or obtains elsewhere.

## Installing

```
pip install .
```

The tests use pytest, available through the `test` extra.