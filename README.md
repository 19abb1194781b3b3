# pgwire

Building blocks for the PostgreSQL frontend/backend protocol in pure Python.
The package needs only the standard library.

## Modules

- `pgwire.codec`: the shared framing helpers (`WireReader`, `encode_cstring`,
  `encode_option_cstring`, `option_string_len`, `peek_length`,
  `decode_packet`), the `Message` base class and `PgWireError`.
- `pgwire.simplequery`: `Query`
- `pgwire.extendedquery`: `Parse`, `ParseComplete`, `Bind`, `BindComplete`,
  `Describe`, `Execute`, `Close`, `CloseComplete`, `Flush`, `Sync`,
  `PortalSuspended`, plus `TARGET_TYPE_BYTE_STATEMENT` and
  `TARGET_TYPE_BYTE_PORTAL` for `Describe` and `Close`.
- `pgwire.data`: `RowDescription`, `FieldDescription`,
  `ParameterDescription`, `DataRow`, `NoData`, and the format codes
  `FORMAT_CODE_TEXT` and `FORMAT_CODE_BINARY`.
- `pgwire.response`: `CommandComplete`, `EmptyQueryResponse`,
  `ReadyForQuery`, `TransactionStatus`, `InvalidTransactionStatus`,
  `ErrorResponse`, `NoticeResponse`, `SslResponse`, `NotificationResponse`.
- `pgwire.copy`: `CopyData`, `CopyDone`, `CopyFail`, `CopyInResponse`,
  `CopyOutResponse`, `CopyBothResponse`.
- `pgwire.terminate`: `Terminate`.
- `pgwire.types`: `to_sql_text`, which renders Python values in PostgreSQL's
  text format, with `PgType` naming the target type and `WrongType` raised
  when a value cannot be rendered as that type.

## Installation

```
pip install .
```

## Encoding and decoding messages

Each message class is a dataclass with `encode()`, which returns the whole
frame (type byte, 4-byte big-endian length, body), and a `decode(buf)` class
method. `decode` takes a `bytearray`, removes one complete message from its
front and returns it. When the buffer does not yet hold a whole message it
returns `None` and leaves the buffer untouched.

```python
from pgwire.simplequery import Query

frame = Query("SELECT 1").encode()

buf = bytearray(frame)
message = Query.decode(buf)
assert message == Query("SELECT 1")
assert buf == bytearray()
```

`decode` skips the type byte at the front of the buffer without checking it,
so read that byte first to pick the right class.

Errors:

- `PgWireError` is raised for a length field smaller than 4 and for a body
  that ends before a field it should contain.
- `ReadyForQuery.decode` raises `InvalidTransactionStatus` (a `PgWireError`)
  for a status byte other than `I`, `T` or `E`.

Some details worth knowing:

- Empty strings in NUL-terminated fields decode as `None` for optional names
  (`Parse.name`, `Bind.portal_name`, `Describe.name`, ...) and as `""`
  elsewhere.
- A `Bind` parameter of `None` is written as length `-1` (SQL NULL).
- `CopyFail` is written with the type byte `c`, the same as `CopyDone`.
- `SslResponse` is the single byte `S` or `N` with no length field.
  `SslResponse.decode` returns `None` for an empty buffer or any other byte,
  and consumes nothing in that case.

## Text-format values

```python
import datetime
from pgwire.types import PgType, to_sql_text

to_sql_text(True, PgType.BOOL)                              # b"t"
to_sql_text([None, 8], PgType.INT2)                         # b"{NULL,8}"
to_sql_text(datetime.date(2023, 3, 5), PgType.DATE)         # b"2023-03-05"
to_sql_text(["a,b", "abc"], PgType.VARCHAR_ARRAY)           # b'{"a,b",abc}'
to_sql_text(b"\x01\xff", PgType.BYTEA)                      # b"\\x01ff"
```

`None` gives `None` (SQL NULL); lists and tuples become arrays with `NULL`
for missing elements. Strings are quoted and escaped only when the type is
an array type. Datetimes, dates, times and `Decimal` values must match the
type they are rendered as; for instance a date passed with `PgType.INT8`
raises `WrongType`, as does a naive datetime with `PgType.TIMESTAMPTZ`.
Aware datetimes rendered as `TIMESTAMPTZ` carry the hour offset, e.g.
`2023-03-05 10:20:00.000000+08`. Values of other Python types raise
`TypeError`.

## What this package does not do

It only encodes and decodes messages and values. It has no server or client,
does not open sockets, negotiate TLS or authenticate, and has no classes for
the startup, SSL request or authentication messages. Values are rendered in
text format only; there is no binary-format encoding.

## Running the tests

```
pip install .[test]
pytest
```