"""Text-format encoding of values into their Postgres representation."""

from __future__ import annotations

import datetime as _dt
import math
import re
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

QUOTE_CHECK = re.compile(r'^$|["{},\\\s]|^null$', re.IGNORECASE)
QUOTE_ESCAPE = re.compile(r'(["\\])')


class PgType(Enum):
    """Postgres types known to the text encoder, valued by their OID."""

    BOOL = 16
    BYTEA = 17
    CHAR = 18
    INT8 = 20
    INT2 = 21
    INT4 = 23
    TEXT = 25
    OID = 26
    FLOAT4 = 700
    FLOAT8 = 701
    VARCHAR = 1043
    DATE = 1082
    TIME = 1083
    TIMESTAMP = 1114
    TIMESTAMPTZ = 1184
    TIMETZ = 1266
    NUMERIC = 1700

    BOOL_ARRAY = 1000
    BYTEA_ARRAY = 1001
    CHAR_ARRAY = 1002
    INT2_ARRAY = 1005
    INT4_ARRAY = 1007
    TEXT_ARRAY = 1009
    VARCHAR_ARRAY = 1015
    INT8_ARRAY = 1016
    FLOAT4_ARRAY = 1021
    FLOAT8_ARRAY = 1022
    OID_ARRAY = 1028
    TIMESTAMP_ARRAY = 1115
    DATE_ARRAY = 1182
    TIME_ARRAY = 1183
    TIMESTAMPTZ_ARRAY = 1185
    NUMERIC_ARRAY = 1231
    TIMETZ_ARRAY = 1270

    @property
    def oid(self) -> int:
        return self.value

    def is_array(self) -> bool:
        """Whether this is an array type."""
        return self.name.endswith("_ARRAY")


class WrongType(TypeError):
    """Raised when a value cannot be encoded as the requested Postgres type."""

    def __init__(self, value_type: type, pg_type: PgType) -> None:
        super().__init__(
            f"cannot convert between the Python type `{value_type.__name__}` "
            f"and the Postgres type `{pg_type.name.lower()}`"
        )
        self.value_type = value_type
        self.pg_type = pg_type


_TIMESTAMP_TYPES = {PgType.TIMESTAMP, PgType.TIMESTAMP_ARRAY}
_TIMESTAMPTZ_TYPES = {PgType.TIMESTAMPTZ, PgType.TIMESTAMPTZ_ARRAY}
_DATE_TYPES = {PgType.DATE, PgType.DATE_ARRAY}
_TIME_TYPES = {PgType.TIME, PgType.TIME_ARRAY}
_TIMETZ_TYPES = {PgType.TIMETZ, PgType.TIMETZ_ARRAY}
_NUMERIC_TYPES = {PgType.NUMERIC, PgType.NUMERIC_ARRAY}


def _format_date(value: _dt.date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _format_time(value: Any) -> str:
    return (
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond:06d}"
    )


def _format_offset(value: _dt.datetime) -> str:
    offset = value.utcoffset() or _dt.timedelta(0)
    seconds = int(offset.total_seconds())
    sign = "-" if seconds < 0 else "+"
    return f"{sign}{abs(seconds) // 3600:02d}"


def _encode_datetime(value: _dt.datetime, ty: PgType) -> str:
    aware = value.tzinfo is not None and value.utcoffset() is not None
    if ty in _TIMESTAMP_TYPES:
        return f"{_format_date(value)} {_format_time(value)}"
    if ty in _DATE_TYPES:
        return _format_date(value)
    if ty in _TIME_TYPES:
        return _format_time(value)
    if aware and ty in _TIMESTAMPTZ_TYPES:
        return f"{_format_date(value)} {_format_time(value)}{_format_offset(value)}"
    if aware and ty in _TIMETZ_TYPES:
        return f"{_format_time(value)}{_format_offset(value)}"
    raise WrongType(type(value), ty)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _encode_str(value: str, ty: PgType) -> str:
    if ty.is_array() and QUOTE_CHECK.search(value):
        return '"' + QUOTE_ESCAPE.sub(r"\\\1", value) + '"'
    return value


def to_sql_text(value: Any, ty: PgType) -> Optional[bytes]:
    """Encode ``value`` in the text format of ``ty``.

    Returns None for SQL NULL. Lists and tuples are encoded as arrays, with
    NULL written for missing elements.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return b"t" if value else b"f"
    if isinstance(value, str):
        return _encode_str(value, ty).encode("utf-8")
    if isinstance(value, int):
        return str(value).encode("ascii")
    if isinstance(value, float):
        return _format_float(value).encode("ascii")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return b"\\x" + bytes(value).hex().encode("ascii")
    if isinstance(value, _dt.datetime):
        return _encode_datetime(value, ty).encode("ascii")
    if isinstance(value, _dt.date):
        if ty not in _DATE_TYPES:
            raise WrongType(type(value), ty)
        return _format_date(value).encode("ascii")
    if isinstance(value, _dt.time):
        if ty not in _TIME_TYPES:
            raise WrongType(type(value), ty)
        return _format_time(value).encode("ascii")
    if isinstance(value, Decimal):
        if ty not in _NUMERIC_TYPES:
            raise WrongType(type(value), ty)
        return format(value, "f").encode("ascii")
    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            encoded = to_sql_text(item, ty)
            items.append(b"NULL" if encoded is None else encoded)
        return b"{" + b",".join(items) + b"}"
    raise TypeError(f"cannot encode values of type {type(value).__name__}")