"""Row and parameter description messages and data rows."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from pgwire.codec import Message, WireReader, encode_cstring

FORMAT_CODE_TEXT = 0
FORMAT_CODE_BINARY = 1

MESSAGE_TYPE_BYTE_ROW_DESCRITION = ord("T")
MESSAGE_TYPE_BYTE_PARAMETER_DESCRITION = ord("t")
MESSAGE_TYPE_BYTE_DATA_ROW = ord("D")
MESSAGE_TYPE_BYTE_NO_DATA = ord("n")

_FIELD = struct.Struct(">ihIhih")


@dataclass
class FieldDescription:
    """Description of one column of a result set."""

    name: str = ""
    table_id: int = 0
    column_id: int = 0
    type_id: int = 0
    type_size: int = 0
    type_modifier: int = 0
    format_code: int = 0


@dataclass
class RowDescription(Message):
    """Column layout of the rows that follow."""

    fields: list[FieldDescription] = field(default_factory=list)

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_ROW_DESCRITION

    def encode_body(self) -> bytes:
        parts = [struct.pack(">h", len(self.fields))]
        for f in self.fields:
            parts.append(encode_cstring(f.name))
            parts.append(
                _FIELD.pack(
                    f.table_id,
                    f.column_id,
                    f.type_id,
                    f.type_size,
                    f.type_modifier,
                    f.format_code,
                )
            )
        return b"".join(parts)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "RowDescription":
        count = reader.read_i16()
        fields = [
            FieldDescription(
                name=reader.read_cstring() or "",
                table_id=reader.read_i32(),
                column_id=reader.read_i16(),
                type_id=reader.read_u32(),
                type_size=reader.read_i16(),
                type_modifier=reader.read_i32(),
                format_code=reader.read_i16(),
            )
            for _ in range(count)
        ]
        return cls(fields)


@dataclass
class ParameterDescription(Message):
    """Parameter type OIDs of a described statement."""

    types: list[int] = field(default_factory=list)

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_PARAMETER_DESCRITION

    def encode_body(self) -> bytes:
        return struct.pack(f">H{len(self.types)}I", len(self.types), *self.types)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "ParameterDescription":
        count = reader.read_u16()
        return cls([reader.read_u32() for _ in range(count)])


@dataclass
class DataRow(Message):
    """One result row; ``data`` holds the already encoded column values."""

    data: bytes = b""
    field_count: int = 0

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_DATA_ROW

    def encode_body(self) -> bytes:
        return struct.pack(">h", self.field_count) + bytes(self.data)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "DataRow":
        field_count = reader.read_i16()
        data = reader.read_bytes(length - 4 - 2)
        return cls(data, field_count)


@dataclass
class NoData(Message):
    """Sent when a described statement or portal returns no rows."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_NO_DATA