"""Messages of the extended query protocol."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Optional

from pgwire.codec import (
    Message,
    WireReader,
    encode_cstring,
    encode_option_cstring,
)

MESSAGE_TYPE_BYTE_PARSE = ord("P")
MESSAGE_TYPE_BYTE_PARSE_COMPLETE = ord("1")
MESSAGE_TYPE_BYTE_CLOSE = ord("C")
MESSAGE_TYPE_BYTE_CLOSE_COMPLETE = ord("3")
MESSAGE_TYPE_BYTE_BIND = ord("B")
MESSAGE_TYPE_BYTE_BIND_COMPLETE = ord("2")
MESSAGE_TYPE_BYTE_DESCRIBE = ord("D")
MESSAGE_TYPE_BYTE_EXECUTE = ord("E")
MESSAGE_TYPE_BYTE_FLUSH = ord("H")
MESSAGE_TYPE_BYTE_SYNC = ord("S")
MESSAGE_TYPE_BYTE_PORTAL_SUSPENDED = ord("s")

TARGET_TYPE_BYTE_STATEMENT = ord("S")
TARGET_TYPE_BYTE_PORTAL = ord("P")


@dataclass
class Parse(Message):
    """Request from the frontend to parse a query into a prepared statement."""

    name: Optional[str]
    query: str
    type_oids: list[int] = field(default_factory=list)

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_PARSE

    def encode_body(self) -> bytes:
        return (
            encode_option_cstring(self.name)
            + encode_cstring(self.query)
            + struct.pack(f">H{len(self.type_oids)}I", len(self.type_oids), *self.type_oids)
        )

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "Parse":
        name = reader.read_cstring()
        query = reader.read_cstring() or ""
        count = reader.read_u16()
        type_oids = [reader.read_u32() for _ in range(count)]
        return cls(name, query, type_oids)


@dataclass
class ParseComplete(Message):
    """Successful response to Parse."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_PARSE_COMPLETE


@dataclass
class Close(Message):
    """Close a prepared statement or a portal."""

    target_type: int
    name: Optional[str] = None

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_CLOSE

    def encode_body(self) -> bytes:
        return bytes([self.target_type]) + encode_option_cstring(self.name)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "Close":
        target_type = reader.read_u8()
        return cls(target_type, reader.read_cstring())


@dataclass
class CloseComplete(Message):
    """Successful response to Close."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_CLOSE_COMPLETE


@dataclass
class Bind(Message):
    """Bind parameters to a prepared statement, creating a portal.

    A parameter of None stands for SQL NULL.
    """

    portal_name: Optional[str] = None
    statement_name: Optional[str] = None
    parameter_format_codes: list[int] = field(default_factory=list)
    parameters: list[Optional[bytes]] = field(default_factory=list)
    result_column_format_codes: list[int] = field(default_factory=list)

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_BIND

    def encode_body(self) -> bytes:
        parts = [
            encode_option_cstring(self.portal_name),
            encode_option_cstring(self.statement_name),
            struct.pack(
                f">H{len(self.parameter_format_codes)}h",
                len(self.parameter_format_codes),
                *self.parameter_format_codes,
            ),
            struct.pack(">H", len(self.parameters)),
        ]
        for value in self.parameters:
            if value is None:
                parts.append(struct.pack(">i", -1))
            else:
                parts.append(struct.pack(">i", len(value)))
                parts.append(bytes(value))
        parts.append(
            struct.pack(
                f">h{len(self.result_column_format_codes)}h",
                len(self.result_column_format_codes),
                *self.result_column_format_codes,
            )
        )
        return b"".join(parts)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "Bind":
        portal_name = reader.read_cstring()
        statement_name = reader.read_cstring()

        format_count = reader.read_u16()
        parameter_format_codes = [reader.read_i16() for _ in range(format_count)]

        parameter_count = reader.read_u16()
        parameters: list[Optional[bytes]] = []
        for _ in range(parameter_count):
            data_len = reader.read_i32()
            parameters.append(reader.read_bytes(data_len) if data_len >= 0 else None)

        result_count = reader.read_i16()
        result_column_format_codes = [reader.read_i16() for _ in range(result_count)]

        return cls(
            portal_name,
            statement_name,
            parameter_format_codes,
            parameters,
            result_column_format_codes,
        )


@dataclass
class BindComplete(Message):
    """Successful response to Bind."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_BIND_COMPLETE


@dataclass
class Describe(Message):
    """Ask for a description of a prepared statement or a portal."""

    target_type: int
    name: Optional[str] = None

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_DESCRIBE

    def encode_body(self) -> bytes:
        return bytes([self.target_type]) + encode_option_cstring(self.name)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "Describe":
        target_type = reader.read_u8()
        return cls(target_type, reader.read_cstring())


@dataclass
class Execute(Message):
    """Execute a portal by name, returning at most ``max_rows`` rows."""

    name: Optional[str] = None
    max_rows: int = 0

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_EXECUTE

    def encode_body(self) -> bytes:
        return encode_option_cstring(self.name) + struct.pack(">i", self.max_rows)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "Execute":
        name = reader.read_cstring()
        return cls(name, reader.read_i32())


@dataclass
class Flush(Message):
    """Ask the backend to deliver any pending output."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_FLUSH


@dataclass
class Sync(Message):
    """End of an extended query cycle."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_SYNC


@dataclass
class PortalSuspended(Message):
    """Execution stopped because the row limit was reached."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_PORTAL_SUSPENDED