"""Messages of the COPY sub-protocol."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from pgwire.codec import Message, WireReader, encode_cstring

MESSAGE_TYPE_BYTE_COPY_DATA = ord("d")
MESSAGE_TYPE_BYTE_COPY_DONE = ord("c")
MESSAGE_TYPE_BYTE_COPY_FAIL = ord("f")
MESSAGE_TYPE_BYTE_COPY_IN_RESPONSE = ord("G")
MESSAGE_TYPE_BYTE_COPY_OUT_RESPONSE = ord("H")
MESSAGE_TYPE_BYTE_COPY_BOTH_RESPONSE = ord("W")


@dataclass
class CopyData(Message):
    """A chunk of COPY payload."""

    data: bytes = b""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_COPY_DATA

    def encode_body(self) -> bytes:
        return bytes(self.data)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "CopyData":
        return cls(reader.read_bytes(length - 4))


@dataclass
class CopyDone(Message):
    """End of COPY data."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_COPY_DONE


@dataclass
class CopyFail(Message):
    """Abort of a COPY with an error message."""

    message: str = ""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_COPY_DONE

    def encode_body(self) -> bytes:
        return encode_cstring(self.message)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "CopyFail":
        return cls(reader.read_cstring() or "")


@dataclass
class _CopyResponse(Message):
    format: int = 0
    columns: int = 0
    column_formats: list[int] = field(default_factory=list)

    def encode_body(self) -> bytes:
        return struct.pack(
            f">bh{len(self.column_formats)}h",
            self.format,
            self.columns,
            *self.column_formats,
        )

    @classmethod
    def decode_body(cls, reader: WireReader, length: int):
        fmt = reader.read_i8()
        columns = reader.read_i16()
        column_formats = [reader.read_i16() for _ in range(columns)]
        return cls(fmt, columns, column_formats)


@dataclass
class CopyInResponse(_CopyResponse):
    """Backend is ready to receive COPY data."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_COPY_IN_RESPONSE


@dataclass
class CopyOutResponse(_CopyResponse):
    """Backend is about to send COPY data."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_COPY_OUT_RESPONSE


@dataclass
class CopyBothResponse(_CopyResponse):
    """Bidirectional COPY, used for streaming replication."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_COPY_BOTH_RESPONSE