"""Framing helpers and the base class shared by all wire protocol messages."""

from __future__ import annotations

import struct
from typing import Callable, ClassVar, Optional, TypeVar, Union

T = TypeVar("T")

_I8 = struct.Struct(">b")
_U8 = struct.Struct(">B")
_I16 = struct.Struct(">h")
_U16 = struct.Struct(">H")
_I32 = struct.Struct(">i")
_U32 = struct.Struct(">I")


class PgWireError(Exception):
    """Raised when a wire message is malformed or truncated."""


class WireReader:
    """Sequential big-endian reader over the body of a single message."""

    def __init__(self, data: Union[bytes, bytearray, memoryview]) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        """Number of bytes not read yet."""
        return len(self._data) - self._pos

    def _take(self, count: int) -> bytes:
        if count < 0 or count > self.remaining:
            raise PgWireError(
                f"cannot read {count} bytes, {self.remaining} available"
            )
        chunk = self._data[self._pos : self._pos + count]
        self._pos += count
        return chunk

    def _unpack(self, fmt: struct.Struct) -> int:
        return fmt.unpack(self._take(fmt.size))[0]

    def read_cstring(self) -> Optional[str]:
        """Read a NUL-terminated string; an empty string yields None.

        The terminator is consumed in both cases, which is how key-value
        lists ended by a single NUL byte are read.
        """
        end = self._data.find(b"\0", self._pos)
        if end < 0:
            raise PgWireError("string is not NUL-terminated")
        raw = self._take(end - self._pos + 1)[:-1]
        if not raw:
            return None
        return raw.decode("utf-8", errors="replace")

    def read_u8(self) -> int:
        return self._unpack(_U8)

    def read_i8(self) -> int:
        return self._unpack(_I8)

    def read_i16(self) -> int:
        return self._unpack(_I16)

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_bytes(self, count: int) -> bytes:
        return self._take(count)


def encode_cstring(value: str) -> bytes:
    """Encode a string followed by a NUL terminator."""
    return value.encode("utf-8") + b"\0"


def encode_option_cstring(value: Optional[str]) -> bytes:
    """Encode an optional string; None becomes a lone NUL byte."""
    return b"\0" if value is None else encode_cstring(value)


def option_string_len(value: Optional[str]) -> int:
    """Encoded size of an optional NUL-terminated string."""
    return 1 + (len(value.encode("utf-8")) if value is not None else 0)


def peek_length(buf: Union[bytes, bytearray], offset: int) -> Optional[int]:
    """Read the 4-byte length at ``offset`` without consuming anything."""
    if len(buf) >= offset + 4:
        return _I32.unpack_from(buf, offset)[0]
    return None


def decode_packet(
    buf: bytearray,
    offset: int,
    decode_fn: Callable[[WireReader, int], T],
) -> Optional[T]:
    """Decode one complete packet from the front of ``buf``.

    Returns None, leaving ``buf`` untouched, when the packet is not complete
    yet. Otherwise the body is handed to ``decode_fn`` together with the
    message length and the whole packet is removed from ``buf``.
    """
    length = peek_length(buf, offset)
    if length is None:
        return None
    if length < 4:
        raise PgWireError(f"invalid message length {length}")
    if len(buf) < offset + length:
        return None
    reader = WireReader(bytes(buf[offset + 4 : offset + length]))
    result = decode_fn(reader, length)
    del buf[: offset + length]
    return result


class Message:
    """A protocol message with an optional type byte and a length prefix."""

    MESSAGE_TYPE: ClassVar[Optional[int]] = None

    def message_length(self) -> int:
        """Length as written on the wire: the body plus the length field."""
        return 4 + len(self.encode_body())

    def encode_body(self) -> bytes:
        return b""

    def encode(self) -> bytes:
        header = b"" if self.MESSAGE_TYPE is None else bytes([self.MESSAGE_TYPE])
        return header + _I32.pack(self.message_length()) + self.encode_body()

    @classmethod
    def decode_body(cls, reader: WireReader, length: int):
        return cls()

    @classmethod
    def decode(cls, buf: bytearray):
        """Decode a message from the front of ``buf``, consuming it.

        Returns None when ``buf`` does not yet hold a whole message.
        """
        offset = 0 if cls.MESSAGE_TYPE is None else 1
        return decode_packet(buf, offset, cls.decode_body)