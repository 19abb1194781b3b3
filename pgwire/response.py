"""Backend responses: completion, readiness, errors, notices and notifications."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pgwire.codec import Message, PgWireError, WireReader, encode_cstring

MESSAGE_TYPE_BYTE_COMMAND_COMPLETE = ord("C")
MESSAGE_TYPE_BYTE_EMPTY_QUERY_RESPONSE = ord("I")
MESSAGE_TYPE_BYTE_READY_FOR_QUERY = ord("Z")
MESSAGE_TYPE_BYTE_ERROR_RESPONSE = ord("E")
MESSAGE_TYPE_BYTE_NOTICE_RESPONSE = ord("N")
MESSAGE_TYPE_BYTE_NOTIFICATION_RESPONSE = ord("A")

READY_STATUS_IDLE = ord("I")
READY_STATUS_TRANSACTION_BLOCK = ord("T")
READY_STATUS_FAILED_TRANSACTION_BLOCK = ord("E")

SSL_RESPONSE_MESSAGE_LENGTH = 1


@dataclass
class CommandComplete(Message):
    """A command finished; ``tag`` names it, e.g. ``SELECT 1``."""

    tag: str

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_COMMAND_COMPLETE

    def encode_body(self) -> bytes:
        return encode_cstring(self.tag)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "CommandComplete":
        return cls(reader.read_cstring() or "")


@dataclass
class EmptyQueryResponse(Message):
    """Response to an empty query string."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_EMPTY_QUERY_RESPONSE


class InvalidTransactionStatus(PgWireError):
    """Raised for an unknown transaction status byte."""

    def __init__(self, value: int) -> None:
        super().__init__(f"invalid transaction status: {value}")
        self.value = value


class TransactionStatus(Enum):
    """Transaction state reported in ReadyForQuery."""

    IDLE = READY_STATUS_IDLE
    TRANSACTION = READY_STATUS_TRANSACTION_BLOCK
    ERROR = READY_STATUS_FAILED_TRANSACTION_BLOCK

    @classmethod
    def from_byte(cls, value: int) -> "TransactionStatus":
        try:
            return cls(value)
        except ValueError:
            raise InvalidTransactionStatus(value) from None


@dataclass
class ReadyForQuery(Message):
    """The backend is ready for a new query."""

    status: TransactionStatus

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_READY_FOR_QUERY

    def message_length(self) -> int:
        return 5

    def encode_body(self) -> bytes:
        return bytes([self.status.value])

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "ReadyForQuery":
        return cls(TransactionStatus.from_byte(reader.read_u8()))


def _encode_fields(fields: list[tuple[int, str]]) -> bytes:
    return b"".join(bytes([code]) + encode_cstring(value) for code, value in fields) + b"\0"


def _decode_fields(reader: WireReader) -> list[tuple[int, str]]:
    fields = []
    while (code := reader.read_u8()) != 0:
        fields.append((code, reader.read_cstring() or ""))
    return fields


@dataclass
class ErrorResponse(Message):
    """Error report: a list of (field code, value) pairs."""

    fields: list[tuple[int, str]] = field(default_factory=list)

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_ERROR_RESPONSE

    def encode_body(self) -> bytes:
        return _encode_fields(self.fields)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "ErrorResponse":
        return cls(_decode_fields(reader))


@dataclass
class NoticeResponse(Message):
    """Notice report: a list of (field code, value) pairs."""

    fields: list[tuple[int, str]] = field(default_factory=list)

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_NOTICE_RESPONSE

    def encode_body(self) -> bytes:
        return _encode_fields(self.fields)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "NoticeResponse":
        return cls(_decode_fields(reader))


class SslResponse(Enum):
    """Single-byte answer to an SSLRequest; it has no length field."""

    ACCEPT = ord("S")
    REFUSE = ord("N")

    def message_length(self) -> int:
        return SSL_RESPONSE_MESSAGE_LENGTH

    def encode_body(self) -> bytes:
        return bytes([self.value])

    def encode(self) -> bytes:
        return self.encode_body()

    @classmethod
    def decode(cls, buf: bytearray) -> Optional["SslResponse"]:
        """Consume the answer from ``buf``; None if absent or not recognised."""
        if len(buf) < SSL_RESPONSE_MESSAGE_LENGTH:
            return None
        try:
            response = cls(buf[0])
        except ValueError:
            return None
        del buf[:SSL_RESPONSE_MESSAGE_LENGTH]
        return response


@dataclass
class NotificationResponse(Message):
    """Asynchronous LISTEN/NOTIFY notification."""

    pid: int = 0
    channel: str = ""
    payload: str = ""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_NOTIFICATION_RESPONSE

    def encode_body(self) -> bytes:
        return (
            struct.pack(">i", self.pid)
            + encode_cstring(self.channel)
            + encode_cstring(self.payload)
        )

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "NotificationResponse":
        pid = reader.read_i32()
        channel = reader.read_cstring() or ""
        payload = reader.read_cstring() or ""
        return cls(pid, channel, payload)