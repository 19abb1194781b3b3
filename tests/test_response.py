import struct

import pytest

from pgwire.codec import PgWireError, peek_length
from pgwire.response import (
    CommandComplete,
    EmptyQueryResponse,
    ErrorResponse,
    InvalidTransactionStatus,
    NoticeResponse,
    NotificationResponse,
    ReadyForQuery,
    SslResponse,
    TransactionStatus,
)

SAMPLES = [
    CommandComplete("SELECT 1"),
    CommandComplete("OK"),
    EmptyQueryResponse(),
    ReadyForQuery(TransactionStatus.IDLE),
    ReadyForQuery(TransactionStatus.TRANSACTION),
    ReadyForQuery(TransactionStatus.ERROR),
    ErrorResponse([(ord("S"), "ERROR"), (ord("C"), "XX000"), (ord("M"), "boom")]),
    ErrorResponse(),
    NoticeResponse([(ord("S"), "NOTICE"), (ord("M"), "hello")]),
    NotificationResponse(42, "channel", "payload"),
    NotificationResponse(7, "events", ""),
]


@pytest.mark.parametrize("message", SAMPLES)
def test_round_trip(message):
    encoded = message.encode()
    assert peek_length(encoded, 1) == len(encoded) - 1
    buf = bytearray(encoded)
    assert type(message).decode(buf) == message
    assert buf == bytearray()


@pytest.mark.parametrize("message", SAMPLES)
def test_length_matches_encoding(message):
    encoded = message.encode()
    assert len(encoded) == 1 + message.message_length()
    assert peek_length(encoded, 1) == message.message_length()
    assert struct.unpack(">i", encoded[1:5])[0] == message.message_length()


def test_ready_for_query_wire_bytes():
    assert ReadyForQuery(TransactionStatus.IDLE).encode() == b"Z" + struct.pack(">i", 5) + b"I"
    assert ReadyForQuery(TransactionStatus.ERROR).message_length() == 5


@pytest.mark.parametrize(
    "raw, status",
    [
        (ord("I"), TransactionStatus.IDLE),
        (ord("T"), TransactionStatus.TRANSACTION),
        (ord("E"), TransactionStatus.ERROR),
    ],
)
def test_transaction_status_from_byte(raw, status):
    assert TransactionStatus.from_byte(raw) is status


def test_transaction_status_invalid():
    with pytest.raises(InvalidTransactionStatus) as info:
        TransactionStatus.from_byte(ord("X"))
    assert info.value.value == ord("X")
    assert isinstance(info.value, PgWireError)


def test_ready_for_query_decode_invalid_status():
    buf = bytearray(b"Z" + struct.pack(">i", 5) + b"Q")
    with pytest.raises(InvalidTransactionStatus):
        ReadyForQuery.decode(buf)


def test_empty_error_response_is_single_nul():
    assert ErrorResponse().encode() == b"E" + struct.pack(">i", 5) + b"\0"


def test_error_response_body_ends_with_terminator():
    body = ErrorResponse([(ord("M"), "boom")]).encode_body()
    assert body == b"M" + b"boom\0" + b"\0"


def test_notice_type_byte():
    assert NoticeResponse().encode()[:1] == b"N"
    assert NotificationResponse().encode()[:1] == b"A"
    assert CommandComplete("OK").encode()[:1] == b"C"
    assert EmptyQueryResponse().encode() == b"I" + struct.pack(">i", 4)


def test_command_complete_empty_tag():
    buf = bytearray(CommandComplete("").encode())
    assert CommandComplete.decode(buf) == CommandComplete("")


def test_ssl_response_encode():
    assert SslResponse.ACCEPT.encode() == b"S"
    assert SslResponse.REFUSE.encode() == b"N"
    assert SslResponse.ACCEPT.message_length() == 1


@pytest.mark.parametrize("raw, expected", [(b"S", SslResponse.ACCEPT), (b"N", SslResponse.REFUSE)])
def test_ssl_response_decode(raw, expected):
    buf = bytearray(raw + b"rest")
    assert SslResponse.decode(buf) is expected
    assert buf == bytearray(b"rest")


def test_ssl_response_decode_unknown_or_empty():
    buf = bytearray(b"X")
    assert SslResponse.decode(buf) is None
    assert buf == bytearray(b"X")
    empty = bytearray()
    assert SslResponse.decode(empty) is None


def test_incomplete_error_response_returns_none():
    encoded = ErrorResponse([(ord("M"), "boom")]).encode()
    buf = bytearray(encoded[:-2])
    assert ErrorResponse.decode(buf) is None
    assert buf == bytearray(encoded[:-2])


def test_error_response_missing_terminator_raises():
    body = b"Mboom\0"
    buf = bytearray(b"E" + struct.pack(">i", 4 + len(body)) + body)
    with pytest.raises(PgWireError):
        ErrorResponse.decode(buf)