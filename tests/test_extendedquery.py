import struct

import pytest

from pgwire.codec import PgWireError, peek_length
from pgwire.extendedquery import (
    TARGET_TYPE_BYTE_PORTAL,
    TARGET_TYPE_BYTE_STATEMENT,
    Bind,
    BindComplete,
    Close,
    CloseComplete,
    Describe,
    Execute,
    Flush,
    Parse,
    ParseComplete,
    PortalSuspended,
    Sync,
)

SAMPLES = [
    Parse("stmt1", "SELECT * FROM testtable WHERE id = $1", [23]),
    Parse(None, "SELECT 1", []),
    ParseComplete(),
    Close(TARGET_TYPE_BYTE_STATEMENT, "stmt1"),
    Close(TARGET_TYPE_BYTE_PORTAL, None),
    CloseComplete(),
    Bind(
        portal_name="portal",
        statement_name="stmt1",
        parameter_format_codes=[0, 1],
        parameters=[b"1", None, b""],
        result_column_format_codes=[1],
    ),
    Bind(),
    BindComplete(),
    Describe(TARGET_TYPE_BYTE_STATEMENT, "stmt1"),
    Describe(TARGET_TYPE_BYTE_PORTAL, None),
    Execute("portal", 100),
    Execute(None, 0),
    Flush(),
    Sync(),
    PortalSuspended(),
]


@pytest.mark.parametrize("message", SAMPLES)
def test_round_trip(message):
    encoded = message.encode()
    assert peek_length(encoded, 1) == len(encoded) - 1
    buf = bytearray(encoded)
    decoded = type(message).decode(buf)
    assert decoded == message
    assert buf == bytearray()


@pytest.mark.parametrize("message", SAMPLES)
def test_length_matches_encoding(message):
    encoded = message.encode()
    assert len(encoded) == 1 + message.message_length()
    assert peek_length(encoded, 1) == message.message_length()
    assert struct.unpack(">i", encoded[1:5])[0] == message.message_length()


@pytest.mark.parametrize(
    "message, type_byte",
    [
        (Parse(None, "SELECT 1"), b"P"),
        (ParseComplete(), b"1"),
        (Close(TARGET_TYPE_BYTE_PORTAL), b"C"),
        (CloseComplete(), b"3"),
        (Bind(), b"B"),
        (BindComplete(), b"2"),
        (Describe(TARGET_TYPE_BYTE_STATEMENT), b"D"),
        (Execute(), b"E"),
        (Flush(), b"H"),
        (Sync(), b"S"),
        (PortalSuspended(), b"s"),
    ],
)
def test_type_bytes(message, type_byte):
    assert message.encode()[:1] == type_byte


def test_empty_messages_are_header_only():
    assert Sync().encode() == b"S" + struct.pack(">i", 4)
    assert ParseComplete().message_length() == 4


def test_bind_null_parameter_encoded_as_minus_one():
    body = Bind(parameters=[None]).encode_body()
    assert struct.pack(">i", -1) in body
    decoded = Bind.decode(bytearray(Bind(parameters=[None, b"x"]).encode()))
    assert decoded.parameters == [None, b"x"]


def test_parse_unnamed_statement_starts_with_nul():
    body = Parse(None, "SELECT 1").encode_body()
    assert body[:1] == b"\0"
    assert Parse.decode(bytearray(Parse(None, "SELECT 1").encode())).name is None


def test_target_types():
    assert TARGET_TYPE_BYTE_STATEMENT == ord("S")
    assert TARGET_TYPE_BYTE_PORTAL == ord("P")
    assert Describe.decode(bytearray(Describe(TARGET_TYPE_BYTE_PORTAL, "p").encode())).target_type == ord("P")


def test_incomplete_buffer_returns_none():
    encoded = Execute("portal", 5).encode()
    buf = bytearray(encoded[:-1])
    assert Execute.decode(buf) is None
    assert buf == bytearray(encoded[:-1])


def test_sequential_messages_in_one_buffer():
    first = Parse("a", "SELECT 1", [])
    second = Execute("a", 10)
    buf = bytearray(first.encode() + second.encode() + Sync().encode())
    assert Parse.decode(buf) == first
    assert Execute.decode(buf) == second
    assert Sync.decode(buf) == Sync()
    assert buf == bytearray()


def test_unterminated_query_raises():
    body = b"\0abc"
    buf = bytearray(b"P" + struct.pack(">i", 4 + len(body)) + body)
    with pytest.raises(PgWireError):
        Parse.decode(buf)


def test_execute_negative_max_rows_round_trip():
    message = Execute("portal", -1)
    assert Execute.decode(bytearray(message.encode())).max_rows == -1