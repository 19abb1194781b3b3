"""The simple query message."""

from __future__ import annotations

from dataclasses import dataclass

from pgwire.codec import Message, WireReader, encode_cstring

MESSAGE_TYPE_BYTE_QUERY = ord("Q")


@dataclass
class Query(Message):
    """A SQL query sent from frontend to backend."""

    query: str

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_QUERY

    def encode_body(self) -> bytes:
        return encode_cstring(self.query)

    @classmethod
    def decode_body(cls, reader: WireReader, length: int) -> "Query":
        return cls(reader.read_cstring() or "")