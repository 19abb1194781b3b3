"""The terminate message."""

from __future__ import annotations

from dataclasses import dataclass

from pgwire.codec import Message

MESSAGE_TYPE_BYTE_TERMINATE = ord("X")


@dataclass
class Terminate(Message):
    """Sent by the frontend to close the session."""

    MESSAGE_TYPE = MESSAGE_TYPE_BYTE_TERMINATE