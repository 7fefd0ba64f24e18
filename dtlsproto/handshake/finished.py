"""Finished handshake message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .base import HandshakeType


@dataclass
class MessageFinished:
    """The first message protected with the negotiated keys."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.FINISHED

    verify_data: bytes = b""

    def marshal(self) -> bytes:
        return bytes(self.verify_data)

    @classmethod
    def unmarshal(cls, data: bytes) -> "MessageFinished":
        return cls(verify_data=bytes(data))