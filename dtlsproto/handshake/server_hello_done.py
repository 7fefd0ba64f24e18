"""ServerHelloDone handshake message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .base import HandshakeType


@dataclass
class MessageServerHelloDone:
    """The server's last unencrypted handshake message; it has no body."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.SERVER_HELLO_DONE

    def marshal(self) -> bytes:
        return b""

    @classmethod
    def unmarshal(cls, data: bytes) -> "MessageServerHelloDone":
        return cls()