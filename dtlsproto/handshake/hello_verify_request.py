"""HelloVerifyRequest handshake message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..protocol import Version
from .base import BufferTooSmallError, CookieTooLongError, HandshakeType

_MAX_COOKIE_LENGTH = 255


@dataclass
class MessageHelloVerifyRequest:
    """A server's request that the client resend its hello with a cookie."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.HELLO_VERIFY_REQUEST

    version: Version = Version(0, 0)
    cookie: bytes = b""

    def marshal(self) -> bytes:
        if len(self.cookie) > _MAX_COOKIE_LENGTH:
            raise CookieTooLongError()
        return (
            bytes([self.version.major, self.version.minor, len(self.cookie)])
            + bytes(self.cookie)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> "MessageHelloVerifyRequest":
        data = bytes(data)
        if len(data) < 3:
            raise BufferTooSmallError()
        cookie_length = data[2]
        if len(data) < cookie_length + 3:
            raise BufferTooSmallError()
        return cls(
            version=Version(major=data[0], minor=data[1]),
            cookie=data[3 : 3 + cookie_length],
        )