"""ClientHello handshake message."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

from ..extensions.base import Extension
from ..extensions.codec import marshal_extensions, unmarshal_extensions
from ..protocol import (
    CompressionMethod,
    Version,
    decode_compression_methods,
    encode_compression_methods,
)
from .base import (
    RANDOM_LENGTH,
    BufferTooSmallError,
    CookieTooLongError,
    HandshakeType,
    Random,
    decode_cipher_suite_ids,
    encode_cipher_suite_ids,
)

_VARIABLE_WIDTH_START = 2 + RANDOM_LENGTH
_MAX_COOKIE_LENGTH = 255


def _read_opaque8(data: bytes, offset: int) -> tuple[bytes, int]:
    """Read a one byte length-prefixed field at offset; return (value, new offset)."""
    offset += 1
    if len(data) <= offset:
        raise BufferTooSmallError()
    length = data[offset - 1]
    if len(data) <= offset + length:
        raise BufferTooSmallError()
    return data[offset : offset + length], offset + length


@dataclass
class MessageClientHello:
    """The first message a client sends, also used to renegotiate."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.CLIENT_HELLO

    version: Version = Version(0, 0)
    random: Random = field(default_factory=Random)
    cookie: bytes = b""
    session_id: bytes = b""
    cipher_suite_ids: list[int] = field(default_factory=list)
    compression_methods: list[CompressionMethod] = field(default_factory=list)
    extensions: list[Extension] = field(default_factory=list)

    def marshal(self) -> bytes:
        if len(self.cookie) > _MAX_COOKIE_LENGTH:
            raise CookieTooLongError()
        session_id = bytes(self.session_id)
        cookie = bytes(self.cookie)
        return b"".join(
            [
                bytes([self.version.major, self.version.minor]),
                self.random.marshal_fixed(),
                bytes([len(session_id) & 0xFF]),
                session_id,
                bytes([len(cookie)]),
                cookie,
                encode_cipher_suite_ids(self.cipher_suite_ids),
                encode_compression_methods(self.compression_methods),
                marshal_extensions(self.extensions),
            ]
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> "MessageClientHello":
        data = bytes(data)
        if len(data) < 2 + RANDOM_LENGTH:
            raise BufferTooSmallError()

        version = Version(major=data[0], minor=data[1])
        random = Random.unmarshal_fixed(data[2:_VARIABLE_WIDTH_START])

        offset = _VARIABLE_WIDTH_START
        session_id, offset = _read_opaque8(data, offset)
        cookie, offset = _read_opaque8(data, offset)

        cipher_suite_ids = decode_cipher_suite_ids(data[offset:])
        if len(data) < offset + 2:
            raise BufferTooSmallError()
        (suites_length,) = struct.unpack_from(">H", data, offset)
        offset += suites_length + 2

        if len(data) < offset:
            raise BufferTooSmallError()
        compression_methods = decode_compression_methods(data[offset:])
        offset += data[offset] + 1

        extensions = unmarshal_extensions(data[offset:])
        return cls(
            version=version,
            random=random,
            cookie=cookie,
            session_id=session_id,
            cipher_suite_ids=cipher_suite_ids,
            compression_methods=compression_methods,
            extensions=extensions,
        )