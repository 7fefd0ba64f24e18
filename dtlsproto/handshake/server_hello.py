"""ServerHello handshake message."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from ..extensions.base import Extension
from ..extensions.codec import marshal_extensions, unmarshal_extensions
from ..protocol import CompressionMethod, Version, compression_methods
from .base import (
    RANDOM_LENGTH,
    BufferTooSmallError,
    CipherSuiteUnsetError,
    CompressionMethodUnsetError,
    HandshakeType,
    InvalidCompressionMethodError,
    Random,
)

_VARIABLE_WIDTH_START = 2 + RANDOM_LENGTH


@dataclass
class MessageServerHello:
    """The server's answer to a ClientHello with the chosen parameters."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.SERVER_HELLO

    version: Version = Version(0, 0)
    random: Random = field(default_factory=Random)
    session_id: bytes = b""
    cipher_suite_id: Optional[int] = None
    compression_method: Optional[CompressionMethod] = None
    extensions: list[Extension] = field(default_factory=list)

    def marshal(self) -> bytes:
        if self.cipher_suite_id is None:
            raise CipherSuiteUnsetError()
        if self.compression_method is None:
            raise CompressionMethodUnsetError()
        session_id = bytes(self.session_id)
        return b"".join(
            [
                bytes([self.version.major, self.version.minor]),
                self.random.marshal_fixed(),
                bytes([len(session_id) & 0xFF]),
                session_id,
                struct.pack(">H", self.cipher_suite_id & 0xFFFF),
                bytes([int(self.compression_method.id)]),
                marshal_extensions(self.extensions),
            ]
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> "MessageServerHello":
        data = bytes(data)
        if len(data) < 2 + RANDOM_LENGTH:
            raise BufferTooSmallError()

        version = Version(major=data[0], minor=data[1])
        random = Random.unmarshal_fixed(data[2:_VARIABLE_WIDTH_START])

        offset = _VARIABLE_WIDTH_START + 1
        if len(data) <= offset:
            raise BufferTooSmallError()
        length = data[offset - 1]
        if len(data) <= offset + length:
            raise BufferTooSmallError()
        session_id = data[offset : offset + length]
        offset += length

        if len(data) < offset + 2:
            raise BufferTooSmallError()
        (cipher_suite_id,) = struct.unpack_from(">H", data, offset)
        offset += 2

        if len(data) <= offset:
            raise BufferTooSmallError()
        compression_method = compression_methods().get(data[offset])
        if compression_method is None:
            raise InvalidCompressionMethodError()
        offset += 1

        extensions = unmarshal_extensions(data[offset:]) if len(data) > offset else []
        return cls(
            version=version,
            random=random,
            session_id=session_id,
            cipher_suite_id=cipher_suite_id,
            compression_method=compression_method,
            extensions=extensions,
        )