"""CertificateVerify handshake message."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

from ..extensions.supported_signature_algorithms import HashAlgorithm, SignatureAlgorithm
from .base import (
    BufferTooSmallError,
    HandshakeType,
    InvalidHashAlgorithmError,
    InvalidSignatureAlgorithmError,
)

_MIN_LENGTH = 4


@dataclass
class MessageCertificateVerify:
    """Explicit verification of a client certificate."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.CERTIFICATE_VERIFY

    hash_algorithm: HashAlgorithm = HashAlgorithm.NONE
    signature_algorithm: SignatureAlgorithm = SignatureAlgorithm.ANONYMOUS
    signature: bytes = b""

    def marshal(self) -> bytes:
        return (
            struct.pack(
                ">BBH",
                int(self.hash_algorithm),
                int(self.signature_algorithm),
                len(self.signature) & 0xFFFF,
            )
            + bytes(self.signature)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> "MessageCertificateVerify":
        data = bytes(data)
        if len(data) < _MIN_LENGTH:
            raise BufferTooSmallError()
        try:
            hash_algorithm = HashAlgorithm(data[0])
        except ValueError:
            raise InvalidHashAlgorithmError() from None
        try:
            signature_algorithm = SignatureAlgorithm(data[1])
        except ValueError:
            raise InvalidSignatureAlgorithmError() from None
        (signature_length,) = struct.unpack_from(">H", data, 2)
        if signature_length + _MIN_LENGTH != len(data):
            raise BufferTooSmallError()
        return cls(
            hash_algorithm=hash_algorithm,
            signature_algorithm=signature_algorithm,
            signature=data[_MIN_LENGTH:],
        )