"""Certificate handshake message."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .base import BufferTooSmallError, HandshakeType, LengthMismatchError

_LENGTH_FIELD_SIZE = 3


def _uint24(value: int) -> bytes:
    return (value & 0xFFFFFF).to_bytes(_LENGTH_FIELD_SIZE, "big")


@dataclass
class MessageCertificate:
    """A chain of DER encoded certificates from client or server."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.CERTIFICATE

    certificate: list[bytes] = field(default_factory=list)

    def marshal(self) -> bytes:
        body = b"".join(_uint24(len(cert)) + bytes(cert) for cert in self.certificate)
        return _uint24(len(body)) + body

    @classmethod
    def unmarshal(cls, data: bytes) -> "MessageCertificate":
        data = bytes(data)
        if len(data) < _LENGTH_FIELD_SIZE:
            raise BufferTooSmallError()
        body_length = int.from_bytes(data[:_LENGTH_FIELD_SIZE], "big")
        if body_length + _LENGTH_FIELD_SIZE != len(data):
            raise LengthMismatchError()

        certificates: list[bytes] = []
        offset = _LENGTH_FIELD_SIZE
        while offset < len(data):
            if offset + _LENGTH_FIELD_SIZE > len(data):
                raise LengthMismatchError()
            cert_length = int.from_bytes(data[offset : offset + _LENGTH_FIELD_SIZE], "big")
            offset += _LENGTH_FIELD_SIZE
            if offset + cert_length > len(data):
                raise LengthMismatchError()
            certificates.append(data[offset : offset + cert_length])
            offset += cert_length
        return cls(certificate=certificates)