"""CertificateRequest handshake message."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Union

from ..extensions.supported_signature_algorithms import (
    HashAlgorithm,
    SignatureAlgorithm,
    SignatureHashAlgorithm,
)
from .base import BufferTooSmallError, HandshakeType

_MIN_LENGTH = 5


class ClientCertificateType(IntEnum):
    """Kinds of client certificate a server may ask for."""

    RSA_SIGN = 1
    ECDSA_SIGN = 64


def _known(enum_cls: type[IntEnum], value: int) -> bool:
    return value in enum_cls._value2member_map_


@dataclass
class MessageCertificateRequest:
    """A server's request for a client certificate."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.CERTIFICATE_REQUEST

    certificate_types: list[Union[ClientCertificateType, int]] = field(default_factory=list)
    signature_hash_algorithms: list[SignatureHashAlgorithm] = field(default_factory=list)
    certificate_authorities_names: list[bytes] = field(default_factory=list)

    def marshal(self) -> bytes:
        out = bytes([len(self.certificate_types) & 0xFF])
        out += bytes(int(t) for t in self.certificate_types)

        out += struct.pack(">H", (len(self.signature_hash_algorithms) * 2) & 0xFFFF)
        out += b"".join(
            bytes([int(algo.hash), int(algo.signature)])
            for algo in self.signature_hash_algorithms
        )

        names = b"".join(
            struct.pack(">H", len(ca) & 0xFFFF) + bytes(ca)
            for ca in self.certificate_authorities_names
        )
        return out + struct.pack(">H", len(names) & 0xFFFF) + names

    @classmethod
    def unmarshal(cls, data: bytes) -> "MessageCertificateRequest":
        data = bytes(data)
        if len(data) < _MIN_LENGTH:
            raise BufferTooSmallError()

        types_length = data[0]
        offset = 1
        if offset + types_length > len(data):
            raise BufferTooSmallError()
        certificate_types = [
            ClientCertificateType(raw)
            for raw in data[offset : offset + types_length]
            if _known(ClientCertificateType, raw)
        ]
        offset += types_length

        if len(data) < offset + 2:
            raise BufferTooSmallError()
        (algorithms_length,) = struct.unpack_from(">H", data, offset)
        offset += 2
        if offset + algorithms_length > len(data):
            raise BufferTooSmallError()

        algorithms: list[SignatureHashAlgorithm] = []
        for i in range(0, algorithms_length, 2):
            if len(data) < offset + i + 2:
                raise BufferTooSmallError()
            h, s = data[offset + i], data[offset + i + 1]
            if _known(HashAlgorithm, h) and _known(SignatureAlgorithm, s):
                algorithms.append(
                    SignatureHashAlgorithm(HashAlgorithm(h), SignatureAlgorithm(s))
                )
        offset += algorithms_length

        if len(data) < offset + 2:
            raise BufferTooSmallError()
        (cas_length,) = struct.unpack_from(">H", data, offset)
        offset += 2
        if offset + cas_length > len(data):
            raise BufferTooSmallError()

        cas = data[offset : offset + cas_length]
        names: list[bytes] = []
        while cas:
            if len(cas) < 2:
                raise BufferTooSmallError()
            (ca_length,) = struct.unpack_from(">H", cas)
            cas = cas[2:]
            if len(cas) < ca_length:
                raise BufferTooSmallError()
            names.append(cas[:ca_length])
            cas = cas[ca_length:]

        return cls(
            certificate_types=certificate_types,
            signature_hash_algorithms=algorithms,
            certificate_authorities_names=names,
        )