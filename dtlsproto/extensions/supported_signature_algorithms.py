"""Supported signature/hash algorithm pairs extension."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

from ..errors import BufferTooSmallError
from .base import Extension, InvalidExtensionTypeError, LengthMismatchError, TypeValue

_HEADER_SIZE = 6


class HashAlgorithm(IntEnum):
    """TLS hash algorithm identifiers."""

    NONE = 0
    MD5 = 1
    SHA1 = 2
    SHA224 = 3
    SHA256 = 4
    SHA384 = 5
    SHA512 = 6
    ED25519 = 8


class SignatureAlgorithm(IntEnum):
    """TLS signature algorithm identifiers."""

    ANONYMOUS = 0
    RSA = 1
    ECDSA = 3
    ED25519 = 7


@dataclass(frozen=True)
class SignatureHashAlgorithm:
    """A hash algorithm paired with a signature algorithm."""

    hash: HashAlgorithm
    signature: SignatureAlgorithm


def _known(enum_cls: type[IntEnum], value: int) -> bool:
    return value in enum_cls._value2member_map_


@dataclass
class SupportedSignatureAlgorithms(Extension):
    """Signature/hash pairs a client or server supports."""

    type_value: ClassVar[TypeValue] = TypeValue.SUPPORTED_SIGNATURE_ALGORITHMS

    signature_hash_algorithms: list[SignatureHashAlgorithm] = field(default_factory=list)

    def marshal(self) -> bytes:
        count = len(self.signature_hash_algorithms)
        header = struct.pack(">HHH", int(self.type_value), 2 + count * 2, count * 2)
        pairs = b"".join(
            bytes([int(algo.hash), int(algo.signature)])
            for algo in self.signature_hash_algorithms
        )
        return header + pairs

    @classmethod
    def unmarshal(cls, data: bytes) -> "SupportedSignatureAlgorithms":
        if len(data) <= _HEADER_SIZE:
            raise BufferTooSmallError()
        ext_type, _, list_length = struct.unpack_from(">HHH", data)
        if ext_type != cls.type_value:
            raise InvalidExtensionTypeError()

        count = list_length // 2
        if _HEADER_SIZE + count * 2 > len(data):
            raise LengthMismatchError()

        body = bytes(data[_HEADER_SIZE : _HEADER_SIZE + count * 2])
        algorithms = [
            SignatureHashAlgorithm(HashAlgorithm(h), SignatureAlgorithm(s))
            for h, s in zip(body[0::2], body[1::2])
            if _known(HashAlgorithm, h) and _known(SignatureAlgorithm, s)
        ]
        return cls(signature_hash_algorithms=algorithms)