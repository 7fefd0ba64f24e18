"""ServerKeyExchange handshake message for ECDHE and PSK key exchange."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional, Union

from ..extensions.supported_elliptic_curves import Curve
from ..extensions.supported_signature_algorithms import HashAlgorithm, SignatureAlgorithm
from .base import (
    BufferTooSmallError,
    CipherSuiteUnsetError,
    HandshakeType,
    InvalidEllipticCurveTypeError,
    InvalidHashAlgorithmError,
    InvalidNamedCurveError,
    InvalidSignatureAlgorithmError,
    LengthMismatchError,
)
from .client_key_exchange import KeyExchangeAlgorithm


class CurveType(IntEnum):
    """How the elliptic curve parameters are conveyed."""

    NAMED_CURVE = 0x03


@dataclass
class MessageServerKeyExchange:
    """Server key exchange parameters: a PSK identity hint, ECDHE parameters, or both."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.SERVER_KEY_EXCHANGE

    identity_hint: Optional[bytes] = None
    elliptic_curve_type: Union[CurveType, int] = 0
    named_curve: Union[Curve, int] = 0
    public_key: bytes = b""
    hash_algorithm: HashAlgorithm = HashAlgorithm.NONE
    signature_algorithm: SignatureAlgorithm = SignatureAlgorithm.ANONYMOUS
    signature: bytes = b""
    key_exchange_algorithm: KeyExchangeAlgorithm = KeyExchangeAlgorithm.NONE

    def marshal(self) -> bytes:
        out = b""
        if self.identity_hint is not None:
            hint = bytes(self.identity_hint)
            out += struct.pack(">H", len(hint) & 0xFFFF) + hint

        public_key = bytes(self.public_key)
        if int(self.elliptic_curve_type) == 0 or not public_key:
            return out

        out += struct.pack(
            ">BH", int(self.elliptic_curve_type) & 0xFF, int(self.named_curve) & 0xFFFF
        )
        out += bytes([len(public_key) & 0xFF]) + public_key

        signature = bytes(self.signature)
        has_hash = self.hash_algorithm != HashAlgorithm.NONE
        anonymous = self.signature_algorithm == SignatureAlgorithm.ANONYMOUS
        if has_hash and not signature:
            raise InvalidHashAlgorithmError()
        if not has_hash and signature:
            raise InvalidHashAlgorithmError()
        if anonymous and (has_hash or signature):
            raise InvalidSignatureAlgorithmError()
        if anonymous:
            return out

        out += struct.pack(
            ">BBH",
            int(self.hash_algorithm),
            int(self.signature_algorithm),
            len(signature) & 0xFFFF,
        )
        return out + signature

    @classmethod
    def unmarshal(
        cls, data: bytes, key_exchange_algorithm: KeyExchangeAlgorithm
    ) -> "MessageServerKeyExchange":
        data = bytes(data)
        algorithm = KeyExchangeAlgorithm(key_exchange_algorithm)
        if len(data) < 2:
            raise BufferTooSmallError()
        if algorithm == KeyExchangeAlgorithm.NONE:
            raise CipherSuiteUnsetError()

        message = cls(key_exchange_algorithm=algorithm)

        (hint_length,) = struct.unpack_from(">H", data)
        if hint_length <= len(data) - 2 and KeyExchangeAlgorithm.PSK in algorithm:
            message.identity_hint = data[2 : 2 + hint_length]
            data = data[2 + hint_length :]

        if algorithm == KeyExchangeAlgorithm.PSK:
            if not data:
                return message
            raise LengthMismatchError()

        if KeyExchangeAlgorithm.ECDHE not in algorithm:
            raise LengthMismatchError()

        if not data:
            raise BufferTooSmallError()
        try:
            message.elliptic_curve_type = CurveType(data[0])
        except ValueError:
            raise InvalidEllipticCurveTypeError() from None

        if len(data) < 3:
            raise BufferTooSmallError()
        (named_curve,) = struct.unpack_from(">H", data, 1)
        try:
            message.named_curve = Curve(named_curve)
        except ValueError:
            raise InvalidNamedCurveError() from None
        if len(data) < 4:
            raise BufferTooSmallError()

        offset = 4 + data[3]
        if len(data) < offset:
            raise BufferTooSmallError()
        message.public_key = data[4:offset]

        # Anonymous exchanges carry no hash, signature algorithm or signature.
        if len(data) == offset:
            return message

        try:
            message.hash_algorithm = HashAlgorithm(data[offset])
        except ValueError:
            raise InvalidHashAlgorithmError() from None
        offset += 1
        if len(data) <= offset:
            raise BufferTooSmallError()
        try:
            message.signature_algorithm = SignatureAlgorithm(data[offset])
        except ValueError:
            raise InvalidSignatureAlgorithmError() from None
        offset += 1
        if len(data) < offset + 2:
            raise BufferTooSmallError()
        (signature_length,) = struct.unpack_from(">H", data, offset)
        offset += 2
        if len(data) < offset + signature_length:
            raise BufferTooSmallError()
        message.signature = data[offset : offset + signature_length]
        return message