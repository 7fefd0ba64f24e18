"""ClientKeyExchange handshake message."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntFlag
from typing import ClassVar, Optional

from .base import (
    BufferTooSmallError,
    CipherSuiteUnsetError,
    HandshakeType,
    InvalidClientKeyExchangeError,
)


class KeyExchangeAlgorithm(IntFlag):
    """Key exchange methods a cipher suite uses; they may be combined."""

    NONE = 0
    PSK = 1
    ECDHE = 2


@dataclass
class MessageClientKeyExchange:
    """Carries a PSK identity, an ECDHE public key, or both."""

    handshake_type: ClassVar[HandshakeType] = HandshakeType.CLIENT_KEY_EXCHANGE

    identity_hint: Optional[bytes] = None
    public_key: Optional[bytes] = None
    key_exchange_algorithm: KeyExchangeAlgorithm = KeyExchangeAlgorithm.NONE

    def marshal(self) -> bytes:
        if self.identity_hint is None and self.public_key is None:
            raise InvalidClientKeyExchangeError()
        out = b""
        if self.identity_hint is not None:
            hint = bytes(self.identity_hint)
            out += struct.pack(">H", len(hint) & 0xFFFF) + hint
        if self.public_key is not None:
            key = bytes(self.public_key)
            out += bytes([len(key) & 0xFF]) + key
        return out

    @classmethod
    def unmarshal(
        cls, data: bytes, key_exchange_algorithm: KeyExchangeAlgorithm
    ) -> "MessageClientKeyExchange":
        data = bytes(data)
        algorithm = KeyExchangeAlgorithm(key_exchange_algorithm)
        if len(data) < 2:
            raise BufferTooSmallError()
        if algorithm == KeyExchangeAlgorithm.NONE:
            raise CipherSuiteUnsetError()

        identity_hint: Optional[bytes] = None
        public_key: Optional[bytes] = None
        offset = 0
        if KeyExchangeAlgorithm.PSK in algorithm:
            (psk_length,) = struct.unpack_from(">H", data)
            if psk_length > len(data) - 2:
                raise BufferTooSmallError()
            identity_hint = data[2 : psk_length + 2]
            offset += psk_length + 2

        if KeyExchangeAlgorithm.ECDHE in algorithm:
            if offset >= len(data):
                raise BufferTooSmallError()
            public_key_length = data[offset]
            if public_key_length > len(data) - 1 - offset:
                raise BufferTooSmallError()
            public_key = data[offset + 1 :]

        return cls(
            identity_hint=identity_hint,
            public_key=public_key,
            key_exchange_algorithm=algorithm,
        )