"""Handshake header, random value, cipher suite lists and handshake errors."""

from __future__ import annotations

import secrets
import struct
import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Union

from ..errors import BufferTooSmallError, FatalError, InternalError
from ..extensions.base import LengthMismatchError

HEADER_LENGTH = 12
RANDOM_BYTES_LENGTH = 28
RANDOM_LENGTH = RANDOM_BYTES_LENGTH + 4

__all__ = [
    "HEADER_LENGTH",
    "RANDOM_BYTES_LENGTH",
    "RANDOM_LENGTH",
    "BufferTooSmallError",
    "LengthMismatchError",
    "HandshakeType",
    "HandshakeHeader",
    "Random",
    "UnableToMarshalFragmentedError",
    "HandshakeMessageUnsetError",
    "InvalidClientKeyExchangeError",
    "InvalidHashAlgorithmError",
    "InvalidSignatureAlgorithmError",
    "CookieTooLongError",
    "InvalidEllipticCurveTypeError",
    "InvalidNamedCurveError",
    "CipherSuiteUnsetError",
    "CompressionMethodUnsetError",
    "InvalidCompressionMethodError",
    "NotImplementedFeatureError",
    "decode_cipher_suite_ids",
    "encode_cipher_suite_ids",
]


class UnableToMarshalFragmentedError(InternalError):
    """Fragmented handshakes cannot be encoded."""

    default_message = "unable to marshal fragmented handshakes"


class HandshakeMessageUnsetError(InternalError):
    """A handshake without a message cannot be encoded."""

    default_message = "handshake message unset, unable to marshal"


class InvalidClientKeyExchangeError(FatalError):
    """A ClientKeyExchange holds neither a public key nor a PSK identity."""

    default_message = (
        "unable to determine if ClientKeyExchange is a public key or PSK Identity"
    )


class InvalidHashAlgorithmError(FatalError):
    """An unknown or inconsistent hash algorithm was given."""

    default_message = "invalid hash algorithm"


class InvalidSignatureAlgorithmError(FatalError):
    """An unknown or inconsistent signature algorithm was given."""

    default_message = "invalid signature algorithm"


class CookieTooLongError(FatalError):
    """A cookie longer than 255 bytes cannot be encoded."""

    default_message = "cookie must not be longer then 255 bytes"


class InvalidEllipticCurveTypeError(FatalError):
    """The elliptic curve type is unknown."""

    default_message = "invalid or unknown elliptic curve type"


class InvalidNamedCurveError(FatalError):
    """The named curve is unknown."""

    default_message = "invalid named curve"


class CipherSuiteUnsetError(FatalError):
    """A cipher suite is required but none was chosen."""

    default_message = "server hello can not be created without a cipher suite"


class CompressionMethodUnsetError(FatalError):
    """A compression method is required but none was chosen."""

    default_message = "server hello can not be created without a compression method"


class InvalidCompressionMethodError(FatalError):
    """The compression method is unknown."""

    default_message = "invalid or unknown compression method"


class NotImplementedFeatureError(InternalError):
    """The message uses a feature this package does not handle."""

    default_message = "feature has not been implemented yet"


class HandshakeType(IntEnum):
    """Identifier of each handshake message."""

    HELLO_REQUEST = 0
    CLIENT_HELLO = 1
    SERVER_HELLO = 2
    HELLO_VERIFY_REQUEST = 3
    CERTIFICATE = 11
    SERVER_KEY_EXCHANGE = 12
    CERTIFICATE_REQUEST = 13
    SERVER_HELLO_DONE = 14
    CERTIFICATE_VERIFY = 15
    CLIENT_KEY_EXCHANGE = 16
    FINISHED = 20

    def __str__(self) -> str:
        if self is HandshakeType.CERTIFICATE:
            return "TypeCertificate"
        return "".join(part.capitalize() for part in self.name.split("_"))


def _coerce_type(value: int) -> Union[HandshakeType, int]:
    try:
        return HandshakeType(value)
    except ValueError:
        return value


def _uint24(data: bytes, offset: int = 0) -> int:
    return int.from_bytes(data[offset : offset + 3], "big")


def _put_uint24(value: int) -> bytes:
    return (value & 0xFFFFFF).to_bytes(3, "big")


@dataclass
class HandshakeHeader:
    """The twelve byte header in front of every handshake message."""

    type: Union[HandshakeType, int] = HandshakeType.HELLO_REQUEST
    length: int = 0
    message_sequence: int = 0
    fragment_offset: int = 0
    fragment_length: int = 0

    def marshal(self) -> bytes:
        return (
            bytes([int(self.type)])
            + _put_uint24(self.length)
            + struct.pack(">H", self.message_sequence & 0xFFFF)
            + _put_uint24(self.fragment_offset)
            + _put_uint24(self.fragment_length)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> "HandshakeHeader":
        if len(data) < HEADER_LENGTH:
            raise BufferTooSmallError()
        data = bytes(data)
        (sequence,) = struct.unpack_from(">H", data, 4)
        return cls(
            type=_coerce_type(data[0]),
            length=_uint24(data, 1),
            message_sequence=sequence,
            fragment_offset=_uint24(data, 6),
            fragment_length=_uint24(data, 9),
        )


@dataclass
class Random:
    """The random value of ClientHello and ServerHello: a time and 28 bytes."""

    gmt_unix_time: int = 0
    random_bytes: bytes = field(default=bytes(RANDOM_BYTES_LENGTH))

    def __post_init__(self) -> None:
        self.random_bytes = bytes(self.random_bytes)
        if len(self.random_bytes) != RANDOM_BYTES_LENGTH:
            raise ValueError(
                f"random_bytes must be {RANDOM_BYTES_LENGTH} bytes, "
                f"got {len(self.random_bytes)}"
            )

    def marshal_fixed(self) -> bytes:
        """Encode as exactly 32 bytes."""
        return struct.pack(">I", self.gmt_unix_time & 0xFFFFFFFF) + self.random_bytes

    @classmethod
    def unmarshal_fixed(cls, data: bytes) -> "Random":
        """Decode from the first 32 bytes of data."""
        if len(data) < RANDOM_LENGTH:
            raise BufferTooSmallError()
        data = bytes(data)
        (unix_time,) = struct.unpack_from(">I", data)
        return cls(gmt_unix_time=unix_time, random_bytes=data[4:RANDOM_LENGTH])

    @classmethod
    def generate(cls) -> "Random":
        """A fresh value holding the current time and secure random bytes."""
        return cls(
            gmt_unix_time=int(time.time()),
            random_bytes=secrets.token_bytes(RANDOM_BYTES_LENGTH),
        )


def decode_cipher_suite_ids(buf: bytes) -> list[int]:
    """Decode a two byte length followed by two byte cipher suite ids."""
    if len(buf) < 2:
        raise BufferTooSmallError()
    buf = bytes(buf)
    (length,) = struct.unpack_from(">H", buf)
    count = length // 2
    if len(buf) < 2 + count * 2:
        raise BufferTooSmallError()
    return [value for (value,) in struct.iter_unpack(">H", buf[2 : 2 + count * 2])]


def encode_cipher_suite_ids(cipher_suite_ids: Iterable[int]) -> bytes:
    """Encode cipher suite ids behind their two byte total length."""
    ids = list(cipher_suite_ids)
    return struct.pack(">H", (len(ids) * 2) & 0xFFFF) + b"".join(
        struct.pack(">H", value) for value in ids
    )