"""Shared definitions for ClientHello/ServerHello extensions."""

from __future__ import annotations

import abc
from enum import IntEnum
from typing import ClassVar, Optional, Tuple

from ..errors import FatalError, InternalError


class TypeValue(IntEnum):
    """Two byte identifier of a TLS extension as registered with IANA."""

    SERVER_NAME = 0
    SUPPORTED_ELLIPTIC_CURVES = 10
    SUPPORTED_POINT_FORMATS = 11
    SUPPORTED_SIGNATURE_ALGORITHMS = 13
    USE_SRTP = 14
    ALPN = 16
    USE_EXTENDED_MASTER_SECRET = 23
    RENEGOTIATION_INFO = 65281


class SRTPProtectionProfile(IntEnum):
    """Parameters and options in effect for SRTP processing."""

    SRTP_AES128_CM_HMAC_SHA1_80 = 0x0001
    SRTP_AES128_CM_HMAC_SHA1_32 = 0x0002
    SRTP_AEAD_AES_128_GCM = 0x0007
    SRTP_AEAD_AES_256_GCM = 0x0008


def srtp_protection_profiles() -> frozenset[SRTPProtectionProfile]:
    """All SRTP protection profiles this package understands."""
    return frozenset(SRTPProtectionProfile)


class ALPNInvalidFormatError(FatalError):
    """The ALPN extension body is malformed."""

    default_message = "invalid alpn format"


class NoApplicationProtocolError(FatalError):
    """No application protocol is shared by both peers."""

    default_message = "no application protocol"


class InvalidExtensionTypeError(FatalError):
    """The data does not start with the expected extension type."""

    default_message = "invalid extension type"


class InvalidSNIFormatError(FatalError):
    """The server name extension body is malformed."""

    default_message = "invalid server name format"


class LengthMismatchError(InternalError):
    """A declared length does not match the data that follows it."""

    default_message = "data length and declared length do not match"


class Extension(abc.ABC):
    """A single TLS extension that can be encoded and decoded."""

    type_value: ClassVar[TypeValue]

    @abc.abstractmethod
    def marshal(self) -> bytes:
        """Encode the extension, type and length header included."""

    @classmethod
    @abc.abstractmethod
    def unmarshal(cls, data: bytes) -> "Extension":
        """Decode an extension from data starting at its type header."""


def _read_uint16(data: bytes) -> Optional[Tuple[int, bytes]]:
    """Read a big-endian uint16; None if the data is too short."""
    if len(data) < 2:
        return None
    return (data[0] << 8) | data[1], data[2:]


def _read_prefixed(data: bytes, width: int) -> Optional[Tuple[bytes, bytes]]:
    """Read a length-prefixed field; returns (content, rest) or None on short data."""
    if len(data) < width:
        return None
    length = int.from_bytes(data[:width], "big")
    end = width + length
    if len(data) < end:
        return None
    return bytes(data[width:end]), bytes(data[end:])


def _prefixed(content: bytes, width: int) -> bytes:
    """Prefix content with its length in width bytes."""
    if len(content) >= 1 << (8 * width):
        raise ValueError(f"length {len(content)} does not fit in {width} byte(s)")
    return len(content).to_bytes(width, "big") + content