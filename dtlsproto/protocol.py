"""Core DTLS wire types: versions, content types and simple content messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Iterable

from .errors import BufferTooSmallError, InvalidCipherSpecError


@dataclass(frozen=True)
class Version:
    """Major/minor protocol version as used in record and hello messages."""

    major: int
    minor: int


VERSION_1_0 = Version(major=0xFE, minor=0xFF)
VERSION_1_2 = Version(major=0xFE, minor=0xFD)


class ContentType(IntEnum):
    """IANA registered record content types."""

    CHANGE_CIPHER_SPEC = 20
    ALERT = 21
    HANDSHAKE = 22
    APPLICATION_DATA = 23


@dataclass
class ApplicationData:
    """Opaque application payload carried by the record layer."""

    content_type: ClassVar[ContentType] = ContentType.APPLICATION_DATA

    data: bytes = b""

    def marshal(self) -> bytes:
        return bytes(self.data)

    @classmethod
    def unmarshal(cls, data: bytes) -> "ApplicationData":
        return cls(data=bytes(data))


@dataclass
class ChangeCipherSpec:
    """Signals a transition in ciphering strategy; a single byte of value 1."""

    content_type: ClassVar[ContentType] = ContentType.CHANGE_CIPHER_SPEC

    def marshal(self) -> bytes:
        return b"\x01"

    @classmethod
    def unmarshal(cls, data: bytes) -> "ChangeCipherSpec":
        if bytes(data) != b"\x01":
            raise InvalidCipherSpecError()
        return cls()


class CompressionMethodID(IntEnum):
    """Identifier of a TLS compression method."""

    NULL = 0


@dataclass(frozen=True)
class CompressionMethod:
    """A TLS compression method."""

    id: CompressionMethodID = CompressionMethodID.NULL


def compression_methods() -> dict[CompressionMethodID, CompressionMethod]:
    """All supported compression methods keyed by id."""
    return {CompressionMethodID.NULL: CompressionMethod(CompressionMethodID.NULL)}


def decode_compression_methods(buf: bytes) -> list[CompressionMethod]:
    """Decode a count-prefixed list, keeping only supported methods."""
    if len(buf) < 1:
        raise BufferTooSmallError()
    count = buf[0]
    if len(buf) < count + 1:
        raise BufferTooSmallError()
    supported = compression_methods()
    return [supported[raw] for raw in buf[1 : count + 1] if raw in supported]


def encode_compression_methods(methods: Iterable[CompressionMethod]) -> bytes:
    """Encode methods as a count byte followed by ids in reverse order."""
    items = list(methods)
    return bytes([len(items)]) + bytes(int(m.id) for m in reversed(items))