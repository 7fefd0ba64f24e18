"""The DTLS record layer: record headers, records and datagram splitting."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from .alert import Alert
from .errors import BufferTooSmallError, FatalError, InternalError, TemporaryError
from .handshake.handshake import Handshake
from .protocol import (
    VERSION_1_0,
    VERSION_1_2,
    ApplicationData,
    ChangeCipherSpec,
    ContentType,
    Version,
)

HEADER_SIZE = 13
MAX_SEQUENCE_NUMBER = 0x0000FFFFFFFFFFFF

Content = Union[ChangeCipherSpec, Alert, Handshake, ApplicationData]


class InvalidPacketLengthError(TemporaryError):
    """A datagram's length does not match the lengths its records declare."""

    default_message = "packet length and declared length do not match"


class SequenceNumberOverflowError(InternalError):
    """The sequence number does not fit in 48 bits."""

    default_message = "sequence number overflow"


class UnsupportedProtocolVersionError(FatalError):
    """The record carries a protocol version other than DTLS 1.0 or 1.2."""

    default_message = "unsupported protocol version"


class InvalidContentTypeError(TemporaryError):
    """The record carries an unknown content type."""

    default_message = "invalid content type"


def _coerce_content_type(value: int) -> Union[ContentType, int]:
    try:
        return ContentType(value)
    except ValueError:
        return value


@dataclass
class RecordHeader:
    """The thirteen byte header of a DTLS record."""

    content_type: Union[ContentType, int] = 0
    content_len: int = 0
    version: Version = Version(0, 0)
    epoch: int = 0
    sequence_number: int = 0

    def marshal(self) -> bytes:
        if self.sequence_number > MAX_SEQUENCE_NUMBER:
            raise SequenceNumberOverflowError()
        return (
            struct.pack(
                ">BBBH",
                int(self.content_type),
                self.version.major,
                self.version.minor,
                self.epoch & 0xFFFF,
            )
            + self.sequence_number.to_bytes(6, "big")
            + struct.pack(">H", self.content_len & 0xFFFF)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> "RecordHeader":
        """Decode a header; the content length is left at 0 and set again on marshal."""
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise BufferTooSmallError()
        version = Version(major=data[1], minor=data[2])
        (epoch,) = struct.unpack_from(">H", data, 3)
        header = cls(
            content_type=_coerce_content_type(data[0]),
            version=version,
            epoch=epoch,
            sequence_number=int.from_bytes(data[5:11], "big"),
        )
        if version not in (VERSION_1_0, VERSION_1_2):
            raise UnsupportedProtocolVersionError()
        return header


_CONTENT_DECODERS = {
    ContentType.CHANGE_CIPHER_SPEC: ChangeCipherSpec.unmarshal,
    ContentType.ALERT: Alert.unmarshal,
    ContentType.HANDSHAKE: Handshake.unmarshal,
    ContentType.APPLICATION_DATA: ApplicationData.unmarshal,
}


@dataclass
class RecordLayer:
    """A single DTLS record: header and content."""

    header: RecordHeader = field(default_factory=RecordHeader)
    content: Optional[Content] = None

    def marshal(self) -> bytes:
        """Encode the record; the header's content type and length are refreshed."""
        if self.content is None:
            raise ValueError("record has no content")
        raw = self.content.marshal()
        self.header = replace(
            self.header,
            content_len=len(raw),
            content_type=self.content.content_type,
        )
        return self.header.marshal() + raw

    @classmethod
    def unmarshal(cls, data: bytes) -> "RecordLayer":
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise BufferTooSmallError()
        header = RecordHeader.unmarshal(data)
        decoder = _CONTENT_DECODERS.get(data[0])
        if decoder is None:
            raise InvalidContentTypeError()
        return cls(header=header, content=decoder(data[HEADER_SIZE:]))


def unpack_datagram(buf: bytes) -> list[bytes]:
    """Split a datagram into the raw records it holds."""
    buf = bytes(buf)
    records: list[bytes] = []
    offset = 0
    while offset != len(buf):
        if len(buf) - offset <= HEADER_SIZE:
            raise InvalidPacketLengthError()
        (content_len,) = struct.unpack_from(">H", buf, offset + 11)
        packet_len = HEADER_SIZE + content_len
        if offset + packet_len > len(buf):
            raise InvalidPacketLengthError()
        records.append(buf[offset : offset + packet_len])
        offset += packet_len
    return records