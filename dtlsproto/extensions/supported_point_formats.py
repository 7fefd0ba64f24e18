"""Supported elliptic curve point formats extension."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

from ..errors import BufferTooSmallError
from .base import Extension, InvalidExtensionTypeError, LengthMismatchError, TypeValue

_HEADER_SIZE = 5
_COUNT_LIMIT_BASE = 6


class CurvePointFormat(IntEnum):
    """Encoding of elliptic curve points."""

    UNCOMPRESSED = 0


@dataclass
class SupportedPointFormats(Extension):
    """Point formats a client or server can parse."""

    type_value: ClassVar[TypeValue] = TypeValue.SUPPORTED_POINT_FORMATS

    point_formats: list[CurvePointFormat] = field(default_factory=list)

    def marshal(self) -> bytes:
        count = len(self.point_formats)
        header = struct.pack(">HHB", int(self.type_value), 1 + count, count)
        return header + bytes(int(fmt) for fmt in self.point_formats)

    @classmethod
    def unmarshal(cls, data: bytes) -> "SupportedPointFormats":
        if len(data) <= _HEADER_SIZE:
            raise BufferTooSmallError()
        (ext_type,) = struct.unpack_from(">H", data)
        if ext_type != cls.type_value:
            raise InvalidExtensionTypeError()

        # The count is read as a two byte field starting at offset 4.
        (count,) = struct.unpack_from(">H", data, 4)
        if _COUNT_LIMIT_BASE + count > len(data):
            raise LengthMismatchError()

        formats = [
            CurvePointFormat(raw)
            for raw in data[_HEADER_SIZE : _HEADER_SIZE + count]
            if raw == CurvePointFormat.UNCOMPRESSED
        ]
        return cls(point_formats=formats)