"""Renegotiation indication extension."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

from ..errors import BufferTooSmallError
from .base import Extension, InvalidExtensionTypeError, TypeValue

_HEADER_SIZE = 5


@dataclass
class RenegotiationInfo(Extension):
    """Lets a client or server communicate renegotiation support."""

    type_value: ClassVar[TypeValue] = TypeValue.RENEGOTIATION_INFO

    renegotiated_connection: int = 0

    def marshal(self) -> bytes:
        return struct.pack(
            ">HHB", int(self.type_value), 1, self.renegotiated_connection
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> "RenegotiationInfo":
        if len(data) < _HEADER_SIZE:
            raise BufferTooSmallError()
        (ext_type,) = struct.unpack_from(">H", data)
        if ext_type != cls.type_value:
            raise InvalidExtensionTypeError()
        return cls(renegotiated_connection=data[4])