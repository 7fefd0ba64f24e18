"""Extended master secret extension."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

from ..errors import BufferTooSmallError
from .base import Extension, InvalidExtensionTypeError, TypeValue

_HEADER_SIZE = 4


@dataclass
class UseExtendedMasterSecret(Extension):
    """Binds the master secret to a log of the full handshake."""

    type_value: ClassVar[TypeValue] = TypeValue.USE_EXTENDED_MASTER_SECRET

    supported: bool = False

    def marshal(self) -> bytes:
        if not self.supported:
            return b""
        return struct.pack(">HH", int(self.type_value), 0)

    @classmethod
    def unmarshal(cls, data: bytes) -> "UseExtendedMasterSecret":
        if len(data) < _HEADER_SIZE:
            raise BufferTooSmallError()
        (ext_type,) = struct.unpack_from(">H", data)
        if ext_type != cls.type_value:
            raise InvalidExtensionTypeError()
        return cls(supported=True)