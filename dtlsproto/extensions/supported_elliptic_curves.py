"""Supported elliptic curves (supported groups) extension."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

from ..errors import BufferTooSmallError
from .base import Extension, InvalidExtensionTypeError, LengthMismatchError, TypeValue

_HEADER_SIZE = 6


class Curve(IntEnum):
    """Named elliptic curves understood by this package."""

    P256 = 0x0017
    P384 = 0x0018
    X25519 = 0x001D


@dataclass
class SupportedEllipticCurves(Extension):
    """Curves a client or server is willing to use."""

    type_value: ClassVar[TypeValue] = TypeValue.SUPPORTED_ELLIPTIC_CURVES

    elliptic_curves: list[Curve] = field(default_factory=list)

    def marshal(self) -> bytes:
        count = len(self.elliptic_curves)
        header = struct.pack(">HHH", int(self.type_value), 2 + count * 2, count * 2)
        curves = b"".join(struct.pack(">H", int(curve)) for curve in self.elliptic_curves)
        return header + curves

    @classmethod
    def unmarshal(cls, data: bytes) -> "SupportedEllipticCurves":
        if len(data) <= _HEADER_SIZE:
            raise BufferTooSmallError()
        ext_type, _, list_length = struct.unpack_from(">HHH", data)
        if ext_type != cls.type_value:
            raise InvalidExtensionTypeError()

        group_count = list_length // 2
        if _HEADER_SIZE + group_count * 2 > len(data):
            raise LengthMismatch_error()

        known = {int(curve) for curve in Curve}
        curves = [
            Curve(value)
            for (value,) in struct.iter_unpack(
                ">H", bytes(data[_HEADER_SIZE : _HEADER_SIZE + group_count * 2])
            )
            if value in known
        ]
        return cls(elliptic_curves=curves)


def LengthMismatch_error() -> LengthMismatchError:  # noqa: N802
    return LengthMismatchError()