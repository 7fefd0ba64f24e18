"""SRTP protection profile negotiation extension."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

from ..errors import BufferTooSmallError
from .base import (
    Extension,
    InvalidExtensionTypeError,
    LengthMismatchError,
    SRTPProtectionProfile,
    TypeValue,
    srtp_protection_profiles,
)

_HEADER_SIZE = 6


@dataclass
class UseSRTP(Extension):
    """SRTP protection profiles a client or server supports."""

    type_value: ClassVar[TypeValue] = TypeValue.USE_SRTP

    protection_profiles: list[SRTPProtectionProfile] = field(default_factory=list)

    def marshal(self) -> bytes:
        count = len(self.protection_profiles)
        header = struct.pack(
            ">HHH", int(self.type_value), 2 + count * 2 + 1, count * 2
        )
        profiles = b"".join(
            struct.pack(">H", int(profile)) for profile in self.protection_profiles
        )
        return header + profiles + b"\x00"  # empty MKI

    @classmethod
    def unmarshal(cls, data: bytes) -> "UseSRTP":
        if len(data) <= _HEADER_SIZE:
            raise BufferTooSmallError()
        ext_type, _, list_length = struct.unpack_from(">HHH", data)
        if ext_type != cls.type_value:
            raise InvalidExtensionTypeError()

        profile_count = list_length // 2
        if _HEADER_SIZE + profile_count * 2 > len(data):
            raise LengthMismatchError()

        known = srtp_protection_profiles()
        profiles = [
            SRTPProtectionProfile(value)
            for (value,) in struct.iter_unpack(
                ">H", bytes(data[_HEADER_SIZE : _HEADER_SIZE + profile_count * 2])
            )
            if value in known
        ]
        return cls(protection_profiles=profiles)