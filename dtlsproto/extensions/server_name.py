"""Server name indication extension."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .base import (
    Extension,
    InvalidExtensionTypeError,
    InvalidSNIFormatError,
    TypeValue,
    _prefixed,
    _read_prefixed,
    _read_uint16,
)

_NAME_TYPE_DNS_HOST_NAME = 0


@dataclass
class ServerName(Extension):
    """The host name the client wishes to contact."""

    type_value: ClassVar[TypeValue] = TypeValue.SERVER_NAME

    server_name: str = ""

    def marshal(self) -> bytes:
        entry = bytes([_NAME_TYPE_DNS_HOST_NAME]) + _prefixed(
            self.server_name.encode("utf-8", "surrogateescape"), 2
        )
        body = _prefixed(_prefixed(entry, 2), 2)
        return int(self.type_value).to_bytes(2, "big") + body

    @classmethod
    def unmarshal(cls, data: bytes) -> "ServerName":
        header = _read_uint16(bytes(data))
        ext_type, rest = header if header is not None else (0, b"")
        if ext_type != cls.type_value:
            raise InvalidExtensionTypeError()

        ext = _read_prefixed(rest, 2)
        ext_data = ext[0] if ext is not None else b""

        name_list = _read_prefixed(ext_data, 2)
        if name_list is None or not name_list[0]:
            raise InvalidSNIFormatError()

        remaining = name_list[0]
        server_name = ""
        while remaining:
            name_type = remaining[0]
            entry = _read_prefixed(remaining[1:], 2)
            if entry is None or not entry[0]:
                raise InvalidSNIFormatError()
            raw_name, remaining = entry
            if name_type != _NAME_TYPE_DNS_HOST_NAME:
                continue
            if server_name:
                # Multiple names of the same type are prohibited.
                raise InvalidSNIFormatError()
            server_name = raw_name.decode("utf-8", "surrogateescape")
            # An SNI value may not include a trailing dot.
            if server_name.endswith("."):
                raise InvalidSNIFormatError()
        return cls(server_name=server_name)