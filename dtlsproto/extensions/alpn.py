"""Application-layer protocol negotiation extension."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Sequence

from .base import (
    ALPNInvalidFormatError,
    Extension,
    InvalidExtensionTypeError,
    NoApplicationProtocolError,
    TypeValue,
    _prefixed,
    _read_prefixed,
    _read_uint16,
)


@dataclass
class ALPN(Extension):
    """Protocols offered or selected during the handshake."""

    type_value: ClassVar[TypeValue] = TypeValue.ALPN

    protocol_name_list: list[str] = field(default_factory=list)

    def marshal(self) -> bytes:
        names = b"".join(
            _prefixed(name.encode("utf-8", "surrogateescape"), 1)
            for name in self.protocol_name_list
        )
        body = _prefixed(_prefixed(names, 2), 2)
        return int(self.type_value).to_bytes(2, "big") + body

    @classmethod
    def unmarshal(cls, data: bytes) -> "ALPN":
        header = _read_uint16(bytes(data))
        ext_type, rest = header if header is not None else (0, b"")
        if ext_type != cls.type_value:
            raise InvalidExtensionTypeError()

        ext = _read_prefixed(rest, 2)
        ext_data = ext[0] if ext is not None else b""

        proto_list = _read_prefixed(ext_data, 2)
        if proto_list is None or not proto_list[0]:
            raise ALPNInvalidFormatError()

        remaining = proto_list[0]
        names: list[str] = []
        while remaining:
            entry = _read_prefixed(remaining, 1)
            if entry is None or not entry[0]:
                raise ALPNInvalidFormatError()
            proto, remaining = entry
            names.append(proto.decode("utf-8", "surrogateescape"))
        return cls(protocol_name_list=names)


def alpn_protocol_selection(
    supported_protocols: Sequence[str], peer_supported_protocols: Sequence[str]
) -> str:
    """Pick the first of our protocols the peer supports.

    Returns "" when either side offers none; raises NoApplicationProtocolError
    when both offer some but share none.
    """
    if not supported_protocols or not peer_supported_protocols:
        return ""
    peer = set(peer_supported_protocols)
    for proto in supported_protocols:
        if proto in peer:
            return proto
    raise NoApplicationProtocolError()