"""Encoding and decoding of a whole extensions block."""

from __future__ import annotations

import struct
from typing import Iterable

from ..errors import BufferTooSmallError
from .alpn import ALPN
from .base import Extension, LengthMismatchError, TypeValue
from .renegotiation_info import RenegotiationInfo
from .server_name import ServerName
from .supported_elliptic_curves import SupportedEllipticCurves
from .use_master_secret import UseExtendedMasterSecret
from .use_srtp import UseSRTP

_DECODERS: dict[int, type[Extension]] = {
    TypeValue.SERVER_NAME: ServerName,
    TypeValue.SUPPORTED_ELLIPTIC_CURVES: SupportedEllipticCurves,
    TypeValue.USE_SRTP: UseSRTP,
    TypeValue.ALPN: ALPN,
    TypeValue.USE_EXTENDED_MASTER_SECRET: UseExtendedMasterSecret,
    TypeValue.RENEGOTIATION_INFO: RenegotiationInfo,
}


def unmarshal_extensions(buf: bytes) -> list[Extension]:
    """Decode a length-prefixed block of extensions.

    Extensions of types this package does not decode are skipped.
    """
    buf = bytes(buf)
    if not buf:
        return []
    if len(buf) < 2:
        raise BufferTooSmallError()

    (declared,) = struct.unpack_from(">H", buf)
    if len(buf) - 2 != declared:
        raise LengthMismatchError()

    extensions: list[Extension] = []
    offset = 2
    while offset < len(buf):
        if len(buf) < offset + 2:
            raise BufferTooSmallError()
        (ext_type,) = struct.unpack_from(">H", buf, offset)
        decoder = _DECODERS.get(ext_type)
        if decoder is not None:
            extensions.append(decoder.unmarshal(buf[offset:]))
        if len(buf) < offset + 4:
            raise BufferTooSmallError()
        (ext_length,) = struct.unpack_from(">H", buf, offset + 2)
        offset += 4 + ext_length
    return extensions


def marshal_extensions(extensions: Iterable[Extension]) -> bytes:
    """Encode extensions one after another behind a two byte total length."""
    body = b"".join(ext.marshal() for ext in extensions)
    return struct.pack(">H", len(body) & 0xFFFF) + body