"""The TLS alert protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, TypeVar, Union

from .errors import BufferTooSmallError
from .protocol import ContentType


class Level(IntEnum):
    """Severity of an alert."""

    WARNING = 1
    FATAL = 2

    def __str__(self) -> str:
        return self.name.capitalize()


_SPECIAL_LABELS = {"UNKNOWN_CA": "UnknownCA"}


class Description(IntEnum):
    """Detailed reason of an alert."""

    CLOSE_NOTIFY = 0
    UNEXPECTED_MESSAGE = 10
    BAD_RECORD_MAC = 20
    DECRYPTION_FAILED = 21
    RECORD_OVERFLOW = 22
    DECOMPRESSION_FAILURE = 30
    HANDSHAKE_FAILURE = 40
    NO_CERTIFICATE = 41
    BAD_CERTIFICATE = 42
    UNSUPPORTED_CERTIFICATE = 43
    CERTIFICATE_REVOKED = 44
    CERTIFICATE_EXPIRED = 45
    CERTIFICATE_UNKNOWN = 46
    ILLEGAL_PARAMETER = 47
    UNKNOWN_CA = 48
    ACCESS_DENIED = 49
    DECODE_ERROR = 50
    DECRYPT_ERROR = 51
    EXPORT_RESTRICTION = 60
    PROTOCOL_VERSION = 70
    INSUFFICIENT_SECURITY = 71
    INTERNAL_ERROR = 80
    USER_CANCELED = 90
    NO_RENEGOTIATION = 100
    UNSUPPORTED_EXTENSION = 110
    NO_APPLICATION_PROTOCOL = 120

    def __str__(self) -> str:
        special = _SPECIAL_LABELS.get(self.name)
        if special is not None:
            return special
        return "".join(part.capitalize() for part in self.name.split("_"))


_E = TypeVar("_E", bound=IntEnum)


def _coerce(enum_cls: type[_E], value: int) -> Union[_E, int]:
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass
class Alert:
    """An alert record: a level and a description, one byte each.

    Unknown bytes are kept as plain integers.
    """

    content_type: ClassVar[ContentType] = ContentType.ALERT

    level: Union[Level, int] = 0
    description: Union[Description, int] = 0

    def marshal(self) -> bytes:
        return bytes([int(self.level), int(self.description)])

    @classmethod
    def unmarshal(cls, data: bytes) -> "Alert":
        if len(data) != 2:
            raise BufferTooSmallError()
        return cls(
            level=_coerce(Level, data[0]),
            description=_coerce(Description, data[1]),
        )

    def __str__(self) -> str:
        level = str(self.level) if isinstance(self.level, Level) else "Invalid alert level"
        description = (
            str(self.description)
            if isinstance(self.description, Description)
            else "Invalid alert description"
        )
        return f"Alert {level}: {description}"