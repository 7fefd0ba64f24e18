"""Error types raised while encoding or decoding DTLS messages."""

from __future__ import annotations

from typing import Optional, Union

ErrorDetail = Union[str, BaseException]


class DTLSError(Exception):
    """Base class for every DTLS error; wraps a message or another exception."""

    prefix = "dtls"
    default_message = "error"

    def __init__(self, err: Optional[ErrorDetail] = None) -> None:
        if err is None:
            err = self.default_message
        super().__init__(err)
        self.err = err
        if isinstance(err, BaseException):
            self.__cause__ = err

    def __str__(self) -> str:
        return f"{self.prefix}: {self.err}"

    def timeout(self) -> bool:
        """Whether the failure was caused by a timeout."""
        return False

    def temporary(self) -> bool:
        """Whether the connection is still usable after the failure."""
        return False


class FatalError(DTLSError):
    """The connection is no longer available, usually through misconfiguration."""

    prefix = "dtls fatal"


class InternalError(DTLSError):
    """The connection is no longer available because of an implementation fault."""

    prefix = "dtls internal"


class TemporaryError(DTLSError):
    """The request failed, but the connection is still available."""

    prefix = "dtls temporary"

    def temporary(self) -> bool:
        return True


class DTLSTimeoutError(DTLSError):
    """The request timed out."""

    prefix = "dtls timeout"

    def timeout(self) -> bool:
        return True

    def temporary(self) -> bool:
        return True


def _find_net_error(err: object) -> Optional[object]:
    """Walk the cause chain for the first error that reports timeout/temporary."""
    seen: set[int] = set()
    current: object = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if callable(getattr(current, "timeout", None)) and callable(
            getattr(current, "temporary", None)
        ):
            return current
        current = getattr(current, "__cause__", None)
    return None


class HandshakeError(DTLSError):
    """The handshake failed; timeout and temporary follow the wrapped error."""

    prefix = "handshake error"

    def timeout(self) -> bool:
        inner = _find_net_error(self.err)
        return bool(inner.timeout()) if inner is not None else False

    def temporary(self) -> bool:
        inner = _find_net_error(self.err)
        return bool(inner.temporary()) if inner is not None else False


class BufferTooSmallError(TemporaryError):
    """The input ended before the message it should hold."""

    default_message = "buffer is too small"


class InvalidCipherSpecError(FatalError):
    """A ChangeCipherSpec message did not hold the single byte 1."""

    default_message = "cipher spec invalid"