"""Session storage and helpers for choosing shared parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, TypeVar

from .extensions.base import SRTPProtectionProfile

__all__ = [
    "SRTPProtectionProfile",
    "Session",
    "SessionStore",
    "find_matching_srtp_profile",
    "find_matching_cipher_suite",
    "split_bytes",
]


@dataclass(frozen=True)
class Session:
    """Data needed to resume a session: its id and master secret."""

    id: bytes = b""
    secret: bytes = b""


class SessionStore:
    """In-memory store of sessions for resumption.

    Clients key sessions by server name, servers by session id.
    Subclass and override the methods to keep sessions elsewhere.
    """

    def __init__(self) -> None:
        self._sessions: dict[bytes, Session] = {}

    def set(self, key: bytes, session: Session) -> None:
        """Save a session under key."""
        self._sessions[bytes(key)] = session

    def get(self, key: bytes) -> Optional[Session]:
        """Fetch the session saved under key, or None."""
        return self._sessions.get(bytes(key))

    def delete(self, key: bytes) -> None:
        """Forget the session saved under key, if any."""
        self._sessions.pop(bytes(key), None)


class _HasID(Protocol):
    id: int


_S = TypeVar("_S", bound=_HasID)


def find_matching_srtp_profile(
    a: Sequence[SRTPProtectionProfile], b: Sequence[SRTPProtectionProfile]
) -> Optional[SRTPProtectionProfile]:
    """The first profile of a that b also holds, or None."""
    return next((profile for profile in a if profile in b), None)


def find_matching_cipher_suite(a: Sequence[_S], b: Sequence[_HasID]) -> Optional[_S]:
    """The first cipher suite of a whose id appears in b, or None."""
    ids = {suite.id for suite in b}
    return next((suite for suite in a if suite.id in ids), None)


def split_bytes(data: bytes, split_len: int) -> list[bytes]:
    """Cut data into chunks of split_len bytes; the last may be shorter."""
    if split_len <= 0:
        raise ValueError("split_len must be positive")
    data = bytes(data)
    return [data[i : i + split_len] for i in range(0, len(data), split_len)]