from dataclasses import dataclass

import pytest

from dtlsproto.negotiation import (
    Session,
    SessionStore,
    SRTPProtectionProfile,
    find_matching_cipher_suite,
    find_matching_srtp_profile,
    split_bytes,
)


@dataclass(frozen=True)
class Suite:
    id: int
    name: str


def test_split_bytes_chunks():
    assert split_bytes(b"abcdefg", 3) == [b"abc", b"def", b"g"]


@pytest.mark.parametrize("size", [1, 2, 5, 7, 20])
def test_split_bytes_rejoins(size):
    data = bytes(range(17))
    chunks = split_bytes(data, size)
    assert b"".join(chunks) == data
    assert all(len(chunk) <= size for chunk in chunks)
    assert all(len(chunk) == size for chunk in chunks[:-1])


def test_split_bytes_empty():
    assert split_bytes(b"", 4) == []


def test_split_bytes_invalid_length():
    with pytest.raises(ValueError):
        split_bytes(b"abc", 0)


def test_srtp_profile_prefers_first_list_order():
    a = [
        SRTPProtectionProfile.SRTP_AES128_CM_HMAC_SHA1_32,
        SRTPProtectionProfile.SRTP_AES128_CM_HMAC_SHA1_80,
    ]
    b = [
        SRTPProtectionProfile.SRTP_AES128_CM_HMAC_SHA1_80,
        SRTPProtectionProfile.SRTP_AES128_CM_HMAC_SHA1_32,
    ]
    assert find_matching_srtp_profile(a, b) == SRTPProtectionProfile.SRTP_AES128_CM_HMAC_SHA1_32
    assert find_matching_srtp_profile(b, a) == SRTPProtectionProfile.SRTP_AES128_CM_HMAC_SHA1_80


def test_srtp_profile_no_match():
    assert (
        find_matching_srtp_profile(
            [SRTPProtectionProfile.SRTP_AEAD_AES_128_GCM],
            [SRTPProtectionProfile.SRTP_AEAD_AES_256_GCM],
        )
        is None
    )


def test_cipher_suite_matches_by_id():
    ours = [Suite(0xC02B, "ours-a"), Suite(0xC00A, "ours-b")]
    theirs = [Suite(0xC00A, "theirs-b"), Suite(0xC02B, "theirs-a")]
    assert find_matching_cipher_suite(ours, theirs) is ours[0]


def test_cipher_suite_no_match():
    assert find_matching_cipher_suite([Suite(1, "x")], [Suite(2, "y")]) is None


def test_session_store_round_trip():
    store = SessionStore()
    session = Session(id=b"\x01\x02", secret=b"secret")
    store.set(b"example.com", session)
    assert store.get(b"example.com") == session
    store.delete(b"example.com")
    assert store.get(b"example.com") is None


def test_session_store_delete_missing_and_overwrite():
    store = SessionStore()
    store.delete(b"missing")
    first = Session(id=b"\x01", secret=b"secret")
    second = Session(id=b"\x02", secret=b"secret")
    store.set(bytearray(b"key"), first)
    store.set(b"key", second)
    assert store.get(b"key") == second
    assert store.get(b"missing") is None