import pytest

from dtlsproto.errors import BufferTooSmallError
from dtlsproto.extensions.supported_signature_algorithms import (
    HashAlgorithm,
    SignatureAlgorithm,
    SignatureHashAlgorithm,
)
from dtlsproto.handshake.certificate_request import (
    ClientCertificateType,
    MessageCertificateRequest,
)

ALGORITHMS = [
    SignatureHashAlgorithm(HashAlgorithm.SHA256, SignatureAlgorithm.ECDSA),
    SignatureHashAlgorithm(HashAlgorithm.SHA256, SignatureAlgorithm.RSA),
    SignatureHashAlgorithm(HashAlgorithm.SHA384, SignatureAlgorithm.ECDSA),
    SignatureHashAlgorithm(HashAlgorithm.SHA384, SignatureAlgorithm.RSA),
    SignatureHashAlgorithm(HashAlgorithm.SHA512, SignatureAlgorithm.RSA),
    SignatureHashAlgorithm(HashAlgorithm.SHA1, SignatureAlgorithm.RSA),
]

TYPES = [ClientCertificateType.RSA_SIGN, ClientCertificateType.ECDSA_SIGN]

RAW_WITH_CAS = bytes(
    [
        0x02, 0x01, 0x40, 0x00, 0x0C, 0x04, 0x03, 0x04, 0x01, 0x05,
        0x03, 0x05, 0x01, 0x06, 0x01, 0x02, 0x01, 0x00, 0x06, 0x00,
        0x04, 0x74, 0x65, 0x73, 0x74,
    ]
)

RAW_WITHOUT_CAS = bytes(
    [
        0x02, 0x01, 0x40, 0x00, 0x0C, 0x04, 0x03, 0x04, 0x01, 0x05,
        0x03, 0x05, 0x01, 0x06, 0x01, 0x02, 0x01, 0x00, 0x00,
    ]
)

RAW_BAD_CAS_LENGTH = bytes(
    [
        0x02, 0x01, 0x40, 0x00, 0x0C, 0x04, 0x03, 0x04, 0x01, 0x05,
        0x03, 0x05, 0x01, 0x06, 0x01, 0x02, 0x01, 0x01,
    ]
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (
            RAW_WITH_CAS,
            MessageCertificateRequest(
                certificate_types=TYPES,
                signature_hash_algorithms=ALGORITHMS,
                certificate_authorities_names=[b"test"],
            ),
        ),
        (
            RAW_WITHOUT_CAS,
            MessageCertificateRequest(
                certificate_types=TYPES,
                signature_hash_algorithms=ALGORITHMS,
            ),
        ),
    ],
)
def test_round_trip(raw, expected):
    parsed = MessageCertificateRequest.unmarshal(raw)
    assert parsed == expected
    assert parsed.marshal() == raw


def test_invalid_cas_length():
    with pytest.raises(BufferTooSmallError):
        MessageCertificateRequest.unmarshal(RAW_BAD_CAS_LENGTH)


def test_too_short():
    with pytest.raises(BufferTooSmallError):
        MessageCertificateRequest.unmarshal(b"\x00\x00\x00\x00")


def test_unknown_types_are_skipped():
    raw = bytes([0x02, 0x05, 0x40, 0x00, 0x04, 0x04, 0x03, 0x63, 0x03, 0x00, 0x00])
    parsed = MessageCertificateRequest.unmarshal(raw)
    assert parsed.certificate_types == [ClientCertificateType.ECDSA_SIGN]
    assert parsed.signature_hash_algorithms == [
        SignatureHashAlgorithm(HashAlgorithm.SHA256, SignatureAlgorithm.ECDSA)
    ]
    assert parsed.certificate_authorities_names == []


def test_truncated_ca_name():
    raw = RAW_WITH_CAS[:-5] + bytes([0x00, 0x05, 0x00, 0x09, 0x74, 0x65, 0x73])
    with pytest.raises(BufferTooSmallError):
        MessageCertificateRequest.unmarshal(raw)