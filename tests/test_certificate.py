import pytest

from dtlsproto.errors import BufferTooSmallError
from dtlsproto.extensions.base import LengthMismatchError
from dtlsproto.handshake.base import HandshakeType
from dtlsproto.handshake.certificate import MessageCertificate

RAW_CERTIFICATE = bytes.fromhex(
    "00 01 8c 00 01 89 30 82 01 85 30 82 01 2b 02 14"
    "7d 00 cf 07 fc e2 b6 b8 3f 72 eb 11 36 1b f6 39"
    "f1 3c 33 41 30 0a 06 08 2a 86 48 ce 3d 04 03 02"
    "30 45 31 0b 30 09 06 03 55 04 06 13 02 41 55 31"
    "13 30 11 06 03 55 04 08 0c 0a 53 6f 6d 65 2d 53"
    "74 61 74 65 31 21 30 1f 06 03 55 04 0a 0c 18 49"
    "6e 74 65 72 6e 65 74 20 57 69 64 67 69 74 73 20"
    "50 74 79 20 4c 74 64 30 1e 17 0d 31 38 31 30 32"
    "35 30 38 35 31 31 32 5a 17 0d 31 39 31 30 32 35"
    "30 38 35 31 31 32 5a 30 45 31 0b 30 09 06 03 55"
    "04 06 13 02 41 55 31 13 30 11 06 03 55 04 08 0c"
    "0a 53 6f 6d 65 2d 53 74 61 74 65 31 21 30 1f 06"
    "03 55 04 0a 0c 18 49 6e 74 65 72 6e 65 74 20 57"
    "69 64 67 69 74 73 20 50 74 79 20 4c 74 64 30 59"
    "30 13 06 07 2a 86 48 ce 3d 02 01 06 08 2a 86 48"
    "ce 3d 03 01 07 03 42 00 04 f9 b1 62 d6 07 ae c3"
    "36 34 f5 a3 09 39 86 e7 3b 59 f7 4a 1d f4 97 4f"
    "91 40 56 1b 3d 6c 5a 38 10 15 58 f5 a4 cc df d5"
    "f5 4a 35 40 0f 9f 54 b7 e9 e2 ae 63 83 6a 4c fc"
    "c2 5f 78 a0 bb 46 54 a4 da 30 0a 06 08 2a 86 48"
    "ce 3d 04 03 02 03 48 00 30 45 02 20 47 1a 5f 58"
    "2a 74 33 6d ed ac 37 21 fa 76 5a 4d 78 68 1a dd"
    "80 a4 d4 b7 7f 7d 78 b3 fb f3 95 fb 02 21 00 c0"
    "73 30 da 2b c0 0c 9e b2 25 0d 46 b0 bc 66 7f 71"
    "66 bf 16 b3 80 78 d0 0c ef cc f5 c1 15 0f 58"
)


def test_certificate_unmarshal():
    message = MessageCertificate.unmarshal(RAW_CERTIFICATE)
    assert len(message.certificate) == 1
    cert = message.certificate[0]
    assert cert == RAW_CERTIFICATE[6:]
    assert len(cert) == 0x189
    assert cert[:4] == bytes.fromhex("30820185")


def test_certificate_marshal_round_trip():
    message = MessageCertificate.unmarshal(RAW_CERTIFICATE)
    assert message.marshal() == RAW_CERTIFICATE


def test_empty_certificate():
    message = MessageCertificate.unmarshal(b"\x00\x00\x00")
    assert message == MessageCertificate(certificate=[])
    assert message.marshal() == b"\x00\x00\x00"


def test_multiple_certificates_round_trip():
    message = MessageCertificate(certificate=[b"abc", b"", b"\x01\x02"])
    raw = message.marshal()
    assert raw == bytes.fromhex("00000e" "000003616263" "000000" "0000020102")
    assert MessageCertificate.unmarshal(raw) == message


def test_certificate_too_short():
    with pytest.raises(BufferTooSmallError):
        MessageCertificate.unmarshal(b"\x00\x00")


def test_certificate_total_length_mismatch():
    with pytest.raises(LengthMismatchError):
        MessageCertificate.unmarshal(b"\x00\x00\x05\x00")


def test_certificate_entry_too_long():
    with pytest.raises(LengthMismatchError):
        MessageCertificate.unmarshal(bytes.fromhex("000004000009aa"))


def test_certificate_type():
    message = MessageCertificate.unmarshal(b"\x00\x00\x00")
    assert message.handshake_type == HandshakeType.CERTIFICATE
    assert int(message.handshake_type) == 11