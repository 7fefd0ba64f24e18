import pytest

from dtlsproto.errors import BufferTooSmallError
from dtlsproto.extensions.base import LengthMismatchError
from dtlsproto.extensions.supported_elliptic_curves import Curve
from dtlsproto.handshake.base import (
    HandshakeHeader,
    HandshakeMessageUnsetError,
    HandshakeType,
    NotImplementedFeatureError,
    Random,
    UnableToMarshalFragmentedError,
)
from dtlsproto.handshake.client_hello import MessageClientHello
from dtlsproto.handshake.client_key_exchange import KeyExchangeAlgorithm
from dtlsproto.handshake.finished import MessageFinished
from dtlsproto.handshake.handshake import Handshake
from dtlsproto.handshake.server_hello_done import MessageServerHelloDone
from dtlsproto.handshake.server_key_exchange import CurveType, MessageServerKeyExchange
from dtlsproto.protocol import Version

RAW_CLIENT_HELLO = bytes(
    [
        0x01, 0x00, 0x00, 0x29, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x29, 0xFE, 0xFD, 0xB6,
        0x2F, 0xCE, 0x5C, 0x42, 0x54, 0xFF, 0x86, 0xE1, 0x24, 0x41, 0x91, 0x42, 0x62, 0x15, 0xAD,
        0x16, 0xC9, 0x15, 0x8D, 0x95, 0x71, 0x8A, 0xBB, 0x22, 0xD7, 0x47, 0xEC, 0xD8, 0x3D, 0xDC,
        0x4B, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    ]
)

RANDOM_BYTES = bytes(
    [
        0x42, 0x54, 0xFF, 0x86, 0xE1, 0x24, 0x41, 0x91, 0x42, 0x62, 0x15, 0xAD, 0x16, 0xC9,
        0x15, 0x8D, 0x95, 0x71, 0x8A, 0xBB, 0x22, 0xD7, 0x47, 0xEC, 0xD8, 0x3D, 0xDC, 0x4B,
    ]
)

RAW_FINISHED = bytes([0x14, 0, 0, 3, 0, 0, 0, 0, 0, 0, 0, 3, 1, 2, 3])
RAW_SERVER_HELLO_DONE = bytes([0x0E] + [0] * 11)


def test_handshake_message_client_hello():
    expected = Handshake(
        header=HandshakeHeader(
            type=HandshakeType.CLIENT_HELLO, length=0x29, fragment_length=0x29
        ),
        message=MessageClientHello(
            version=Version(major=0xFE, minor=0xFD),
            random=Random(gmt_unix_time=3056586332, random_bytes=RANDOM_BYTES),
            session_id=b"",
            cookie=b"",
            cipher_suite_ids=[],
            compression_methods=[],
            extensions=[],
        ),
    )
    parsed = Handshake.unmarshal(RAW_CLIENT_HELLO)
    assert parsed == expected
    assert parsed.marshal() == RAW_CLIENT_HELLO


@pytest.mark.parametrize("raw", [RAW_CLIENT_HELLO, RAW_FINISHED, RAW_SERVER_HELLO_DONE])
def test_decoded_handshakes_encode_again(raw):
    parsed = Handshake.unmarshal(raw)
    encoded = parsed.marshal()
    assert len(encoded) > 0
    assert encoded == raw


def test_finished_message_is_decoded():
    parsed = Handshake.unmarshal(RAW_FINISHED)
    assert parsed.message == MessageFinished(verify_data=b"\x01\x02\x03")
    assert parsed.header.type == HandshakeType.FINISHED


def test_server_hello_done_is_decoded():
    parsed = Handshake.unmarshal(RAW_SERVER_HELLO_DONE)
    assert parsed.message == MessageServerHelloDone()


def test_server_key_exchange_uses_key_exchange_algorithm():
    message = MessageServerKeyExchange(
        elliptic_curve_type=CurveType.NAMED_CURVE,
        named_curve=Curve.X25519,
        public_key=b"\x04\x01\x02\x03",
        key_exchange_algorithm=KeyExchangeAlgorithm.ECDHE,
    )
    raw = Handshake(message=message).marshal()
    parsed = Handshake.unmarshal(raw, KeyExchangeAlgorithm.ECDHE)
    assert parsed.message == message
    assert parsed.key_exchange_algorithm == KeyExchangeAlgorithm.ECDHE


def test_marshal_updates_header():
    h = Handshake(message=MessageFinished(verify_data=b"\x01\x02\x03"))
    raw = h.marshal()
    assert raw == RAW_FINISHED
    assert h.header.length == 3
    assert h.header.fragment_length == 3
    assert h.header.type == HandshakeType.FINISHED


def test_marshal_without_message():
    with pytest.raises(HandshakeMessageUnsetError):
        Handshake().marshal()


def test_marshal_fragmented():
    h = Handshake(
        header=HandshakeHeader(fragment_offset=1),
        message=MessageFinished(verify_data=b"\x01"),
    )
    with pytest.raises(UnableToMarshalFragmentedError):
        h.marshal()


def test_short_header():
    with pytest.raises(BufferTooSmallError):
        Handshake.unmarshal(b"\x01\x00")


def test_declared_length_mismatch():
    with pytest.raises(LengthMismatchError):
        Handshake.unmarshal(RAW_FINISHED + b"\x04")


def test_fragment_length_mismatch():
    raw = bytearray(RAW_FINISHED)
    raw[11] = 2
    with pytest.raises(LengthMismatchError):
        Handshake.unmarshal(bytes(raw))


@pytest.mark.parametrize("message_type", [0x00, 0x63])
def test_unsupported_types(message_type):
    raw = bytes([message_type] + [0] * 11)
    with pytest.raises(NotImplementedFeatureError):
        Handshake.unmarshal(raw)