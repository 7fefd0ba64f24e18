import pytest

from dtlsproto.errors import BufferTooSmallError
from dtlsproto.extensions.base import InvalidExtensionTypeError, LengthMismatchError
from dtlsproto.extensions.supported_elliptic_curves import Curve, SupportedEllipticCurves

RAW_SUPPORTED_GROUPS = bytes([0x0, 0xA, 0x0, 0x4, 0x0, 0x2, 0x0, 0x1D])


def test_marshal_matches_source_vector():
    parsed = SupportedEllipticCurves(elliptic_curves=[Curve.X25519])
    assert parsed.marshal() == RAW_SUPPORTED_GROUPS


def test_unmarshal_source_vector():
    parsed = SupportedEllipticCurves.unmarshal(RAW_SUPPORTED_GROUPS)
    assert parsed.elliptic_curves == [Curve.X25519]


def test_round_trip_several_curves():
    ext = SupportedEllipticCurves(elliptic_curves=[Curve.X25519, Curve.P256, Curve.P384])
    assert SupportedEllipticCurves.unmarshal(ext.marshal()) == ext


def test_unknown_curves_are_dropped():
    raw = bytes([0x00, 0x0A, 0x00, 0x06, 0x00, 0x04, 0x00, 0x1D, 0x12, 0x34])
    assert SupportedEllipticCurves.unmarshal(raw).elliptic_curves == [Curve.X25519]


def test_too_short():
    with pytest.raises(BufferTooSmallError):
        SupportedEllipticCurves.unmarshal(bytes([0x00, 0x0A, 0x00, 0x02, 0x00, 0x00]))


def test_wrong_type():
    with pytest.raises(InvalidExtensionTypeError):
        SupportedEllipticCurves.unmarshal(bytes([0x00, 0x0B, 0x00, 0x04, 0x00, 0x02, 0x00, 0x1D]))


def test_declared_length_too_long():
    with pytest.raises(LengthMismatchError):
        SupportedEllipticCurves.unmarshal(bytes([0x00, 0x0A, 0x00, 0x06, 0x00, 0x04, 0x00, 0x1D]))