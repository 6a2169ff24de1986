"""
StealthBox - Curve Context Tests
==================================
Unit tests for group arithmetic and point codec.
"""

import dataclasses

import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from stealth_box.constants import IDENTITY_ENCODING
from stealth_box.crypto.curve import (
    Point,
    INFINITY,
    CurveContext,
    SECP256K1,
    SECP256R1,
    get_curve,
    coerce_bytes,
)
from stealth_box.errors import CurveDecodeError, InvalidConfigError, InvalidPointError


_BACKEND = {"secp256k1": ec.SECP256K1, "secp256r1": ec.SECP256R1}


def _openssl_public(k: int, curve: CurveContext) -> bytes:
    key = ec.derive_private_key(k, _BACKEND[curve.name]())
    return key.public_key().public_bytes(Encoding.X962, PublicFormat.CompressedPoint)


class TestArithmetic:
    """Test operazioni di gruppo"""

    def test_generator_on_curve(self, any_curve):
        assert any_curve.is_on_curve(any_curve.generator)

    def test_known_multiples_secp256k1(self, g_hex):
        """Test vettori noti k*G"""
        assert SECP256K1.encode_point_hex(SECP256K1.base_multiply(1)) == g_hex
        assert SECP256K1.encode_point_hex(SECP256K1.base_multiply(2)) == (
            "02c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5"
        )
        assert SECP256K1.encode_point_hex(SECP256K1.base_multiply(3)) == (
            "02f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9"
        )

    @pytest.mark.parametrize("k", [1, 2, 7, 0xDEADBEEF, 2**200 + 12345])
    def test_matches_openssl(self, any_curve, k):
        """Test k*G coincide con l'implementazione OpenSSL"""
        assert any_curve.encode_point(any_curve.base_multiply(k)) == _openssl_public(k, any_curve)

    def test_order_gives_identity(self, any_curve):
        assert any_curve.point_multiply(any_curve.n, any_curve.generator).is_infinity()
        assert any_curve.base_multiply(0) == INFINITY

    def test_n_minus_one_is_negation(self, any_curve):
        g = any_curve.generator
        assert any_curve.base_multiply(any_curve.n - 1) == any_curve.point_negate(g)
        assert any_curve.point_add(g, any_curve.point_negate(g)).is_infinity()

    def test_addition_consistency(self, any_curve):
        """Test (a+b)*G == a*G + b*G"""
        a, b = 123456789, 987654321
        lhs = any_curve.base_multiply(a + b)
        rhs = any_curve.point_add(any_curve.base_multiply(a), any_curve.base_multiply(b))
        assert lhs == rhs

    def test_identity_is_neutral(self, any_curve):
        g = any_curve.generator
        assert any_curve.point_add(g, INFINITY) == g
        assert any_curve.point_add(INFINITY, g) == g
        assert any_curve.point_multiply(5, INFINITY).is_infinity()


class TestCodec:
    """Test codifica compressa"""

    def test_round_trip(self, any_curve):
        for k in (1, 2, 3, 1000, any_curve.n - 1):
            point = any_curve.base_multiply(k)
            encoded = any_curve.encode_point(point)
            assert len(encoded) == 33
            assert encoded[0] in (2, 3)
            assert any_curve.decode_point(encoded) == point

    def test_decode_accepts_hex(self, g_hex):
        assert SECP256K1.decode_point(g_hex) == SECP256K1.generator

    def test_identity_sentinel(self, any_curve):
        assert any_curve.encode_point(INFINITY) == IDENTITY_ENCODING
        assert any_curve.decode_point(IDENTITY_ENCODING).is_infinity()

    def test_invalid_length(self, g_hex):
        with pytest.raises(CurveDecodeError) as exc_info:
            SECP256K1.decode_point(bytes.fromhex(g_hex)[:32])
        assert exc_info.value.code == "INVALID_LENGTH"

    @pytest.mark.parametrize("prefix", [0x00, 0x01, 0x04, 0x05, 0xFF])
    def test_invalid_prefix(self, prefix, g_hex):
        data = bytes([prefix]) + bytes.fromhex(g_hex)[1:]
        with pytest.raises(CurveDecodeError) as exc_info:
            SECP256K1.decode_point(data)
        assert exc_info.value.code == "INVALID_PREFIX"

    def test_x_not_on_curve(self):
        # Vettore BIP340 "public key not on the curve"
        data = bytes.fromhex(
            "02eefdea4cdb677750a420fee807eacf21eb9898ae79b9768766e4faa04a2d4a34"
        )
        with pytest.raises(CurveDecodeError) as exc_info:
            SECP256K1.decode_point(data)
        assert exc_info.value.code == "X_NOT_ON_CURVE"

    def test_x_out_of_range(self):
        data = b"\x02" + b"\xff" * 32
        with pytest.raises(CurveDecodeError) as exc_info:
            SECP256K1.decode_point(data)
        assert exc_info.value.code == "X_OUT_OF_RANGE"

    def test_invalid_hex(self):
        with pytest.raises(CurveDecodeError) as exc_info:
            SECP256K1.decode_point("zz" * 33)
        assert exc_info.value.code == "INVALID_HEX"

    def test_invalid_input_type(self):
        with pytest.raises(CurveDecodeError):
            coerce_bytes(12345)

    def test_encode_off_curve_point(self):
        with pytest.raises(InvalidPointError):
            SECP256K1.encode_point(Point(1, 1))


class TestCurveRegistry:
    """Test risoluzione curve"""

    def test_get_curve(self):
        assert get_curve("secp256k1") is SECP256K1
        assert get_curve("SECP256R1") is SECP256R1

    def test_unknown_curve(self):
        with pytest.raises(InvalidConfigError):
            get_curve("ed25519")

    def test_invalid_generator_rejected(self):
        with pytest.raises(InvalidConfigError):
            CurveContext(
                name="broken",
                p=SECP256K1.p, a=0, b=7, n=SECP256K1.n,
                gx=SECP256K1.gx, gy=SECP256K1.gy + 1
            )

    def test_point_repr(self):
        assert repr(INFINITY) == "Point(INF)"
        assert repr(SECP256K1.generator).startswith("Point(0x79be667")


class TestPointImmutability:
    """Test Point condivisi (INFINITY, generatore) non modificabili"""

    def test_point_is_frozen(self):
        point = SECP256K1.base_multiply(2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            point.x = 1
        with pytest.raises(dataclasses.FrozenInstanceError):
            INFINITY.y = 0
        assert INFINITY.is_infinity()

    def test_points_equal(self):
        a = SECP256K1.base_multiply(5)
        b = SECP256K1.decode_point(SECP256K1.encode_point(a))
        assert SECP256K1.points_equal(a, b)
        assert not SECP256K1.points_equal(a, SECP256K1.base_multiply(6))
        assert SECP256K1.points_equal(INFINITY, SECP256K1.base_multiply(0))
