"""
StealthBox - Key Pair Tests
=============================
Unit tests for stealth keypairs.
"""

import pytest

from stealth_box.crypto.curve import SECP256K1, SECP256R1
from stealth_box.stealth.keys import StealthKeyPair
from stealth_box.errors import CryptoError, InvalidScalarError


class TestStealthKeyPair:
    """Test StealthKeyPair"""

    def test_from_secret(self, g_hex):
        keypair = StealthKeyPair.from_secret(1)
        assert keypair.public == SECP256K1.generator
        assert keypair.public_hex() == g_hex

    def test_from_secret_hex(self):
        keypair = StealthKeyPair.from_secret("00" * 31 + "02")
        assert keypair.secret == 2
        assert keypair.secret_hex() == "00" * 31 + "02"

    @pytest.mark.parametrize("secret", [0, SECP256K1.n, -5])
    def test_invalid_secret(self, secret):
        with pytest.raises(InvalidScalarError):
            StealthKeyPair.from_secret(secret)

    def test_from_seed_deterministic(self):
        a = StealthKeyPair.from_seed(b"seed")
        b = StealthKeyPair.from_seed(b"seed")
        c = StealthKeyPair.from_seed(b"other seed")
        assert a == b
        assert a.public != c.public

    def test_generate(self, any_curve):
        keypair = StealthKeyPair.generate(any_curve)
        assert 0 < keypair.secret < any_curve.n
        assert keypair.public == any_curve.base_multiply(keypair.secret)
        assert len(keypair.public_bytes()) == 33

    def test_generate_is_random(self):
        assert StealthKeyPair.generate().secret != StealthKeyPair.generate().secret

    def test_mismatched_public_rejected(self):
        with pytest.raises(CryptoError) as exc_info:
            StealthKeyPair(secret=5, public=SECP256K1.base_multiply(6))
        assert exc_info.value.code == "KEYPAIR_MISMATCH"

    def test_secret_not_in_repr(self, receiver):
        text = repr(receiver)
        assert str(receiver.secret) not in text
        assert receiver.secret_hex() not in text
        assert format(receiver.secret, "x") not in text

    def test_curve_specific(self):
        k1 = StealthKeyPair.from_secret(7, SECP256K1)
        r1 = StealthKeyPair.from_secret(7, SECP256R1)
        assert k1.public != r1.public
