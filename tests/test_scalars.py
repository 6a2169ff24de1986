"""
StealthBox - Scalar Tests
===========================
Unit tests for scalar validation and sampling.
"""

import pytest

from stealth_box.crypto.curve import SECP256K1, SECP256R1
from stealth_box.crypto.scalars import (
    is_valid_scalar,
    validate_scalar,
    scalar_from_bytes,
    scalar_to_hex,
    random_scalar,
)
from stealth_box.errors import EntropyError, InvalidScalarError


class TestValidation:
    """Test range [1, n-1]"""

    @pytest.mark.parametrize("k", [0, -1, SECP256K1.n, SECP256K1.n + 1])
    def test_out_of_range(self, k):
        assert not is_valid_scalar(k, SECP256K1)
        with pytest.raises(InvalidScalarError) as exc_info:
            validate_scalar(k, SECP256K1)
        assert exc_info.value.code == "SCALAR_OUT_OF_RANGE"

    def test_non_int_rejected(self):
        assert not is_valid_scalar(True, SECP256K1)
        assert not is_valid_scalar(1.0, SECP256K1)
        assert not is_valid_scalar("1", SECP256K1)

    def test_bounds_accepted(self):
        assert validate_scalar(1, SECP256K1) == 1
        assert validate_scalar(SECP256K1.n - 1, SECP256K1) == SECP256K1.n - 1

    def test_error_does_not_leak_value(self):
        secret = 0xABCDEF * (2**200)
        with pytest.raises(InvalidScalarError) as exc_info:
            validate_scalar(secret + SECP256K1.n, SECP256K1, name="secret")
        rendered = str(exc_info.value) + str(exc_info.value.to_dict())
        assert format(secret + SECP256K1.n, "x") not in rendered
        assert str(secret + SECP256K1.n) not in rendered

    def test_bytes_round_trip(self):
        k = 0x1234
        assert scalar_from_bytes(scalar_to_hex(k, SECP256K1), SECP256K1) == k

    def test_bytes_wrong_length(self):
        with pytest.raises(InvalidScalarError) as exc_info:
            scalar_from_bytes(b"\x01" * 31, SECP256K1)
        assert exc_info.value.code == "INVALID_LENGTH"

    def test_bytes_invalid_hex(self):
        with pytest.raises(InvalidScalarError):
            scalar_from_bytes("not-hex", SECP256K1)


class TestRandomScalar:
    """Test campionamento"""

    def test_default_source(self):
        k = random_scalar(SECP256K1)
        assert 0 < k < SECP256K1.n

    def test_distinct_draws(self):
        assert random_scalar(SECP256R1) != random_scalar(SECP256R1)

    def test_resamples_after_zero(self, fixed_source):
        source = fixed_source(b"\x00" * 32, b"\x00" * 31 + b"\x05")
        assert random_scalar(SECP256K1, source) == 5

    def test_resamples_after_out_of_range(self, fixed_source):
        source = fixed_source(b"\xff" * 32, SECP256K1.n.to_bytes(32, 'big'), b"\x00" * 31 + b"\x09")
        assert random_scalar(SECP256K1, source) == 9

    def test_exhausted_source(self):
        with pytest.raises(EntropyError) as exc_info:
            random_scalar(SECP256K1, lambda size: b"\x00" * size, max_draws=4)
        assert exc_info.value.code == "ENTROPY_EXHAUSTED"

    def test_failing_source(self):
        def broken(size):
            raise OSError("no entropy")

        with pytest.raises(EntropyError) as exc_info:
            random_scalar(SECP256K1, broken)
        assert exc_info.value.code == "ENTROPY_UNAVAILABLE"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_short_output(self):
        with pytest.raises(EntropyError) as exc_info:
            random_scalar(SECP256K1, lambda size: b"\x01" * (size - 1))
        assert exc_info.value.code == "ENTROPY_INVALID_OUTPUT"
