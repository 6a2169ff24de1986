"""
StealthBox - Stealth Payload Tests
====================================
Unit tests for register framing and payload codec.
"""

import pytest

from stealth_box.crypto.curve import Point, SECP256K1, SECP256R1, INFINITY
from stealth_box.stealth.payload import (
    StealthPayload,
    split_register,
    strip_register_prefix,
    decode_register,
    encode_register,
)
from stealth_box.errors import CurveDecodeError, InvalidPointError


class TestRegisterFraming:
    """Test offset di un byte (type tag)"""

    def test_strip_single_byte(self, g_hex):
        body = strip_register_prefix("07" + g_hex)
        assert body == bytes.fromhex(g_hex)
        assert len(body) == 33

    def test_decode_register(self, g_hex):
        assert decode_register("07" + g_hex) == SECP256K1.generator

    def test_decode_register_bytes(self, g_hex):
        assert decode_register(bytes.fromhex("07" + g_hex)) == SECP256K1.generator

    def test_explorer_register_object(self, g_hex):
        register = {"serializedValue": "07" + g_hex, "sigmaType": "SGroupElement"}
        assert decode_register(register) == SECP256K1.generator

    def test_wrong_type_tag(self, g_hex):
        with pytest.raises(CurveDecodeError) as exc_info:
            decode_register("08" + g_hex)
        assert exc_info.value.code == "INVALID_TYPE_TAG"

    def test_type_tag_check_disabled(self, g_hex):
        assert decode_register("08" + g_hex, expected_tag=None) == SECP256K1.generator

    def test_point_without_tag_is_rejected(self, g_hex):
        # Senza tag il primo byte (0x02) viene preso come tag
        with pytest.raises(CurveDecodeError):
            decode_register(g_hex)

    def test_empty_register(self):
        with pytest.raises(CurveDecodeError) as exc_info:
            split_register("")
        assert exc_info.value.code == "EMPTY_REGISTER"

    def test_identity_register(self):
        assert decode_register("07" + "00" * 33).is_infinity()

    def test_encode_register(self, g_hex):
        assert encode_register(SECP256K1.generator).hex() == "07" + g_hex


class TestStealthPayload:
    """Test StealthPayload"""

    def test_registers_round_trip(self, payload):
        registers = payload.to_registers()
        assert len(registers) == 4
        assert all(value.startswith("07") and len(value) == 68 for value in registers)
        assert StealthPayload.from_registers(registers) == payload

    def test_register_map(self, payload):
        mapping = payload.register_map()
        assert list(mapping) == ["R4", "R5", "R6", "R7"]
        assert decode_register(mapping["R4"]) == payload.g_r
        assert decode_register(mapping["R5"]) == payload.g_y
        assert decode_register(mapping["R6"]) == payload.u_r
        assert decode_register(mapping["R7"]) == payload.u_y

    def test_from_register_mapping_ignores_extra(self, payload):
        mapping = dict(payload.register_map())
        mapping["R8"] = "0e00"
        assert StealthPayload.from_registers(mapping) == payload

    def test_missing_register(self, payload):
        mapping = payload.register_map()
        del mapping["R6"]
        with pytest.raises(CurveDecodeError) as exc_info:
            StealthPayload.from_registers(mapping)
        assert exc_info.value.code == "MISSING_REGISTER"
        assert exc_info.value.details["missing"] == ["R6"]

    @pytest.mark.parametrize("registers", [[], ["07"], "07" * 4, 42])
    def test_wrong_shape(self, registers):
        with pytest.raises(CurveDecodeError) as exc_info:
            StealthPayload.from_registers(registers)
        assert exc_info.value.code == "INVALID_PAYLOAD_SHAPE"

    def test_error_names_register(self, payload):
        registers = list(payload.to_registers())
        registers[2] = "07" + "05" + registers[2][4:]
        with pytest.raises(CurveDecodeError) as exc_info:
            StealthPayload.from_registers(registers)
        assert exc_info.value.code == "INVALID_PREFIX"
        assert exc_info.value.details["register"] == "R6"

    def test_from_encoded(self, payload):
        assert StealthPayload.from_encoded(payload.encode()) == payload

    def test_identity_allowed_in_record(self, payload):
        degenerate = StealthPayload(INFINITY, payload.g_y, payload.u_r, payload.u_y)
        assert degenerate.has_identity()
        assert not payload.has_identity()

    def test_off_curve_point_rejected(self, payload):
        with pytest.raises(InvalidPointError):
            StealthPayload(Point(1, 1), payload.g_y, payload.u_r, payload.u_y)

    def test_curve_participates_in_equality(self):
        k1 = SECP256K1.generator
        r1 = SECP256R1.generator
        a = StealthPayload(k1, k1, k1, k1, curve=SECP256K1)
        b = StealthPayload(r1, r1, r1, r1, curve=SECP256R1)
        assert a != b
