"""
StealthBox - Core Constants
=============================
Costanti immutabili del protocollo stealth box.

Security Level: CRITICAL
Last Updated: 2026-10-18
Version: 1.0.0

IMPORTANTE: parametri di curva, ordine dei registri e tag di tipo fanno
parte del contratto on-chain. Non modificare.
"""

from typing import Final, Tuple


# ============================================================================
# CURVE PARAMETERS - secp256k1 (gruppo Ergo)
# ============================================================================

SECP256K1_P: Final[int] = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
SECP256K1_A: Final[int] = 0
SECP256K1_B: Final[int] = 7
SECP256K1_N: Final[int] = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_GX: Final[int] = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
SECP256K1_GY: Final[int] = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8


# ============================================================================
# CURVE PARAMETERS - secp256r1 / P-256 (parametri alternativi per test)
# ============================================================================

SECP256R1_P: Final[int] = 0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF
SECP256R1_A: Final[int] = 0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC
SECP256R1_B: Final[int] = 0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B
SECP256R1_N: Final[int] = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
SECP256R1_GX: Final[int] = 0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296
SECP256R1_GY: Final[int] = 0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5

DEFAULT_CURVE: Final[str] = "secp256k1"


# ============================================================================
# POINT ENCODING
# ============================================================================

SCALAR_SIZE: Final[int] = 32
COMPRESSED_POINT_SIZE: Final[int] = 1 + SCALAR_SIZE

PREFIX_EVEN_Y: Final[int] = 0x02
PREFIX_ODD_Y: Final[int] = 0x03

# Ergo codifica il punto all'infinito come 33 byte a zero
IDENTITY_ENCODING: Final[bytes] = b"\x00" * COMPRESSED_POINT_SIZE


# ============================================================================
# REGISTERS
# ============================================================================

# SGroupElement type tag, anteposto al punto compresso in ogni registro
REGISTER_TYPE_TAG_GROUP_ELEMENT: Final[int] = 0x07

# Ordine fisso: G_r, G_y, U_r, U_y
PAYLOAD_REGISTERS: Final[Tuple[str, ...]] = ("R4", "R5", "R6", "R7")

# ErgoTree dello script che protegge le stealth box:
# {
#   val gr = SELF.R4[GroupElement].get
#   val gy = SELF.R5[GroupElement].get
#   val ur = SELF.R6[GroupElement].get
#   val uy = SELF.R7[GroupElement].get
#   proveDHTuple(gr, gy, ur, uy)
# }
STEALTH_ERGO_TREE: Final[str] = "1000cee4c6a70407e4c6a70507e4c6a70607e4c6a70707"


# ============================================================================
# SCALAR SAMPLING
# ============================================================================

# Tentativi massimi prima di dichiarare la sorgente random guasta
DEFAULT_MAX_SCALAR_DRAWS: Final[int] = 64


__all__ = [
    "SECP256K1_P",
    "SECP256K1_A",
    "SECP256K1_B",
    "SECP256K1_N",
    "SECP256K1_GX",
    "SECP256K1_GY",
    "SECP256R1_P",
    "SECP256R1_A",
    "SECP256R1_B",
    "SECP256R1_N",
    "SECP256R1_GX",
    "SECP256R1_GY",
    "DEFAULT_CURVE",
    "SCALAR_SIZE",
    "COMPRESSED_POINT_SIZE",
    "PREFIX_EVEN_Y",
    "PREFIX_ODD_Y",
    "IDENTITY_ENCODING",
    "REGISTER_TYPE_TAG_GROUP_ELEMENT",
    "PAYLOAD_REGISTERS",
    "STEALTH_ERGO_TREE",
    "DEFAULT_MAX_SCALAR_DRAWS",
]
