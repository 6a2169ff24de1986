"""
StealthBox - Stealth Key Pair
===============================
Coppia long-term (x, X = x*G) del destinatario.

Security Level: HIGH
Last Updated: 2026-10-18
Version: 1.0.0

La derivazione completa (mnemonic, BIP32) resta esterna: qui arriva solo
uno scalare.
"""

import hashlib
from dataclasses import dataclass, field
from typing import Union

from cryptography.hazmat.primitives.asymmetric import ec

from stealth_box.crypto.curve import CurveContext, Point, SECP256K1
from stealth_box.crypto.scalars import (
    validate_scalar,
    scalar_from_bytes,
    scalar_to_hex,
)
from stealth_box.errors import CryptoError, InvalidScalarError
from stealth_box.logging_setup import get_logger


logger = get_logger("stealth.keys")


# Curve equivalenti nella libreria cryptography (per generazione chiavi)
_BACKEND_CURVES = {
    "secp256k1": ec.SECP256K1,
    "secp256r1": ec.SECP256R1,
}


@dataclass(frozen=True)
class StealthKeyPair:
    """
    Keypair stealth.

    Attributes:
        secret: Scalare segreto x in [1, n-1] (escluso da repr)
        public: Punto pubblico X = x*G
        curve: Contesto curva
    """
    secret: int = field(repr=False)
    public: Point
    curve: CurveContext = field(default=SECP256K1, repr=False)

    def __post_init__(self):
        validate_scalar(self.secret, self.curve, name="secret")
        if self.public != self.curve.base_multiply(self.secret):
            raise CryptoError(
                "Public point does not match secret scalar",
                code="KEYPAIR_MISMATCH"
            )

    # ========================================================================
    # CONSTRUCTORS
    # ========================================================================

    @classmethod
    def from_secret(
        cls,
        secret: Union[int, bytes, str],
        curve: CurveContext = SECP256K1
    ) -> "StealthKeyPair":
        """
        Crea keypair da scalare (int, 32 bytes o hex).

        Raises:
            InvalidScalarError: Se scalare zero o fuori range
        """
        if isinstance(secret, (bytes, bytearray, str)):
            secret = scalar_from_bytes(secret, curve)
        validate_scalar(secret, curve, name="secret")
        return cls(secret=secret, public=curve.base_multiply(secret), curve=curve)

    @classmethod
    def from_seed(cls, seed: bytes, curve: CurveContext = SECP256K1) -> "StealthKeyPair":
        """
        Deriva keypair deterministico da seed: x = SHA256(seed) mod n.

        Raises:
            InvalidScalarError: Se lo scalare derivato è zero
        """
        secret = int.from_bytes(hashlib.sha256(seed).digest(), 'big') % curve.n

        if secret == 0:
            raise InvalidScalarError("Invalid secret derived from seed", code="ZERO_SCALAR")

        return cls.from_secret(secret, curve)

    @classmethod
    def generate(cls, curve: CurveContext = SECP256K1) -> "StealthKeyPair":
        """
        Genera keypair random con il CSPRNG di OpenSSL (libreria cryptography).
        """
        backend_curve = _BACKEND_CURVES.get(curve.name)
        if backend_curve is None:
            raise CryptoError(
                f"Key generation not supported for curve {curve.name}",
                code="UNSUPPORTED_CURVE"
            )

        private_key = ec.generate_private_key(backend_curve())
        secret = private_key.private_numbers().private_value

        keypair = cls.from_secret(secret, curve)

        logger.debug(
            "Stealth keypair generated",
            extra_data={"public": keypair.public_hex()[:16]}
        )

        return keypair

    # ========================================================================
    # ENCODING
    # ========================================================================

    def public_bytes(self) -> bytes:
        """Chiave pubblica compressa (33 bytes)"""
        return self.curve.encode_point(self.public)

    def public_hex(self) -> str:
        return self.public_bytes().hex()

    def secret_hex(self) -> str:
        """Export esplicito dello scalare segreto (solo uso locale)"""
        return scalar_to_hex(self.secret, self.curve)


__all__ = ["StealthKeyPair"]
