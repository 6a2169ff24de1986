"""
StealthBox - Payload Generator
================================
Lato mittente: tupla DH randomizzata verso la chiave pubblica del destinatario.

Security Level: CRITICAL
Last Updated: 2026-10-18
Version: 1.0.0

Formula:
    r, y <- [1, n-1]                (indipendenti, monouso)
    payload = (r*G, y*G, r*U, y*U)  (ordine R4, R5, R6, R7)

Sotto DDH un osservatore che non conosce log_G(U) non distingue
(G_r, U_r) e (G_y, U_y) da due coppie DH casuali.
"""

import secrets
from typing import Union

from stealth_box.constants import DEFAULT_MAX_SCALAR_DRAWS
from stealth_box.crypto.curve import CurveContext, Point, SECP256K1
from stealth_box.crypto.scalars import RandomSource, random_scalar, validate_scalar
from stealth_box.errors import InvalidPointError
from stealth_box.stealth.payload import StealthPayload
from stealth_box.logging_setup import get_logger


logger = get_logger("stealth.generator")


RecipientKey = Union[Point, bytes, str]


class PayloadGenerator:
    """
    Generatore di stealth payload.

    Stateless: l'unica dipendenza con stato è la sorgente random, interrogata
    a ogni chiamata. Le istanze possono essere condivise tra thread.

    Examples:
        >>> generator = PayloadGenerator()
        >>> payload = generator.generate(receiver.public)
        >>> payload.register_map()["R4"][:2]
        '07'
    """

    def __init__(
        self,
        curve: CurveContext = SECP256K1,
        random_source: RandomSource = secrets.token_bytes,
        max_scalar_draws: int = DEFAULT_MAX_SCALAR_DRAWS
    ):
        self.curve = curve
        self.random_source = random_source
        self.max_scalar_draws = max_scalar_draws

    def resolve_recipient(self, recipient: RecipientKey) -> Point:
        """
        Normalizza la chiave pubblica del destinatario in un Point.

        Raises:
            CurveDecodeError: Bytes non decodificabili
            InvalidPointError: Identità o punto fuori curva
        """
        if isinstance(recipient, Point):
            point = recipient
        else:
            point = self.curve.decode_point(recipient)

        if point.is_infinity() or not self.curve.is_on_curve(point):
            raise InvalidPointError(
                "Recipient public key must be a non-identity curve point",
                code="INVALID_RECIPIENT",
                details={"curve": self.curve.name}
            )

        return point

    def generate(self, recipient: RecipientKey) -> StealthPayload:
        """
        Genera payload stealth con scalari effimeri freschi.

        Args:
            recipient: Chiave pubblica U del destinatario

        Returns:
            StealthPayload: (G_r, G_y, U_r, U_y)

        Raises:
            EntropyError: Sorgente random non disponibile
            InvalidPointError: Chiave destinatario invalida
        """
        u = self.resolve_recipient(recipient)

        r = random_scalar(self.curve, self.random_source, self.max_scalar_draws)
        y = random_scalar(self.curve, self.random_source, self.max_scalar_draws)

        payload = self._build(u, r, y)

        logger.debug(
            "Stealth payload generated",
            extra_data={"g_r": self.curve.encode_point_hex(payload.g_r)[:16]}
        )

        return payload

    def generate_with_scalars(self, recipient: RecipientKey, r: int, y: int) -> StealthPayload:
        """
        Variante deterministica con scalari forniti (test vector).

        Raises:
            InvalidScalarError: r o y fuori da [1, n-1]
        """
        u = self.resolve_recipient(recipient)
        validate_scalar(r, self.curve, name="r")
        validate_scalar(y, self.curve, name="y")
        return self._build(u, r, y)

    def _build(self, u: Point, r: int, y: int) -> StealthPayload:
        curve = self.curve
        return StealthPayload(
            g_r=curve.base_multiply(r),
            g_y=curve.base_multiply(y),
            u_r=curve.point_multiply(r, u),
            u_y=curve.point_multiply(y, u),
            curve=curve,
        )


__all__ = ["PayloadGenerator", "RecipientKey"]
