"""
StealthBox - Payload Detector
===============================
Lato destinatario: riconosce se un payload è spendibile con lo scalare x.

Security Level: CRITICAL
Last Updated: 2026-10-18
Version: 1.0.0

Condizione (identica allo script on-chain proveDHTuple(gr, gy, ur, uy)):

    spendable := (x*G_r == U_r) AND (x*G_y == U_y)

Un payload non nostro NON è un errore: è il risultato normale della
scansione. Registri malformati di box estranee sono rumore atteso e
producono False. Per debugging, inspect() distingue i casi.
"""

from enum import Enum
from typing import Optional, Union

from stealth_box.constants import REGISTER_TYPE_TAG_GROUP_ELEMENT
from stealth_box.crypto.curve import CurveContext, SECP256K1
from stealth_box.crypto.scalars import is_valid_scalar
from stealth_box.errors import CurveDecodeError
from stealth_box.stealth.payload import StealthPayload, RegisterInput
from stealth_box.logging_setup import get_logger


logger = get_logger("stealth.detector")


class DetectionResult(str, Enum):
    """Esito dettagliato di una verifica di spendibilità"""
    SPENDABLE = "spendable"
    NOT_OWNED = "not_owned"
    MALFORMED = "malformed"
    DEGENERATE = "degenerate"
    INVALID_SECRET = "invalid_secret"

    @property
    def is_spendable(self) -> bool:
        return self is DetectionResult.SPENDABLE


class PayloadDetector:
    """
    Verifica di spendibilità stealth payload.

    Attributes:
        curve: Contesto curva
        expected_tag: Type tag richiesto sui registri (None = non verificato)
    """

    def __init__(
        self,
        curve: CurveContext = SECP256K1,
        expected_tag: Optional[int] = REGISTER_TYPE_TAG_GROUP_ELEMENT
    ):
        self.curve = curve
        self.expected_tag = expected_tag

    def inspect(
        self,
        payload: Union[StealthPayload, RegisterInput],
        secret: int
    ) -> DetectionResult:
        """
        Verifica dettagliata (API di basso livello).

        Args:
            payload: StealthPayload già decodificato o registri R4..R7 grezzi
            secret: Scalare segreto x del destinatario

        Returns:
            DetectionResult: Esito; mai eccezioni per payload non nostri
        """
        # x = 0 renderebbe x*G_r l'identità: mai match su payload degeneri
        if not is_valid_scalar(secret, self.curve):
            return DetectionResult.INVALID_SECRET

        if not isinstance(payload, StealthPayload):
            try:
                payload = StealthPayload.from_registers(
                    payload, self.curve, self.expected_tag
                )
            except CurveDecodeError as e:
                logger.debug(
                    "Malformed stealth registers",
                    extra_data={"code": e.code, "register": e.details.get("register")}
                )
                return DetectionResult.MALFORMED
        elif payload.curve.name != self.curve.name:
            return DetectionResult.MALFORMED

        if payload.has_identity():
            return DetectionResult.DEGENERATE

        curve = self.curve
        if not curve.points_equal(curve.point_multiply(secret, payload.g_r), payload.u_r):
            return DetectionResult.NOT_OWNED
        if not curve.points_equal(curve.point_multiply(secret, payload.g_y), payload.u_y):
            return DetectionResult.NOT_OWNED

        return DetectionResult.SPENDABLE

    def is_spendable(
        self,
        payload: Union[StealthPayload, RegisterInput],
        secret: int
    ) -> bool:
        """
        True se entrambe le relazioni DH valgono con lo stesso x.

        Malformato, degenere e "non nostro" sono tutti False.
        """
        return self.inspect(payload, secret) is DetectionResult.SPENDABLE


__all__ = ["PayloadDetector", "DetectionResult"]
