"""
StealthBox - Witness Builder
==============================
Descrittore del witness per il signer/prover esterno.

Security Level: CRITICAL
Last Updated: 2026-10-18
Version: 1.0.0

Precondizione: PayloadDetector ha restituito True per la stessa coppia
(payload, x). Qui non viene ripetuto il controllo: su un payload non
nostro il signer rifiuta o produce una prova invalida.

Lo scalare segreto vive solo dentro il descrittore, che va consegnato
direttamente al passo di firma locale: mai loggato, mai persistito.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from stealth_box.constants import REGISTER_TYPE_TAG_GROUP_ELEMENT
from stealth_box.crypto.curve import CurveContext, Point, SECP256K1
from stealth_box.crypto.scalars import validate_scalar, scalar_to_hex
from stealth_box.stealth.payload import StealthPayload, RegisterInput


@dataclass(frozen=True)
class WitnessDescriptor:
    """
    Witness per proveDHTuple(baseA, baseB, targetA, targetB).

    Attributes:
        scalar: Scalare segreto x (escluso da repr)
        base_a: G_r
        target_a: U_r = x*G_r
        base_b: G_y
        target_b: U_y = x*G_y
    """
    scalar: int = field(repr=False)
    base_a: Point
    target_a: Point
    base_b: Point
    target_b: Point
    curve: CurveContext = field(default=SECP256K1, repr=False, compare=False)

    def points(self) -> Tuple[Point, Point, Point, Point]:
        """(baseA, targetA, baseB, targetB)"""
        return (self.base_a, self.target_a, self.base_b, self.target_b)

    def to_dict(self) -> Dict[str, str]:
        """Forma fissa {scalar, baseA, targetA, baseB, targetB} (hex)"""
        encode = self.curve.encode_point_hex
        return {
            "scalar": scalar_to_hex(self.scalar, self.curve),
            "baseA": encode(self.base_a),
            "targetA": encode(self.target_a),
            "baseB": encode(self.base_b),
            "targetB": encode(self.target_b),
        }

    def to_sign_secrets(self) -> Dict[str, Any]:
        """
        Secrets per la richiesta di firma del wallet del nodo.

        Mapping su proveDHTuple(g, h, u, v): g=G_r, h=G_y, u=U_r, v=U_y.

        Returns:
            dict: {"dht": [{"secret", "g", "h", "u", "v"}]}
        """
        encode = self.curve.encode_point_hex
        return {
            "dht": [
                {
                    "secret": scalar_to_hex(self.scalar, self.curve),
                    "g": encode(self.base_a),
                    "h": encode(self.base_b),
                    "u": encode(self.target_a),
                    "v": encode(self.target_b),
                }
            ]
        }


class WitnessBuilder:
    """
    Costruisce il WitnessDescriptor per un payload spendibile.
    """

    def __init__(
        self,
        curve: CurveContext = SECP256K1,
        expected_tag: Optional[int] = REGISTER_TYPE_TAG_GROUP_ELEMENT
    ):
        self.curve = curve
        self.expected_tag = expected_tag

    def build(
        self,
        payload: Union[StealthPayload, RegisterInput],
        secret: int
    ) -> WitnessDescriptor:
        """
        Assembla il witness.

        Args:
            payload: Payload già confermato spendibile (o i suoi registri)
            secret: Scalare segreto x

        Returns:
            WitnessDescriptor: {scalar, baseA, targetA, baseB, targetB}

        Raises:
            InvalidScalarError: x fuori da [1, n-1]
            CurveDecodeError: Registri malformati
        """
        validate_scalar(secret, self.curve, name="secret")

        if not isinstance(payload, StealthPayload):
            payload = StealthPayload.from_registers(payload, self.curve, self.expected_tag)

        return WitnessDescriptor(
            scalar=secret,
            base_a=payload.g_r,
            target_a=payload.u_r,
            base_b=payload.g_y,
            target_b=payload.u_y,
            curve=self.curve,
        )


__all__ = ["WitnessDescriptor", "WitnessBuilder"]
