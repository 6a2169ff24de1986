"""
StealthBox - Stealth Payload
==============================
Record a forma fissa (G_r, G_y, U_r, U_y) e codec dei registri R4..R7.

Security Level: HIGH
Last Updated: 2026-10-18
Version: 1.0.0

Register framing:
    Ogni registro on-chain contiene il punto compresso preceduto da
    esattamente UN byte di tipo (0x07 = SGroupElement):

        registro R4:  07 03f62bd72cb1c312dda006339fe29b6c8ef907b4e48f82869df131db791ad438b3
        punto:           03f62bd72cb1c312dda006339fe29b6c8ef907b4e48f82869df131db791ad438b3

    L'offset è una convenzione fissa di questa integrazione, non un
    parser generico di costanti serializzate.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from stealth_box.constants import (
    PAYLOAD_REGISTERS,
    REGISTER_TYPE_TAG_GROUP_ELEMENT,
)
from stealth_box.crypto.curve import CurveContext, Point, SECP256K1, coerce_bytes
from stealth_box.errors import CurveDecodeError, InvalidPointError, format_decode_error


RegisterValue = Union[bytes, bytearray, str, Mapping[str, Any]]
RegisterInput = Union[Sequence[RegisterValue], Mapping[str, RegisterValue]]


# ============================================================================
# REGISTER FRAMING
# ============================================================================

def _register_bytes(raw: RegisterValue) -> bytes:
    # Explorer API: {"serializedValue": "07...", "sigmaType": "SGroupElement", ...}
    if isinstance(raw, Mapping):
        if "serializedValue" not in raw:
            raise format_decode_error("register object without serializedValue",
                                      code="INVALID_REGISTER")
        raw = raw["serializedValue"]
    return coerce_bytes(raw)


def split_register(raw: RegisterValue) -> Tuple[int, bytes]:
    """
    Separa il type tag (primo byte) dal corpo del registro.

    Returns:
        tuple: (type_tag, point_bytes)

    Raises:
        CurveDecodeError: Registro vuoto o non esadecimale
    """
    data = _register_bytes(raw)
    if not data:
        raise format_decode_error("empty register", code="EMPTY_REGISTER")
    return data[0], data[1:]


def strip_register_prefix(raw: RegisterValue) -> bytes:
    """Rimuove esattamente un byte iniziale (type tag) dal valore del registro"""
    return split_register(raw)[1]


def decode_register(
    raw: RegisterValue,
    curve: CurveContext = SECP256K1,
    expected_tag: Optional[int] = REGISTER_TYPE_TAG_GROUP_ELEMENT
) -> Point:
    """
    Decodifica un registro in un punto di curva.

    Args:
        raw: Valore registro (bytes, hex, o oggetto explorer)
        curve: Contesto curva
        expected_tag: Type tag richiesto; None per non verificarlo

    Raises:
        CurveDecodeError: Tag errato o punto invalido
    """
    tag, body = split_register(raw)

    if expected_tag is not None and tag != expected_tag:
        raise format_decode_error(
            f"unexpected register type tag 0x{tag:02x} (expected 0x{expected_tag:02x})",
            code="INVALID_TYPE_TAG"
        )

    return curve.decode_point(body)


def encode_register(
    point: Point,
    curve: CurveContext = SECP256K1,
    tag: int = REGISTER_TYPE_TAG_GROUP_ELEMENT
) -> bytes:
    """Serializza punto come valore di registro: tag || punto compresso"""
    return bytes([tag]) + curve.encode_point(point)


# ============================================================================
# STEALTH PAYLOAD
# ============================================================================

@dataclass(frozen=True)
class StealthPayload:
    """
    Payload stealth: tupla DH randomizzata nei registri R4..R7.

    Attributes:
        g_r: r*G (R4)
        g_y: y*G (R5)
        u_r: r*U (R6)
        u_y: y*U (R7)
        curve: Contesto curva dei quattro punti
    """
    g_r: Point
    g_y: Point
    u_r: Point
    u_y: Point
    curve: CurveContext = field(default=SECP256K1, repr=False, compare=False)

    def __post_init__(self):
        for slot, point in zip(PAYLOAD_REGISTERS, self.points()):
            if not isinstance(point, Point) or not self.curve.is_on_curve(point):
                raise InvalidPointError(
                    f"Payload slot {slot} is not a point on {self.curve.name}",
                    code="POINT_NOT_ON_CURVE",
                    details={"register": slot}
                )

    def __eq__(self, other) -> bool:
        if not isinstance(other, StealthPayload):
            return NotImplemented
        return self.curve.name == other.curve.name and self.points() == other.points()

    def __hash__(self) -> int:
        return hash((self.curve.name, self.points()))

    # ========================================================================
    # ACCESSORS
    # ========================================================================

    def points(self) -> Tuple[Point, Point, Point, Point]:
        """Punti nell'ordine di protocollo (G_r, G_y, U_r, U_y)"""
        return (self.g_r, self.g_y, self.u_r, self.u_y)

    def has_identity(self) -> bool:
        return any(point.is_infinity() for point in self.points())

    # ========================================================================
    # ENCODING
    # ========================================================================

    def encode(self) -> Tuple[bytes, bytes, bytes, bytes]:
        """Quattro punti compressi (senza type tag)"""
        return tuple(self.curve.encode_point(p) for p in self.points())

    def to_registers(
        self,
        tag: int = REGISTER_TYPE_TAG_GROUP_ELEMENT
    ) -> Tuple[str, str, str, str]:
        """Valori hex dei registri R4..R7 (tag incluso)"""
        return tuple(encode_register(p, self.curve, tag).hex() for p in self.points())

    def register_map(self, tag: int = REGISTER_TYPE_TAG_GROUP_ELEMENT) -> Dict[str, str]:
        """Mappa {"R4": ..., "R7": ...} per il transaction builder esterno"""
        return dict(zip(PAYLOAD_REGISTERS, self.to_registers(tag)))

    # ========================================================================
    # DECODING
    # ========================================================================

    @classmethod
    def from_encoded(
        cls,
        encoded: Sequence[Union[bytes, str]],
        curve: CurveContext = SECP256K1
    ) -> "StealthPayload":
        """
        Crea payload da quattro punti compressi (senza type tag).

        Raises:
            CurveDecodeError: Numero di punti errato o punto invalido
        """
        if len(encoded) != len(PAYLOAD_REGISTERS):
            raise format_decode_error(
                f"expected {len(PAYLOAD_REGISTERS)} points, got {len(encoded)}",
                code="INVALID_PAYLOAD_SHAPE"
            )
        return cls(*(curve.decode_point(item) for item in encoded), curve=curve)

    @classmethod
    def from_registers(
        cls,
        registers: RegisterInput,
        curve: CurveContext = SECP256K1,
        expected_tag: Optional[int] = REGISTER_TYPE_TAG_GROUP_ELEMENT
    ) -> "StealthPayload":
        """
        Crea payload dai registri di una box.

        Args:
            registers: Sequenza di 4 valori, oppure mappa con chiavi R4..R7
                (eventuali altri registri sono ignorati)
            curve: Contesto curva
            expected_tag: Type tag atteso su ogni registro (None = non verificato)

        Raises:
            CurveDecodeError: Registro mancante o malformato
        """
        if isinstance(registers, Mapping):
            missing = [name for name in PAYLOAD_REGISTERS if name not in registers]
            if missing:
                raise CurveDecodeError(
                    f"Missing payload registers: {', '.join(missing)}",
                    code="MISSING_REGISTER",
                    details={"missing": missing}
                )
            values = [registers[name] for name in PAYLOAD_REGISTERS]
        elif isinstance(registers, (str, bytes, bytearray)):
            raise format_decode_error("expected four register values, got a single value",
                                      code="INVALID_PAYLOAD_SHAPE")
        else:
            try:
                values = list(registers)
            except TypeError:
                raise format_decode_error(
                    f"registers must be a sequence or mapping, got {type(registers).__name__}",
                    code="INVALID_PAYLOAD_SHAPE"
                )
            if len(values) != len(PAYLOAD_REGISTERS):
                raise format_decode_error(
                    f"expected {len(PAYLOAD_REGISTERS)} registers, got {len(values)}",
                    code="INVALID_PAYLOAD_SHAPE"
                )

        points = []
        for name, value in zip(PAYLOAD_REGISTERS, values):
            try:
                points.append(decode_register(value, curve, expected_tag))
            except CurveDecodeError as e:
                e.details.setdefault("register", name)
                raise

        return cls(*points, curve=curve)


__all__ = [
    "StealthPayload",
    "RegisterInput",
    "split_register",
    "strip_register_prefix",
    "decode_register",
    "encode_register",
]
