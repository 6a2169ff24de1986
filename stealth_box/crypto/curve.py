"""
StealthBox - Curve Context
============================
Gruppo di curva ellittica esplicito (generatore, ordine, codec dei punti).

Security Level: CRITICAL
Last Updated: 2026-10-18
Version: 1.0.0

Il contesto di curva è un valore immutabile passato a ogni operazione:
nessuno stato globale nascosto, e i test possono girare anche su
parametri alternativi (secp256r1).
"""

from dataclasses import dataclass
from typing import Optional, Union, Dict

from stealth_box.constants import (
    SECP256K1_P, SECP256K1_A, SECP256K1_B, SECP256K1_N,
    SECP256K1_GX, SECP256K1_GY,
    SECP256R1_P, SECP256R1_A, SECP256R1_B, SECP256R1_N,
    SECP256R1_GX, SECP256R1_GY,
    IDENTITY_ENCODING,
    PREFIX_EVEN_Y,
    PREFIX_ODD_Y,
)
from stealth_box.errors import (
    InvalidConfigError,
    InvalidPointError,
    format_decode_error,
)


@dataclass(frozen=True, slots=True)
class Point:
    """
    Punto affine su curva ellittica; (None, None) è l'identità.

    L'uguaglianza confronta le coordinate affini, quindi è indipendente
    dalla codifica da cui il punto è stato letto.
    """

    x: Optional[int]
    y: Optional[int]

    def is_infinity(self) -> bool:
        """Check se punto all'infinito"""
        return self.x is None and self.y is None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        if self.is_infinity():
            return "Point(INF)"
        return f"Point({hex(self.x)[:10]}..., {hex(self.y)[:10]}...)"


INFINITY = Point(None, None)


def coerce_bytes(data: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(data, str):
        try:
            return bytes.fromhex(data)
        except ValueError:
            raise format_decode_error("not a hex string", data, code="INVALID_HEX")
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    raise format_decode_error(
        f"expected bytes or hex string, got {type(data).__name__}",
        code="INVALID_INPUT_TYPE"
    )


@dataclass(frozen=True)
class CurveContext:
    """
    Curva short-Weierstrass y^2 = x^3 + a*x + b su F_p, gruppo di ordine primo n.

    Attributes:
        name: Nome curva (es. "secp256k1")
        p: Primo del campo (deve essere ≡ 3 mod 4 per la decompressione)
        a: Coefficiente a
        b: Coefficiente b
        n: Ordine del gruppo
        gx: Coordinata x del generatore
        gy: Coordinata y del generatore
    """
    name: str
    p: int
    a: int
    b: int
    n: int
    gx: int
    gy: int

    def __post_init__(self):
        if self.p % 4 != 3:
            raise InvalidConfigError(
                f"Curve {self.name}: field prime must be 3 mod 4",
                code="UNSUPPORTED_CURVE"
            )
        if not self.is_on_curve(self.generator):
            raise InvalidConfigError(
                f"Curve {self.name}: generator is not on the curve",
                code="INVALID_GENERATOR"
            )

    # ========================================================================
    # GROUP ELEMENTS
    # ========================================================================

    @property
    def generator(self) -> Point:
        """Generator point G"""
        return Point(self.gx, self.gy)

    @property
    def identity(self) -> Point:
        return INFINITY

    @property
    def coordinate_size(self) -> int:
        """Byte per coordinata (32 per curve a 256 bit)"""
        return (self.p.bit_length() + 7) // 8

    def is_on_curve(self, point: Point) -> bool:
        """Check y^2 == x^3 + ax + b (l'identità è nel gruppo)"""
        if point.is_infinity():
            return True
        if point.x is None or point.y is None:
            return False
        if not (0 <= point.x < self.p and 0 <= point.y < self.p):
            return False
        lhs = (point.y * point.y) % self.p
        rhs = (pow(point.x, 3, self.p) + self.a * point.x + self.b) % self.p
        return lhs == rhs

    # ========================================================================
    # ARITHMETIC
    # ========================================================================

    def point_add(self, p1: Point, p2: Point) -> Point:
        """
        Addizione di punti sulla curva.

        Args:
            p1: Primo punto
            p2: Secondo punto

        Returns:
            Point: Somma dei punti
        """
        if p1.is_infinity():
            return p2
        if p2.is_infinity():
            return p1

        p = self.p
        if p1.x == p2.x:
            if (p1.y + p2.y) % p == 0:
                return INFINITY
            # Point doubling
            s = (3 * p1.x * p1.x + self.a) * pow(2 * p1.y, -1, p)
        else:
            s = (p2.y - p1.y) * pow(p2.x - p1.x, -1, p)
        s %= p

        x = (s * s - p1.x - p2.x) % p
        y = (s * (p1.x - x) - p1.y) % p

        return Point(x, y)

    def point_negate(self, point: Point) -> Point:
        if point.is_infinity():
            return INFINITY
        return Point(point.x, (-point.y) % self.p)

    def point_multiply(self, k: int, point: Point) -> Point:
        """
        Moltiplicazione scalare k * point (double-and-add).

        Lo scalare è ridotto modulo n; k ≡ 0 restituisce l'identità.
        """
        k %= self.n
        if k == 0 or point.is_infinity():
            return INFINITY

        result = INFINITY
        addend = point

        while k:
            if k & 1:
                result = self.point_add(result, addend)
            addend = self.point_add(addend, addend)
            k >>= 1

        return result

    def base_multiply(self, k: int) -> Point:
        """k * G"""
        return self.point_multiply(k, self.generator)

    def points_equal(self, p1: Point, p2: Point) -> bool:
        """Uguaglianza di gruppo (coordinate affini già normalizzate)"""
        return p1 == p2

    # ========================================================================
    # CODEC
    # ========================================================================

    def encode_point(self, point: Point) -> bytes:
        """
        Comprimi punto in formato compresso (33 bytes).

        L'identità viene codificata con il sentinel riservato di 33 byte a
        zero, mai emesso per un punto reale.

        Raises:
            InvalidPointError: Se il punto non sta sulla curva
        """
        if point.is_infinity():
            return IDENTITY_ENCODING

        if not self.is_on_curve(point):
            raise InvalidPointError(
                f"Point is not on curve {self.name}",
                code="POINT_NOT_ON_CURVE",
                details={"curve": self.name}
            )

        prefix = PREFIX_EVEN_Y if point.y % 2 == 0 else PREFIX_ODD_Y
        return bytes([prefix]) + point.x.to_bytes(self.coordinate_size, 'big')

    def encode_point_hex(self, point: Point) -> str:
        return self.encode_point(point).hex()

    def decode_point(self, data: Union[bytes, bytearray, str]) -> Point:
        """
        Decomprimi punto da formato compresso.

        Args:
            data: 33 bytes (o stringa hex equivalente)

        Returns:
            Point: Punto decompresso (identità per il sentinel a zero)

        Raises:
            CurveDecodeError: Lunghezza, prefisso o coordinata x invalidi
        """
        raw = coerce_bytes(data)
        size = 1 + self.coordinate_size

        if len(raw) != size:
            raise format_decode_error(
                f"expected {size} bytes, got {len(raw)}", raw, code="INVALID_LENGTH"
            )

        if raw == IDENTITY_ENCODING:
            return INFINITY

        prefix = raw[0]
        if prefix not in (PREFIX_EVEN_Y, PREFIX_ODD_Y):
            raise format_decode_error(
                f"invalid prefix byte 0x{prefix:02x}", raw, code="INVALID_PREFIX"
            )

        p = self.p
        x = int.from_bytes(raw[1:], 'big')
        if x >= p:
            raise format_decode_error(
                "x coordinate exceeds field prime", raw, code="X_OUT_OF_RANGE"
            )

        y_squared = (pow(x, 3, p) + self.a * x + self.b) % p
        y = pow(y_squared, (p + 1) // 4, p)

        if (y * y) % p != y_squared:
            raise format_decode_error(
                "x coordinate is not on the curve", raw, code="X_NOT_ON_CURVE"
            )

        if (y % 2 == 0) != (prefix == PREFIX_EVEN_Y):
            y = p - y

        return Point(x, y)


# ============================================================================
# BUILT-IN CURVES
# ============================================================================

SECP256K1 = CurveContext(
    name="secp256k1",
    p=SECP256K1_P,
    a=SECP256K1_A,
    b=SECP256K1_B,
    n=SECP256K1_N,
    gx=SECP256K1_GX,
    gy=SECP256K1_GY,
)

SECP256R1 = CurveContext(
    name="secp256r1",
    p=SECP256R1_P,
    a=SECP256R1_A,
    b=SECP256R1_B,
    n=SECP256R1_N,
    gx=SECP256R1_GX,
    gy=SECP256R1_GY,
)

CURVES: Dict[str, CurveContext] = {
    SECP256K1.name: SECP256K1,
    SECP256R1.name: SECP256R1,
}


def get_curve(name: str) -> CurveContext:
    """
    Risolvi CurveContext per nome.

    Raises:
        InvalidConfigError: Se curva non supportata
    """
    try:
        return CURVES[name.lower()]
    except KeyError:
        raise InvalidConfigError(
            f"Unsupported curve: {name}. Must be one of {sorted(CURVES)}",
            code="UNSUPPORTED_CURVE"
        )


__all__ = [
    "Point",
    "INFINITY",
    "CurveContext",
    "SECP256K1",
    "SECP256R1",
    "CURVES",
    "get_curve",
]
