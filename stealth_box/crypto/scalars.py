"""
StealthBox - Scalar Utilities
===============================
Validazione scalari e campionamento uniforme da CSPRNG.
"""

import secrets
from typing import Callable, Union

from stealth_box.crypto.curve import CurveContext
from stealth_box.constants import DEFAULT_MAX_SCALAR_DRAWS
from stealth_box.errors import EntropyError, InvalidScalarError
from stealth_box.logging_setup import get_logger


logger = get_logger("crypto.scalars")


# Sorgente random: riceve numero di byte, restituisce bytes
RandomSource = Callable[[int], bytes]


def is_valid_scalar(k: int, curve: CurveContext) -> bool:
    """True se k è un intero in [1, n-1]"""
    return isinstance(k, int) and not isinstance(k, bool) and 0 < k < curve.n


def validate_scalar(k: int, curve: CurveContext, name: str = "scalar") -> int:
    """
    Valida scalare segreto o effimero.

    Args:
        k: Scalare da validare
        curve: Contesto curva (fornisce n)
        name: Nome usato nel messaggio d'errore

    Returns:
        int: Lo stesso scalare

    Raises:
        InvalidScalarError: Se k non è in [1, n-1]
    """
    if not is_valid_scalar(k, curve):
        # Il valore non finisce nei details: potrebbe essere un segreto
        raise InvalidScalarError(
            f"{name} must be an integer in [1, n-1] for {curve.name}",
            code="SCALAR_OUT_OF_RANGE",
            details={"name": name, "curve": curve.name}
        )
    return k


def scalar_from_bytes(data: Union[bytes, str], curve: CurveContext) -> int:
    """
    Interpreta 32 bytes big-endian (o hex) come scalare valido.

    Raises:
        InvalidScalarError: Formato o range invalido
    """
    if isinstance(data, str):
        try:
            data = bytes.fromhex(data)
        except ValueError:
            raise InvalidScalarError("Scalar is not a hex string", code="INVALID_HEX")

    if len(data) != curve.coordinate_size:
        raise InvalidScalarError(
            f"Scalar must be {curve.coordinate_size} bytes, got {len(data)}",
            code="INVALID_LENGTH"
        )

    return validate_scalar(int.from_bytes(data, 'big'), curve)


def scalar_to_bytes(k: int, curve: CurveContext) -> bytes:
    return k.to_bytes(curve.coordinate_size, 'big')


def scalar_to_hex(k: int, curve: CurveContext) -> str:
    return scalar_to_bytes(k, curve).hex()


def random_scalar(
    curve: CurveContext,
    source: RandomSource = secrets.token_bytes,
    max_draws: int = DEFAULT_MAX_SCALAR_DRAWS
) -> int:
    """
    Campiona scalare uniforme in [1, n-1] per rejection sampling.

    Ogni estrazione fuori range (zero o >= n) viene scartata e ripetuta.
    Dopo max_draws rifiuti consecutivi la sorgente è considerata guasta.

    Args:
        curve: Contesto curva
        source: Sorgente random sicura (default: secrets.token_bytes)
        max_draws: Estrazioni massime

    Returns:
        int: Scalare in [1, n-1]

    Raises:
        EntropyError: Sorgente non disponibile o output inutilizzabile
    """
    size = curve.coordinate_size

    for _ in range(max_draws):
        try:
            raw = source(size)
        except Exception as e:
            logger.error(
                "Secure random source failed",
                extra_data={"error": type(e).__name__}
            )
            raise EntropyError(
                f"Secure random source unavailable: {e}",
                code="ENTROPY_UNAVAILABLE"
            ) from e

        if not isinstance(raw, (bytes, bytearray)) or len(raw) != size:
            raise EntropyError(
                f"Random source returned invalid output (expected {size} bytes)",
                code="ENTROPY_INVALID_OUTPUT"
            )

        k = int.from_bytes(raw, 'big')
        if 0 < k < curve.n:
            return k

        logger.debug("Rejected out-of-range scalar draw, resampling")

    raise EntropyError(
        f"No usable scalar after {max_draws} draws",
        code="ENTROPY_EXHAUSTED",
        details={"max_draws": max_draws}
    )


__all__ = [
    "RandomSource",
    "is_valid_scalar",
    "validate_scalar",
    "scalar_from_bytes",
    "scalar_to_bytes",
    "scalar_to_hex",
    "random_scalar",
]
