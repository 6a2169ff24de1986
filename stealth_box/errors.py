"""
StealthBox - Custom Exceptions
================================
Gerarchia di eccezioni per il core stealth payment.

Security Level: HIGH
Last Updated: 2026-10-18
Version: 1.0.0
"""

from typing import Optional, Any


# ============================================================================
# BASE EXCEPTION
# ============================================================================

class StealthBoxException(Exception):
    """
    Eccezione base per tutte le eccezioni StealthBox.

    Attributes:
        message (str): Messaggio errore
        code (str): Codice errore (es. "DECODE_001")
        details (dict): Dettagli aggiuntivi
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Serializza eccezione per logging/CLI"""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================

class ConfigError(StealthBoxException):
    """Errore configurazione"""
    pass


class InvalidConfigError(ConfigError):
    """Configurazione invalida"""
    pass


# ============================================================================
# CRYPTOGRAPHY ERRORS
# ============================================================================

class CryptoError(StealthBoxException):
    """Errore crittografia"""
    pass


class CurveDecodeError(CryptoError):
    """Bytes che non codificano un punto valido sulla curva configurata"""
    pass


class InvalidPointError(CurveDecodeError):
    """Punto decodificato ma inutilizzabile (es. identità come chiave pubblica)"""
    pass


class InvalidScalarError(CryptoError):
    """Scalare zero o fuori da [1, n-1]"""
    pass


class EntropyError(CryptoError):
    """Sorgente random sicura non disponibile"""
    pass


# ============================================================================
# STEALTH PAYMENT ERRORS
# ============================================================================

class StealthError(StealthBoxException):
    """Errore generico stealth payment"""
    pass


class UnspendablePayloadError(StealthError):
    """Payload non spendibile con la chiave fornita"""
    pass


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def format_decode_error(
    issue: str,
    value: Any = None,
    code: Optional[str] = None
) -> CurveDecodeError:
    """
    Helper per creare CurveDecodeError formattati.

    Args:
        issue: Descrizione problema
        value: Valore ricevuto (troncato nei details)
        code: Codice errore custom

    Returns:
        CurveDecodeError: Eccezione formattata

    Example:
        >>> raise format_decode_error("invalid prefix byte 0x05", b"\\x05...")
    """
    details = {"issue": issue}
    if value is not None:
        shown = value.hex() if isinstance(value, (bytes, bytearray)) else str(value)
        details["value"] = shown[:20]

    return CurveDecodeError(
        message=f"Cannot decode curve point: {issue}",
        code=code or "CURVE_DECODE_FAILED",
        details=details
    )


# ============================================================================
# EXPORT ALL
# ============================================================================

__all__ = [
    # Base
    "StealthBoxException",

    # Config
    "ConfigError",
    "InvalidConfigError",

    # Crypto
    "CryptoError",
    "CurveDecodeError",
    "InvalidPointError",
    "InvalidScalarError",
    "EntropyError",

    # Stealth
    "StealthError",
    "UnspendablePayloadError",

    # Helpers
    "format_decode_error",
]
