"""
StealthBox - Services Package
===============================
Service layer sopra il core crittografico.
"""

from stealth_box.services.stealth_service import (
    StealthService,
    StealthPayment,
    StealthMatch,
    LedgerSource,
    WitnessSigner,
)

__all__ = [
    "StealthService",
    "StealthPayment",
    "StealthMatch",
    "LedgerSource",
    "WitnessSigner",
]
