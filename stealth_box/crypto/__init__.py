"""
StealthBox - Crypto Package
=============================
Curve context e utility per scalari.
"""

from stealth_box.crypto.curve import (
    Point,
    INFINITY,
    CurveContext,
    SECP256K1,
    SECP256R1,
    get_curve,
)
from stealth_box.crypto.scalars import (
    random_scalar,
    validate_scalar,
    is_valid_scalar,
)

__all__ = [
    "Point",
    "INFINITY",
    "CurveContext",
    "SECP256K1",
    "SECP256R1",
    "get_curve",
    "random_scalar",
    "validate_scalar",
    "is_valid_scalar",
]
