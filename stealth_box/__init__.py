"""
StealthBox - Stealth Payments over Ergo boxes
===============================================
Pagamenti stealth basati su tuple Diffie-Hellman (proveDHTuple).

Version: 1.0.0
Author: StealthBox Team
License: MIT
"""

__version__ = "1.0.0"
__author__ = "StealthBox Team"
__license__ = "MIT"

# Core imports
from stealth_box.crypto.curve import CurveContext, Point, SECP256K1, SECP256R1, get_curve
from stealth_box.stealth.keys import StealthKeyPair
from stealth_box.stealth.payload import StealthPayload
from stealth_box.stealth.generator import PayloadGenerator
from stealth_box.stealth.detector import PayloadDetector, DetectionResult
from stealth_box.stealth.witness import WitnessBuilder, WitnessDescriptor
from stealth_box.config import StealthSettings, get_settings

# Services
from stealth_box.services.stealth_service import StealthService

__all__ = [
    # Version
    "__version__",

    # Curve
    "CurveContext",
    "Point",
    "SECP256K1",
    "SECP256R1",
    "get_curve",

    # Core
    "StealthKeyPair",
    "StealthPayload",
    "PayloadGenerator",
    "PayloadDetector",
    "DetectionResult",
    "WitnessBuilder",
    "WitnessDescriptor",

    # Config
    "StealthSettings",
    "get_settings",

    # Services
    "StealthService",
]
