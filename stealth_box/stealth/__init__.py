"""
StealthBox - Stealth Package
==============================
Keypair, payload, generazione, detection e witness.
"""

from stealth_box.stealth.keys import StealthKeyPair
from stealth_box.stealth.payload import (
    StealthPayload,
    strip_register_prefix,
    decode_register,
    encode_register,
)
from stealth_box.stealth.generator import PayloadGenerator
from stealth_box.stealth.detector import PayloadDetector, DetectionResult
from stealth_box.stealth.witness import WitnessBuilder, WitnessDescriptor

__all__ = [
    # Keys
    "StealthKeyPair",

    # Payload
    "StealthPayload",
    "strip_register_prefix",
    "decode_register",
    "encode_register",

    # Sender / Receiver
    "PayloadGenerator",
    "PayloadDetector",
    "DetectionResult",
    "WitnessBuilder",
    "WitnessDescriptor",
]
