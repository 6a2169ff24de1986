"""
StealthBox - Pytest Configuration
===================================
Fixtures e configurazione per testing.

Last Updated: 2026-10-18
Version: 1.0.0
"""

import os

import pytest

# Internal imports
from stealth_box.config import get_settings, override_settings
from stealth_box.crypto.curve import SECP256K1, SECP256R1
from stealth_box.services.stealth_service import StealthService
from stealth_box.stealth.keys import StealthKeyPair
from stealth_box.stealth.generator import PayloadGenerator
from stealth_box.stealth.detector import PayloadDetector
from stealth_box.stealth.witness import WitnessBuilder


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isola i test da variabili STEALTHBOX_* e dalla cache settings"""
    for key in list(os.environ):
        if key.upper().startswith("STEALTHBOX_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_config():
    """Test configuration"""
    return override_settings(log_level="DEBUG", max_scalar_draws=16)


@pytest.fixture(params=[SECP256K1, SECP256R1], ids=["secp256k1", "secp256r1"])
def any_curve(request):
    """Entrambe le curve supportate"""
    return request.param


# ============================================================================
# KEY FIXTURES
# ============================================================================

@pytest.fixture
def receiver():
    """Keypair deterministico del destinatario"""
    return StealthKeyPair.from_seed(b"stealthbox-test-receiver")


@pytest.fixture
def stranger():
    """Keypair di un altro utente"""
    return StealthKeyPair.from_seed(b"stealthbox-test-stranger")


# ============================================================================
# COMPONENT FIXTURES
# ============================================================================

@pytest.fixture
def generator():
    return PayloadGenerator()


@pytest.fixture
def detector():
    return PayloadDetector()


@pytest.fixture
def builder():
    return WitnessBuilder()


@pytest.fixture
def payload(generator, receiver):
    """Payload stealth verso receiver"""
    return generator.generate(receiver.public)


@pytest.fixture
def service(test_config):
    """StealthService con configurazione di test"""
    return StealthService(test_config)


# ============================================================================
# HELPER FIXTURES
# ============================================================================

@pytest.fixture
def g_hex():
    """Punto generatore secp256k1 compresso (vettore noto)"""
    return "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


@pytest.fixture
def fixed_source():
    """Factory di sorgenti random che restituiscono i draw forniti in ordine"""
    def factory(*draws: bytes):
        queue = list(draws)

        def source(size: int) -> bytes:
            return queue.pop(0)

        return source

    return factory
