"""
StealthBox - Configuration Management
=======================================
Configurazione centralizzata con Pydantic Settings.
Supporta environment variables, file .env, override runtime.

Security Level: HIGH
Last Updated: 2026-10-18
Version: 1.0.0

Features:
- Validazione automatica tipi
- Environment variables con prefisso STEALTHBOX_
- File .env support
"""

import os
from pathlib import Path
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stealth_box.constants import (
    DEFAULT_CURVE,
    DEFAULT_MAX_SCALAR_DRAWS,
    REGISTER_TYPE_TAG_GROUP_ELEMENT,
    STEALTH_ERGO_TREE,
)
from stealth_box.crypto.curve import CURVES, CurveContext, get_curve


# ============================================================================
# MAIN CONFIGURATION CLASS
# ============================================================================

class StealthSettings(BaseSettings):
    """
    Configurazione StealthBox.

    Example:
        # Da environment
        export STEALTHBOX_CURVE="secp256k1"
        export STEALTHBOX_LOG_LEVEL=DEBUG

        # Da codice
        config = StealthSettings(max_scalar_draws=8)
    """

    model_config = SettingsConfigDict(
        env_prefix='STEALTHBOX_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # ========================================================================
    # CRYPTOGRAPHY
    # ========================================================================

    curve: str = Field(
        default=DEFAULT_CURVE,
        description="Curva: secp256k1 (Ergo) o secp256r1 (solo test)"
    )

    max_scalar_draws: int = Field(
        default=DEFAULT_MAX_SCALAR_DRAWS,
        ge=1,
        le=1024,
        description="Estrazioni massime prima di EntropyError"
    )

    # ========================================================================
    # REGISTERS
    # ========================================================================

    register_type_tag: int = Field(
        default=REGISTER_TYPE_TAG_GROUP_ELEMENT,
        ge=0,
        le=255,
        description="Type tag anteposto al punto in ogni registro"
    )

    enforce_register_type_tag: bool = Field(
        default=True,
        description="Rifiuta registri con type tag diverso"
    )

    stealth_ergo_tree: str = Field(
        default=STEALTH_ERGO_TREE,
        description="ErgoTree dello script proveDHTuple che protegge le box"
    )

    # ========================================================================
    # LOGGING
    # ========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    log_to_file: bool = Field(
        default=False,
        description="Salva log su file"
    )

    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory log files"
    )

    log_format: str = Field(
        default="json",
        description="Formato log: json, text"
    )

    log_rotation_mb: int = Field(
        default=100,
        ge=1,
        description="Dimensione max file log prima rotation (MB)"
    )

    log_retention_days: int = Field(
        default=30,
        ge=1,
        description="File di backup mantenuti"
    )

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator('curve')
    @classmethod
    def validate_curve(cls, v: str) -> str:
        """Valida nome curva"""
        v_lower = v.lower()
        if v_lower not in CURVES:
            raise ValueError(f"Invalid curve: {v}. Must be one of {sorted(CURVES)}")
        return v_lower

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Valida log level"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Valida formato log"""
        v_lower = v.lower()
        if v_lower not in ('json', 'text'):
            raise ValueError(f"Invalid log_format: {v}. Must be json or text")
        return v_lower

    @field_validator('stealth_ergo_tree')
    @classmethod
    def validate_ergo_tree(cls, v: str) -> str:
        """ErgoTree deve essere hex"""
        try:
            bytes.fromhex(v)
        except ValueError:
            raise ValueError("stealth_ergo_tree must be a hex string")
        return v.lower()

    # ========================================================================
    # POST-INIT PROCESSING
    # ========================================================================

    def model_post_init(self, __context) -> None:
        """Crea log_dir solo se il logging su file è attivo"""
        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    def get_curve(self) -> CurveContext:
        """CurveContext configurato"""
        return get_curve(self.curve)

    def expected_register_tag(self) -> Optional[int]:
        """Type tag da verificare in decodifica (None se disattivato)"""
        return self.register_type_tag if self.enforce_register_type_tag else None

    def to_dict(self) -> dict:
        """Serializza config"""
        return self.model_dump()

    def to_json(self) -> str:
        """Serializza config in JSON"""
        return self.model_dump_json(indent=2)

    def __repr__(self) -> str:
        return (
            f"StealthSettings("
            f"curve={self.curve}, "
            f"register_type_tag=0x{self.register_type_tag:02x}, "
            f"log_level={self.log_level})"
        )


# ============================================================================
# SINGLETON INSTANCE
# ============================================================================

@lru_cache(maxsize=1)
def get_settings() -> StealthSettings:
    """
    Ottieni singleton instance di StealthSettings.

    Cached: chiamate multiple restituiscono la stessa istanza.
    """
    return StealthSettings()


def reload_settings() -> StealthSettings:
    """
    Ricarica settings (invalida cache).

    Usare quando si cambiano environment variables runtime.
    """
    get_settings.cache_clear()
    return get_settings()


def override_settings(**kwargs) -> StealthSettings:
    """
    Settings con valori custom (utile per testing).

    Example:
        >>> test_config = override_settings(curve="secp256r1", log_level="DEBUG")
    """
    return StealthSettings(**kwargs)


# ============================================================================
# CONFIGURATION VALIDATION
# ============================================================================

def validate_config(config: StealthSettings) -> tuple[bool, list[str]]:
    """
    Valida configurazione completa.

    Returns:
        tuple: (is_valid, errors_list)
    """
    errors = []

    if config.register_type_tag != REGISTER_TYPE_TAG_GROUP_ELEMENT:
        errors.append(
            f"register_type_tag 0x{config.register_type_tag:02x} differs from "
            f"SGroupElement tag 0x{REGISTER_TYPE_TAG_GROUP_ELEMENT:02x}"
        )

    if config.curve != DEFAULT_CURVE:
        errors.append(f"curve {config.curve} is not the on-chain group ({DEFAULT_CURVE})")

    if config.log_to_file and not os.access(config.log_dir, os.W_OK):
        errors.append(f"Directory not writable: {config.log_dir}")

    return (len(errors) == 0, errors)


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "StealthSettings",
    "get_settings",
    "reload_settings",
    "override_settings",
    "validate_config",
]
