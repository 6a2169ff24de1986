"""
StealthBox - Logging System
=============================
Logging strutturato JSON per generazione e scansione stealth payload.

Security Level: HIGH
Last Updated: 2026-10-18
Version: 1.0.0

Features:
- Logging JSON strutturato
- Rotation automatica
- Context enrichment
- Performance tracking

NOTA: nessun logger di questo package riceve mai scalari segreti.
"""

import logging
import logging.handlers
import json
import sys
import time
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime, timezone
import traceback


ROOT_LOGGER_NAME = "stealthbox"

# Nessun output finché setup_logging non configura gli handler
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


# ============================================================================
# JSON FORMATTER
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    Formatter per log in formato JSON.

    Output structure:
    {
        "timestamp": "2026-10-18T10:00:00.000000Z",
        "level": "INFO",
        "logger": "stealthbox.detector",
        "message": "Stealth payload recognized",
        "extra_data": {...},
        "exception": {...}
    }
    """

    def __init__(
        self,
        include_extra: bool = True,
        include_stack: bool = True
    ):
        super().__init__()
        self.include_extra = include_extra
        self.include_stack = include_stack

    def format(self, record: logging.LogRecord) -> str:
        """
        Formatta LogRecord in JSON.

        Args:
            record: LogRecord da formattare

        Returns:
            str: JSON string
        """
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_data = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.thread:
            log_data["thread_id"] = record.thread
            log_data["thread_name"] = record.threadName

        if self.include_extra and hasattr(record, 'extra_data'):
            log_data["extra_data"] = record.extra_data

        if record.exc_info and self.include_stack:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }

        return json.dumps(log_data, default=str)


# ============================================================================
# TEXT FORMATTER (Human-Readable)
# ============================================================================

class ColoredTextFormatter(logging.Formatter):
    """
    Formatter colorato per console.
    """

    COLORS = {
        'DEBUG': '\033[90m',      # Gray
        'INFO': '\033[92m',       # Green
        'WARNING': '\033[93m',    # Yellow
        'ERROR': '\033[91m',      # Red
        'CRITICAL': '\033[1;91m', # Bold Red
        'RESET': '\033[0m'
    }

    def format(self, record: logging.LogRecord) -> str:
        """Formatta con colori"""
        levelname = record.levelname
        if levelname in self.COLORS:
            levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        timestamp = created.strftime('%Y-%m-%d %H:%M:%S')

        message = f"{timestamp} [{levelname}] {record.name}: {record.getMessage()}"

        if hasattr(record, 'extra_data'):
            message += f" | {record.extra_data}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


# ============================================================================
# LOGGER CLASS
# ============================================================================

class StealthBoxLogger:
    """
    Wrapper logger con context enrichment e campo extra_data.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger
        self._context: Dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self._logger.name

    def set_context(self, **kwargs):
        """
        Imposta context aggiunto a tutti i log.

        Example:
            >>> logger.set_context(curve="secp256k1")
        """
        self._context.update(kwargs)

    def clear_context(self):
        """Clear context"""
        self._context.clear()

    def _log(
        self,
        level: int,
        message: str,
        extra_data: Optional[Dict[str, Any]] = None,
        exc_info=None
    ):
        merged_extra = {**self._context}
        if extra_data:
            merged_extra.update(extra_data)

        self._logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={'extra_data': merged_extra} if merged_extra else {}
        )

    def debug(self, message: str, extra_data: Optional[Dict] = None):
        """Log DEBUG"""
        self._log(logging.DEBUG, message, extra_data)

    def info(self, message: str, extra_data: Optional[Dict] = None):
        """Log INFO"""
        self._log(logging.INFO, message, extra_data)

    def warning(self, message: str, extra_data: Optional[Dict] = None):
        """Log WARNING"""
        self._log(logging.WARNING, message, extra_data)

    def error(self, message: str, extra_data: Optional[Dict] = None, exc_info=None):
        """Log ERROR"""
        self._log(logging.ERROR, message, extra_data, exc_info)


# ============================================================================
# SETUP FUNCTION
# ============================================================================

def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_dir: Path = Path("./logs"),
    log_format: str = "json",
    log_rotation_mb: int = 100,
    log_retention_days: int = 30,
    enable_console: bool = True,
) -> StealthBoxLogger:
    """
    Setup logging system.

    Args:
        log_level: Level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Salva su file
        log_dir: Directory log files
        log_format: Formato file (json, text)
        log_rotation_mb: MB prima rotation
        log_retention_days: Numero file di backup
        enable_console: Log anche su console (stderr)

    Returns:
        StealthBoxLogger: Logger root configurato

    Example:
        >>> logger = setup_logging(log_level="DEBUG", log_to_file=False)
        >>> logger.info("Scanner started", extra_data={"boxes": 10})
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "stealthbox.log",
            maxBytes=log_rotation_mb * 1024 * 1024,
            backupCount=log_retention_days,
            encoding='utf-8'
        )

        if log_format == "json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                )
            )

        root_logger.addHandler(file_handler)

    if enable_console:
        # stderr: stdout resta riservato all'output della CLI
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredTextFormatter())
        root_logger.addHandler(console_handler)

    if not root_logger.handlers:
        # Senza handler i WARNING finirebbero su logging.lastResort (stderr)
        root_logger.addHandler(logging.NullHandler())

    return StealthBoxLogger(root_logger)


# ============================================================================
# CATEGORY LOGGERS
# ============================================================================

def get_logger(category: str) -> StealthBoxLogger:
    """
    Ottieni logger per categoria specifica.

    Args:
        category: Categoria (curve, generator, detector, services.stealth, ...)

    Returns:
        StealthBoxLogger: Logger per categoria
    """
    return StealthBoxLogger(logging.getLogger(f"{ROOT_LOGGER_NAME}.{category}"))


# ============================================================================
# PERFORMANCE TRACKING
# ============================================================================

class PerformanceLogger:
    """
    Context manager per tracking performance.

    Example:
        >>> logger = get_logger("services.stealth")
        >>> with PerformanceLogger(logger, "scan_boxes"):
        ...     service.scan_boxes(boxes, keypair)
    """

    def __init__(
        self,
        logger: StealthBoxLogger,
        operation: str,
        threshold_ms: Optional[int] = None
    ):
        self.logger = logger
        self.operation = operation
        self.threshold_ms = threshold_ms
        self.start_time = None
        self.elapsed_ms: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000

        extra = {
            "operation": self.operation,
            "duration_ms": round(self.elapsed_ms, 2)
        }

        if self.threshold_ms and self.elapsed_ms > self.threshold_ms:
            self.logger.warning(
                f"{self.operation} took {self.elapsed_ms:.2f}ms "
                f"(threshold: {self.threshold_ms}ms)",
                extra_data=extra
            )
        else:
            self.logger.debug(
                f"{self.operation} completed in {self.elapsed_ms:.2f}ms",
                extra_data=extra
            )


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "setup_logging",
    "get_logger",
    "StealthBoxLogger",
    "PerformanceLogger",
    "JSONFormatter",
    "ColoredTextFormatter",
    "ROOT_LOGGER_NAME",
]
