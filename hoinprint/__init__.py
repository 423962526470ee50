"""
hoinprint
=========

Driver for ESC/POS thermal receipt printers (Hoin HOP-E802 family).

This package provides:
    - ESC/POS command encoders with strict parameter validation
    - Bit-image rasterization of grayscale bitmaps (8-dot and 24-dot rows)
    - Real-time status queries decoded into typed records
    - A self-healing transport that redials dropped TCP/device streams
    - A thread-safe Printer session exposing every operation as a verb

Basic usage:
    >>> from hoinprint import open_printer, Justification
    >>>
    >>> with open_printer("192.168.1.23:9100") as printer:
    ...     printer.initialize()
    ...     printer.justify(Justification.CENTER)
    ...     printer.println("Hello, receipt!")
    ...     printer.cut_feed(40)

Configuration management:
    >>> import os
    >>> os.environ['HOINPRINT_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from hoinprint import load_config, get_logger
    >>>
    >>> config = load_config()
    >>> print(f"Default printer: {config['address']}")

Version: 0.1.0
License: MIT
Python: 3.10+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# VERSION METADATA
# =============================================================================

__version__ = "0.1.0"
__author__ = "hoinprint developers"
__description__ = "ESC/POS thermal receipt printer driver with self-healing transport"
__license__ = "MIT"
__python_requires__ = ">=3.10"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"hoinprint requires Python 3.10 or newer. "
        f"Current version: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

ROOT_LOGGER_NAME = "hoinprint"


def _setup_logging() -> None:
    """
    Initialize package-wide logging.

    Configures the ``hoinprint`` logger with:
    - A console handler (stderr) for WARNING and above
    - A rotating file handler for all levels, only when the
      HOINPRINT_LOG_DIR environment variable names a directory
    - A format carrying timestamp, level, module, function and line

    The level is read from HOINPRINT_LOG_LEVEL (DEBUG, INFO, WARNING,
    ERROR, CRITICAL; default INFO).

    Idempotent: repeated calls have no additional effect.
    """
    log_level_str = os.environ.get("HOINPRINT_LOG_LEVEL", "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_dir_env = os.environ.get("HOINPRINT_LOG_DIR")
    if log_dir_env:
        try:
            log_dir = Path(log_dir_env)
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "hoinprint.log",
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                f"Could not initialize file logging in {log_dir_env}: {e}. "
                f"Logging to console only."
            )


def get_logger(module_name: str) -> logging.Logger:
    """
    Return a logger namespaced under ``hoinprint``.

    Args:
        module_name: Usually ``__name__``. Names outside the package
                     namespace are prefixed with ``hoinprint.``;
                     ``__main__`` maps to ``hoinprint.main``.

    Returns:
        A logging.Logger inheriting the package handlers.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Sending %d bytes", 12)
    """
    if module_name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(module_name)

    if module_name == "__main__":
        full_name = f"{ROOT_LOGGER_NAME}.main"
    else:
        clean_name = module_name.lstrip(".")
        full_name = f"{ROOT_LOGGER_NAME}.{clean_name}"

    return logging.getLogger(full_name)


# =============================================================================
# CONFIGURATION MANAGEMENT
# =============================================================================

DEFAULT_CONFIG_FILE = "hoinprint.json"

_DEFAULT_CONFIG: Dict[str, Any] = {
    "address": "192.168.1.23:9100",
    "device": None,
    "port": 9100,
    "timeout_seconds": None,
    "encoding": "cp437",
    "image_pacing": True,
    "tab_width": 4,
    "log_level": "INFO",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load printer configuration from a JSON file, falling back to defaults.

    Configuration keys:
        - address: str - TCP target "host[:port]"
        - device: str | None - Device path; takes precedence over address
        - port: int - Port used when address carries none
        - timeout_seconds: float | None - Stream deadline for reads/writes
        - encoding: str - Codec used by print_text()
        - image_pacing: bool - Wait for the print buffer after each strip
        - tab_width: int - Default width for set_tab_width()
        - log_level: str - Informational; level is read from HOINPRINT_LOG_LEVEL

    Args:
        config_path: Path to the JSON file. Defaults to ./hoinprint.json.

    Returns:
        Dictionary with every default key, user values overriding defaults.

    Note:
        A missing file, invalid JSON, or a non-object document is logged
        as a warning and the defaults are returned.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILE)

    config = _DEFAULT_CONFIG.copy()

    if not config_path.exists():
        logger.info(f"Config file {config_path} not found. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)

        if not isinstance(user_config, dict):
            raise ValueError(
                f"Config file must contain a JSON object, "
                f"got {type(user_config).__name__}"
            )

        config.update(user_config)

        logger.info(f"Configuration loaded from {config_path}")
        logger.debug(f"Configuration: {config}")

    except json.JSONDecodeError as e:
        logger.warning(
            f"Could not parse {config_path}: invalid JSON "
            f"at line {e.lineno}, column {e.colno}. Using defaults."
        )
    except OSError as e:
        logger.warning(f"Could not read {config_path}: {e}. Using defaults.")
    except ValueError as e:
        logger.warning(f"Invalid configuration format: {e}. Using defaults.")

    return config


# =============================================================================
# PUBLIC API IMPORTS
# =============================================================================

# Imported after the utilities above so submodules can use get_logger().

from .exceptions import (  # noqa: E402
    CommandValidationError,
    PrinterError,
    RedialError,
    TransportError,
)
from .escpos.commands import (  # noqa: E402
    BarcodeHRI,
    BarcodeType,
    Density,
    DotMode,
    ErrorStatus,
    Font,
    Justification,
    OfflineStatus,
    PaperSensorStatus,
    PrinterStatus,
    StatusClass,
)
from .escpos.raster import Bitmap, GrayBitmap, RowBlock, rasterize  # noqa: E402
from .transport import (  # noqa: E402
    DeviceTransport,
    HealingTransport,
    SocketTransport,
    Transport,
    dial_address,
    dial_device,
)
from .printer import DEFAULT_PRINTER_ADDRESS, Printer, open_printer  # noqa: E402

__all__ = [
    # Version metadata
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Utilities
    "get_logger",
    "load_config",
    # Errors
    "PrinterError",
    "CommandValidationError",
    "TransportError",
    "RedialError",
    # Enumerations
    "BarcodeHRI",
    "BarcodeType",
    "Density",
    "DotMode",
    "Font",
    "Justification",
    "StatusClass",
    # Status records
    "PrinterStatus",
    "OfflineStatus",
    "ErrorStatus",
    "PaperSensorStatus",
    # Rasterizer
    "Bitmap",
    "GrayBitmap",
    "RowBlock",
    "rasterize",
    # Transport
    "Transport",
    "SocketTransport",
    "DeviceTransport",
    "HealingTransport",
    "dial_address",
    "dial_device",
    # Session
    "DEFAULT_PRINTER_ADDRESS",
    "Printer",
    "open_printer",
]

# =============================================================================
# PACKAGE INITIALIZATION
# =============================================================================

_setup_logging()

_logger = get_logger(__name__)
_logger.debug(f"hoinprint v{__version__} initialized")
_logger.debug(f"Python version: {sys.version}")
