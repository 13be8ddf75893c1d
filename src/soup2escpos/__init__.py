"""
soup2escpos
===========

Markup-to-ESC/POS encoder for thermal receipt printers.

This package provides:
    - A small XML-like tag vocabulary (bold, underline, alignment, sizing)
    - Native printer barcodes (UPC-A, EAN-13, EAN-8, Code 39) with HRI options
    - Raster image printing (GS v 0) from PNG and other Pillow-readable files
    - A command-line tool that turns a markup file into the raw byte stream

Basic usage:
    >>> from soup2escpos import encode
    >>> encode(b"<b>Hi</b>")
    b'\\x1bE\\x01Hi\\x1bE\\x00'

Streaming usage:
    >>> import sys
    >>> from soup2escpos import encode_to
    >>> with open("receipt.xml", "rb") as src:
    ...     encode_to(src, sys.stdout.buffer)

Configuration:
    >>> import os
    >>> os.environ["SOUP2ESCPOS_LOG_LEVEL"] = "DEBUG"
    >>>
    >>> from soup2escpos import load_config, get_logger
    >>> config = load_config()
    >>> config["text_encoding"]
    'utf-8'

License: MIT
Python: 3.9+
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

__version__ = "0.6.0"
__author__ = "soup2escpos developers"
__description__ = "Convert XML-like receipt markup into ESC/POS printer commands"
__license__ = "MIT"

VERSION_MAJOR = 0
VERSION_MINOR = 6
VERSION_PATCH = 0

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

_ROOT_LOGGER_NAME = "soup2escpos"


def _setup_logging() -> None:
    """
    Initialize package-wide logging configuration.

    Configures the ``soup2escpos`` logger with:
    - A console handler (stderr); stdout is reserved for printer bytes
    - An optional rotating file handler when ``SOUP2ESCPOS_LOG_FILE`` is set
    - A structured format with timestamp, level, module and message

    The level is read from ``SOUP2ESCPOS_LOG_LEVEL``. Accepted values:
    DEBUG, INFO, WARNING, ERROR, CRITICAL

    Idempotent: repeated calls have no additional effect.
    """
    log_level_str = os.environ.get("SOUP2ESCPOS_LOG_LEVEL", "WARNING").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.WARNING)

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = os.environ.get("SOUP2ESCPOS_LOG_FILE")
    if log_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                f"Could not initialize file logging: {e}. Logging to console only."
            )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for the given module under the ``soup2escpos`` namespace.

    Args:
        module_name: Name of the requesting module, usually ``__name__``.

    Returns:
        A ``logging.Logger`` that inherits the package handlers.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Encoding tag %s", "center")
    """
    if not module_name.startswith(_ROOT_LOGGER_NAME):
        if module_name == "__main__":
            full_name = f"{_ROOT_LOGGER_NAME}.main"
        else:
            clean_name = module_name.lstrip(".")
            full_name = f"{_ROOT_LOGGER_NAME}.{clean_name}"
    else:
        full_name = module_name

    return logging.getLogger(full_name)


# =============================================================================
# CONFIGURATION
# =============================================================================

DEFAULT_CONFIG_FILENAME = "soup2escpos.json"

_DEFAULT_CONFIG: Dict[str, Any] = {
    "text_encoding": "utf-8",
    "paper_width_inches": 2,
    "log_level": "WARNING",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file, falling back to defaults.

    Configuration keys:
        - text_encoding: str - Encoding used for text between tags
        - paper_width_inches: int - Printable width used to bound image width
        - log_level: str - Logging level for the package logger

    Args:
        config_path: Optional path to the configuration file.
                     If None, looks for 'soup2escpos.json' in the current directory.

    Returns:
        Dictionary with every default key present; user values override defaults.

    Example:
        >>> config = load_config()
        >>> config["paper_width_inches"]
        2
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILENAME)

    config = _DEFAULT_CONFIG.copy()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Configuration file must contain a JSON object, "
                    f"got {type(user_config).__name__}"
                )

            config.update(user_config)

            logger.info(f"Configuration loaded from {config_path}")
            logger.debug(f"Configuration: {config}")

        except json.JSONDecodeError as e:
            logger.warning(
                f"Could not parse {config_path}: invalid JSON "
                f"at line {e.lineno}, column {e.colno}. "
                f"Using default configuration."
            )
        except OSError as e:
            logger.warning(f"Could not read {config_path}: {e}. Using default configuration.")
        except ValueError as e:
            logger.warning(f"Invalid configuration format: {e}. Using default configuration.")
    else:
        logger.debug(f"Configuration file {config_path} not found. Using defaults.")

    return config


# =============================================================================
# PACKAGE INITIALIZATION
# =============================================================================

# Logging must be configured before the submodules create their loggers.
_setup_logging()

from .encoder import TokenStreamEncoder, encode, encode_to  # noqa: E402
from .exceptions import EncodeError  # noqa: E402
from .tags import TAG_REGISTRY, lookup_tag  # noqa: E402

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    "get_logger",
    "load_config",
    "DEFAULT_CONFIG_FILENAME",
    "EncodeError",
    "TAG_REGISTRY",
    "lookup_tag",
    "TokenStreamEncoder",
    "encode",
    "encode_to",
]
