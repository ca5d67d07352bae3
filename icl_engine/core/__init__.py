"""
ICL Engine - Core Module

This module provides the core infrastructure for the ICL Engine:
configuration management and the exception hierarchy.
"""

from .exceptions import (
    ICLException,
    ConfigurationException,
    FieldError,
    BundleError,
    CashLetterError,
    FileError,
    ParseError,
)
from .config import ICLConfig, get_config, set_config, load_config

__all__ = [
    "ICLException",
    "ConfigurationException",
    "FieldError",
    "BundleError",
    "CashLetterError",
    "FileError",
    "ParseError",
    "ICLConfig",
    "get_config",
    "set_config",
    "load_config",
]
