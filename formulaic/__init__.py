"""Formulaic - Python client for the Formulaic formula execution API."""

__version__ = "0.1.0"

from .cache import CacheManager
from .client import FormulaicClient
from .config import Config
from .exceptions import (
    APIError,
    FormulaicError,
    InvalidFileTypeError,
    OperationError,
    ValidationError,
)
from .files import BytesSource, PathSource
from .transport import HttpxTransport, Transport

# Re-export the click group as package-level entry point
from .cli import cli

__all__ = [
    "APIError",
    "BytesSource",
    "CacheManager",
    "Config",
    "FormulaicClient",
    "FormulaicError",
    "HttpxTransport",
    "InvalidFileTypeError",
    "OperationError",
    "PathSource",
    "Transport",
    "ValidationError",
    "cli",
    "__version__",
]
