"""Output formatters for the command line."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .table_formatter import TableFormatter

__all__ = ["BaseFormatter", "JsonFormatter", "TableFormatter"]
