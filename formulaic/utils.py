"""Shared helpers for the command line."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

from .client import FormulaicClient
from .config import Config
from .formatters import JsonFormatter, TableFormatter


def configure_logging(level: Optional[str], default_to_warning: bool = False) -> None:
    """Install a rich stderr handler at ``level``.

    With no level given, logging is left alone unless ``default_to_warning``
    is set, in which case WARNING is used. An already configured root logger
    keeps its handlers; only the package logger level changes.
    """
    if level is None and not default_to_warning:
        return
    numeric = getattr(logging, (level or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger("formulaic").setLevel(numeric)


def load_config(
    config_file: Optional[Path] = None,
    base_url: Optional[str] = None,
    debug: Optional[bool] = None,
) -> Config:
    return Config.from_sources(config_file, base_url=base_url, debug=debug or None)


def create_command_dependencies(
    config: Config,
) -> Tuple[FormulaicClient, TableFormatter, JsonFormatter]:
    """Build the client and formatters used by CLI commands."""
    client = FormulaicClient.from_config(config)
    return client, TableFormatter(), JsonFormatter()
