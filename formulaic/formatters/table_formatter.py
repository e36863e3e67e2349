"""Table output formatter using Rich."""

import json
from typing import Any, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from ..models import FileInfo, ModelInfo
from .base import BaseFormatter


class TableFormatter(BaseFormatter):
    """Formats output as Rich tables."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the table formatter.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console(width=200)

    def format_models(self, models: List[ModelInfo], **kwargs: Any) -> str:
        table = Table(title="Formulaic Models", box=box.SIMPLE_HEAVY)
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name", style="white", no_wrap=False, overflow="ellipsis", max_width=40)
        table.add_column("Provider", style="magenta")

        for model in models:
            table.add_row(model.id, model.name or "—", model.provider or "—")
        return self._render(table)

    def format_files(self, files: List[FileInfo], **kwargs: Any) -> str:
        table = Table(title=kwargs.get("title", "Files"), box=box.SIMPLE_HEAVY)
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Size", justify="right")
        table.add_column("Created")

        for f in files:
            table.add_row(
                f.id,
                f.name or "—",
                self._fmt_size(f.size),
                f.created_at or "—",
            )
        return self._render(table)

    def format_result(self, result: Any, **kwargs: Any) -> str:
        """Render a mapping as a key/value table; anything else as JSON."""
        if not isinstance(result, dict):
            return json.dumps(result, indent=2, default=str) + "\n"

        table = Table(title=kwargs.get("title"), box=box.SIMPLE_HEAVY, show_header=False)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value", overflow="fold")
        for key, value in result.items():
            if isinstance(value, (dict, list)):
                value = json.dumps(value, default=str)
            table.add_row(str(key), str(value))
        return self._render(table)

    def _render(self, table: Table) -> str:
        with self.console.capture() as capture:
            self.console.print(table)
        return capture.get()

    @staticmethod
    def _fmt_size(size: Optional[int]) -> str:
        if size is None:
            return "—"
        if size >= 1024 * 1024:
            return f"{size / (1024 * 1024):.1f} MB"
        if size >= 1024:
            return f"{size / 1024:.1f} KB"
        return f"{size} B"
