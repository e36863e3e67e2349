"""JSON output formatter."""

import json
from typing import Any, List

from ..models import FileInfo, ModelInfo
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Formats output as JSON."""

    def format_models(self, models: List[ModelInfo], **kwargs: Any) -> str:
        return self.format_result([m.model_dump(exclude_none=True) for m in models])

    def format_files(self, files: List[FileInfo], **kwargs: Any) -> str:
        return self.format_result([f.model_dump(exclude_none=True) for f in files])

    def format_result(self, result: Any, **kwargs: Any) -> str:
        """Format any JSON-compatible value.

        Args:
            result: Value returned by the API
            **kwargs: Additional formatting options (unused for JSON)

        Returns:
            JSON formatted string
        """
        return json.dumps(result, indent=2, default=str) + "\n"
