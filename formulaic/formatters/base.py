"""Base formatter abstract class."""

from abc import ABC, abstractmethod
from typing import Any, List

from ..models import FileInfo, ModelInfo


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format_models(self, models: List[ModelInfo], **kwargs: Any) -> str:
        """Format a list of models for output.

        Args:
            models: List of ModelInfo objects to format
            **kwargs: Additional formatting options

        Returns:
            Formatted string ready for output
        """

    @abstractmethod
    def format_files(self, files: List[FileInfo], **kwargs: Any) -> str:
        """Format the files attached to a formula."""

    @abstractmethod
    def format_result(self, result: Any, **kwargs: Any) -> str:
        """Format an arbitrary API response (formula, artifact, chat reply)."""
