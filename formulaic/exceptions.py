"""Custom exception hierarchy for the Formulaic SDK."""

from __future__ import annotations

from typing import Optional, Union


class FormulaicError(Exception):
    """Base exception for the Formulaic SDK."""


class ValidationError(FormulaicError):
    """Bad caller input, detected before any I/O."""


class InvalidFileTypeError(FormulaicError):
    """Upload source is neither an in-memory buffer nor a path."""


class APIError(FormulaicError):
    """Transport-level errors (HTTP status or network failure)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(APIError):
    """Authentication failures (401/403)."""


class RateLimitError(APIError):
    """Rate limiting errors (429)."""


class OperationError(FormulaicError):
    """A remote operation failed.

    The message is ``"<label>: <cause>"`` so the original failure text stays
    searchable. ``status_code`` is copied from the cause when it has one.
    """

    label = "Request failed"

    def __init__(self, cause: Union[BaseException, str]):
        self.cause = cause
        self.status_code: Optional[int] = getattr(cause, "status_code", None)
        super().__init__(f"{self.label}: {cause}")


class ModelsFetchError(OperationError):
    label = "Failed to get models"


class FormulaFetchError(OperationError):
    label = "Failed to get formula"


class ScriptsFetchError(OperationError):
    label = "Failed to get scripts"


class FormulaCreateError(OperationError):
    label = "Failed to create formula"


class CompletionError(OperationError):
    label = "Failed to create completion"


class FileUploadError(OperationError):
    label = "Failed to upload file"


class FilesFetchError(OperationError):
    label = "Failed to get files"


class FileFetchError(OperationError):
    label = "Failed to get file"


class FileUpdateError(OperationError):
    label = "Failed to update file"


class FileDeleteError(OperationError):
    label = "Failed to delete file"


class ChatCompletionError(OperationError):
    label = "Failed to create chat completion"
