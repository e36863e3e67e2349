"""Data models for the Formulaic SDK using Pydantic for validation."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompletionData(BaseModel):
    """Payload of an artifact (completion) request.

    ``models`` and ``variables`` default to empty lists; any value that is not
    a list is replaced by an empty list rather than rejected. Other keys pass
    through untouched.
    """

    model_config = ConfigDict(extra="allow")

    models: List[Any] = Field(default_factory=list, description="Model identifiers or objects")
    variables: List[Any] = Field(default_factory=list, description="Formula variable values")

    @field_validator("models", "variables", mode="before")
    @classmethod
    def coerce_to_list(cls, v: Any) -> List[Any]:
        """Replace absent or non-list values with an empty list."""
        if isinstance(v, (list, tuple)):
            return list(v)
        return []

    def to_body(self) -> Dict[str, Any]:
        """Return the request body with normalized ``models``/``variables``."""
        return self.model_dump()


class ChatMessage(BaseModel):
    """A single chat message."""

    model_config = ConfigDict(extra="allow")

    role: str = Field(default="user", description="Message author role")
    content: str = Field(..., description="Message text")


class ModelInfo(BaseModel):
    """Information about a model offered by the API."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str = Field(..., description="Unique model identifier")
    name: Optional[str] = Field(None, description="Human-readable model name")
    provider: Optional[str] = Field(None, description="Model vendor")


class FileInfo(BaseModel):
    """Metadata of a file attached to a formula."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True, populate_by_name=True)

    id: str = Field(..., description="File identifier")
    name: Optional[str] = Field(None, description="File name")
    size: Optional[int] = Field(None, ge=0, description="Size in bytes")
    created_at: Optional[str] = Field(
        None, alias="createdAt", description="Creation timestamp"
    )
