"""Public document model accepted by the ingestion endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from docsearch.core.exceptions import ValidationError
from docsearch.core.serde import check_language, decompose_uri


def _language(value: str) -> str:
    try:
        return check_language(value)
    except ValidationError as e:
        raise ValueError(str(e)) from e


def _path(value: str) -> str:
    try:
        decompose_uri(value)
    except ValidationError as e:
        raise ValueError(str(e)) from e
    return value


class DocumentBase(BaseModel):
    """Fields shared by document create and update payloads.

    Unknown keys are rejected.  ``tags`` and the custom fields accept either
    a comma-delimited string or a list; the codec normalizes both.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str | None = Field(default=None, description="Document title (HTML is stripped)")
    description: str | None = Field(default=None, description="Document summary (HTML is stripped)")
    content: str | None = Field(default=None, description="Document body (HTML is stripped)")
    tags: str | list[str] | None = Field(default=None, description="Tags, comma-delimited or as a list")
    searchgov_custom1: str | list[str] | None = Field(default=None, description="Custom facet field 1")
    searchgov_custom2: str | list[str] | None = Field(default=None, description="Custom facet field 2")
    searchgov_custom3: str | list[str] | None = Field(default=None, description="Custom facet field 3")
    created: datetime | None = Field(default=None, description="When the document was first published")
    changed: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("changed", "updated"),
        description="When the document was last modified (``updated`` is accepted as an alias)",
    )
    promote: bool | None = Field(default=None, description="Boost this document in relevance ranking")

    def to_fields(self) -> dict[str, Any]:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class DocumentCreate(DocumentBase):
    """Payload for ``POST /documents``."""

    document_id: str = Field(min_length=1, max_length=512, description="Client-chosen document identifier")
    language: str = Field(description="ISO language code of the text fields")
    path: str = Field(description="Absolute URL of the document")
    title: str = Field(min_length=1, description="Document title (HTML is stripped)")
    promote: bool = Field(default=False, description="Boost this document in relevance ranking")

    @field_validator("language")
    @classmethod
    def _check_language(cls, v: str) -> str:
        return _language(v)

    @field_validator("path")
    @classmethod
    def _check_path(cls, v: str) -> str:
        return _path(v)

    def to_fields(self) -> dict[str, Any]:
        fields = self.model_dump(exclude_none=True)
        fields.pop("document_id")
        return fields


class DocumentUpdate(DocumentBase):
    """Payload for ``PUT /documents/{document_id}``; every field optional."""

    language: str | None = Field(default=None, description="ISO language code of the text fields")
    path: str | None = Field(default=None, description="Absolute URL of the document")

    @field_validator("language")
    @classmethod
    def _check_language(cls, v: str | None) -> str | None:
        return _language(v) if v is not None else v

    @field_validator("path")
    @classmethod
    def _check_path(cls, v: str | None) -> str | None:
        return _path(v) if v is not None else v
