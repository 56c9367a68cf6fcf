"""Pydantic DTOs (Data Transfer Objects) for the Snippet feature.

Request bodies accept the field names used by older clients
(``uuid``, ``lang``, ``pass``, ``desc``) alongside the current ones.
Responses are serialized in camelCase.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from snipshare.domain.entities import Visibility


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SnippetUpsert(BaseModel):
    """Schema for creating or updating a snippet.

    Required-field checks happen in the service so that a missing field is
    reported the same way whichever client sent it.
    """

    id: str | None = Field(None, max_length=64, validation_alias=AliasChoices("id", "uuid"), examples=["abc123"])
    language: str | None = Field(None, max_length=64, validation_alias=AliasChoices("language", "lang"), examples=["python"])
    name: str | None = Field(None, max_length=255, examples=["hello"])
    code: str | None = Field(None, examples=["print(1)"])
    expiry: str | None = Field(None, max_length=64, examples=["2099-01-01"])
    description: str | None = Field(None, validation_alias=AliasChoices("description", "desc"))
    visibility: Visibility | None = None
    password: str | None = Field(None, validation_alias=AliasChoices("password", "pass"))

    model_config = ConfigDict(populate_by_name=True)


class PasswordRequest(BaseModel):
    """Schema for verify-password and clear-password requests."""

    id: str | None = None
    password: str | None = None


class SnippetResponse(_CamelModel):
    """Full snippet as returned to the client. Never carries the password hash."""

    id: str
    name: str
    description: str | None
    code: str
    visibility: Visibility
    expiry: str
    language: str
    is_protected: bool
    created_at: datetime
    updated_at: datetime


class SnippetPreview(_CamelModel):
    """Metadata-only view of a protected snippet, returned when redaction is on."""

    id: str
    name: str
    visibility: Visibility
    expiry: str
    language: str
    is_protected: bool
    created_at: datetime
    updated_at: datetime


class ShareLinks(_CamelModel):
    url: str
    qr_code_url: str


class SnippetEnvelope(_CamelModel):
    success: bool = True
    snippet: SnippetResponse | SnippetPreview


class UpsertEnvelope(_CamelModel):
    success: bool = True
    outcome: str
    snippet: SnippetResponse
    share: ShareLinks


class VerifyPasswordEnvelope(_CamelModel):
    """``snippet`` is only present when a password was actually checked."""

    success: bool = True
    snippet: SnippetResponse | None = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
