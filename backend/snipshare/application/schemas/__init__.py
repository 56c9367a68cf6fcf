from .snippet import (
    ErrorEnvelope,
    PasswordRequest,
    ShareLinks,
    SnippetEnvelope,
    SnippetPreview,
    SnippetResponse,
    SnippetUpsert,
    UpsertEnvelope,
    VerifyPasswordEnvelope,
)

__all__ = [
    "ErrorEnvelope",
    "PasswordRequest",
    "ShareLinks",
    "SnippetEnvelope",
    "SnippetPreview",
    "SnippetResponse",
    "SnippetUpsert",
    "UpsertEnvelope",
    "VerifyPasswordEnvelope",
]
