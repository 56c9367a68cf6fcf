from .share_link_builder import ShareLinkBuilder
from .snippet_service import (
    SnippetService,
    SnippetView,
    UpsertOutcome,
    UpsertResult,
    VerificationResult,
    utc_today,
)

__all__ = [
    "ShareLinkBuilder",
    "SnippetService",
    "SnippetView",
    "UpsertOutcome",
    "UpsertResult",
    "VerificationResult",
    "utc_today",
]
