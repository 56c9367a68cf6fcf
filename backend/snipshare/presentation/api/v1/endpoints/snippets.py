"""Snippet endpoints — create/update, fetch, verify and clear password.

Domain errors raised by the service are turned into JSON error bodies by
the handlers in ``snipshare.presentation.api.error_handlers``.
"""

from fastapi import APIRouter, Depends, Header, Query, Response

from snipshare.application.schemas import (
    PasswordRequest,
    SnippetEnvelope,
    SnippetPreview,
    SnippetResponse,
    SnippetUpsert,
    UpsertEnvelope,
    VerifyPasswordEnvelope,
)
from snipshare.application.services import ShareLinkBuilder, SnippetService
from snipshare.infrastructure.dependencies import get_share_link_builder, get_snippet_service

router = APIRouter(tags=["Snippets"])


@router.post("/create", response_model=UpsertEnvelope)
async def create_snippet(
    data: SnippetUpsert,
    service: SnippetService = Depends(get_snippet_service),
    links: ShareLinkBuilder = Depends(get_share_link_builder),
) -> UpsertEnvelope:
    """Create a snippet, or overwrite the one that already has this id."""
    result = await service.upsert_snippet(data)
    return UpsertEnvelope(
        success=True,
        outcome=result.outcome.value,
        snippet=SnippetResponse.model_validate(result.snippet, from_attributes=True),
        share=links.build(result.snippet.id),
    )


@router.get("/snipp", response_model=SnippetEnvelope)
async def get_snippet(
    response: Response,
    header_id: str | None = Header(None, alias="id"),
    query_id: str | None = Query(None, alias="id"),
    service: SnippetService = Depends(get_snippet_service),
) -> SnippetEnvelope:
    """Fetch a snippet by the id sent in the ``id`` header (or ``?id=``)."""
    response.headers["Cache-Control"] = "no-store"
    view = await service.get_snippet(header_id or query_id)
    schema = SnippetPreview if view.redacted else SnippetResponse
    return SnippetEnvelope(
        success=True,
        snippet=schema.model_validate(view.snippet, from_attributes=True),
    )


@router.post(
    "/verify-password",
    response_model=VerifyPasswordEnvelope,
    response_model_exclude_unset=True,
)
async def verify_password(
    data: PasswordRequest,
    service: SnippetService = Depends(get_snippet_service),
) -> VerifyPasswordEnvelope:
    """Check a snippet password; on success the full snippet is returned."""
    result = await service.verify_password(data.id, data.password)
    if result.snippet is None:
        return VerifyPasswordEnvelope(success=True)
    return VerifyPasswordEnvelope(
        success=True,
        snippet=SnippetResponse.model_validate(result.snippet, from_attributes=True),
    )


@router.post("/clear-password", response_model=SnippetEnvelope)
async def clear_password(
    data: PasswordRequest,
    service: SnippetService = Depends(get_snippet_service),
) -> SnippetEnvelope:
    """Remove password protection; requires the current password."""
    snippet = await service.clear_password(data.id, data.password)
    return SnippetEnvelope(
        success=True,
        snippet=SnippetResponse.model_validate(snippet, from_attributes=True),
    )
