"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from snipshare.config import get_settings
from snipshare.application.interfaces import PasswordHasher
from snipshare.application.services import ShareLinkBuilder, SnippetService
from snipshare.infrastructure.database.session import get_db_session
from snipshare.infrastructure.database.repositories import SQLAlchemySnippetRepository
from snipshare.infrastructure.security import Argon2PasswordHasher


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Process-wide hasher — argon2 parameters are fixed at construction."""
    return Argon2PasswordHasher()


def get_share_link_builder() -> ShareLinkBuilder:
    settings = get_settings()
    return ShareLinkBuilder(
        share_base_url=settings.share_base_url,
        qr_code_service_url=settings.qr_code_service_url,
        qr_code_size=settings.qr_code_size,
    )


async def get_snippet_service(
    session: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AsyncGenerator[SnippetService, None]:
    """Provides a SnippetService with its repository and hasher wired up."""
    settings = get_settings()
    repository = SQLAlchemySnippetRepository(session)
    yield SnippetService(
        repository,
        hasher,
        redact_protected=settings.redact_protected_snippets,
    )
