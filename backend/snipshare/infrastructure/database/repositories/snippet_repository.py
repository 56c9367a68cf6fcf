"""Concrete repository implementation for Snippet backed by SQLAlchemy."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snipshare.application.interfaces import SnippetRepository
from snipshare.domain.entities import Snippet, Visibility
from snipshare.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from snipshare.infrastructure.database.models import SnippetModel

_UPDATABLE_FIELDS = frozenset({
    "name",
    "description",
    "code",
    "visibility",
    "expiry",
    "language",
    "password_hash",
    "is_protected",
})


def _as_utc(value: datetime) -> datetime:
    """SQLite drops the offset on read; stored values are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SQLAlchemySnippetRepository(SnippetRepository):
    """Implements the SnippetRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: SnippetModel) -> Snippet:
        """Map ORM model → domain entity."""
        return Snippet(
            id=model.id,
            name=model.name,
            description=model.description,
            code=model.code,
            visibility=Visibility(model.visibility),
            expiry=model.expiry,
            language=model.language,
            password_hash=model.password_hash,
            is_protected=model.is_protected,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _to_values(self, entity: Snippet) -> dict[str, Any]:
        """Map domain entity → column values (for creation)."""
        return {
            "id": entity.id,
            "name": entity.name,
            "description": entity.description,
            "code": entity.code,
            "visibility": Visibility(entity.visibility).value,
            "expiry": entity.expiry,
            "language": entity.language,
            "password_hash": entity.password_hash,
            "is_protected": entity.is_protected,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    async def get_by_id(self, snippet_id: str) -> Snippet | None:
        result = await self._session.get(SnippetModel, snippet_id)
        return self._to_entity(result) if result else None

    async def insert(self, snippet: Snippet) -> Snippet:
        # Plain INSERT inside a SAVEPOINT: the primary key decides races, and a
        # conflict leaves the surrounding request transaction usable.
        try:
            async with self._session.begin_nested():
                await self._session.execute(insert(SnippetModel).values(**self._to_values(snippet)))
        except IntegrityError as exc:
            raise DuplicateEntityError("Snippet", "id", snippet.id) from exc

        model = await self._session.get(SnippetModel, snippet.id)
        return self._to_entity(model)

    async def update_by_id(self, snippet_id: str, fields: dict[str, Any]) -> Snippet:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update snippet fields: {', '.join(sorted(unknown))}")

        model = await self._session.get(SnippetModel, snippet_id)
        if model is None:
            raise EntityNotFoundError("Snippet", snippet_id)

        for name, value in fields.items():
            if name == "visibility":
                value = Visibility(value).value
            setattr(model, name, value)
        model.updated_at = datetime.now(timezone.utc)
        await self._session.flush()
        return self._to_entity(model)
