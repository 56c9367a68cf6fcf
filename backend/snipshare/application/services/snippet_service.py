"""Application service (use case) for the snippet lifecycle.

Owns the upsert-by-id rule, the expiry read gate and the password gate.
Storage and hashing are injected as ports.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum

from snipshare.application.interfaces import PasswordHasher, SnippetRepository
from snipshare.application.schemas import SnippetUpsert
from snipshare.domain.entities import Snippet, Visibility
from snipshare.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidInputError,
    SnippetExpiredError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("id", "language", "name", "code", "expiry")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class UpsertOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"


@dataclass
class UpsertResult:
    snippet: Snippet
    outcome: UpsertOutcome


@dataclass
class VerificationResult:
    """Outcome of a password check.

    ``snippet`` is None when the snippet was never protected and nothing
    had to be compared.
    """

    verified: bool
    snippet: Snippet | None = None


@dataclass
class SnippetView:
    """What a fetch returns: the snippet, and whether its body is withheld."""

    snippet: Snippet
    redacted: bool = False


class SnippetService:
    """Orchestrates snippet business logic. Depends on the repository and hasher ports (DI)."""

    def __init__(
        self,
        repository: SnippetRepository,
        hasher: PasswordHasher,
        clock: Callable[[], date] = utc_today,
        redact_protected: bool = False,
    ):
        self._repository = repository
        self._hasher = hasher
        self._clock = clock
        self._redact_protected = redact_protected

    # ── Create / update ──────────────────────────────────────────────

    async def upsert_snippet(self, data: SnippetUpsert) -> UpsertResult:
        """Insert a snippet for an unknown id, otherwise overwrite it in place."""
        missing = [name for name in _REQUIRED_FIELDS if not _present(getattr(data, name))]
        if missing:
            raise InvalidInputError.missing(missing)

        existing = await self._repository.get_by_id(data.id)
        if existing is not None:
            return await self._update(existing, data)

        snippet = Snippet(
            id=data.id,
            name=data.name,
            code=data.code,
            language=data.language,
            expiry=data.expiry,
            description=data.description,
            visibility=data.visibility or Visibility.PUBLIC,
        )
        if data.password:
            snippet.set_password_hash(self._hasher.hash(data.password))

        try:
            created = await self._repository.insert(snippet)
        except DuplicateEntityError:
            # Another request created the same id between lookup and insert.
            logger.warning("Snippet '%s' was created concurrently; retrying as update", data.id)
            existing = await self._repository.get_by_id(data.id)
            if existing is None:
                raise
            return await self._update(existing, data)

        logger.info("Created snippet '%s' (protected=%s)", created.id, created.is_protected)
        return UpsertResult(snippet=created, outcome=UpsertOutcome.CREATED)

    async def _update(self, existing: Snippet, data: SnippetUpsert) -> UpsertResult:
        existing.update(
            name=data.name,
            code=data.code,
            language=data.language,
            expiry=data.expiry,
            description=data.description,
            visibility=data.visibility or Visibility.PUBLIC,
        )
        fields = {
            "name": existing.name,
            "code": existing.code,
            "language": existing.language,
            "expiry": existing.expiry,
            "description": existing.description,
            "visibility": existing.visibility,
        }
        # Omitting the password keeps the previous hash and protection state.
        if data.password:
            existing.set_password_hash(self._hasher.hash(data.password))
            fields["password_hash"] = existing.password_hash
            fields["is_protected"] = True

        updated = await self._repository.update_by_id(existing.id, fields)
        logger.info("Updated snippet '%s'", updated.id)
        return UpsertResult(snippet=updated, outcome=UpsertOutcome.UPDATED)

    # ── Read gate ────────────────────────────────────────────────────

    async def get_snippet(self, snippet_id: str | None) -> SnippetView:
        """Fetch a snippet that has not expired.

        Raises:
            InvalidInputError: no id given.
            EntityNotFoundError: unknown id.
            SnippetExpiredError: today is past the expiry date.
            InvalidSnippetStateError: the stored expiry does not parse.
        """
        if not _present(snippet_id):
            raise InvalidInputError("No id mentioned", fields=["id"])

        snippet = await self._find(snippet_id)
        if snippet.is_expired(self._clock()):
            logger.info("Rejected read of expired snippet '%s'", snippet_id)
            raise SnippetExpiredError(snippet_id)

        if self._redact_protected and snippet.is_protected:
            return SnippetView(snippet=snippet, redacted=True)
        return SnippetView(snippet=snippet)

    # ── Password gate ────────────────────────────────────────────────

    async def verify_password(self, snippet_id: str | None, password: str | None) -> VerificationResult:
        if not _present(snippet_id):
            raise InvalidInputError("Snippet ID required", fields=["id"])
        if not password:
            raise InvalidInputError("Password required", fields=["password"])

        snippet = await self._find(snippet_id)
        # With redaction on, verify is the only way to read a protected body,
        # so it must honour expiry like a fetch does.
        if self._redact_protected and snippet.is_expired(self._clock()):
            raise SnippetExpiredError(snippet_id)
        if not snippet.password_hash:
            return VerificationResult(verified=True)

        if not self._hasher.verify(password, snippet.password_hash):
            logger.info("Password verification failed for snippet '%s'", snippet_id)
            raise UnauthorizedError()
        return VerificationResult(verified=True, snippet=snippet)

    async def clear_password(self, snippet_id: str | None, password: str | None) -> Snippet:
        """Remove password protection after confirming the current password."""
        result = await self.verify_password(snippet_id, password)
        if result.snippet is None:
            return await self._find(snippet_id)

        updated = await self._repository.update_by_id(
            snippet_id, {"password_hash": None, "is_protected": False}
        )
        logger.info("Cleared password protection on snippet '%s'", snippet_id)
        return updated

    async def _find(self, snippet_id: str) -> Snippet:
        snippet = await self._repository.get_by_id(snippet_id)
        if snippet is None:
            raise EntityNotFoundError("Snippet", snippet_id)
        return snippet


def _present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True
