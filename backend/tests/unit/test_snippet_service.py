"""Unit tests for the SnippetService lifecycle: upsert, read gate, password gate."""

from datetime import date, timedelta

import pytest

from snipshare.application.schemas import SnippetUpsert
from snipshare.application.services import SnippetService, UpsertOutcome
from snipshare.domain.entities import Snippet, Visibility
from snipshare.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidInputError,
    InvalidSnippetStateError,
    SnippetExpiredError,
    UnauthorizedError,
)
from tests.fakes import FakeSnippetRepository, FixedClock, fast_hasher

TODAY = date(2030, 6, 15)


def _payload(**overrides) -> SnippetUpsert:
    fields = {
        "id": "abc123",
        "language": "python",
        "name": "t",
        "code": "print(1)",
        "expiry": "2099-01-01",
    }
    fields.update(overrides)
    return SnippetUpsert(**fields)


@pytest.fixture
def repository() -> FakeSnippetRepository:
    return FakeSnippetRepository()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def service(repository: FakeSnippetRepository, clock: FixedClock) -> SnippetService:
    return SnippetService(repository, fast_hasher(), clock=clock)


# ── Upsert ──


@pytest.mark.asyncio
async def test_create_then_fetch_returns_same_fields(service: SnippetService):
    result = await service.upsert_snippet(_payload(visibility="private"))
    assert result.outcome is UpsertOutcome.CREATED

    view = await service.get_snippet("abc123")
    snippet = view.snippet
    assert snippet.name == "t"
    assert snippet.code == "print(1)"
    assert snippet.language == "python"
    assert snippet.visibility is Visibility.PRIVATE
    assert snippet.expiry == "2099-01-01"
    assert view.redacted is False


@pytest.mark.asyncio
async def test_create_twice_updates_in_place(service: SnippetService, repository: FakeSnippetRepository):
    await service.upsert_snippet(_payload(code="print(1)"))
    second = await service.upsert_snippet(_payload(code="print(2)"))

    assert second.outcome is UpsertOutcome.UPDATED
    assert len(repository.snippets) == 1
    view = await service.get_snippet("abc123")
    assert view.snippet.code == "print(2)"


@pytest.mark.asyncio
async def test_visibility_defaults_to_public(service: SnippetService):
    result = await service.upsert_snippet(_payload())
    assert result.snippet.visibility is Visibility.PUBLIC


@pytest.mark.asyncio
async def test_update_overwrites_description_and_visibility(service: SnippetService):
    await service.upsert_snippet(_payload(description="first", visibility="private"))
    result = await service.upsert_snippet(_payload())
    assert result.snippet.description is None
    assert result.snippet.visibility is Visibility.PUBLIC


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["id", "language", "name", "code", "expiry"])
async def test_missing_required_field_is_rejected_before_storage(
    service: SnippetService, repository: FakeSnippetRepository, missing: str
):
    with pytest.raises(InvalidInputError) as exc_info:
        await service.upsert_snippet(_payload(**{missing: None}))
    assert missing in exc_info.value.fields
    assert repository.insert_calls == 0


@pytest.mark.asyncio
async def test_blank_required_field_is_rejected(service: SnippetService):
    with pytest.raises(InvalidInputError):
        await service.upsert_snippet(_payload(name="   "))


@pytest.mark.asyncio
async def test_create_without_password_is_unprotected(service: SnippetService):
    result = await service.upsert_snippet(_payload())
    assert result.snippet.is_protected is False
    assert result.snippet.password_hash is None


@pytest.mark.asyncio
async def test_create_with_password_stores_hash_not_plaintext(service: SnippetService):
    result = await service.upsert_snippet(_payload(password="hunter2"))
    assert result.snippet.is_protected is True
    assert result.snippet.password_hash
    assert result.snippet.password_hash != "hunter2"


@pytest.mark.asyncio
async def test_update_without_password_keeps_existing_hash(service: SnippetService):
    created = await service.upsert_snippet(_payload(password="hunter2"))
    updated = await service.upsert_snippet(_payload(code="print(2)"))

    assert updated.snippet.is_protected is True
    assert updated.snippet.password_hash == created.snippet.password_hash
    result = await service.verify_password("abc123", "hunter2")
    assert result.verified is True


@pytest.mark.asyncio
async def test_update_with_new_password_rehashes(service: SnippetService):
    await service.upsert_snippet(_payload(password="old"))
    await service.upsert_snippet(_payload(password="new"))

    assert (await service.verify_password("abc123", "new")).verified is True
    with pytest.raises(UnauthorizedError):
        await service.verify_password("abc123", "old")


@pytest.mark.asyncio
async def test_concurrent_first_create_is_retried_as_update(
    service: SnippetService, repository: FakeSnippetRepository
):
    repository.race_on_next_insert = Snippet(
        id="abc123", name="other", code="print(0)", language="go", expiry="2099-01-01"
    )

    result = await service.upsert_snippet(_payload(code="print(1)"))

    assert result.outcome is UpsertOutcome.UPDATED
    assert repository.snippets["abc123"].code == "print(1)"
    assert repository.snippets["abc123"].language == "python"


# ── Read gate ──


@pytest.mark.asyncio
async def test_fetch_unknown_id_raises_not_found(service: SnippetService):
    with pytest.raises(EntityNotFoundError):
        await service.get_snippet("missing")


@pytest.mark.asyncio
async def test_fetch_without_id_raises_invalid_input(service: SnippetService):
    with pytest.raises(InvalidInputError):
        await service.get_snippet("")


@pytest.mark.asyncio
async def test_fetch_expired_yesterday(service: SnippetService):
    yesterday = (TODAY - timedelta(days=1)).isoformat()
    await service.upsert_snippet(_payload(expiry=yesterday))
    with pytest.raises(SnippetExpiredError):
        await service.get_snippet("abc123")


@pytest.mark.asyncio
async def test_fetch_expiring_tomorrow_succeeds(service: SnippetService):
    tomorrow = (TODAY + timedelta(days=1)).isoformat()
    await service.upsert_snippet(_payload(expiry=tomorrow))
    view = await service.get_snippet("abc123")
    assert view.snippet.id == "abc123"


@pytest.mark.asyncio
async def test_fetch_on_expiry_day_succeeds(service: SnippetService):
    await service.upsert_snippet(_payload(expiry=TODAY.isoformat()))
    view = await service.get_snippet("abc123")
    assert view.snippet.expiry == TODAY.isoformat()


@pytest.mark.asyncio
async def test_expiry_checked_before_protection(service: SnippetService):
    await service.upsert_snippet(_payload(expiry="2000-01-01", password="secret"))
    with pytest.raises(SnippetExpiredError):
        await service.get_snippet("abc123")


@pytest.mark.asyncio
async def test_unparsable_expiry_raises_invalid_state(service: SnippetService):
    await service.upsert_snippet(_payload(expiry="none"))
    with pytest.raises(InvalidSnippetStateError):
        await service.get_snippet("abc123")


@pytest.mark.asyncio
async def test_protected_snippet_returned_in_full_by_default(service: SnippetService):
    await service.upsert_snippet(_payload(password="secret"))
    view = await service.get_snippet("abc123")
    assert view.redacted is False
    assert view.snippet.code == "print(1)"


@pytest.mark.asyncio
async def test_protected_snippet_redacted_when_enabled(repository: FakeSnippetRepository, clock: FixedClock):
    service = SnippetService(repository, fast_hasher(), clock=clock, redact_protected=True)
    await service.upsert_snippet(_payload(password="secret"))
    await service.upsert_snippet(_payload(id="open1"))

    assert (await service.get_snippet("abc123")).redacted is True
    assert (await service.get_snippet("open1")).redacted is False


# ── Password gate ──


@pytest.mark.asyncio
async def test_verify_correct_password_returns_snippet(service: SnippetService):
    await service.upsert_snippet(_payload(password="secret"))
    result = await service.verify_password("abc123", "secret")
    assert result.verified is True
    assert result.snippet is not None
    assert result.snippet.code == "print(1)"


@pytest.mark.asyncio
async def test_verify_wrong_password_raises_unauthorized(service: SnippetService):
    await service.upsert_snippet(_payload(password="secret"))
    with pytest.raises(UnauthorizedError):
        await service.verify_password("abc123", "guess")


@pytest.mark.asyncio
async def test_verify_unprotected_snippet_is_vacuous(service: SnippetService):
    await service.upsert_snippet(_payload())
    result = await service.verify_password("abc123", "anything")
    assert result.verified is True
    assert result.snippet is None


@pytest.mark.asyncio
async def test_verify_unknown_id_raises_not_found(service: SnippetService):
    with pytest.raises(EntityNotFoundError):
        await service.verify_password("missing", "secret")


@pytest.mark.asyncio
@pytest.mark.parametrize("snippet_id,password", [(None, "secret"), ("abc123", None), ("abc123", "")])
async def test_verify_requires_id_and_password(service: SnippetService, snippet_id, password):
    with pytest.raises(InvalidInputError):
        await service.verify_password(snippet_id, password)


@pytest.mark.asyncio
async def test_clear_password_removes_protection(service: SnippetService):
    await service.upsert_snippet(_payload(password="secret"))

    snippet = await service.clear_password("abc123", "secret")

    assert snippet.is_protected is False
    assert snippet.password_hash is None
    result = await service.verify_password("abc123", "anything")
    assert result.snippet is None


@pytest.mark.asyncio
async def test_clear_password_requires_current_password(service: SnippetService):
    await service.upsert_snippet(_payload(password="secret"))
    with pytest.raises(UnauthorizedError):
        await service.clear_password("abc123", "wrong")
    view = await service.get_snippet("abc123")
    assert view.snippet.is_protected is True


class ConflictingRepository(FakeSnippetRepository):
    """Insert always loses a race whose winner is never visible to reads."""

    async def insert(self, snippet: Snippet) -> Snippet:
        self.insert_calls += 1
        raise DuplicateEntityError("Snippet", "id", snippet.id)


@pytest.mark.asyncio
async def test_unresolvable_conflict_propagates(clock: FixedClock):
    repository = ConflictingRepository()
    service = SnippetService(repository, fast_hasher(), clock=clock)

    with pytest.raises(DuplicateEntityError):
        await service.upsert_snippet(_payload())
    assert repository.insert_calls == 1
    assert repository.snippets == {}


@pytest.mark.asyncio
async def test_verify_rejects_expired_snippet_when_redacting(repository: FakeSnippetRepository, clock: FixedClock):
    service = SnippetService(repository, fast_hasher(), clock=clock, redact_protected=True)
    await service.upsert_snippet(_payload(expiry="2000-01-01", password="secret"))

    with pytest.raises(SnippetExpiredError):
        await service.verify_password("abc123", "secret")


@pytest.mark.asyncio
async def test_verify_ignores_expiry_without_redaction(service: SnippetService):
    await service.upsert_snippet(_payload(expiry="2000-01-01", password="secret"))
    result = await service.verify_password("abc123", "secret")
    assert result.snippet is not None
