"""Domain entity — pure Python business object for a shared code snippet."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from snipshare.domain.exceptions import InvalidSnippetStateError


class Visibility(str, Enum):
    """Who may edit a shared snippet."""

    PUBLIC = "public"
    PRIVATE = "private"


def parse_expiry(value: str) -> date:
    """Parse a stored expiry string into a calendar date.

    Accepts a plain ISO date (``2099-01-01``) or an ISO datetime, which is
    reduced to its UTC date. Anything else is an integrity error.
    """
    raw = (value or "").strip()
    if not raw:
        raise InvalidSnippetStateError("Invalid expiry date format")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise InvalidSnippetStateError("Invalid expiry date format") from exc
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


@dataclass
class Snippet:
    """Core domain entity — one mutable record per client-generated id.

    ``is_protected`` mirrors whether ``password_hash`` is set; use
    ``set_password_hash`` / ``clear_password`` rather than assigning either
    field directly.
    """

    id: str
    name: str
    code: str
    language: str
    expiry: str
    description: str | None = None
    visibility: Visibility = Visibility.PUBLIC
    password_hash: str | None = None
    is_protected: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def expiry_date(self) -> date:
        return parse_expiry(self.expiry)

    def is_expired(self, today: date) -> bool:
        """True once ``today`` is strictly past the expiry date."""
        return today > self.expiry_date()

    def set_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self.is_protected = True

    def clear_password(self) -> None:
        self.password_hash = None
        self.is_protected = False

    def update(
        self,
        *,
        name: str,
        code: str,
        language: str,
        expiry: str,
        description: str | None,
        visibility: Visibility,
    ) -> None:
        """Overwrite every mutable field and refresh the updated_at timestamp."""
        self.name = name
        self.code = code
        self.language = language
        self.expiry = expiry
        self.description = description
        self.visibility = visibility
        self.updated_at = datetime.now(timezone.utc)
