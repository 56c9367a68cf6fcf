"""Abstract repository interface (port) for snippet persistence."""

from abc import ABC, abstractmethod
from typing import Any

from snipshare.domain.entities import Snippet


class SnippetRepository(ABC):
    """Port for snippet persistence — implemented in the infrastructure layer.

    Snippets are keyed by their client-generated public id; there is no
    surrogate key and no delete operation.
    """

    @abstractmethod
    async def get_by_id(self, snippet_id: str) -> Snippet | None:
        """Retrieve a single snippet by its public id."""
        ...

    @abstractmethod
    async def insert(self, snippet: Snippet) -> Snippet:
        """Persist a new snippet.

        Raises:
            DuplicateEntityError: if a snippet with the same id already exists.
        """
        ...

    @abstractmethod
    async def update_by_id(self, snippet_id: str, fields: dict[str, Any]) -> Snippet:
        """Apply a partial update; fields not supplied are left unchanged.

        Raises:
            EntityNotFoundError: if no snippet has this id.
        """
        ...
