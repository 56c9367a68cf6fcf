from .snippet_repository import SQLAlchemySnippetRepository

__all__ = [
    "SQLAlchemySnippetRepository",
]
