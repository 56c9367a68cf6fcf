from .password_hasher import PasswordHasher
from .snippet_repository import SnippetRepository

__all__ = [
    "PasswordHasher",
    "SnippetRepository",
]
