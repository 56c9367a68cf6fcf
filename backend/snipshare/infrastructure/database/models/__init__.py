from .snippet import SnippetModel

__all__ = [
    "SnippetModel",
]
