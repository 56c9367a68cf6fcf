from .snippet import Snippet, Visibility, parse_expiry

__all__ = [
    "Snippet",
    "Visibility",
    "parse_expiry",
]
