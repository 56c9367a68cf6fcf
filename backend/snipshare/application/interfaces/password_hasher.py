"""Abstract interface (port) for one-way password hashing."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Port for hashing and verifying snippet passwords."""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        """Return a salted digest of a non-empty plaintext password.

        Raises:
            ValueError: if the plaintext is empty.
        """
        ...

    @abstractmethod
    def verify(self, plaintext: str, digest: str) -> bool:
        """Check a plaintext against a digest. Never raises."""
        ...
