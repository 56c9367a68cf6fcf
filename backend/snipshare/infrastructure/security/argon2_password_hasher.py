"""Password hashing adapter using Argon2id (argon2-cffi)."""

import logging

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import VerifyMismatchError

from snipshare.application.interfaces import PasswordHasher

logger = logging.getLogger(__name__)


class Argon2PasswordHasher(PasswordHasher):
    """Implements the PasswordHasher port with argon2-cffi.

    argon2 generates a fresh random salt for every hash, so hashing the same
    password twice yields two different digests that both verify.
    """

    def __init__(self, hasher: _Argon2Hasher | None = None):
        self._hasher = hasher or _Argon2Hasher()

    def hash(self, plaintext: str) -> str:
        if not plaintext:
            raise ValueError("Password must not be empty")
        return self._hasher.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        """Verify a password against a digest using constant-time comparison.

        Returns False on a mismatch and on any other failure, e.g. a digest
        that is not an argon2 hash.
        """
        if not plaintext or not digest:
            return False
        try:
            return self._hasher.verify(digest, plaintext)
        except VerifyMismatchError:
            return False
        except Exception as exc:
            logger.warning("Password verification error: %s", type(exc).__name__)
            return False
