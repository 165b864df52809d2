"""Password hashing using Argon2.

Provides secure password hashing and verification using the Argon2id algorithm,
which is the winner of the Password Hashing Competition and recommended by OWASP.
Hashing is deliberately slow.
"""

import secrets

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from wrappedup.domain.ports import PasswordHasher


class Argon2PasswordHasher(PasswordHasher):
    """Argon2id implementation of the password hasher port."""

    def __init__(self, hasher: _Argon2Hasher | None = None) -> None:
        self._hasher = hasher or _Argon2Hasher()
        self._dummy_hash: str | None = None

    def hash(self, plaintext: str) -> str:
        """Hash a password using Argon2id.

        Args:
            plaintext: The plaintext password to hash.

        Returns:
            The encoded hash, salt and parameters included.

        Example:
            >>> hashed = Argon2PasswordHasher().hash("SecureP@ss123!")
            >>> hashed.startswith("$argon2id$")
            True
        """
        return self._hasher.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Verify a password against a hash.

        Uses constant-time comparison to prevent timing attacks. A malformed
        stored hash counts as a mismatch.

        Args:
            plaintext: The plaintext password to verify.
            hashed: The hashed password to verify against.

        Returns:
            True if the password matches, False otherwise.
        """
        try:
            return self._hasher.verify(hashed, plaintext)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    @property
    def dummy_hash(self) -> str:
        """Hash of a random throwaway value, computed on first use."""
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash(secrets.token_urlsafe(32))
        return self._dummy_hash


# Default hasher instance
password_hasher = Argon2PasswordHasher()
