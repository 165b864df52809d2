"""Password policy checked before a registration command reaches the service.

The registration service itself only rejects blank passwords; length and
composition rules are enforced here, at the caller-facing boundary.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PasswordValidationError:
    """Represents a password validation error.

    Attributes:
        field: The field name (always 'password').
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class PasswordValidator:
    """Validates password strength.

    Default policy: not blank, at least 8 and at most 128 characters. Letter
    and digit requirements can be switched on.
    """

    def __init__(
        self,
        min_length: int = 8,
        max_length: int = 128,
        require_letter: bool = False,
        require_digit: bool = False,
    ) -> None:
        self.min_length = min_length
        self.max_length = max_length
        self.require_letter = require_letter
        self.require_digit = require_digit

    def validate(self, password: str) -> list[PasswordValidationError]:
        """Validate a password against the policy.

        Args:
            password: The password to validate.

        Returns:
            List of validation errors. Empty list if password is valid.
        """
        if not password or not password.strip():
            return [
                PasswordValidationError(
                    field="password",
                    message="Password cannot be blank",
                    code="password_blank",
                )
            ]

        errors: list[PasswordValidationError] = []

        if len(password) < self.min_length:
            errors.append(
                PasswordValidationError(
                    field="password",
                    message=f"Password must be at least {self.min_length} characters",
                    code="password_too_short",
                )
            )

        if len(password) > self.max_length:
            errors.append(
                PasswordValidationError(
                    field="password",
                    message=f"Password must be at most {self.max_length} characters",
                    code="password_too_long",
                )
            )

        if self.require_letter and not re.search(r"[A-Za-z]", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one letter",
                    code="password_no_letter",
                )
            )

        if self.require_digit and not re.search(r"\d", password):
            errors.append(
                PasswordValidationError(
                    field="password",
                    message="Password must contain at least one digit",
                    code="password_no_digit",
                )
            )

        return errors

    def is_valid(self, password: str) -> bool:
        """Check if a password is valid."""
        return len(self.validate(password)) == 0
