"""Domain entities for WrappedUp.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from wrappedup.domain.entities.token import (
    AuthenticationResult,
    RefreshResult,
    TokenCheck,
    TokenStatus,
    TokenType,
)
from wrappedup.domain.entities.user import Email, Role, User, Username

__all__ = [
    "AuthenticationResult",
    "Email",
    "RefreshResult",
    "Role",
    "TokenCheck",
    "TokenStatus",
    "TokenType",
    "User",
    "Username",
]
