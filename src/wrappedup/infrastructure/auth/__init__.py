"""Authentication infrastructure components.

This module provides password hashing and JWT token services.
"""

from wrappedup.infrastructure.auth.jwt_service import JWTService, jwt_service
from wrappedup.infrastructure.auth.password_hasher import (
    Argon2PasswordHasher,
    password_hasher,
)

__all__ = [
    "Argon2PasswordHasher",
    "JWTService",
    "jwt_service",
    "password_hasher",
]
