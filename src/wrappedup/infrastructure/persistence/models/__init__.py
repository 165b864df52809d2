"""SQLAlchemy models for WrappedUp tables.

All models inherit from the Base class defined in database.py and are
created on application startup in development mode.
"""

from wrappedup.infrastructure.persistence.models.user import UserModel
from wrappedup.infrastructure.persistence.models.user_profile import UserProfileModel

__all__ = [
    "UserModel",
    "UserProfileModel",
]
