"""Domain services for WrappedUp.

Services contain the registration, authentication and token refresh logic.
They depend only on the ports in ``wrappedup.domain.ports``.
"""

from wrappedup.domain.services.authentication_service import (
    AuthenticationService,
    CredentialCheck,
)
from wrappedup.domain.services.password_validator import (
    PasswordValidationError,
    PasswordValidator,
)
from wrappedup.domain.services.registration_service import RegistrationService
from wrappedup.domain.services.token_refresh_service import TokenRefreshService

__all__ = [
    "AuthenticationService",
    "CredentialCheck",
    "PasswordValidationError",
    "PasswordValidator",
    "RegistrationService",
    "TokenRefreshService",
]
