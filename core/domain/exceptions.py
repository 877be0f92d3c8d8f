"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""
from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class InvalidLicenseTypeError(LicenseException):
    """Raised when a license type code is not one of T, L, D."""

    def __init__(self, message: str = "Invalid license type. Must be one of: T, L, D"):
        super().__init__(message, code="INVALID_LICENSE_TYPE")


class InvalidLicenseDurationError(LicenseException):
    """Raised when a duration cannot be encoded in a license key."""

    def __init__(self, message: str = "License duration must be between 0 and 9999"):
        super().__init__(message, code="INVALID_LICENSE_DURATION")


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseAlreadyExistsError(LicenseException):
    """Raised when a user already holds a license that blocks a new one."""

    def __init__(
        self,
        message: str = "User already has a license",
        existing: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code="LICENSE_ALREADY_EXISTS")
        self.existing = existing


class AccountException(DomainException):
    """Base exception for account-related errors."""

    pass


class UserNotFoundError(AccountException):
    """Raised when the identity provider does not know a user."""

    def __init__(self, message: str = "User not found. Please ensure you are signed in."):
        super().__init__(message, code="USER_NOT_FOUND")


class AuthenticationError(AccountException):
    """Raised when a bearer token is missing, invalid or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="AUTHENTICATION_FAILED")


class AccountRegistrationError(AccountException):
    """Raised when the identity provider rejects a sign-up."""

    def __init__(self, message: str = "Account could not be created"):
        super().__init__(message, code="ACCOUNT_REGISTRATION_FAILED")


class PaymentException(DomainException):
    """Base exception for payment-related errors."""

    pass


class InvalidWebhookSignatureError(PaymentException):
    """Raised when a webhook signature is missing or does not match."""

    def __init__(self, message: str = "Invalid signature"):
        super().__init__(message, code="INVALID_SIGNATURE")


class ServiceConfigurationError(DomainException):
    """Raised when required service configuration is missing."""

    def __init__(self, message: str = "Service not configured"):
        super().__init__(message, code="SERVICE_NOT_CONFIGURED")


class UpstreamServiceError(DomainException):
    """Raised when an external collaborator fails or is unreachable."""

    def __init__(self, message: str = "Upstream service failure"):
        super().__init__(message, code="UPSTREAM_SERVICE_ERROR")
