"""Domain exceptions that represent business rule violations."""

from typing import Optional


class DomainException(Exception):
    """Base exception for all domain-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


# Auth Domain Exceptions
class AuthException(DomainException):
    """Base exception for authentication errors."""


class UnauthorizedDispatch(AuthException):
    """Dispatcher trigger called without the shared secret."""

    def __init__(self):
        super().__init__("Unauthorized", "UNAUTHORIZED")


class InvalidToken(AuthException):
    """Missing, expired or otherwise unusable access token."""

    def __init__(self, reason: str = "Could not validate credentials"):
        super().__init__(reason, "INVALID_TOKEN")


# Quiet Block Domain Exceptions
class QuietBlockException(DomainException):
    """Base exception for quiet block errors."""


class QuietBlockNotFound(QuietBlockException):
    """Quiet block does not exist or belongs to someone else."""

    def __init__(self, quiet_block_id: str):
        super().__init__(
            f"Quiet block not found: {quiet_block_id}", "QUIET_BLOCK_NOT_FOUND"
        )


class InvalidTimeRange(QuietBlockException):
    """End time is not after start time."""

    def __init__(self):
        super().__init__(
            "End time must be after start time", "INVALID_TIME_RANGE"
        )


# Profile Domain Exceptions
class ProfileException(DomainException):
    """Base exception for profile errors."""


class ProfileNotFound(ProfileException):
    def __init__(self, profile_id: str):
        super().__init__(f"Profile not found: {profile_id}", "PROFILE_NOT_FOUND")


# Notification Domain Exceptions
class NotificationException(DomainException):
    """Base exception for reminder scheduling and dispatch errors."""


class NotificationFetchError(NotificationException):
    """Due notifications could not be read; the dispatch batch never started."""

    def __init__(self):
        super().__init__(
            "Failed to fetch notifications", "NOTIFICATION_FETCH_FAILED"
        )


# Validation Domain Exceptions
class ValidationException(DomainException):
    """Base exception for validation errors."""


class RequiredFieldMissing(ValidationException):
    """Required field is missing."""

    def __init__(self, field: str):
        super().__init__(
            f"{field.capitalize()} is required", "REQUIRED_FIELD_MISSING"
        )


class InvalidEmailType(ValidationException):
    """Unknown e-mail template kind."""

    def __init__(self, kind: Optional[str] = None):
        super().__init__("Invalid email type", "INVALID_EMAIL_TYPE")
        self.kind = kind
