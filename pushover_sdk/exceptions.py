"""Exceptions for Pushover SDK."""

from typing import Sequence

from .models import Violation


class PushoverError(Exception):
    """Base exception for all Pushover SDK errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Initialize PushoverError.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(PushoverError):
    """Raised when a notification payload violates one or more field constraints."""

    def __init__(self, violations: Sequence[Violation]) -> None:
        """
        Initialize ValidationError.

        Args:
            violations: Every constraint the payload failed, in evaluation order
        """
        self.violations = list(violations)
        details = "; ".join(f"{v.path}: {v.message}" for v in self.violations)
        super().__init__(f"Invalid notification payload: {details}", status_code=422)


class NoRecipientsError(PushoverError):
    """Raised when neither the call nor the config names a recipient."""

    def __init__(
        self,
        message: str = "No recipients specified. Provide recipients in options or set a default_user.",
    ) -> None:
        """Initialize NoRecipientsError."""
        super().__init__(message)


class RecipientError(PushoverError):
    """Base for failures scoped to a single recipient's request."""

    def __init__(self, user: str, message: str, status_code: int | None = None) -> None:
        self.user = user
        super().__init__(message, status_code=status_code)


class TransportError(RecipientError):
    """Raised when the HTTP request for a recipient could not be completed."""


class DecodeError(RecipientError):
    """Raised when the service response is not the expected JSON document."""

    def __init__(self, user: str, body: str, status_code: int | None = None) -> None:
        """
        Initialize DecodeError.

        Args:
            user: Recipient the request was sent for
            body: Raw response body
            status_code: HTTP status code of the response
        """
        self.body = body
        super().__init__(user, f"Failed to parse response: {body}", status_code=status_code)


class ServiceError(RecipientError):
    """Raised when the service answered but rejected the notification."""

    def __init__(
        self,
        user: str,
        status: int,
        request: str | None,
        errors: list[str] | str | None = None,
        status_code: int | None = None,
    ) -> None:
        """
        Initialize ServiceError.

        Args:
            user: Recipient the request was sent for
            status: The ``status`` field of the response body
            request: Request id for support correlation
            errors: Error strings reported by the service
            status_code: HTTP status code of the response
        """
        self.status = status
        self.request = request
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors or [])
        reason = ", ".join(self.errors) or f"status {status}"
        super().__init__(user, f"Pushover rejected message for {user}: {reason}", status_code=status_code)
