"""
Pushover SDK - async Python client for the Pushover messages API

Validates a notification, maps it to the API's form fields and sends it to
one or more recipients concurrently.

Example:
    ```python
    from pushover_sdk import PushoverClient, PushoverConfig, Priority

    config = PushoverConfig(token="app-token", default_user="user-key")

    async with PushoverClient(config) as client:
        # Default recipient
        await client.send({"message": "Deploy finished"})

        # Several recipients, emergency priority
        outcomes = await client.send(
            {
                "message": "Database is down",
                "priority": Priority.EMERGENCY,
                "emergency": {"repeat": 60, "expire": 3600},
            },
            recipients=["user-a", "user-b"],
        )
    ```
"""

from .client import PushoverClient, raise_for_failures
from .config import DEFAULT_API_URL, PushoverConfig
from .exceptions import (
    DecodeError,
    NoRecipientsError,
    PushoverError,
    RecipientError,
    ServiceError,
    TransportError,
    ValidationError,
)
from .mapping import build_form_fields
from .models import (
    DeliveryFailure,
    DeliveryOutcome,
    DeliveryResult,
    EmergencyOptions,
    Link,
    NotificationPayload,
    Priority,
    Recipient,
    SendOptions,
    Violation,
)
from .validation import validate_payload

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Client
    "PushoverClient",
    "raise_for_failures",
    # Configuration
    "PushoverConfig",
    "DEFAULT_API_URL",
    # Pipeline stages
    "validate_payload",
    "build_form_fields",
    # Exceptions
    "PushoverError",
    "ValidationError",
    "NoRecipientsError",
    "RecipientError",
    "TransportError",
    "DecodeError",
    "ServiceError",
    # Enums
    "Priority",
    # Models
    "NotificationPayload",
    "Link",
    "EmergencyOptions",
    "Recipient",
    "SendOptions",
    "DeliveryResult",
    "DeliveryFailure",
    "DeliveryOutcome",
    "Violation",
]
