"""Data models for Pushover SDK."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt

if TYPE_CHECKING:
    from .exceptions import PushoverError


# =============================================================================
# Enums
# =============================================================================


class Priority(IntEnum):
    """Message priority levels accepted by the messages API."""

    LOWEST = -2  # no notification at all
    LOW = -1  # quiet notification
    NORMAL = 0
    HIGH = 1  # bypasses the user's quiet hours
    EMERGENCY = 2  # repeats until acknowledged


# =============================================================================
# Payload Models
# =============================================================================


class Link(BaseModel):
    """Supplementary URL attached to a message."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(..., description="Supplementary URL")
    title: str | None = Field(None, description="Title shown instead of the URL")


class EmergencyOptions(BaseModel):
    """Re-alerting behaviour for emergency priority messages."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    repeat: StrictInt = Field(..., description="Seconds between re-alerts")
    expire: StrictInt = Field(..., description="Seconds after which re-alerting stops")
    callback: str | None = Field(None, description="URL called when the message is acknowledged")
    tags: list[str] | None = Field(None, description="Tags for cancelling receipts in bulk")


class NotificationPayload(BaseModel):
    """
    A notification as the caller wants it delivered.

    Build it directly or pass a plain dict to ``validate_payload``; the
    validator is the only place where field constraints are enforced.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str = Field(..., description="Message body")
    title: str | None = Field(None, description="Message title")
    link: str | Link | None = Field(None, description="Bare URL or URL with display title")
    priority: Priority = Field(default=Priority.NORMAL, description="Message priority")
    emergency: EmergencyOptions | None = Field(None, description="Required for emergency priority")
    sound: str | None = Field(None, description="Notification sound name")
    timestamp: datetime | None = Field(None, description="When the event happened")
    html: StrictBool = Field(default=False, description="Render the message as HTML")
    monospace: StrictBool = Field(default=False, description="Render the message in monospace")
    ttl: StrictInt | None = Field(None, description="Seconds before the message is deleted from devices")


# =============================================================================
# Dispatch Models
# =============================================================================


class Recipient(BaseModel):
    """A user or group key, optionally limited to some of its devices."""

    model_config = ConfigDict(frozen=True)

    user: str = Field(..., description="User or group key")
    device: str | list[str] | None = Field(None, description="Device name(s) to deliver to")

    @property
    def devices(self) -> list[str]:
        if self.device is None:
            return []
        if isinstance(self.device, str):
            return [self.device]
        return list(self.device)


RecipientLike = Union[str, Recipient]


@dataclass(frozen=True)
class SendOptions:
    """
    Per-call options for ``PushoverClient.send``.

    Instances are immutable; each ``with_*`` call returns a new value, so a
    base ``SendOptions`` can be shared between concurrent sends.

    Attributes:
        recipients: User key, ``Recipient``, or a list of either. Overrides
            the configured default user.
        device: Device name(s) applied to every recipient without its own filter
        verbose: Log the payload and options before sending
    """

    recipients: RecipientLike | Sequence[RecipientLike] | None = None
    device: str | Sequence[str] | None = None
    verbose: bool = False

    def with_recipients(
        self, recipients: RecipientLike | Sequence[RecipientLike] | None
    ) -> "SendOptions":
        return replace(self, recipients=recipients)

    def with_device(self, device: str | Sequence[str] | None) -> "SendOptions":
        return replace(self, device=device)

    def with_verbose(self, verbose: bool = True) -> "SendOptions":
        return replace(self, verbose=verbose)


# =============================================================================
# Result Models
# =============================================================================


class Violation(BaseModel):
    """One failed payload constraint."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Dotted path of the offending field(s)")
    message: str = Field(..., description="Human-readable description")


class DeliveryResult(BaseModel):
    """Response from the messages endpoint for one recipient."""

    model_config = ConfigDict(frozen=True)

    user: str = Field(..., description="Recipient the message was sent to")
    status: int = Field(..., description="1 on success")
    request: str = Field(..., description="Request id for support correlation")
    errors: list[str] | None = Field(None, description="Errors reported by the service")
    receipt: str | None = Field(None, description="Receipt id for emergency priority messages")

    @property
    def ok(self) -> bool:
        return self.status == 1


@dataclass(frozen=True)
class DeliveryFailure:
    """Placeholder for a recipient whose request failed."""

    user: str
    error: "PushoverError"

    @property
    def ok(self) -> bool:
        return False


DeliveryOutcome = Union[DeliveryResult, DeliveryFailure]
