"""Wire-format mapping for the Pushover messages API.

Turns a validated ``NotificationPayload`` into the flat form fields the API
expects. No validation happens here; callers pass only payloads returned by
``validate_payload``.
"""

from datetime import datetime

from .models import Link, NotificationPayload, Priority, Recipient


def _epoch_seconds(value: datetime) -> str:
    return str(int(value.timestamp()))


def build_form_fields(
    token: str, payload: NotificationPayload, recipient: Recipient
) -> dict[str, str]:
    """
    Build the form body for one recipient.

    Keys are emitted in a fixed order and only for fields that are set, so
    the same payload and recipient always produce the same body.

    Args:
        token: Application API token
        payload: Validated notification payload
        recipient: Recipient (and optional device filter) for this request

    Returns:
        Ordered mapping of wire field name to string value
    """
    fields: dict[str, str] = {
        "token": token,
        "user": recipient.user,
        "message": payload.message,
    }

    if payload.title is not None:
        fields["title"] = payload.title

    if isinstance(payload.link, Link):
        fields["url"] = payload.link.url
        if payload.link.title:
            fields["url_title"] = payload.link.title
    elif payload.link is not None:
        fields["url"] = payload.link

    if "priority" in payload.model_fields_set or payload.priority != Priority.NORMAL:
        fields["priority"] = str(int(payload.priority))

    if payload.priority == Priority.EMERGENCY and payload.emergency is not None:
        fields["repeat"] = str(payload.emergency.repeat)
        fields["expire"] = str(payload.emergency.expire)
        if payload.emergency.callback:
            fields["callback"] = payload.emergency.callback
        if payload.emergency.tags:
            fields["tags"] = ",".join(payload.emergency.tags)

    if payload.sound is not None:
        fields["sound"] = payload.sound

    if payload.timestamp is not None:
        fields["timestamp"] = _epoch_seconds(payload.timestamp)

    if payload.html:
        fields["html"] = "1"
    if payload.monospace:
        fields["monospace"] = "1"

    if payload.ttl is not None:
        fields["ttl"] = str(payload.ttl)

    devices = recipient.devices
    if devices:
        fields["device"] = ",".join(devices)

    return fields
