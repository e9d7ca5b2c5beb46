"""Payload validation for Pushover SDK.

Every check runs on every call and all failures are reported together, so a
caller fixing a payload sees the complete list at once. Validation never
touches the network.
"""

from typing import Any, Mapping
from urllib.parse import urlparse

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models import NotificationPayload, Priority, Violation

MESSAGE_MIN_LENGTH = 3
MESSAGE_MAX_LENGTH = 1024
TITLE_MAX_LENGTH = 250
URL_MAX_LENGTH = 512
URL_TITLE_MAX_LENGTH = 100
EMERGENCY_MIN_REPEAT = 30
EMERGENCY_MAX_EXPIRE = 10800

# type tags pydantic puts in error locations for members of `str | Link`
_UNION_TAGS = {"str", "Link"}


def is_http_url(value: Any) -> bool:
    """Return True if value is an absolute http(s) URL."""
    if not isinstance(value, str) or not value:
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_message(message: Any, violations: list[Violation]) -> None:
    if message is None:
        violations.append(Violation(path="message", message="message is required"))
    elif not isinstance(message, str):
        violations.append(Violation(path="message", message="message must be a string"))
    elif len(message.strip()) < MESSAGE_MIN_LENGTH:
        violations.append(
            Violation(
                path="message",
                message=f"message must be at least {MESSAGE_MIN_LENGTH} characters",
            )
        )
    elif len(message) > MESSAGE_MAX_LENGTH:
        violations.append(
            Violation(
                path="message",
                message=f"message must be at most {MESSAGE_MAX_LENGTH} characters",
            )
        )


def _check_priority(value: Any, violations: list[Violation]) -> Priority | None:
    if value is None:
        return Priority.NORMAL
    if isinstance(value, bool) or not isinstance(value, int):
        valid = False
    else:
        valid = value in {level.value for level in Priority}
    if not valid:
        levels = ", ".join(str(level.value) for level in Priority)
        violations.append(
            Violation(path="priority", message=f"priority must be one of {levels}, got {value!r}")
        )
        return None
    return Priority(value)


def _check_emergency(
    priority: Priority | None, emergency: Any, violations: list[Violation]
) -> None:
    if priority is not Priority.EMERGENCY:
        # invalid priority is reported on its own
        if emergency is not None and priority is not None:
            violations.append(
                Violation(
                    path="emergency",
                    message="emergency options are only allowed with emergency priority",
                )
            )
        return

    if emergency is None:
        violations.append(
            Violation(
                path="priority,emergency",
                message="emergency priority requires emergency options (repeat and expire)",
            )
        )
        return

    if hasattr(emergency, "model_dump"):
        emergency = emergency.model_dump()
    if not isinstance(emergency, Mapping):
        violations.append(Violation(path="emergency", message="emergency options must be an object"))
        return

    repeat = emergency.get("repeat")
    if not _is_int(repeat):
        violations.append(Violation(path="emergency.repeat", message="repeat must be an integer"))
    elif repeat < EMERGENCY_MIN_REPEAT:
        violations.append(
            Violation(
                path="emergency.repeat",
                message=f"repeat must be at least {EMERGENCY_MIN_REPEAT} seconds",
            )
        )

    expire = emergency.get("expire")
    if not _is_int(expire):
        violations.append(Violation(path="emergency.expire", message="expire must be an integer"))
    elif expire > EMERGENCY_MAX_EXPIRE:
        violations.append(
            Violation(
                path="emergency.expire",
                message=f"expire must be at most {EMERGENCY_MAX_EXPIRE} seconds",
            )
        )

    callback = emergency.get("callback")
    if callback is not None and not is_http_url(callback):
        violations.append(
            Violation(path="emergency.callback", message=f"callback is not a valid URL: {callback!r}")
        )


def _check_url(path: str, url: Any, violations: list[Violation]) -> None:
    if not is_http_url(url):
        violations.append(Violation(path=path, message=f"not a valid URL: {url!r}"))
    elif len(url) > URL_MAX_LENGTH:
        violations.append(
            Violation(path=path, message=f"URL must be at most {URL_MAX_LENGTH} characters")
        )


def _check_link(link: Any, violations: list[Violation]) -> None:
    if link is None:
        return
    if isinstance(link, str):
        _check_url("link", link, violations)
        return

    if hasattr(link, "model_dump"):
        link = link.model_dump()
    if not isinstance(link, Mapping):
        violations.append(
            Violation(path="link", message="link must be a URL or an object with a url")
        )
        return

    _check_url("link.url", link.get("url"), violations)
    title = link.get("title")
    if isinstance(title, str) and len(title) > URL_TITLE_MAX_LENGTH:
        violations.append(
            Violation(
                path="link.title",
                message=f"link title must be at most {URL_TITLE_MAX_LENGTH} characters",
            )
        )


def _check_render_mode(data: Mapping[str, Any], violations: list[Violation]) -> None:
    if data.get("html") is True and data.get("monospace") is True:
        violations.append(
            Violation(path="html,monospace", message="html and monospace cannot both be enabled")
        )


def _check_limits(data: Mapping[str, Any], violations: list[Violation]) -> None:
    title = data.get("title")
    if isinstance(title, str) and len(title) > TITLE_MAX_LENGTH:
        violations.append(
            Violation(path="title", message=f"title must be at most {TITLE_MAX_LENGTH} characters")
        )

    ttl = data.get("ttl")
    if ttl is not None and not _is_int(ttl):
        violations.append(Violation(path="ttl", message="ttl must be an integer"))
    elif _is_int(ttl) and ttl <= 0:
        violations.append(Violation(path="ttl", message="ttl must be a positive number of seconds"))


def _model_violations(
    exc: PydanticValidationError, reported: set[str]
) -> list[Violation]:
    """
    Convert model type errors into violations, one per field not yet reported.

    Union members show up in ``loc`` as type tags (``link.str``, ``link.Link.url``);
    they are dropped so the path names the caller's field. Of several errors
    for one field the most specific (deepest) wins.
    """
    best: dict[str, tuple[list[str], str]] = {}
    for error in exc.errors():
        parts = [str(part) for part in error["loc"]]
        loc = parts[:1] + [part for part in parts[1:] if part not in _UNION_TAGS]
        root = loc[0] if loc else "payload"
        if root in reported:
            continue
        if root not in best or len(loc) > len(best[root][0]):
            best[root] = (loc, error["msg"])
    reported.update(best)
    return [
        Violation(path=".".join(loc) or "payload", message=message)
        for loc, message in best.values()
    ]


def validate_payload(candidate: NotificationPayload | Mapping[str, Any]) -> NotificationPayload:
    """
    Validate a notification payload.

    Args:
        candidate: A ``NotificationPayload`` or a mapping with the same fields

    Returns:
        The normalized payload (priority defaulted, nested objects parsed)

    Raises:
        ValidationError: With every violated constraint, in evaluation order
        TypeError: If candidate is neither a payload nor a mapping
    """
    if isinstance(candidate, NotificationPayload):
        data = candidate.model_dump(exclude_unset=True)
    elif isinstance(candidate, Mapping):
        data = dict(candidate)
        if data.get("priority") is None:
            data.pop("priority", None)
    else:
        raise TypeError(
            f"payload must be a NotificationPayload or a mapping, not {type(candidate).__name__}"
        )

    violations: list[Violation] = []
    _check_message(data.get("message"), violations)
    priority = _check_priority(data.get("priority"), violations)
    _check_emergency(priority, data.get("emergency"), violations)
    _check_link(data.get("link"), violations)
    _check_render_mode(data, violations)
    _check_limits(data, violations)

    reported = {part for v in violations for part in v.path.split(",")}
    reported = {path.split(".")[0] for path in reported}

    payload = None
    try:
        payload = NotificationPayload.model_validate(data)
    except PydanticValidationError as exc:
        violations.extend(_model_violations(exc, reported))

    if violations:
        raise ValidationError(violations)
    return payload
