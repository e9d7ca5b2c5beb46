"""Configuration for Pushover SDK."""

from dataclasses import dataclass, replace
from urllib.parse import urlparse

DEFAULT_API_URL = "https://api.pushover.net/1/messages.json"


@dataclass(frozen=True)
class PushoverConfig:
    """
    Configuration for Pushover SDK client.

    Values are fixed at construction; use the ``with_*`` helpers to derive a
    modified copy.

    Attributes:
        token: Application API token
        default_user: Recipient used when a send names no recipients
        api_url: Messages endpoint (default: the public Pushover API)
        timeout: Per-request timeout in seconds (default: 5.0)
        verify_ssl: Whether to verify SSL certificates (default: True)

    Example:
        ```python
        config = PushoverConfig(
            token="your-app-token",
            default_user="your-user-key",
            timeout=10.0,
        )
        ```
    """

    token: str
    default_user: str | None = None
    api_url: str = DEFAULT_API_URL
    timeout: float = 5.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.token or not self.token.strip():
            raise ValueError("token must be a non-empty string")

        if self.default_user is not None and not self.default_user.strip():
            raise ValueError("default_user must not be blank")

        parsed = urlparse(self.api_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"api_url must be an http(s) URL: {self.api_url}")

        if self.timeout <= 0:
            raise ValueError("timeout must be greater than 0")

    def with_default_user(self, default_user: str | None) -> "PushoverConfig":
        """Return a copy of this config with a different default recipient."""
        return replace(self, default_user=default_user)

    def with_timeout(self, timeout: float) -> "PushoverConfig":
        """Return a copy of this config with a different request timeout."""
        return replace(self, timeout=timeout)
