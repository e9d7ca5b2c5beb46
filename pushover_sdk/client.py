"""Pushover SDK Client implementation."""

import asyncio
from typing import Any, Iterable, Mapping, Sequence

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from .config import PushoverConfig
from .exceptions import (
    DecodeError,
    NoRecipientsError,
    RecipientError,
    ServiceError,
    TransportError,
)
from .mapping import build_form_fields
from .models import (
    DeliveryFailure,
    DeliveryOutcome,
    DeliveryResult,
    NotificationPayload,
    Recipient,
    RecipientLike,
    SendOptions,
)
from .validation import validate_payload


class PushoverClient:
    """
    Async client for the Pushover messages API.

    One ``send`` call validates the payload once, then posts it to every
    recipient concurrently. Results come back in recipient order; a recipient
    whose request fails gets a ``DeliveryFailure`` in its slot instead of
    aborting the whole call.

    Example:
        ```python
        from pushover_sdk import PushoverClient, PushoverConfig

        config = PushoverConfig(token="app-token", default_user="user-key")

        async with PushoverClient(config) as client:
            outcomes = await client.send(
                {"message": "Backup finished", "title": "nightly"},
                recipients=["user-a", "user-b"],
            )
            for outcome in outcomes:
                print(outcome.user, outcome.ok)
        ```
    """

    def __init__(
        self,
        config: PushoverConfig,
        http_client: httpx.AsyncClient | None = None,
        logger: Any | None = None,
    ) -> None:
        """
        Initialize Pushover client.

        Args:
            config: Client configuration
            http_client: Optional pre-built HTTP client. The SDK does not close
                clients it did not create.
            logger: Optional structlog-style logger; defaults to structlog's
        """
        self.config = config
        self.logger = logger if logger is not None else structlog.get_logger()
        self._client = http_client
        self._owns_client = http_client is None
        self.logger.info("PushoverClient initialized", api_url=self.config.api_url)

    async def __aenter__(self) -> "PushoverClient":
        """Async context manager entry."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None
            self.logger.info("PushoverClient closed")

    # =========================================================================
    # Recipients
    # =========================================================================

    def resolve_recipients(self, options: SendOptions) -> list[Recipient]:
        """
        Work out who a send goes to.

        Recipients given in the options win; otherwise the configured default
        user is used. The per-call device filter is applied to every recipient
        that does not carry its own.

        Raises:
            NoRecipientsError: If nobody is left to send to
        """
        requested = options.recipients
        if isinstance(requested, (str, Recipient)):
            items: list[RecipientLike] = [requested]
        elif requested:
            items = list(requested)
        elif self.config.default_user:
            items = [self.config.default_user]
        else:
            raise NoRecipientsError()

        device = options.device
        if device is not None and not isinstance(device, str):
            device = list(device)

        resolved = []
        for item in items:
            if not isinstance(item, (str, Recipient)):
                raise NoRecipientsError("Recipient keys must be non-empty strings.")
            recipient = item if isinstance(item, Recipient) else Recipient(user=item)
            if not recipient.user.strip():
                raise NoRecipientsError("Recipient keys must be non-empty strings.")
            if recipient.device is None and device:
                recipient = recipient.model_copy(update={"device": device})
            resolved.append(recipient)
        return resolved

    # =========================================================================
    # Sending
    # =========================================================================

    async def send(
        self,
        payload: NotificationPayload | Mapping[str, Any],
        options: SendOptions | None = None,
        *,
        recipients: RecipientLike | Sequence[RecipientLike] | None = None,
        device: str | Sequence[str] | None = None,
        verbose: bool | None = None,
    ) -> list[DeliveryOutcome]:
        """
        Send a notification to one or more recipients.

        Args:
            payload: Notification to send, as a model or a plain mapping
            options: Per-call options
            recipients: Shortcut for ``options.with_recipients(...)``
            device: Shortcut for ``options.with_device(...)``
            verbose: Shortcut for ``options.with_verbose(...)``

        Returns:
            One ``DeliveryResult`` or ``DeliveryFailure`` per recipient, in
            recipient order

        Raises:
            ValidationError: If the payload is invalid (nothing is sent)
            NoRecipientsError: If no recipient can be resolved (nothing is sent)
        """
        options = options or SendOptions()
        if recipients is not None:
            options = options.with_recipients(recipients)
        if device is not None:
            options = options.with_device(device)
        if verbose is not None:
            options = options.with_verbose(verbose)

        validated = validate_payload(payload)
        targets = self.resolve_recipients(options)

        if options.verbose:
            self.logger.debug(
                "Sending notification",
                payload=validated.model_dump(mode="json", exclude_unset=True),
                recipients=[target.user for target in targets],
                device=options.device,
            )

        outcomes = await asyncio.gather(
            *(self._deliver(validated, target) for target in targets)
        )

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        self.logger.info(
            "Notification dispatched",
            recipients=len(outcomes),
            succeeded=len(outcomes) - failed,
            failed=failed,
        )
        return list(outcomes)

    async def _deliver(
        self, payload: NotificationPayload, recipient: Recipient
    ) -> DeliveryOutcome:
        """Send to one recipient, turning its failure into a placeholder."""
        try:
            return await self.send_to_recipient(payload, recipient)
        except RecipientError as e:
            return DeliveryFailure(user=recipient.user, error=e)

    async def send_to_recipient(
        self, payload: NotificationPayload, recipient: Recipient
    ) -> DeliveryResult:
        """
        Post a validated payload to a single recipient.

        Args:
            payload: Payload returned by ``validate_payload``
            recipient: Target recipient and device filter

        Returns:
            DeliveryResult for the accepted message

        Raises:
            TransportError: If the request could not be completed
            DecodeError: If the response body is not the expected JSON
            ServiceError: If the service rejected the message
        """
        fields = build_form_fields(self.config.token, payload, recipient)
        client = self._get_client()

        try:
            response = await client.post(
                self.config.api_url,
                data=fields,
                timeout=self.config.timeout,
            )
        except httpx.RequestError as e:
            self.logger.error("Notification request failed", user=recipient.user, error=str(e))
            raise TransportError(recipient.user, f"Request to Pushover failed: {e}") from e

        return self._parse_response(recipient.user, response)

    def _parse_response(self, user: str, response: httpx.Response) -> DeliveryResult:
        """
        Turn a messages API response into a DeliveryResult.

        Raises:
            DecodeError: For bodies that are not a JSON object with a status
            ServiceError: For well-formed responses with ``status != 1``
        """
        try:
            data = response.json()
        except ValueError:
            self.logger.error(
                "Malformed notification response",
                user=user,
                status_code=response.status_code,
            )
            raise DecodeError(user, response.text, status_code=response.status_code)

        status = data.get("status") if isinstance(data, dict) else None
        if isinstance(status, bool) or not isinstance(status, int):
            self.logger.error(
                "Unexpected notification response",
                user=user,
                status_code=response.status_code,
            )
            raise DecodeError(user, response.text, status_code=response.status_code)

        if status != 1:
            self.logger.warning(
                "Notification rejected",
                user=user,
                request=data.get("request"),
                errors=data.get("errors"),
            )
            raise ServiceError(
                user,
                status=status,
                request=data.get("request"),
                errors=data.get("errors"),
                status_code=response.status_code,
            )

        try:
            result = DeliveryResult.model_validate({**data, "user": user})
        except PydanticValidationError:
            self.logger.error("Unexpected notification response", user=user)
            raise DecodeError(user, response.text, status_code=response.status_code)

        self.logger.info("Notification delivered", user=user, request=result.request)
        return result


def raise_for_failures(outcomes: Iterable[DeliveryOutcome]) -> list[DeliveryResult]:
    """
    Fail-fast view over ``PushoverClient.send`` outcomes.

    Returns:
        The delivery results, if every recipient succeeded

    Raises:
        RecipientError: The error of the first failed recipient
    """
    results = []
    for outcome in outcomes:
        if isinstance(outcome, DeliveryFailure):
            raise outcome.error
        results.append(outcome)
    return results
