"""
Basic usage example for Pushover SDK.

This example demonstrates:
- Sending to the default recipient
- Fanning out to several recipients and devices
- Handling validation errors and per-recipient failures
"""

import asyncio
import os

from pushover_sdk import (
    DeliveryFailure,
    Priority,
    PushoverClient,
    PushoverConfig,
    Recipient,
    ValidationError,
)


async def main() -> None:
    """Run basic usage example."""
    config = PushoverConfig(
        token=os.environ["PUSHOVER_TOKEN"],
        default_user=os.environ.get("PUSHOVER_USER"),
    )

    async with PushoverClient(config) as client:
        print("=== Pushover SDK Basic Usage Example ===\n")

        # 1. Default recipient
        print("1. Sending to the default user...")
        outcomes = await client.send(
            {
                "message": "Nightly backup finished",
                "title": "Backups",
                "link": {"url": "https://example.com/backups", "title": "Open report"},
            }
        )
        for outcome in outcomes:
            print(f"  {outcome.user}: {'sent' if outcome.ok else outcome.error}")

        # 2. Several recipients, one of them limited to a device
        print("\n2. Fanning out...")
        outcomes = await client.send(
            {"message": "Deploy started", "priority": Priority.HIGH},
            recipients=[
                os.environ.get("PUSHOVER_USER", "user-key"),
                Recipient(user="group-key", device=["phone", "tablet"]),
            ],
            verbose=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, DeliveryFailure):
                print(f"✗ {outcome.user}: {outcome.error}")
            else:
                print(f"✓ {outcome.user}: request {outcome.request}")

        # 3. Invalid payload: every problem is reported at once
        print("\n3. Sending an invalid payload...")
        try:
            await client.send(
                {"message": "", "priority": Priority.EMERGENCY, "html": True, "monospace": True}
            )
        except ValidationError as e:
            for violation in e.violations:
                print(f"✗ {violation.path}: {violation.message}")


if __name__ == "__main__":
    asyncio.run(main())
