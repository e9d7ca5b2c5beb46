"""Tests for wire-format mapping."""

from datetime import datetime, timezone
from urllib.parse import urlencode

import pytest

from pushover_sdk import Priority, Recipient, build_form_fields, validate_payload


def fields_for(payload: dict, recipient: Recipient | None = None) -> dict[str, str]:
    return build_form_fields(
        "app-token",
        validate_payload(payload),
        recipient or Recipient(user="user-key"),
    )


class TestRequiredFields:
    """Tests for the fields every request carries."""

    def test_minimal_payload(self):
        assert fields_for({"message": "Hello"}) == {
            "token": "app-token",
            "user": "user-key",
            "message": "Hello",
        }

    def test_defaults_are_not_emitted(self):
        fields = fields_for({"message": "Hello", "html": False, "monospace": False})
        assert "html" not in fields
        assert "monospace" not in fields
        assert "priority" not in fields


class TestOptionalFields:
    """Tests for each optional wire field."""

    def test_title_and_sound(self):
        fields = fields_for({"message": "Hello", "title": "Greeting", "sound": "pushover"})
        assert fields["title"] == "Greeting"
        assert fields["sound"] == "pushover"

    def test_bare_link(self):
        fields = fields_for({"message": "Hello", "link": "https://x.test/page"})
        assert fields["url"] == "https://x.test/page"
        assert "url_title" not in fields

    def test_structured_link(self):
        fields = fields_for({"message": "Hello", "link": {"url": "https://x.test", "title": "X"}})
        assert fields["url"] == "https://x.test"
        assert fields["url_title"] == "X"
        body = urlencode({key: fields[key] for key in ("url", "url_title")})
        assert body == "url=https%3A%2F%2Fx.test&url_title=X"

    def test_structured_link_without_title(self):
        fields = fields_for({"message": "Hello", "link": {"url": "https://x.test"}})
        assert fields["url"] == "https://x.test"
        assert "url_title" not in fields

    @pytest.mark.parametrize(
        "priority, expected",
        [(Priority.LOWEST, "-2"), (Priority.LOW, "-1"), (Priority.HIGH, "1")],
    )
    def test_priority(self, priority, expected):
        assert fields_for({"message": "Hello", "priority": priority})["priority"] == expected

    def test_explicit_normal_priority_emitted(self):
        assert fields_for({"message": "Hello", "priority": 0})["priority"] == "0"

    def test_emergency_fields(self):
        fields = fields_for(
            {
                "message": "Server down",
                "priority": Priority.EMERGENCY,
                "emergency": {
                    "repeat": 60,
                    "expire": 3600,
                    "callback": "https://hooks.example.com/ack",
                    "tags": ["db", "prod"],
                },
            }
        )
        assert fields["priority"] == "2"
        assert fields["repeat"] == "60"
        assert fields["expire"] == "3600"
        assert fields["callback"] == "https://hooks.example.com/ack"
        assert fields["tags"] == "db,prod"

    def test_emergency_without_optional_fields(self):
        fields = fields_for(
            {"message": "Server down", "priority": 2, "emergency": {"repeat": 30, "expire": 60}}
        )
        assert "callback" not in fields
        assert "tags" not in fields

    def test_timestamp_as_epoch_seconds(self):
        when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        fields = fields_for({"message": "Hello", "timestamp": when})
        assert fields["timestamp"] == str(int(when.timestamp()))
        assert fields["timestamp"] == "1704164645"

    def test_render_modes(self):
        assert fields_for({"message": "<b>Hi</b>", "html": True})["html"] == "1"
        assert fields_for({"message": "a  b  c", "monospace": True})["monospace"] == "1"

    def test_ttl(self):
        assert fields_for({"message": "Hello", "ttl": 3600})["ttl"] == "3600"


class TestDevices:
    """Tests for the device filter."""

    def test_single_device(self):
        fields = fields_for({"message": "Hello"}, Recipient(user="user-key", device="phone"))
        assert fields["device"] == "phone"

    def test_device_list_joined(self):
        fields = fields_for(
            {"message": "Hello"}, Recipient(user="user-key", device=["phone", "tablet"])
        )
        assert fields["device"] == "phone,tablet"

    def test_empty_device_list_omitted(self):
        fields = fields_for({"message": "Hello"}, Recipient(user="user-key", device=[]))
        assert "device" not in fields


class TestOrdering:
    """Keys come out in a fixed order."""

    def test_full_payload_key_order(self):
        fields = fields_for(
            {
                "message": "Server down",
                "title": "Alert",
                "link": {"url": "https://x.test", "title": "X"},
                "priority": 2,
                "emergency": {
                    "repeat": 30,
                    "expire": 300,
                    "callback": "https://hooks.example.com/ack",
                    "tags": ["db"],
                },
                "sound": "siren",
                "timestamp": 1700000000,
                "html": True,
                "ttl": 60,
            },
            Recipient(user="user-key", device="phone"),
        )
        assert list(fields) == [
            "token",
            "user",
            "message",
            "title",
            "url",
            "url_title",
            "priority",
            "repeat",
            "expire",
            "callback",
            "tags",
            "sound",
            "timestamp",
            "html",
            "ttl",
            "device",
        ]

    def test_same_input_same_output(self):
        payload = {"message": "Hello", "title": "T", "sound": "bike", "ttl": 5}
        assert list(fields_for(payload).items()) == list(fields_for(payload).items())
