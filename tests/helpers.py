"""Shared helpers for faking the Pushover messages endpoint."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable
from urllib.parse import parse_qsl

import httpx


def form_of(request: httpx.Request) -> dict[str, str]:
    """Decode the form body of a captured request."""
    return dict(parse_qsl(request.content.decode()))


def json_response(body: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(body).encode())


def ok_response(request_id: str = "req-1") -> httpx.Response:
    return json_response({"status": 1, "request": request_id})


class FakePushover:
    """
    Async handler for ``httpx.MockTransport`` that records every request.

    ``responder`` receives the decoded form and returns an ``httpx.Response``
    (or raises, to simulate a transport failure). ``delays`` maps a user key
    to seconds to wait before answering, to force out-of-order completion.
    """

    def __init__(
        self,
        responder: Callable[[dict[str, str], httpx.Request], httpx.Response] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.responder = responder or (lambda form, request: ok_response(f"req-{form['user']}"))
        self.delays = delays or {}
        self.requests: list[httpx.Request] = []
        self.completed: list[str] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        form = form_of(request)
        await asyncio.sleep(self.delays.get(form["user"], 0))
        self.completed.append(form["user"])
        return self.responder(form, request)

    @property
    def forms(self) -> list[dict[str, str]]:
        return [form_of(request) for request in self.requests]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))
