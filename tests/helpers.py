from __future__ import annotations

import httpx

from tmapi.core.domain.command import CommandRequest


class StubServer:
    """Handler para `httpx.MockTransport` que registra cada request."""

    def __init__(self, body: str | bytes = "[]", status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        content = self.body.encode("utf-8") if isinstance(self.body, str) else self.body
        return httpx.Response(self.status_code, content=content)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


class FakeDispatcher:
    """Dispatcher en memoria: devuelve respuestas en orden y guarda los comandos."""

    def __init__(self, *responses: str) -> None:
        self.responses = list(responses) or ["[]"]
        self.requests: list[CommandRequest] = []

    def dispatch(self, request: CommandRequest) -> str:
        self.requests.append(request)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    @property
    def last(self) -> CommandRequest:
        return self.requests[-1]
