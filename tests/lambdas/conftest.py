from json import loads
from os import environ
from time import sleep

import httpx
from pytest import fixture

from .forwarder.constants import WEBHOOK_URL


class Webhook:
    """Stand-in for a chat webhook, recording every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.text = "ok"
        self.error: Exception | None = None
        self.delay = 0.0
        self.headers: dict[str, str] = {}
        self.stream: httpx.SyncByteStream | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.stream is not None:
            return httpx.Response(
                self.status_code, headers=self.headers, stream=self.stream
            )
        return httpx.Response(self.status_code, headers=self.headers, text=self.text)

    @property
    def payloads(self) -> list[dict]:
        return [loads(request.content) for request in self.requests]


@fixture(autouse=True)
def lambda_environment_variables():
    environ["AWS_LAMBDA_FUNCTION_NAME"] = "test"
    environ["POWERTOOLS_DEV"] = "true"  # Pretty print logs
    environ["ENVIRONMENT"] = "test"
    environ["WEBHOOK_URL"] = WEBHOOK_URL
    environ.pop("DELIVERY_TIMEOUT", None)


@fixture
def webhook() -> Webhook:
    return Webhook()


@fixture
def transport(webhook) -> httpx.MockTransport:
    return httpx.MockTransport(webhook)


@fixture
def mock_httpx(monkeypatch, webhook) -> Webhook:
    """Route every `httpx.Client` created during the test to the stand-in webhook."""
    client = httpx.Client
    transport = httpx.MockTransport(webhook)
    monkeypatch.setattr(
        httpx, "Client", lambda **kwargs: client(**{**kwargs, "transport": transport})
    )
    return webhook
