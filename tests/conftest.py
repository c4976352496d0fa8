import base64
from collections.abc import Callable

import httpx
import pytest

from pkgscore.config import Settings

GITHUB_HOST = "api.github.com"
NPM_HOST = "registry.npmjs.org"


def encoded(text: str) -> dict:
    """Shape *text* like a GitHub contents API response."""
    return {"content": base64.b64encode(text.encode("utf-8")).decode("ascii"), "encoding": "base64"}


Route = Callable[[httpx.Request], httpx.Response]


class FakeApi:
    """Routes requests by (host, path); anything unrouted is a 404."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def add(self, host: str, path: str, json=None, status: int = 200) -> None:
        self.routes[(host, path)] = lambda request: httpx.Response(status, json=json)

    def github(self, path: str, json=None, status: int = 200) -> None:
        self.add(GITHUB_HOST, path, json=json, status=status)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.url.host, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return route(request)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(fake_api):
    with httpx.Client(transport=httpx.MockTransport(fake_api.handler)) as http_client:
        yield http_client


@pytest.fixture
def settings() -> Settings:
    return Settings(github_token="test-token")
