from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from wallabag_sync.config import AppConfig
from wallabag_sync.core.types import Credentials

BASE_URL = "https://wallabag.example.com"

TOKEN_PAYLOAD = {
    "access_token": "tok-123",
    "expires_in": 3600,
    "refresh_token": "ref-456",
    "token_type": "bearer",
}


def api_item(entry_id: int, title: str, **overrides: Any) -> dict[str, Any]:
    item = {
        "id": entry_id,
        "title": title,
        "url": f"https://example.com/{entry_id}",
        "domain_name": "example.com",
        "created_at": "2026-01-01T00:00:00+0000",
        "content": f"<p>Body of {title}</p>",
        "tags": [],
        "is_archived": 0,
        "is_starred": 0,
    }
    item.update(overrides)
    return item


def entries_payload(items: list[dict[str, Any]], page: int = 1, pages: int = 1) -> dict[str, Any]:
    return {
        "limit": 30,
        "page": page,
        "pages": pages,
        "total": len(items),
        "_embedded": {"items": items},
    }


class FakeWallabag:
    """Records requests and serves canned token/entries responses."""

    def __init__(
        self,
        pages: list[list[dict[str, Any]]] | None = None,
        token_response: tuple[int, dict[str, Any]] = (200, TOKEN_PAYLOAD),
        entries_status: int = 200,
    ):
        self.pages = pages if pages is not None else [[]]
        self.token_response = token_response
        self.entries_status = entries_status
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/oauth/v2/token":
            status, payload = self.token_response
            return httpx.Response(status, json=payload)
        if request.url.path == "/api/entries.json":
            if self.entries_status != 200:
                return httpx.Response(self.entries_status, text="boom")
            page = int(request.url.params.get("page", "1"))
            items = self.pages[page - 1] if page <= len(self.pages) else []
            return httpx.Response(200, json=entries_payload(items, page=page, pages=len(self.pages)))
        return httpx.Response(404, json={"error": "not_found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def token_body(self) -> dict[str, Any]:
        token_requests = [r for r in self.requests if r.url.path == "/oauth/v2/token"]
        return json.loads(token_requests[0].content)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(client_id="cid", client_secret="secret", username="alice", password="pw")


@pytest.fixture
def app_config() -> AppConfig:
    cfg = AppConfig()
    cfg.wallabag.base_url = BASE_URL
    cfg.logging.console = False
    return cfg


@pytest.fixture
def make_fake() -> Callable[..., FakeWallabag]:
    return FakeWallabag
