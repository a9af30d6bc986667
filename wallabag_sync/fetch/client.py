"""
Wallabag REST API client.

This module authenticates against the Wallabag OAuth token endpoint and
pages through the entries listing. The server URL is configuration; the
client never retries a failed request.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from ..core.errors import AuthError, FetchError
from ..core.types import (
    AuthFailure,
    AuthResult,
    AuthSuccess,
    AuthToken,
    Credentials,
    Entry,
    EntryPage,
)

TOKEN_PATH = "/oauth/v2/token"
ENTRIES_PATH = "/api/entries.json"


class WallabagClient:
    """Async client for the Wallabag API.

    Use as an async context manager so the underlying connection pool
    is closed when the run ends:

        async with WallabagClient("https://app.wallabag.it") as client:
            token = await client.auth(credentials)
            entries = await client.fetch_entries(token)

    Args:
        base_url: Server root without trailing slash
        timeout_seconds: Request timeout
        per_page: Entries requested per page
        trust_env: Whether to respect system proxy settings
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 20.0,
        per_page: int = 30,
        trust_env: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.per_page = per_page
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            trust_env=trust_env,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "WallabagClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request_token(self, credentials: Credentials) -> AuthResult:
        """Request a bearer token with the password grant.

        Args:
            credentials: Client and user credentials

        Returns:
            AuthSuccess with the parsed token, or AuthFailure describing
            why the server (or the transport) rejected the request
        """
        body = {
            "grant_type": "password",
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "username": credentials.username,
            "password": credentials.password,
        }
        try:
            resp = await self._client.post(f"{self.base_url}{TOKEN_PATH}", json=body)
        except httpx.HTTPError as exc:
            return AuthFailure(error="transport_error", description=f"{type(exc).__name__}: {exc}")

        try:
            data = resp.json()
        except json.JSONDecodeError:
            return AuthFailure(
                error="invalid_response",
                description=f"HTTP {resp.status_code}: non-JSON response",
            )

        return _parse_auth_payload(data, resp.status_code)

    async def auth(self, credentials: Credentials) -> AuthToken:
        """Authenticate and return a token.

        Raises:
            AuthError: If the server rejects the credentials
        """
        result = await self.request_token(credentials)
        if isinstance(result, AuthFailure):
            raise AuthError(result.error, result.description)
        return result.token

    async def fetch_page(self, token: AuthToken, page: int = 1) -> EntryPage:
        """Fetch a single page of entries.

        Raises:
            FetchError: On transport errors, non-2xx responses or malformed payloads
        """
        try:
            resp = await self._client.get(
                f"{self.base_url}{ENTRIES_PATH}",
                params={"page": page, "perPage": self.per_page},
                headers={"Authorization": token.authorization},
            )
        except httpx.HTTPError as exc:
            raise FetchError(f"{type(exc).__name__}: {exc}") from exc

        if not resp.is_success:
            raise FetchError(
                f"Entries request failed: HTTP {resp.status_code} {resp.text[:200]}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except json.JSONDecodeError as exc:
            raise FetchError(f"Entries response is not JSON: {exc}", status_code=resp.status_code) from exc

        return _parse_entry_page(data, resp.status_code)

    async def fetch_entries(self, token: AuthToken) -> list[Entry]:
        """Fetch every entry across all pages, in server order."""
        entries: list[Entry] = []
        page = 1
        while True:
            result = await self.fetch_page(token, page)
            entries.extend(result.items)
            page += 1
            if not result.items or page > result.pages:
                break
        return entries


def _parse_auth_payload(data: Any, status_code: int) -> AuthResult:
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return AuthFailure(error=data["error"], description=data.get("error_description") or "")

    if not isinstance(data, dict) or not isinstance(data.get("access_token"), str):
        return AuthFailure(
            error="invalid_response",
            description=f"HTTP {status_code}: token payload missing access_token",
        )

    return AuthSuccess(
        token=AuthToken(
            access_token=data["access_token"],
            expires_in=int(data.get("expires_in") or 0),
            refresh_token=data.get("refresh_token") or "",
            token_type=data.get("token_type") or "bearer",
        )
    )


def _parse_entry_page(data: Any, status_code: int) -> EntryPage:
    try:
        items = data["_embedded"]["items"]
        entries = [Entry.from_api(item) for item in items]
        return EntryPage(
            limit=int(data.get("limit") or len(entries)),
            page=int(data["page"]),
            pages=int(data["pages"]),
            items=entries,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise FetchError(
            f"Malformed entries payload: {type(exc).__name__}: {exc}",
            status_code=status_code,
        ) from exc
