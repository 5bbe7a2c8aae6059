"""Thin Realtime Database REST client (no firebase-admin).

Uses google-auth for service account tokens and the Realtime Database REST
API (``{databaseURL}/{path}.json``). Keeps the serverless bundle small
(avoids grpcio / firebase-admin). All HTTP calls use httpx.AsyncClient so
they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx

from askfreely.infrastructure.firebase.reference import DatabaseReference, normalize_path

_DATABASE_SCOPES = [
    "https://www.googleapis.com/auth/firebase.database",
    "https://www.googleapis.com/auth/userinfo.email",
]


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for the Realtime Database."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=_DATABASE_SCOPES
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: Any = None,
    params: dict[str, str] | None = None,
    access_token: str | None = None,
) -> Any:
    """Perform async HTTP request to the Realtime Database REST API.

    Missing locations come back as JSON null (None). Non-2xx raises
    httpx.HTTPStatusError.
    """
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers, params=params)
    elif method in ("PUT", "PATCH", "POST"):
        resp = await client.request(method, url, headers=headers, json=body, params=params)
    elif method == "DELETE":
        resp = await client.delete(url, headers=headers)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    resp.raise_for_status()
    raw = resp.content
    return json.loads(raw.decode()) if raw else None


def _sorted_by_key(data: Any) -> dict[str, Any]:
    """REST query results are unordered JSON objects; restore key order."""
    if not isinstance(data, dict):
        return {}
    return {key: data[key] for key in sorted(data)}


class RealtimeDatabaseRESTClient:
    """Lightweight Realtime Database client using the REST API."""

    def __init__(
        self,
        database_url: str,
        credentials=None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base = database_url.rstrip("/")
        self._credentials = credentials
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str | None:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        if self._credentials is None:
            return None
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def reference(self, path: str = "") -> DatabaseReference:
        return DatabaseReference(self, path)

    def _url(self, path: str) -> str:
        path = normalize_path(path)
        return f"{self._base}/{path}.json" if path else f"{self._base}/.json"

    async def read(self, path: str) -> Any:
        return await _request_async(
            self._http, self._url(path), access_token=await self.get_token()
        )

    async def write(self, path: str, value: Any) -> None:
        if value is None:
            await _request_async(
                self._http,
                self._url(path),
                method="DELETE",
                access_token=await self.get_token(),
            )
            return
        await _request_async(
            self._http,
            self._url(path),
            method="PUT",
            body=value,
            params={"print": "silent"},
            access_token=await self.get_token(),
        )

    async def patch(self, path: str, values: dict[str, Any]) -> None:
        await _request_async(
            self._http,
            self._url(path),
            method="PATCH",
            body=values,
            params={"print": "silent"},
            access_token=await self.get_token(),
        )

    async def append(self, path: str, value: Any) -> str:
        """POST generates the push key server-side; response is {"name": key}."""
        out = await _request_async(
            self._http,
            self._url(path),
            method="POST",
            body=value,
            access_token=await self.get_token(),
        )
        if not isinstance(out, dict) or not out.get("name"):
            raise ValueError(f"Unexpected push response for {path!r}: {out!r}")
        return out["name"]

    async def increment(self, path: str, field: str, delta: int) -> None:
        await self.patch(path, {field: {".sv": {"increment": delta}}})

    async def query_equal(
        self, path: str, child: str, value: Any, limit: int | None
    ) -> dict[str, Any]:
        # Query parameters are JSON-encoded ("status" -> '"status"').
        params = {"orderBy": json.dumps(child), "equalTo": json.dumps(value)}
        if limit:
            params["limitToFirst"] = str(limit)
        out = await _request_async(
            self._http,
            self._url(path),
            params=params,
            access_token=await self.get_token(),
        )
        return _sorted_by_key(out)
