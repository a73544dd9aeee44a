"""Async PocketBase REST client."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from pbkit.client.auth_store import AuthStore
from pbkit.client.collection_service import CollectionService
from pbkit.client.record_service import RecordService
from pbkit.shared.exceptions import ApiError, TransportError
from pbkit.shared.models import ResponseError

logger = logging.getLogger(__name__)


class PocketBase:
    """Entry point to a PocketBase server.

    All services share one ``httpx.AsyncClient`` and one ``AuthStore``; the
    stored token is attached to every request as a bearer token.

    Usage::

        async with PocketBase("http://localhost:8090/") as pb:
            await pb.collection("_superusers").auth_with_password(email, password)
            articles = await pb.collection("articles").get_full_list()
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: int = 30,
        auth_store: AuthStore | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self.auth_store = auth_store or AuthStore()
        self.collections = CollectionService(self)

    @property
    def base_url(self) -> str:
        return self._base_url

    def collection(self, id_or_name: str) -> RecordService:
        """Return the records service of a collection."""
        return RecordService(self, id_or_name)

    async def send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        """Send an API request and return the decoded JSON body.

        Returns ``None`` for empty bodies (e.g. ``204 No Content``).

        Raises:
            ApiError: If the server answers with a 4xx/5xx status.
            TransportError: If no response could be obtained.
        """
        headers: dict[str, str] = {}
        if self.auth_store.token:
            headers["Authorization"] = f"Bearer {self.auth_store.token}"

        try:
            resp = await self._client.request(
                method,
                f"{self._base_url}{path}",
                params=params or None,
                json=json,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"PocketBase request failed: {method} {path}: {exc!r}") from exc

        logger.debug("%s %s -> %d", method, path, resp.status_code)

        if resp.is_error:
            raise _to_api_error(resp)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(resp.status_code, f"invalid JSON response: {resp.text[:200]}") from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> PocketBase:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _to_api_error(resp: httpx.Response) -> ApiError:
    """Map an error response to ``ApiError``, preferring the server's error body."""
    try:
        body = ResponseError.model_validate(resp.json())
    except (ValueError, ValidationError):
        return ApiError(resp.status_code, resp.text[:200] or resp.reason_phrase)
    return ApiError(resp.status_code, body.message or resp.reason_phrase, body.data)
