"""Records CRUD and password authentication for one collection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from pydantic import ValidationError

from pbkit.shared.exceptions import ApiError
from pbkit.shared.models import AuthRecord, AuthResponse, ListResult
from pbkit.shared.options import ListOptions, ViewOptions

if TYPE_CHECKING:
    from pbkit.client.pocketbase import PocketBase

logger = logging.getLogger(__name__)


class RecordService:
    """Requests against ``/api/collections/{collection}/records``."""

    def __init__(self, pb: PocketBase, collection_id_or_name: str) -> None:
        self._pb = pb
        self._collection = collection_id_or_name

    @property
    def collection_id_or_name(self) -> str:
        return self._collection

    @property
    def base_path(self) -> str:
        return f"/api/collections/{quote(self._collection, safe='')}"

    def _record_path(self, record_id: str) -> str:
        return f"{self.base_path}/records/{quote(record_id, safe='')}"

    async def get_list(self, options: ListOptions | None = None) -> ListResult:
        """Fetch one page of records."""
        params = options.to_params() if options else None
        data = await self._pb.send("GET", f"{self.base_path}/records", params=params)
        return ListResult.model_validate(data or {})

    async def get_one(self, record_id: str, options: ViewOptions | None = None) -> dict[str, Any]:
        """Fetch a record by ID; the server answers 404 when it does not exist."""
        params = options.to_params() if options else None
        return await self._pb.send("GET", self._record_path(record_id), params=params)

    async def get_full_list(self, *, batch: int = 1000, options: ViewOptions | None = None) -> list[dict[str, Any]]:
        """Fetch every record, page by page, without counting totals."""
        if batch <= 0:
            raise ValueError("batch must be a positive integer")

        items: list[dict[str, Any]] = []
        page = 1
        while True:
            list_options = ListOptions.from_view(page=page, per_page=batch, view=options)
            result = await self.get_list(list_options)
            items.extend(result.items)
            if len(result.items) < result.per_page or not result.items:
                break
            page += 1

        logger.debug("fetched %d records from %s in %d page(s)", len(items), self._collection, page)
        return items

    async def get_first_list_item(self, filter: str, options: ViewOptions | None = None) -> dict[str, Any]:
        """Return the first record matching ``filter``.

        Raises:
            ApiError: With status 404 if nothing matches, like ``get_one``.
        """
        list_options = ListOptions.from_view(page=1, per_page=1, filter=filter, view=options)
        result = await self.get_list(list_options)
        if not result.items:
            raise ApiError(404, "There is no record matching the filter.")
        return result.items[0]

    async def create(self, body: dict[str, Any], options: ViewOptions | None = None) -> dict[str, Any]:
        params = options.to_params() if options else None
        return await self._pb.send("POST", f"{self.base_path}/records", params=params, json=body)

    async def update(
        self,
        record_id: str,
        body: dict[str, Any],
        options: ViewOptions | None = None,
    ) -> dict[str, Any]:
        """Update a record; refreshes the auth store when it is the authenticated record."""
        params = options.to_params() if options else None
        data = await self._pb.send("PATCH", self._record_path(record_id), params=params, json=body)

        if isinstance(data, dict) and self._is_auth_record(data.get("id")):
            self._pb.auth_store.set_record(AuthRecord.model_validate(data))
        return data

    async def delete(self, record_id: str) -> None:
        """Delete a record; clears the auth store when it is the authenticated record."""
        await self._pb.send("DELETE", self._record_path(record_id))
        if self._is_auth_record(record_id):
            self._pb.auth_store.clear()
        logger.info("deleted record %s from %s", record_id, self._collection)

    async def auth_with_password(self, identity: str, password: str) -> AuthResponse:
        """Authenticate with an identity (usually an email) and a password."""
        data = await self._pb.send(
            "POST",
            f"{self.base_path}/auth-with-password",
            json={"identity": identity, "password": password},
        )
        return self._save_auth(data)

    async def auth_refresh(self) -> AuthResponse:
        """Exchange the stored token for a fresh one."""
        data = await self._pb.send("POST", f"{self.base_path}/auth-refresh")
        return self._save_auth(data)

    def _save_auth(self, data: Any) -> AuthResponse:
        try:
            response = AuthResponse.model_validate(data)
        except ValidationError as exc:
            raise ApiError(200, f"unexpected auth response: {exc}") from exc
        self._pb.auth_store.save(response.token, response.record)
        logger.info("authenticated as %s in %s", response.record.id, response.record.collection_name)
        return response

    def _is_auth_record(self, record_id: object) -> bool:
        store = self._pb.auth_store
        if not store.record_id or record_id != store.record_id:
            return False
        return self._collection in (store.collection_id, store.collection_name)
