"""Requests concerning the collections themselves rather than their records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from pbkit.shared.models import ListResult

if TYPE_CHECKING:
    from pbkit.client.pocketbase import PocketBase

logger = logging.getLogger(__name__)


class CollectionService:
    """Superuser-only ``/api/collections`` routes."""

    base_crud_path = "/api/collections"

    def __init__(self, pb: PocketBase) -> None:
        self._pb = pb

    def _path(self, id_or_name: str) -> str:
        return f"{self.base_crud_path}/{quote(id_or_name, safe='')}"

    async def get_full_list(self, *, batch: int = 500) -> list[dict[str, Any]]:
        """Return every collection definition, system ones included."""
        if batch <= 0:
            raise ValueError("batch must be a positive integer")

        collections: list[dict[str, Any]] = []
        page = 1
        while True:
            data = await self._pb.send(
                "GET",
                self.base_crud_path,
                params={"page": str(page), "perPage": str(batch), "skipTotal": "1"},
            )
            result = ListResult.model_validate(data or {})
            collections.extend(result.items)
            if len(result.items) < result.per_page or not result.items:
                break
            page += 1

        return collections

    async def get_one(self, id_or_name: str) -> dict[str, Any]:
        return await self._pb.send("GET", self._path(id_or_name))

    async def truncate(self, id_or_name: str) -> None:
        """Delete every record of a collection, keeping its schema."""
        await self._pb.send("DELETE", f"{self._path(id_or_name)}/truncate")
        logger.info("truncated collection %s", id_or_name)
