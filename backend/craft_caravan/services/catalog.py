import logging
from dataclasses import dataclass
from typing import Any

from craft_caravan.errors import RecordStoreError
from craft_caravan.services.record_store import Ordering, RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogResult:
    data: Any = None
    error: str | None = None
    not_found: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogService:
    """Read-only queries behind the collection, item and journal pages."""

    def __init__(self, store: RecordStore):
        self.store = store

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    async def get_collections(self) -> CatalogResult:
        return await self._many(
            "collections",
            ordering=[("travel_date", True)],
        )

    async def get_current_collection(self) -> CatalogResult:
        return await self._one("collections", {"is_current": True}, "Current collection")

    async def get_archived_collections(self) -> CatalogResult:
        """All collections except the one currently on sale."""
        result = await self.get_collections()
        if not result.ok:
            return result
        return CatalogResult(data=[c for c in result.data if not c.get("is_current")])

    async def get_collection_by_slug(self, slug: str) -> CatalogResult:
        return await self._one("collections", {"slug": slug}, "Collection")

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    async def get_items_by_collection(self, collection_id: str) -> CatalogResult:
        return await self._many(
            "items",
            filters={"collection_id": collection_id},
            ordering=[("featured", True), ("created_at", True)],
        )

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    async def get_posts(
        self,
        limit: int | None = None,
        category: str | None = None,
    ) -> CatalogResult:
        filters: dict[str, Any] = {"is_published": True}
        if category and category != "all":
            filters["category"] = category

        result = await self._many(
            "posts",
            filters=filters,
            ordering=[("published_at", True)],
            limit=limit,
        )
        if result.ok:
            logger.info("Fetched %d posts (category=%s)", len(result.data), category)
        return result

    async def get_post_by_slug(self, slug: str) -> CatalogResult:
        return await self._one("posts", {"slug": slug, "is_published": True}, "Post")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _many(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        ordering: Ordering | None = None,
        limit: int | None = None,
    ) -> CatalogResult:
        try:
            rows = await self.store.query(table, filters, ordering, limit)
        except RecordStoreError as e:
            logger.error("Error fetching %s: %s (code=%s)", table, e.message, e.code)
            return CatalogResult(error=e.message)
        return CatalogResult(data=rows)

    async def _one(self, table: str, filters: dict[str, Any], label: str) -> CatalogResult:
        result = await self._many(table, filters=filters, limit=1)
        if not result.ok:
            return result
        if not result.data:
            return CatalogResult(error=f"{label} not found", not_found=True)
        return CatalogResult(data=result.data[0])
