"""
Document store - typed wrapper over index/get/update/delete/search on one index.
Every call is one round trip; engine failures are translated by `engine_errors`.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from elasticsearch import AsyncElasticsearch

from catalog_search.core.exceptions import NotFoundError
from catalog_search.search.engine_errors import engine_errors
from catalog_search.search.query import SearchRequest

logger = logging.getLogger(__name__)

# Never overwritten by a patch
IMMUTABLE_FIELDS = ("id", "created_at")


@dataclass
class RawSearchResponse:
    """Engine search response reduced to what the result mapper needs."""

    hits: list[dict[str, Any]]
    total: int
    took: int
    suggest: dict[str, Any] = field(default_factory=dict)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def next_timestamp(previous: str | None) -> str:
    """Current time, but never earlier than `previous` (clock skew between writers)."""
    now = datetime.now(timezone.utc)
    if previous:
        try:
            now = max(now, _parse_timestamp(previous))
        except ValueError:
            logger.warning("Unparseable stored timestamp %r, using current time", previous)
    return now.isoformat()


def _body(response: Any) -> dict[str, Any]:
    # Client returns ObjectApiResponse; support both .body and dict access
    return getattr(response, "body", response)


def _refresh_kwargs(refresh: bool) -> dict[str, Any]:
    # wait_for: the write is visible to the next search before the call returns
    return {"refresh": "wait_for"} if refresh else {}


class DocumentStore:
    """Adapter for a single named index."""

    def __init__(self, client: AsyncElasticsearch, index: str):
        self.client = client
        self.index = index

    async def put(self, doc_id: str | None, document: dict[str, Any], refresh: bool = False) -> str:
        """Upsert a document. Returns its id (generated when doc_id is None).

        The id is also written into the source so it can serve as a sort key.
        """
        if doc_id is None:
            doc_id = uuid.uuid4().hex
        with engine_errors("put"):
            response = await self.client.index(
                index=self.index,
                id=doc_id,
                document={**document, "id": doc_id},
                **_refresh_kwargs(refresh),
            )
        new_id = _body(response)["_id"]
        logger.info("Document indexed with ID: %s", new_id)
        return new_id

    async def get(self, doc_id: str) -> dict[str, Any] | None:
        """Stored fields plus `id`, or None when absent."""
        with engine_errors("get", doc_id):
            response = await self.client.options(ignore_status=404).get(index=self.index, id=doc_id)
        body = _body(response)
        if not body.get("found"):
            return None
        return {**body.get("_source", {}), "id": body["_id"]}

    async def patch(self, doc_id: str, fields: dict[str, Any], refresh: bool = False) -> None:
        """Merge `fields` into an existing document and bump updated_at."""
        existing = await self.get(doc_id)
        if existing is None:
            logger.warning("patch: document not found: id=%s", doc_id)
            raise NotFoundError(doc_id)
        changes = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
        changes["updated_at"] = next_timestamp(existing.get("updated_at"))
        with engine_errors("patch", doc_id):
            await self.client.update(index=self.index, id=doc_id, doc=changes, **_refresh_kwargs(refresh))
        logger.info("Document %s updated successfully", doc_id)

    async def remove(self, doc_id: str, refresh: bool = False) -> None:
        """Delete by id. NotFoundError when absent."""
        if await self.get(doc_id) is None:
            logger.warning("remove: document not found: id=%s", doc_id)
            raise NotFoundError(doc_id)
        with engine_errors("remove", doc_id):
            await self.client.delete(index=self.index, id=doc_id, **_refresh_kwargs(refresh))
        logger.info("Document %s deleted successfully", doc_id)

    async def execute(self, request: SearchRequest) -> RawSearchResponse:
        """Run a prebuilt search request."""
        with engine_errors("search"):
            response = await self.client.search(index=self.index, **request.to_kwargs())
        body = _body(response)
        hits = body.get("hits", {})
        total = hits.get("total")
        total_val = total.get("value", 0) if isinstance(total, dict) else int(total or 0)
        return RawSearchResponse(
            hits=hits.get("hits", []),
            total=total_val,
            took=body.get("took", 0),
            suggest=body.get("suggest") or {},
        )

    async def health(self) -> bool:
        """Cluster liveness probe. Any failure reads as unhealthy."""
        try:
            await self.client.cluster.health()
            return True
        except Exception as e:
            logger.error("Search engine health check failed: %s", e)
            return False
