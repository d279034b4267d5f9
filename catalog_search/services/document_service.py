"""
Document service - use cases over the search engine.
Orchestrates query builder, store and result mapper; keeps resolvers thin.

Multi-step operations (check -> write -> re-read) are ordered round trips,
not transactions: a concurrent delete between steps surfaces as NotFoundError
or a stale read.
"""

import logging

from catalog_search.config import Settings
from catalog_search.core.exceptions import CatalogSearchError, EngineRejectedError, NotFoundError
from catalog_search.schemas.document import Document, DocumentCreate, DocumentUpdate, InteractionKind
from catalog_search.schemas.search import SearchQuery, SearchResult
from catalog_search.search.query import (
    build_listing_request,
    build_search_request,
    build_similarity_request,
    build_suggest_request,
)
from catalog_search.search.results import (
    distinct_values,
    map_hits,
    map_search_response,
    map_source,
    map_suggestions,
)
from catalog_search.search.store import DocumentStore, utc_now
from catalog_search.services.validation import (
    validate_document_create,
    validate_document_update,
    validate_search_query,
)

logger = logging.getLogger(__name__)

COUNTER_FIELDS = tuple(kind.value for kind in InteractionKind)


class DocumentService:
    """Handles all document use cases: CRUD, search, suggestions, recommendations."""

    def __init__(self, store: DocumentStore, settings: Settings):
        self.store = store
        self.settings = settings

    async def create(self, data: DocumentCreate) -> Document:
        """Write, then re-read so the caller gets the confirmed state."""
        logger.info("Creating document with title: %s", data.title)
        validate_document_create(data).raise_for_errors("create")
        now = utc_now()
        body = {k: v for k, v in data.model_dump(exclude={"id"}).items() if v is not None}
        body.update({name: 0 for name in COUNTER_FIELDS})
        body["created_at"] = now
        body["updated_at"] = now
        # Visible to the next search before we return
        doc_id = await self.store.put(data.id, body, refresh=True)
        created = await self.get(doc_id)
        if created is None:
            logger.error("create: document %s missing right after indexing", doc_id)
            raise EngineRejectedError(f"Failed to retrieve created document {doc_id}")
        return created

    async def get(self, doc_id: str) -> Document | None:
        source = await self.store.get(doc_id)
        if source is None:
            return None
        return map_source(source, self.settings.excerpt_length)

    async def update(self, doc_id: str, data: DocumentUpdate) -> Document:
        logger.info("Updating document with ID: %s", doc_id)
        validate_document_update(data).raise_for_errors("update")
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        await self.store.patch(doc_id, fields)
        updated = await self.get(doc_id)
        if updated is None:
            logger.warning("update: document %s deleted before re-read", doc_id)
            raise NotFoundError(doc_id)
        return updated

    async def delete(self, doc_id: str) -> None:
        logger.info("Deleting document with ID: %s", doc_id)
        await self.store.remove(doc_id)

    async def search(self, query: SearchQuery) -> SearchResult:
        logger.info("Searching documents with query: %r", query.query)
        validate_search_query(query).raise_for_errors("search")
        request = build_search_request(
            query,
            max_page_size=self.settings.max_page_size,
            default_page_size=self.settings.default_page_size,
        )
        raw = await self.store.execute(request)
        return map_search_response(
            raw,
            page=max(query.page, 1),
            page_size=request.size,
            excerpt_length=self.settings.excerpt_length,
        )

    async def suggest(self, prefix: str, limit: int | None = None) -> list[str]:
        """Title completions for `prefix`, never more than `suggestion_size`."""
        prefix = prefix.strip()
        if not prefix:
            return []
        cap = self.settings.suggestion_size
        limit = cap if limit is None else min(max(limit, 1), cap)
        raw = await self.store.execute(build_suggest_request(prefix, limit))
        return map_suggestions(raw, limit)

    async def recommend(self, doc_id: str, limit: int | None = None) -> list[Document]:
        """Documents similar to `doc_id` by title, category and tags. Never includes `doc_id`."""
        logger.info("Getting recommendations for document: %s", doc_id)
        if limit is None:
            limit = self.settings.default_recommendation_size
        limit = min(max(limit, 1), self.settings.max_page_size)
        source = await self.get(doc_id)
        if source is None:
            logger.warning("recommend: source document not found: id=%s", doc_id)
            raise NotFoundError(doc_id)
        # +1 in case the engine still returns the source document
        raw = await self.store.execute(build_similarity_request(source, limit + 1))
        documents = map_hits(raw, self.settings.excerpt_length)
        return [doc for doc in documents if doc.id != doc_id][:limit]

    async def list_categories(self) -> list[str]:
        logger.info("Getting all categories")
        return await self._distinct("category")

    async def list_tags(self) -> list[str]:
        logger.info("Getting all tags")
        return await self._distinct("tags")

    async def _distinct(self, attr: str) -> list[str]:
        # Client-side distinct over at most listing_fetch_limit documents
        try:
            raw = await self.store.execute(build_listing_request(self.settings.listing_fetch_limit))
            documents = map_hits(raw, self.settings.excerpt_length)
        except CatalogSearchError as e:
            logger.error("Error listing distinct %s: %s", attr, e)
            return []
        return distinct_values(documents, attr)

    async def health(self) -> bool:
        return await self.store.health()

    async def bulk_create(self, items: list[DocumentCreate]) -> list[str]:
        """Create documents one by one; stops at the first failure."""
        logger.info("Bulk indexing %d documents", len(items))
        ids: list[str] = []
        for item in items:
            try:
                created = await self.create(item)
            except CatalogSearchError as e:
                logger.error("Failed to index document %r after %d successes: %s", item.title, len(ids), e)
                raise
            ids.append(created.id)
        logger.info("Successfully indexed %d documents", len(ids))
        return ids

    async def search_by_category(self, category: str, limit: int = 10) -> list[Document]:
        logger.info("Searching documents by category: %s", category)
        result = await self.search(SearchQuery(category=category, page_size=limit))
        return result.documents

    async def search_by_tags(self, tags: list[str], limit: int = 10) -> list[Document]:
        logger.info("Searching documents by tags: %s", ", ".join(tags))
        result = await self.search(SearchQuery(tags=tags, page_size=limit))
        return result.documents

    async def record_interaction(self, doc_id: str, kind: InteractionKind) -> Document:
        """Increment one interaction counter and stamp last_interaction."""
        logger.info("Recording %s for document: %s", kind.value, doc_id)
        existing = await self.store.get(doc_id)
        if existing is None:
            logger.warning("record_interaction: document not found: id=%s", doc_id)
            raise NotFoundError(doc_id)
        counter = kind.value
        fields = {counter: int(existing.get(counter) or 0) + 1, "last_interaction": utc_now()}
        await self.store.patch(doc_id, fields)
        updated = await self.get(doc_id)
        if updated is None:
            raise NotFoundError(doc_id)
        return updated
