"""
Index management: make sure the documents index exists before first use.
Safe to call repeatedly and from several processes starting at once.
"""

import logging

from elasticsearch import ApiError, AsyncElasticsearch

from catalog_search.search.engine_errors import engine_errors

logger = logging.getLogger(__name__)

ALREADY_EXISTS = "resource_already_exists_exception"


async def ensure_index(
    client: AsyncElasticsearch,
    name: str,
    mappings: dict,
    settings: dict | None = None,
) -> bool:
    """Create index `name` if missing. Returns True only if this call created it."""
    with engine_errors("ensure_index"):
        if await client.indices.exists(index=name):
            logger.info("Index '%s' already exists", name)
            return False
    with engine_errors("ensure_index"):
        try:
            await client.indices.create(index=name, mappings=mappings, settings=settings or {})
        except ApiError as e:
            # Another process won the race between exists() and create()
            if e.error == ALREADY_EXISTS:
                logger.info("Index '%s' was created concurrently", name)
                return False
            raise
    logger.info("Index '%s' created successfully", name)
    return True


async def drop_index(client: AsyncElasticsearch, name: str) -> bool:
    """Delete index `name`. Returns False if it did not exist."""
    with engine_errors("drop_index"):
        if not await client.indices.exists(index=name):
            logger.info("Index '%s' does not exist", name)
            return False
        await client.indices.delete(index=name)
    logger.info("Index '%s' deleted", name)
    return True
