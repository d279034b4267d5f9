"""
Translate search engine client exceptions into the service error taxonomy.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from elasticsearch import ApiError, TransportError
from elasticsearch import NotFoundError as ESNotFoundError

from catalog_search.core.exceptions import (
    EngineRejectedError,
    EngineUnavailableError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


@contextmanager
def engine_errors(operation: str, doc_id: str | None = None) -> Iterator[None]:
    """Wrap one engine round trip. A 404 on a document operation becomes NotFoundError."""
    try:
        yield
    except ESNotFoundError as e:
        if doc_id is not None:
            logger.warning("%s: document not found in engine: id=%s", operation, doc_id)
            raise NotFoundError(doc_id) from e
        logger.error("%s rejected by engine: status=404 error=%s", operation, e.error)
        raise EngineRejectedError(f"{operation}: {e.error}", status=404, error_type=e.error) from e
    except ApiError as e:
        status = e.meta.status if e.meta is not None else None
        logger.error(
            "%s rejected by engine: id=%s status=%s error=%s", operation, doc_id, status, e.error
        )
        raise EngineRejectedError(f"{operation}: {e.error}", status=status, error_type=e.error) from e
    except TransportError as e:
        logger.error("%s failed: id=%s engine unavailable: %s", operation, doc_id, e)
        raise EngineUnavailableError(f"{operation}: search engine unavailable ({e})") from e
