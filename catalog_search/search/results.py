"""
Result mapping: raw engine hits into typed documents with derived fields.
"""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError as SchemaError

from catalog_search.core.exceptions import EngineRejectedError
from catalog_search.schemas.document import Document
from catalog_search.schemas.search import SearchResult
from catalog_search.search.query import SUGGEST_NAME
from catalog_search.search.store import RawSearchResponse

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 150


def format_price(price: float | None) -> str:
    if price is None:
        return "N/A"
    return f"${price:.2f}"


def format_rating(rating: float | None) -> str:
    if rating is None:
        return "No rating"
    return f"{rating:.1f}/5.0"


def make_excerpt(text: str | None, max_length: int = EXCERPT_LENGTH) -> str:
    """First `max_length` characters, with an ellipsis only when something was cut."""
    text = text or ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def map_source(source: dict[str, Any], excerpt_length: int = EXCERPT_LENGTH) -> Document:
    """Stored fields (including `id`) to a Document with derived fields filled in.

    Null stored values fall back to the model defaults. A source that still does
    not fit the document model raises EngineRejectedError.
    """
    data = {k: v for k, v in source.items() if v is not None}
    try:
        document = Document.model_validate(data)
    except SchemaError as e:
        logger.error("map: stored document %s does not fit the document model: %s", source.get("id"), e)
        raise EngineRejectedError(f"Stored document {source.get('id')} is malformed") from e
    document.formatted_price = format_price(document.price)
    document.formatted_rating = format_rating(document.rating)
    document.excerpt = make_excerpt(document.description, excerpt_length)
    return document


def map_hit(hit: dict[str, Any], excerpt_length: int = EXCERPT_LENGTH) -> Document:
    return map_source({**(hit.get("_source") or {}), "id": hit["_id"]}, excerpt_length)


def map_hits(raw: RawSearchResponse, excerpt_length: int = EXCERPT_LENGTH) -> list[Document]:
    """Engine order is preserved."""
    return [map_hit(hit, excerpt_length) for hit in raw.hits]


def map_search_response(
    raw: RawSearchResponse,
    page: int,
    page_size: int,
    excerpt_length: int = EXCERPT_LENGTH,
) -> SearchResult:
    return SearchResult(
        documents=map_hits(raw, excerpt_length),
        total=raw.total,
        took=raw.took,
        page=page,
        page_size=page_size,
    )


def map_suggestions(raw: RawSearchResponse, limit: int, name: str = SUGGEST_NAME) -> list[str]:
    """Completion options in engine order, deduplicated, at most `limit`."""
    seen: set[str] = set()
    suggestions: list[str] = []
    for entry in raw.suggest.get(name) or []:
        for option in entry.get("options", []):
            text = option.get("text")
            if not text or text in seen:
                continue
            seen.add(text)
            suggestions.append(text)
            if len(suggestions) >= limit:
                return suggestions
    return suggestions


def distinct_values(documents: Iterable[Document], attr: str) -> list[str]:
    """Sorted distinct values of `attr` (scalar or list) across `documents`.

    Only sees the documents that were fetched, so over a large corpus this is
    an approximation bounded by the fetch limit, not an exact distinct set.
    """
    values: set[str] = set()
    for doc in documents:
        value = getattr(doc, attr, None)
        if isinstance(value, list):
            values.update(v for v in value if v)
        elif value:
            values.add(value)
    return sorted(values)
