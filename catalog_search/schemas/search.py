"""Search request/response schemas."""

from enum import Enum

from pydantic import BaseModel

from catalog_search.schemas.document import Document


class SortOption(str, Enum):
    """Tiebreak applied after relevance score."""

    POPULARITY = "popularity"
    RECENCY = "recency"


class SearchQuery(BaseModel):
    """Caller search intent. Built per request, never persisted."""

    query: str | None = None

    # Exact-match filters
    brand: str | None = None
    color: str | None = None
    size: str | None = None
    category: str | None = None
    condition: str | None = None
    tags: list[str] | None = None

    # Range filters
    min_price: float | None = None
    max_price: float | None = None
    min_rating: float | None = None

    # Pagination and ordering
    page: int = 1
    page_size: int | None = None
    sort: SortOption = SortOption.POPULARITY


class SearchResult(BaseModel):
    documents: list[Document]
    total: int
    took: int
    page: int
    page_size: int
