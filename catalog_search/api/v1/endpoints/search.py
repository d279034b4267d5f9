"""
Search endpoints - REST mirror of the GraphQL search and suggest queries.
"""

from fastapi import APIRouter, Query

from catalog_search.core.dependencies import DocumentServiceDep
from catalog_search.schemas.search import SearchQuery, SearchResult, SortOption

router = APIRouter()


@router.get("/documents", response_model=SearchResult)
async def search_documents(
    service: DocumentServiceDep,
    q: str | None = None,
    brand: str | None = None,
    color: str | None = None,
    size: str | None = None,
    category: str | None = None,
    condition: str | None = None,
    tags: list[str] | None = Query(None),
    min_price: float | None = None,
    max_price: float | None = None,
    min_rating: float | None = None,
    page: int = 1,
    page_size: int | None = None,
    sort: SortOption = SortOption.POPULARITY,
):
    """Full-text search with exact and range filters. Page size is clamped server-side."""
    query = SearchQuery(
        query=q,
        brand=brand,
        color=color,
        size=size,
        category=category,
        condition=condition,
        tags=tags,
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        page=page,
        page_size=page_size,
        sort=sort,
    )
    return await service.search(query)


@router.get("/suggest", response_model=list[str])
async def suggest(service: DocumentServiceDep, prefix: str = Query(..., min_length=1)):
    """Title completions for a prefix."""
    return await service.suggest(prefix)
