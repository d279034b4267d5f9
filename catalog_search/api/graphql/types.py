"""GraphQL object and input types, plus conversion to and from the pydantic schemas."""

import dataclasses
from datetime import datetime
from typing import Any

import strawberry

from catalog_search.schemas.document import Document, DocumentCreate, DocumentUpdate, InteractionKind
from catalog_search.schemas.search import SearchQuery, SearchResult, SortOption

SortOptionEnum = strawberry.enum(SortOption, name="SortOption")
InteractionKindEnum = strawberry.enum(InteractionKind, name="InteractionKind")


def _values(obj: Any, drop_none: bool = False) -> dict[str, Any]:
    values = {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if drop_none:
        values = {k: v for k, v in values.items() if v is not None}
    return values


@strawberry.type
class DocumentType:
    id: strawberry.ID
    title: str
    description: str
    category: str | None
    brand: str | None
    condition: str | None
    size: str | None
    color: str | None
    material: str | None
    status: str | None
    seller_id: str | None
    thumbnail_url: str | None
    tags: list[str]
    price: float | None
    discount: float | None
    rating: float | None
    popularity_score: float
    is_boosted: bool
    views: int
    clicks: int
    likes: int
    saves: int
    created_at: datetime | None
    updated_at: datetime | None
    last_interaction: datetime | None
    formatted_price: str
    formatted_rating: str
    excerpt: str

    @classmethod
    def from_model(cls, document: Document) -> "DocumentType":
        names = {f.name for f in dataclasses.fields(cls)}
        return cls(**document.model_dump(include=names))


@strawberry.type
class SearchResultType:
    documents: list[DocumentType]
    total: int
    took: int
    page: int
    page_size: int

    @classmethod
    def from_model(cls, result: SearchResult) -> "SearchResultType":
        return cls(
            documents=[DocumentType.from_model(d) for d in result.documents],
            total=result.total,
            took=result.took,
            page=result.page,
            page_size=result.page_size,
        )


@strawberry.type
class SearchResponse:
    success: bool
    message: str | None = None
    result: SearchResultType | None = None


@strawberry.type
class RecommendationsResponse:
    success: bool
    message: str | None = None
    documents: list[DocumentType] = strawberry.field(default_factory=list)


@strawberry.type
class DocumentResponse:
    success: bool
    message: str | None = None
    document: DocumentType | None = None


@strawberry.type
class BulkCreateResponse:
    success: bool
    message: str | None = None
    ids: list[strawberry.ID] = strawberry.field(default_factory=list)


@strawberry.input
class DocumentInput:
    title: str
    description: str = ""
    category: str | None = None
    brand: str | None = None
    condition: str | None = None
    size: str | None = None
    color: str | None = None
    material: str | None = None
    status: str | None = None
    seller_id: str | None = None
    thumbnail_url: str | None = None
    tags: list[str] = strawberry.field(default_factory=list)
    price: float | None = None
    discount: float | None = None
    rating: float | None = None
    popularity_score: float = 0.0
    is_boosted: bool = False
    id: strawberry.ID | None = None

    def to_model(self) -> DocumentCreate:
        return DocumentCreate(**_values(self))


@strawberry.input
class DocumentUpdateInput:
    title: str | None = None
    description: str | None = None
    category: str | None = None
    brand: str | None = None
    condition: str | None = None
    size: str | None = None
    color: str | None = None
    material: str | None = None
    status: str | None = None
    seller_id: str | None = None
    thumbnail_url: str | None = None
    tags: list[str] | None = None
    price: float | None = None
    discount: float | None = None
    rating: float | None = None
    popularity_score: float | None = None
    is_boosted: bool | None = None

    def to_model(self) -> DocumentUpdate:
        # Omitted and null fields both mean "leave unchanged"
        return DocumentUpdate(**_values(self, drop_none=True))


@strawberry.input
class SearchInput:
    query: str | None = None
    brand: str | None = None
    color: str | None = None
    size: str | None = None
    category: str | None = None
    condition: str | None = None
    tags: list[str] | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_rating: float | None = None
    page: int = 1
    page_size: int | None = None
    sort: SortOptionEnum = SortOption.POPULARITY

    def to_model(self) -> SearchQuery:
        return SearchQuery(**_values(self))
