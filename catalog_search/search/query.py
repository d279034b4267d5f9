"""
Search query construction.

Queries are assembled from small typed clauses and serialized into the
engine's query DSL only at the edge (`SearchRequest.to_kwargs`). Every
builder in this module is pure: the same input always yields the same
request, whatever order the caller filled in its optional fields.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from catalog_search.schemas.document import Document
from catalog_search.schemas.search import SearchQuery, SortOption

# Title weighs more than description and brand
TEXT_FIELDS = ("title^3", "description", "brand")
SIMILARITY_TEXT_FIELDS = ("title^2", "description")

# (query attribute, index field) for exact-match filters, in clause order
EXACT_FILTERS = (
    ("brand", "brand.keyword"),
    ("color", "color"),
    ("size", "size"),
    ("category", "category"),
    ("condition", "condition"),
)

SORT_FIELDS = {
    SortOption.POPULARITY: "popularity_score",
    SortOption.RECENCY: "created_at",
}

# Unique per document, last resort for equal scores and equal sort values
TIEBREAK_FIELD = "id"

SUGGEST_NAME = "title_suggest"
SUGGEST_FIELD = "title.suggest"


class Clause(ABC):
    """Base query clause."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class MatchAll(Clause):
    def to_dict(self) -> dict[str, Any]:
        return {"match_all": {}}


@dataclass(frozen=True)
class MultiMatch(Clause):
    """Full-text match over several weighted fields."""

    query: str
    fields: tuple[str, ...]
    fuzziness: str | None = "AUTO"

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query, "fields": list(self.fields)}
        if self.fuzziness:
            body["fuzziness"] = self.fuzziness
        return {"multi_match": body}


@dataclass(frozen=True)
class Term(Clause):
    """Exact value equality."""

    field: str
    value: Any
    boost: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        if self.boost != 1.0:
            return {"term": {self.field: {"value": self.value, "boost": self.boost}}}
        return {"term": {self.field: self.value}}


@dataclass(frozen=True)
class Terms(Clause):
    """Any-of exact values."""

    field: str
    values: tuple[Any, ...]
    boost: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {self.field: list(self.values)}
        if self.boost != 1.0:
            body["boost"] = self.boost
        return {"terms": body}


@dataclass(frozen=True)
class Range(Clause):
    """Inclusive range. Only the supplied bounds are emitted."""

    field: str
    gte: float | None = None
    lte: float | None = None

    def __post_init__(self):
        if self.gte is None and self.lte is None:
            raise ValueError(f"range on {self.field!r} needs at least one bound")

    def to_dict(self) -> dict[str, Any]:
        bounds: dict[str, Any] = {}
        if self.gte is not None:
            bounds["gte"] = self.gte
        if self.lte is not None:
            bounds["lte"] = self.lte
        return {"range": {self.field: bounds}}


@dataclass(frozen=True)
class Ids(Clause):
    values: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"ids": {"values": list(self.values)}}


@dataclass
class Bool(Clause):
    """Boolean combinator. Empty clause lists are left out of the output."""

    must: list[Clause] = field(default_factory=list)
    should: list[Clause] = field(default_factory=list)
    must_not: list[Clause] = field(default_factory=list)
    filter: list[Clause] = field(default_factory=list)
    minimum_should_match: int | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for name in ("must", "should", "must_not", "filter"):
            clauses = getattr(self, name)
            if clauses:
                body[name] = [c.to_dict() for c in clauses]
        if self.minimum_should_match is not None:
            body["minimum_should_match"] = self.minimum_should_match
        return {"bool": body}


@dataclass(frozen=True)
class SortField:
    field: str
    order: str = "desc"
    missing: str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"order": self.order}
        if self.missing:
            body["missing"] = self.missing
        return {self.field: body}


@dataclass
class SearchRequest:
    """One search round trip: query, ordering, window and optional suggesters."""

    query: Clause | None = None
    sort: list[SortField] = field(default_factory=list)
    offset: int = 0
    size: int = 10
    suggest: dict[str, Any] | None = None

    def to_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the client's search call."""
        kwargs: dict[str, Any] = {"from_": self.offset, "size": self.size}
        if self.query is not None:
            kwargs["query"] = self.query.to_dict()
        if self.sort:
            kwargs["sort"] = [s.to_dict() for s in self.sort]
        if self.suggest:
            kwargs["suggest"] = self.suggest
        return kwargs


def paginate(page: int | None, page_size: int | None, max_page_size: int, default_page_size: int) -> tuple[int, int]:
    """Return (offset, size). Page floored to 1, size clamped to [1, max_page_size]."""
    page = max(page or 1, 1)
    size = default_page_size if page_size is None else page_size
    size = min(max(size, 1), max_page_size)
    return (page - 1) * size, size


def relevance_sort(option: SortOption = SortOption.POPULARITY) -> list[SortField]:
    """Score first, then a deterministic tiebreak."""
    return [
        SortField("_score"),
        SortField(SORT_FIELDS[option], missing="_last"),
        SortField(TIEBREAK_FIELD, order="asc"),
    ]


def build_filters(query: SearchQuery) -> list[Clause]:
    """One must-clause per supplied filter (price bounds share one range clause)."""
    clauses: list[Clause] = []
    for attr, index_field in EXACT_FILTERS:
        value = getattr(query, attr)
        if value:
            clauses.append(Term(index_field, value))
    if query.tags:
        clauses.append(Terms("tags", tuple(sorted(set(query.tags)))))
    if query.min_price is not None or query.max_price is not None:
        clauses.append(Range("price", gte=query.min_price, lte=query.max_price))
    if query.min_rating is not None:
        clauses.append(Range("rating", gte=query.min_rating))
    return clauses


def build_search_request(
    query: SearchQuery,
    max_page_size: int = 100,
    default_page_size: int = 20,
) -> SearchRequest:
    """Translate a search query into a bool query with boost preference and pagination."""
    must: list[Clause] = []
    text = (query.query or "").strip()
    if text:
        must.append(MultiMatch(text, TEXT_FIELDS))
    must.extend(build_filters(query))

    offset, size = paginate(query.page, query.page_size, max_page_size, default_page_size)
    return SearchRequest(
        # Boosted items rank higher but are never required
        query=Bool(must=must, should=[Term("is_boosted", True)], minimum_should_match=0),
        sort=relevance_sort(query.sort),
        offset=offset,
        size=size,
    )


def build_suggest_request(prefix: str, size: int) -> SearchRequest:
    """Prefix completion on the title completion sub-field. No hits are fetched."""
    return SearchRequest(
        size=0,
        suggest={
            SUGGEST_NAME: {
                "prefix": prefix,
                "completion": {"field": SUGGEST_FIELD, "size": size, "skip_duplicates": True},
            }
        },
    )


def build_similarity_request(document: Document, size: int) -> SearchRequest:
    """Documents sharing title terms, category or tags with `document`, excluding itself."""
    should: list[Clause] = []
    if document.title:
        should.append(MultiMatch(document.title, SIMILARITY_TEXT_FIELDS))
    if document.category:
        should.append(Term("category", document.category, boost=1.5))
    if document.tags:
        should.append(Terms("tags", tuple(sorted(set(document.tags))), boost=1.2))
    if not should:
        should.append(MatchAll())
    return SearchRequest(
        query=Bool(should=should, must_not=[Ids((document.id,))], minimum_should_match=1),
        sort=relevance_sort(SortOption.POPULARITY),
        size=size,
    )


def build_listing_request(limit: int) -> SearchRequest:
    """Plain fetch of up to `limit` documents for client-side distinct listings."""
    return SearchRequest(query=MatchAll(), size=limit)
