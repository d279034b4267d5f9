"""Document request/response schemas - API contract for indexed records."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class DocumentBase(BaseModel):
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
    tags: list[str] = Field(default_factory=list)
    price: float | None = None
    discount: float | None = None
    rating: float | None = None
    popularity_score: float = 0.0
    is_boosted: bool = False


class DocumentCreate(DocumentBase):
    # Generated by the store when omitted
    id: str | None = None


class DocumentUpdate(BaseModel):
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


class Document(DocumentBase):
    """Stored document plus fields derived by the result mapper."""

    id: str
    title: str = ""
    views: int = 0
    clicks: int = 0
    likes: int = 0
    saves: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_interaction: datetime | None = None

    # Derived, never stored
    formatted_price: str = "N/A"
    formatted_rating: str = "No rating"
    excerpt: str = ""


class InteractionKind(str, Enum):
    """Interaction counters tracked per document. Value is the counter field."""

    VIEW = "views"
    CLICK = "clicks"
    LIKE = "likes"
    SAVE = "saves"
