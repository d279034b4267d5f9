"""
Input validation at the service boundary.
Each validator returns a ValidationResult; callers decide whether to raise.
"""

import logging
from dataclasses import dataclass, field

from catalog_search.core.exceptions import ValidationError
from catalog_search.schemas.document import DocumentCreate, DocumentUpdate
from catalog_search.schemas.search import SearchQuery

logger = logging.getLogger(__name__)

MIN_RATING = 0.0
MAX_RATING = 5.0


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self, operation: str | None = None) -> None:
        if self.errors:
            if operation:
                logger.warning("%s: invalid input: %s", operation, "; ".join(self.errors))
            raise ValidationError(self.errors)


def _check_non_negative(name: str, value: float | None, errors: list[str]) -> None:
    if value is not None and value < 0:
        errors.append(f"{name} must be >= 0")


def _check_rating(name: str, value: float | None, errors: list[str]) -> None:
    if value is not None and not MIN_RATING <= value <= MAX_RATING:
        errors.append(f"{name} must be between {MIN_RATING:g} and {MAX_RATING:g}")


def _check_tags(tags: list[str] | None, errors: list[str]) -> None:
    if tags and any(not tag.strip() for tag in tags):
        errors.append("tags must not contain empty values")


def validate_document_create(data: DocumentCreate) -> ValidationResult:
    errors: list[str] = []
    if not data.title.strip():
        errors.append("title must not be empty")
    if data.id is not None and not data.id.strip():
        errors.append("id must not be empty when supplied")
    _check_non_negative("price", data.price, errors)
    _check_non_negative("discount", data.discount, errors)
    _check_rating("rating", data.rating, errors)
    _check_tags(data.tags, errors)
    return ValidationResult(errors)


def validate_document_update(data: DocumentUpdate) -> ValidationResult:
    """Same rules as create, applied only to the supplied fields."""
    errors: list[str] = []
    if data.title is not None and not data.title.strip():
        errors.append("title must not be empty")
    _check_non_negative("price", data.price, errors)
    _check_non_negative("discount", data.discount, errors)
    _check_rating("rating", data.rating, errors)
    _check_tags(data.tags, errors)
    return ValidationResult(errors)


def validate_search_query(query: SearchQuery) -> ValidationResult:
    """Page and page size are clamped by the query builder, not rejected."""
    errors: list[str] = []
    _check_non_negative("min_price", query.min_price, errors)
    _check_non_negative("max_price", query.max_price, errors)
    if query.min_price is not None and query.max_price is not None and query.min_price > query.max_price:
        errors.append("min_price must be <= max_price")
    _check_rating("min_rating", query.min_rating, errors)
    return ValidationResult(errors)
