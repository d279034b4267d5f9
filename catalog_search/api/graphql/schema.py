"""
GraphQL schema - queries and mutations over DocumentService.

Mutations, `search` and `getRecommendations` report NotFoundError and
ValidationError as `success: false`.
Engine failures are not caught here and surface as GraphQL errors.
"""

import logging

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from catalog_search.api.graphql.types import (
    BulkCreateResponse,
    DocumentInput,
    DocumentResponse,
    DocumentType,
    DocumentUpdateInput,
    InteractionKindEnum,
    RecommendationsResponse,
    SearchInput,
    SearchResponse,
    SearchResultType,
)
from catalog_search.core.dependencies import DocumentServiceDep
from catalog_search.core.exceptions import NotFoundError, ValidationError
from catalog_search.services.document_service import DocumentService

logger = logging.getLogger(__name__)

BUSINESS_ERRORS = (NotFoundError, ValidationError)


def _service(info: Info) -> DocumentService:
    return info.context["service"]


@strawberry.type
class Query:
    @strawberry.field
    async def get_document(self, info: Info, id: strawberry.ID) -> DocumentType | None:
        document = await _service(info).get(id)
        return DocumentType.from_model(document) if document else None

    @strawberry.field
    async def search(self, info: Info, input: SearchInput) -> SearchResponse:
        try:
            result = await _service(info).search(input.to_model())
        except BUSINESS_ERRORS as e:
            logger.info("search rejected: %s", e)
            return SearchResponse(success=False, message=f"Search failed: {e}")
        return SearchResponse(success=True, result=SearchResultType.from_model(result))

    @strawberry.field
    async def suggest(self, info: Info, prefix: str, limit: int | None = None) -> list[str]:
        return await _service(info).suggest(prefix, limit)

    @strawberry.field
    async def get_recommendations(
        self, info: Info, id: strawberry.ID, limit: int | None = None
    ) -> RecommendationsResponse:
        try:
            documents = await _service(info).recommend(id, limit)
        except BUSINESS_ERRORS as e:
            logger.info("getRecommendations rejected: id=%s %s", id, e)
            return RecommendationsResponse(success=False, message=f"Failed to get recommendations: {e}")
        return RecommendationsResponse(success=True, documents=[DocumentType.from_model(d) for d in documents])

    @strawberry.field
    async def search_by_category(self, info: Info, category: str, limit: int = 10) -> list[DocumentType]:
        documents = await _service(info).search_by_category(category, limit)
        return [DocumentType.from_model(d) for d in documents]

    @strawberry.field
    async def search_by_tags(self, info: Info, tags: list[str], limit: int = 10) -> list[DocumentType]:
        documents = await _service(info).search_by_tags(tags, limit)
        return [DocumentType.from_model(d) for d in documents]

    @strawberry.field
    async def get_categories(self, info: Info) -> list[str]:
        return await _service(info).list_categories()

    @strawberry.field
    async def get_tags(self, info: Info) -> list[str]:
        return await _service(info).list_tags()

    @strawberry.field
    async def health_check(self, info: Info) -> bool:
        return await _service(info).health()


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_document(self, info: Info, input: DocumentInput) -> DocumentResponse:
        try:
            document = await _service(info).create(input.to_model())
        except BUSINESS_ERRORS as e:
            logger.info("createDocument rejected: %s", e)
            return DocumentResponse(success=False, message=f"Failed to create document: {e}")
        return DocumentResponse(
            success=True,
            message="Document created successfully",
            document=DocumentType.from_model(document),
        )

    @strawberry.mutation
    async def update_document(self, info: Info, id: strawberry.ID, input: DocumentUpdateInput) -> DocumentResponse:
        try:
            document = await _service(info).update(id, input.to_model())
        except BUSINESS_ERRORS as e:
            logger.info("updateDocument rejected: id=%s %s", id, e)
            return DocumentResponse(success=False, message=f"Failed to update document: {e}")
        return DocumentResponse(
            success=True,
            message="Document updated successfully",
            document=DocumentType.from_model(document),
        )

    @strawberry.mutation
    async def delete_document(self, info: Info, id: strawberry.ID) -> DocumentResponse:
        try:
            await _service(info).delete(id)
        except BUSINESS_ERRORS as e:
            logger.info("deleteDocument rejected: id=%s %s", id, e)
            return DocumentResponse(success=False, message=f"Failed to delete document: {e}")
        return DocumentResponse(success=True, message="Document deleted successfully")

    @strawberry.mutation
    async def bulk_create_documents(self, info: Info, inputs: list[DocumentInput]) -> BulkCreateResponse:
        try:
            ids = await _service(info).bulk_create([i.to_model() for i in inputs])
        except BUSINESS_ERRORS as e:
            return BulkCreateResponse(success=False, message=f"Failed to create documents: {e}")
        return BulkCreateResponse(success=True, message=f"Created {len(ids)} documents", ids=ids)

    @strawberry.mutation
    async def record_interaction(self, info: Info, id: strawberry.ID, kind: InteractionKindEnum) -> DocumentResponse:
        try:
            document = await _service(info).record_interaction(id, kind)
        except BUSINESS_ERRORS as e:
            return DocumentResponse(success=False, message=f"Failed to record interaction: {e}")
        return DocumentResponse(success=True, document=DocumentType.from_model(document))


schema = strawberry.Schema(query=Query, mutation=Mutation)


async def get_context(service: DocumentServiceDep) -> dict:
    """Resolved per request by FastAPI; merged into strawberry's default context."""
    return {"service": service}


graphql_router = GraphQLRouter(schema, context_getter=get_context)
