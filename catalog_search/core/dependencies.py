"""
FastAPI dependencies - injection for the engine client and services.
The client lives on app.state (created in lifespan); tests override these.
"""

from typing import Annotated

from elasticsearch import AsyncElasticsearch
from fastapi import Depends, Request

from catalog_search.config import Settings, get_settings
from catalog_search.search.store import DocumentStore
from catalog_search.services.document_service import DocumentService


def get_search_client(request: Request) -> AsyncElasticsearch:
    """Long-lived engine client created at startup."""
    return request.app.state.search_client


SearchClient = Annotated[AsyncElasticsearch, Depends(get_search_client)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_document_service(client: SearchClient, settings: AppSettings) -> DocumentService:
    """Factory for service with store injection."""
    return DocumentService(DocumentStore(client, settings.search_index), settings)


DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]
