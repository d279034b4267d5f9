"""
Pytest fixtures - fake engine, store, service, API client.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fakes import TEST_INDEX, FakeSearchClient

from catalog_search.config import Settings, get_settings
from catalog_search.core.dependencies import get_search_client
from catalog_search.main import app
from catalog_search.schemas.document import DocumentCreate
from catalog_search.search.store import DocumentStore
from catalog_search.services.document_service import DocumentService


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, search_index=TEST_INDEX)


@pytest.fixture
def fake_client() -> FakeSearchClient:
    return FakeSearchClient()


@pytest.fixture
def store(fake_client: FakeSearchClient, settings: Settings) -> DocumentStore:
    return DocumentStore(fake_client, settings.search_index)


@pytest.fixture
def service(store: DocumentStore, settings: Settings) -> DocumentService:
    return DocumentService(store, settings)


@pytest.fixture
def nike() -> DocumentCreate:
    return DocumentCreate(
        title="Nike Air Max 270",
        description="Classic Nike Air Max 270 in black color",
        brand="Nike",
        category="shoes",
        color="black",
        size="42",
        condition="new",
        tags=["running", "casual"],
        price=150,
        rating=4.5,
        popularity_score=0.8,
        is_boosted=True,
    )


@pytest.fixture
def adidas() -> DocumentCreate:
    return DocumentCreate(
        title="Adidas Ultraboost 22",
        description="Adidas Ultraboost 22 in white color",
        brand="Adidas",
        category="shoes",
        color="white",
        size="43",
        condition="new",
        tags=["running", "sport"],
        price=180,
        rating=4.2,
        popularity_score=0.7,
    )


@pytest.fixture
def override_app(fake_client: FakeSearchClient, settings: Settings):
    app.dependency_overrides[get_search_client] = lambda: fake_client
    app.dependency_overrides[get_settings] = lambda: settings
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(override_app):
    async with AsyncClient(
        transport=ASGITransport(app=override_app),
        base_url="http://test",
    ) as ac:
        yield ac
