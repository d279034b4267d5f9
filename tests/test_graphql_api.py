"""
GraphQL API tests - mutations report business failures as success=false.
"""

import pytest
from httpx import AsyncClient

from fakes import FakeSearchClient

CREATE = """
mutation Create($input: DocumentInput!) {
  createDocument(input: $input) {
    success
    message
    document { id title brand price formattedPrice formattedRating excerpt createdAt updatedAt }
  }
}
"""

UPDATE = """
mutation Update($id: ID!, $input: DocumentUpdateInput!) {
  updateDocument(id: $id, input: $input) { success message document { id price } }
}
"""

DELETE = """
mutation Delete($id: ID!) { deleteDocument(id: $id) { success message } }
"""

SEARCH = """
query Search($input: SearchInput!) {
  search(input: $input) {
    success
    message
    result { total took page pageSize documents { id title } }
  }
}
"""

NIKE = {
    "title": "Nike Air Max 270",
    "description": "Classic Nike Air Max 270 in black color",
    "brand": "Nike",
    "category": "shoes",
    "tags": ["running"],
    "price": 150,
    "rating": 4.5,
}


async def gql(client: AsyncClient, query: str, variables: dict | None = None) -> dict:
    response = await client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert response.status_code == 200
    return response.json()


async def create_nike(client: AsyncClient) -> dict:
    payload = await gql(client, CREATE, {"input": NIKE})
    return payload["data"]["createDocument"]


@pytest.mark.asyncio
async def test_create_document(client: AsyncClient):
    result = await create_nike(client)
    assert result["success"] is True
    assert result["message"] == "Document created successfully"
    document = result["document"]
    assert document["title"] == "Nike Air Max 270"
    assert document["formattedPrice"] == "$150.00"
    assert document["formattedRating"] == "4.5/5.0"
    assert document["createdAt"] is not None


@pytest.mark.asyncio
async def test_create_document_validation_failure(client: AsyncClient):
    payload = await gql(client, CREATE, {"input": {**NIKE, "rating": 9}})
    assert "errors" not in payload
    result = payload["data"]["createDocument"]
    assert result["success"] is False
    assert "rating" in result["message"]
    assert result["document"] is None


@pytest.mark.asyncio
async def test_update_missing_document(client: AsyncClient, fake_client: FakeSearchClient):
    payload = await gql(client, UPDATE, {"id": "missing", "input": {"price": 1}})
    result = payload["data"]["updateDocument"]
    assert result["success"] is False
    assert "not found" in result["message"]
    assert fake_client.writes() == []


@pytest.mark.asyncio
async def test_update_and_delete(client: AsyncClient):
    doc_id = (await create_nike(client))["document"]["id"]
    payload = await gql(client, UPDATE, {"id": doc_id, "input": {"price": 99.5}})
    assert payload["data"]["updateDocument"]["document"]["price"] == 99.5

    payload = await gql(client, DELETE, {"id": doc_id})
    assert payload["data"]["deleteDocument"]["success"] is True
    payload = await gql(client, DELETE, {"id": doc_id})
    assert payload["data"]["deleteDocument"]["success"] is False


@pytest.mark.asyncio
async def test_get_document(client: AsyncClient):
    doc_id = (await create_nike(client))["document"]["id"]
    query = "query Get($id: ID!) { getDocument(id: $id) { id title excerpt } }"
    payload = await gql(client, query, {"id": doc_id})
    assert payload["data"]["getDocument"]["id"] == doc_id
    payload = await gql(client, query, {"id": "missing"})
    assert payload["data"]["getDocument"] is None


@pytest.mark.asyncio
async def test_search(client: AsyncClient):
    doc_id = (await create_nike(client))["document"]["id"]
    variables = {"input": {"query": "nike", "brand": "Nike", "minPrice": 100, "maxPrice": 200}}
    payload = await gql(client, SEARCH, variables)
    assert payload["data"]["search"]["success"] is True
    result = payload["data"]["search"]["result"]
    assert result["total"] == 1
    assert result["documents"][0]["id"] == doc_id
    assert result["page"] == 1

    variables["input"]["minPrice"] = 200.01
    variables["input"].pop("maxPrice")
    payload = await gql(client, SEARCH, variables)
    assert payload["data"]["search"]["result"]["total"] == 0


@pytest.mark.asyncio
async def test_listings_suggest_and_health(client: AsyncClient):
    doc_id = (await create_nike(client))["document"]["id"]
    await gql(client, CREATE, {"input": {"title": "Nike Pegasus", "category": "running-shoes", "tags": ["road"]}})
    payload = await gql(
        client,
        """
        query Overview($id: ID!) {
          getCategories
          getTags
          healthCheck
          suggest(prefix: "nike")
          getRecommendations(id: $id) { success documents { id } }
        }
        """,
        {"id": doc_id},
    )
    data = payload["data"]
    assert data["getCategories"] == ["running-shoes", "shoes"]
    assert data["getTags"] == ["road", "running"]
    assert data["healthCheck"] is True
    assert data["suggest"] == ["Nike Air Max 270", "Nike Pegasus"]
    assert data["getRecommendations"]["success"] is True
    assert doc_id not in [d["id"] for d in data["getRecommendations"]["documents"]]


@pytest.mark.asyncio
async def test_record_interaction(client: AsyncClient):
    doc_id = (await create_nike(client))["document"]["id"]
    mutation = """
    mutation Interact($id: ID!) {
      recordInteraction(id: $id, kind: LIKE) { success document { likes } }
    }
    """
    payload = await gql(client, mutation, {"id": doc_id})
    assert payload["data"]["recordInteraction"] == {"success": True, "document": {"likes": 1}}


@pytest.mark.asyncio
async def test_engine_failure_is_graphql_error(client: AsyncClient, fake_client: FakeSearchClient):
    fake_client.down = True
    payload = await gql(client, CREATE, {"input": NIKE})
    assert payload["errors"]
    assert "unavailable" in payload["errors"][0]["message"]


@pytest.mark.asyncio
async def test_search_validation_failure_is_typed(client: AsyncClient):
    payload = await gql(client, SEARCH, {"input": {"minPrice": 300, "maxPrice": 100}})
    assert "errors" not in payload
    result = payload["data"]["search"]
    assert result["success"] is False
    assert "min_price" in result["message"]
    assert result["result"] is None


@pytest.mark.asyncio
async def test_recommendations_for_missing_document_is_typed(client: AsyncClient):
    query = "query Rec($id: ID!) { getRecommendations(id: $id) { success message documents { id } } }"
    payload = await gql(client, query, {"id": "missing"})
    assert "errors" not in payload
    result = payload["data"]["getRecommendations"]
    assert result["success"] is False
    assert "not found" in result["message"]
    assert result["documents"] == []


@pytest.mark.asyncio
async def test_engine_timeout_is_graphql_error(client: AsyncClient, fake_client: FakeSearchClient):
    fake_client.timing_out = True
    payload = await gql(client, SEARCH, {"input": {"query": "nike"}})
    assert payload["data"] is None
    assert "unavailable" in payload["errors"][0]["message"]
