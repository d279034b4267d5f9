#!/usr/bin/env python3
"""
Seed script: creates sample documents through the GraphQL API, then runs a
search, a suggestion and a recommendation against them.
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --count 200 --base-url http://localhost:8000/graphql
"""

import argparse
import json
import random
import sys

import httpx

GRAPHQL_URL = "http://localhost:8000/graphql"

BRANDS = ["Nike", "Adidas", "Puma", "New Balance", "Asics", "Reebok"]
MODELS = ["Air Max 270", "Ultraboost 22", "Suede Classic", "990v5", "Gel-Kayano", "Club C 85"]
CATEGORIES = ["shoes", "clothing", "accessories"]
COLORS = ["black", "white", "red", "blue", "grey"]
SIZES = ["40", "41", "42", "43", "44"]
CONDITIONS = ["new", "like_new", "used"]
TAGS = ["running", "casual", "sport", "retro", "limited", "sale"]

CREATE = """
mutation Create($input: DocumentInput!) {
  createDocument(input: $input) { success message document { id title } }
}
"""

SEARCH = """
query Search($input: SearchInput!) {
  search(input: $input) {
    success
    message
    result { total took documents { id title formattedPrice } }
  }
}
"""

SUGGEST = "query Suggest($prefix: String!) { suggest(prefix: $prefix) }"

RECOMMEND = """
query Recommend($id: ID!) {
  getRecommendations(id: $id, limit: 3) { success message documents { id title } }
}
"""


def random_document() -> dict:
    brand = random.choice(BRANDS)
    title = f"{brand} {random.choice(MODELS)}"
    color = random.choice(COLORS)
    return {
        "title": title,
        "description": f"{title} in {color} color. Great for everyday wear.",
        "brand": brand,
        "category": random.choice(CATEGORIES),
        "color": color,
        "size": random.choice(SIZES),
        "condition": random.choice(CONDITIONS),
        "tags": random.sample(TAGS, k=2),
        "price": random.choice([49.99, 89.0, 120.0, 150.0, 180.0, 220.0]),
        "rating": round(random.uniform(2.5, 5.0), 1),
        "popularityScore": round(random.random(), 2),
        "isBoosted": random.random() > 0.8,
    }


def call(client: httpx.Client, query: str, variables: dict) -> dict:
    r = client.post("", json={"query": query, "variables": variables})
    r.raise_for_status()
    payload = r.json()
    if payload.get("errors"):
        raise RuntimeError(payload["errors"][0].get("message"))
    return payload["data"]


def main():
    ap = argparse.ArgumentParser(description="Seed sample documents via the GraphQL API")
    ap.add_argument("--count", type=int, default=50, help="Number of documents to create")
    ap.add_argument("--base-url", default=GRAPHQL_URL, help="GraphQL endpoint URL")
    args = ap.parse_args()

    created_ids = []
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.count} documents...")
        for i in range(args.count):
            try:
                data = call(client, CREATE, {"input": random_document()})
                result = data["createDocument"]
                if result["success"]:
                    created_ids.append(result["document"]["id"])
                else:
                    errors.append(result["message"])
            except (httpx.HTTPError, RuntimeError) as e:
                errors.append(str(e))
            if (i + 1) % 10 == 0:
                print(f"  ... {i+1} documents")

        if not created_ids:
            print("No documents created.")
        else:
            print("\nSearch 'nike' with brand=Nike, price 100-200:")
            data = call(client, SEARCH, {"input": {"query": "nike", "brand": "Nike", "minPrice": 100, "maxPrice": 200}})
            print(json.dumps(data["search"], indent=2))

            print("\nSuggestions for 'nik':")
            print(call(client, SUGGEST, {"prefix": "nik"})["suggest"])

            print(f"\nRecommendations for {created_ids[0]}:")
            print(json.dumps(call(client, RECOMMEND, {"id": created_ids[0]})["getRecommendations"], indent=2))

    print(f"\nDone. Documents created: {len(created_ids)}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
