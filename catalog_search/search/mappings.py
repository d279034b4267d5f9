"""Field mapping and analyzer settings for the documents index."""

TEXT_ANALYZER = "text_analyzer"


def document_index_settings() -> dict:
    """Single-node: 0 replicas to avoid unassigned shards."""
    return {
        "index": {"number_of_replicas": 0},
        "analysis": {
            "analyzer": {
                TEXT_ANALYZER: {
                    "type": "custom",
                    "tokenizer": "standard",
                    "filter": ["lowercase", "stop", "snowball"],
                }
            }
        },
    }


def document_index_mappings() -> dict:
    """Mapping for the documents index. Changing a type here requires a reindex."""
    return {
        "properties": {
            "id": {"type": "keyword"},
            "title": {
                "type": "text",
                "analyzer": TEXT_ANALYZER,
                "fields": {
                    "keyword": {"type": "keyword"},
                    "suggest": {"type": "completion"},
                },
            },
            "description": {
                "type": "text",
                "analyzer": TEXT_ANALYZER,
                "fields": {"keyword": {"type": "keyword", "ignore_above": 256}},
            },
            "brand": {
                "type": "text",
                "analyzer": TEXT_ANALYZER,
                "fields": {"keyword": {"type": "keyword"}},
            },
            "category": {"type": "keyword"},
            "condition": {"type": "keyword"},
            "size": {"type": "keyword"},
            "color": {"type": "keyword"},
            "material": {"type": "keyword"},
            "status": {"type": "keyword"},
            "seller_id": {"type": "keyword"},
            "tags": {"type": "keyword"},
            "price": {"type": "float"},
            "discount": {"type": "float"},
            "rating": {"type": "float"},
            "popularity_score": {"type": "float"},
            "is_boosted": {"type": "boolean"},
            "thumbnail_url": {"type": "keyword"},
            "views": {"type": "integer"},
            "clicks": {"type": "integer"},
            "likes": {"type": "integer"},
            "saves": {"type": "integer"},
            "created_at": {"type": "date"},
            "updated_at": {"type": "date"},
            "last_interaction": {"type": "date"},
        }
    }
