#!/usr/bin/env python3
"""
Create the documents index with its mapping and analyzer settings.
Safe to run repeatedly; an existing index is left alone.

  python scripts/create_index.py
  python scripts/create_index.py --reset-index   # drop and recreate (loses all documents)

Reads ELASTICSEARCH_URL and credentials from .env (default http://localhost:9200).
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from catalog_search.config import get_settings
from catalog_search.core.exceptions import CatalogSearchError
from catalog_search.search.client import create_search_client
from catalog_search.search.mappings import document_index_mappings, document_index_settings
from catalog_search.search.schema_manager import drop_index, ensure_index


async def run(reset: bool) -> int:
    settings = get_settings()
    client = create_search_client(settings)
    try:
        if reset:
            await drop_index(client, settings.search_index)
        created = await ensure_index(
            client,
            settings.search_index,
            document_index_mappings(),
            document_index_settings(),
        )
    except CatalogSearchError as e:
        print(f"Failed to prepare index '{settings.search_index}': {e}")
        return 1
    finally:
        await client.close()
    if created:
        print(f"Created index '{settings.search_index}'.")
    else:
        print(f"Index '{settings.search_index}' already exists.")
    return 0


def main():
    ap = argparse.ArgumentParser(description="Create the documents search index")
    ap.add_argument("--reset-index", action="store_true", help="Delete the index first, then recreate it")
    args = ap.parse_args()
    sys.exit(asyncio.run(run(args.reset_index)))


if __name__ == "__main__":
    main()
