"""
Search engine client construction.
One AsyncElasticsearch handle per process, created in the app lifespan and
passed to whoever needs it. The client is safe for concurrent requests.
"""

import logging
from urllib.parse import urlparse

from elasticsearch import AsyncElasticsearch

from catalog_search.config import Settings

logger = logging.getLogger(__name__)


def client_options(settings: Settings) -> dict:
    """Build client options from settings (supports HTTPS + basic auth in URL)."""
    url = settings.elasticsearch_url
    basic_auth = None
    if settings.elasticsearch_username and settings.elasticsearch_password:
        basic_auth = (settings.elasticsearch_username, settings.elasticsearch_password)
    # Credentials embedded in the URL win over the separate settings
    if "@" in url and "://" in url:
        parsed = urlparse(url)
        if parsed.username and parsed.password:
            basic_auth = (parsed.username, parsed.password)
        netloc = parsed.hostname or ""
        if parsed.port:
            netloc += f":{parsed.port}"
        url = f"{parsed.scheme}://{netloc}"
    opts = {
        "hosts": [url],
        "verify_certs": settings.elasticsearch_verify_certs,
        "request_timeout": settings.search_request_timeout,
    }
    if not settings.elasticsearch_verify_certs:
        opts["ssl_show_warn"] = False
    if basic_auth:
        opts["basic_auth"] = basic_auth
    return opts


def create_search_client(settings: Settings) -> AsyncElasticsearch:
    """Create the long-lived engine client. Caller owns it and must close it."""
    opts = client_options(settings)
    logger.info("Search client initialized for: %s", opts["hosts"][0])
    return AsyncElasticsearch(**opts)
