"""
API v1 router - aggregates REST endpoint modules.
"""

from fastapi import APIRouter

from catalog_search.api.v1.endpoints import health, search

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
