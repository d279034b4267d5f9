"""
Health checks - for load balancers, Kubernetes, and monitoring.
"""

from fastapi import APIRouter, Response, status

from catalog_search.config import get_settings
from catalog_search.core.dependencies import DocumentServiceDep

router = APIRouter()
settings = get_settings()


@router.get("")
async def health(service: DocumentServiceDep, response: Response):
    """Readiness: is the search engine reachable? 503 when it is not."""
    healthy = await service.health()
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "up" if healthy else "down",
        "message": "Search engine is healthy" if healthy else "Search engine is not responding",
        "app": settings.app_name,
    }


@router.get("/live")
async def live():
    """Liveness: is the process up?"""
    return {"status": "ok"}
