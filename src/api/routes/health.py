"""
Health check endpoints.

Provides endpoints for monitoring application health and status.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.dependencies import ServiceContainer, get_container


router = APIRouter(tags=["Health"])


@router.get("/")
def index() -> Dict[str, Any]:
    return {
        "name": "Pinterest Style Match API",
        "message": "Server is running. Connect a Pinterest token at /api/pinterest/token",
        "routes": [
            "/health",
            "/api/pinterest/status",
            "/api/pinterest/token",
            "/api/pinterest/boards",
            "/api/pinterest/import-board",
            "/api/ai/rank-products",
        ],
    }


@router.get("/health")
def health_check(container: ServiceContainer = Depends(get_container)) -> Dict[str, Any]:
    """
    Basic health check with configuration status.

    Reports whether Pinterest OAuth app credentials and the embeddings API
    key are present; neither is verified against the provider.
    """
    settings = container.settings
    return {
        "ok": True,
        "oauthConfigured": settings.pinterest_oauth_configured,
        "embeddingsConfigured": bool(settings.openai_api_key),
    }


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    return {"status": "alive"}
