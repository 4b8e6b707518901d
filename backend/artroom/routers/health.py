"""
Health check router for liveness and readiness probes.
"""
from fastapi import APIRouter, status

from artroom.database.store import get_metadata_store
from artroom.services.token_provider import get_token_provider

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the API is running.
    """
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness check with dependencies",
)
async def readiness_check():
    """
    Readiness check that verifies MongoDB and the Moxtra token.
    """
    checks = {
        "api": "healthy",
        "mongodb": "unknown",
        "moxtra": "unknown",
    }
    
    # Check MongoDB
    try:
        store = await get_metadata_store()
        await store.ping()
        checks["mongodb"] = "healthy"
    except Exception as e:
        checks["mongodb"] = f"unhealthy: {str(e)}"
    
    # Check Moxtra token (never authenticates here)
    tokens = await get_token_provider()
    token = tokens.token
    if token is None:
        checks["moxtra"] = "unhealthy: no access token"
    elif token.is_expired():
        checks["moxtra"] = "unhealthy: access token expired"
    else:
        checks["moxtra"] = "healthy"
    
    # Overall status
    all_healthy = all(v == "healthy" for v in checks.values())
    
    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }
