"""Health check endpoint."""

from fastapi import APIRouter


def build_health_router(service_name: str) -> APIRouter:
    """Router reporting liveness for the named service."""
    router = APIRouter(tags=["health"])

    @router.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": service_name}

    return router
