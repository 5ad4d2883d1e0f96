"""Health check endpoint: no dependencies, always available."""

from fastapi import APIRouter

from catalog_admin.config import get_settings
from catalog_admin.domain.entities import Collection

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the application health status and the screens it serves."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "collections": [c.value for c in Collection],
        "uploads_configured": bool(
            settings.cloudinary_cloud_name and settings.cloudinary_upload_preset
        ),
    }
