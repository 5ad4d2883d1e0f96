"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from catalog_admin.presentation.api.v1.endpoints.health import router as health_router
from catalog_admin.presentation.api.v1.endpoints.screens import router as screens_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(screens_router)
