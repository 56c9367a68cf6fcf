"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from snipshare.presentation.api.v1.endpoints.health import router as health_router
from snipshare.presentation.api.v1.endpoints.snippets import router as snippets_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(snippets_router)
