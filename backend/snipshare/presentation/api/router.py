"""Top-level API router — every endpoint is served below /api/<version>."""

from fastapi import APIRouter

from snipshare.presentation.api.v1.router import router as v1_router

API_PREFIX = "/api"

router = APIRouter(prefix=API_PREFIX)
router.include_router(v1_router)
