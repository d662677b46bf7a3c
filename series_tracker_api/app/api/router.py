"""
Top-level API router.

Aggregates the domain routers under a single router that the
application mounts below ``settings.api_prefix``.
"""

from fastapi import APIRouter

from .endpoints import series

router = APIRouter()

router.include_router(series.router, prefix="/series", tags=["series"])
