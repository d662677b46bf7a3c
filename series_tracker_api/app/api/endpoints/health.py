"""
Liveness endpoint.

Answers independently of the storage backend so orchestrators can
tell whether the process is up.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse, include_in_schema=False)
async def health() -> str:
    return "OK"
