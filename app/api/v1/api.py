"""API v1 router aggregator."""

from fastapi import APIRouter

from app.api.v1.endpoints import messages
from app.config import settings

api_router = APIRouter(prefix=settings.API_V1_PREFIX)

api_router.include_router(messages.router)

__all__ = ["api_router"]
