"""
GET /health: liveness probe, no authentication.

Does not call Gemini or Supabase, so it stays green when upstreams are down.
"""

from fastapi import APIRouter

from prompt_recommender.schemas.health import HealthResponse
from prompt_recommender.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    status_code=200,
)
async def health_check() -> HealthResponse:
    logger.debug("GET /health")
    return HealthResponse()
