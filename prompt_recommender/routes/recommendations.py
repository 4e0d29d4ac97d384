"""
FastAPI routes for prompt recommendation endpoints.

Endpoints:
- POST /api/recommend: Rank candidate prompts for a domain (auth optional)
- GET /api/recommendations/history: Caller's saved recommendations (auth required)
"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status

from prompt_recommender.auth.dependencies import (
    AuthenticatedUser,
    get_authenticated_user,
    get_optional_user,
)
from prompt_recommender.db.client import get_supabase_client
from prompt_recommender.schemas.recommendations import (
    RecommendationHistoryItem,
    RecommendationHistoryResponse,
    RecommendRequest,
    RecommendResponse,
)
from prompt_recommender.services.history_service import get_user_recommendations
from prompt_recommender.services.recommendation_service import run_recommendation_pipeline
from prompt_recommender.utils.constants import ANONYMOUS_USER_ID, ERROR_MESSAGES
from prompt_recommender.utils.errors import ClientInputError, ConfigurationError
from prompt_recommender.utils.logging import truncate_for_log

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix="/api",
    tags=["recommendations"]
)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "/recommend",
    response_model=RecommendResponse,
    status_code=200,
    summary="Recommend prompts for a domain",
    description="""
    Ranks the curated prompt pool against the user's domain and returns the
    top 5 prompts the user does not already have, each with a one-sentence
    explanation.

    **Authentication:** Optional (Bearer token). Anonymous requests are
    allowed and saved under the "anonymous" user.

    **Errors:**
    - 400 invalid_request: missing/blank domain or prompts not a list of strings
    - 500 configuration_error: server is missing its AI credentials
    - 500 recommendation_error: ranking failed
    """
)
async def recommend_endpoint(
    request: RecommendRequest,
    background_tasks: BackgroundTasks,
    auth_user: Optional[AuthenticatedUser] = Depends(get_optional_user)
) -> RecommendResponse:
    """
    Recommendation endpoint.

    - Auth: Optional, resolved by get_optional_user
    - Parse/Validate: Pydantic RecommendRequest (400 via the validation handler)
    - Pipeline: run_recommendation_pipeline (ranking + explanations)
    - Persistence: scheduled on BackgroundTasks after the response
    """
    user_id = auth_user.user_id if auth_user else ANONYMOUS_USER_ID
    access_token = auth_user.access_token if auth_user else None

    logger.info(
        f"POST /api/recommend called by user_id={user_id}, "
        f"domain='{truncate_for_log(request.domain)}', prompt_count={len(request.prompts)}"
    )

    try:
        recommendations = await run_recommendation_pipeline(
            domain=request.domain,
            existing_prompts=request.prompts,
            user_id=user_id,
            schedule_persistence=background_tasks.add_task,
            access_token=access_token,
        )

    except ClientInputError as e:
        logger.info(f"Rejected recommendation request: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_request",
                "details": ERROR_MESSAGES['INVALID_REQUEST']
            }
        )

    except ConfigurationError as e:
        logger.error(f"Server configuration error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "configuration_error",
                "details": ERROR_MESSAGES['CONFIGURATION_ERROR']
            }
        )

    except Exception as e:
        logger.error(f"Error in recommend API: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "recommendation_error",
                "details": ERROR_MESSAGES['RECOMMENDATION_ERROR']
            }
        )

    return RecommendResponse(recommendations=recommendations)


@router.get(
    "/recommendations/history",
    response_model=RecommendationHistoryResponse,
    status_code=200,
    summary="List saved recommendations",
    description="""
    Returns the authenticated user's previously saved recommendations,
    newest first.

    **Authentication:** Required (Bearer token)
    """
)
async def recommendation_history_endpoint(
    limit: int = Query(50, ge=1, le=200, description="Maximum number of recommendations"),
    auth_user: AuthenticatedUser = Depends(get_authenticated_user)
) -> RecommendationHistoryResponse:
    """Recommendation history endpoint."""
    logger.info(f"GET /api/recommendations/history called by user_id={auth_user.user_id}")

    try:
        # Create authenticated Supabase client (respects RLS)
        supabase_client = get_supabase_client(auth_user.access_token)
        rows = await get_user_recommendations(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            limit=limit,
        )
    except Exception as e:
        logger.error(f"Failed to fetch recommendation history: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve recommendations"
            }
        )

    items = [RecommendationHistoryItem(**row) for row in rows]
    return RecommendationHistoryResponse(recommendations=items, count=len(items))
