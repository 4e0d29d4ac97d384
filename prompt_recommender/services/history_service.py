"""
Recommendation history persistence.

Writes are best-effort: save_recommendations() is scheduled as a background
task after the response is built and never raises. Reads back the caller's
history for GET /api/recommendations/history.

Table: settings.RECOMMENDATIONS_TABLE (default "recommendations")
Columns written: domain, prompt, explanation, similarity, user_id
(id and created_at are filled in by the database)
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, cast

from supabase import Client

from prompt_recommender.config import settings
from prompt_recommender.db.client import get_public_supabase_client, get_supabase_client
from prompt_recommender.schemas.recommendations import PromptRecommendation
from prompt_recommender.utils.constants import FALLBACK_EXPLANATION
from prompt_recommender.utils.errors import PersistenceError

logger = logging.getLogger(__name__)


def build_history_records(
    domain: str,
    recommendations: Sequence[PromptRecommendation],
    user_id: str,
) -> List[Dict[str, Any]]:
    """Map recommendations to table rows."""
    return [
        {
            "domain": domain.strip(),
            "prompt": rec.prompt,
            "explanation": rec.explanation or FALLBACK_EXPLANATION,
            "similarity": rec.similarity,
            "user_id": user_id,
        }
        for rec in recommendations
    ]


def insert_recommendations(supabase_client: Client, records: List[Dict[str, Any]]) -> int:
    """
    Insert history rows.

    Returns:
        int: Number of rows saved

    Raises:
        PersistenceError: If the insert fails or returns no rows
    """
    try:
        result = supabase_client.table(settings.RECOMMENDATIONS_TABLE).insert(records).execute()
    except Exception as e:
        raise PersistenceError(f"Insert into {settings.RECOMMENDATIONS_TABLE} failed: {e}") from e

    if not result.data:
        raise PersistenceError("Insert returned no rows")

    return len(result.data)


def save_recommendations(
    domain: str,
    recommendations: Sequence[PromptRecommendation],
    user_id: str,
    access_token: Optional[str] = None,
) -> Optional[int]:
    """
    Save a request's recommendations to the user's history (best-effort).

    Runs after the response has been sent. Failures are logged as warnings
    and never propagate.

    Args:
        domain: Domain submitted with the request
        recommendations: Recommendations returned to the caller
        user_id: Authenticated user_id or ANONYMOUS_USER_ID
        access_token: User JWT for an RLS-scoped client (None for anonymous)

    Returns:
        Number of rows saved, or None if saving failed
    """
    records = build_history_records(domain, recommendations, user_id)

    try:
        if access_token:
            supabase_client = get_supabase_client(access_token)
        else:
            supabase_client = get_public_supabase_client()

        saved = insert_recommendations(supabase_client, records)
        logger.info(f"Successfully saved {saved} recommendations to database for user_id={user_id}")
        return saved

    except Exception as e:
        logger.warning(f"Database save error (non-critical) for user_id={user_id}: {e}")
        return None


async def get_user_recommendations(
    supabase_client: Client,
    user_id: str,
    limit: int = 50,
) -> List[Dict[str, Any]]:
    """
    Fetch the user's saved recommendations, newest first.

    Args:
        supabase_client: Authenticated Supabase client
        user_id: The authenticated user's ID
        limit: Maximum number of rows

    Returns:
        List of recommendation rows

    Raises:
        PersistenceError: If the query fails
    """
    logger.info(f"Fetching recommendation history for user_id={user_id}, limit={limit}")

    try:
        result = (
            supabase_client.table(settings.RECOMMENDATIONS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
    except Exception as e:
        raise PersistenceError(f"History query failed: {e}") from e

    rows = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(rows)} recommendations for user_id={user_id}")
    return rows
