"""
Recommendation Service - Embedding Ranking + Gemini Explanations

This service runs one prompt recommendation request end to end.

Architecture:
- Ranking: Gemini embeddings + cosine similarity over a fixed candidate pool
- Explanations: Gemini 2.5 Flash, one sentence per recommended prompt
- Persistence: Supabase, scheduled as a background task (best-effort)

Pipeline:
1. Validate domain and existing prompts (ClientInputError)
2. Rank unused candidates (UpstreamEmbeddingError is fatal)
3. Explain the top K concurrently (each falls back independently)
4. Build PromptRecommendation records
5. Schedule history persistence (never gates the response)
6. Return the recommendations (possibly empty)
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from prompt_recommender.agents.recommendation.candidate_pool import CANDIDATE_POOL
from prompt_recommender.config import settings
from prompt_recommender.schemas.recommendations import PromptRecommendation
from prompt_recommender.services.embedding_service import Embedder, get_embedder
from prompt_recommender.services.explanation_service import (
    TextGenerator,
    explain_all,
    get_text_generator,
)
from prompt_recommender.services.history_service import save_recommendations
from prompt_recommender.services.ranking_service import rank_candidates
from prompt_recommender.utils.errors import ClientInputError
from prompt_recommender.utils.logging import truncate_for_log

logger = logging.getLogger(__name__)

# Signature of BackgroundTasks.add_task: schedule(func, *args, **kwargs)
PersistenceScheduler = Callable[..., Any]


def _validate_request(domain: Any, existing_prompts: Any) -> None:
    """Check the request shape before any upstream call."""
    if not isinstance(domain, str) or not domain.strip():
        raise ClientInputError("domain must be a non-empty string")

    if not isinstance(existing_prompts, (list, tuple)):
        raise ClientInputError("prompts must be a list of strings")

    if not all(isinstance(p, str) for p in existing_prompts):
        raise ClientInputError("prompts must be a list of strings")


async def run_recommendation_pipeline(
    domain: str,
    existing_prompts: Sequence[str],
    user_id: str,
    *,
    embedder: Optional[Embedder] = None,
    generator: Optional[TextGenerator] = None,
    schedule_persistence: Optional[PersistenceScheduler] = None,
    access_token: Optional[str] = None,
    pool: Sequence[str] = CANDIDATE_POOL,
    top_k: Optional[int] = None,
) -> List[PromptRecommendation]:
    """
    Recommend prompts from the candidate pool for a domain.

    Args:
        domain: The caller's domain description
        existing_prompts: Prompts the caller already has (never recommended back)
        user_id: Authenticated user_id or ANONYMOUS_USER_ID
        embedder: Embedding backend (defaults to Gemini)
        generator: Text generation backend (defaults to Gemini)
        schedule_persistence: Callable used to run save_recommendations without
            blocking the response (e.g. BackgroundTasks.add_task). None skips saving.
        access_token: Caller's JWT, passed through to persistence
        pool: Candidate prompts
        top_k: Number of results (defaults to settings.RECOMMENDATION_TOP_K)

    Returns:
        List[PromptRecommendation]: Highest similarity first, at most top_k

    Raises:
        ClientInputError: Invalid domain or prompts
        ConfigurationError: GOOGLE_API_KEY missing
        UpstreamEmbeddingError: Any embedding call failed
    """
    _validate_request(domain, existing_prompts)
    domain = domain.strip()
    if top_k is None:
        top_k = settings.RECOMMENDATION_TOP_K

    logger.info(
        f"run_recommendation_pipeline called for user_id={user_id}, "
        f"domain='{truncate_for_log(domain)}', existing_prompts={len(existing_prompts)}"
    )

    if embedder is None:
        embedder = get_embedder()
    if generator is None:
        generator = get_text_generator()

    top_candidates = await rank_candidates(
        domain=domain,
        existing_prompts=existing_prompts,
        embedder=embedder,
        pool=pool,
        top_k=top_k,
    )

    logger.info(f"Generating explanations for {len(top_candidates)} top recommendations...")
    explanations = await explain_all(top_candidates, domain, generator)

    recommendations = [
        PromptRecommendation(
            prompt=candidate.prompt,
            similarity=candidate.similarity,
            explanation=explanation,
        )
        for candidate, explanation in zip(top_candidates, explanations)
    ]

    if recommendations and schedule_persistence is not None:
        schedule_persistence(
            save_recommendations,
            domain=domain,
            recommendations=recommendations,
            user_id=user_id,
            access_token=access_token,
        )

    logger.info(f"Returning {len(recommendations)} recommendations for user_id={user_id}")
    return recommendations
