"""
Service layer for the Prompt Recommender backend.

Contains business logic orchestration that:
- Embeds and ranks candidate prompts (embedding_service, ranking_service)
- Generates explanations with graceful fallback (explanation_service)
- Runs the end-to-end pipeline (recommendation_service)
- Persists and reads recommendation history (history_service)

Services act as the glue between routes (HTTP layer) and Gemini/Supabase.
"""

from .embedding_service import Embedder, GeminiEmbedder, get_embedder
from .explanation_service import (
    GeminiTextGenerator,
    TextGenerator,
    explain_all,
    generate_explanation,
    get_text_generator,
)
from .history_service import (
    build_history_records,
    get_user_recommendations,
    insert_recommendations,
    save_recommendations,
)
from .ranking_service import (
    ScoredCandidate,
    cosine_similarity,
    filter_unused_prompts,
    normalize_prompt,
    rank_candidates,
)
from .recommendation_service import run_recommendation_pipeline

__all__ = [
    "Embedder",
    "GeminiEmbedder",
    "get_embedder",
    "GeminiTextGenerator",
    "TextGenerator",
    "explain_all",
    "generate_explanation",
    "get_text_generator",
    "build_history_records",
    "get_user_recommendations",
    "insert_recommendations",
    "save_recommendations",
    "ScoredCandidate",
    "cosine_similarity",
    "filter_unused_prompts",
    "normalize_prompt",
    "rank_candidates",
    "run_recommendation_pipeline",
]
