"""
AI components for the Prompt Recommender backend.

1. Recommendation (Embedding ranking + single-shot explanations)
   - Candidate pool and explanation prompt templates
   - Gemini embeddings and generation are called from the service layer:
     prompt_recommender/services/embedding_service.py
     prompt_recommender/services/explanation_service.py
"""

from prompt_recommender.agents.recommendation import (
    CANDIDATE_POOL,
    EXPLANATION_SYSTEM_PROMPT,
    build_explanation_user_prompt,
)

__all__ = [
    "CANDIDATE_POOL",
    "EXPLANATION_SYSTEM_PROMPT",
    "build_explanation_user_prompt",
]
