"""
Prompt Recommendation - Embedding Ranking + LLM Explanations

This module holds the static inputs of the recommendation pipeline:
- The curated candidate pool (candidate_pool.py)
- The prompt templates for the explanation step (prompts.py)

The service layer is in:
- prompt_recommender/services/recommendation_service.py
"""

from prompt_recommender.agents.recommendation.candidate_pool import CANDIDATE_POOL
from prompt_recommender.agents.recommendation.prompts import (
    EXPLANATION_SYSTEM_PROMPT,
    build_explanation_user_prompt,
)

__all__ = [
    "CANDIDATE_POOL",
    "EXPLANATION_SYSTEM_PROMPT",
    "build_explanation_user_prompt",
]
