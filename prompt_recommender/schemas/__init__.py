"""
Pydantic request/response models for the Prompt Recommender API.
"""

from .health import HealthResponse
from .recommendations import (
    PromptRecommendation,
    RecommendationHistoryItem,
    RecommendationHistoryResponse,
    RecommendRequest,
    RecommendResponse,
)

__all__ = [
    "HealthResponse",
    "PromptRecommendation",
    "RecommendationHistoryItem",
    "RecommendationHistoryResponse",
    "RecommendRequest",
    "RecommendResponse",
]
