"""
Pydantic schemas for prompt recommendation endpoints.

These models define the request/response contracts for the recommendation
pipeline (embedding ranking + Gemini explanations) and for the
recommendation history endpoint.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, StrictStr, field_validator

# ============================================================================
# REQUEST MODELS
# ============================================================================

class RecommendRequest(BaseModel):
    """
    Request to rank candidate prompts against a domain.

    Frontend flow:
    - User describes their domain and pastes the prompts they already use
      (one per line, split client-side)
    - Prompts already in use are never recommended back
    """
    domain: StrictStr = Field(
        ...,
        description="Free-text description of the user's business or focus area",
        min_length=1,
        examples=["web development agency", "B2B SaaS for logistics teams"]
    )
    prompts: List[StrictStr] = Field(
        ...,
        description="Prompts the user already has (may be empty)",
        examples=[[], ["SEO optimization techniques", "API design principles"]]
    )

    @field_validator("domain")
    @classmethod
    def domain_must_not_be_blank(cls, value: str) -> str:
        """Reject whitespace-only domains and trim the rest."""
        stripped = value.strip()
        if not stripped:
            raise ValueError("domain must not be blank")
        return stripped


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class PromptRecommendation(BaseModel):
    """
    A single recommended prompt.

    Built once per request from a ranked candidate and its explanation.
    """
    model_config = {"frozen": True}

    prompt: str = Field(
        ...,
        description="Recommended prompt from the candidate pool",
        examples=["Best practices for user experience design"]
    )
    similarity: float = Field(
        ...,
        description="Cosine similarity between the prompt and the domain embeddings",
        examples=[0.71]
    )
    explanation: str = Field(
        ...,
        description="One-sentence rationale, or the fallback text if generation failed",
        examples=["Highly relevant to your domain"]
    )


class RecommendResponse(BaseModel):
    """Response for POST /api/recommend (0 to top_k recommendations)."""
    recommendations: List[PromptRecommendation] = Field(
        default_factory=list,
        description="Recommendations sorted by similarity, highest first"
    )


class RecommendationHistoryItem(BaseModel):
    """A previously saved recommendation."""
    id: Optional[str] = Field(None, description="Row identifier")
    domain: str = Field(..., description="Domain submitted with the request")
    prompt: str
    explanation: str
    similarity: float
    user_id: str
    created_at: Optional[datetime] = Field(None, description="Creation timestamp (UTC)")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        """Supabase may return integer primary keys."""
        return None if value is None else str(value)


class RecommendationHistoryResponse(BaseModel):
    """Response for GET /api/recommendations/history."""
    recommendations: List[RecommendationHistoryItem] = Field(
        default_factory=list,
        description="Saved recommendations, newest first"
    )
    count: int = Field(..., description="Number of recommendations returned", ge=0)
