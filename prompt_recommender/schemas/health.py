"""
Response model for GET /health.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Static liveness payload."""

    status: str = Field(default="ok", examples=["ok"])
    service: str = Field(default="prompt-recommender", examples=["prompt-recommender"])
