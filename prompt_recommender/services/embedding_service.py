"""
Embedding Service - Gemini text embeddings

Turns text into a fixed-length vector for similarity ranking.

Architecture:
- Model: settings.EMBEDDING_MODEL (default gemini-embedding-001)
- API: google-genai async client (client.aio.models.embed_content)
- One call per text; callers fan out with asyncio.gather

Any provider failure surfaces as UpstreamEmbeddingError. The ranking
pipeline treats it as fatal for the whole request.
"""

import logging
from typing import List, Optional, Protocol

from google import genai

from prompt_recommender.config import settings
from prompt_recommender.services.gemini_client import get_gemini_client
from prompt_recommender.utils.errors import UpstreamEmbeddingError
from prompt_recommender.utils.logging import truncate_for_log

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    """Anything that can embed a single text."""

    async def embed(self, text: str) -> List[float]:
        ...


class GeminiEmbedder:
    """Embedder backed by the Gemini embeddings API."""

    def __init__(self, client: genai.Client, model: Optional[str] = None):
        self._client = client
        self.model = model or settings.EMBEDDING_MODEL

    async def embed(self, text: str) -> List[float]:
        """
        Embed one text.

        Raises:
            UpstreamEmbeddingError: On API failure or an empty embedding
        """
        try:
            response = await self._client.aio.models.embed_content(
                model=self.model,
                contents=text,
            )
        except Exception as e:
            logger.error(f"Error getting embedding for '{truncate_for_log(text)}': {e}")
            raise UpstreamEmbeddingError("Failed to get embedding from Gemini") from e

        if not response.embeddings or not response.embeddings[0].values:
            logger.error(f"Empty embedding returned for '{truncate_for_log(text)}'")
            raise UpstreamEmbeddingError("Gemini returned an empty embedding")

        return list(response.embeddings[0].values)


def get_embedder() -> GeminiEmbedder:
    """
    Build the default embedder.

    Raises:
        ConfigurationError: If GOOGLE_API_KEY is not configured
    """
    return GeminiEmbedder(get_gemini_client())
