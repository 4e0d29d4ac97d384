"""
Shared Gemini client for embeddings and explanation generation.

Uses the Google Gen AI Python SDK (google-genai). The async surface
(client.aio) is used by the services so that candidate embeddings and
explanations can be fanned out with asyncio.gather.
"""

import logging

from google import genai

from prompt_recommender.config import settings
from prompt_recommender.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client = None


def get_gemini_client() -> genai.Client:
    """
    Lazy initialization of the Gemini client.

    Returns:
        genai.Client: Shared client instance

    Raises:
        ConfigurationError: If GOOGLE_API_KEY is not configured
    """
    global _gemini_client

    if not settings.GOOGLE_API_KEY:
        logger.error(
            "GOOGLE_API_KEY not configured. Recommendation service will not work. "
            "Please set GOOGLE_API_KEY in your .env file."
        )
        raise ConfigurationError("GOOGLE_API_KEY is not configured")

    if _gemini_client is not None:
        return _gemini_client

    _gemini_client = genai.Client(api_key=settings.GOOGLE_API_KEY)
    logger.info("Gemini client initialized successfully for recommendations")
    return _gemini_client


def reset_gemini_client() -> None:
    """Drop the cached client (used when settings change, e.g. in tests)."""
    global _gemini_client
    _gemini_client = None
