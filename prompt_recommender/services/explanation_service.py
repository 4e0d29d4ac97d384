"""
Explanation Service - one-sentence rationale per recommended prompt

Architecture:
- Pattern: Single-shot LLM call per (prompt, domain) pair
- Model: settings.EXPLANATION_MODEL (default gemini-2.5-flash)
- Temperature: settings.EXPLANATION_TEMPERATURE (0.7)
- Output cap: settings.EXPLANATION_MAX_TOKENS (100)

This is the only step of the pipeline that degrades gracefully: any failure
or empty output is replaced by FALLBACK_EXPLANATION and logged as a warning.
"""

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

from google import genai
from google.genai import types

from prompt_recommender.agents.recommendation.prompts import (
    EXPLANATION_SYSTEM_PROMPT,
    build_explanation_user_prompt,
)
from prompt_recommender.config import settings
from prompt_recommender.services.gemini_client import get_gemini_client
from prompt_recommender.services.ranking_service import ScoredCandidate
from prompt_recommender.utils.constants import FALLBACK_EXPLANATION
from prompt_recommender.utils.errors import UpstreamExplanationError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything that can produce short text from a system + user message."""

    async def generate(
        self,
        system_instruction: str,
        user_content: str,
        max_tokens: int,
        temperature: float,
    ) -> Optional[str]:
        ...


class GeminiTextGenerator:
    """TextGenerator backed by Gemini generate_content."""

    def __init__(self, client: genai.Client, model: Optional[str] = None):
        self._client = client
        self.model = model or settings.EXPLANATION_MODEL

    async def generate(
        self,
        system_instruction: str,
        user_content: str,
        max_tokens: int,
        temperature: float,
    ) -> Optional[str]:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            max_output_tokens=max_tokens,
            # Thinking tokens count against max_output_tokens
            thinking_config=types.ThinkingConfig(thinking_budget=0),
        )

        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=user_content,
            config=config,
        )

        if not response.candidates or not response.candidates[0].content:
            return None

        return response.text


def get_text_generator() -> GeminiTextGenerator:
    """
    Build the default text generator.

    Raises:
        ConfigurationError: If GOOGLE_API_KEY is not configured
    """
    return GeminiTextGenerator(get_gemini_client())


async def generate_explanation(prompt: str, domain: str, generator: TextGenerator) -> str:
    """
    Explain why `prompt` is relevant to `domain` in one sentence.

    Never raises: on any failure the fallback explanation is returned.

    Args:
        prompt: The recommended prompt text
        domain: The caller's domain
        generator: Text generation backend

    Returns:
        str: Generated sentence or FALLBACK_EXPLANATION
    """
    try:
        text = await generator.generate(
            EXPLANATION_SYSTEM_PROMPT,
            build_explanation_user_prompt(prompt, domain),
            settings.EXPLANATION_MAX_TOKENS,
            settings.EXPLANATION_TEMPERATURE,
        )
        if not text or not text.strip():
            raise UpstreamExplanationError("Empty explanation returned")
        return text.strip()
    except Exception as e:
        logger.warning(f"Error generating explanation for prompt '{prompt}' (using fallback): {e}")
        return FALLBACK_EXPLANATION


async def explain_all(
    candidates: Sequence[ScoredCandidate],
    domain: str,
    generator: TextGenerator,
) -> List[str]:
    """Generate explanations for all candidates concurrently, in input order."""
    return list(await asyncio.gather(
        *(generate_explanation(candidate.prompt, domain, generator) for candidate in candidates)
    ))
