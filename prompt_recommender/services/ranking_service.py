"""
Ranking Service - cosine similarity over embeddings

Ranks the candidate pool against a domain:
1. Drop candidates the caller already has (case/whitespace-insensitive)
2. Embed the domain and every remaining candidate concurrently
3. Score each candidate by cosine similarity to the domain
4. Sort by similarity (highest first) and keep the top K

Ties keep pool order because sorted() is stable.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Set

import numpy as np

from prompt_recommender.agents.recommendation.candidate_pool import CANDIDATE_POOL
from prompt_recommender.services.embedding_service import Embedder
from prompt_recommender.utils.errors import UpstreamEmbeddingError

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate prompt with its similarity to the domain."""
    prompt: str
    similarity: float


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Cosine of the angle between two vectors.

    Args:
        vec_a: First vector (embedding)
        vec_b: Second vector (embedding), same length as vec_a

    Returns:
        float: Similarity in [-1, 1], or 0.0 if either vector has zero magnitude

    Raises:
        ValueError: If the vectors have different lengths
    """
    if len(vec_a) != len(vec_b):
        raise ValueError(
            f"Vectors must have the same length (got {len(vec_a)} and {len(vec_b)})"
        )

    a = np.asarray(vec_a, dtype=float)
    b = np.asarray(vec_b, dtype=float)
    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return 0.0

    return float(np.dot(a, b) / denom)


def normalize_prompt(prompt: str) -> str:
    """Comparison key for prompts: trimmed and lowercased."""
    return prompt.strip().lower()


def filter_unused_prompts(pool: Iterable[str], existing_prompts: Iterable[str]) -> List[str]:
    """Return pool entries the caller does not already have, in pool order."""
    used: Set[str] = {normalize_prompt(p) for p in existing_prompts}
    return [candidate for candidate in pool if normalize_prompt(candidate) not in used]


async def rank_candidates(
    domain: str,
    existing_prompts: Sequence[str],
    embedder: Embedder,
    pool: Sequence[str] = CANDIDATE_POOL,
    top_k: int = DEFAULT_TOP_K,
) -> List[ScoredCandidate]:
    """
    Rank unused pool candidates by similarity to the domain.

    Args:
        domain: The caller's domain description
        existing_prompts: Prompts the caller already has
        embedder: Embedding backend
        pool: Candidate prompts to rank
        top_k: Maximum number of results

    Returns:
        List[ScoredCandidate]: min(top_k, eligible) candidates, highest similarity first

    Raises:
        ValueError: If top_k is less than 1
        UpstreamEmbeddingError: If the domain or any candidate embedding fails
    """
    if top_k < 1:
        raise ValueError(f"top_k must be at least 1 (got {top_k})")

    unused_prompts = filter_unused_prompts(pool, existing_prompts)
    logger.info(
        f"Ranking {len(unused_prompts)} candidate prompts "
        f"({len(pool) - len(unused_prompts)} already in use)"
    )

    if not unused_prompts:
        return []

    try:
        domain_embedding, *prompt_embeddings = await asyncio.gather(
            embedder.embed(domain),
            *(embedder.embed(prompt) for prompt in unused_prompts),
        )
    except UpstreamEmbeddingError:
        raise
    except Exception as e:
        raise UpstreamEmbeddingError("Embedding request failed") from e

    scored = [
        ScoredCandidate(prompt=prompt, similarity=cosine_similarity(domain_embedding, embedding))
        for prompt, embedding in zip(unused_prompts, prompt_embeddings)
    ]

    ranked = sorted(scored, key=lambda candidate: candidate.similarity, reverse=True)
    return ranked[:top_k]
