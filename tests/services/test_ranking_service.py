"""
Tests for the ranking service and the candidate pool.

Covers:
- Cosine similarity properties (self, opposite, zero, symmetry, length mismatch)
- Case/whitespace-insensitive filtering of existing prompts
- Top-K selection, ordering, and failure propagation
"""

import math

import pytest

from prompt_recommender.agents.recommendation.candidate_pool import CANDIDATE_POOL
from prompt_recommender.services.ranking_service import (
    DEFAULT_TOP_K,
    ScoredCandidate,
    cosine_similarity,
    filter_unused_prompts,
    normalize_prompt,
    rank_candidates,
)
from prompt_recommender.utils.errors import UpstreamEmbeddingError


# =============================================================================
# UNIT TESTS: Cosine Similarity
# =============================================================================

class TestCosineSimilarity:
    """Tests for cosine_similarity."""

    @pytest.mark.parametrize("vector", [
        [1.0, 2.0, 3.0],
        [0.5, -0.25, 8.0, 0.0],
        [-3.0],
    ])
    def test_self_similarity_is_one(self, vector):
        assert cosine_similarity(vector, vector) == pytest.approx(1.0)

    @pytest.mark.parametrize("vector", [
        [1.0, 2.0, 3.0],
        [0.5, -0.25, 8.0, 0.0],
    ])
    def test_opposite_vector_is_minus_one(self, vector):
        negated = [-x for x in vector]
        assert cosine_similarity(vector, negated) == pytest.approx(-1.0)

    def test_zero_vector_returns_zero(self):
        assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0
        assert cosine_similarity([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0.0
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_symmetric(self):
        a = [0.3, -1.2, 4.0, 2.2]
        b = [1.1, 0.4, -0.7, 3.3]
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 5.0]) == pytest.approx(0.0)

    def test_scale_invariant(self):
        a = [1.0, 2.0, 3.0]
        b = [4.0, -1.0, 0.5]
        scaled = [x * 10 for x in a]
        assert cosine_similarity(scaled, b) == pytest.approx(cosine_similarity(a, b))

    def test_known_value(self):
        # cos(45°)
        assert cosine_similarity([1.0, 0.0], [1.0, 1.0]) == pytest.approx(math.sqrt(2) / 2)

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_returns_builtin_float(self):
        result = cosine_similarity([1, 2, 3], [3, 2, 1])
        assert type(result) is float
        assert result == pytest.approx(10 / 14)

    def test_zero_vector_result_is_builtin_float(self):
        assert type(cosine_similarity([0, 0], [1, 1])) is float


# =============================================================================
# UNIT TESTS: Filtering
# =============================================================================

class TestFiltering:
    """Tests for normalize_prompt and filter_unused_prompts."""

    def test_normalize_trims_and_lowercases(self):
        assert normalize_prompt("  SEO Optimization Techniques \n") == "seo optimization techniques"

    def test_existing_prompt_excluded_case_and_whitespace_insensitive(self):
        pool = ("SEO optimization techniques", "API design principles")
        unused = filter_unused_prompts(pool, [" seo optimization techniques "])
        assert unused == ["API design principles"]

    def test_pool_order_preserved(self):
        pool = ("c", "a", "b")
        assert filter_unused_prompts(pool, []) == ["c", "a", "b"]

    def test_unknown_existing_prompts_ignored(self):
        pool = ("a", "b")
        assert filter_unused_prompts(pool, ["z", "y"]) == ["a", "b"]

    def test_all_used_returns_empty(self):
        pool = ("Alpha", "Beta")
        assert filter_unused_prompts(pool, ["ALPHA", " beta"]) == []


# =============================================================================
# UNIT TESTS: Candidate Pool
# =============================================================================

class TestCandidatePool:
    """Tests for the static candidate pool."""

    def test_pool_is_immutable_tuple(self):
        assert isinstance(CANDIDATE_POOL, tuple)

    def test_pool_size(self):
        assert len(CANDIDATE_POOL) >= 100

    def test_pool_entries_distinct_after_normalization(self):
        normalized = [normalize_prompt(p) for p in CANDIDATE_POOL]
        assert len(set(normalized)) == len(normalized)

    def test_pool_entries_are_clean_strings(self):
        for prompt in CANDIDATE_POOL:
            assert isinstance(prompt, str)
            assert prompt == prompt.strip()
            assert prompt

    def test_pool_contains_seo_prompt(self):
        assert "SEO optimization techniques" in CANDIDATE_POOL


# =============================================================================
# UNIT TESTS: rank_candidates
# =============================================================================

class TestRankCandidates:
    """Tests for rank_candidates with a fake embedder."""

    @pytest.mark.asyncio
    async def test_returns_top_k_sorted(self, fake_embedder):
        ranked = await rank_candidates("web development agency", [], fake_embedder)

        assert len(ranked) == DEFAULT_TOP_K
        similarities = [c.similarity for c in ranked]
        assert similarities == sorted(similarities, reverse=True)
        assert all(isinstance(c, ScoredCandidate) for c in ranked)

    @pytest.mark.asyncio
    async def test_top_k_are_the_highest_scores(self, fake_embedder):
        ranked = await rank_candidates("web development agency", [], fake_embedder)

        domain_vec = await fake_embedder.embed("web development agency")
        all_scores = sorted(
            [cosine_similarity(domain_vec, await fake_embedder.embed(p)) for p in CANDIDATE_POOL],
            reverse=True,
        )
        assert [c.similarity for c in ranked] == pytest.approx(all_scores[:DEFAULT_TOP_K])

    @pytest.mark.asyncio
    async def test_explicit_ranking(self, embedder_factory):
        embedder = embedder_factory(overrides={
            "domain": [1.0, 0.0],
            "close": [0.9, 0.1],
            "far": [0.0, 1.0],
            "opposite": [-1.0, 0.0],
            "middle": [1.0, 1.0],
        })
        pool = ("far", "opposite", "close", "middle")

        ranked = await rank_candidates("domain", [], embedder, pool=pool, top_k=5)

        assert [c.prompt for c in ranked] == ["close", "middle", "far", "opposite"]
        assert ranked[-1].similarity == pytest.approx(-1.0)

    @pytest.mark.asyncio
    async def test_fewer_candidates_than_k(self, fake_embedder):
        pool = ("Alpha", "Beta", "Gamma")
        ranked = await rank_candidates("domain", ["beta"], fake_embedder, pool=pool)

        assert len(ranked) == 2
        assert {c.prompt for c in ranked} == {"Alpha", "Gamma"}

    @pytest.mark.asyncio
    async def test_existing_prompt_never_ranked(self, embedder_factory):
        embedder = embedder_factory(overrides={
            "marketing agency": [1.0, 0.0],
            "SEO optimization techniques": [1.0, 0.0],
            "API design principles": [0.5, 0.5],
        })
        pool = ("SEO optimization techniques", "API design principles")

        ranked = await rank_candidates(
            "marketing agency", [" seo optimization techniques "], embedder, pool=pool
        )

        assert [c.prompt for c in ranked] == ["API design principles"]
        assert "SEO optimization techniques" not in embedder.calls

    @pytest.mark.asyncio
    async def test_exhausted_pool_returns_empty_without_embedding(self, fake_embedder):
        existing = [f"  {p.upper()} " for p in CANDIDATE_POOL]

        ranked = await rank_candidates("web development agency", existing, fake_embedder)

        assert ranked == []
        assert fake_embedder.calls == []

    @pytest.mark.asyncio
    async def test_ties_keep_pool_order(self, embedder_factory):
        embedder = embedder_factory(overrides={
            "domain": [1.0, 0.0],
            "first": [2.0, 0.0],
            "second": [3.0, 0.0],
            "third": [1.0, 0.0],
        })
        ranked = await rank_candidates("domain", [], embedder, pool=("first", "second", "third"))

        assert [c.prompt for c in ranked] == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_domain_embedding_failure_raises(self, embedder_factory):
        embedder = embedder_factory(fail_on={"web development agency"})

        with pytest.raises(UpstreamEmbeddingError):
            await rank_candidates("web development agency", [], embedder)

    @pytest.mark.asyncio
    async def test_candidate_embedding_failure_fails_batch(self, embedder_factory):
        embedder = embedder_factory(fail_on={CANDIDATE_POOL[10]})

        with pytest.raises(UpstreamEmbeddingError):
            await rank_candidates("web development agency", [], embedder)

    @pytest.mark.asyncio
    async def test_unexpected_embedder_error_is_wrapped(self):
        class BrokenEmbedder:
            async def embed(self, text):
                raise ConnectionError("network down")

        with pytest.raises(UpstreamEmbeddingError):
            await rank_candidates("domain", [], BrokenEmbedder(), pool=("a",))

    @pytest.mark.asyncio
    async def test_pool_not_mutated(self, fake_embedder):
        pool = ("Alpha", "Beta", "Gamma")
        snapshot = tuple(pool)

        await rank_candidates("domain", ["alpha"], fake_embedder, pool=pool)

        assert pool == snapshot

    @pytest.mark.asyncio
    @pytest.mark.parametrize("top_k", [0, -1, -50])
    async def test_top_k_below_one_raises_before_embedding(self, top_k, fake_embedder):
        with pytest.raises(ValueError):
            await rank_candidates("web development agency", [], fake_embedder, top_k=top_k)

        assert fake_embedder.calls == []

    @pytest.mark.asyncio
    async def test_top_k_of_one(self, fake_embedder):
        ranked = await rank_candidates("web development agency", [], fake_embedder, top_k=1)

        assert len(ranked) == 1
