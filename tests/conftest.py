"""
Pytest configuration for Prompt Recommender tests.

Sets up test environment and global fixtures.
"""
import hashlib
import os
import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_PUBLISHABLE_KEY", "test-publishable-key")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

from prompt_recommender.utils.errors import UpstreamEmbeddingError  # noqa: E402


class FakeEmbedder:
    """
    Deterministic embedder.

    Vectors are derived from a SHA-256 of the text unless overridden.
    Texts in fail_on raise UpstreamEmbeddingError.
    """

    def __init__(self, overrides=None, fail_on=None):
        self.overrides = overrides or {}
        self.fail_on = set(fail_on or ())
        self.calls = []

    async def embed(self, text):
        self.calls.append(text)
        if text in self.fail_on:
            raise UpstreamEmbeddingError(f"embedding failed for {text}")
        if text in self.overrides:
            return list(self.overrides[text])
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [float(b) - 127.5 for b in digest[:16]]


class FakeTextGenerator:
    """
    Text generator that echoes the prompt back.

    Prompts in fail_for raise; prompts in empty_for return blank text.
    """

    def __init__(self, fail_for=None, empty_for=None):
        self.fail_for = set(fail_for or ())
        self.empty_for = set(empty_for or ())
        self.calls = []

    async def generate(self, system_instruction, user_content, max_tokens, temperature):
        self.calls.append(
            {
                "system_instruction": system_instruction,
                "user_content": user_content,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        prompt = user_content.splitlines()[0].replace("Prompt: ", "", 1)
        if prompt in self.fail_for:
            raise RuntimeError("quota exceeded")
        if prompt in self.empty_for:
            return "   "
        return f"'{prompt}' helps this domain grow. "


@pytest.fixture
def fake_embedder():
    """Deterministic embedder with no failures."""
    return FakeEmbedder()


@pytest.fixture
def fake_generator():
    """Text generator with no failures."""
    return FakeTextGenerator()


@pytest.fixture
def embedder_factory():
    """Build a FakeEmbedder with overrides/failures."""
    return FakeEmbedder


@pytest.fixture
def generator_factory():
    """Build a FakeTextGenerator with failures."""
    return FakeTextGenerator


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client
