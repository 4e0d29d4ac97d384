"""
Settings for the Prompt Recommender backend.

Values come from the process environment, with a .env file (python-dotenv)
filling in anything unset. A module-level `settings` instance is shared by
the whole app.
"""
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str) -> List[str]:
    """Comma-separated environment variable as a list (blank entries dropped)."""
    return [item.strip() for item in os.getenv(name, "").split(",") if item.strip()]


class Settings:
    """Environment-backed configuration."""

    # Supabase: recommendation history and Auth token verification
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_PUBLISHABLE_KEY: str = os.getenv("SUPABASE_PUBLISHABLE_KEY", "")
    RECOMMENDATIONS_TABLE: str = os.getenv("RECOMMENDATIONS_TABLE", "recommendations")

    @property
    def SUPABASE_JWKS_URL(self) -> str:
        """Public signing keys for Supabase access tokens ("" when SUPABASE_URL is unset)."""
        base_url = self.SUPABASE_URL.rstrip("/")
        return f"{base_url}/auth/v1/.well-known/jwks.json" if base_url else ""

    # Gemini: embeddings for ranking, text generation for explanations
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    EMBEDDING_MODEL: str = os.getenv("EMBEDDING_MODEL", "gemini-embedding-001")
    EXPLANATION_MODEL: str = os.getenv("EXPLANATION_MODEL", "gemini-2.5-flash")
    EXPLANATION_TEMPERATURE: float = float(os.getenv("EXPLANATION_TEMPERATURE", "0.7"))
    EXPLANATION_MAX_TOKENS: int = int(os.getenv("EXPLANATION_MAX_TOKENS", "100"))

    # Number of recommendations per request
    RECOMMENDATION_TOP_K: int = int(os.getenv("RECOMMENDATION_TOP_K", "5"))

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Read only when ENVIRONMENT=production
    CORS_ALLOWED_ORIGINS: List[str] = _env_list("CORS_ALLOWED_ORIGINS")

    @classmethod
    def validate(cls) -> None:
        """
        Check that the app can serve recommendations.

        Supabase values are optional: without them history is not saved and
        authenticated requests are treated as anonymous.

        Raises:
            ValueError: Describing every problem found
        """
        problems = []

        if not cls.GOOGLE_API_KEY:
            problems.append("GOOGLE_API_KEY is not set")
        if cls.RECOMMENDATION_TOP_K < 1:
            problems.append("RECOMMENDATION_TOP_K must be at least 1")
        if cls.EXPLANATION_MAX_TOKENS < 1:
            problems.append("EXPLANATION_MAX_TOKENS must be at least 1")
        if not 0.0 <= cls.EXPLANATION_TEMPERATURE <= 2.0:
            problems.append("EXPLANATION_TEMPERATURE must be between 0 and 2")

        if problems:
            raise ValueError("Invalid configuration: " + "; ".join(problems))

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT.lower() == "development"


settings = Settings()

# VALIDATE_CONFIG=false skips the check (tests, tooling)
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        if not settings.is_development():
            raise
        print(f"Warning: {e}. Recommendations will fail until .env is configured.")
