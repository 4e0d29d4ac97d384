"""
Exception types raised by the recommendation pipeline.

Routes map these to HTTP responses:
- ClientInputError         -> 400 invalid_request
- ConfigurationError       -> 500 configuration_error
- UpstreamEmbeddingError   -> 500 recommendation_error

UpstreamExplanationError and PersistenceError never reach a route; they are
absorbed by the explanation and history services and only logged.
"""


class RecommendationError(Exception):
    """Base class for pipeline errors."""


class ClientInputError(RecommendationError):
    """The request shape is invalid (missing domain, prompts not a list...)."""


class ConfigurationError(RecommendationError):
    """A required credential or external service is not configured."""


class UpstreamEmbeddingError(RecommendationError):
    """The embedding provider failed for the domain or for a candidate."""


class UpstreamExplanationError(RecommendationError):
    """The text generator failed or returned no content for one prompt."""


class PersistenceError(RecommendationError):
    """Saving recommendation history failed."""
