"""
Shared constants for the recommendation pipeline.
"""

# Identifier stored with recommendations requested without a valid session
ANONYMOUS_USER_ID = "anonymous"

# Substitute text when an explanation cannot be generated
FALLBACK_EXPLANATION = "Highly relevant to your domain"

# Generic messages returned to API callers (internal causes are never exposed)
ERROR_MESSAGES = {
    'INVALID_REQUEST': "Invalid request. Domain and prompts array are required.",
    'INVALID_PARAMETERS': "Invalid request parameters.",
    'CONFIGURATION_ERROR': "Server configuration error. Please try again later.",
    'RECOMMENDATION_ERROR': "Failed to get recommendations",
}
