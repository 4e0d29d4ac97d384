"""
Explanation Prompt Templates

Contains the system prompt and user prompt builder for the explanation step
of the prompt recommendation pipeline.

Architecture:
- Pattern: Single-shot LLM call per recommended prompt
- Model: Gemini 2.5 Flash (settings.EXPLANATION_MODEL)
- Temperature: 0.7 (short, varied prose)
- Output: One plain-text sentence, capped at ~100 tokens
"""

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

EXPLANATION_SYSTEM_PROMPT = (
    "You're a helpful AI assistant. For the given prompt and domain, generate a "
    "concise one-sentence explanation of why the prompt is relevant to that domain."
)


# =============================================================================
# USER PROMPT BUILDER
# =============================================================================

def build_explanation_user_prompt(prompt: str, domain: str) -> str:
    """
    Build the user turn for a single explanation request.

    Args:
        prompt: The recommended prompt text
        domain: The caller's domain description

    Returns:
        str: User content ready to be sent to Gemini
    """
    return f"Prompt: {prompt}\nDomain: {domain}"
