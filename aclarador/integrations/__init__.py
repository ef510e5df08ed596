"""
External API Integrations

- GroqClient: OpenAI-compatible chat completions used for the rewrite
"""

from .groq import GroqClient, MissingCredentialError, RewriteServiceError

__all__ = [
    "GroqClient",
    "MissingCredentialError",
    "RewriteServiceError",
]
