"""
Groq Chat-Completion Client

Async client for the OpenAI-compatible Groq chat-completion endpoint
used by the Rewriter agent.

API: https://console.groq.com/docs/api-reference#chat-create
One request per call, no retries: a failure aborts the analysis run.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


class MissingCredentialError(ValueError):
    """Raised when the rewrite is requested without an API key."""

    def __init__(self, message: str = "API key requerida"):
        super().__init__(message)


class RewriteServiceError(Exception):
    """Raised when the completion service does not return a usable completion."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class GroqClient:
    """
    Async client for Groq chat completions.

    Usage:
        async with GroqClient(api_key="gsk_...") as client:
            text = await client.complete(prompt, system=SYSTEM_PROMPT)
    """

    DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
    DEFAULT_MODEL = "llama-3.3-70b-versatile"
    MAX_TOKENS = 2000
    TEMPERATURE = 0.3

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize Groq client.

        Args:
            api_key: Groq API key (sent as bearer token)
            model: Model identifier (defaults to llama-3.3-70b-versatile)
            base_url: API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
            settings: Settings override (defaults to environment)
        """
        if not api_key or not api_key.strip():
            raise MissingCredentialError()

        settings = settings or get_settings()
        self.model = model or settings.GROQ_MODEL or self.DEFAULT_MODEL
        self.base_url = (base_url or settings.GROQ_BASE_URL or self.DEFAULT_BASE_URL).rstrip("/")
        timeout = timeout if timeout is not None else settings.API_TIMEOUT

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {api_key.strip()}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        self._closed = False

    def build_payload(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ) -> Dict[str, Any]:
        """Build the chat-completion request body."""
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        return {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

    async def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ) -> str:
        """
        Request a single completion.

        Args:
            prompt: User message
            system: System message
            temperature: Sampling temperature
            max_tokens: Generation cap

        Returns:
            Content of the first completion choice

        Raises:
            RewriteServiceError: On non-2xx status, transport failure or
                a response without a completion
        """
        if self._closed:
            raise RewriteServiceError("Client has been closed")

        payload = self.build_payload(prompt, system, temperature, max_tokens)

        try:
            response = await self._client.post("/chat/completions", json=payload)
        except httpx.TimeoutException as e:
            raise RewriteServiceError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise RewriteServiceError(f"Request failed: {e}") from e

        if not response.is_success:
            body = self._read_body(response)
            logger.error(f"Groq API error: {response.status_code} {body[:200]}")
            raise RewriteServiceError(
                f"API error: {response.status_code} {body}".strip(),
                status_code=response.status_code,
                body=body,
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise RewriteServiceError(
                f"Unexpected completion response: {e}",
                status_code=response.status_code,
                body=self._read_body(response),
            ) from e

        usage = data.get("usage") or {}
        logger.info(
            f"Groq call: {usage.get('prompt_tokens', 0)} in, "
            f"{usage.get('completion_tokens', 0)} out ({self.model})"
        )

        return content or ""

    @staticmethod
    def _read_body(response: httpx.Response) -> str:
        # Best effort: the body only enriches the error message
        try:
            return response.text
        except Exception as e:
            logger.debug(f"Could not read error body: {e}")
            return ""

    async def close(self):
        """Close the HTTP client."""
        if not self._closed:
            await self._client.aclose()
            self._closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
