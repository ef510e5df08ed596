"""
Pytest Configuration and Shared Fixtures

Provides sample texts, settings isolated from the environment and a
Groq API double built on httpx.MockTransport.
"""

from typing import List

import httpx
import pytest

from aclarador.agents import AnalysisContext, PageMetadata, RewriterAgent
from aclarador.analyzer import AgentCoordinator
from aclarador.integrations import GroqClient
from aclarador.utils.config import Settings


# ============================================================================
# Sample Texts
# ============================================================================

# One sentence of 40 words
LONG_SENTENCE = " ".join(["palabra"] * 40) + "."

# Four short sentences: one repeated word pair and one passive marker
REWRITTEN_TEXT = (
    "Este es un texto. Este es un texto. "
    "Tiene palabras repetidas repetidas. La solicitud fue presentada."
)

PAGE_HTML = """
<html lang="es">
<head>
  <title>Ayudas para el alquiler de vivienda</title>
  <meta name="description" content="Requisitos y plazos de las ayudas al alquiler.">
  <meta name="keywords" content="ayudas, alquiler, vivienda">
  <script>var tracking = true;</script>
</head>
<body>
  <nav><a href="/">Inicio</a> <a href="/tramites">Trámites</a></nav>
  <header><p>Gobierno de Aragón - Portal de servicios</p></header>
  <main>
    <h1>Ayudas para el alquiler</h1>
    <p>Las personas que viven de alquiler pueden pedir una ayuda para pagar parte de la renta mensual.</p>
    <p>La solicitud se presenta en la sede electrónica antes del 30 de junio de cada año.</p>
    <p>Las personas que viven de alquiler pueden pedir una ayuda para pagar parte de la renta mensual.</p>
  </main>
  <footer><p>Aviso legal y política de cookies</p></footer>
</body>
</html>
"""


@pytest.fixture
def long_sentence() -> str:
    return LONG_SENTENCE


@pytest.fixture
def rewritten_text() -> str:
    return REWRITTEN_TEXT


@pytest.fixture
def page_html() -> str:
    return PAGE_HTML


@pytest.fixture
def context() -> AnalysisContext:
    """Context with a credential and no page metadata."""
    return AnalysisContext(api_credential="gsk_test")


@pytest.fixture
def web_context() -> AnalysisContext:
    """Context with typical page metadata."""
    return AnalysisContext(
        api_credential="gsk_test",
        page_metadata=PageMetadata(
            title="Ayudas para el alquiler",
            description="Requisitos y plazos de las ayudas al alquiler.",
        ),
    )


# ============================================================================
# Settings
# ============================================================================

@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings that ignore .env and the real environment key."""
    return Settings(
        _env_file=None,
        GROQ_API_KEY=None,
        SETTINGS_PATH=tmp_path / "settings.json",
        CHAR_LIMIT=3000,
    )


# ============================================================================
# Groq API Double
# ============================================================================

def completion_response(content: str, status_code: int = 200) -> httpx.Response:
    """Build a chat-completion response like the Groq API returns."""
    return httpx.Response(
        status_code,
        json={
            "id": "chatcmpl-test",
            "model": "llama-3.3-70b-versatile",
            "choices": [
                {"index": 0, "message": {"role": "assistant", "content": content}},
            ],
            "usage": {"prompt_tokens": 120, "completion_tokens": 40},
        },
    )


@pytest.fixture
def groq_requests() -> List[httpx.Request]:
    """Requests received by the Groq double."""
    return []


@pytest.fixture
def groq_transport(groq_requests, rewritten_text) -> httpx.MockTransport:
    """Transport answering every request with the rewritten text."""
    def handler(request: httpx.Request) -> httpx.Response:
        groq_requests.append(request)
        return completion_response(rewritten_text)

    return httpx.MockTransport(handler)


@pytest.fixture
def client_factory(groq_transport, test_settings):
    """Builds GroqClients that talk to the Groq double."""
    def factory(api_key: str) -> GroqClient:
        return GroqClient(api_key=api_key, transport=groq_transport, settings=test_settings)

    return factory


@pytest.fixture
def coordinator(client_factory) -> AgentCoordinator:
    """Coordinator whose rewriter talks to the Groq double."""
    return AgentCoordinator(rewriter=RewriterAgent(client_factory=client_factory))
