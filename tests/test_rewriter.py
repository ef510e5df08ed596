"""
Tests for the Rewriter agent.
"""

import json
from unittest.mock import MagicMock

import pytest

from aclarador.agents import AnalysisContext, FindingType, RewriterAgent, SYSTEM_PROMPT
from aclarador.integrations import MissingCredentialError


class TestRewriterPrompt:
    """Issue detection and prompt building."""

    @pytest.fixture
    def agent(self):
        return RewriterAgent(client_factory=MagicMock())

    def test_detects_all_issue_kinds(self, agent, long_sentence):
        text = long_sentence + " La resolución fue notificada electrónicamente."
        assert agent.detect_issues(text) == ["long_sentences", "passive_voice", "complex_vocabulary"]

    def test_clear_text_has_no_issues(self, agent):
        assert agent.detect_issues("El plazo termina el lunes.") == []

    def test_prompt_includes_directives_and_text(self, agent):
        prompt = agent.build_rewrite_prompt("Texto de prueba.", ["long_sentences", "passive_voice"])

        assert prompt.startswith("Reescribe el siguiente texto aplicando principios de lenguaje claro.")
        assert "- Hay oraciones largas (>30 palabras). Divídelas." in prompt
        assert "- Convierte voz pasiva a activa." in prompt
        assert "vocabulario complejo" not in prompt
        assert prompt.endswith("Texto original:\nTexto de prueba.")

    def test_prompt_without_issues(self, agent):
        prompt = agent.build_rewrite_prompt("Hola.", [])
        assert "- " not in prompt
        assert "Texto original:\nHola." in prompt


class TestRewriterImprovements:
    """Structural comparison of original and rewritten text."""

    @pytest.fixture
    def agent(self):
        return RewriterAgent(client_factory=MagicMock())

    def test_split_sentences_reported(self, agent, long_sentence):
        rewritten = "Primera idea corta. Segunda idea corta. Tercera idea corta."
        improvements = agent.identify_improvements(long_sentence, rewritten)

        assert [i.type for i in improvements] == [
            FindingType.STRUCTURE_CHANGE,
            FindingType.SENTENCE_LENGTH,
        ]
        assert improvements[1].metrics == {"original_average": 40.0, "rewritten_average": 3.0}

    def test_reduction_of_exactly_three_words_not_reported(self, agent):
        original = "uno dos tres cuatro cinco seis siete ocho nueve diez."
        rewritten = "uno dos tres cuatro cinco seis siete."
        assert agent.identify_improvements(original, rewritten) == []

    def test_reduction_of_four_words_reported(self, agent):
        original = "uno dos tres cuatro cinco seis siete ocho nueve diez."
        rewritten = "uno dos tres cuatro cinco seis."
        improvements = agent.identify_improvements(original, rewritten)
        assert [i.type for i in improvements] == [FindingType.SENTENCE_LENGTH]


class TestRewriterAnalyze:
    """End-to-end rewrite through the Groq double."""

    @pytest.mark.asyncio
    async def test_rewrite(self, client_factory, groq_requests, context, long_sentence, rewritten_text):
        agent = RewriterAgent(client_factory=client_factory)
        result = await agent.analyze(long_sentence, context)

        assert result.agent == "rewriter"
        assert result.original_text == long_sentence
        assert result.rewritten_text == rewritten_text
        assert result.issues_detected == ["long_sentences"]
        assert any(i.type == FindingType.STRUCTURE_CHANGE for i in result.improvements)

        assert len(groq_requests) == 1
        body = json.loads(groq_requests[0].content)
        assert body["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert long_sentence in body["messages"][1]["content"]
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 2000

    @pytest.mark.asyncio
    @pytest.mark.parametrize("credential", [None, "", "   "])
    async def test_missing_credential_makes_no_call(self, credential):
        factory = MagicMock()
        agent = RewriterAgent(client_factory=factory)

        with pytest.raises(MissingCredentialError):
            await agent.analyze("Texto.", AnalysisContext(api_credential=credential))

        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_credential_is_stripped(self, client_factory, groq_requests):
        agent = RewriterAgent(client_factory=client_factory)
        await agent.analyze("Texto.", AnalysisContext(api_credential="  gsk_test  "))

        assert groq_requests[0].headers["Authorization"] == "Bearer gsk_test"
