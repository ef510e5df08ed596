"""
Tests for the AgentCoordinator pipeline.
"""

import logging

import httpx
import pytest

from aclarador.agents import FindingType, RewriterAgent
from aclarador.analyzer import STAGE_MESSAGES, AgentCoordinator
from aclarador.integrations import GroqClient, MissingCredentialError, RewriteServiceError


STAGES = AgentCoordinator.STAGE_ORDER + ["done"]


class TestPipelineOrder:
    """Stage order and progress events."""

    @pytest.mark.asyncio
    async def test_progress_events_in_order(self, coordinator, long_sentence):
        events = []

        await coordinator.process_text(
            long_sentence,
            credential="gsk_test",
            on_progress=lambda stage, message: events.append((stage, message)),
        )

        assert [stage for stage, _ in events] == STAGES
        assert events[-1] == ("done", "Análisis completado")
        assert all(message == STAGE_MESSAGES[stage] for stage, message in events)

    @pytest.mark.asyncio
    async def test_raising_callback_does_not_change_report(self, client_factory, long_sentence):
        def broken(stage, message):
            raise RuntimeError("display closed")

        quiet = await AgentCoordinator(
            rewriter=RewriterAgent(client_factory=client_factory)
        ).process_text(long_sentence, credential="gsk_test")
        noisy = await AgentCoordinator(
            rewriter=RewriterAgent(client_factory=client_factory)
        ).process_text(long_sentence, credential="gsk_test", on_progress=broken)

        assert noisy.final_text == quiet.final_text
        assert noisy.quality_score == quiet.quality_score
        assert [f.to_dict() for f in noisy.improvements] == [f.to_dict() for f in quiet.improvements]

    def test_stage_order(self):
        assert AgentCoordinator.STAGE_ORDER == ["analyzer", "rewriter", "grammar", "style", "seo", "validator"]

    def test_available_agents(self):
        agents = AgentCoordinator().get_available_agents()
        assert list(agents) == AgentCoordinator.STAGE_ORDER
        assert "comprehensive_rewriting" in agents["rewriter"]

    @pytest.mark.asyncio
    async def test_stage_start_and_finish_logged(self, coordinator, long_sentence, caplog):
        with caplog.at_level(logging.INFO, logger="aclarador.analyzer.coordinator"):
            await coordinator.process_text(long_sentence, credential="gsk_test")

        messages = [record.getMessage() for record in caplog.records]
        for stage in AgentCoordinator.STAGE_ORDER:
            started = messages.index(f"Stage started: {stage}")
            finished = next(i for i, m in enumerate(messages) if m.startswith(f"Stage finished: {stage} "))
            assert started < finished


class TestReport:
    """Contents of the AnalysisReport."""

    @pytest.mark.asyncio
    async def test_stages_read_the_right_text(self, coordinator, long_sentence, rewritten_text):
        report = await coordinator.process_text(long_sentence, credential="gsk_test")

        assert report.original_text == long_sentence
        assert report.final_text == rewritten_text
        # Analyzer sees the original, later stages the rewrite
        assert report.analysis.issues[0].word_count == 40
        assert report.grammar.corrected_text == rewritten_text
        assert report.style.readability_score == 0.63

    @pytest.mark.asyncio
    async def test_improvements_concatenated_in_stage_order(self, coordinator, long_sentence):
        report = await coordinator.process_text(long_sentence, credential="gsk_test")

        expected = (
            report.rewriting.improvements
            + report.grammar.issues
            + report.style.style_issues
            + report.seo.seo_recommendations
        )
        assert report.improvements == expected
        assert [f.type for f in report.improvements] == [
            FindingType.STRUCTURE_CHANGE,
            FindingType.SENTENCE_LENGTH,
            FindingType.REPEATED_WORDS,
            FindingType.PASSIVE_VOICE,
            FindingType.SEO_META_DESCRIPTION,
        ]

    @pytest.mark.asyncio
    async def test_validator_findings_not_in_improvements(self, coordinator, long_sentence):
        report = await coordinator.process_text(long_sentence, credential="gsk_test")
        assert not any(f.status for f in report.improvements)

    @pytest.mark.asyncio
    async def test_metadata_dict_with_browser_keys(self, coordinator, long_sentence):
        report = await coordinator.process_text(
            long_sentence,
            credential="gsk_test",
            metadata={"title": "T" * 65, "metaDescription": "Descripción breve"},
        )

        types = [f.type for f in report.seo.seo_recommendations]
        assert types == [FindingType.SEO_TITLE]

    @pytest.mark.asyncio
    async def test_report_serializes(self, coordinator, long_sentence):
        report = await coordinator.process_text(long_sentence, credential="gsk_test")
        data = report.to_dict()

        assert data["final_text"] == report.final_text
        assert data["validation"]["compliance"][0] == {"criterion": "Oraciones completas", "passed": True}
        assert data["seo"]["clarity_balance"]["seo_score"] == 0.70
        assert data["improvements"][0]["type"] == "structure_change"


class TestPipelineFailures:
    """Rewrite failures abort the run."""

    @pytest.mark.asyncio
    async def test_missing_credential(self, coordinator, groq_requests, long_sentence):
        events = []

        with pytest.raises(MissingCredentialError):
            await coordinator.process_text(
                long_sentence,
                on_progress=lambda stage, message: events.append(stage),
            )

        assert events == ["analyzer", "rewriter"]
        assert groq_requests == []

    @pytest.mark.asyncio
    async def test_service_error_propagates(self, test_settings, long_sentence):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="internal error"))
        rewriter = RewriterAgent(
            client_factory=lambda key: GroqClient(api_key=key, transport=transport, settings=test_settings)
        )
        events = []

        with pytest.raises(RewriteServiceError) as exc_info:
            await AgentCoordinator(rewriter=rewriter).process_text(
                long_sentence,
                credential="gsk_test",
                on_progress=lambda stage, message: events.append(stage),
            )

        assert exc_info.value.status_code == 500
        assert "done" not in events
