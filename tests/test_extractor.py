"""
Tests for page text extraction.
"""

import httpx
import pytest

from aclarador.context import PageExtractor


class TestExtractFromHtml:
    """Text and metadata extraction from HTML."""

    @pytest.fixture
    def extractor(self):
        return PageExtractor()

    def test_removes_non_content(self, extractor, page_html):
        result = extractor.extract_from_html(page_html, url="https://www.aragon.es/ayudas")

        assert result.success
        assert "tracking" not in result.text
        assert "Inicio" not in result.text
        assert "Portal de servicios" not in result.text
        assert "Aviso legal" not in result.text

    def test_blocks_deduplicated_in_order(self, extractor, page_html):
        result = extractor.extract_from_html(page_html)
        repeated = "Las personas que viven de alquiler pueden pedir una ayuda para pagar parte de la renta mensual."

        assert result.text.count(repeated) == 1
        assert result.text.split("\n\n") == [
            "Ayudas para el alquiler",
            repeated,
            "La solicitud se presenta en la sede electrónica antes del 30 de junio de cada año.",
        ]

    def test_metadata(self, extractor, page_html):
        metadata = extractor.extract_from_html(page_html, url="https://www.aragon.es/ayudas").metadata

        assert metadata.title == "Ayudas para el alquiler de vivienda"
        assert metadata.description == "Requisitos y plazos de las ayudas al alquiler."
        assert metadata.keywords == "ayudas, alquiler, vivienda"
        assert metadata.language == "es"
        assert metadata.url == "https://www.aragon.es/ayudas"
        assert metadata.heading_text == "Ayudas para el alquiler"

    def test_falls_back_to_full_text(self, extractor):
        html = """
        <html><body>
          <div>Horario de atención</div>
          <div>De lunes a viernes de 9:00 a 14:00</div>
          <p>Corto</p>
        </body></html>
        """
        result = extractor.extract_from_html(html)

        assert "Horario de atención" in result.text
        assert "De lunes a viernes de 9:00 a 14:00" in result.text
        assert "Corto" in result.text

    def test_collapses_whitespace(self, extractor):
        html = "<html><body><div>uno    dos\t\ttres\n\n\n\n\ncuatro</div></body></html>"
        result = extractor.extract_from_html(html)
        assert result.text == "uno dos tres\n\ncuatro"

    def test_missing_metadata(self, extractor):
        metadata = extractor.extract_from_html("<p>Hola</p>").metadata
        assert metadata.title == ""
        assert metadata.description == ""
        assert metadata.heading_text == ""


class TestExtractFromUrl:
    """Fetching pages over HTTP."""

    @pytest.mark.asyncio
    async def test_fetch_and_extract(self, page_html):
        def handler(request):
            return httpx.Response(200, text=page_html, headers={"Content-Type": "text/html"})

        async with PageExtractor(transport=httpx.MockTransport(handler)) as extractor:
            result = await extractor.extract("https://www.aragon.es/ayudas")

        assert result.success
        assert result.metadata.url == "https://www.aragon.es/ayudas"
        assert "sede electrónica" in result.text

    @pytest.mark.asyncio
    async def test_http_error(self):
        async with PageExtractor(transport=httpx.MockTransport(lambda r: httpx.Response(404))) as extractor:
            result = await extractor.extract("https://www.aragon.es/no-existe")

        assert not result.success
        assert "404" in result.error
        assert result.to_dict() == {"success": False, "error": result.error}

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        async with PageExtractor(transport=httpx.MockTransport(handler)) as extractor:
            result = await extractor.extract("https://no-existe.invalid/")

        assert not result.success
        assert result.error
