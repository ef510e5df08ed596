"""
API Endpoint for Plain-Language Analysis

FastAPI handler that:
1. Receives raw text or a page URL
2. Extracts the page text and metadata (URL requests)
3. Runs the 6-agent pipeline
4. Returns the full report with scores and improvements
"""

import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from aclarador import __version__
from aclarador.analyzer import AgentCoordinator
from aclarador.context import ExtractionError
from aclarador.integrations import MissingCredentialError, RewriteServiceError
from aclarador.services import PageAnalysisService
from aclarador.utils.config import get_settings

# Configure logging to stdout
logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

app = FastAPI(
    title="Aclarador",
    description="Plain-language analysis of Spanish web pages powered by Groq",
    version=__version__,
)


# ============================================================================
# REQUEST MODELS
# ============================================================================

class TextAnalysisRequest(BaseModel):
    """Analyze caller-supplied text."""
    text: str = Field(..., min_length=1)
    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Page metadata: title, description, keywords, language, url, headingText"
    )
    credential: Optional[str] = Field(
        default=None,
        description="Groq API key (falls back to the stored key or GROQ_API_KEY)"
    )


class PageAnalysisRequest(BaseModel):
    """Extract a page and analyze its text."""
    url: str
    credential: Optional[str] = None
    char_limit: Optional[int] = Field(
        default=None,
        ge=500,
        description="Maximum characters sent to the pipeline"
    )


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_service() -> PageAnalysisService:
    """Build the analysis service for one request."""
    return PageAnalysisService()


def _to_http_error(error: Exception) -> HTTPException:
    if isinstance(error, MissingCredentialError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, ExtractionError):
        return HTTPException(status_code=422, detail=str(error))
    return HTTPException(
        status_code=502,
        detail={
            "message": str(error),
            "upstream_status": getattr(error, "status_code", None),
        },
    )


# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
    }


@app.get("/api/agents")
async def list_agents():
    """Capabilities of each pipeline stage."""
    return AgentCoordinator().get_available_agents()


@app.post("/api/analyze")
async def analyze_text(
    request: TextAnalysisRequest,
    service: PageAnalysisService = Depends(get_service),
):
    """Run the pipeline on the submitted text."""
    logger.info(f"Text analysis requested ({len(request.text)} chars)")
    try:
        report = await service.analyze_text(
            request.text,
            metadata=request.metadata,
            credential=request.credential,
        )
    except (MissingCredentialError, ExtractionError, RewriteServiceError) as e:
        logger.warning(f"Text analysis failed: {e}")
        raise _to_http_error(e)

    return report.to_dict()


@app.post("/api/analyze/page")
async def analyze_page(
    request: PageAnalysisRequest,
    service: PageAnalysisService = Depends(get_service),
):
    """Extract the page at the given URL and run the pipeline on it."""
    logger.info(f"Page analysis requested: {request.url}")
    try:
        result = await service.analyze_page(
            request.url,
            credential=request.credential,
            char_limit=request.char_limit,
        )
    except (MissingCredentialError, ExtractionError, RewriteServiceError) as e:
        logger.warning(f"Page analysis failed for {request.url}: {e}")
        raise _to_http_error(e)

    return result.to_dict()


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.analyze:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
