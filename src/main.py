"""
Credibility Reader API
Thin HTTP surface over CredibilityEngine: /health and /analyze
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

# Load environment variables early so Settings picks them up
load_dotenv()

from credireader import __version__
from credireader.config import get_settings
from credireader.data_loader import default_reference_lists
from credireader.engine import CredibilityEngine, EmptyTextError
from credireader.fetcher import ContentFetcher, combine_for_analysis, is_domain_only, is_valid_url
from credireader.models import EvaluateOptions


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

logger = logging.getLogger(__name__)

TITLE = "Credibility Reader"


@lru_cache(1)
def get_engine() -> CredibilityEngine:
    return CredibilityEngine()


@lru_cache(1)
def get_fetcher() -> ContentFetcher:
    return ContentFetcher()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    settings = get_settings()
    logger.info(f"Starting {TITLE} v{__version__}")
    default_reference_lists()
    if not settings.fact_check_api_key:
        logger.warning("FACT_CHECK_API_KEY not set; fact-check correlation will only return search links")
    yield
    logger.info("Shutdown complete")


app = FastAPI(
    title=TITLE,
    version=__version__,
    description="Heuristic credibility scoring for news text and article URLs",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Analysis failed",
            "detail": str(exc) if os.getenv("DEBUG") else "An unexpected error occurred during analysis",
        },
    )


class AnalyzeRequest(BaseModel):
    """Analysis request model"""

    text: str = Field(..., description="Article text or article URL")
    published_date: Optional[str] = Field(None, description="Known publication date (ISO-8601 or RFC-2822)")
    skip_fact_check: bool = Field(False, description="Skip external fact-check queries")

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


def _bad_request(error: str, message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"error": error, "message": message})


@app.get("/health")
async def health_check():
    settings = get_settings()
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {
            "fact_check": "configured" if settings.fact_check_api_key else "search-links-only",
        },
    }


@app.post("/analyze")
async def analyze(
    request: AnalyzeRequest,
    engine: CredibilityEngine = Depends(get_engine),
    fetcher: ContentFetcher = Depends(get_fetcher),
) -> Dict[str, Any]:
    settings = get_settings()
    text = request.text

    if len(text) < settings.min_text_length:
        raise _bad_request(
            "Content too short",
            f"Please provide more content for accurate analysis (minimum {settings.min_text_length} characters).",
        )
    if len(text) > settings.max_text_length:
        raise _bad_request(
            "Content too long",
            f"Content exceeds maximum length. Please provide content under {settings.max_text_length:,} characters.",
        )

    domain_only = is_domain_only(text)
    content = text
    published_date = request.published_date
    fetched_content: Optional[Dict[str, Any]] = None

    if is_valid_url(text):
        logger.info("URL detected, fetching content")
        fetched = await fetcher.fetch(text)
        if fetched.success:
            content = combine_for_analysis(fetched)
            published_date = published_date or fetched.published_date
            fetched_content = fetched.model_dump(by_alias=True, exclude={"content", "success", "error"})
        elif domain_only:
            raise _bad_request(
                "Cannot analyze domain only",
                "We could not fetch content from this URL. Please paste the article text directly, "
                "or provide a full article URL.",
            )
        else:
            logger.info(f"URL fetch failed ({fetched.error}); analyzing the URL itself")
    elif domain_only:
        raise _bad_request(
            "Cannot analyze domain only",
            "Please provide actual article content to analyze, not just a website domain.",
        )

    try:
        report = await engine.evaluate(
            content,
            EvaluateOptions(published_date_hint=published_date, skip_fact_check=request.skip_fact_check),
        )
    except EmptyTextError as exc:
        raise _bad_request("Invalid input", str(exc)) from exc

    result = report.model_dump(by_alias=True, mode="json")
    if fetched_content is not None:
        result["fetchedContent"] = fetched_content
    return result


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=False,
    )
