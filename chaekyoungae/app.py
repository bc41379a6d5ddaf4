import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chaekyoungae.application import SearchService
from chaekyoungae.core.errors import ClientError, ExtractionError, UpstreamError
from chaekyoungae.infrastructure import (
    DEFAULT_TTL_SECONDS,
    GeminiGenerationClient,
    GenerationClient,
    NoOpPosterLookup,
    PosterLookup,
    TMDBPosterClient,
    TTLCache,
    UnconfiguredGenerationClient,
)
from chaekyoungae.infrastructure.gemini import DEFAULT_MODEL
from chaekyoungae.infrastructure.tmdb import TMDB_API_BASE
from chaekyoungae.routes import search

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def configure_logging() -> None:
    log_level = getattr(logging, (os.getenv("LOG_LEVEL") or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("chaekyoungae").setLevel(log_level)

    # Quiet noisy third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)


def build_search_service() -> SearchService:
    """Wire the search pipeline from environment configuration."""

    gemini_key = os.getenv("GEMINI_API_KEY")
    generator: GenerationClient
    if gemini_key:
        generator = GeminiGenerationClient(gemini_key, model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL)
    else:
        logger.warning("GEMINI_API_KEY is not set; searches will fail until it is configured")
        generator = UnconfiguredGenerationClient()

    tmdb_key = os.getenv("TMDB_API_KEY")
    posters: PosterLookup
    if tmdb_key:
        posters = TMDBPosterClient(
            tmdb_key,
            api_base=os.getenv("TMDB_API_BASE") or TMDB_API_BASE,
            language=os.getenv("TMDB_LANGUAGE") or "ko-KR",
        )
    else:
        logger.warning("TMDB_API_KEY is not set; posters will be omitted")
        posters = NoOpPosterLookup()

    ttl = float(os.getenv("SEARCH_CACHE_TTL_SECONDS") or DEFAULT_TTL_SECONDS)
    return SearchService(TTLCache(ttl=ttl), generator, posters)


def create_app(service: SearchService | None = None) -> FastAPI:
    configure_logging()
    search_service = service or build_search_service()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        await search_service.aclose()

    app = FastAPI(title="Chaekyoungae Search API", version="0.1.0", lifespan=lifespan)
    app.state.search_service = search_service

    @app.middleware("http")
    async def apply_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(ClientError)
    async def handle_client_error(_: Request, exc: ClientError) -> JSONResponse:
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return JSONResponse({"error": "Method not allowed"}, status_code=405, headers=exc.headers)
        return await http_exception_handler(request, exc)

    @app.exception_handler(ExtractionError)
    async def handle_extraction_error(_: Request, exc: ExtractionError) -> JSONResponse:
        logger.error("Could not extract work record: %s", exc.message)
        return JSONResponse(
            {"success": False, "error": exc.message, "rawText": exc.raw_text},
            status_code=500,
        )

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(_: Request, exc: UpstreamError) -> JSONResponse:
        logger.error("Search failed", exc_info=exc)
        return JSONResponse(
            {"success": False, "error": "Internal server error", "message": str(exc)},
            status_code=500,
        )

    app.include_router(search.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Chaekyoungae Search API",
                "docs": "/docs",
                "search": "/api/search?q=",
            }
        )

    return app


app = create_app()
