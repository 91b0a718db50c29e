"""
FastAPI application factory

Builds the REST layer over the pattern engine. The engine itself is not
passed in here: main_asyncio.py (or a test) attaches it through
api.dependencies.set_engine(), so the same app works before the engine exists
and answers 503 until then.

Endpoints (all under /api):
    GET  /patterns                 selectable patterns, presentation order
    GET  /patterns/{pattern_id}    one pattern, 404 if unknown
    GET  /activePattern            active pattern id or null
    POST /activePattern            switch, unknown ids fall back to the default
    GET  /metrics                  scheduler and output channel counters
    GET  /health                   liveness
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import List, Optional

from api.routes import patterns
from api.middleware.error_handler import register_exception_handlers
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)

API_PREFIX = "/api"


def create_app(
    title: str = "Pixel Rain",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Create the API application.

    Args:
        title: Shown in the OpenAPI docs
        version: Reported by /api/health
        docs_enabled: Serve /docs, /redoc and /openapi.json
        cors_origins: Allowed browser origins; any origin when None

    Returns:
        FastAPI app, ready for uvicorn
    """
    docs = "/docs" if docs_enabled else None
    app = FastAPI(
        title=title,
        description="Pattern selection for an LPD8806 LED strip",
        version=version,
        docs_url=docs,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    # The picker page is usually opened from a phone on the LAN, not from
    # the controller itself.
    origins = cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(patterns.router, prefix=API_PREFIX)
    _add_service_routes(app, version, docs)

    log.info(f"API app created: {title} v{version}", cors=",".join(origins), docs=docs or "off")
    return app


def _add_service_routes(app: FastAPI, version: str, docs: Optional[str]) -> None:

    @app.get(f"{API_PREFIX}/health", tags=["System"], summary="Health check")
    async def health_check():
        return {"status": "healthy", "service": "pixel-rain-api", "version": version}

    @app.get("/", include_in_schema=False)
    async def root():
        return JSONResponse({"message": "Pixel Rain API", "docs": docs, "health": f"{API_PREFIX}/health"})
