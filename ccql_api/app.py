"""
FastAPI application exposing the ccql duplicate prompt engine.

Main responsibilities:
- Accept prompt batches and return near-duplicate clusters
- Score individual string pairs
- Expose health/readiness probes

Run locally:

    ccql-api                                    # API_HOST / API_PORT from settings
    uvicorn ccql_api.app:app --reload --port 8000
"""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ccql.logging_config import get_logger, setup_logging
from ccql.settings import get_settings
from ccql_api.middleware import setup_security
from ccql_api.routes import duplicates_router, health_router

settings = get_settings()

setup_logging(level="DEBUG" if settings.debug else settings.log_level)
logger = get_logger("api")

app = FastAPI(title=f"{settings.app_name} API", version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
setup_security(app)

app.include_router(health_router, prefix="/api")
app.include_router(duplicates_router, prefix="/api")

logger.info(f"ccql API {settings.app_version} ready ({settings.environment.value})")


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        "ccql_api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )
