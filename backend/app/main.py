"""
FastAPI application entry point.
"""

import logging
import platform
import sys

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError

from backend.app.core.config import get_settings
from backend.app.api import scrape
from jobsweep import __version__

logger = logging.getLogger(__name__)

CAPABILITIES = [
    "Universal website scraping",
    "Keyword-based job detection",
    "Anti-bot protection bypass",
    "Flexible data extraction",
    "Multiple website support",
]

ENDPOINTS = {
    "scrape": "POST /scrape - Scrape any website for job listings",
    "bulk_scrape": "POST /bulk-scrape - Scrape multiple websites",
    "health": "GET / - Health check",
}


def create_app() -> FastAPI:
    """Create and configure the FastAPI app."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Scrape job listings from any careers page or job board",
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    app.include_router(scrape.router)

    @app.get("/")
    async def root():
        return {
            "status": f"{settings.app_name} is running",
            "version": __version__,
            "python_version": platform.python_version(),
            "platform": sys.platform,
            "capabilities": CAPABILITIES,
            "endpoints": ENDPOINTS,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("backend.app.main:app", host=settings.host, port=settings.port, reload=settings.debug)
