"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, routes
from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging() -> None:
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


def create_app() -> FastAPI:
    _configure_logging()
    app = FastAPI(title=settings.app_name, description="Daily route planning for field-service appointments.")

    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    def service_info():
        return {
            "service": settings.app_name,
            "status": "running",
            "health": f"{settings.api_prefix}/health",
            "optimize": f"{settings.api_prefix}/routes/optimize",
            "docs": "/docs",
        }

    for router in (health.router, routes.router):
        app.include_router(router, prefix=settings.api_prefix)
    logging.info(f"{settings.app_name} ready, API under '{settings.api_prefix}'")
    return app


app = create_app()
