#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - FastAPI Application
HTTP API for tasks, goals, habits, logs, wellness entries and AI insights

Version: 1.0.0
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from eunoia import __version__
from eunoia.config import config
from eunoia.core.database import DatabaseError
from eunoia.core.models import ValidationError
from eunoia.services import close_all_services, get_service_manager
from eunoia.shared.models import HealthCheck
from eunoia.utils.logger import setup_logger

from .api import calendar, data, goals, insights, logs, notes, settings, tasks, voice

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown"""
    setup_logger()
    config.ensure_directories()

    services = get_service_manager()
    stats = services.store.get_stats()
    logger.info(f"Starting 4Eunoia {__version__} ({config.environment.value})")
    logger.debug(f"Configuration: {config.to_dict()}")
    logger.info(f"Data directory: {stats['data_dir']}, users: {stats['users']}")
    logger.info(f"AI: {services.ai_service.get_health_status()['status']}")

    yield

    logger.info("Stopping 4Eunoia")
    close_all_services()


def create_app() -> FastAPI:
    app = FastAPI(
        title="4Eunoia",
        description="Personal productivity and wellness API with AI insights",
        version=__version__,
        docs_url="/api/docs" if config.server.debug_mode else None,
        redoc_url="/api/redoc" if config.server.debug_mode else None,
        openapi_url="/api/openapi.json" if config.server.debug_mode else None,
        lifespan=lifespan,
    )

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.info(f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")
        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        return response

    # ===== ERROR HANDLERS =====

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError):
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Storage error"})

    # ===== ROUTES =====

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        health = get_service_manager().health_check()
        return HealthCheck(
            status=health["status"],
            service="4eunoia",
            version=__version__,
            timestamp=time.time(),
            storage=health["storage"],
            ai=health["ai"],
        )

    for router in (
        tasks.router,
        goals.router,
        goals.habits_router,
        logs.router,
        logs.expenses_router,
        calendar.router,
        calendar.reminders_router,
        notes.router,
        notes.wellness_router,
        settings.router,
        data.router,
        insights.router,
        voice.router,
    ):
        app.include_router(router)

    return app


app = create_app()
