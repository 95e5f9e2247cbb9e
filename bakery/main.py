import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bakery import __version__
from bakery.config import Settings, get_settings
from bakery.core.logging import install_request_logging, setup_logging
from bakery.core.responses import install_error_handlers
from bakery.database import Database
from bakery.routers import (
    events_router,
    health_router,
    inventory_router,
    products_router,
    users_router,
)
from bakery.services.user_service import prepare_login

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)
    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        database.create_all()
        prepare_login(settings)
        logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(title=settings.APP_NAME, version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    origins = settings.cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    install_error_handlers(app)
    install_request_logging(app)

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(products_router)
    app.include_router(inventory_router)
    app.include_router(events_router)
    return app


__all__ = ["create_app"]
