"""Main FastAPI application for the Stream Vibe API."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from streamvibe.api.constants import APP_DESCRIPTION, APP_TITLE, APP_VERSION, SERVICE_NAME, Routes
from streamvibe.api.dependencies import db_manager, get_history_tracker
from streamvibe.api.middleware import RequestIDMiddleware
from streamvibe.api.play import router as play_router
from streamvibe.api.settings import get_settings
from streamvibe.logging import configure_logging

logger = logging.getLogger(__name__)


class StreamVibeApp:
    """Application container holding middleware, routers and lifespan."""

    app: FastAPI

    def __init__(self) -> None:
        configure_logging(SERVICE_NAME, get_settings().LOG_LEVEL)
        self.app = FastAPI(
            title=APP_TITLE,
            description=APP_DESCRIPTION,
            version=APP_VERSION,
            lifespan=self._lifespan,
        )
        self._setup_middleware()
        self._setup_routers()

    @staticmethod
    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """Application lifespan: flush pending history updates and release the DB on shutdown."""
        try:
            yield
        finally:
            tracker = get_history_tracker()
            if tracker.pending:
                logger.info("Waiting for %d pending history updates", tracker.pending)
            await tracker.drain()
            await db_manager.dispose()

    def _setup_middleware(self) -> None:
        settings = get_settings()

        # Request-ID (generates/propagates X-Request-ID)
        self.app.add_middleware(RequestIDMiddleware)

        # CORS
        origins = [o.strip() for o in settings.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _setup_routers(self) -> None:
        self.app.include_router(play_router, prefix=Routes.PLAY.prefix, tags=[Routes.PLAY.tag])

        @self.app.get(Routes.HEALTH)
        async def health_check() -> dict[str, str]:
            """Health check endpoint."""
            return {"status": "OK"}


_application = StreamVibeApp()
app: FastAPI = _application.app
