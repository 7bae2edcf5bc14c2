"""FastAPI application for the post analysis service."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager

from fastapi import FastAPI

from post_analysis.common.config import RootConfig
from post_analysis.connectors import Publisher, StorageConnector
from post_analysis.inference import LanguageClient
from post_analysis.processor import AnalysisProcessor

from . import routes

logger = logging.getLogger(__name__)


def build_processor(config: RootConfig) -> AnalysisProcessor:
    """Create the processor and its (unconnected) service clients."""
    return AnalysisProcessor(
        storage=StorageConnector.from_config(config.storage),
        language=LanguageClient.from_config(config.language),
        publisher=Publisher.from_config(config.pubsub),
    )


def create_app(config: RootConfig, processor: AnalysisProcessor | None = None) -> FastAPI:
    """Create the application.

    When no processor is given, one is built from ``config`` at startup. Its
    clients are connected for the lifetime of the app and the topic is checked;
    a missing topic aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting post analysis service...")

        async with AsyncExitStack() as stack:
            if getattr(app.state, "processor", None) is None:
                built = build_processor(config)
                for component in (built.storage, built.language, built.publisher):
                    await stack.enter_async_context(component)

                # check that our topic exists, so we can function like expected
                await built.publisher.validate()
                app.state.processor = built

            logger.info(f"Listening on port {config.server.port}")
            yield
            logger.info("Shutting down post analysis service...")

    app = FastAPI(
        title="Post Analysis Service",
        description="Entity and sentiment analysis of scraped posts",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.processor = processor
    app.include_router(routes.router, tags=["analysis"])

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    return app
