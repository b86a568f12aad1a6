"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, second_brain.api, second_brain.observability, second_brain.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from second_brain import __version__
from second_brain.api import api_router
from second_brain.api.deps import ServiceContainer
from second_brain.api.errors import register_exception_handlers
from second_brain.api.upload_limit import UploadSizeLimitMiddleware
from second_brain.boundary.db import create_tables, dispose_engine, get_async_session_factory
from second_brain.configs import Settings, get_settings
from second_brain.observability.logger import configure_logging
from second_brain.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: logging, tables, shared model clients and scheduler.
    Shutdown: cancel background reindexing, close the engine.
    """
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    try:
        await create_tables()
        if getattr(app.state, "services", None) is None:
            app.state.services = ServiceContainer(settings, get_async_session_factory())
        logger.info("Application startup complete: all resources initialized")
    except Exception as e:
        logger.exception(
            "Failed to initialize application resources",
            extra={"error": str(e)},
        )
        raise

    yield

    logger.info("Application shutdown")
    await app.state.services.scheduler.shutdown()
    await dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings override (tests)

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="SecondBrain API",
        description="Personal notes with retrieval-augmented question answering",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = None

    expose_details = not settings.is_production

    # Added first = last to execute; correlation id must wrap request logging
    app.add_middleware(
        UploadSizeLimitMiddleware,
        path=f"{API_PREFIX}/upload",
        max_upload_bytes=settings.api.max_upload_bytes,
        expose_details=expose_details,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, expose_details=expose_details)
    app.include_router(api_router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "second_brain.main:app",
        host="localhost",
        port=8082,
        reload=True,
    )
