"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docuchat import __version__
from docuchat.api.routes import router
from docuchat.app import app_instance
from docuchat.config.settings import get_settings
from docuchat.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    await app_instance.startup()
    app.state.session = app_instance.session

    yield

    app.state.session = None
    await app_instance.shutdown()


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="DocuChat API",
        description="Document summarization and question answering",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "name": "DocuChat API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


# Create application instance
app = create_app()


def main() -> None:
    """Entry point for running the application."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "docuchat.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
