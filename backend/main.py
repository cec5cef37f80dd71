"""
Career Chat - Main Application Entry Point

Career counselor chat backend with guest rate limiting.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from career_chat.core.config import get_settings
from career_chat.core.logger import logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Career Chat in {settings.APP_ENV} mode...")

    from career_chat.infrastructure.local.database import init_db

    await init_db()

    # Refuses the mock provider in production before any request is served
    from career_chat.api.deps import get_auth_provider

    get_auth_provider()

    if not settings.has_gemini_credentials:
        logger.warning("GEMINI_API_KEY is not set; only canned answers will be available")

    yield

    # Shutdown
    logger.info("Shutting down Career Chat...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Career Chat",
        description="AI career counselor chat with guest rate limiting",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from career_chat.api.errors import register_exception_handlers

    register_exception_handlers(app)

    # Include routers
    from career_chat.api import chat, sessions

    app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
    app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.APP_ENV,
            "version": "0.1.0",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
