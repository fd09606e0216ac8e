import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.health import create_health_router, set_start_time
from .api.life_weeks import router as life_weeks_router
from .core.config import get_cors_origins, get_settings
from .core.database import close_database, init_database
from .middleware.error_handler import register_error_handlers
from .utils.logging import setup_logging
from .version import __version__

logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None, configure_logging: bool = True) -> FastAPI:
    """Build the FastAPI application.

    Args:
        database_url: Override for the preferences database (tests pass a temp file).
        configure_logging: Install the logging handlers on startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        settings = get_settings()
        if configure_logging:
            setup_logging(log_level=settings.log_level, log_to_file=settings.log_to_file)
        logger.info("🚀 Life Weeks starting up...")
        set_start_time()

        try:
            await init_database(database_url)
            logger.info("✅ Database initialized")
        except Exception as e:
            logger.error(f"❌ Database initialization failed: {e}")
            raise

        yield

        await close_database()
        logger.info("✅ Shutdown complete")

    app = FastAPI(
        title="Life Weeks",
        description="A lifespan as a grid of weeks, with illustrative statistics",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(create_health_router())
    app.include_router(life_weeks_router)
    return app


app = create_app()
