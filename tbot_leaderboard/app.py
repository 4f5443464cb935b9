"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tbot_leaderboard.config import Config
from tbot_leaderboard.datasources import DataSource, DialogTbotDataSource
from tbot_leaderboard.exceptions import UpstreamError, ValidationError
from tbot_leaderboard.api import router
from tbot_leaderboard.api.dependencies import set_config, set_datasource

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    datasource: DataSource | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration. If None, loads from environment.
        datasource: Upstream data source. If None, a DialogTbotDataSource is
            built from config.

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = Config.from_env()

    if datasource is None:
        datasource = DialogTbotDataSource(
            api_url=config.tbot_api_url,
            nft_transfers_path=config.nft_transfers_path,
            ft_transfers_path=config.ft_transfers_path,
            reputation_path=config.reputation_path,
            timeout=config.request_timeout,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        # Startup
        logger.info("Starting dialog-tbot reputation leaderboard API")
        logger.info(f"Using dialog-tbot API: {config.tbot_api_url}")
        if config.reputation_required:
            logger.info("Reputation lookups are mandatory")

        set_config(config)
        set_datasource(datasource)

        yield

        # Shutdown
        logger.info("Shutting down...")
        await datasource.close()

    app = FastAPI(
        title="dialog-tbot Reputation Leaderboard API",
        description="Sender leaderboards over NFT transfers weighted by reputation",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        logger.error(f"Upstream failure on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # Include API routes
    app.include_router(router)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
