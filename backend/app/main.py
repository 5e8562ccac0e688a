"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.logging import get_logger, setup_logging
from app.dustsweep.domain.chains import DEFAULT_CHAINS
from app.dustsweep.presentation.api import evm_tokens, health, solana_tokens

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    setup_logging(level="DEBUG" if settings.debug else "INFO")
    logger.info("Dust-sweep scanner starting up...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(
        f"Scanning {len(DEFAULT_CHAINS)} EVM chains: "
        f"{', '.join(chain.slug for chain in DEFAULT_CHAINS)}"
    )

    yield

    # Shutdown
    logger.info("Dust-sweep scanner shutting down...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Dust-Sweep Token Scanner",
        description="Multi-chain wallet balance discovery for consolidating dust holdings",
        version=health.VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.is_development else None,
        redoc_url="/api/redoc" if settings.is_development else None,
    )

    # API routes; cross-origin headers are set per response from the allow-list
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(evm_tokens.router, prefix="/api", tags=["EVM"])
    app.include_router(solana_tokens.router, prefix="/api", tags=["Solana"])

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
