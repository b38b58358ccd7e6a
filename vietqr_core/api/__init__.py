"""
VietQR API Application Factory
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .. import __version__
from ..config import get_config
from ..logging_config import get_logger, setup_logging
from .accounts import router as accounts_router
from .admin import router as admin_router
from .banks import router as banks_router
from .deps import close_services
from .payloads import router as payloads_router


logger = get_logger("vietqr.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan manager, closes the lookup HTTP client on shutdown"""
    yield

    await close_services()
    logger.info("Lookup services closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    config = get_config()
    setup_logging(config.log_level, fmt=config.log_format)

    app = FastAPI(
        title="VietQR Core API",
        description="Bank account name resolution and VietQR transfer payloads",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(banks_router, prefix="/banks", tags=["Banks"])
    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(payloads_router, prefix="/payloads", tags=["Payloads"])
    app.include_router(admin_router, tags=["Operations"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "vietqr_core_api",
            "version": __version__
        }

    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "VietQR Core API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "banks": "/banks",
                "accounts": "/accounts",
                "payloads": "/payloads",
                "metrics": "/metrics/usage",
                "diagnostics": "/diagnostics/health",
            }
        }

    return app


def run_server(host: str = None, port: int = None, debug: bool = False):
    """Run the API server with uvicorn"""
    config = get_config()
    uvicorn.run(
        create_app(),
        host=host or config.api_host,
        port=port or config.api_port,
        log_level="debug" if debug else "info",
    )
