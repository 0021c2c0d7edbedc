from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from core.config import Settings, settings
from core.logging_config import setup_logging

# Feature routes
from features.tides.routes.tide_routes import router as tide_router
from features.locations.routes.location_routes import router as location_router

# Services and clients
from features.tides.services.worldtides_client import TideClient
from features.tides.services.tide_service import TideService
from features.locations.services.location_store import LocationStore

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

def create_app(app_settings: Settings = settings, client: Optional[TideClient] = None) -> FastAPI:
    """Build the API with services configured from ``app_settings``."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        logger.info("🚀 Starting Tide Times API...")

        tide_client = client or TideClient.from_settings(app_settings)
        if tide_client.use_mock_data:
            logger.info("🧪 Serving mock tide data")
        elif not tide_client.api_key:
            logger.warning("⚠️ No WorldTides API key configured, tide requests will fail")

        app.state.tide_service = TideService(
            client=tide_client,
            quota_patterns=app_settings.quota_error_patterns
        )
        app.state.location_store = LocationStore(app_settings.location_file)

        logger.info("✨ API startup complete - ready to serve requests")
        yield
        logger.info("👋 API shutdown complete")

    app = FastAPI(
        title="Tide Times API",
        description="Today's tide heights and extremes for a location",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(tide_router)
    app.include_router(location_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "time": datetime.now().isoformat()
        }

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5010))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=settings.log_level.lower(),
        workers=1
    )
