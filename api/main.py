"""
Enquiry Relay API - Main Application.

FastAPI application serving the contact form relay and CRM proxy.
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from api import __version__
from api.models import HealthResponse
from api.routers import enquiries
from services.config import RelayConfig, load_config
from services.enquiry_pipeline import cors_headers
from services.runtime import RelayClients, build_clients

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[RelayConfig] = None,
    clients: Optional[RelayClients] = None,
) -> FastAPI:
    """
    Build the application.

    The rate limiter inside `clients` is shared by every request this app
    serves. Tests pass their own config and fake clients.
    """
    config = config or load_config()
    clients = clients or build_clients(config)

    app = FastAPI(
        title="Enquiry Relay API",
        description="Contact form relay: rate limiting, bot filtering, email and CRM delivery",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.config = config
    app.state.clients = clients

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check():
        """
        Health check endpoint.

        Returns the API status and version.
        """
        body = HealthResponse(version=__version__)
        return JSONResponse(content=body.model_dump(), headers=cors_headers())

    app.include_router(enquiries.router, tags=["Enquiries"])
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the relay with uvicorn."""
    config = app.state.config
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Contact form server running on port %d", config.port)
    uvicorn.run(app, host="0.0.0.0", port=config.port)


if __name__ == "__main__":
    run()
