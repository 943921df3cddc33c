"""FastAPI application factory for the authentication endpoints."""

import logging

from fastapi import FastAPI

from authmail.api.routes import auth_router, get_gateway
from authmail.services.gateway import EmailAuthGateway

logger = logging.getLogger(__name__)


def create_app(gateway: EmailAuthGateway, *, prefix: str = "/api/v1/auth") -> FastAPI:
    """Build an application exposing ``gateway`` under ``prefix``."""

    app = FastAPI()
    app.state.auth_gateway = gateway

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(auth_router, prefix=prefix)
    logger.info("Registered auth routes under %s", prefix)
    return app


__all__ = ["create_app", "get_gateway"]
