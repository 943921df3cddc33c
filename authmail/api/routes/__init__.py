"""API route modules."""

from .auth import get_gateway, router as auth_router

__all__ = ["auth_router", "get_gateway"]
