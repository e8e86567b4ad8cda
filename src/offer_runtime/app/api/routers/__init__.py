"""API routers for offer endpoints."""

from offer_runtime.app.api.routers.offers import router as offers_router

__all__ = ["offers_router"]
