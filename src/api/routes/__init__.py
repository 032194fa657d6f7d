"""API routes package."""

from .health_routes import router as health_router
from .item_routes import router as item_router, get_aggregator

__all__ = ["health_router", "item_router", "get_aggregator"]
