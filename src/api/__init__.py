"""API 엔드포인트 패키지 - export only."""

from .routes import health_router, item_router, get_aggregator

__all__ = ["health_router", "item_router", "get_aggregator"]
