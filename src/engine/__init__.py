"""Engine Layer - Throttled Pagination and Aggregation

This module provides the core engine layer for the proxy, implementing:
- ThrottledFetcher: Adaptive delay + rate-limit penalty backoff
- OutcomeClassifier: Tagged result {SUCCESS, RATE_LIMITED, FATAL}
- Paginator: Cursor-based pagination walk
- ItemAggregator: Experiences → entitlement items fan-out, filter, sort
"""

from .aggregator import ItemAggregator
from .classifier import OutcomeClassifier
from .paginator import (
    EndpointSpec,
    Paginator,
    entitlement_items_endpoint,
    experiences_endpoint,
)
from .result import FetchOutcome, FetchPhase, FetchStatus
from .throttle import RequestState, ThrottledFetcher

__all__ = [
    "ItemAggregator",
    "OutcomeClassifier",
    "EndpointSpec",
    "Paginator",
    "experiences_endpoint",
    "entitlement_items_endpoint",
    "FetchOutcome",
    "FetchPhase",
    "FetchStatus",
    "RequestState",
    "ThrottledFetcher",
]
