"""User Item Routes (Engine Layer)

HTTP Layer는 입력 검증과 Engine 결과 → HTTP 응답 변환만 수행합니다.
업스트림 오류 상세는 서버 로그에만 남기고 호출자에게는 일반 메시지만 돌려줍니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.core.exceptions import MissingUserIdException, UpstreamException
from src.core.logging import logger
from src.engine import (
    ItemAggregator,
    Paginator,
    ThrottledFetcher,
    entitlement_items_endpoint,
    experiences_endpoint,
)
from src.schemas.item_schema import ErrorResponse, UserItemsResponse
from src.upstream import get_shared_http_client

router = APIRouter(tags=["items"])

MISSING_USER_ID_MESSAGE = "Missing userId"
FETCH_FAILED_MESSAGE = "Failed to fetch user items"

# 싱글톤 서비스 (요청별 상태 없음)
_aggregator: Optional[ItemAggregator] = None


def get_aggregator() -> ItemAggregator:
    """ItemAggregator 싱글톤

    Engine Layer의 진입점을 제공합니다.
    """
    global _aggregator
    if _aggregator is None:
        fetcher = ThrottledFetcher(get_shared_http_client())
        _aggregator = ItemAggregator(
            experience_paginator=Paginator(fetcher, experiences_endpoint()),
            item_paginator=Paginator(fetcher, entitlement_items_endpoint()),
        )
    return _aggregator


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.get(
    "/user-items/{user_id}",
    response_model=UserItemsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_user_items(
    user_id: str,
    aggregator: ItemAggregator = Depends(get_aggregator),
):
    """유저 유료 아이템 API

    Flow:
        1. userId 검증 (비어 있으면 400, 업스트림 호출 없음)
        2. Engine에 위임 (경험 → 아이템 → 필터 → 정렬)
        3. 결과를 HTTP Response로 변환 (실패 시 500)
    """
    try:
        user_id = _validate_user_id(user_id)
    except MissingUserIdException as e:
        logger.warning(f"[API] Input validation failed: {e}")
        return _error(400, MISSING_USER_ID_MESSAGE)

    try:
        items = await aggregator.collect_priced_items(user_id)
    except UpstreamException as e:
        logger.error(f"[Error] Fetching user items: {e} details={e.details}")
        return _error(500, FETCH_FAILED_MESSAGE)
    except Exception:
        logger.error(f"[Error] Fetching user items: user_id='{user_id}'", exc_info=True)
        return _error(500, FETCH_FAILED_MESSAGE)

    logger.info(f"[API] user_id='{user_id}' items={len(items)}")
    return UserItemsResponse(items=items)


@router.get("/user-items", include_in_schema=False)
@router.get("/user-items/", include_in_schema=False)
async def get_user_items_without_id():
    """userId 없이 호출된 경우"""
    logger.warning("[API] Input validation failed: missing userId")
    return _error(400, MISSING_USER_ID_MESSAGE)


def _validate_user_id(user_id: Optional[str]) -> str:
    value = (user_id or "").strip()
    if not value:
        raise MissingUserIdException()
    return value
