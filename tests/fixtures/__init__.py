"""테스트 자산(데이터) 레이어

규칙:
- 로직 없음 (단순 dict/list/primitive)
- 엔진/네트워크 의존 없음
"""

from .upstream_payloads import (
    BASE_URL,
    RATE_LIMIT_PAYLOAD,
    SERVER_ERROR_PAYLOAD,
    USER_ID,
    EXPERIENCES,
    ENTITLEMENT_ITEMS,
)

__all__ = [
    "BASE_URL",
    "RATE_LIMIT_PAYLOAD",
    "SERVER_ERROR_PAYLOAD",
    "USER_ID",
    "EXPERIENCES",
    "ENTITLEMENT_ITEMS",
]
