"""Outcome Classifier - 레이트 리밋 감지

업스트림은 레이트 리밋을 헤더나 상태 코드가 아니라 오류 본문으로만 알립니다:

    {"errors": [{"code": 0, "message": "Too many requests"}]}

오류 응답의 message 중 하나라도 레이트 리밋 문구를 포함하면 RATE_LIMITED,
그 외 오류는 모두 FATAL입니다. 상태 코드(429 등)만으로는 판정하지 않습니다.
"""

from typing import Any, Optional

from src.core.config import settings
from src.core.exceptions import (
    MalformedResponseException,
    UpstreamException,
    UpstreamHTTPException,
)
from src.upstream.response import UpstreamResponse

from .result import FetchOutcome


class OutcomeClassifier:
    """응답/예외 → FetchOutcome 판정"""

    def __init__(self, rate_limit_phrase: Optional[str] = None):
        self.rate_limit_phrase = (
            settings.rate_limit_phrase if rate_limit_phrase is None else rate_limit_phrase
        )
        if not self.rate_limit_phrase:
            raise ValueError("rate_limit_phrase must not be empty")

    def is_rate_limit_payload(self, payload: Any) -> bool:
        """오류 본문에 레이트 리밋 메시지가 있는가?"""
        if not isinstance(payload, dict):
            return False
        errors = payload.get("errors")
        if not isinstance(errors, list):
            return False
        for error in errors:
            if not isinstance(error, dict):
                continue
            message = error.get("message")
            if isinstance(message, str) and self.rate_limit_phrase in message:
                return True
        return False

    def classify_response(self, response: UpstreamResponse) -> FetchOutcome:
        if response.ok:
            if response.payload is None:
                return FetchOutcome.fatal(
                    MalformedResponseException(response.url, "body is not JSON"),
                    response,
                )
            return FetchOutcome.success(response)

        if self.is_rate_limit_payload(response.payload):
            return FetchOutcome.rate_limited(response)

        return FetchOutcome.fatal(
            UpstreamHTTPException(response.url, response.status_code, response.payload),
            response,
        )

    def classify_exception(self, error: UpstreamException) -> FetchOutcome:
        # 전송 계층 실패는 재시도하지 않음
        return FetchOutcome.fatal(error)
