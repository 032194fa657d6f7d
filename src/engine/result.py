"""Fetch Outcome - Tagged Result Format

업스트림 시도 한 번의 판정 결과와 재시도 드라이버의 상태를 정의합니다.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.core.exceptions import UpstreamException
from src.upstream.response import UpstreamResponse


class FetchStatus(str, Enum):
    """시도 판정

    SUCCESS만 호출자에게 반환되고, RATE_LIMITED는 재시도, FATAL은 즉시 전파됩니다.
    """

    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    FATAL = "fatal"


class FetchPhase(str, Enum):
    """재시도 드라이버 상태

    IDLE → WAITING → REQUESTING → (DONE | FAILED | WAITING)
    """

    IDLE = "idle"
    WAITING = "waiting"
    REQUESTING = "requesting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchOutcome:
    """시도 판정 결과

    Attributes:
        status: 판정
        response: SUCCESS/RATE_LIMITED일 때의 응답
        error: FATAL일 때 호출자에게 전파할 예외
    """

    status: FetchStatus
    response: Optional[UpstreamResponse] = None
    error: Optional[UpstreamException] = None

    @property
    def is_success(self) -> bool:
        return self.status == FetchStatus.SUCCESS

    @property
    def is_rate_limited(self) -> bool:
        return self.status == FetchStatus.RATE_LIMITED

    @classmethod
    def success(cls, response: UpstreamResponse) -> "FetchOutcome":
        return cls(status=FetchStatus.SUCCESS, response=response)

    @classmethod
    def rate_limited(cls, response: UpstreamResponse) -> "FetchOutcome":
        return cls(status=FetchStatus.RATE_LIMITED, response=response)

    @classmethod
    def fatal(
        cls, error: UpstreamException, response: Optional[UpstreamResponse] = None
    ) -> "FetchOutcome":
        return cls(status=FetchStatus.FATAL, response=response, error=error)
