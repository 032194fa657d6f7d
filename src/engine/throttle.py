"""Throttled Fetcher - Adaptive Delay + Rate-Limit Penalty Backoff

논리적 호출 한 번(fetch)이 여러 번의 물리적 시도로 이루어질 수 있습니다.

- 매 시도 전(첫 시도 포함) base_delay + penalty_delay 만큼 대기
- 성공: 패널티 0으로 초기화 후 즉시 반환
- 레이트 리밋: 패널티 += increment 후 재시도 (재시도 횟수 제한 없음)
- 그 외 실패: 재시도 없이 즉시 전파

재시도 상태(RequestState)는 호출마다 새로 만들어 루프 안에서만 주고받으므로
같은 fetcher 인스턴스를 여러 요청이 공유해도 패널티가 섞이지 않습니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol

from src.core.config import settings
from src.core.diagnostics import Diagnostics
from src.core.exceptions import UpstreamException
from src.upstream.response import UpstreamResponse

from .classifier import OutcomeClassifier
from .result import FetchOutcome, FetchPhase


SleepFunc = Callable[[float], Awaitable[Any]]


class UpstreamTransport(Protocol):
    """업스트림 전송 인터페이스 (SharedHttpClient가 구현)"""

    async def get_json(
        self, url: str, *, params: Optional[Mapping[str, Any]] = None
    ) -> UpstreamResponse:
        ...


@dataclass(frozen=True)
class RequestState:
    """재시도 루프 상태 (불변 값)

    Attributes:
        base_delay_ms: 매 시도 전 고정 대기
        penalty_delay_ms: 연속 레이트 리밋으로 누적된 추가 대기
        attempts: 지금까지 수행한 물리적 시도 수
        phase: 드라이버 상태
    """

    base_delay_ms: int
    penalty_delay_ms: int = 0
    attempts: int = 0
    phase: FetchPhase = FetchPhase.IDLE

    @property
    def wait_ms(self) -> int:
        return self.base_delay_ms + self.penalty_delay_ms

    def waiting(self) -> "RequestState":
        return replace(self, phase=FetchPhase.WAITING)

    def requesting(self) -> "RequestState":
        return replace(self, phase=FetchPhase.REQUESTING, attempts=self.attempts + 1)

    def penalized(self, increment_ms: int, cap_ms: Optional[int] = None) -> "RequestState":
        penalty = self.penalty_delay_ms + increment_ms
        if cap_ms is not None:
            penalty = min(penalty, cap_ms)
        return replace(self, penalty_delay_ms=penalty)

    def done(self) -> "RequestState":
        return replace(self, phase=FetchPhase.DONE, penalty_delay_ms=0)

    def failed(self) -> "RequestState":
        return replace(self, phase=FetchPhase.FAILED)


class ThrottledFetcher:
    """레이트 리밋 적응형 업스트림 호출기

    Usage:
        fetcher = ThrottledFetcher(get_shared_http_client())
        response = await fetcher.fetch(url, {"limit": 50, "sortOrder": "Asc"})
    """

    def __init__(
        self,
        transport: UpstreamTransport,
        *,
        base_delay_ms: Optional[int] = None,
        penalty_increment_ms: Optional[int] = None,
        penalty_cap_ms: Optional[int] = None,
        classifier: Optional[OutcomeClassifier] = None,
        diagnostics: Optional[Diagnostics] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Args:
            transport: 업스트림 전송 (get_json 구현)
            base_delay_ms: 기본 대기 (기본값: settings.base_delay_ms)
            penalty_increment_ms: 패널티 증가량 (기본값: settings.penalty_increment_ms)
            penalty_cap_ms: 패널티 상한 (기본값: settings.penalty_cap_ms, None이면 무제한)
            classifier: 시도 판정기
            diagnostics: 진단 이벤트 출력기
            sleep: 비동기 대기 함수 (초 단위)
        """
        if transport is None:
            raise ValueError("transport must not be None")

        self.transport = transport
        self.base_delay_ms = settings.base_delay_ms if base_delay_ms is None else base_delay_ms
        self.penalty_increment_ms = (
            settings.penalty_increment_ms if penalty_increment_ms is None else penalty_increment_ms
        )
        self.penalty_cap_ms = settings.penalty_cap_ms if penalty_cap_ms is None else penalty_cap_ms
        self.classifier = classifier or OutcomeClassifier()
        self.diagnostics = diagnostics or Diagnostics()
        self._sleep = sleep

    async def fetch(self, url: str, params: Optional[Mapping[str, Any]] = None) -> UpstreamResponse:
        """업스트림 GET (레이트 리밋 시 무한 재시도)

        Returns:
            UpstreamResponse: 성공 응답

        Raises:
            UpstreamException: 레이트 리밋이 아닌 모든 실패
        """
        state = RequestState(base_delay_ms=self.base_delay_ms)

        while True:
            state = state.waiting()
            await self._sleep(state.wait_ms / 1000)

            state = state.requesting()
            outcome = await self._attempt(url, params)

            if outcome.is_success:
                state = state.done()
                return outcome.response

            if outcome.is_rate_limited:
                state = state.penalized(self.penalty_increment_ms, self.penalty_cap_ms)
                self.diagnostics.penalty_increased(state.penalty_delay_ms)
                continue

            state = state.failed()
            raise outcome.error

    async def _attempt(self, url: str, params: Optional[Mapping[str, Any]]) -> FetchOutcome:
        """물리적 시도 1회 + 판정"""
        try:
            response = await self.transport.get_json(url, params=params)
        except UpstreamException as e:
            return self.classifier.classify_exception(e)
        return self.classifier.classify_response(response)
