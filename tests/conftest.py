"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Dummy/Fake 주입 (업스트림 전송, sleep, diagnostics)

금지:
- 실제 네트워크 호출
"""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.core.diagnostics import Diagnostics  # noqa: E402
from src.upstream.response import UpstreamResponse  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


class FakeTransport:
    """업스트림 전송 더미

    URL별로 응답(또는 예외)을 순서대로 돌려주고, 모든 호출을 기록합니다.
    """

    def __init__(self, routes: Optional[dict[str, list[Any]]] = None):
        self.routes: dict[str, list[Any]] = {url: list(queue) for url, queue in (routes or {}).items()}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def add(self, url: str, *responses: Any) -> "FakeTransport":
        self.routes.setdefault(url, []).extend(responses)
        return self

    async def get_json(
        self, url: str, *, params: Optional[Mapping[str, Any]] = None
    ) -> UpstreamResponse:
        self.calls.append((url, dict(params or {})))
        queue = self.routes.get(url)
        if not queue:
            raise AssertionError(f"Unexpected upstream call: {url} {params}")
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


class SleepRecorder:
    """asyncio.sleep 대체: 실제로 기다리지 않고 요청된 초만 기록"""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def milliseconds(self) -> list[int]:
        return [round(s * 1000) for s in self.calls]


class RecordingDiagnostics(Diagnostics):
    """진단 이벤트를 메모리에 기록"""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[tuple[Any, ...]] = []

    def penalty_increased(self, penalty_ms: int) -> None:
        self.events.append(("penalty", penalty_ms))

    def experience_started(self, index: int, name: str, experience_id: int) -> None:
        self.events.append(("experience", index, name, experience_id))

    def page_fetched(self, endpoint: str, page: int, count: int, has_next: bool) -> None:
        self.events.append(("page", endpoint, page, count, has_next))

    @contextmanager
    def timer(self, label: str) -> Iterator[None]:
        self.events.append(("timer_start", label))
        yield
        self.events.append(("timer_end", label))

    def of(self, kind: str) -> list[tuple[Any, ...]]:
        return [event for event in self.events if event[0] == kind]


def make_response(url: str, payload: Any, status_code: int = 200) -> UpstreamResponse:
    return UpstreamResponse(url=url, status_code=status_code, payload=payload)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture
def response_factory():
    """UpstreamResponse 생성 헬퍼"""
    return make_response
