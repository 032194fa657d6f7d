"""Diagnostics - 로거 + 타이머 협력 객체

엔진 컴포넌트는 전역 logger를 직접 부르지 않고 이 객체를 주입받아 이벤트를 남깁니다.
테스트에서는 이벤트를 기록하는 구현으로 교체할 수 있습니다.

Usage:
    diagnostics = Diagnostics()

    with diagnostics.timer("Fetched all items for user 1"):
        ...

    diagnostics.penalty_increased(400)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Callable, Iterator, Optional

from src.core.logging import logger as default_logger


class Diagnostics:
    """엔진 진단 이벤트 출력기"""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = perf_counter,
    ):
        self.logger = logger or default_logger
        self.clock = clock

    def penalty_increased(self, penalty_ms: int) -> None:
        """레이트 리밋 감지 → 패널티 증가"""
        self.logger.warning(f"[RateLimit] Increasing penalty delay to {penalty_ms}ms")

    def experience_started(self, index: int, name: str, experience_id: int) -> None:
        """경험(게임)별 아이템 조회 시작 (index는 1부터)"""
        self.logger.info(f"[Fetch] [{index}] {name} (Experience ID: {experience_id})")

    def page_fetched(self, endpoint: str, page: int, count: int, has_next: bool) -> None:
        self.logger.debug(
            f"[Paginate] {endpoint} page={page} items={count} has_next={has_next}"
        )

    @contextmanager
    def timer(self, label: str) -> Iterator[None]:
        """구간 소요 시간 측정

        성공 시 `[Benchmark] {label} in {ms}ms`, 실패 시 경과 시간과 함께 실패를 남기고
        예외는 그대로 전파합니다.
        """
        started = self.clock()
        self.logger.debug(f"[Benchmark] {label} started")
        try:
            yield
        except BaseException:
            elapsed_ms = (self.clock() - started) * 1000
            self.logger.info(f"[Benchmark] {label} failed after {elapsed_ms:.1f}ms")
            raise
        elapsed_ms = (self.clock() - started) * 1000
        self.logger.info(f"[Benchmark] {label} in {elapsed_ms:.1f}ms")
