"""Item Aggregator - Experiences → Entitlement Items Fan-out

1. 유저의 경험(게임) 전체 조회
2. 경험별 유료 아이템 전체 조회 (기본 순차, concurrency로 상한 조절)
3. 가격이 있는 아이템만 EntitlementItem으로 변환
4. 가격 오름차순 정렬

어느 단계든 실패하면 전체가 실패합니다 (부분 결과 없음).
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from pydantic import ValidationError

from src.core.config import settings
from src.core.diagnostics import Diagnostics
from src.core.exceptions import MalformedResponseException
from src.schemas.item_schema import EntitlementItem, Experience, UpstreamEntitlementItem

from .paginator import Paginator


class ItemAggregator:
    """유저 유료 아이템 수집기

    업스트림 레이트 리밋이 하나뿐이라 기본적으로 한 번에 하나의 요청만 내보냅니다.
    experience N+1의 아이템 조회는 experience N의 페이지네이션이 끝난 뒤 시작됩니다.
    """

    def __init__(
        self,
        experience_paginator: Paginator,
        item_paginator: Paginator,
        diagnostics: Optional[Diagnostics] = None,
        concurrency: Optional[int] = None,
    ):
        """
        Args:
            experience_paginator: 유저별 경험 목록 Paginator
            item_paginator: 경험별 아이템 목록 Paginator
            diagnostics: 진단 이벤트 출력기
            concurrency: 동시에 처리할 경험 수 상한 (기본값: settings.experience_concurrency)
        """
        if experience_paginator is None:
            raise ValueError("experience_paginator must not be None")
        if item_paginator is None:
            raise ValueError("item_paginator must not be None")

        self.experiences = experience_paginator
        self.items = item_paginator
        self.diagnostics = diagnostics or Diagnostics()
        self.concurrency = settings.experience_concurrency if concurrency is None else concurrency
        if self.concurrency <= 0:
            raise ValueError(f"Invalid concurrency: {self.concurrency}")

    async def collect_priced_items(self, user_id: str) -> list[EntitlementItem]:
        """유저의 가격 있는 아이템 전체 (가격 오름차순)

        Raises:
            UpstreamException: 업스트림 호출 실패 (경험/아이템 어느 쪽이든)
        """
        with self.diagnostics.timer(f"Fetched all items for user {user_id}"):
            raw_experiences = await self.experiences.fetch_all(user_id=user_id)
            experiences = [
                self._parse(Experience, raw, self.experiences.endpoint.name)
                for raw in raw_experiences
            ]

            if self.concurrency == 1:
                collected: list[EntitlementItem] = []
                for index, experience in enumerate(experiences, start=1):
                    collected.extend(await self._collect_for_experience(index, experience))
            else:
                collected = await self._collect_bounded(experiences)

        return sorted(collected, key=lambda item: item.price)

    async def _collect_bounded(self, experiences: list[Experience]) -> list[EntitlementItem]:
        """semaphore 상한 안에서 경험별 조회

        하나라도 실패하면 남은 작업(대기 중/진행 중)을 모두 취소한 뒤 예외를 전파합니다.
        """
        semaphore = asyncio.Semaphore(self.concurrency)

        async def run(index: int, experience: Experience) -> list[EntitlementItem]:
            async with semaphore:
                return await self._collect_for_experience(index, experience)

        tasks = [
            asyncio.ensure_future(run(index, experience))
            for index, experience in enumerate(experiences, start=1)
        ]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return [item for per_experience in results for item in per_experience]

    async def _collect_for_experience(
        self, index: int, experience: Experience
    ) -> list[EntitlementItem]:
        self.diagnostics.experience_started(index, experience.name, experience.id)

        raw_items = await self.items.fetch_all(experience_id=experience.id)
        priced: list[EntitlementItem] = []
        for raw in raw_items:
            item = self._parse(UpstreamEntitlementItem, raw, self.items.endpoint.name)
            if item.is_priced:
                priced.append(EntitlementItem.from_upstream(item))
        return priced

    @staticmethod
    def _parse(model: Any, raw: Any, source: str) -> Any:
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            raise MalformedResponseException(
                source, f"invalid {model.__name__} record: {e.error_count()} error(s)"
            ) from e
