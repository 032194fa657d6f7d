"""Paginator - Cursor Pagination Walk

업스트림 목록 API는 `{data: [...], nextPageCursor: str | null}` 형태로 페이지를 돌려줍니다.
커서가 비면 종료하며, 첫 페이지는 항상 요청합니다 (do/then-check).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from src.core.config import settings
from src.core.diagnostics import Diagnostics
from src.core.exceptions import MalformedResponseException
from src.schemas.item_schema import UpstreamPage
from src.upstream.response import UpstreamResponse

from .throttle import ThrottledFetcher


SORT_ORDER = "Asc"


@dataclass(frozen=True)
class EndpointSpec:
    """페이지네이션 엔드포인트 정의

    Attributes:
        name: 로그용 이름
        path_template: 경로 템플릿 (예: "/v2/users/{user_id}/games")
        page_size: 페이지당 요청 개수 (limit)
    """

    name: str
    path_template: str
    page_size: int

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"Invalid page_size for {self.name}: {self.page_size}")

    def build_url(self, base_url: str, **path_params: Any) -> str:
        return base_url.rstrip("/") + self.path_template.format(**path_params)


def experiences_endpoint(page_size: Optional[int] = None) -> EndpointSpec:
    """유저가 공개한 경험(게임) 목록"""
    return EndpointSpec(
        name="experiences",
        path_template="/v2/users/{user_id}/games",
        page_size=settings.experience_page_size if page_size is None else page_size,
    )


def entitlement_items_endpoint(page_size: Optional[int] = None) -> EndpointSpec:
    """경험별 유료 아이템 (game pass) 목록"""
    return EndpointSpec(
        name="entitlement_items",
        path_template="/v1/games/{experience_id}/game-passes",
        page_size=settings.entitlement_page_size if page_size is None else page_size,
    )


class Paginator:
    """커서 기반 전체 페이지 수집기

    Usage:
        paginator = Paginator(fetcher, experiences_endpoint())
        experiences = await paginator.fetch_all(user_id="123")
    """

    def __init__(
        self,
        fetcher: ThrottledFetcher,
        endpoint: EndpointSpec,
        base_url: Optional[str] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        if fetcher is None:
            raise ValueError("fetcher must not be None")

        self.fetcher = fetcher
        self.endpoint = endpoint
        self.base_url = base_url or settings.upstream_base_url
        self.diagnostics = diagnostics or Diagnostics()

    async def fetch_all(self, **path_params: Any) -> list[dict[str, Any]]:
        """모든 페이지의 아이템을 업스트림 순서대로 반환

        중간에 실패하면 누적된 페이지는 버리고 예외를 그대로 전파합니다.

        Raises:
            UpstreamException: fetcher가 올린 복구 불가 오류
            MalformedResponseException: 페이지 구조가 예상과 다름
        """
        url = self.endpoint.build_url(self.base_url, **path_params)
        items: list[dict[str, Any]] = []
        cursor: Optional[str] = None
        page_number = 0

        while True:
            response = await self.fetcher.fetch(
                url,
                {
                    "limit": self.endpoint.page_size,
                    "sortOrder": SORT_ORDER,
                    "cursor": cursor,
                },
            )
            page = self._parse_page(response)
            page_number += 1

            items.extend(page.data)
            cursor = page.next_page_cursor
            self.diagnostics.page_fetched(
                self.endpoint.name, page_number, len(page.data), bool(cursor)
            )

            if not cursor:
                break

        return items

    @staticmethod
    def _parse_page(response: UpstreamResponse) -> UpstreamPage:
        if not isinstance(response.payload, dict):
            raise MalformedResponseException(response.url, "page payload is not an object")
        try:
            return UpstreamPage.model_validate(response.payload)
        except ValidationError as e:
            raise MalformedResponseException(
                response.url, f"invalid page: {e.error_count()} error(s)"
            ) from e
