"""업스트림 응답 표준 포맷"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UpstreamResponse:
    """업스트림 HTTP 응답

    Attributes:
        url: 요청 URL (쿼리 제외)
        status_code: HTTP 상태 코드
        payload: 디코딩된 JSON 본문. JSON이 아니면 None
    """

    url: str
    status_code: int
    payload: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
