"""공유 HTTP 클라이언트 (curl_cffi)

- 요청마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커지므로
  프로세스 단위로 세션을 재사용합니다. 세션에는 요청별 상태가 없습니다.
- 전송 계층 실패는 UpstreamConnectionException으로 올리고,
  HTTP 오류 응답은 그대로 UpstreamResponse로 반환합니다 (판정은 엔진 몫).
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Mapping, Optional

from curl_cffi import CurlError
from curl_cffi.requests import AsyncSession

from src.core.config import settings
from src.core.exceptions import UpstreamConnectionException
from src.core.logging import logger

from .response import UpstreamResponse


class SharedHttpClient:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                impersonate=settings.upstream_impersonate,
                headers=self.default_headers(),
                allow_redirects=True,
                max_clients=int(getattr(settings, "upstream_max_clients", 10)),
                trust_env=False,
            )
            return self._session

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": settings.upstream_user_agent,
            "Accept": "application/json",
        }

    async def get_json(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        timeout_s: Optional[float] = None,
    ) -> UpstreamResponse:
        """JSON GET

        None 값 파라미터(첫 페이지의 cursor 등)는 쿼리 문자열에서 제외합니다.

        Raises:
            UpstreamConnectionException: 전송 계층 실패
        """
        sess = await self._ensure_session()
        query = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            resp = await sess.get(
                url,
                params=query,
                timeout=timeout_s or settings.upstream_timeout_s,
            )
        except CurlError as e:
            logger.info(f"[HTTP_CLIENT] GET failed: {type(e).__name__}: {repr(e)}")
            raise UpstreamConnectionException(url, f"{type(e).__name__}: {e}") from e

        status = getattr(resp, "status_code", 0) or 0
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        return UpstreamResponse(url=url, status_code=status, payload=payload)

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except CurlError as e:
                logger.warning(f"[HTTP_CLIENT] Session close failed: {e}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
