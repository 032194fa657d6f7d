"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class ProxyException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 업스트림 관련 예외
class UpstreamException(ProxyException):
    """업스트림 호출 관련 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "UPSTREAM_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "UPSTREAM_ERROR", details)


class UpstreamConnectionException(UpstreamException):
    """네트워크/전송 계층 실패 (DNS, 연결 거부, 타임아웃 등)"""
    def __init__(self, url: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Request to {url} failed: {reason}"
        super().__init__(message, "UPSTREAM_CONNECTION_ERROR",
                         details or {"url": url, "reason": reason})


class UpstreamHTTPException(UpstreamException):
    """레이트 리밋이 아닌 업스트림 오류 응답 (4xx/5xx)"""
    def __init__(self, url: str, status_code: int, payload: Any = None, details: Optional[dict[str, Any]] = None):
        self.url = url
        self.status_code = status_code
        self.payload = payload
        message = f"Upstream returned HTTP {status_code} for {url}"
        super().__init__(message, "UPSTREAM_HTTP_ERROR",
                         details or {"url": url, "status_code": status_code, "payload": payload})


class MalformedResponseException(UpstreamException):
    """응답 본문이 JSON이 아니거나 예상 구조가 아님"""
    def __init__(self, url: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Malformed response from {url}: {reason}"
        super().__init__(message, "MALFORMED_RESPONSE",
                         details or {"url": url, "reason": reason})


# 유효성 검증 관련 예외
class ValidationException(ProxyException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                         details or {"field": field, "reason": reason})


class MissingUserIdException(ValidationException):
    """userId 경로 파라미터 누락"""
    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__("userId", "must not be empty", details)
