"""설정 관리 - 환경 변수 로드 및 검증"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 서버 (PORT 환경 변수, 기본 3000)
    host: str = "0.0.0.0"
    port: int = 3000

    # 업스트림 (games.roblox.com)
    upstream_base_url: str = "https://games.roblox.com"
    upstream_timeout_s: float = 10.0
    upstream_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    upstream_impersonate: str = "chrome110"
    upstream_max_clients: int = 10

    # 스로틀링
    # - base_delay_ms: 매 요청(첫 요청 포함) 전에 기다리는 고정 지연
    # - penalty_increment_ms: 레이트 리밋 응답마다 누적되는 패널티
    # - penalty_cap_ms: 패널티 상한 (None이면 무제한)
    base_delay_ms: int = 100
    penalty_increment_ms: int = 200
    penalty_cap_ms: Optional[int] = None
    rate_limit_phrase: str = "Too many requests"

    # 페이지네이션
    experience_page_size: int = 50
    entitlement_page_size: int = 100

    # 경험(게임)별 아이템 조회 동시성. 업스트림 레이트 리밋 하나를 공유하므로 기본 1(순차)
    experience_concurrency: int = 1

    # API
    api_title: str = "User Items Proxy"
    api_version: str = "1.0.0"
    api_description: str = "유저가 공개한 경험의 유료 아이템을 가격순으로 모아 반환합니다."

    # 로깅
    log_name: str = "user_items_proxy"
    log_level: str = "INFO"

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("base_delay_ms", "penalty_increment_ms")
    @classmethod
    def validate_delays(cls, v: int) -> int:
        if v < 0:
            raise ValueError("delays must be >= 0")
        return v

    @field_validator("penalty_cap_ms")
    @classmethod
    def validate_penalty_cap(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("penalty_cap_ms must be >= 0")
        return v

    @field_validator("experience_page_size", "entitlement_page_size")
    @classmethod
    def validate_page_sizes(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("page sizes must be positive")
        return v

    @field_validator("upstream_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("upstream_timeout_s must be positive")
        return v

    @field_validator("experience_concurrency", "upstream_max_clients")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("concurrency limits must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log_level: {v}")
        return v

    @field_validator("rate_limit_phrase")
    @classmethod
    def validate_rate_limit_phrase(cls, v: str) -> str:
        if not v:
            raise ValueError("rate_limit_phrase must not be empty")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
