"""로깅 설정

프록시 전체가 하나의 이름 있는 logger(`settings.log_name`)를 공유합니다.
메시지는 `[RateLimit]`, `[Fetch]`, `[Benchmark]`, `[API]` 같은 태그로 시작합니다.
"""
import logging
import sys
import os
from typing import Optional

from src.core.config import settings


# Production 환경에서는 DEBUG 로그 비활성화
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development") == "production"

PRODUCTION_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DEVELOPMENT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def resolve_log_level(level: str, production: bool) -> str:
    """설정된 레벨 → 실제 레벨 (production에서는 최소 INFO)"""
    level = level.upper()
    if production and level == "DEBUG":
        return "INFO"
    return level


def setup_logging(
    name: Optional[str] = None,
    level: Optional[str] = None,
    production: bool = IS_PRODUCTION,
) -> logging.Logger:
    """프록시 logger 초기화

    페이지 단위 진단(`[Paginate]`)은 DEBUG라 production에서는 출력되지 않습니다.
    """
    logger = logging.getLogger(name or settings.log_name)

    log_level = resolve_log_level(level or settings.log_level, production)
    logger.setLevel(getattr(logging, log_level))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level))
    console_handler.setFormatter(
        logging.Formatter(
            fmt=PRODUCTION_FORMAT if production else DEVELOPMENT_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    if not logger.handlers:
        logger.addHandler(console_handler)

    return logger


logger = setup_logging()
