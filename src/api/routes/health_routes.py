"""헬스 체크 엔드포인트"""
from fastapi import APIRouter
from datetime import datetime

from src.schemas.item_schema import HealthResponse
from src import __version__

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    헬스 체크 엔드포인트

    프로세스 생존 여부만 확인합니다. 업스트림은 호출하지 않습니다.
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(),
        version=__version__
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "User Items Proxy",
        "version": __version__,
        "docs": "/docs"
    }
