"""Pydantic 스키마 정의"""
from typing import Any, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime


ENTITLEMENT_ITEM_TYPE = "EntitlementItem"

Price = Union[int, float]


# ============================================================================
# 업스트림 (games.roblox.com) 스키마
# ============================================================================

class UpstreamPage(BaseModel):
    """커서 페이지네이션 응답 한 페이지

    - data가 없거나 null이면 빈 목록으로 취급
    - nextPageCursor가 null/빈 문자열이면 마지막 페이지
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    data: List[dict[str, Any]] = Field(default_factory=list, description="페이지 아이템")
    next_page_cursor: Optional[str] = Field(None, alias="nextPageCursor", description="다음 페이지 커서")

    @field_validator("data", mode="before")
    @classmethod
    def _coerce_missing_data(cls, v: Any) -> Any:
        return [] if v is None else v


class Experience(BaseModel):
    """유저가 공개한 경험(게임). id/name 외 속성은 무시"""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="경험 식별자 (Universe ID)")
    name: str = Field("", description="경험 이름")

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, v: Any) -> Any:
        return "" if v is None else v


class UpstreamEntitlementItem(BaseModel):
    """업스트림 유료 아이템 (game pass). price는 판매 중이 아니면 null"""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="아이템 식별자")
    name: str = Field("", description="아이템 이름")
    price: Optional[Price] = Field(None, description="가격 (null이면 미판매)")

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def is_priced(self) -> bool:
        return self.price is not None


# ============================================================================
# API 응답 스키마
# ============================================================================

class EntitlementItem(BaseModel):
    """가격이 있는 아이템 (응답 포맷)"""
    id: int = Field(..., description="아이템 식별자")
    name: str = Field(..., description="아이템 이름")
    price: Price = Field(..., description="가격 (통화 단위 없음)")
    type: Literal["EntitlementItem"] = Field(ENTITLEMENT_ITEM_TYPE, description="고정 분류 태그")

    @classmethod
    def from_upstream(cls, item: UpstreamEntitlementItem) -> "EntitlementItem":
        if item.price is None:
            raise ValueError(f"Item {item.id} has no price")
        return cls(id=item.id, name=item.name, price=item.price)


class UserItemsResponse(BaseModel):
    """유저 아이템 목록 응답 (가격 오름차순)"""
    items: List[EntitlementItem]


class ErrorResponse(BaseModel):
    """에러 응답"""
    error: str


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    timestamp: datetime
    version: str
