"""
목적: 저장소 조회에 사용하는 공통 모델을 정의한다.
설명: 구조화 필터/정렬/페이지 결과 모델과 불투명 술어/정렬 키 타입을 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/chat_store/integrations/storage/base/filter_builder.py, src/chat_store/integrations/storage/base/context.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Generic, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from chat_store.integrations.storage.base.entity import EntityT


class FilterOperator(str, Enum):
    """필터 연산자."""

    EQ = "EQ"
    NE = "NE"
    GT = "GT"
    GTE = "GTE"
    LT = "LT"
    LTE = "LTE"
    IN = "IN"
    NOT_IN = "NOT_IN"
    CONTAINS = "CONTAINS"


class FilterCondition(BaseModel):
    """필터 조건. `field`는 엔티티의 파이썬 필드 이름이다."""

    field: str
    operator: FilterOperator
    value: Any

    @model_validator(mode="after")
    def _normalize_collection(self) -> "FilterCondition":
        if self.operator in (FilterOperator.IN, FilterOperator.NOT_IN) and isinstance(
            self.value, (tuple, set, frozenset)
        ):
            self.value = list(self.value)
        return self


class FilterExpression(BaseModel):
    """필터 표현식."""

    conditions: List[FilterCondition] = Field(default_factory=list)
    logic: str = Field(default="AND", description="조건 결합 논리(AND/OR)")

    def is_empty(self) -> bool:
        """조건이 없는지 여부를 반환한다."""

        return not self.conditions


class SortOrder(str, Enum):
    """정렬 순서."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def from_descending(cls, descending: bool) -> "SortOrder":
        return cls.DESC if descending else cls.ASC


class Page(BaseModel, Generic[EntityT]):
    """페이지 조회 결과.

    `continuation_token`이 None이면 더 이상 페이지가 없다.
    """

    items: List[EntityT] = Field(default_factory=list)
    continuation_token: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return self.continuation_token is not None


# 클라이언트 측에서만 평가되는 불투명 술어
Predicate = Callable[[Any], bool]

# 필드 이름(서버 정렬 가능) 또는 키 추출 함수(클라이언트 정렬 전용)
OrderKey = Union[str, Callable[[Any], Any]]
