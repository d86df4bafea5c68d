"""
목적: 구조화 필터를 체이닝 방식으로 구성하는 빌더를 제공한다.
설명: where(field).eq(value) 형태로 조건을 쌓아 FilterExpression을 생성한다.
디자인 패턴: 빌더 패턴
참조: src/chat_store/integrations/storage/base/models.py
"""

from __future__ import annotations

from typing import List, Optional

from chat_store.integrations.storage.base.errors import StorageValidationError
from chat_store.integrations.storage.base.models import (
    FilterCondition,
    FilterExpression,
    FilterOperator,
)


class FilterBuilder:
    """필터 DSL 빌더 클래스."""

    def __init__(self) -> None:
        self._conditions: List[FilterCondition] = []
        self._logic: str = "AND"
        self._pending_field: Optional[str] = None

    def where(self, field: str) -> "FilterBuilder":
        """필터 대상 필드를 지정한다."""

        if not field or not field.strip():
            raise StorageValidationError("필터 필드 이름은 비어 있을 수 없습니다.")
        self._pending_field = field
        return self

    def and_(self) -> "FilterBuilder":
        """조건 결합을 AND로 설정한다."""

        self._logic = "AND"
        return self

    def or_(self) -> "FilterBuilder":
        """조건 결합을 OR로 설정한다."""

        self._logic = "OR"
        return self

    def eq(self, value: object) -> "FilterBuilder":
        """동등 조건을 추가한다."""

        return self._add_condition(FilterOperator.EQ, value)

    def ne(self, value: object) -> "FilterBuilder":
        """불일치 조건을 추가한다."""

        return self._add_condition(FilterOperator.NE, value)

    def gt(self, value: object) -> "FilterBuilder":
        return self._add_condition(FilterOperator.GT, value)

    def gte(self, value: object) -> "FilterBuilder":
        return self._add_condition(FilterOperator.GTE, value)

    def lt(self, value: object) -> "FilterBuilder":
        return self._add_condition(FilterOperator.LT, value)

    def lte(self, value: object) -> "FilterBuilder":
        return self._add_condition(FilterOperator.LTE, value)

    def in_(self, values: List[object]) -> "FilterBuilder":
        """포함 조건을 추가한다."""

        return self._add_condition(FilterOperator.IN, list(values))

    def not_in(self, values: List[object]) -> "FilterBuilder":
        """미포함 조건을 추가한다."""

        return self._add_condition(FilterOperator.NOT_IN, list(values))

    def contains(self, value: object) -> "FilterBuilder":
        """포함(문자열/배열) 조건을 추가한다."""

        return self._add_condition(FilterOperator.CONTAINS, value)

    def build(self) -> FilterExpression:
        """FilterExpression을 생성한다."""

        if self._pending_field is not None:
            raise StorageValidationError(
                f"연산자가 지정되지 않은 필드가 있습니다: {self._pending_field}"
            )
        return FilterExpression(conditions=list(self._conditions), logic=self._logic)

    def _add_condition(self, operator: FilterOperator, value: object) -> "FilterBuilder":
        if self._pending_field is None:
            raise StorageValidationError("where()로 필드를 먼저 지정해야 합니다.")
        self._conditions.append(
            FilterCondition(field=self._pending_field, operator=operator, value=value)
        )
        self._pending_field = None
        return self


def field_equals(**pairs: object) -> FilterExpression:
    """필드 동등 조건을 AND로 묶은 표현식을 만든다."""

    builder = FilterBuilder()
    for field, value in pairs.items():
        builder.where(field).eq(value)
    return builder.build()
