"""
목적: 인메모리 필터 평가기를 제공한다.
설명: FilterExpression 조건을 엔티티 속성에 적용해 일치 여부를 반환한다.
디자인 패턴: 전략 패턴
참조: src/chat_store/integrations/storage/engines/volatile/context.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from chat_store.integrations.storage.base.entity import StorageEntity
from chat_store.integrations.storage.base.errors import StorageValidationError
from chat_store.integrations.storage.base.models import (
    FilterCondition,
    FilterExpression,
    FilterOperator,
    OrderKey,
    Predicate,
)


class FilterEvaluator:
    """인메모리 필터 평가기."""

    def match(
        self,
        entity: StorageEntity,
        expression: Optional[FilterExpression],
    ) -> bool:
        """엔티티가 필터 조건을 만족하는지 판단한다."""

        if expression is None or expression.is_empty():
            return True
        results = (
            self._evaluate_condition(entity, condition)
            for condition in expression.conditions
        )
        if expression.logic.upper() == "OR":
            return any(results)
        return all(results)

    def _evaluate_condition(self, entity: StorageEntity, condition: FilterCondition) -> bool:
        if condition.field not in type(entity).model_fields:
            raise StorageValidationError(
                f"{type(entity).__name__}에 존재하지 않는 필드입니다: {condition.field}"
            )
        value = _plain(getattr(entity, condition.field))
        target = _plain(condition.value)
        operator = condition.operator
        if operator == FilterOperator.EQ:
            return value == target
        if operator == FilterOperator.NE:
            return value != target
        if operator == FilterOperator.GT:
            return self._compare(value, target, lambda a, b: a > b)
        if operator == FilterOperator.GTE:
            return self._compare(value, target, lambda a, b: a >= b)
        if operator == FilterOperator.LT:
            return self._compare(value, target, lambda a, b: a < b)
        if operator == FilterOperator.LTE:
            return self._compare(value, target, lambda a, b: a <= b)
        if operator in (FilterOperator.IN, FilterOperator.NOT_IN):
            if not isinstance(target, list):
                raise StorageValidationError(
                    f"{operator.value} 연산자에는 목록 값이 필요합니다: {condition.field}"
                )
            found = value in [_plain(item) for item in target]
            return found if operator == FilterOperator.IN else not found
        if operator == FilterOperator.CONTAINS:
            return self._contains(value, target)
        raise NotImplementedError("지원하지 않는 연산자입니다.")

    def _compare(self, left, right, func) -> bool:
        if left is None:
            return False
        try:
            return func(left, right)
        except TypeError:
            return False

    def _contains(self, value, target) -> bool:
        if value is None:
            return False
        if isinstance(value, list):
            return target in [_plain(item) for item in value]
        if isinstance(value, str):
            return str(target) in value
        return False


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def select_entities(
    entities: Iterable[StorageEntity],
    evaluator: FilterEvaluator,
    where: Optional[FilterExpression] = None,
    predicate: Optional[Predicate] = None,
    partition: Optional[str] = None,
    order_by: Optional[OrderKey] = None,
    descending: bool = False,
) -> List[StorageEntity]:
    """파티션/구조화 필터/술어를 적용하고 정렬한 목록을 반환한다.

    정렬 키가 같으면 입력 순서를 유지한다.
    """

    selected = [
        entity
        for entity in entities
        if (partition is None or entity.partition == partition)
        and evaluator.match(entity, where)
        and (predicate is None or predicate(entity))
    ]
    if order_by is None:
        return selected
    key = resolve_sort_key(order_by)
    return sorted(selected, key=key, reverse=descending)


def resolve_sort_key(order_by: OrderKey) -> Callable[[Any], Any]:
    """정렬 키를 키 추출 함수로 변환한다."""

    if callable(order_by):
        return order_by
    field = order_by

    def _key(entity: StorageEntity) -> Any:
        if field not in type(entity).model_fields:
            raise StorageValidationError(
                f"{type(entity).__name__}에 존재하지 않는 정렬 필드입니다: {field}"
            )
        return _plain(getattr(entity, field))

    return _key
