"""
목적: 구조화 필터를 Cosmos DB SQL 쿼리로 변환한다.
설명: FilterExpression/정렬 필드를 `SELECT * FROM c WHERE ... ORDER BY ...`와 `@pN` 파라미터로 만든다.
디자인 패턴: 빌더 패턴
참조: src/chat_store/integrations/storage/base/models.py, src/chat_store/integrations/storage/engines/cosmos/context.py
"""

from __future__ import annotations

import re
import typing
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic_core import to_jsonable_python

from chat_store.integrations.storage.base.entity import StorageEntity
from chat_store.integrations.storage.base.errors import StorageValidationError
from chat_store.integrations.storage.base.models import (
    FilterCondition,
    FilterExpression,
    FilterOperator,
    SortOrder,
)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_COMPARISON_OPERATORS = {
    FilterOperator.EQ: "=",
    FilterOperator.NE: "!=",
    FilterOperator.GT: ">",
    FilterOperator.GTE: ">=",
    FilterOperator.LT: "<",
    FilterOperator.LTE: "<=",
}


class CosmosQueryBuilder:
    """Cosmos DB SQL 조건 빌더."""

    def __init__(self, entity_type: Type[StorageEntity], alias: str = "c") -> None:
        self._entity_type = entity_type
        self._alias = alias

    def build_select(
        self,
        where: Optional[FilterExpression] = None,
        order_by: Optional[str] = None,
        order: SortOrder = SortOrder.ASC,
    ) -> Tuple[str, List[Dict[str, Any]]]:
        """SELECT 쿼리와 파라미터 목록을 생성한다."""

        clause, parameters = self.build_where(where)
        query = f"SELECT * FROM {self._alias}"
        if clause:
            query = f"{query} WHERE {clause}"
        if order_by:
            query = f"{query} ORDER BY {self._ref(order_by)} {order.value}"
        return query, parameters

    def build_where(
        self, where: Optional[FilterExpression]
    ) -> Tuple[str, List[Dict[str, Any]]]:
        """WHERE 절(키워드 제외)과 파라미터를 생성한다."""

        if where is None or where.is_empty():
            return "", []
        logic = where.logic.upper()
        if logic not in {"AND", "OR"}:
            raise StorageValidationError(f"지원하지 않는 조건 결합 논리입니다: {where.logic}")
        parameters: List[Dict[str, Any]] = []
        clauses = [
            self._build_condition(condition, parameters)
            for condition in where.conditions
        ]
        if len(clauses) == 1:
            return clauses[0], parameters
        return f" {logic} ".join(f"({clause})" for clause in clauses), parameters

    def _build_condition(
        self, condition: FilterCondition, parameters: List[Dict[str, Any]]
    ) -> str:
        ref = self._ref(condition.field)
        operator = condition.operator
        if operator in _COMPARISON_OPERATORS:
            name = self._add_param(parameters, condition.value)
            return f"{ref} {_COMPARISON_OPERATORS[operator]} {name}"
        if operator in (FilterOperator.IN, FilterOperator.NOT_IN):
            if not isinstance(condition.value, (list, tuple)):
                raise StorageValidationError("IN/NOT_IN 조건 값은 리스트여야 합니다.")
            name = self._add_param(parameters, list(condition.value))
            expression = f"ARRAY_CONTAINS({name}, {ref})"
            return expression if operator == FilterOperator.IN else f"NOT {expression}"
        if operator == FilterOperator.CONTAINS:
            name = self._add_param(parameters, condition.value)
            if self._is_list_field(condition.field):
                return f"ARRAY_CONTAINS({ref}, {name})"
            return f"CONTAINS({ref}, {name})"
        raise NotImplementedError("지원하지 않는 연산자입니다.")

    def _ref(self, field: str) -> str:
        stored = self._entity_type.field_alias(field)
        if _IDENTIFIER.match(stored):
            return f"{self._alias}.{stored}"
        return f'{self._alias}["{stored}"]'

    def _add_param(self, parameters: List[Dict[str, Any]], value: Any) -> str:
        name = f"@p{len(parameters)}"
        parameters.append({"name": name, "value": to_jsonable_python(value)})
        return name

    def _is_list_field(self, field: str) -> bool:
        info = self._entity_type.model_fields.get(field)
        if info is None:
            return False
        origin = typing.get_origin(info.annotation)
        return origin in (list, tuple, set, frozenset)
