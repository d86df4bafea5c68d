"""
목적: 필터 DSL 빌더 동작을 검증한다.
설명: 체이닝으로 만든 조건/결합 논리와 잘못된 사용 방어를 확인한다.
디자인 패턴: 빌더 패턴 테스트
참조: src/chat_store/integrations/storage/base/filter_builder.py
"""

from __future__ import annotations

import pytest

from chat_store.integrations.storage.base import (
    FilterBuilder,
    FilterOperator,
    StorageValidationError,
    field_equals,
)


def test_builder_collects_conditions_in_order() -> None:
    """조건이 선언 순서대로 쌓이는지 확인한다."""

    expression = (
        FilterBuilder()
        .where("chat_id").eq("c1")
        .where("timestamp").gte(10)
        .where("author_role").in_(["user", "bot"])
        .build()
    )

    assert expression.logic == "AND"
    assert [condition.operator for condition in expression.conditions] == [
        FilterOperator.EQ,
        FilterOperator.GTE,
        FilterOperator.IN,
    ]
    assert expression.conditions[2].value == ["user", "bot"]


def test_builder_or_logic() -> None:
    expression = FilterBuilder().or_().where("a").eq(1).where("b").ne(2).build()

    assert expression.logic == "OR"


def test_field_equals_shortcut() -> None:
    expression = field_equals(user_id="u1", chat_id="c1")

    assert [(c.field, c.value) for c in expression.conditions] == [
        ("user_id", "u1"),
        ("chat_id", "c1"),
    ]


def test_operator_without_field_is_rejected() -> None:
    with pytest.raises(StorageValidationError):
        FilterBuilder().eq("value")


def test_dangling_field_is_rejected() -> None:
    """연산자 없이 끝난 where가 있으면 build가 실패하는지 확인한다."""

    with pytest.raises(StorageValidationError):
        FilterBuilder().where("chat_id").build()
