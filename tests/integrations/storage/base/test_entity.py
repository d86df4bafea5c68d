"""
목적: 저장소 엔티티 계약을 검증한다.
설명: 파티션 규칙, camelCase 문서 변환, 시스템 필드 무시, 필드 별칭 조회를 테스트한다.
디자인 패턴: 레이어 슈퍼타입 테스트
참조: src/chat_store/integrations/storage/base/entity.py, src/chat_store/core/chat/models/entities.py
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from chat_store.core.chat.models import (
    ChatMessage,
    ChatParticipant,
    ChatSession,
    UserPreference,
)
from chat_store.integrations.storage import StorageValidationError


def test_partition_follows_entity_rules() -> None:
    """엔티티별 파티션 키 규칙을 확인한다."""

    session = ChatSession(title="주간 회의")
    message = ChatMessage(chat_id=session.id, content="안녕")
    participant = ChatParticipant(user_id="u1", chat_id=session.id)
    preference = UserPreference(user_id="u1")

    assert session.partition == session.id
    assert message.partition == session.id
    assert participant.partition == "u1"
    assert preference.id == "u1"
    assert preference.partition == "u1"


def test_generated_ids_are_unique() -> None:
    assert ChatSession().id != ChatSession().id


def test_document_round_trip_uses_camel_case_and_ignores_system_fields() -> None:
    """문서 변환이 camelCase를 쓰고 `_etag` 같은 필드를 무시하는지 확인한다."""

    message = ChatMessage(
        id="m1",
        chat_id="c1",
        user_name="홍길동",
        timestamp=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
    )

    document = message.to_document()
    document.update({"_etag": "\"0000\"", "_ts": 1714555800, "_rid": "abc"})
    restored = ChatMessage.from_document(document)

    assert document["chatId"] == "c1"
    assert document["userName"] == "홍길동"
    assert document["messageType"] == "message"
    assert restored == message


def test_snake_case_names_are_accepted_on_input() -> None:
    message = ChatMessage.from_document({"id": "m1", "chat_id": "c1"})

    assert message.chat_id == "c1"


def test_field_alias_and_partition_key_path() -> None:
    """필드 별칭과 파티션 키 경로를 확인한다."""

    assert ChatMessage.field_alias("chat_id") == "chatId"
    assert ChatMessage.field_alias("chatId") == "chatId"
    assert ChatMessage.field_alias("id") == "id"
    assert ChatMessage.partition_key_path() == "/chatId"
    assert ChatParticipant.partition_key_path() == "/userId"
    assert ChatSession.partition_key_path() == "/id"


def test_unknown_field_alias_is_rejected() -> None:
    with pytest.raises(StorageValidationError):
        ChatMessage.field_alias("missing_field")


def test_datetimes_are_normalized_to_utc() -> None:
    """timezone 없는 시각은 UTC로, 다른 오프셋은 UTC로 변환되는지 확인한다."""

    seoul = timezone(timedelta(hours=9))
    message = ChatMessage(chat_id="c1", timestamp=datetime(2024, 1, 1, 9, 0))
    participant = ChatParticipant(
        user_id="u1",
        chat_id="c1",
        last_modified=datetime(2024, 1, 1, 9, 0, tzinfo=seoul),
    )
    session = ChatSession(created_on=datetime(2024, 1, 1))

    assert message.timestamp == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    assert participant.last_modified == datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
    assert participant.last_modified.utcoffset() == timedelta(0)
    assert session.created_on.tzinfo is not None


def test_user_preference_id_must_match_user_id() -> None:
    assert UserPreference(id="u1", user_id="u1").id == "u1"
    with pytest.raises(ValidationError):
        UserPreference(id="other", user_id="u1")
