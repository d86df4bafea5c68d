"""
목적: 대화 메시지 저장소 동작을 검증한다.
설명: 최신순 페이지 조회, 전체 이력 조회, limit 처리, 개수 집계를 백엔드별로 확인한다.
디자인 패턴: 저장소 패턴 테스트
참조: src/chat_store/core/chat/repositories/chat_message_repository.py
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from chat_store.core.chat.models import ChatMessage
from chat_store.core.chat.repositories import ChatMessageRepository
from chat_store.integrations.storage import StorageValidationError

_BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


async def _seed(repository: ChatMessageRepository, chat_id: str, count: int) -> None:
    for second in range(1, count + 1):
        await repository.create(
            ChatMessage(
                id=f"{chat_id}-{second}",
                chat_id=chat_id,
                content=f"메시지 {second}",
                timestamp=_BASE_TIME + timedelta(seconds=second),
            )
        )


def _seconds(messages: list[ChatMessage]) -> list[int]:
    return [int((message.timestamp - _BASE_TIME).total_seconds()) for message in messages]


@pytest.fixture
def repository(context_factory) -> ChatMessageRepository:
    return ChatMessageRepository(context_factory(ChatMessage, name="messages"))


@pytest.mark.asyncio
async def test_find_by_chat_id_returns_most_recent_pages(repository: ChatMessageRepository) -> None:
    """최근 10건과 다음 토큰, 그다음 10건을 순서대로 반환하는지 확인한다."""

    await _seed(repository, "c1", 25)
    await _seed(repository, "c2", 3)

    first = await repository.find_by_chat_id("c1", count=10)
    second = await repository.find_by_chat_id("c1", count=10, continuation_token=first.continuation_token)

    assert _seconds(first.items) == list(range(25, 15, -1))
    assert first.continuation_token is not None
    assert _seconds(second.items) == list(range(15, 5, -1))


@pytest.mark.asyncio
async def test_history_without_limit_returns_everything(repository: ChatMessageRepository) -> None:
    await _seed(repository, "c1", 23)

    history = await repository.find_by_chat_id_history("c1")

    assert _seconds(history) == list(range(23, 0, -1))


@pytest.mark.asyncio
async def test_history_with_limit_stops_early(repository: ChatMessageRepository) -> None:
    """limit에 도달하면 더 조회하지 않고 최신순으로 잘라 반환하는지 확인한다."""

    await _seed(repository, "c1", 25)

    history = await repository.find_by_chat_id_history("c1", limit=13)

    assert _seconds(history) == list(range(25, 12, -1))


@pytest.mark.asyncio
async def test_history_limit_larger_than_total(repository: ChatMessageRepository) -> None:
    await _seed(repository, "c1", 4)

    history = await repository.find_by_chat_id_history("c1", limit=50)

    assert len(history) == 4


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, -1])
async def test_history_rejects_non_positive_limit(repository: ChatMessageRepository, limit: int) -> None:
    with pytest.raises(StorageValidationError):
        await repository.find_by_chat_id_history("c1", limit=limit)


@pytest.mark.asyncio
async def test_count_by_chat_id(repository: ChatMessageRepository) -> None:
    await _seed(repository, "c1", 7)
    await _seed(repository, "c2", 2)

    assert await repository.count_by_chat_id("c1") == 7
    assert await repository.count_by_chat_id("missing") == 0


@pytest.mark.asyncio
async def test_empty_chat_id_is_rejected(repository: ChatMessageRepository) -> None:
    with pytest.raises(StorageValidationError):
        await repository.find_by_chat_id(" ")


@pytest.mark.asyncio
async def test_history_log_carries_chat_context(context_factory, test_logger) -> None:
    """이력 조회 로그에 대화 id 컨텍스트가 붙는지 확인한다."""

    repository = ChatMessageRepository(context_factory(ChatMessage, name="messages"), test_logger)
    await _seed(repository, "c1", 3)

    await repository.find_by_chat_id_history("c1", limit=2)

    records = [
        record
        for record in test_logger.repository.list()
        if record.context is not None and record.context.chat_id == "c1"
    ]
    assert len(records) == 1
    assert records[0].metadata["count"] == 2


@pytest.mark.asyncio
async def test_find_by_chat_id_with_naive_and_default_timestamps(
    repository: ChatMessageRepository,
) -> None:
    """timezone 없는 시각과 기본 시각이 섞인 대화도 최신순으로 조회되는지 확인한다."""

    await repository.create(ChatMessage(id="a", chat_id="c1", timestamp=datetime(2024, 1, 1)))
    await repository.create(ChatMessage(id="b", chat_id="c1"))

    page = await repository.find_by_chat_id("c1")

    assert [message.id for message in page.items] == ["b", "a"]
    assert page.continuation_token is None
