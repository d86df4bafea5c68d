"""
목적: 대화 세션 저장소와 공통 Repository 동작을 검증한다.
설명: 전체 목록, None 반환 조회, 기본 파티션 대체, try_find_by_id, 멱등 삭제를 확인한다.
디자인 패턴: 저장소 패턴 테스트
참조: src/chat_store/core/chat/repositories/chat_session_repository.py,
      src/chat_store/core/chat/repositories/base.py
"""

from __future__ import annotations

import pytest

from chat_store.core.chat.models import ChatSession
from chat_store.core.chat.repositories import ChatSessionRepository
from chat_store.integrations.storage import EntityNotFoundError, StorageValidationError


@pytest.fixture
def repository(context_factory, test_logger) -> ChatSessionRepository:
    return ChatSessionRepository(context_factory(ChatSession, name="sessions"), logger=test_logger)


@pytest.mark.asyncio
async def test_get_all_chats_and_get_by_id(repository: ChatSessionRepository) -> None:
    """전체 세션 목록과 단건 조회를 확인한다."""

    first = ChatSession(title="첫 번째", enabled_plugins=["search"])
    second = ChatSession(title="두 번째")
    await repository.create(first)
    await repository.create(second)

    sessions = await repository.get_all_chats()
    loaded = await repository.get_by_id(first.id)

    assert {session.id for session in sessions} == {first.id, second.id}
    assert loaded == first
    assert await repository.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_find_by_id_defaults_partition_to_id(repository: ChatSessionRepository) -> None:
    session = ChatSession(title="자기 파티션")
    await repository.create(session)

    assert (await repository.find_by_id(session.id)).title == "자기 파티션"
    with pytest.raises(EntityNotFoundError):
        await repository.find_by_id(session.id, partition="other")


@pytest.mark.asyncio
async def test_try_find_by_id_reports_result(repository: ChatSessionRepository) -> None:
    """찾으면 콜백을 호출하고, 없거나 잘못된 id면 False를 반환하는지 확인한다."""

    session = ChatSession(title="콜백")
    await repository.create(session)
    found: list[ChatSession] = []

    assert await repository.try_find_by_id(session.id, on_found=found.append)
    assert not await repository.try_find_by_id("missing", on_found=found.append)
    assert not await repository.try_find_by_id("")
    assert [item.id for item in found] == [session.id]


@pytest.mark.asyncio
async def test_delete_is_idempotent(repository: ChatSessionRepository, test_logger) -> None:
    """없는 세션 삭제가 오류 없이 처리되고 로그를 남기는지 확인한다."""

    session = ChatSession(title="삭제 대상")
    await repository.create(session)

    assert await repository.delete(session) is True
    assert await repository.delete(session) is False
    assert any("이미 삭제된" in record.message for record in test_logger.repository.list())


@pytest.mark.asyncio
async def test_create_rejects_blank_id(repository: ChatSessionRepository) -> None:
    with pytest.raises(StorageValidationError):
        await repository.create(ChatSession(id=" "))
