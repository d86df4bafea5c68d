"""
목적: 대화 메시지 저장소를 제공한다.
설명: 대화 파티션 범위에서 최신순 페이지 조회와 전체 이력 조회를 제공한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/core/chat/repositories/base.py, src/chat_store/core/chat/const/settings.py
"""

from __future__ import annotations

from typing import List, Optional

from chat_store.core.chat.const import DEFAULT_MESSAGE_PAGE_SIZE
from chat_store.core.chat.models import ChatMessage
from chat_store.core.chat.repositories.base import Repository
from chat_store.integrations.storage.base import (
    Page,
    StorageValidationError,
    field_equals,
    require_id,
)
from chat_store.shared.logging import LogContext


class ChatMessageRepository(Repository[ChatMessage]):
    """대화 메시지 저장소."""

    async def find_by_chat_id(
        self,
        chat_id: str,
        count: int = DEFAULT_MESSAGE_PAGE_SIZE,
        continuation_token: Optional[str] = None,
    ) -> Page[ChatMessage]:
        """대화의 메시지를 최신순으로 한 페이지 조회한다."""

        require_id(chat_id, label="chat_id")
        return await self.query_paged(
            where=field_equals(chat_id=chat_id),
            partition=chat_id,
            page_size=count,
            continuation_token=continuation_token,
            order_by="timestamp",
            descending=True,
        )

    async def find_by_chat_id_history(
        self,
        chat_id: str,
        limit: Optional[int] = None,
    ) -> List[ChatMessage]:
        """모든 페이지를 따라가며 최신순 메시지 목록을 모은다.

        Args:
            chat_id: 대화 id.
            limit: 최대 개수. None이면 모든 메시지를 반환한다.
        """

        if limit is not None and limit < 1:
            raise StorageValidationError(f"limit은 1 이상이어야 합니다: {limit}")
        messages: List[ChatMessage] = []
        token: Optional[str] = None
        while True:
            page_size = DEFAULT_MESSAGE_PAGE_SIZE
            if limit is not None:
                page_size = min(page_size, limit - len(messages))
            page = await self.find_by_chat_id(chat_id, page_size, token)
            messages.extend(page.items)
            token = page.continuation_token
            if limit is not None and len(messages) >= limit:
                break
            if token is None:
                break
        if limit is not None:
            messages = messages[:limit]
        self._logger.with_context(LogContext(chat_id=chat_id)).debug(
            f"메시지 이력 조회 완료: {len(messages)}건",
            metadata={"container": self.context.name, "count": len(messages), "limit": limit},
        )
        return messages

    async def count_by_chat_id(self, chat_id: str) -> int:
        """대화의 메시지 수를 반환한다."""

        require_id(chat_id, label="chat_id")
        return await self.count(partition=chat_id, where=field_equals(chat_id=chat_id))
