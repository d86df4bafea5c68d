"""
목적: 대화 세션 저장소를 제공한다.
설명: 관리용 전체 세션 목록과 not-found를 None으로 바꾸는 단건 조회를 제공한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/core/chat/repositories/base.py
"""

from __future__ import annotations

from typing import List, Optional

from chat_store.core.chat.models import ChatSession
from chat_store.core.chat.repositories.base import Repository
from chat_store.integrations.storage.base import EntityNotFoundError


class ChatSessionRepository(Repository[ChatSession]):
    """대화 세션 저장소."""

    async def get_all_chats(self) -> List[ChatSession]:
        """모든 세션을 반환한다. 전체 파티션 조회이므로 관리 화면 용도로만 사용한다."""

        return await self.query()

    async def get_by_id(
        self,
        session_id: str,
        partition: Optional[str] = None,
    ) -> Optional[ChatSession]:
        """세션을 조회하고 없으면 None을 반환한다."""

        try:
            return await self.find_by_id(session_id, partition)
        except EntityNotFoundError:
            return None
