"""
목적: 대화 참여자 저장소를 제공한다.
설명: 사용자 파티션 조회, 최근 참여 대화 페이지 조회, 대화 기준 교차 파티션 조회를 제공한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/core/chat/repositories/base.py
"""

from __future__ import annotations

from typing import List, Optional

from chat_store.core.chat.const import DEFAULT_RECENT_PARTICIPANT_COUNT
from chat_store.core.chat.models import ChatParticipant
from chat_store.core.chat.repositories.base import Repository
from chat_store.integrations.storage.base import Page, field_equals, require_id


class ChatParticipantRepository(Repository[ChatParticipant]):
    """대화 참여자 저장소.

    참여자는 사용자 id로 파티션된다. 대화 id 기준 조회는 보조 인덱스 없이
    구조화 필터로 전체 파티션을 조회한다.
    """

    async def find_by_user_id(self, user_id: str) -> List[ChatParticipant]:
        """사용자가 참여한 모든 대화의 참여자 레코드를 반환한다."""

        require_id(user_id, label="user_id")
        return await self.query(where=field_equals(user_id=user_id), partition=user_id)

    async def find_recent_by_user_id(
        self,
        user_id: str,
        count: int = DEFAULT_RECENT_PARTICIPANT_COUNT,
        continuation_token: Optional[str] = None,
    ) -> Page[ChatParticipant]:
        """최근 수정순으로 사용자의 참여자 레코드를 한 페이지 조회한다."""

        require_id(user_id, label="user_id")
        return await self.query_paged(
            where=field_equals(user_id=user_id),
            partition=user_id,
            page_size=count,
            continuation_token=continuation_token,
            order_by="last_modified",
            descending=True,
        )

    async def find_by_chat_id(self, chat_id: str) -> List[ChatParticipant]:
        require_id(chat_id, label="chat_id")
        return await self.query(where=field_equals(chat_id=chat_id))

    async def is_user_in_chat(self, user_id: str, chat_id: str) -> bool:
        """사용자가 대화에 참여 중인지 확인한다."""

        require_id(user_id, label="user_id")
        require_id(chat_id, label="chat_id")
        matches = await self.query(
            where=field_equals(user_id=user_id, chat_id=chat_id),
            partition=user_id,
        )
        return bool(matches)
