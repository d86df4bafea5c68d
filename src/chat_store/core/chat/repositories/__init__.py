"""
목적: 채팅 저장소 공개 API를 제공한다.
설명: 공통 Repository, 엔티티별 저장소, 설정 기반 묶음 팩토리를 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/core/chat/repositories/factory.py
"""

from chat_store.core.chat.repositories.base import Repository
from chat_store.core.chat.repositories.chat_message_repository import ChatMessageRepository
from chat_store.core.chat.repositories.chat_participant_repository import (
    ChatParticipantRepository,
)
from chat_store.core.chat.repositories.chat_session_repository import ChatSessionRepository
from chat_store.core.chat.repositories.factory import ChatRepositories, build_chat_repositories
from chat_store.core.chat.repositories.user_preference_repository import (
    UserPreferenceRepository,
)

__all__ = [
    "Repository",
    "ChatSessionRepository",
    "ChatMessageRepository",
    "ChatParticipantRepository",
    "UserPreferenceRepository",
    "ChatRepositories",
    "build_chat_repositories",
]
