"""
목적: Chat 도메인 모델 공개 API를 제공한다.
설명: 엔티티와 열거형을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/core/chat/models/entities.py
"""

from chat_store.core.chat.models.entities import (
    AuthorRole,
    ChatMessage,
    ChatMessageType,
    ChatParticipant,
    ChatSession,
    UserPreference,
    utc_now,
)

__all__ = [
    "AuthorRole",
    "ChatMessageType",
    "ChatSession",
    "ChatMessage",
    "ChatParticipant",
    "UserPreference",
    "utc_now",
]
