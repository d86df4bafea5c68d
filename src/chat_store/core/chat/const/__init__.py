"""
목적: Chat 코어 상수 공개 API를 제공한다.
설명: 페이지 크기/사용자 설정 기본값 상수를 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/core/chat/const/settings.py
"""

from chat_store.core.chat.const.settings import (
    DEFAULT_DARK_MODE,
    DEFAULT_EXPORT_CHAT,
    DEFAULT_MESSAGE_PAGE_SIZE,
    DEFAULT_PERSONA,
    DEFAULT_RECENT_PARTICIPANT_COUNT,
    DEFAULT_SESSION_TITLE,
    DEFAULT_SIMPLIFIED_CHAT,
)

__all__ = [
    "DEFAULT_MESSAGE_PAGE_SIZE",
    "DEFAULT_RECENT_PARTICIPANT_COUNT",
    "DEFAULT_SESSION_TITLE",
    "DEFAULT_DARK_MODE",
    "DEFAULT_PERSONA",
    "DEFAULT_SIMPLIFIED_CHAT",
    "DEFAULT_EXPORT_CHAT",
]
