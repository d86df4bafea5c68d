"""
목적: Chat 코어의 설정 상수를 정의한다.
설명: 기본 페이지 크기와 사용자 설정 기본값을 제공한다.
디자인 패턴: 상수 객체 패턴
참조: src/chat_store/core/chat/repositories/chat_message_repository.py
"""

from __future__ import annotations

DEFAULT_MESSAGE_PAGE_SIZE = 10
DEFAULT_RECENT_PARTICIPANT_COUNT = 5
DEFAULT_SESSION_TITLE = "새 대화"

DEFAULT_DARK_MODE = False
DEFAULT_PERSONA = False
DEFAULT_SIMPLIFIED_CHAT = True
DEFAULT_EXPORT_CHAT = False
