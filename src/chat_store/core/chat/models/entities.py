"""
목적: Chat 도메인 엔티티 모델을 정의한다.
설명: 세션/메시지/참여자/사용자 설정 엔티티와 파티션 규칙을 Pydantic 기반으로 제공한다.
디자인 패턴: 엔티티 패턴
참조: src/chat_store/integrations/storage/base/entity.py, src/chat_store/core/chat/repositories/base.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, List, Optional

from pydantic import Field, field_validator, model_validator

from chat_store.core.chat.const import (
    DEFAULT_DARK_MODE,
    DEFAULT_EXPORT_CHAT,
    DEFAULT_PERSONA,
    DEFAULT_SESSION_TITLE,
    DEFAULT_SIMPLIFIED_CHAT,
)
from chat_store.integrations.storage.base.entity import StorageEntity


def utc_now() -> datetime:
    """UTC 기준 timezone-aware 현재 시각을 반환한다."""

    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """시각을 UTC로 맞춘다. timezone 정보가 없으면 UTC로 간주한다."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AuthorRole(str, Enum):
    """메시지 작성자 역할."""

    USER = "user"
    BOT = "bot"
    PARTICIPANT = "participant"


class ChatMessageType(str, Enum):
    """메시지 유형."""

    MESSAGE = "message"
    PLAN = "plan"
    DOCUMENT = "document"


class ChatSession(StorageEntity):
    """대화 세션 엔티티. 자기 id로 파티션된다."""

    title: str = Field(default=DEFAULT_SESSION_TITLE)
    system_description: str = Field(default="")
    memory_balance: float = Field(default=0.5, ge=0.0, le=1.0)
    enabled_plugins: List[str] = Field(default_factory=list)
    created_on: datetime = Field(default_factory=utc_now)

    @field_validator("created_on")
    @classmethod
    def _normalize_created_on(cls, value: datetime) -> datetime:
        return as_utc(value)


class ChatMessage(StorageEntity):
    """대화 메시지 엔티티. 대화 id로 파티션되며 timestamp가 정렬 키이다."""

    PARTITION_FIELD: ClassVar[str] = "chat_id"

    chat_id: str
    user_id: str = Field(default="")
    user_name: str = Field(default="")
    author_role: AuthorRole = Field(default=AuthorRole.USER)
    content: str = Field(default="")
    message_type: ChatMessageType = Field(default=ChatMessageType.MESSAGE)
    timestamp: datetime = Field(default_factory=utc_now)
    token_usage: Optional[dict[str, int]] = None

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)


class ChatParticipant(StorageEntity):
    """대화 참여자 엔티티. 사용자 id로 파티션되며 대화 id 기준 조회도 지원한다."""

    PARTITION_FIELD: ClassVar[str] = "user_id"

    user_id: str
    chat_id: str
    last_modified: datetime = Field(default_factory=utc_now)

    @field_validator("last_modified")
    @classmethod
    def _normalize_last_modified(cls, value: datetime) -> datetime:
        return as_utc(value)


class UserPreference(StorageEntity):
    """사용자 설정 엔티티. id, user_id, 파티션이 모두 같은 값이다."""

    PARTITION_FIELD: ClassVar[str] = "user_id"

    id: str = Field(default="")
    user_id: str
    dark_mode: bool = Field(default=DEFAULT_DARK_MODE)
    persona: bool = Field(default=DEFAULT_PERSONA)
    simplified_chat: bool = Field(default=DEFAULT_SIMPLIFIED_CHAT)
    export_chat: bool = Field(default=DEFAULT_EXPORT_CHAT)

    @model_validator(mode="after")
    def _default_id_to_user(self) -> "UserPreference":
        if not self.id:
            self.id = self.user_id
        elif self.id != self.user_id:
            raise ValueError(
                f"UserPreference의 id는 user_id와 같아야 합니다: id={self.id}, user_id={self.user_id}"
            )
        return self
