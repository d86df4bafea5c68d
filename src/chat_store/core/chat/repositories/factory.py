"""
목적: 설정 기반으로 채팅 저장소 묶음을 생성한다.
설명: 백엔드 종류에 맞는 컨텍스트 네 개를 만들고 저장소로 감싸 반환한다.
      cosmos 백엔드이면 연결을 생성해 묶음이 소유하며 close()에서 닫는다.
디자인 패턴: 팩토리 패턴
참조: src/chat_store/integrations/storage/factory.py, src/chat_store/shared/config/storage_settings.py
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chat_store.core.chat.models import (
    ChatMessage,
    ChatParticipant,
    ChatSession,
    UserPreference,
)
from chat_store.core.chat.repositories.chat_message_repository import ChatMessageRepository
from chat_store.core.chat.repositories.chat_participant_repository import (
    ChatParticipantRepository,
)
from chat_store.core.chat.repositories.chat_session_repository import ChatSessionRepository
from chat_store.core.chat.repositories.user_preference_repository import (
    UserPreferenceRepository,
)
from chat_store.integrations.storage import (
    CosmosConnection,
    build_storage_context,
    create_cosmos_connection,
)
from chat_store.shared.config import StorageSettings, StorageType
from chat_store.shared.logging import Logger, create_default_logger


@dataclass
class ChatRepositories:
    """채팅 저장소 묶음."""

    sessions: ChatSessionRepository
    messages: ChatMessageRepository
    participants: ChatParticipantRepository
    preferences: UserPreferenceRepository
    connection: Optional[CosmosConnection] = None

    async def close(self) -> None:
        """컨텍스트와 소유한 연결을 정리한다."""

        for repository in (self.sessions, self.messages, self.participants, self.preferences):
            await repository.context.close()
        if self.connection is not None:
            await self.connection.close()

    async def __aenter__(self) -> "ChatRepositories":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


async def build_chat_repositories(
    settings: Optional[StorageSettings] = None,
    logger: Optional[Logger] = None,
    ensure_containers: bool = False,
) -> ChatRepositories:
    """설정에 맞는 채팅 저장소 묶음을 생성한다.

    Args:
        settings: 저장소 설정. 생략하면 StorageSettings.load()를 사용한다.
        logger: 주입 가능한 로거.
        ensure_containers: cosmos 백엔드에서 컨테이너가 없으면 생성할지 여부.
    """

    settings = settings or StorageSettings.load(logger=logger)
    logger = logger or create_default_logger("ChatRepositories")
    containers = settings.containers

    connection: Optional[CosmosConnection] = None
    if settings.type == StorageType.COSMOS:
        connection = create_cosmos_connection(settings, logger=logger)
        await connection.connect()

    try:
        if connection is not None and ensure_containers:
            for entity_type, name in (
                (ChatSession, containers.chat_sessions),
                (ChatMessage, containers.chat_messages),
                (ChatParticipant, containers.chat_participants),
                (UserPreference, containers.user_preferences),
            ):
                await connection.ensure_container(name, entity_type.partition_key_path())

        def _context(entity_type, name):
            return build_storage_context(
                entity_type,
                name,
                settings,
                connection=connection,
                logger=logger,
            )

        repositories = ChatRepositories(
            sessions=ChatSessionRepository(_context(ChatSession, containers.chat_sessions), logger),
            messages=ChatMessageRepository(_context(ChatMessage, containers.chat_messages), logger),
            participants=ChatParticipantRepository(
                _context(ChatParticipant, containers.chat_participants), logger
            ),
            preferences=UserPreferenceRepository(
                _context(UserPreference, containers.user_preferences), logger
            ),
            connection=connection,
        )
    except Exception:
        if connection is not None:
            await connection.close()
        raise
    logger.info(
        f"채팅 저장소 초기화 완료: backend={settings.type.value}",
        metadata={"backend": settings.type.value},
    )
    return repositories
