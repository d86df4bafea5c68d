"""
목적: 사용자 설정 저장소를 제공한다.
설명: 사용자 id를 id와 파티션으로 모두 사용하는 단건 조회/저장과 기본 설정 대체를 제공한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/core/chat/repositories/base.py, src/chat_store/core/chat/const/settings.py
"""

from __future__ import annotations

from chat_store.core.chat.models import UserPreference
from chat_store.core.chat.repositories.base import Repository
from chat_store.integrations.storage.base import EntityNotFoundError, require_id
from chat_store.shared.logging import LogContext


class UserPreferenceRepository(Repository[UserPreference]):
    """사용자 설정 저장소."""

    async def get_user_preference(self, user_id: str) -> UserPreference:
        """사용자 설정을 조회한다. 없으면 EntityNotFoundError가 발생한다."""

        require_id(user_id, label="user_id")
        return await self.context.read(user_id, user_id)

    async def save_user_preference(self, preference: UserPreference) -> None:
        """사용자 설정을 저장하거나 교체한다."""

        await self.upsert(preference)

    async def get_user_preference_or_default(self, user_id: str) -> UserPreference:
        """저장된 설정이 없으면 기본 설정을 반환한다. 기본 설정은 저장하지 않는다."""

        try:
            return await self.get_user_preference(user_id)
        except EntityNotFoundError:
            self._logger.with_context(LogContext(user_id=user_id)).debug(
                "저장된 사용자 설정이 없어 기본값을 사용합니다.",
                metadata={"container": self.context.name},
            )
            return UserPreference(user_id=user_id)
