"""
목적: 저장소 백엔드 설정 모델을 제공한다.
설명: volatile/filesystem/cosmos 중 사용할 백엔드와 컨테이너 이름을 Pydantic으로 검증한다.
디자인 패턴: 설정 객체
참조: src/chat_store/shared/config/loader.py, src/chat_store/integrations/storage/factory.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, SecretStr, model_validator

from chat_store.shared.config.loader import ConfigLoader
from chat_store.shared.config.runtime_env_loader import RuntimeEnvironmentLoader
from chat_store.shared.logging import Logger


class StorageType(str, Enum):
    """저장소 백엔드 종류."""

    VOLATILE = "volatile"
    FILESYSTEM = "filesystem"
    COSMOS = "cosmos"


class FileSystemSettings(BaseModel):
    """파일 백엔드 설정. 컨테이너마다 `<directory>/<container>.json` 파일을 사용한다."""

    directory: str = Field(default="./data")


class CosmosSettings(BaseModel):
    """Cosmos DB 백엔드 설정."""

    connection_string: Optional[SecretStr] = None
    database: str = Field(default="chat-store")


class ContainerSettings(BaseModel):
    """엔티티 타입별 컨테이너 이름."""

    chat_sessions: str = Field(default="chatsessions")
    chat_messages: str = Field(default="chatmessages")
    chat_participants: str = Field(default="chatparticipants")
    user_preferences: str = Field(default="userpreferences")


class StorageSettings(BaseModel):
    """저장소 설정 루트 모델."""

    type: StorageType = Field(default=StorageType.VOLATILE)
    filesystem: FileSystemSettings = Field(default_factory=FileSystemSettings)
    cosmos: CosmosSettings = Field(default_factory=CosmosSettings)
    containers: ContainerSettings = Field(default_factory=ContainerSettings)

    @model_validator(mode="after")
    def _check_backend(self) -> "StorageSettings":
        if self.type == StorageType.COSMOS:
            secret = self.cosmos.connection_string
            if secret is None or not secret.get_secret_value().strip():
                raise ValueError("cosmos 백엔드에는 cosmos.connection_string 설정이 필요합니다.")
            if not self.cosmos.database.strip():
                raise ValueError("cosmos.database는 비어 있을 수 없습니다.")
        return self

    @classmethod
    def load(
        cls,
        overrides: Optional[Mapping[str, Any]] = None,
        json_path: Optional[str] = None,
        env_loader: Optional[RuntimeEnvironmentLoader] = None,
        logger: Optional[Logger] = None,
    ) -> "StorageSettings":
        """`.env` -> JSON 파일 -> `CHAT_STORE__*` 환경 변수 -> overrides 순으로 병합해 생성한다."""

        (env_loader or RuntimeEnvironmentLoader(logger=logger)).load()
        loader = ConfigLoader(logger=logger)
        if json_path:
            loader.add_json_file(json_path)
        loader.add_env()
        return cls.model_validate(loader.build(overrides))
