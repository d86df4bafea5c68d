"""
목적: 설정 기반 저장소 컨텍스트 생성을 제공한다.
설명: StorageSettings.type에 따라 volatile/filesystem/cosmos 컨텍스트를 만든다.
디자인 패턴: 팩토리 패턴
참조: src/chat_store/shared/config/storage_settings.py, src/chat_store/core/chat/repositories/__init__.py
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Type

from chat_store.integrations.storage.base.context import StorageContext
from chat_store.integrations.storage.base.entity import EntityT
from chat_store.integrations.storage.engines.cosmos import CosmosConnection, CosmosStorageContext
from chat_store.integrations.storage.engines.filesystem import FileSystemStorageContext
from chat_store.integrations.storage.engines.volatile import VolatileStorageContext
from chat_store.shared.config import StorageSettings, StorageType
from chat_store.shared.logging import Logger


def create_cosmos_connection(
    settings: StorageSettings,
    logger: Optional[Logger] = None,
) -> CosmosConnection:
    """설정으로 Cosmos 연결 관리자를 만든다. 연결은 호출자가 connect/close 한다."""

    secret = settings.cosmos.connection_string
    if secret is None:
        raise ValueError("cosmos.connection_string 설정이 필요합니다.")
    return CosmosConnection(
        connection_string=secret.get_secret_value(),
        database=settings.cosmos.database,
        logger=logger,
    )


def build_storage_context(
    entity_type: Type[EntityT],
    container_name: str,
    settings: StorageSettings,
    connection: Optional[CosmosConnection] = None,
    logger: Optional[Logger] = None,
) -> StorageContext[EntityT]:
    """설정된 백엔드의 저장소 컨텍스트를 생성한다."""

    if settings.type == StorageType.VOLATILE:
        return VolatileStorageContext(entity_type, name=container_name, logger=logger)
    if settings.type == StorageType.FILESYSTEM:
        file_path = Path(settings.filesystem.directory) / f"{container_name}.json"
        return FileSystemStorageContext(
            entity_type,
            file_path,
            name=container_name,
            logger=logger,
        )
    if settings.type == StorageType.COSMOS:
        if connection is None:
            raise ValueError("cosmos 백엔드에는 CosmosConnection이 필요합니다.")
        return CosmosStorageContext(
            entity_type,
            connection=connection,
            container_name=container_name,
            logger=logger,
        )
    raise ValueError(f"지원하지 않는 저장소 타입입니다: {settings.type}")
