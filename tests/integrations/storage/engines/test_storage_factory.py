"""
목적: 설정 기반 저장소 컨텍스트 팩토리를 검증한다.
설명: 백엔드 종류별 컨텍스트 타입과 파일 경로 규칙을 확인한다.
디자인 패턴: 팩토리 패턴 테스트
참조: src/chat_store/integrations/storage/factory.py
"""

from __future__ import annotations

import pytest

from chat_store.core.chat.models import ChatMessage
from chat_store.integrations.storage import (
    CosmosConnection,
    CosmosStorageContext,
    FileSystemStorageContext,
    VolatileStorageContext,
    build_storage_context,
    create_cosmos_connection,
)
from chat_store.shared.config import StorageSettings


def test_volatile_is_default() -> None:
    context = build_storage_context(ChatMessage, "messages", StorageSettings())

    assert isinstance(context, VolatileStorageContext)
    assert context.name == "messages"


def test_filesystem_uses_one_file_per_container(tmp_path) -> None:
    settings = StorageSettings.model_validate(
        {"type": "filesystem", "filesystem": {"directory": str(tmp_path)}}
    )

    context = build_storage_context(ChatMessage, "messages", settings)

    assert isinstance(context, FileSystemStorageContext)
    assert context.file_path == tmp_path / "messages.json"
    assert context.file_path.exists()


def test_cosmos_requires_connection() -> None:
    """cosmos 백엔드는 호출자가 만든 연결을 받아야 하는지 확인한다."""

    settings = StorageSettings.model_validate(
        {
            "type": "cosmos",
            "cosmos": {"connection_string": "AccountEndpoint=x;AccountKey=y;", "database": "chat"},
        }
    )

    with pytest.raises(ValueError):
        build_storage_context(ChatMessage, "messages", settings)

    connection = create_cosmos_connection(settings)
    context = build_storage_context(ChatMessage, "messages", settings, connection=connection)

    assert isinstance(connection, CosmosConnection)
    assert connection.database_name == "chat"
    assert not connection.is_connected
    assert isinstance(context, CosmosStorageContext)
