"""
목적: 저장소 통합 공개 API를 제공한다.
설명: 공통 계약과 백엔드 구현, 설정 기반 팩토리를 한 곳에서 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/integrations/storage/base/__init__.py, src/chat_store/integrations/storage/factory.py
"""

from chat_store.integrations.storage.base import (
    CorruptStateError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    FilterBuilder,
    FilterExpression,
    Page,
    StorageBackendError,
    StorageContext,
    StorageEntity,
    StorageError,
    StorageValidationError,
    TransientBackendError,
)
from chat_store.integrations.storage.engines.cosmos import CosmosConnection, CosmosStorageContext
from chat_store.integrations.storage.engines.filesystem import FileSystemStorageContext
from chat_store.integrations.storage.engines.volatile import VolatileStorageContext
from chat_store.integrations.storage.factory import build_storage_context, create_cosmos_connection

__all__ = [
    "StorageContext",
    "StorageEntity",
    "Page",
    "FilterBuilder",
    "FilterExpression",
    "StorageError",
    "StorageValidationError",
    "EntityNotFoundError",
    "EntityAlreadyExistsError",
    "TransientBackendError",
    "CorruptStateError",
    "StorageBackendError",
    "VolatileStorageContext",
    "FileSystemStorageContext",
    "CosmosConnection",
    "CosmosStorageContext",
    "build_storage_context",
    "create_cosmos_connection",
]
