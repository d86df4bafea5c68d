"""
목적: 설정 로더 공개 API를 제공한다.
설명: 설정 병합 로더, 런타임 환경 로더, 저장소 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/shared/config/loader.py, src/chat_store/shared/config/storage_settings.py
"""

from chat_store.shared.config.loader import ConfigLoader
from chat_store.shared.config.runtime_env_loader import RuntimeEnvironmentLoader
from chat_store.shared.config.storage_settings import (
    ContainerSettings,
    CosmosSettings,
    FileSystemSettings,
    StorageSettings,
    StorageType,
)

__all__ = [
    "ConfigLoader",
    "RuntimeEnvironmentLoader",
    "StorageSettings",
    "StorageType",
    "FileSystemSettings",
    "CosmosSettings",
    "ContainerSettings",
]
