"""파일 저장소 컨텍스트 패키지."""

from chat_store.integrations.storage.engines.filesystem.context import FileSystemStorageContext

__all__ = ["FileSystemStorageContext"]
