"""휘발성 저장소 컨텍스트 패키지."""

from chat_store.integrations.storage.engines.volatile.context import VolatileStorageContext

__all__ = ["VolatileStorageContext"]
