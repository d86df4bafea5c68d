"""
목적: Cosmos DB 저장소 백엔드 공개 API를 제공한다.
설명: 연결 관리자, 저장소 컨텍스트, SQL 빌더, 오류 변환기를 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/integrations/storage/engines/cosmos/context.py
"""

from chat_store.integrations.storage.engines.cosmos.connection import CosmosConnection
from chat_store.integrations.storage.engines.cosmos.context import CosmosStorageContext
from chat_store.integrations.storage.engines.cosmos.error_mapper import (
    TRANSIENT_STATUS_CODES,
    map_cosmos_error,
)
from chat_store.integrations.storage.engines.cosmos.query_builder import CosmosQueryBuilder

__all__ = [
    "CosmosConnection",
    "CosmosStorageContext",
    "CosmosQueryBuilder",
    "TRANSIENT_STATUS_CODES",
    "map_cosmos_error",
]
