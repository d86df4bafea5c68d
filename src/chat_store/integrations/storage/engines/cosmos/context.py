"""
목적: Azure Cosmos DB 기반 저장소 컨텍스트를 제공한다.
설명: 엔티티 타입 하나를 컨테이너 하나에 매핑하고, 엔티티 파티션을 컨테이너 파티션 키로 사용한다.
      구조화 필터는 서버 쿼리로 변환하고, 불투명 술어는 받은 결과에 클라이언트에서 적용한다.
디자인 패턴: 전략 패턴, 어댑터 패턴
참조: src/chat_store/integrations/storage/engines/cosmos/connection.py,
      src/chat_store/integrations/storage/engines/cosmos/query_builder.py,
      src/chat_store/integrations/storage/engines/cosmos/error_mapper.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type

from chat_store.integrations.storage.base.context import DEFAULT_PAGE_SIZE, StorageContext
from chat_store.integrations.storage.base.entity import EntityT, require_id
from chat_store.integrations.storage.base.errors import CorruptStateError, StorageValidationError
from chat_store.integrations.storage.base.filter_evaluator import resolve_sort_key
from chat_store.integrations.storage.base.models import (
    FilterExpression,
    OrderKey,
    Page,
    Predicate,
    SortOrder,
)
from chat_store.integrations.storage.engines.cosmos.connection import CosmosConnection
from chat_store.integrations.storage.engines.cosmos.error_mapper import (
    BACKEND_EXCEPTIONS,
    map_cosmos_error,
)
from chat_store.integrations.storage.engines.cosmos.query_builder import CosmosQueryBuilder
from chat_store.shared.logging import Logger, create_default_logger


class CosmosStorageContext(StorageContext[EntityT]):
    """Cosmos DB 저장소 컨텍스트.

    연결은 호출자가 소유한다. `close()`는 연결을 닫지 않는다.

    Args:
        entity_type: 저장할 엔티티 타입.
        connection: 연결 관리자.
        container_name: 컨테이너 이름.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        entity_type: Type[EntityT],
        connection: CosmosConnection,
        container_name: str,
        logger: Optional[Logger] = None,
    ) -> None:
        require_id(container_name, label="container_name")
        super().__init__(entity_type, container_name)
        self._connection = connection
        self._logger = logger or create_default_logger("CosmosStorageContext")
        self._query_builder = CosmosQueryBuilder(entity_type)

    async def create(self, entity: EntityT) -> None:
        self._validate_entity(entity)
        try:
            await self._container().create_item(body=entity.to_document())
        except BACKEND_EXCEPTIONS as exc:
            raise map_cosmos_error(exc, self.name, "create", entity.id) from exc

    async def read(self, entity_id: str, partition: str) -> EntityT:
        require_id(entity_id)
        require_id(partition, label="partition")
        try:
            document = await self._container().read_item(
                item=entity_id,
                partition_key=partition,
            )
        except BACKEND_EXCEPTIONS as exc:
            raise map_cosmos_error(exc, self.name, "read", entity_id) from exc
        return self._to_entity(document, "read")

    async def upsert(self, entity: EntityT) -> None:
        self._validate_entity(entity)
        try:
            await self._container().upsert_item(body=entity.to_document())
        except BACKEND_EXCEPTIONS as exc:
            raise map_cosmos_error(exc, self.name, "upsert", entity.id) from exc

    async def delete(self, entity: EntityT) -> None:
        self._validate_entity(entity)
        try:
            await self._container().delete_item(
                item=entity.id,
                partition_key=entity.partition,
            )
        except BACKEND_EXCEPTIONS as exc:
            raise map_cosmos_error(exc, self.name, "delete", entity.id) from exc

    async def query(
        self,
        where: Optional[FilterExpression] = None,
        predicate: Optional[Predicate] = None,
        partition: Optional[str] = None,
        order_by: Optional[OrderKey] = None,
        descending: bool = False,
    ) -> List[EntityT]:
        server_order = order_by if isinstance(order_by, str) else None
        items = await self._drain(where, partition, server_order, descending, "query")
        if predicate is not None:
            items = [item for item in items if predicate(item)]
        if order_by is not None and server_order is None:
            items = sorted(items, key=resolve_sort_key(order_by), reverse=descending)
        return items

    async def query_paged(
        self,
        where: Optional[FilterExpression] = None,
        predicate: Optional[Predicate] = None,
        partition: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        continuation_token: Optional[str] = None,
        order_by: Optional[OrderKey] = None,
        descending: bool = False,
    ) -> Page[EntityT]:
        self._validate_page_size(page_size)
        if order_by is not None and not isinstance(order_by, str):
            raise StorageValidationError(
                "Cosmos 페이지 조회는 필드 이름 정렬만 지원합니다.",
                hint="order_by에 엔티티 필드 이름을 전달하세요.",
            )
        iterator = self._query_items(
            where, partition, order_by, descending, "query_paged", page_size
        )
        try:
            pager = iterator.by_page(continuation_token)
            try:
                page = await pager.__anext__()
            except StopAsyncIteration:
                return Page(items=[], continuation_token=None)
            documents = [document async for document in page]
            next_token = pager.continuation_token
        except BACKEND_EXCEPTIONS as exc:
            raise map_cosmos_error(exc, self.name, "query_paged") from exc
        items = [self._to_entity(document, "query_paged") for document in documents]
        if predicate is not None:
            items = [item for item in items if predicate(item)]
        return Page(items=items, continuation_token=next_token or None)

    async def count(
        self,
        partition: Optional[str] = None,
        where: Optional[FilterExpression] = None,
        predicate: Optional[Predicate] = None,
    ) -> int:
        items = await self._drain(where, partition, None, False, "count")
        if predicate is None:
            return len(items)
        return sum(1 for item in items if predicate(item))

    async def _drain(
        self,
        where: Optional[FilterExpression],
        partition: Optional[str],
        order_by: Optional[str],
        descending: bool,
        operation: str,
    ) -> List[EntityT]:
        iterator = self._query_items(where, partition, order_by, descending, operation)
        documents: List[Dict[str, Any]] = []
        try:
            async for document in iterator:
                documents.append(document)
        except BACKEND_EXCEPTIONS as exc:
            raise map_cosmos_error(exc, self.name, operation) from exc
        return [self._to_entity(document, operation) for document in documents]

    def _query_items(
        self,
        where: Optional[FilterExpression],
        partition: Optional[str],
        order_by: Optional[str],
        descending: bool,
        operation: str,
        page_size: Optional[int] = None,
    ) -> Any:
        query, parameters = self._query_builder.build_select(
            where,
            order_by=order_by,
            order=SortOrder.from_descending(descending),
        )
        options: Dict[str, Any] = {"query": query, "parameters": parameters}
        if partition is not None:
            require_id(partition, label="partition")
            options["partition_key"] = partition
        else:
            self._logger.warning(
                f"파티션 없이 전체 파티션을 조회합니다: {self.name}",
                metadata={"container": self.name, "operation": operation, "query": query},
            )
        if page_size is not None:
            options["max_item_count"] = page_size
        self._logger.debug(
            f"Cosmos 쿼리 실행: {query}",
            metadata={"container": self.name, "partition": partition},
        )
        try:
            return self._container().query_items(**options)
        except BACKEND_EXCEPTIONS as exc:
            raise map_cosmos_error(exc, self.name, operation) from exc

    def _to_entity(self, document: Mapping[str, Any], operation: str) -> EntityT:
        try:
            return self.entity_type.from_document(document)
        except (ValueError, TypeError) as exc:
            entity_id = document.get("id") if isinstance(document, Mapping) else None
            self._logger.error(
                f"Cosmos 문서를 엔티티로 복원할 수 없습니다: {self.name}/{entity_id}",
                metadata={"container": self.name, "operation": operation, "id": entity_id},
            )
            raise CorruptStateError(
                f"{self.name}의 문서를 {self.entity_type.__name__}로 복원할 수 없습니다: id={entity_id}",
                cause=str(exc),
                metadata={"container": self.name, "operation": operation, "id": entity_id},
                original=exc,
            ) from exc

    def _container(self) -> Any:
        return self._connection.get_container(self.name)
