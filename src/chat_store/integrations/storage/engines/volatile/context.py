"""
목적: 프로세스 내부 메모리 기반 저장소 컨텍스트를 제공한다.
설명: 재시작하면 모든 엔티티가 사라지며 테스트/데모/임시 구성에 사용한다.
디자인 패턴: 전략 패턴
참조: src/chat_store/integrations/storage/base/table.py, src/chat_store/integrations/storage/base/context.py
"""

from __future__ import annotations

from typing import List, Optional, Type

from chat_store.integrations.storage.base.context import DEFAULT_PAGE_SIZE, StorageContext
from chat_store.integrations.storage.base.entity import EntityT, require_id
from chat_store.integrations.storage.base.filter_evaluator import (
    FilterEvaluator,
    select_entities,
)
from chat_store.integrations.storage.base.models import (
    FilterExpression,
    OrderKey,
    Page,
    Predicate,
)
from chat_store.integrations.storage.base.table import (
    EntityTable,
    parse_offset_token,
    slice_page,
)
from chat_store.shared.logging import Logger, create_default_logger


class VolatileStorageContext(StorageContext[EntityT]):
    """인메모리 저장소 컨텍스트.

    Args:
        entity_type: 저장할 엔티티 타입.
        name: 컨테이너 이름(로그/오류 메시지용).
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        entity_type: Type[EntityT],
        name: Optional[str] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        super().__init__(entity_type, name or entity_type.__name__)
        self._logger = logger or create_default_logger("VolatileStorageContext")
        self._table: EntityTable[EntityT] = EntityTable(self.name)
        self._evaluator = FilterEvaluator()
        self._logger.debug(f"휘발성 저장소 컨텍스트 생성: {self.name}")

    async def create(self, entity: EntityT) -> None:
        self._table.insert(self._validate_entity(entity))

    async def read(self, entity_id: str, partition: str) -> EntityT:
        require_id(entity_id)
        require_id(partition, label="partition")
        return self._table.get(entity_id, partition)

    async def upsert(self, entity: EntityT) -> None:
        self._table.put(self._validate_entity(entity))

    async def delete(self, entity: EntityT) -> None:
        self._validate_entity(entity)
        self._table.remove(entity.id, entity.partition)

    async def query(
        self,
        where: Optional[FilterExpression] = None,
        predicate: Optional[Predicate] = None,
        partition: Optional[str] = None,
        order_by: Optional[OrderKey] = None,
        descending: bool = False,
    ) -> List[EntityT]:
        return select_entities(
            self._table.snapshot(),
            self._evaluator,
            where=where,
            predicate=predicate,
            partition=partition,
            order_by=order_by,
            descending=descending,
        )

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
        offset = parse_offset_token(continuation_token)
        matches = await self.query(
            where=where,
            predicate=predicate,
            partition=partition,
            order_by=order_by,
            descending=descending,
        )
        return slice_page(matches, offset, page_size)

    async def count(
        self,
        partition: Optional[str] = None,
        where: Optional[FilterExpression] = None,
        predicate: Optional[Predicate] = None,
    ) -> int:
        matches = await self.query(where=where, predicate=predicate, partition=partition)
        return len(matches)
