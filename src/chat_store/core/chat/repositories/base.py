"""
목적: 엔티티 타입 공통 저장소(Repository)를 제공한다.
설명: StorageContext 하나를 합성해 id 검증, 기본 파티션 대체, 멱등 삭제, not-found 분기 처리를 더한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/integrations/storage/base/context.py
"""

from __future__ import annotations

from typing import Callable, Generic, List, Optional

from chat_store.integrations.storage.base import (
    DEFAULT_PAGE_SIZE,
    EntityNotFoundError,
    EntityT,
    FilterExpression,
    OrderKey,
    Page,
    Predicate,
    StorageContext,
    StorageValidationError,
    require_id,
)
from chat_store.shared.logging import Logger, create_default_logger


class Repository(Generic[EntityT]):
    """엔티티 타입별 저장소 기본 구현체.

    컨텍스트 계약을 우회하지 않으며, 하위 클래스는 도메인 조회 도우미만 추가한다.

    Args:
        context: 엔티티 타입에 대응하는 저장소 컨텍스트.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        context: StorageContext[EntityT],
        logger: Optional[Logger] = None,
    ) -> None:
        self._context = context
        self._logger = logger or create_default_logger(type(self).__name__)

    @property
    def context(self) -> StorageContext[EntityT]:
        return self._context

    async def create(self, entity: EntityT) -> None:
        """엔티티를 생성한다. id가 비어 있으면 컨텍스트를 호출하지 않는다."""

        require_id(entity.id)
        await self._context.create(entity)

    async def upsert(self, entity: EntityT) -> None:
        """엔티티를 삽입하거나 교체한다."""

        require_id(entity.id)
        await self._context.upsert(entity)

    async def delete(self, entity: EntityT) -> bool:
        """엔티티를 삭제한다. 이미 없으면 성공으로 처리하고 False를 반환한다."""

        try:
            await self._context.delete(entity)
        except EntityNotFoundError:
            self._logger.info(
                f"이미 삭제된 엔티티입니다: {self._context.name}/{entity.id}",
                metadata={"container": self._context.name, "id": entity.id},
            )
            return False
        return True

    async def find_by_id(self, entity_id: str, partition: Optional[str] = None) -> EntityT:
        """id로 엔티티를 조회한다. 파티션을 생략하면 id를 파티션으로 사용한다."""

        return await self._context.read(
            entity_id,
            partition if partition is not None else entity_id,
        )

    async def try_find_by_id(
        self,
        entity_id: str,
        partition: Optional[str] = None,
        on_found: Optional[Callable[[EntityT], None]] = None,
    ) -> bool:
        """조회 성공 여부를 반환한다. 찾으면 on_found를 호출한다."""

        try:
            found = await self.find_by_id(entity_id, partition)
        except (EntityNotFoundError, StorageValidationError):
            return False
        if on_found is not None:
            on_found(found)
        return True

    async def query(
        self,
        where: Optional[FilterExpression] = None,
        predicate: Optional[Predicate] = None,
        partition: Optional[str] = None,
        order_by: Optional[OrderKey] = None,
        descending: bool = False,
    ) -> List[EntityT]:
        return await self._context.query(
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
        return await self._context.query_paged(
            where=where,
            predicate=predicate,
            partition=partition,
            page_size=page_size,
            continuation_token=continuation_token,
            order_by=order_by,
            descending=descending,
        )

    async def count(
        self,
        partition: Optional[str] = None,
        where: Optional[FilterExpression] = None,
        predicate: Optional[Predicate] = None,
    ) -> int:
        return await self._context.count(partition=partition, where=where, predicate=predicate)
