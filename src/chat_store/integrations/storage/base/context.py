"""
목적: 백엔드 공통 저장소 컨텍스트 인터페이스를 정의한다.
설명: 엔티티 타입별 CRUD, 정렬 조회, 연속 토큰 기반 페이지 조회, 개수 집계 계약을 제공한다.
디자인 패턴: 전략 패턴, 템플릿 메서드
참조: src/chat_store/integrations/storage/engines/volatile/context.py,
      src/chat_store/integrations/storage/engines/filesystem/context.py,
      src/chat_store/integrations/storage/engines/cosmos/context.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Type

from chat_store.integrations.storage.base.entity import EntityT, require_id
from chat_store.integrations.storage.base.errors import StorageValidationError
from chat_store.integrations.storage.base.models import (
    FilterExpression,
    OrderKey,
    Page,
    Predicate,
)

DEFAULT_PAGE_SIZE = 10


class StorageContext(ABC, Generic[EntityT]):
    """엔티티 타입 하나에 대한 저장소 컨텍스트.

    모든 구현체는 같은 계약을 따른다.
    - create: 같은 id가 있으면 EntityAlreadyExistsError (덮어쓰지 않음)
    - read/delete: 대상이 없으면 EntityNotFoundError
    - query_paged: None 토큰은 처음부터, 반환 토큰이 None이면 마지막 페이지
    - `where`는 백엔드가 해석 가능한 구조화 필터, `predicate`는 항상 클라이언트에서 평가
    """

    def __init__(self, entity_type: Type[EntityT], name: str) -> None:
        self._entity_type = entity_type
        self._name = name

    @property
    def entity_type(self) -> Type[EntityT]:
        return self._entity_type

    @property
    def name(self) -> str:
        """컨텍스트(컨테이너) 이름을 반환한다."""

        return self._name

    @abstractmethod
    async def create(self, entity: EntityT) -> None:
        """엔티티를 생성한다."""

    @abstractmethod
    async def read(self, entity_id: str, partition: str) -> EntityT:
        """id와 파티션으로 엔티티를 조회한다."""

    @abstractmethod
    async def upsert(self, entity: EntityT) -> None:
        """엔티티를 삽입하거나 교체한다."""

    @abstractmethod
    async def delete(self, entity: EntityT) -> None:
        """엔티티를 삭제한다."""

    @abstractmethod
    async def query(
        self,
        where: Optional[FilterExpression] = None,
        predicate: Optional[Predicate] = None,
        partition: Optional[str] = None,
        order_by: Optional[OrderKey] = None,
        descending: bool = False,
    ) -> List[EntityT]:
        """조건에 맞는 엔티티 목록을 반환한다. 파티션이 없으면 전체를 스캔한다."""

    @abstractmethod
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
        """한 페이지를 조회하고 다음 연속 토큰을 함께 반환한다."""

    @abstractmethod
    async def count(
        self,
        partition: Optional[str] = None,
        where: Optional[FilterExpression] = None,
        predicate: Optional[Predicate] = None,
    ) -> int:
        """조건에 맞는 엔티티 수를 반환한다."""

    async def close(self) -> None:
        """컨텍스트 자원을 정리한다."""

    async def __aenter__(self) -> "StorageContext[EntityT]":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _validate_entity(self, entity: EntityT) -> EntityT:
        if not isinstance(entity, self._entity_type):
            raise StorageValidationError(
                f"{self._name} 컨텍스트는 {self._entity_type.__name__} 타입만 저장할 수 있습니다.",
                metadata={"received": type(entity).__name__},
            )
        require_id(entity.id)
        require_id(entity.partition, label="partition")
        return entity

    def _validate_page_size(self, page_size: int) -> int:
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
            raise StorageValidationError(
                f"page_size는 1 이상의 정수여야 합니다: {page_size!r}"
            )
        return page_size
