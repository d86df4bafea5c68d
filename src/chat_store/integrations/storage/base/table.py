"""
목적: 파일/휘발성 백엔드가 공유하는 인메모리 엔티티 테이블을 제공한다.
설명: id 기준 딕셔너리를 잠금으로 보호하고, 입출력 시 깊은 복사로 외부 변경이 새지 않도록 한다.
      오프셋 연속 토큰 해석/생성 도우미를 함께 제공한다.
디자인 패턴: 저장소 패턴
참조: src/chat_store/integrations/storage/engines/volatile/context.py,
      src/chat_store/integrations/storage/engines/filesystem/context.py
"""

from __future__ import annotations

import threading
from typing import Dict, Generic, Iterable, List, Optional

from chat_store.integrations.storage.base.entity import EntityT
from chat_store.integrations.storage.base.errors import (
    EntityAlreadyExistsError,
    EntityNotFoundError,
    StorageValidationError,
)
from chat_store.integrations.storage.base.models import Page


class EntityTable(Generic[EntityT]):
    """잠금으로 보호되는 엔티티 테이블.

    id는 컬렉션 전체에서 유일하므로 id만으로 키를 잡는다. 파티션은 조회 시 확인한다.
    삽입 순서가 정렬 키가 없을 때의 자연 순서이다.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._lock = threading.RLock()
        self._rows: Dict[str, EntityT] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def insert(self, entity: EntityT) -> None:
        """없을 때만 삽입한다. 확인과 삽입은 하나의 잠금 구간에서 수행된다."""

        with self._lock:
            self.ensure_absent(entity.id)
            self._rows[entity.id] = entity.model_copy(deep=True)

    def put(self, entity: EntityT) -> None:
        """삽입하거나 교체한다. 기존 id면 자연 순서상 위치를 유지한다."""

        with self._lock:
            self._rows[entity.id] = entity.model_copy(deep=True)

    def remove(self, entity_id: str, partition: str) -> EntityT:
        """삭제하고 삭제된 엔티티를 반환한다."""

        with self._lock:
            current = self._get_in_partition(entity_id, partition)
            del self._rows[entity_id]
            return current

    def get(self, entity_id: str, partition: str) -> EntityT:
        """파티션이 일치하는 엔티티 사본을 반환한다."""

        with self._lock:
            return self._get_in_partition(entity_id, partition).model_copy(deep=True)

    def ensure_absent(self, entity_id: str) -> None:
        with self._lock:
            if entity_id in self._rows:
                raise EntityAlreadyExistsError(
                    f"{self._name}에 이미 존재하는 id입니다: {entity_id}",
                    hint="기존 엔티티를 교체하려면 upsert를 사용하세요.",
                    metadata={"container": self._name, "id": entity_id},
                )

    def ensure_present(self, entity_id: str, partition: str) -> None:
        with self._lock:
            self._get_in_partition(entity_id, partition)

    def snapshot(self) -> List[EntityT]:
        """현재 엔티티 목록의 사본을 자연 순서로 반환한다."""

        with self._lock:
            return [entity.model_copy(deep=True) for entity in self._rows.values()]

    def replace_all(self, entities: Iterable[EntityT]) -> None:
        with self._lock:
            self._rows = {entity.id: entity for entity in entities}

    def _get_in_partition(self, entity_id: str, partition: str) -> EntityT:
        current = self._rows.get(entity_id)
        if current is None or current.partition != partition:
            raise EntityNotFoundError(
                f"{self._name}에서 엔티티를 찾을 수 없습니다: id={entity_id}, partition={partition}",
                metadata={"container": self._name, "id": entity_id, "partition": partition},
            )
        return current


def parse_offset_token(token: Optional[str]) -> int:
    """오프셋 연속 토큰을 정수로 해석한다. None은 0이다."""

    if token is None:
        return 0
    text = token.strip()
    if not (text.isascii() and text.isdigit()):
        raise StorageValidationError(
            f"잘못된 연속 토큰입니다: {token!r}",
            hint="이전 query_paged 호출이 반환한 토큰을 그대로 전달하세요.",
        )
    return int(text)


def slice_page(items: List[EntityT], offset: int, page_size: int) -> Page[EntityT]:
    """정렬/필터가 끝난 목록에서 한 페이지를 잘라 다음 토큰과 함께 반환한다."""

    end = offset + page_size
    next_token = str(end) if end < len(items) else None
    return Page(items=items[offset:end], continuation_token=next_token)
