"""
목적: JSON 파일 기반 저장소 컨텍스트를 제공한다.
설명: 전체 엔티티를 인메모리 테이블에 두고 `{ "<id>": {...} }` 형태의 JSON 문서 하나로 미러링한다.
      변경이 발생할 때마다 전체 문서를 임시 파일에 기록한 뒤 원자적으로 교체한다.
      변경당 O(전체 엔티티) 입출력이 필요하므로 소규모/개발 환경 전용이다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/chat_store/integrations/storage/base/table.py, src/chat_store/integrations/storage/base/context.py
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import os
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from chat_store.integrations.storage.base.context import DEFAULT_PAGE_SIZE, StorageContext
from chat_store.integrations.storage.base.entity import EntityT, require_id
from chat_store.integrations.storage.base.errors import CorruptStateError, StorageBackendError
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
from chat_store.shared.const import SharedConst
from chat_store.shared.logging import Logger, create_default_logger

ResultT = TypeVar("ResultT")


class FileSystemStorageContext(StorageContext[EntityT]):
    """JSON 파일 저장소 컨텍스트.

    변경 연산은 파일 잠금을 잡은 상태에서 (스냅샷 계산 -> 임시 파일 기록 -> 교체 -> 테이블 반영)을
    한 번에 수행한다. 조회 연산은 디스크를 읽지 않고 인메모리 테이블만 사용한다.

    디스크 기록은 워커 스레드에서 실행된다. 기록이 시작된 뒤 호출 태스크가 취소되면
    기록을 끝까지 마친 다음 `asyncio.CancelledError`를 다시 발생시킨다.

    Args:
        entity_type: 저장할 엔티티 타입.
        file_path: JSON 파일 경로. 없으면 `{}`로 생성한다.
        name: 컨테이너 이름. 기본값은 파일 이름(확장자 제외).
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        entity_type: Type[EntityT],
        file_path: Union[str, Path],
        name: Optional[str] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        path = Path(file_path)
        super().__init__(entity_type, name or path.stem)
        self._path = path
        self._logger = logger or create_default_logger("FileSystemStorageContext")
        self._file_lock = threading.Lock()
        self._table: EntityTable[EntityT] = EntityTable(self.name)
        self._evaluator = FilterEvaluator()
        self._load()

    @property
    def file_path(self) -> Path:
        return self._path

    async def create(self, entity: EntityT) -> None:
        staged = self._validate_entity(entity).model_copy(deep=True)

        def _apply() -> None:
            self._table.ensure_absent(staged.id)
            documents = self._documents()
            documents[staged.id] = staged.to_document()
            self._flush(documents)
            self._table.insert(staged)

        await self._commit(_apply)

    async def read(self, entity_id: str, partition: str) -> EntityT:
        require_id(entity_id)
        require_id(partition, label="partition")
        return self._table.get(entity_id, partition)

    async def upsert(self, entity: EntityT) -> None:
        staged = self._validate_entity(entity).model_copy(deep=True)

        def _apply() -> None:
            documents = self._documents()
            documents[staged.id] = staged.to_document()
            self._flush(documents)
            self._table.put(staged)

        await self._commit(_apply)

    async def delete(self, entity: EntityT) -> None:
        self._validate_entity(entity)
        entity_id, partition = entity.id, entity.partition

        def _apply() -> None:
            self._table.ensure_present(entity_id, partition)
            documents = self._documents()
            documents.pop(entity_id, None)
            self._flush(documents)
            self._table.remove(entity_id, partition)

        await self._commit(_apply)

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

    async def _commit(self, operation: Callable[[], ResultT]) -> ResultT:
        task = asyncio.ensure_future(asyncio.to_thread(self._run_locked, operation))
        cancelled = False
        while True:
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                cancelled = True
                if not task.done():
                    continue
            break
        if cancelled:
            if not task.cancelled() and task.exception() is None:
                self._logger.info(
                    f"취소 요청 이후 파일 기록을 완료했습니다: {self._path}",
                    metadata={"container": self.name},
                )
            raise asyncio.CancelledError()
        return task.result()

    def _run_locked(self, operation: Callable[[], ResultT]) -> ResultT:
        with self._file_lock:
            return operation()

    def _documents(self) -> Dict[str, Dict[str, Any]]:
        return {entity.id: entity.to_document() for entity in self._table.snapshot()}

    def _flush(self, documents: Dict[str, Dict[str, Any]]) -> None:
        temp_path = self._path.with_name(f"{self._path.name}.tmp")
        payload = json.dumps(documents, ensure_ascii=False, indent=2)
        try:
            with open(temp_path, "w", encoding=SharedConst.DEFAULT_ENCODING) as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, self._path)
        except OSError as exc:
            self._logger.error(
                f"저장소 파일 기록에 실패했습니다: {self._path}",
                metadata={"container": self.name, "error": repr(exc)},
            )
            with contextlib.suppress(OSError):
                temp_path.unlink(missing_ok=True)
            raise StorageBackendError(
                f"저장소 파일 기록에 실패했습니다: {self._path}",
                cause=str(exc),
                metadata={"container": self.name, "path": str(self._path)},
                original=exc,
            ) from exc

    def _load(self) -> None:
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._flush({})
            self._logger.info(f"저장소 파일을 새로 생성했습니다: {self._path}")
            return

        try:
            with open(self._path, "r", encoding=SharedConst.DEFAULT_ENCODING) as handle:
                payload = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CorruptStateError(
                f"저장소 파일을 해석할 수 없습니다: {self._path}",
                cause=str(exc),
                hint="파일을 직접 복구하거나 백업에서 복원하세요. 자동 복구는 수행하지 않습니다.",
                metadata={"path": str(self._path)},
                original=exc,
            ) from exc
        if not isinstance(payload, dict):
            raise CorruptStateError(
                f"저장소 파일 최상위는 객체여야 합니다: {self._path}",
                metadata={"path": str(self._path), "type": type(payload).__name__},
            )

        entities: List[EntityT] = []
        for key, document in payload.items():
            if not isinstance(document, dict):
                raise CorruptStateError(
                    f"저장소 파일의 엔티티 문서는 객체여야 합니다: id={key}",
                    metadata={"path": str(self._path), "id": key},
                )
            try:
                entity = self.entity_type.from_document(document)
            except ValidationError as exc:
                raise CorruptStateError(
                    f"저장소 파일의 엔티티를 복원할 수 없습니다: id={key}",
                    cause=str(exc),
                    metadata={"path": str(self._path), "id": key},
                    original=exc,
                ) from exc
            if entity.id != key:
                raise CorruptStateError(
                    f"문서 키와 엔티티 id가 다릅니다: key={key}, id={entity.id}",
                    metadata={"path": str(self._path)},
                )
            entities.append(entity)
        self._table.replace_all(entities)
        self._logger.info(
            f"저장소 파일 로드 완료: {self._path}",
            metadata={"container": self.name, "count": len(entities)},
        )
