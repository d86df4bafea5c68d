"""
목적: 저장 가능한 엔티티의 최소 계약을 정의한다.
설명: 모든 엔티티는 id와 파티션 키를 가지며 camelCase 문서 형태로 직렬화된다.
디자인 패턴: 레이어 슈퍼타입
참조: src/chat_store/core/chat/models/entities.py, src/chat_store/integrations/storage/base/context.py
"""

from __future__ import annotations

import uuid
from typing import Any, ClassVar, Dict, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chat_store.integrations.storage.base.errors import StorageValidationError


def _new_id() -> str:
    return str(uuid.uuid4())


class StorageEntity(BaseModel):
    """저장소 엔티티 기본 모델.

    하위 클래스는 `PARTITION_FIELD`에 파티션 키로 사용할 필드 이름을 지정한다.
    기본값 `id`는 자기 자신으로 파티션되는 엔티티를 의미한다.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    PARTITION_FIELD: ClassVar[str] = "id"

    id: str = Field(default_factory=_new_id)

    @property
    def partition(self) -> str:
        """파티션 키 값을 반환한다."""

        return str(getattr(self, self.PARTITION_FIELD))

    def to_document(self) -> Dict[str, Any]:
        """JSON 호환 저장 문서로 변환한다."""

        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]):
        """저장 문서에서 엔티티를 복원한다. `_etag` 등 시스템 필드는 무시된다."""

        return cls.model_validate(dict(document))

    @classmethod
    def field_alias(cls, name: str) -> str:
        """파이썬 필드 이름을 저장 문서의 필드 이름으로 변환한다."""

        info = cls.model_fields.get(name)
        if info is not None:
            return info.alias or name
        for candidate in cls.model_fields.values():
            if candidate.alias == name:
                return name
        raise StorageValidationError(
            f"{cls.__name__}에 존재하지 않는 필드입니다: {name}",
            metadata={"entity": cls.__name__, "field": name},
        )

    @classmethod
    def partition_key_path(cls) -> str:
        """문서 저장소의 파티션 키 경로(`/chatId` 형태)를 반환한다."""

        return f"/{cls.field_alias(cls.PARTITION_FIELD)}"


EntityT = TypeVar("EntityT", bound=StorageEntity)


def require_id(value: Any, label: str = "id") -> str:
    """비어 있지 않은 식별자인지 확인한다."""

    if not isinstance(value, str) or not value.strip():
        raise StorageValidationError(
            f"{label}는 비어 있을 수 없습니다.",
            hint="엔티티 id와 파티션 키는 공백이 아닌 문자열이어야 합니다.",
        )
    return value
