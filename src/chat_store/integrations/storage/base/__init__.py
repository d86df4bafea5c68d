"""
목적: 저장소 공통 계약 공개 API를 제공한다.
설명: 엔티티 계약, 조회 모델, 필터 빌더/평가기, 컨텍스트 인터페이스, 오류 분류를 노출한다.
디자인 패턴: 퍼사드
참조: src/chat_store/integrations/storage/base/context.py
"""

from chat_store.integrations.storage.base.context import DEFAULT_PAGE_SIZE, StorageContext
from chat_store.integrations.storage.base.entity import EntityT, StorageEntity, require_id
from chat_store.integrations.storage.base.errors import (
    CorruptStateError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    StorageBackendError,
    StorageError,
    StorageValidationError,
    TransientBackendError,
)
from chat_store.integrations.storage.base.filter_builder import FilterBuilder, field_equals
from chat_store.integrations.storage.base.filter_evaluator import (
    FilterEvaluator,
    resolve_sort_key,
    select_entities,
)
from chat_store.integrations.storage.base.models import (
    FilterCondition,
    FilterExpression,
    FilterOperator,
    OrderKey,
    Page,
    Predicate,
    SortOrder,
)
from chat_store.integrations.storage.base.table import (
    EntityTable,
    parse_offset_token,
    slice_page,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "StorageContext",
    "StorageEntity",
    "EntityT",
    "require_id",
    "StorageError",
    "StorageValidationError",
    "EntityNotFoundError",
    "EntityAlreadyExistsError",
    "TransientBackendError",
    "CorruptStateError",
    "StorageBackendError",
    "FilterBuilder",
    "field_equals",
    "FilterEvaluator",
    "select_entities",
    "resolve_sort_key",
    "FilterCondition",
    "FilterExpression",
    "FilterOperator",
    "OrderKey",
    "Page",
    "Predicate",
    "SortOrder",
    "EntityTable",
    "parse_offset_token",
    "slice_page",
]
