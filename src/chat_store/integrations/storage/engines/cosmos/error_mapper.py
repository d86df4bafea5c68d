"""
목적: Azure SDK 예외를 저장소 오류 분류로 변환한다.
설명: 상태 코드 기준으로 NotFound/AlreadyExists/Transient/Backend 오류를 결정하고 원본 예외를 보존한다.
디자인 패턴: 어댑터 패턴
참조: src/chat_store/integrations/storage/base/errors.py
"""

from __future__ import annotations

import asyncio
from typing import Optional

from azure.core.exceptions import AzureError, ServiceRequestError, ServiceResponseError
from azure.cosmos.exceptions import CosmosHttpResponseError

from chat_store.integrations.storage.base.errors import (
    EntityAlreadyExistsError,
    EntityNotFoundError,
    StorageBackendError,
    StorageError,
    TransientBackendError,
)

TRANSIENT_STATUS_CODES = frozenset({408, 429, 449, 500, 502, 503, 504})

# 컨텍스트가 변환 대상으로 잡는 예외 타입
BACKEND_EXCEPTIONS = (AzureError, asyncio.TimeoutError)


def map_cosmos_error(
    exc: BaseException,
    container: str,
    operation: str,
    entity_id: Optional[str] = None,
) -> StorageError:
    """Azure 예외를 저장소 오류로 변환한다."""

    metadata = {"container": container, "operation": operation}
    if entity_id is not None:
        metadata["id"] = entity_id

    if isinstance(exc, CosmosHttpResponseError):
        status = exc.status_code
        metadata["status_code"] = status
        if status == 404:
            return EntityNotFoundError(
                f"{container}에서 엔티티를 찾을 수 없습니다: id={entity_id}",
                metadata=metadata,
                original=exc,
            )
        if status == 409:
            return EntityAlreadyExistsError(
                f"{container}에 이미 존재하는 id입니다: {entity_id}",
                hint="기존 엔티티를 교체하려면 upsert를 사용하세요.",
                metadata=metadata,
                original=exc,
            )
        if status in TRANSIENT_STATUS_CODES:
            return TransientBackendError(
                f"Cosmos DB 일시 오류가 발생했습니다: status={status}",
                cause=exc.message if hasattr(exc, "message") else str(exc),
                hint="호출자의 재시도 정책에 따라 다시 시도하세요.",
                metadata=metadata,
                original=exc,
            )
        return StorageBackendError(
            f"Cosmos DB 요청이 실패했습니다: status={status}",
            cause=str(exc),
            metadata=metadata,
            original=exc,
        )

    if isinstance(exc, (ServiceRequestError, ServiceResponseError, asyncio.TimeoutError)):
        return TransientBackendError(
            "Cosmos DB에 연결할 수 없습니다.",
            cause=str(exc),
            hint="네트워크 상태를 확인한 뒤 다시 시도하세요.",
            metadata=metadata,
            original=exc,
        )

    return StorageBackendError(
        "Cosmos DB 요청 처리 중 오류가 발생했습니다.",
        cause=str(exc),
        metadata=metadata,
        original=exc,
    )
