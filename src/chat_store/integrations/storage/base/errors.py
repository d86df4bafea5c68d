"""
목적: 저장소 계층 오류 분류를 정의한다.
설명: 백엔드 고유 예외는 컨텍스트 경계에서 아래 타입으로 변환되며 호출자에게 드라이버 예외가 노출되지 않는다.
디자인 패턴: 예외 계층
참조: src/chat_store/shared/exceptions/base.py, src/chat_store/integrations/storage/engines/cosmos/error_mapper.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from chat_store.shared.exceptions import BaseAppException, ExceptionDetail


class StorageError(BaseAppException):
    """저장소 오류 기본 타입."""

    _CODE = "STORAGE_ERROR"
    _RETRYABLE = False

    def __init__(
        self,
        message: str,
        cause: Optional[str] = None,
        hint: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        original: Optional[Exception] = None,
    ) -> None:
        detail = ExceptionDetail(
            code=self._CODE,
            cause=cause,
            hint=hint,
            retryable=self._RETRYABLE,
            metadata=metadata or {},
        )
        super().__init__(message, detail, original)


class StorageValidationError(StorageError):
    """잘못된 입력(빈 id, 잘못된 페이지 크기/토큰). 재시도 대상이 아니다."""

    _CODE = "STORAGE_VALIDATION_ERROR"


class EntityNotFoundError(StorageError):
    """조회/삭제 대상 엔티티가 없다."""

    _CODE = "STORAGE_ENTITY_NOT_FOUND"


class EntityAlreadyExistsError(StorageError):
    """생성 대상 id가 이미 존재한다. 호출자는 upsert로 전환할 수 있다."""

    _CODE = "STORAGE_ENTITY_ALREADY_EXISTS"


class TransientBackendError(StorageError):
    """백엔드 연결/가용성 오류. 재시도 정책은 호출자가 결정한다."""

    _CODE = "STORAGE_BACKEND_TRANSIENT"
    _RETRYABLE = True


class CorruptStateError(StorageError):
    """영속 상태를 해석할 수 없다. 해당 컨텍스트 인스턴스에는 치명적이다."""

    _CODE = "STORAGE_CORRUPT_STATE"


class StorageBackendError(StorageError):
    """다른 분류에 속하지 않는 백엔드 오류."""

    _CODE = "STORAGE_BACKEND_ERROR"


__all__ = [
    "StorageError",
    "StorageValidationError",
    "EntityNotFoundError",
    "EntityAlreadyExistsError",
    "TransientBackendError",
    "CorruptStateError",
    "StorageBackendError",
]
