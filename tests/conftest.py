"""
목적: 테스트 공통 환경/픽스처/로깅 훅을 단일화해 제공한다.
설명: 선택적 .env 로딩, 백엔드별 저장소 컨텍스트 픽스처, 테스트 로깅 훅을 함께 제공한다.
디자인 패턴: 테스트 픽스처 + 테스트 훅
참조: pyproject.toml, tests/integrations/storage/engines/test_storage_context_contract.py
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest
from dotenv import load_dotenv

from chat_store.integrations.storage import (
    FileSystemStorageContext,
    StorageContext,
    VolatileStorageContext,
)
from chat_store.shared.logging import InMemoryLogger

_LOGGER = logging.getLogger("tests")
_PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _load_env_files() -> None:
    """프로젝트 루트에 .env가 있으면 로딩한다. 저장소 테스트는 외부 서비스가 필요 없다."""

    env_path = _PROJECT_ROOT / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)


_load_env_files()


ContextFactory = Callable[..., StorageContext]


@pytest.fixture
def test_logger() -> InMemoryLogger:
    """기록된 로그를 검사할 수 있는 로거를 반환한다."""

    return InMemoryLogger(name="tests", emit_stdout=False)


@pytest.fixture(params=["volatile", "filesystem"])
def context_factory(request, tmp_path, test_logger) -> ContextFactory:
    """백엔드별 저장소 컨텍스트 생성 함수를 반환한다.

    같은 이름으로 다시 호출하면 filesystem 백엔드는 같은 파일을 다시 연다.
    """

    backend = request.param

    def _factory(entity_type, name: str = "entities") -> StorageContext:
        if backend == "volatile":
            return VolatileStorageContext(entity_type, name=name, logger=test_logger)
        return FileSystemStorageContext(
            entity_type,
            tmp_path / f"{name}.json",
            name=name,
            logger=test_logger,
        )

    _factory.backend = backend
    return _factory


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
