"""
목적: 인메모리 로거와 로그 모델 동작을 검증한다.
설명: 로그 기록, 메타데이터 보관, 컨텍스트 병합, 보관 건수 제한을 확인한다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/chat_store/shared/logging/logger.py, src/chat_store/shared/logging/models.py
"""

from __future__ import annotations

import json

from chat_store.shared.logging import (
    InMemoryLogger,
    InMemoryLogRepository,
    LogContext,
    LogLevel,
    create_default_logger,
)


def test_inmemory_logger_records_log() -> None:
    """기본 로거가 로그와 메타데이터를 기록하는지 확인한다."""

    logger = create_default_logger("unit-test")
    logger.info("시작 로그", metadata={"container": "chatmessages"})

    records = logger.repository.list()

    assert len(records) == 1
    assert records[0].level == LogLevel.INFO
    assert records[0].message == "시작 로그"
    assert records[0].logger_name == "unit-test"
    assert records[0].metadata == {"container": "chatmessages"}


def test_logger_with_context_merges_tags() -> None:
    """컨텍스트 병합 규칙이 올바른지 확인한다."""

    base_context = LogContext(trace_id="trace-1", tags={"service": "store", "env": "dev"})
    logger = InMemoryLogger(name="ctx-test", base_context=base_context)

    logger.info("기본 컨텍스트 로그")

    child_context = LogContext(
        trace_id="trace-2",
        chat_id="chat-1",
        tags={"env": "prod", "backend": "cosmos"},
    )
    child_logger = logger.with_context(child_context)
    child_logger.error("확장 컨텍스트 로그")

    records = logger.repository.list()

    assert len(records) == 2
    assert records[0].context is not None
    assert records[0].context.trace_id == "trace-1"
    assert records[0].context.tags["env"] == "dev"
    assert records[1].context is not None
    assert records[1].context.trace_id == "trace-2"
    assert records[1].context.chat_id == "chat-1"
    assert records[1].context.tags["env"] == "prod"
    assert records[1].context.tags["service"] == "store"


def test_repository_keeps_latest_records() -> None:
    repository = InMemoryLogRepository(max_records=2)
    logger = InMemoryLogger(name="bounded", repository=repository, emit_stdout=False)

    for index in range(3):
        logger.debug(f"로그 {index}")

    assert [record.message for record in repository.list()] == ["로그 1", "로그 2"]


def test_emit_stdout_writes_json_line(capsys) -> None:
    """stdout 출력이 켜져 있으면 JSON 한 줄로 기록하는지 확인한다."""

    logger = InMemoryLogger(name="stdout-test", emit_stdout=True)
    logger.warning("경고", metadata={"id": "m1"})

    payload = json.loads(capsys.readouterr().out.strip())

    assert payload["level"] == LogLevel.WARNING.value
    assert payload["logger"] == "stdout-test"
    assert payload["metadata"] == {"id": "m1"}
