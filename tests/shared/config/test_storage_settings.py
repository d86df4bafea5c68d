"""
목적: 저장소 설정 모델 검증과 로딩을 확인한다.
설명: 기본값, cosmos 필수값 검증, 환경 변수/JSON/overrides 병합 결과를 확인한다.
디자인 패턴: 설정 객체 테스트
참조: src/chat_store/shared/config/storage_settings.py
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from chat_store.shared.config import RuntimeEnvironmentLoader, StorageSettings, StorageType


def test_defaults() -> None:
    settings = StorageSettings()

    assert settings.type == StorageType.VOLATILE
    assert settings.filesystem.directory == "./data"
    assert settings.cosmos.database == "chat-store"
    assert settings.containers.chat_messages == "chatmessages"


def test_cosmos_requires_connection_string() -> None:
    with pytest.raises(ValidationError):
        StorageSettings.model_validate({"type": "cosmos"})
    with pytest.raises(ValidationError):
        StorageSettings.model_validate({"type": "cosmos", "cosmos": {"connection_string": " "}})


def test_connection_string_is_masked() -> None:
    settings = StorageSettings.model_validate(
        {"type": "cosmos", "cosmos": {"connection_string": "AccountKey=secret"}}
    )

    assert "secret" not in repr(settings)
    assert settings.cosmos.connection_string.get_secret_value() == "AccountKey=secret"


def test_unknown_type_is_rejected() -> None:
    with pytest.raises(ValidationError):
        StorageSettings.model_validate({"type": "sqlite"})


def test_load_merges_sources(tmp_path, monkeypatch, test_logger) -> None:
    """JSON 파일, CHAT_STORE__ 환경 변수, overrides 순서로 병합되는지 확인한다."""

    monkeypatch.setenv("ENV", "local")
    monkeypatch.setenv("CHAT_STORE__TYPE", "filesystem")
    monkeypatch.setenv("CHAT_STORE__FILESYSTEM__DIRECTORY", str(tmp_path / "data"))
    config_path = tmp_path / "storage.json"
    config_path.write_text(
        json.dumps({"type": "volatile", "containers": {"chat_messages": "messages"}}),
        encoding="utf-8",
    )
    env_loader = RuntimeEnvironmentLoader(
        logger=test_logger,
        project_root=tmp_path,
        resources_root=tmp_path / "resources",
    )

    settings = StorageSettings.load(
        overrides={"containers": {"user_preferences": "prefs"}},
        json_path=str(config_path),
        env_loader=env_loader,
        logger=test_logger,
    )

    assert settings.type == StorageType.FILESYSTEM
    assert settings.filesystem.directory == str(tmp_path / "data")
    assert settings.containers.chat_messages == "messages"
    assert settings.containers.user_preferences == "prefs"
    assert settings.containers.chat_sessions == "chatsessions"
