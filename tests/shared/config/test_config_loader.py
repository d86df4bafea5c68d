"""
목적: 설정 로더와 런타임 환경 로더를 검증한다.
설명: dict/JSON/환경 변수 병합 순서, 값 해석, ENV 판별과 리소스 .env 로딩을 확인한다.
디자인 패턴: 빌더 패턴, 전략 패턴
참조: src/chat_store/shared/config/loader.py, src/chat_store/shared/config/runtime_env_loader.py
"""

from __future__ import annotations

import json

import pytest

from chat_store.shared.config import ConfigLoader, RuntimeEnvironmentLoader

_PREFIX = "CHAT_STORE_TEST__"


def test_sources_merge_in_order(tmp_path, monkeypatch, test_logger) -> None:
    """나중 소스가 앞선 소스를 키 단위로 덮어쓰는지 확인한다."""

    config_path = tmp_path / "storage.json"
    config_path.write_text(
        json.dumps({"type": "filesystem", "filesystem": {"directory": "/data"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv(f"{_PREFIX}COSMOS__DATABASE", "from-env")
    monkeypatch.setenv(f"{_PREFIX}FILESYSTEM__DIRECTORY", "/env-data")

    merged = (
        ConfigLoader(logger=test_logger)
        .add_dict({"type": "volatile", "cosmos": {"database": "base"}})
        .add_json_file(str(config_path))
        .add_env(prefix=_PREFIX)
        .build({"containers": {"chat_sessions": "sessions"}})
    )

    assert merged == {
        "type": "filesystem",
        "filesystem": {"directory": "/env-data"},
        "cosmos": {"database": "from-env"},
        "containers": {"chat_sessions": "sessions"},
    }


def test_env_values_are_parsed(monkeypatch) -> None:
    monkeypatch.setenv(f"{_PREFIX}FLAG", "True")
    monkeypatch.setenv(f"{_PREFIX}EMPTY", "null")
    monkeypatch.setenv(f"{_PREFIX}PLUGINS", '["search", "memory"]')
    monkeypatch.setenv(f"{_PREFIX}PORT", "8081")

    merged = ConfigLoader().add_env(prefix=_PREFIX).build()

    assert merged == {"flag": True, "empty": None, "plugins": ["search", "memory"], "port": "8081"}


def test_missing_json_file(tmp_path, test_logger) -> None:
    """선택 파일은 경고 후 건너뛰고 필수 파일은 오류를 내는지 확인한다."""

    missing = str(tmp_path / "missing.json")
    loader = ConfigLoader(logger=test_logger).add_json_file(missing)

    assert loader.build() == {}
    assert any("건너뜁니다" in record.message for record in test_logger.repository.list())
    with pytest.raises(FileNotFoundError):
        ConfigLoader().add_json_file(missing, required=True)


def test_json_file_must_be_object(tmp_path) -> None:
    config_path = tmp_path / "list.json"
    config_path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        ConfigLoader().add_json_file(str(config_path))


@pytest.fixture
def clean_runtime_env(monkeypatch):
    for key in ("ENV", "APP_ENV", "APP_STAGE", "env", "app_env", "app_stage"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


def test_runtime_env_defaults_to_local(tmp_path, clean_runtime_env, test_logger) -> None:
    loader = RuntimeEnvironmentLoader(
        logger=test_logger,
        project_root=tmp_path,
        resources_root=tmp_path / "resources",
    )

    assert loader.load() == "local"


def test_runtime_env_loads_resource_file(tmp_path, clean_runtime_env, test_logger) -> None:
    """ENV 별칭을 정규화하고 해당 환경의 .env를 로드하는지 확인한다."""

    resource_dir = tmp_path / "resources" / "stg"
    resource_dir.mkdir(parents=True)
    (resource_dir / ".env").write_text("CHAT_STORE_TEST__FROM_RESOURCE=yes\n", encoding="utf-8")
    clean_runtime_env.setenv("ENV", "staging")
    clean_runtime_env.delenv("CHAT_STORE_TEST__FROM_RESOURCE", raising=False)
    loader = RuntimeEnvironmentLoader(
        logger=test_logger,
        project_root=tmp_path,
        resources_root=tmp_path / "resources",
    )

    try:
        assert loader.load() == "stg"
        assert ConfigLoader().add_env(prefix=_PREFIX).build() == {"from_resource": "yes"}
    finally:
        clean_runtime_env.delenv("CHAT_STORE_TEST__FROM_RESOURCE", raising=False)


def test_runtime_env_rejects_unknown_value(tmp_path, clean_runtime_env) -> None:
    clean_runtime_env.setenv("ENV", "qa")
    loader = RuntimeEnvironmentLoader(project_root=tmp_path, resources_root=tmp_path)

    with pytest.raises(ValueError):
        loader.load()
