"""
목적: Azure Cosmos DB 연결 관리 모듈을 제공한다.
설명: 비동기 CosmosClient 하나의 생성/종료와 컨테이너 프록시 조회를 담당한다.
      연결은 호출자가 명시적으로 만들고 닫으며, 컨텍스트들은 참조로 공유한다.
디자인 패턴: 매니저 패턴
참조: src/chat_store/integrations/storage/engines/cosmos/context.py
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient

from chat_store.shared.logging import Logger, create_default_logger


def _client_from_connection_string(connection_string: str) -> Any:
    return CosmosClient.from_connection_string(connection_string)


class CosmosConnection:
    """Cosmos DB 연결 관리자.

    Args:
        connection_string: Cosmos DB 연결 문자열.
        database: 데이터베이스 이름.
        logger: 주입 가능한 로거.
        client_factory: 연결 문자열로 클라이언트를 만드는 함수(테스트 주입용).
    """

    def __init__(
        self,
        connection_string: str,
        database: str,
        logger: Optional[Logger] = None,
        client_factory: Optional[Callable[[str], Any]] = None,
    ) -> None:
        if not connection_string or not connection_string.strip():
            raise ValueError("connection_string은 비어 있을 수 없습니다.")
        if not database or not database.strip():
            raise ValueError("database는 비어 있을 수 없습니다.")
        self._connection_string = connection_string
        self._database_name = database
        self._logger = logger or create_default_logger("CosmosConnection")
        self._client_factory = client_factory or _client_from_connection_string
        self._client: Any | None = None
        self._database: Any | None = None
        self._containers: Dict[str, Any] = {}

    @property
    def database_name(self) -> str:
        return self._database_name

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """클라이언트를 생성하고 데이터베이스 프록시를 준비한다."""

        if self._client is not None:
            return
        self._client = self._client_factory(self._connection_string)
        self._database = self._client.get_database_client(self._database_name)
        self._logger.info(f"Cosmos DB 연결이 초기화되었습니다: database={self._database_name}")

    async def close(self) -> None:
        """클라이언트를 종료한다. 여러 번 호출해도 안전하다."""

        if self._client is None:
            return
        client = self._client
        self._client = None
        self._database = None
        self._containers.clear()
        await client.close()
        self._logger.info("Cosmos DB 연결이 종료되었습니다.")

    async def ensure_container(self, name: str, partition_key_path: str) -> Any:
        """컨테이너가 없으면 파티션 키 경로와 함께 생성하고 프록시를 반환한다."""

        database = self._ensure_database()
        container = await database.create_container_if_not_exists(
            id=name,
            partition_key=PartitionKey(path=partition_key_path),
        )
        self._containers[name] = container
        self._logger.debug(f"Cosmos 컨테이너 준비 완료: {name} ({partition_key_path})")
        return container

    def get_container(self, name: str) -> Any:
        """컨테이너 프록시를 반환한다."""

        database = self._ensure_database()
        container = self._containers.get(name)
        if container is None:
            container = database.get_container_client(name)
            self._containers[name] = container
        return container

    def _ensure_database(self) -> Any:
        if self._database is None:
            raise RuntimeError("Cosmos DB 연결이 초기화되지 않았습니다.")
        return self._database

    async def __aenter__(self) -> "CosmosConnection":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
