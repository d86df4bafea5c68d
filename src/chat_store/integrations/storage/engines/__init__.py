"""
목적: 저장소 백엔드 구현 패키지를 제공한다.
설명: volatile(인메모리), filesystem(JSON 파일), cosmos(Azure Cosmos DB) 컨텍스트를 포함한다.
디자인 패턴: 전략 패턴
참조: src/chat_store/integrations/storage/base/context.py
"""
