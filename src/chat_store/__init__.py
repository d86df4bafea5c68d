"""
목적: chat_store 패키지 루트를 정의한다.
설명: 채팅 도메인 저장소 계층(스토리지 컨텍스트, 저장소)을 제공한다.
디자인 패턴: 패키지 루트
참조: src/chat_store/core/chat/repositories, src/chat_store/integrations/storage
"""

__version__ = "0.1.0"
