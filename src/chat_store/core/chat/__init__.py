"""
목적: 채팅 도메인 패키지를 제공한다.
설명: 세션/메시지/참여자/사용자 설정 엔티티와 각 저장소를 포함한다.
디자인 패턴: 패키지 퍼사드
참조: src/chat_store/core/chat/models/entities.py, src/chat_store/core/chat/repositories/__init__.py
"""
