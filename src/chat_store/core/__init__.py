"""
목적: 도메인 코어 패키지를 제공한다.
설명: 채팅 도메인 엔티티와 저장소(Repository)를 하위 패키지로 구성한다.
디자인 패턴: 패키지 퍼사드
참조: src/chat_store/core/chat/__init__.py
"""
