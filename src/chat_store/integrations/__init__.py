"""
목적: 외부 저장소 통합 패키지를 제공한다.
설명: 저장소 백엔드 구현과 공통 계약을 하위 패키지로 구성한다.
디자인 패턴: 패키지 퍼사드
참조: src/chat_store/integrations/storage/__init__.py
"""
