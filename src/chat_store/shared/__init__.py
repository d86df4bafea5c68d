"""
목적: 공통 모듈 패키지를 정의한다.
설명: 상수/로깅/예외/설정 모듈을 하위 패키지로 제공한다.
디자인 패턴: 패키지 루트
참조: src/chat_store/shared/logging, src/chat_store/shared/exceptions
"""
