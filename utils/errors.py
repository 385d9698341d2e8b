"""
utils/errors.py
봇 전역 예외 정의

- TransportError:     AniList 조회 / 텔레그램 발송 실패 (네트워크·응답 파싱 오류)
                      항상 호출부에서 로그 후 복구 — 스케줄은 계속 진행
- ConfigurationError: 필수 환경변수 누락 — 시작 시 즉시 종료
"""


class BotError(Exception):
    """봇 예외 공통 부모."""


class TransportError(BotError):
    """원격 API 조회 또는 채팅 발송 실패."""


class ConfigurationError(BotError, EnvironmentError):
    """필수 설정값 누락."""
