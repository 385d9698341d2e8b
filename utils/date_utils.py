"""
utils/date_utils.py
시각 계산 전담
- 주간 알림(일요일 23:16 JST) 다음 발생 시각 계산
- 다음 화 방영까지 남은 시간 포맷

[수정이력]
- v1.0: 기본 구조
- v1.1: get_now() — UTC 타임존 명시 적용 (Railway UTC 서버 / 로컬 KST PC 차이 제거)
        naive datetime.now() 사용 시 로컬 PC에서 주간 알림이 9시간 어긋나는 버그 수정.
- v1.2: next_weekly_alarm() — 매 발송 후 벽시계 기준으로 재계산
        고정 7일 주기 sleep은 스케줄 지연이 누적되어 알림 시각이 밀림.
"""

from datetime import datetime, timedelta, timezone

import config

UTC = timezone.utc
JST = timezone(timedelta(hours=9))   # UTC+9, 외부 패키지 불필요

MS_PER_DAY    = 86_400_000
MS_PER_HOUR   = 3_600_000
MS_PER_MINUTE = 60_000


def get_now() -> datetime:
    """현재 시각 UTC로 반환."""
    return datetime.now(UTC)


def now_ms() -> int:
    """현재 epoch 밀리초."""
    return int(get_now().timestamp() * 1000)


def next_weekly_alarm(now: datetime = None) -> datetime:
    """
    now 이후(포함) 가장 가까운 일요일 14:16 UTC 반환.
    일요일이라도 14:16 이 이미 지났으면(14:16 정각 포함) 다음 주 일요일.
    """
    if now is None:
        now = get_now()
    now = now.astimezone(UTC)

    days_ahead = (config.WEEKLY_ALARM_WEEKDAY - now.weekday()) % 7
    alarm_minutes = config.WEEKLY_ALARM_HOUR_UTC * 60 + config.WEEKLY_ALARM_MINUTE_UTC
    if days_ahead == 0 and now.hour * 60 + now.minute >= alarm_minutes:
        days_ahead = 7

    target = (now + timedelta(days=days_ahead)).replace(
        hour=config.WEEKLY_ALARM_HOUR_UTC,
        minute=config.WEEKLY_ALARM_MINUTE_UTC,
        second=0,
        microsecond=0,
    )
    return target


def seconds_until(target: datetime, now: datetime = None) -> float:
    """target 까지 남은 초 (이미 지났으면 0)."""
    if now is None:
        now = get_now()
    return max((target - now).total_seconds(), 0.0)


def split_duration(delta_ms: int) -> tuple[int, int, int]:
    """밀리초 → (일, 시간, 분). 초 이하는 버림, 이미 지난 시각(음수)은 전부 0."""
    delta_ms = max(delta_ms, 0)
    days    = delta_ms // MS_PER_DAY
    hours   = (delta_ms % MS_PER_DAY) // MS_PER_HOUR
    minutes = (delta_ms % MS_PER_HOUR) // MS_PER_MINUTE
    return days, hours, minutes


def format_countdown(delta_ms: int) -> str:
    """
    남은 시간 문자열. 0 보다 큰 단위만 표시, 일→시→분 순서.
    90_061_000ms → "1d 1h 1m"
    1분 미만      → ""
    """
    days, hours, minutes = split_duration(delta_ms)
    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    return " ".join(parts)
