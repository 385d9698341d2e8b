"""
reports/airing_alert.py
방영 알림 실행 전담

[작업 2종 — 서로 독립]
- check_airing():      15분 폴링 1회분. 조회 → 현재 화 판단 → 중복 방지 → 발송
                       main.py 의 AsyncIOScheduler interval job 으로 실행
- weekly_alarm_loop(): 일요일 23:16 JST(14:16 UTC) 주간 알림 루프
                       매 회차마다 벽시계 기준으로 다음 시각 재계산 → sleep → 발송 → 반복
                       중복 방지 상태(NotificationState)를 보지 않고 무조건 발송

[규칙]
- 두 작업 모두 예외를 밖으로 던지지 않음 — 로그 후 다음 주기 진행
- 발송 실패 시 재시도 없음 (상태는 이미 갱신됨, 다음 화에서 다시 알림)

[ARCHITECTURE 의존성]
airing_alert → collectors/anilist_collector (fetch_media_state_async)
airing_alert → tracking/episode_tracker     (resolve_current_episode, maybe_notify)
airing_alert → notifiers/telegram_bot       (send_async, format_*)
airing_alert ← main.py
"""

import asyncio

import notifiers.telegram_bot as telegram_bot
from collectors.anilist_collector import fetch_media_state_async
from tracking.episode_tracker import NotificationState, NotifyDecision, SKIP, maybe_notify, resolve_current_episode
from utils.date_utils import get_now, next_weekly_alarm, seconds_until
from utils.logger import logger


async def check_airing(state: NotificationState) -> NotifyDecision:
    """폴링 1회. 판정 결과 반환 (조회 실패 시 SKIP)."""
    try:
        media = await fetch_media_state_async()
    except Exception as e:
        logger.error(f"[airing] 방영 상태 조회 실패: {e}")
        return SKIP

    current = resolve_current_episode(media)
    decision = maybe_notify(current, state)
    if not decision.notify:
        logger.info(
            f"[airing] 현재 {current}화 — 알림 건너뜀 "
            f"(마지막 알림 {state.last_episode_notified}화)"
        )
        return decision

    logger.info(f"[airing] 새 화 감지 — {decision.episode}화 알림 발송")
    try:
        await telegram_bot.send_async(telegram_bot.format_airing_alert(decision.episode))
    except Exception as e:
        logger.error(f"[airing] {decision.episode}화 알림 발송 실패 (재시도 없음): {e}")
    return decision


async def send_weekly_live() -> bool:
    """주간 알림 1회. 중복 방지 없이 무조건 발송. 성공 여부 반환."""
    try:
        media = await fetch_media_state_async()
        current = resolve_current_episode(media)
        await telegram_bot.send_async(telegram_bot.format_weekly_live(current))
    except Exception as e:
        logger.error(f"[weekly] 주간 알림 발송 실패: {e}")
        return False
    logger.info(f"[weekly] 주간 알림 발송 완료 — {current}화")
    return True


async def weekly_alarm_loop() -> None:
    """
    주간 알림 루프. main.py 에서 asyncio.create_task() 로 실행.
    고정 7일 sleep 대신 매번 다음 일요일 14:16 UTC 를 다시 계산한다.
    """
    fired_at = None
    while True:
        now = get_now()
        if fired_at is not None and now < fired_at:
            # sleep 이 벽시계보다 일찍 깨어나도 같은 회차 중복 발송 금지
            now = fired_at
        target = next_weekly_alarm(now)
        delay = seconds_until(target, now)
        logger.info(f"[weekly] 다음 주간 알림: {target.isoformat()} ({delay / 3600:.1f}시간 후)")
        await asyncio.sleep(delay)
        fired_at = target
        await send_weekly_live()
