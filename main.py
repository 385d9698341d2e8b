"""
main.py
봇 진입점 — 스케줄러 설정만 담당
로직 없음. 실제 작업은 reports/airing_alert.py, notifiers/telegram_interactive.py

실행: python main.py

[스케줄]
- 방영 폴링:  시작 즉시 1회 + 15분마다 (AsyncIOScheduler interval)
- 주간 알림:  매주 일요일 23:16 JST (14:16 UTC) — airing_alert.weekly_alarm_loop()
- /onepiece: 텔레그램 롱폴링 — telegram_interactive.start_interactive_handler()

[수정이력]
- v1.1: 주간 알림을 setTimeout 식 자기 재예약 → 명시적 루프(weekly_alarm_loop)로 변경
- v1.2: NotificationState 를 전역 변수 대신 main() 에서 생성해 폴링 작업에 전달
- v1.3: 폴링 job max_instances=1 / coalesce — AniList 지연 시 폴링 중첩 방지
"""

import asyncio
import sys

from apscheduler.schedulers.asyncio import AsyncIOScheduler

import config
from tracking.episode_tracker import NotificationState
from utils.date_utils import UTC, get_now
from utils.errors import ConfigurationError
from utils.logger import logger


def setup_scheduler(state: NotificationState) -> AsyncIOScheduler:
    """폴링 job 등록된 스케줄러 반환 (start 는 호출부에서)."""
    from reports.airing_alert import check_airing

    scheduler = AsyncIOScheduler(timezone=UTC)
    scheduler.add_job(
        check_airing, "interval",
        minutes=config.POLL_INTERVAL_MIN,
        args=[state],
        next_run_time=get_now(),   # 시작 즉시 1회
        max_instances=1,
        coalesce=True,
        id="airing_poll",
    )
    logger.info(f"[main] 방영 폴링 스케줄 등록 — 즉시 1회 + {config.POLL_INTERVAL_MIN}분마다")
    return scheduler


async def main():
    config.validate_env()

    logger.info("=" * 40)
    logger.info(f"{config.MEDIA_NAME} 방영 알림 봇 시작")
    logger.info("=" * 40)

    state = NotificationState()
    scheduler = setup_scheduler(state)
    scheduler.start()

    from reports.airing_alert import weekly_alarm_loop
    weekly_task = asyncio.create_task(weekly_alarm_loop())
    logger.info(
        f"[main] 주간 알림 루프 시작 — 매주 일요일 "
        f"{config.WEEKLY_ALARM_HOUR_UTC:02d}:{config.WEEKLY_ALARM_MINUTE_UTC:02d} UTC"
    )

    from notifiers.telegram_interactive import start_interactive_handler
    interactive_task = asyncio.create_task(start_interactive_handler())

    try:
        while True:
            await asyncio.sleep(3600)
    except (KeyboardInterrupt, SystemExit, asyncio.CancelledError):
        logger.info("봇 종료")
        scheduler.shutdown(wait=False)
        for task in (weekly_task, interactive_task):
            task.cancel()


def run() -> None:
    """프로세스 진입점. 필수 설정 누락 시 종료 코드 1."""
    try:
        asyncio.run(main())
    except ConfigurationError as e:
        logger.critical(str(e))
        sys.exit(1)


if __name__ == "__main__":
    run()
