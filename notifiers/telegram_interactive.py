"""
notifiers/telegram_interactive.py
텔레그램 인터랙티브 명령어 처리

[지원 명령어]
- /onepiece — 다음 화 방영까지 남은 시간 (인자 없음, 응답 1회)

[아키텍처]
- python-telegram-bot Application + CommandHandler 기반 롱폴링
- main.py에서 asyncio.create_task()로 백그라운드 실행
- 매 호출 실시간 AniList 조회 (캐시 없음)
- NotificationState 와 무관 — 조회 + 포맷만 담당
- 조회 실패 시 "❌" 응답 + 로그만 남김 (명령어를 무응답으로 두지 않음)

[ARCHITECTURE 의존성]
telegram_interactive → collectors/anilist_collector (fetch_media_state_async)
telegram_interactive → notifiers/telegram_bot       (format_* 응답 문구)
telegram_interactive ← main.py (start_interactive_handler 호출)
"""

import asyncio

import config
import notifiers.telegram_bot as telegram_bot
from collectors.anilist_collector import MediaState, fetch_media_state_async
from utils.date_utils import format_countdown, now_ms as _now_ms
from utils.logger import logger


def build_countdown_reply(state: MediaState, now_ms: int) -> str:
    """/onepiece 응답 문구. now_ms 기준 다음 화까지 남은 시간."""
    nxt = state.next_airing_episode
    if nxt is None:
        return telegram_bot.format_no_upcoming()

    delta_ms = nxt.airing_at * 1000 - now_ms
    return telegram_bot.format_countdown_reply(nxt.episode, format_countdown(delta_ms))


async def _cmd_onepiece(update, context) -> None:
    """/onepiece — 다음 화까지 남은 시간"""
    try:
        state = await fetch_media_state_async()
        msg = build_countdown_reply(state, _now_ms())
    except Exception as e:
        logger.error(f"[interactive] /{config.COMMAND_NAME} 조회 실패: {e}")
        msg = telegram_bot.format_fetch_failed()
    await update.message.reply_text(msg, parse_mode="HTML")


async def _register_commands(app) -> None:
    """명령어 메뉴 등록 + 로그인 계정 로그."""
    from telegram import BotCommand

    await app.bot.set_my_commands(
        [BotCommand(config.COMMAND_NAME, config.COMMAND_DESCRIPTION)]
    )
    me = await app.bot.get_me()
    logger.info(f"[interactive] Logged in as @{me.username}")


async def start_interactive_handler() -> None:
    """
    텔레그램 인터랙티브 명령어 핸들러 시작.
    main.py에서 asyncio.create_task()로 호출.

    python-telegram-bot의 Application을 현재 asyncio 루프에 통합.
    별도 루프 생성 없이 기존 AsyncIOScheduler 루프에 공존.
    기동 실패(토큰 오류 / 네트워크 오류)는 로그만 남기고 종료 — 폴링·주간 알림은 계속 동작.
    """
    app = None
    initialized = started = False
    try:
        from telegram.ext import ApplicationBuilder, CommandHandler as TGCommandHandler

        app = (
            ApplicationBuilder()
            .token(config.TELEGRAM_TOKEN)
            .build()
        )
        app.add_handler(TGCommandHandler(config.COMMAND_NAME, _cmd_onepiece))

        await app.initialize()
        initialized = True
        try:
            await _register_commands(app)
        except Exception as e:
            logger.warning(f"[interactive] 명령어 메뉴 등록 실패 (비치명적): {e}")

        await app.start()
        started = True
        await app.updater.start_polling(
            allowed_updates=["message"],
            drop_pending_updates=True,
        )
        logger.info(f"[interactive] 텔레그램 명령어 핸들러 시작 (/{config.COMMAND_NAME})")

        # 무한 대기 (main.py의 while True와 공존)
        while True:
            await asyncio.sleep(3600)

    except Exception as e:
        logger.error(f"[interactive] 핸들러 실행 오류 — /{config.COMMAND_NAME} 비활성: {e}")
    finally:
        try:
            if started:
                if app.updater.running:
                    await app.updater.stop()
                await app.stop()
            if initialized:
                await app.shutdown()
        except Exception as e:
            logger.warning(f"[interactive] 핸들러 종료 정리 실패: {e}")
