"""
notifiers/telegram_bot.py
텔레그램 메시지 포맷 + 발송 전담
- 판단 로직 없음, 포맷 + 발송만

[수정이력]
- v1.0: format_airing_alert() — 폴링 중 새 화 감지 알림
- v1.1: format_weekly_live() — 일요일 23:16 JST 주간 알림
- v1.2: format_countdown_reply() / format_no_upcoming() / format_fetch_failed()
        /onepiece 응답 문구를 이 파일로 일원화
- v1.3: 발송 실패(TelegramError) → TransportError 로 변환
        호출부(airing_alert)는 TransportError 하나만 처리
"""

from telegram import Bot
from telegram.error import TelegramError

import config
from utils.errors import TransportError
from utils.logger import logger


async def _send(text: str) -> None:
    bot = Bot(token=config.TELEGRAM_TOKEN)
    async with bot:
        await bot.send_message(
            chat_id=config.TELEGRAM_CHAT_ID,
            text=text,
            parse_mode="HTML",
        )


async def send_async(text: str) -> None:
    """설정된 채널로 발송. 실패 시 TransportError."""
    try:
        await _send(text)
    except TelegramError as e:
        raise TransportError(f"[telegram] 발송 실패: {e}") from e
    logger.info(f"[telegram] 발송 완료 — {text.splitlines()[0][:60]}")


# ══════════════════════════════════════════════════════════════
# 메시지 포맷
# ══════════════════════════════════════════════════════════════

def format_airing_alert(episode: int) -> str:
    return (
        f"🦜 <b>{config.MEDIA_NAME} Episode {episode} is now airing!</b>\n"
        f"Set sail for adventure! {config.MEDIA_URL}"
    )


def format_weekly_live(episode: int) -> str:
    """주간 알림 — 중복 방지 상태와 무관하게 매주 발송."""
    return (
        f"🦜 <b>{config.MEDIA_NAME} Episode {episode} is now live!</b>\n"
        f"It's 11:16pm JST Sunday! Set sail for adventure! {config.MEDIA_URL}"
    )


def format_countdown_reply(episode: int, countdown: str) -> str:
    return f"🕒 <b>Next {config.MEDIA_NAME} Episode ({episode}) airs in:</b> {countdown}!"


def format_no_upcoming() -> str:
    return f"🚨 No upcoming episodes found for {config.MEDIA_NAME}."


def format_fetch_failed() -> str:
    return "❌ An error occurred while fetching the next episode."
