"""
config.py — 모든 설정값 중앙 관리
토큰은 절대 이 파일에 직접 입력하지 않는다.
Railway: 서버 Variables에 입력
로컬:    .env 파일에 입력 (git 업로드 금지)

[수정이력]
- v1.0: TELEGRAM_TOKEN / TELEGRAM_CHAT_ID / ANILIST_API
- v1.1: 주간 알림 시각(일요일 23:16 JST = 14:16 UTC) 상수화
- v1.2: HTTP_TIMEOUT_SEC 추가 — AniList 응답 지연 시 폴링 작업 무한 대기 방지
"""

import os
from dotenv import load_dotenv

from utils.errors import ConfigurationError

load_dotenv()

# ── 토큰 / 채널 (환경변수에서만 읽음) ─────────────────────────
TELEGRAM_TOKEN    = os.environ.get("TELEGRAM_TOKEN")
TELEGRAM_CHAT_ID  = os.environ.get("TELEGRAM_CHAT_ID")

# AniList GraphQL 엔드포인트 — 미설정 시 공개 엔드포인트 사용
DEFAULT_ANILIST_API = "https://graphql.anilist.co"
ANILIST_API         = os.environ.get("ANILIST_API") or DEFAULT_ANILIST_API


# ── 시작 시 키 누락 여부 체크 ─────────────────────────────────
def validate_env():
    required = {
        "TELEGRAM_TOKEN":   TELEGRAM_TOKEN,
        "TELEGRAM_CHAT_ID": TELEGRAM_CHAT_ID,
    }
    missing = [k for k, v in required.items() if not v]
    if missing:
        raise ConfigurationError(f"[config] 필수 환경변수 누락: {missing}")

    if not os.environ.get("ANILIST_API"):
        print(f"[config] ANILIST_API 없음 — 기본 엔드포인트 사용 ({DEFAULT_ANILIST_API})")


# ── 추적 대상 (단일 작품 고정) ────────────────────────────────
MEDIA_ID    = 21                                           # AniList One Piece
MEDIA_NAME  = "One Piece"
MEDIA_URL   = "https://anilist.co/anime/21/One-Piece/"

# ── 폴링 간격 ────────────────────────────────────────────────
# 시작 직후 1회 + 이후 15분마다
POLL_INTERVAL_MIN = 15

# ── 주간 알림 (일요일 23:16 JST) ──────────────────────────────
# JST는 UTC+9 → 14:16 UTC. 서버 타임존과 무관하게 UTC 기준으로 계산
WEEKLY_ALARM_WEEKDAY    = 6    # datetime.weekday(): 0=월 ... 6=일
WEEKLY_ALARM_HOUR_UTC   = 14
WEEKLY_ALARM_MINUTE_UTC = 16

# ── HTTP ─────────────────────────────────────────────────────
HTTP_TIMEOUT_SEC = int(os.environ.get("HTTP_TIMEOUT_SEC", "10"))

# ── 텔레그램 명령어 ───────────────────────────────────────────
COMMAND_NAME        = "onepiece"
COMMAND_DESCRIPTION = "Get the time until the next One Piece episode airs"
