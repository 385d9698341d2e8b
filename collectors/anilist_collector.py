"""
collectors/anilist_collector.py
AniList GraphQL 조회 전담 — One Piece 방영 상태 1회 조회 → MediaState 반환

[반환값]
fetch_media_state() → MediaState:
  media_id:            int                       # 21 고정
  title:               str                       # title.romaji
  next_airing_episode: NextAiringEpisode | None  # 다음 "방영 예정" 화 (현재 방영 화 아님)
  total_episodes:      int                       # episodes (null → 0)

[규칙]
- 캐시 없음 — 호출할 때마다 실시간 조회
- 네트워크 오류 / HTTP 오류 / JSON 형식 불일치 → 전부 TransportError
- 재시도 없음 (다음 폴링 주기가 대체)

[수정이력]
- v1.0: requests.post 단순 조회 (응답 dict 그대로 사용)
- v1.1: pydantic 모델 검증 도입 — 응답 형식이 바뀌면 KeyError 대신 TransportError
- v1.2: timeout 명시 (config.HTTP_TIMEOUT_SEC)
- v1.3: 응답 envelope(data / errors) 타입 검사 + media id 불일치 시 TransportError
"""

import asyncio

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

import config
from utils.errors import TransportError
from utils.logger import logger

MEDIA_QUERY = f"""
query {{
  Media(id: {config.MEDIA_ID}, type: ANIME) {{
    id
    title {{ romaji }}
    nextAiringEpisode {{
      episode
      airingAt
    }}
    episodes
  }}
}}
"""


class NextAiringEpisode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    episode:   int = Field(..., ge=1)
    airing_at: int = Field(..., alias="airingAt")   # epoch 초


class MediaState(BaseModel):
    """1회 조회 결과 (불변)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    media_id:            int = Field(..., alias="id")
    title:               str
    next_airing_episode: NextAiringEpisode | None = Field(None, alias="nextAiringEpisode")
    total_episodes:      int = Field(0, alias="episodes")

    @field_validator("title", mode="before")
    @classmethod
    def _romaji_title(cls, v):
        # AniList: title { romaji }
        if isinstance(v, dict):
            return v.get("romaji")
        return v

    @field_validator("total_episodes", mode="before")
    @classmethod
    def _null_episodes(cls, v):
        # 방영 중인 작품은 episodes=null
        return 0 if v is None else v


def parse_media_state(payload) -> MediaState:
    """AniList 응답 JSON → MediaState. 형식 불일치 시 TransportError."""
    if not isinstance(payload, dict):
        raise TransportError(f"[anilist] 응답 형식 오류: {type(payload).__name__}")

    errors = payload.get("errors")
    if errors:
        if not isinstance(errors, list):
            raise TransportError(f"[anilist] errors 형식 오류: {type(errors).__name__}")
        messages = [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors]
        raise TransportError(f"[anilist] GraphQL 오류: {messages}")

    data = payload.get("data")
    if not isinstance(data, dict) or data.get("Media") is None:
        raise TransportError("[anilist] 응답에 data.Media 없음")

    try:
        state = MediaState.model_validate(data["Media"])
    except ValidationError as e:
        raise TransportError(f"[anilist] Media 스키마 불일치: {e.error_count()}건") from e

    if state.media_id != config.MEDIA_ID:
        raise TransportError(f"[anilist] 다른 작품 응답: id={state.media_id} (기대 {config.MEDIA_ID})")
    return state


def fetch_media_state() -> MediaState:
    """AniList 1회 조회 (동기). 실패 시 TransportError."""
    try:
        resp = requests.post(
            config.ANILIST_API,
            json={"query": MEDIA_QUERY},
            headers={"Content-Type": "application/json"},
            timeout=config.HTTP_TIMEOUT_SEC,
        )
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        # JSON 디코드 실패(requests.JSONDecodeError)도 RequestException 하위
        raise TransportError(f"[anilist] 조회 실패: {e}") from e

    state = parse_media_state(payload)
    nxt = state.next_airing_episode
    logger.debug(
        f"[anilist] {state.title} — 다음화: "
        f"{f'{nxt.episode}화 @ {nxt.airing_at}' if nxt else '없음'} / 총 {state.total_episodes}화"
    )
    return state


async def fetch_media_state_async() -> MediaState:
    """이벤트 루프 블로킹 방지 — 기본 executor에서 fetch_media_state 실행."""
    return await asyncio.get_running_loop().run_in_executor(None, fetch_media_state)
