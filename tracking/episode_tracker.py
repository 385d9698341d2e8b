"""
tracking/episode_tracker.py
현재 방영 화 판단 + 중복 알림 방지 전담

- resolve_current_episode(): MediaState → 현재 방영(최근 방영) 화 번호
- maybe_notify():            알림 여부 판단 + 마지막 알림 화 갱신
- NotificationState:         마지막 알림 화 (프로세스 수명 동안만 유지, 재시작 시 0)

[규칙]
- 한 프로세스에서 같은 화(>0)는 최대 1회만 Notify
- Notify 판정 즉시 상태 갱신 — 이후 발송이 실패해도 되돌리지 않음 (재시도 없음)
- 0 이하 화는 항상 Skip (1화 방영 전 = "현재 방영 화 없음")

[ARCHITECTURE 의존성]
reports/airing_alert → episode_tracker (폴링 + 주간 알림)
notifiers/telegram_interactive 는 사용하지 않음 (/onepiece 는 상태 무관)
"""

from dataclasses import dataclass

from collectors.anilist_collector import MediaState


def resolve_current_episode(state: MediaState) -> int:
    """
    AniList nextAiringEpisode 는 "다음에 방영할 화" → 현재 화는 그 직전.
    다음 방영 일정이 없으면(완결/휴방) 총 화수가 현재 화.
    """
    nxt = state.next_airing_episode
    if nxt is not None:
        return nxt.episode - 1
    return state.total_episodes


@dataclass
class NotificationState:
    last_episode_notified: int = 0


@dataclass(frozen=True)
class NotifyDecision:
    notify:  bool
    episode: int = 0


SKIP = NotifyDecision(notify=False)


def Notify(episode: int) -> NotifyDecision:
    return NotifyDecision(notify=True, episode=episode)


def maybe_notify(current_episode: int, state: NotificationState) -> NotifyDecision:
    """True면 알림 발송 대상. 발송 전에 상태가 먼저 갱신된다."""
    if current_episode > 0 and current_episode > state.last_episode_notified:
        state.last_episode_notified = current_episode
        return Notify(current_episode)
    return SKIP
