"""
tests/test_episode_tracker.py
tracking/episode_tracker.py 단위 테스트

[테스트 대상]
- resolve_current_episode() — nextAiringEpisode - 1 / 없으면 총 화수
- maybe_notify()            — 화당 최대 1회 Notify, 0 이하 항상 Skip
- 방영 시나리오 A~C

[실행 방법]
    python -m pytest tests/test_episode_tracker.py -v

[설계 원칙]
- 외부 의존성 없음 (순수 인메모리 상태)
- 각 테스트마다 NotificationState 새로 생성
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

os.environ.setdefault("TELEGRAM_TOKEN", "test")
os.environ.setdefault("TELEGRAM_CHAT_ID", "123")

from collectors.anilist_collector import MediaState, NextAiringEpisode
from tracking.episode_tracker import (
    SKIP,
    Notify,
    NotificationState,
    maybe_notify,
    resolve_current_episode,
)

FUTURE_TS = 1_900_000_000


def _media(next_ep: int | None = None, total: int = 0) -> MediaState:
    nxt = NextAiringEpisode(episode=next_ep, airing_at=FUTURE_TS) if next_ep else None
    return MediaState(media_id=21, title="One Piece", next_airing_episode=nxt, total_episodes=total)


class TestResolveCurrentEpisode(unittest.TestCase):

    def test_next_airing_minus_one(self):
        """다음 방영 1100화 → 현재 1099화"""
        self.assertEqual(resolve_current_episode(_media(next_ep=1100)), 1099)

    def test_next_airing_ignores_total(self):
        """nextAiringEpisode 가 있으면 총 화수 무시"""
        self.assertEqual(resolve_current_episode(_media(next_ep=10, total=500)), 9)

    def test_no_next_airing_uses_total(self):
        """다음 방영 없음 → 총 화수"""
        self.assertEqual(resolve_current_episode(_media(next_ep=None, total=1100)), 1100)

    def test_first_episode_upcoming_is_zero(self):
        """1화 방영 전 → 0 (현재 방영 화 없음)"""
        self.assertEqual(resolve_current_episode(_media(next_ep=1)), 0)

    def test_many_values(self):
        for e in (1, 2, 57, 1101):
            with self.subTest(e=e):
                self.assertEqual(resolve_current_episode(_media(next_ep=e)), e - 1)
        for n in (0, 1, 24, 1100):
            with self.subTest(n=n):
                self.assertEqual(resolve_current_episode(_media(total=n)), n)


class TestMaybeNotify(unittest.TestCase):

    def setUp(self):
        self.state = NotificationState()

    def test_initial_state_zero(self):
        self.assertEqual(self.state.last_episode_notified, 0)

    def test_new_episode_notifies_and_updates(self):
        decision = maybe_notify(5, self.state)
        self.assertEqual(decision, Notify(5))
        self.assertTrue(decision.notify)
        self.assertEqual(self.state.last_episode_notified, 5)

    def test_same_episode_twice_skips_second(self):
        """같은 입력 연속 → 첫 번째만 Notify"""
        self.assertEqual(maybe_notify(7, self.state), Notify(7))
        self.assertEqual(maybe_notify(7, self.state), SKIP)
        self.assertEqual(self.state.last_episode_notified, 7)

    def test_lower_episode_skips(self):
        self.state.last_episode_notified = 10
        self.assertEqual(maybe_notify(9, self.state), SKIP)
        self.assertEqual(self.state.last_episode_notified, 10)

    def test_zero_and_negative_always_skip(self):
        """0 / 음수 → 상태와 무관하게 Skip"""
        for last in (0, 3):
            for current in (0, -1, -100):
                with self.subTest(last=last, current=current):
                    state = NotificationState(last_episode_notified=last)
                    self.assertEqual(maybe_notify(current, state), SKIP)
                    self.assertEqual(state.last_episode_notified, last)

    def test_skip_has_no_episode(self):
        self.assertFalse(SKIP.notify)

    def test_at_most_once_per_episode(self):
        """비감소 입력 시퀀스 — 각 화는 최대 1회, 직전 최대값 초과 시에만 Notify"""
        inputs = [0, 0, 1, 1, 1, 2, 2, 5, 5, 5, 6, 6, 10]
        notified = []
        highest = 0
        for current in inputs:
            decision = maybe_notify(current, self.state)
            expected = current > highest and current > 0
            self.assertEqual(decision.notify, expected, msg=f"current={current}")
            if decision.notify:
                notified.append(decision.episode)
                highest = current
        self.assertEqual(notified, [1, 2, 5, 6, 10])
        self.assertEqual(len(notified), len(set(notified)))

    def test_jump_skips_intermediate(self):
        """폴링 누락으로 화수가 건너뛰면 최신 화만 알림"""
        maybe_notify(3, self.state)
        self.assertEqual(maybe_notify(5, self.state), Notify(5))
        self.assertEqual(maybe_notify(4, self.state), SKIP)


class TestAiringScenarios(unittest.TestCase):

    def test_scenario_a_then_b(self):
        """A: 다음 1100화, 마지막 알림 1098 → 1099 알림 / B: 같은 상태 재폴링 → Skip"""
        state = NotificationState(last_episode_notified=1098)
        media = _media(next_ep=1100)

        current = resolve_current_episode(media)
        self.assertEqual(current, 1099)
        self.assertEqual(maybe_notify(current, state), Notify(1099))
        self.assertEqual(state.last_episode_notified, 1099)

        self.assertEqual(maybe_notify(resolve_current_episode(media), state), SKIP)
        self.assertEqual(state.last_episode_notified, 1099)

    def test_scenario_c_finished_series(self):
        """C: 다음 방영 없음, 총 1100화, 마지막 알림 1099 → 1100 알림"""
        state = NotificationState(last_episode_notified=1099)
        current = resolve_current_episode(_media(next_ep=None, total=1100))
        self.assertEqual(current, 1100)
        self.assertEqual(maybe_notify(current, state), Notify(1100))


if __name__ == "__main__":
    unittest.main()
