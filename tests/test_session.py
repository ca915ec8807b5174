import asyncio
import random

import pytest

from zlodej import Discard, GameConfig, GameSession, new_game, start_game


def _session(first_player: int, ai_delay: float = 0.0) -> GameSession:
    cfg = GameConfig(players=[("H", "You"), ("AI", "Bot")], ai_tier=1)
    state = new_game(cfg, random.Random(8))
    start_game(state, first_player=first_player)
    return GameSession(state, ai_delay=ai_delay, rng=random.Random(8))


def test_submit_plays_human_turn():
    session = _session(0)
    card = session.state.players[0].hand[0]
    res = session.submit(0, Discard(card.id))
    assert res.ok
    assert session.state.current_idx == 1
    assert session.ai_on_turn()


def test_drive_ai_stops_at_human_turn():
    session = _session(1)
    results = asyncio.run(session.drive_ai())
    assert len(results) == 1 and results[0].ok
    assert session.state.current_idx == 0
    assert session.state.explain is not None


def test_schedule_ai_does_nothing_on_human_turn():
    async def run():
        session = _session(0)
        assert session.schedule_ai() is None
        assert not session.busy

    asyncio.run(run())


def test_submit_is_refused_while_ai_is_pending_and_cancel_keeps_state():
    async def run():
        session = _session(1, ai_delay=60.0)
        hand_before = list(session.state.players[1].hand)
        task = session.schedule_ai()
        assert task is not None and session.busy
        assert session.schedule_ai() is task

        res = session.submit(0, Discard(session.state.players[0].hand[0].id))
        assert not res.ok and res.code == "ai_thinking"

        session.cancel_ai()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert task.cancelled()
        assert not session.busy
        assert session.state.current_idx == 1
        assert session.state.players[1].hand == hand_before

    asyncio.run(run())


def test_scheduled_ai_turn_completes():
    async def run():
        session = _session(1, ai_delay=0.01)
        task = session.schedule_ai()
        assert task is not None
        results = await task
        assert [r.ok for r in results] == [True]
        assert not session.busy
        assert session.state.current_idx == 0

    asyncio.run(run())


def test_submit_refuses_ai_seat_on_turn():
    session = _session(1)
    bot = session.state.players[1]
    res = session.submit(1, Discard(bot.hand[0].id))
    assert not res.ok and res.code == "ai_seat"
    assert session.state.current_idx == 1
