from itertools import count
from typing import List, Optional
import random

from zlodej import (
    CARD_VALUES,
    JOKER,
    Card,
    Discard,
    GameConfig,
    GameState,
    PlayToScorePile,
    Steal,
    TakeDiscard,
    ai_decide,
    new_game,
)

_ids = count(3000)


def _c(rank: str, suit: str = "♥") -> Card:
    if rank == JOKER:
        return Card(None, JOKER, CARD_VALUES[JOKER], next(_ids))
    return Card(suit, rank, CARD_VALUES[rank], next(_ids))


def _table(hand: List[Card], tier: int, steal_p: float = 0.65, victim_pile: Optional[List[List[Card]]] = None) -> GameState:
    cfg = GameConfig(players=[("AI", "Bot"), ("H", "You")], ai_tier=tier, ai_steal_probability=steal_p)
    state = new_game(cfg, random.Random(11))
    state.players[0].hand = list(hand)
    for g in victim_pile or []:
        state.players[1].pile.push(g)
    state.phase = "playing"
    state.current_idx = 0
    state.current_hand_size = 6
    return state


def test_every_tier_completes_a_pledge():
    for tier in (1, 2, 3):
        a, b, ace = _c("7"), _c("7"), _c("A")
        state = _table([b, ace], tier)
        state.players[0].pile.push([a])
        cmd, info = ai_decide(state)
        assert cmd == PlayToScorePile(b.id)
        assert "complete" in info.pick_reason


def test_tier_one_never_steals():
    nine = _c("9")
    state = _table([nine], 1, victim_pile=[[_c("9"), _c("9")]])
    for seed in range(20):
        cmd, _ = ai_decide(state, random.Random(seed))
        assert cmd == Discard(nine.id)


def test_tier_two_steals_depending_on_roll():
    nine = _c("9")
    state = _table([nine], 2, steal_p=1.0, victim_pile=[[_c("9"), _c("9")]])
    cmd, _ = ai_decide(state, random.Random(0))
    assert cmd == Steal(nine.id, 1)

    state.cfg.ai_steal_probability = 0.0
    cmd, _ = ai_decide(state, random.Random(0))
    assert cmd == Discard(nine.id)


def test_tier_three_steals_when_it_is_the_best_gain():
    nine, two = _c("9"), _c("2")
    state = _table([nine, two], 3, victim_pile=[[_c("9"), _c("9")]])
    cmd, info = ai_decide(state, random.Random(0))
    assert cmd == Steal(nine.id, 1)
    assert "steal" in info.pick_reason


def test_tier_three_prefers_bigger_pledge_over_small_steal():
    a1, a2, nine = _c("A"), _c("A"), _c("9")
    state = _table([a1, a2, nine], 3, victim_pile=[[_c("9"), _c("9")]])
    cmd, _ = ai_decide(state, random.Random(0))
    assert isinstance(cmd, PlayToScorePile)
    assert cmd.force_new
    assert cmd.card_id in (a1.id, a2.id)


def test_tier_three_extends_own_group():
    k = _c("K")
    state = _table([k, _c("3")], 3)
    state.players[0].pile.push([_c("K"), _c("K")])
    cmd, _ = ai_decide(state, random.Random(0))
    assert cmd == PlayToScorePile(k.id)


def test_tier_three_discards_cheapest_without_gain():
    ace, five = _c("A"), _c("5")
    state = _table([ace, five], 3)
    cmd, info = ai_decide(state, random.Random(0))
    assert cmd == Discard(five.id)
    assert "discard" in info.pick_reason


def test_take_from_discard_when_top_matches():
    k, two = _c("K"), _c("2")
    for tier in (1, 2, 3):
        state = _table([k, two], tier)
        state.discard_pile.append(_c("K", "♣"))
        cmd, _ = ai_decide(state, random.Random(0))
        assert cmd == TakeDiscard(k.id)


def test_joker_is_not_offered_against_joker_on_discard():
    joker, four = _c(JOKER), _c("4")
    state = _table([joker, four], 1)
    state.discard_pile.append(_c(JOKER))
    cmd, info = ai_decide(state, random.Random(0))
    assert cmd == TakeDiscard(four.id)
    assert all(ce.card_id != joker.id or ce.kind != "take" for ce in info.topK)


def test_ties_are_broken_randomly():
    a, b = _c("J", "♠"), _c("Q", "♣")
    state = _table([a, b], 1)
    picks = set()
    for seed in range(40):
        cmd, _ = ai_decide(state, random.Random(seed))
        assert isinstance(cmd, Discard)
        picks.add(cmd.card_id)
    assert picks == {a.id, b.id}


def test_ai_avoids_unsplittable_steal():
    joker, two = _c(JOKER), _c("2")
    state = _table([joker, two], 3, victim_pile=[[_c(JOKER), _c("9")]])
    cmd, _ = ai_decide(state, random.Random(0))
    assert not isinstance(cmd, Steal)
