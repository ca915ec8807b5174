from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Literal, Optional, Tuple
import random

from .types import Card
from .pile import Player
from .groups import group_value
from .commands import Command, Discard, PlayToScorePile, Steal, TakeDiscard
from .actions import StealPlan, pairs_with, plan_steal

if TYPE_CHECKING:
    from .core import GameState


CandidateKind = Literal["complete", "commit", "take", "steal", "extend", "discard"]


@dataclass
class CandidateEval:
    kind: CandidateKind
    card_id: int
    score: float
    partner_id: Optional[int] = None
    victim_idx: Optional[int] = None


@dataclass
class ExplainInfo:
    topK: List[CandidateEval]
    pick_reason: str


def victim_for(state: "GameState", player_idx: int) -> int:
    return (player_idx + 1) % len(state.players)


def commit_candidates(p: Player, visible_only: bool = False) -> List[CandidateEval]:
    by_rank: Dict[str, List[Card]] = {}
    for c in p.hand:
        if c.is_joker:
            continue
        by_rank.setdefault(c.rank, []).append(c)
    out: List[CandidateEval] = []
    for cards in by_rank.values():
        if len(cards) < 2:
            continue
        a, b = cards[0], cards[1]
        score = a.value if visible_only else a.value + b.value
        out.append(CandidateEval("commit", a.id, float(score), partner_id=b.id))
    return out


def take_candidates(p: Player, top: Optional[Card]) -> List[CandidateEval]:
    if top is None:
        return []
    return [
        CandidateEval("take", c.id, float(c.value + top.value), partner_id=top.id)
        for c in p.hand
        if pairs_with(c, top)
    ]


def steal_candidates(state: "GameState", thief_idx: int, victim_idx: int) -> List[CandidateEval]:
    thief = state.players[thief_idx]
    out: List[CandidateEval] = []
    for c in thief.hand:
        plan = plan_steal(state, thief_idx, c.id, victim_idx)
        if not isinstance(plan, StealPlan):
            continue
        gain = group_value(plan.victim_group) - c.value
        out.append(CandidateEval("steal", c.id, float(gain), victim_idx=victim_idx))
    return out


def extend_candidates(p: Player) -> List[CandidateEval]:
    if p.in_commitment:
        return []
    rank = p.pile.top_rank()
    if rank is None:
        return []
    return [CandidateEval("extend", c.id, float(c.value)) for c in p.hand if not c.is_joker and c.rank == rank]


def discard_candidates(p: Player) -> List[CandidateEval]:
    return [CandidateEval("discard", c.id, float(-c.value)) for c in p.hand]


def _pick_best(cands: List[CandidateEval], rng: random.Random) -> CandidateEval:
    assert cands, "No candidates"
    best = max(ce.score for ce in cands)
    ties = [ce for ce in cands if ce.score == best]
    return ties[0] if len(ties) == 1 else rng.choice(ties)


def _to_command(ce: CandidateEval) -> Command:
    if ce.kind in ("complete", "extend"):
        return PlayToScorePile(ce.card_id)
    if ce.kind == "commit":
        return PlayToScorePile(ce.card_id, force_new=True)
    if ce.kind == "take":
        return TakeDiscard(ce.card_id)
    if ce.kind == "steal":
        assert ce.victim_idx is not None
        return Steal(ce.card_id, ce.victim_idx)
    return Discard(ce.card_id)


def _top_k(cands: List[CandidateEval], k: int = 3) -> List[CandidateEval]:
    return sorted(cands, key=lambda ce: ce.score, reverse=True)[:k]


def ai_decide(state: "GameState", rng: Optional[random.Random] = None) -> Tuple[Command, ExplainInfo]:
    """Choose one legal command for the player on turn, according to ``cfg.ai_tier``."""
    r = rng if rng is not None else state.rng
    idx = state.current_idx
    p = state.players[idx]
    tier = state.cfg.ai_tier
    discards = discard_candidates(p)

    if p.in_commitment:
        rank = p.pile.pledge_rank()
        finish = [CandidateEval("complete", c.id, float(c.value)) for c in p.hand if c.rank == rank]
        if finish:
            pick = _pick_best(finish, r)
            reason = f"AI_PICK: complete commitment ({rank})"
        else:
            pick = _pick_best(discards, r)
            reason = "AI_PICK: discard cheapest (cannot complete commitment)"
        return _to_command(pick), ExplainInfo(topK=_top_k(finish + discards), pick_reason=reason)

    victim = victim_for(state, idx)
    top = state.discard_pile[-1] if state.discard_pile else None
    commits = commit_candidates(p, visible_only=(tier >= 3))
    takes = take_candidates(p, top)

    if tier >= 3:
        steals = steal_candidates(state, idx, victim)
        gains = commits + takes + extend_candidates(p)
        positive = [ce for ce in gains if ce.score > 0]
        best_steal = _pick_best(steals, r) if steals else None
        best_gain = _pick_best(positive, r) if positive else None
        if best_steal is not None and best_steal.score > 0 and (
            best_gain is None or best_steal.score > best_gain.score
        ):
            pick = best_steal
            reason = f"AI_PICK: steal from p{victim} (gain {best_steal.score:.0f})"
        elif best_gain is not None:
            pick = best_gain
            reason = f"AI_PICK: {best_gain.kind} (gain {best_gain.score:.0f})"
        else:
            pick = _pick_best(discards, r)
            reason = "AI_PICK: discard cheapest"
        explain = ExplainInfo(topK=_top_k(steals + gains + discards), pick_reason=reason)
        return _to_command(pick), explain

    cands = commits + takes + discards
    if tier == 2 and r.random() < state.cfg.ai_steal_probability:
        cands = steal_candidates(state, idx, victim) + cands
    pick = _pick_best(cands, r)
    reason = f"AI_PICK: {pick.kind} (score {pick.score:.0f})"
    return _to_command(pick), ExplainInfo(topK=_top_k(cands), pick_reason=reason)
