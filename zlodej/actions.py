from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Union

from .types import Card, Group
from .pile import Player
from .groups import GroupingError, group_rank, is_all_jokers, split_into_groups
from .commands import ActionResult
from .messages import msg

if TYPE_CHECKING:
    from .core import GameState


def _ok(state: "GameState", code: str, **kwargs: Any) -> ActionResult:
    text = msg(state.cfg.lang, code, **kwargs)
    state.logs.append(text)
    return ActionResult(ok=True, code=code, message=text)


def _fail(state: "GameState", code: str, **kwargs: Any) -> ActionResult:
    return ActionResult(ok=False, code=code, message=msg(state.cfg.lang, code, **kwargs))


def _locate(state: "GameState", player_idx: int, card_id: int) -> Optional[Card]:
    return state.players[player_idx].find_card(card_id)


def _commitment_block(state: "GameState", p: Player) -> Optional[ActionResult]:
    if p.in_commitment:
        return _fail(state, "in_commitment", rank=p.pile.pledge_rank())
    return None


def pairs_with(card: Card, other: Card) -> bool:
    # Same rank, or exactly one joker
    if card.is_joker and other.is_joker:
        return False
    return card.is_joker or other.is_joker or card.rank == other.rank


def discard(state: "GameState", player_idx: int, card_id: int) -> ActionResult:
    p = state.players[player_idx]
    card = _locate(state, player_idx, card_id)
    if card is None:
        return _fail(state, "card_not_found")
    blocked = _commitment_block(state, p)
    if blocked is not None:
        return blocked
    p.take_card(card_id)
    state.discard_pile.append(card)
    return _ok(state, "discarded", name=p.name, card=card)


def take_from_discard(state: "GameState", player_idx: int, card_id: int) -> ActionResult:
    p = state.players[player_idx]
    card = _locate(state, player_idx, card_id)
    if card is None:
        return _fail(state, "card_not_found")
    blocked = _commitment_block(state, p)
    if blocked is not None:
        return blocked
    if not state.discard_pile:
        return _fail(state, "discard_empty")
    top = state.discard_pile[-1]
    if card.is_joker and top.is_joker:
        p.take_card(card_id)
        state.discard_pile.append(card)
        return _ok(state, "joker_on_joker", name=p.name, card=card)
    if not pairs_with(card, top):
        return _fail(state, "no_match", card=card)
    p.take_card(card_id)
    state.discard_pile.pop()
    # Joker always sits at the bottom of the pair
    group: Group = [top, card] if top.is_joker else [card, top]
    p.pile.push(group)
    return _ok(state, "took_discard", name=p.name, card=card, top=top)


def play_to_score_pile(
    state: "GameState",
    player_idx: int,
    card_id: int,
    force_new: bool = False,
) -> ActionResult:
    p = state.players[player_idx]
    card = _locate(state, player_idx, card_id)
    if card is None:
        return _fail(state, "card_not_found")

    if p.in_commitment:
        rank = p.pile.pledge_rank()
        if card.rank != rank:
            return _fail(state, "commitment_rank", rank=rank)
        p.take_card(card_id)
        p.pile.append_to_top(card)
        return _ok(state, "completed", name=p.name, card=card)

    can_extend = not card.is_joker and p.pile.top_rank() == card.rank
    can_commit = not card.is_joker and p.has_other_of_rank(card)

    if can_extend and not force_new:
        p.take_card(card_id)
        p.pile.append_to_top(card)
        return _ok(state, "extended", name=p.name, card=card)
    if can_commit:
        p.take_card(card_id)
        p.pile.push([card])
        return _ok(state, "committed", name=p.name, card=card)
    if can_extend:
        p.take_card(card_id)
        p.pile.append_to_top(card)
        return _ok(state, "extended", name=p.name, card=card)
    return _fail(state, "no_pair")


@dataclass
class StealPlan:
    card: Card
    victim_group: Group
    merge_own: bool
    groups: List[Group]


def plan_steal(
    state: "GameState",
    thief_idx: int,
    card_id: int,
    victim_idx: int,
) -> Union[StealPlan, ActionResult]:
    """Check every steal precondition and compute the resulting groups without mutating anything."""
    thief = state.players[thief_idx]
    card = thief.find_card(card_id)
    if card is None:
        return _fail(state, "card_not_found")
    blocked = _commitment_block(state, thief)
    if blocked is not None:
        return blocked
    if victim_idx == thief_idx or not (0 <= victim_idx < len(state.players)):
        return _fail(state, "bad_victim")
    victim = state.players[victim_idx]
    top = victim.pile.top()
    if top is None:
        return _fail(state, "victim_empty", victim=victim.name)
    if victim.in_commitment:
        return _fail(state, "victim_locked", victim=victim.name)
    rank = group_rank(top)
    if card.is_joker:
        if is_all_jokers(top):
            return _fail(state, "no_match", card=card)
    elif card.rank != rank:
        return _fail(state, "no_match", card=card)

    own_top = thief.pile.top()
    merge_own = own_top is not None and not is_all_jokers(own_top) and group_rank(own_top) == rank
    bag: List[Card] = [card] + list(top)
    if merge_own:
        assert own_top is not None
        bag += list(own_top)
    try:
        groups = split_into_groups(bag)
    except GroupingError:
        return _fail(state, "unsplittable")
    return StealPlan(card=card, victim_group=list(top), merge_own=merge_own, groups=groups)


def steal(state: "GameState", thief_idx: int, card_id: int, victim_idx: int) -> ActionResult:
    plan = plan_steal(state, thief_idx, card_id, victim_idx)
    if isinstance(plan, ActionResult):
        return plan
    thief = state.players[thief_idx]
    victim = state.players[victim_idx]
    thief.take_card(card_id)
    victim.pile.pop()
    if plan.merge_own:
        thief.pile.pop()
    thief.pile.push_all(plan.groups)
    return _ok(
        state,
        "stole",
        name=thief.name,
        victim=victim.name,
        card=plan.card,
        count=len(plan.victim_group),
    )
