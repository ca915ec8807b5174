from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import random

from .types import Card, EndReason, Phase, PlayerKind
from .deck import create_deck, shuffle
from .groups import group_rank, group_value
from .pile import Player
from .commands import ActionResult, Command, Discard, PlayToScorePile, Steal, TakeDiscard
from .messages import msg
from . import actions
from .ai import ExplainInfo, ai_decide


def _append_log(state: "GameState", msg_text: str) -> None:
    if state.logs is None:
        state.logs = []
    state.logs.append(msg_text)


def _log(state: "GameState", key: str, **kwargs: Any) -> None:
    _append_log(state, msg(state.cfg.lang, key, **kwargs))


def _top_discard(state: "GameState") -> Optional[Card]:
    return state.discard_pile[-1] if state.discard_pile else None


@dataclass
class GameConfig:
    players: List[Tuple[PlayerKind, str]]  # [(kind,name),... 2..4 active]
    hand_size: int = 6
    decks: int = 2
    jokers_per_deck: int = 2
    ai_tier: int = 3
    ai_steal_probability: float = 0.65
    stalemate_rounds: int = 2
    stalemate_cards: int = 20
    lang: str = "en"


@dataclass
class GameEndInfo:
    reason: EndReason
    scores: List[int]
    winners: List[int]


@dataclass
class SeriesState:
    num_games: int
    game_scores: List[List[int]] = field(default_factory=list)
    games_played: int = 0
    first_player: Optional[int] = None


@dataclass
class GameState:
    cfg: GameConfig
    players: List[Player]
    draw_pile: List[Card]
    discard_pile: List[Card] = field(default_factory=list)
    current_idx: int = 0
    current_round: int = 1
    sub_turn: int = 0
    current_hand_size: int = 0
    phase: Phase = "init"
    stalemate_count: int = 0
    scores_before: List[int] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)
    end_reason: Optional[EndReason] = None
    end_info: Optional[GameEndInfo] = None
    first_player: int = 0
    series: Optional[SeriesState] = None
    explain: Optional[ExplainInfo] = None
    rng: random.Random = field(default_factory=random.Random, repr=False)


def new_game(
    cfg: GameConfig,
    rng: Optional[random.Random] = None,
    series: Optional[SeriesState] = None,
) -> GameState:
    if not 2 <= len(cfg.players) <= 4:
        raise ValueError("A game needs 2 to 4 players")
    if cfg.hand_size < 1:
        raise ValueError("hand_size must be positive")
    if cfg.ai_tier not in (1, 2, 3):
        raise ValueError("ai_tier must be 1, 2 or 3")
    r = rng if rng is not None else random.Random()
    pls: List[Player] = []
    for i, (kind, name) in enumerate(cfg.players):
        if not name:
            name = msg(cfg.lang, "player_name" if kind == "H" else "ai_name")
        pls.append(Player(index=i, name=name, kind=kind))
    deck = shuffle(create_deck(cfg.decks, cfg.jokers_per_deck), r)
    return GameState(cfg=cfg, players=pls, draw_pile=deck, series=series, rng=r)


def start_game(state: GameState, first_player: Optional[int] = None) -> None:
    """Pick the first player, deal the opening hands and start play."""
    n = len(state.players)
    if first_player is None:
        series = state.series
        if series is not None and series.first_player is not None:
            first_player = (series.first_player + 1) % n
        else:
            first_player = state.rng.randrange(n)
    state.first_player = first_player
    state.current_idx = first_player
    if state.series is not None:
        state.series.first_player = first_player
    _log(state, "first_player", name=state.players[first_player].name)
    if not deal_cards(state):
        return
    state.phase = "playing"


def _remaining(state: GameState) -> int:
    return len(state.draw_pile) + len(state.discard_pile)


def _deal_one(state: GameState) -> Card:
    if state.draw_pile:
        return state.draw_pile.pop()
    # Discard pile is never shuffled; deal its oldest card first
    return state.discard_pile.pop(0)


def deal_cards(state: GameState) -> bool:
    n = len(state.players)
    if _remaining(state) < n:
        end_game(state, "empty")
        return False
    passes = 0
    for _ in range(state.cfg.hand_size):
        if _remaining(state) < n:
            break
        for p in state.players:
            p.hand.append(_deal_one(state))
        passes += 1
    state.current_hand_size = passes
    state.scores_before = [p.total_score for p in state.players]
    _log(state, "dealt", round=state.current_round, count=passes)
    return True


def round_length(state: GameState) -> int:
    return len(state.players) * state.current_hand_size


def check_stalemate(state: GameState) -> bool:
    """Count stagnant rounds; True once the game ended as a stalemate."""
    scores = [p.total_score for p in state.players]
    if _remaining(state) > state.cfg.stalemate_cards:
        state.stalemate_count = 0
        return False
    if scores != state.scores_before:
        state.stalemate_count = 0
        return False
    state.stalemate_count += 1
    if state.stalemate_count >= state.cfg.stalemate_rounds:
        end_game(state, "stalemate")
        return True
    return False


def advance_turn(state: GameState) -> None:
    if state.phase != "playing":
        return
    n = len(state.players)
    state.sub_turn += 1
    state.current_idx = (state.current_idx + 1) % n
    if state.sub_turn < round_length(state):
        return
    state.sub_turn = 0
    state.current_round += 1
    if check_stalemate(state):
        return
    deal_cards(state)


def final_scores(state: GameState) -> List[int]:
    return [p.total_score for p in state.players]


def end_game(state: GameState, reason: EndReason) -> None:
    if state.phase == "gameEnd":
        return
    state.phase = "gameEnd"
    state.end_reason = reason
    scores = final_scores(state)
    best = max(scores)
    state.end_info = GameEndInfo(
        reason=reason,
        scores=scores,
        winners=[i for i, s in enumerate(scores) if s == best],
    )
    _log(state, f"game_end_{reason}")
    if state.series is not None:
        state.series.game_scores.append(list(scores))
        state.series.games_played += 1


def skip_game(state: GameState) -> None:
    end_game(state, "manual-skip")


def is_game_over(state: GameState) -> bool:
    return state.phase == "gameEnd"


def apply_command(state: GameState, player_idx: int, command: Command) -> ActionResult:
    """Validate and apply one command for a player. Does not advance the turn."""
    if state.phase != "playing":
        return ActionResult(False, "not_playing", msg(state.cfg.lang, "not_playing"))
    if not 0 <= player_idx < len(state.players) or player_idx != state.current_idx:
        name = state.players[player_idx].name if 0 <= player_idx < len(state.players) else str(player_idx)
        return ActionResult(False, "not_your_turn", msg(state.cfg.lang, "not_your_turn", name=name))
    if isinstance(command, Discard):
        return actions.discard(state, player_idx, command.card_id)
    if isinstance(command, TakeDiscard):
        return actions.take_from_discard(state, player_idx, command.card_id)
    if isinstance(command, PlayToScorePile):
        return actions.play_to_score_pile(state, player_idx, command.card_id, command.force_new)
    if isinstance(command, Steal):
        return actions.steal(state, player_idx, command.card_id, command.victim_idx)
    return ActionResult(False, "unknown_command", msg(state.cfg.lang, "unknown_command"))


def play_turn(state: GameState, player_idx: int, command: Command) -> ActionResult:
    result = apply_command(state, player_idx, command)
    if result.ok:
        advance_turn(state)
    return result


def play_human_turn(state: GameState, player_idx: int, command: Command) -> ActionResult:
    """Entry point for commands coming from outside the engine; an AI seat on turn is not playable."""
    if state.phase == "playing" and player_idx == state.current_idx and not current_player(state).is_human:
        name = current_player(state).name
        return ActionResult(False, "ai_seat", msg(state.cfg.lang, "ai_seat", name=name))
    return play_turn(state, player_idx, command)


def attempt_discard(state: GameState, player_idx: int, card_id: int) -> ActionResult:
    return apply_command(state, player_idx, Discard(card_id))


def attempt_take_from_discard(state: GameState, player_idx: int, card_id: int) -> ActionResult:
    return apply_command(state, player_idx, TakeDiscard(card_id))


def attempt_play_to_score_pile(
    state: GameState, player_idx: int, card_id: int, force_new: bool = False
) -> ActionResult:
    return apply_command(state, player_idx, PlayToScorePile(card_id, force_new))


def attempt_steal(state: GameState, player_idx: int, card_id: int, victim_idx: int) -> ActionResult:
    return apply_command(state, player_idx, Steal(card_id, victim_idx))


def current_player(state: GameState) -> Player:
    return state.players[state.current_idx]


def step(state: GameState, rng: Optional[random.Random] = None) -> Optional[ActionResult]:
    """Play one AI turn if an AI is on turn; None when a human must act or the game is over."""
    if state.phase != "playing":
        return None
    p = current_player(state)
    if p.is_human:
        return None
    command, info = ai_decide(state, rng)
    result = apply_command(state, state.current_idx, command)
    # The AI only proposes legal moves; a rejected move means the state is inconsistent
    assert result.ok, f"AI move rejected: {result.code}"
    advance_turn(state)
    state.explain = info
    return result


def run_ai_turns(state: GameState, rng: Optional[random.Random] = None) -> List[ActionResult]:
    results: List[ActionResult] = []
    while True:
        res = step(state, rng)
        if res is None:
            return results
        results.append(res)


# --- Series ---

def new_series(cfg: GameConfig, rng: Optional[random.Random] = None) -> GameState:
    series = SeriesState(num_games=len(cfg.players))
    state = new_game(cfg, rng, series=series)
    start_game(state)
    return state


def next_series_game(prev: GameState) -> GameState:
    series = prev.series
    assert series is not None, "Not a series game"
    assert prev.phase == "gameEnd", "Current game is still running"
    assert not is_series_over(series), "Series is over"
    state = new_game(prev.cfg, prev.rng, series=series)
    start_game(state)
    return state


def is_series_over(series: SeriesState) -> bool:
    return series.games_played >= series.num_games


def series_totals(series: SeriesState) -> List[int]:
    if not series.game_scores:
        return []
    return [sum(col) for col in zip(*series.game_scores)]


def series_winners(series: SeriesState) -> List[int]:
    totals = series_totals(series)
    if not totals:
        return []
    best = max(totals)
    return [i for i, s in enumerate(totals) if s == best]


# --- JSON snapshot (pure, no I/O) ---

def _card_to_obj(card: Optional[Card]) -> Optional[Dict[str, object]]:
    if card is None:
        return None
    return {"id": card.id, "suit": card.suit, "rank": card.rank, "value": card.value}


def to_json(state: GameState) -> Dict[str, object]:
    cfg_obj: Dict[str, object] = {
        "handSize": state.cfg.hand_size,
        "decks": state.cfg.decks,
        "jokersPerDeck": state.cfg.jokers_per_deck,
        "aiTier": state.cfg.ai_tier,
        "aiStealProbability": state.cfg.ai_steal_probability,
        "stalemateRounds": state.cfg.stalemate_rounds,
        "stalemateCards": state.cfg.stalemate_cards,
        "lang": state.cfg.lang,
    }

    players_obj: List[Dict[str, object]] = []
    for p in state.players:
        pile_obj: List[Dict[str, object]] = []
        for g in p.pile:
            pile_obj.append({
                "rank": group_rank(g),
                "value": group_value(g),
                "cards": [_card_to_obj(c) for c in g],
            })
        players_obj.append({
            "index": p.index,
            "name": p.name,
            "kind": p.kind,
            "isHuman": p.is_human,
            "hand": [_card_to_obj(c) for c in p.hand],
            "scorePile": pile_obj,
            "totalScore": p.total_score,
            "inCommitment": p.in_commitment,
        })

    data: Dict[str, object] = {
        "schemaVersion": 1,
        "config": cfg_obj,
        "players": players_obj,
        "phase": state.phase,
        "currentPlayer": state.current_idx,
        "firstPlayer": state.first_player,
        "round": state.current_round,
        "subTurn": state.sub_turn,
        "handSize": state.current_hand_size,
        "drawCount": len(state.draw_pile),
        "discardCount": len(state.discard_pile),
        "discardTop": _card_to_obj(_top_discard(state)),
        "stalemateCount": state.stalemate_count,
        "logs": list(state.logs),
    }
    if state.end_info is not None:
        data["gameEnd"] = {
            "reason": state.end_info.reason,
            "scores": list(state.end_info.scores),
            "winners": list(state.end_info.winners),
        }
    if state.series is not None:
        data["series"] = {
            "numGames": state.series.num_games,
            "gamesPlayed": state.series.games_played,
            "gameScores": [list(s) for s in state.series.game_scores],
            "totals": series_totals(state.series),
            "over": is_series_over(state.series),
        }
    if state.explain is not None:
        data["explain"] = {
            "topK": [
                {"kind": ce.kind, "cardId": ce.card_id, "score": ce.score, "partnerId": ce.partner_id}
                for ce in state.explain.topK
            ],
            "pick": {"reason": state.explain.pick_reason},
        }
    return data
