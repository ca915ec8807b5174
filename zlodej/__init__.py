from .types import Card, CARD_VALUES, JOKER, RANKS, SUITS, Group, PlayerKind
from .deck import create_deck, shuffle, card_label
from .groups import GroupingError, split_into_groups, group_rank, group_value
from .pile import Player, ScorePile
from .commands import ActionResult, Command, Discard, TakeDiscard, PlayToScorePile, Steal
from .ai import CandidateEval, ExplainInfo, ai_decide
from .core import (
    GameConfig,
    GameEndInfo,
    GameState,
    SeriesState,
    new_game,
    start_game,
    deal_cards,
    advance_turn,
    check_stalemate,
    end_game,
    skip_game,
    is_game_over,
    apply_command,
    play_turn,
    play_human_turn,
    attempt_discard,
    attempt_take_from_discard,
    attempt_play_to_score_pile,
    attempt_steal,
    step,
    run_ai_turns,
    new_series,
    next_series_game,
    is_series_over,
    series_totals,
    series_winners,
    to_json,
)
from .session import GameSession

__all__ = [
    "Card",
    "CARD_VALUES",
    "JOKER",
    "RANKS",
    "SUITS",
    "Group",
    "PlayerKind",
    "create_deck",
    "shuffle",
    "card_label",
    "GroupingError",
    "split_into_groups",
    "group_rank",
    "group_value",
    "Player",
    "ScorePile",
    "ActionResult",
    "Command",
    "Discard",
    "TakeDiscard",
    "PlayToScorePile",
    "Steal",
    "CandidateEval",
    "ExplainInfo",
    "ai_decide",
    "GameConfig",
    "GameEndInfo",
    "GameState",
    "SeriesState",
    "new_game",
    "start_game",
    "deal_cards",
    "advance_turn",
    "check_stalemate",
    "end_game",
    "skip_game",
    "is_game_over",
    "apply_command",
    "play_turn",
    "play_human_turn",
    "attempt_discard",
    "attempt_take_from_discard",
    "attempt_play_to_score_pile",
    "attempt_steal",
    "step",
    "run_ai_turns",
    "new_series",
    "next_series_game",
    "is_series_over",
    "series_totals",
    "series_winners",
    "to_json",
    "GameSession",
]
