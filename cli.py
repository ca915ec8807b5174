from __future__ import annotations

from typing import List, Optional, Tuple
import asyncio

from zlodej import (
    Card,
    Command,
    Discard,
    TakeDiscard,
    PlayToScorePile,
    Steal,
    GameConfig,
    GameSession,
    GameState,
    PlayerKind,
    card_label,
    group_rank,
    new_series,
    next_series_game,
    is_series_over,
    series_totals,
    series_winners,
)


PLAYERS: List[Tuple[PlayerKind, str]] = [
    ("H", "You"),
    ("AI", "Bot A"),
]

HAND_SIZE: int = 6
AI_TIER: int = 3
AI_DELAY: float = 0.6
LANG: str = "en"


def print_pile(state: GameState) -> None:
    for p in state.players:
        groups = " | ".join(" ".join(card_label(c) for c in g) for g in p.pile)
        pledge = " (pledged)" if p.in_commitment else ""
        print(f"  {p.name:<10} {p.total_score:>4} pts{pledge}: {groups or '-'}")


def print_table(state: GameState) -> None:
    top = state.discard_pile[-1] if state.discard_pile else None
    print()
    print(f"Round {state.current_round} | draw {len(state.draw_pile)} | discard top: {card_label(top) if top else '(empty)'}")
    print_pile(state)


def print_hand(hand: List[Card]) -> None:
    for i, c in enumerate(hand):
        print(f"  [{i}] {card_label(c):<6} ({c.value})")


def ask_index(prompt: str, upper: int) -> int:
    while True:
        s = input(prompt).strip()
        try:
            i = int(s)
        except ValueError:
            print("Invalid number.")
            continue
        if 0 <= i < upper:
            return i
        print(f"Out of range; must be 0..{upper - 1}.")


def ask_victim(state: GameState, thief: int) -> Optional[int]:
    others = [p for p in state.players if p.index != thief and len(p.pile) > 0]
    if not others:
        print("Nobody has anything to steal.")
        return None
    if len(others) == 1:
        return others[0].index
    for p in others:
        top = p.pile.top()
        assert top is not None
        print(f"  [{p.index}] {p.name} (top: {group_rank(top)} x{len(top)})")
    return ask_index("Steal from: ", len(state.players))


def ask_command(state: GameState) -> Optional[Command]:
    p = state.players[state.current_idx]
    print(f"Your hand, {p.name}:")
    print_hand(p.hand)
    a = input("Action: (d)iscard, (t)ake discard, (p)lay, (n)ew pledge, (s)teal: ").strip().lower()
    if a not in ("d", "t", "p", "n", "s"):
        print("Unknown action.")
        return None
    card = p.hand[ask_index("Card: ", len(p.hand))]
    if a == "d":
        return Discard(card.id)
    if a == "t":
        return TakeDiscard(card.id)
    if a == "p":
        return PlayToScorePile(card.id)
    if a == "n":
        return PlayToScorePile(card.id, force_new=True)
    victim = ask_victim(state, p.index)
    if victim is None:
        return None
    return Steal(card.id, victim)


def drain_logs(state: GameState) -> None:
    for line in state.logs:
        print(line)
    state.logs.clear()


def play_game(session: GameSession) -> None:
    state = session.state
    drain_logs(state)
    while state.phase == "playing":
        print_table(state)
        p = state.players[state.current_idx]
        if not p.is_human:
            print(f"{p.name} is thinking...")
            asyncio.run(session.drive_ai())
            if state.explain is not None:
                print(state.explain.pick_reason)
            drain_logs(state)
            continue
        cmd = ask_command(state)
        if cmd is None:
            continue
        result = session.submit(p.index, cmd)
        if not result.ok:
            print(result.message)
        drain_logs(state)

    print("\n=== Game Over ===")
    print_pile(state)


def main() -> None:
    print("ZLODĚJ — console table")
    cfg = GameConfig(players=PLAYERS, hand_size=HAND_SIZE, ai_tier=AI_TIER, lang=LANG)
    state = new_series(cfg)
    while True:
        play_game(GameSession(state, ai_delay=AI_DELAY))
        series = state.series
        assert series is not None
        if is_series_over(series):
            break
        input("Press Enter for the next game...")
        state = next_series_game(state)

    series = state.series
    assert series is not None
    print("\n=== Series ===")
    totals = series_totals(series)
    for p, total in zip(state.players, totals):
        print(f"{p.name}: {total} pts")
    winners = [state.players[i].name for i in series_winners(series)]
    if len(winners) == 1:
        print(f"Winner: {winners[0]}")
    else:
        print("Winners (tie): " + ", ".join(winners))


if __name__ == "__main__":
    main()
