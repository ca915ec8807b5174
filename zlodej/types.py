from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, TypeAlias

SUITS: List[str] = ["♠", "♥", "♦", "♣"]
RANKS: List[str] = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]
JOKER: str = "Joker"

CARD_VALUES: Dict[str, int] = {
    JOKER: 50,
    "A": 20,
    "K": 10, "Q": 10, "J": 10, "10": 10,
    "9": 5, "8": 5, "7": 5, "6": 5,
    "5": 5, "4": 5, "3": 5, "2": 5,
}

PlayerKind = Literal["H", "AI"]
Phase: TypeAlias = Literal["init", "playing", "gameEnd"]
EndReason: TypeAlias = Literal["empty", "stalemate", "manual-skip"]


@dataclass(frozen=True)
class Card:
    suit: Optional[str]  # None only for jokers
    rank: str
    value: int
    id: int

    @property
    def is_joker(self) -> bool:
        return self.rank == JOKER

    def __str__(self) -> str:
        if self.suit is None:
            return self.rank
        return f"{self.rank}{self.suit}"


Group = List[Card]
