from __future__ import annotations

from typing import List, Optional
import random

from .types import Card, CARD_VALUES, JOKER, RANKS, SUITS


def create_deck(decks: int = 2, jokers_per_deck: int = 2) -> List[Card]:
    """Build the unshuffled pack: suit-major, rank-minor, jokers after each sub-deck."""
    deck: List[Card] = []
    next_id = 0
    for _ in range(decks):
        for suit in SUITS:
            for rank in RANKS:
                deck.append(Card(suit=suit, rank=rank, value=CARD_VALUES[rank], id=next_id))
                next_id += 1
        for _ in range(jokers_per_deck):
            deck.append(Card(suit=None, rank=JOKER, value=CARD_VALUES[JOKER], id=next_id))
            next_id += 1
    return deck


def shuffle(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    # Fisher-Yates, in place
    r = rng if rng is not None else random
    for i in range(len(cards) - 1, 0, -1):
        j = r.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def card_label(card: Card) -> str:
    return str(card)


def count_jokers(cards: List[Card]) -> int:
    return sum(1 for c in cards if c.rank == JOKER)
