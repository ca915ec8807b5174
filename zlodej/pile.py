from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from .types import Card, Group, PlayerKind
from .groups import group_rank, group_value, split_into_groups


class ScorePile:
    """A player's scored groups, bottom (index 0) to top."""

    def __init__(self) -> None:
        self.groups: List[Group] = []

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[Group]:
        return iter(self.groups)

    @property
    def total(self) -> int:
        return sum(group_value(g) for g in self.groups)

    @property
    def in_commitment(self) -> bool:
        return bool(self.groups) and len(self.groups[-1]) == 1

    def top(self) -> Optional[Group]:
        return self.groups[-1] if self.groups else None

    def top_rank(self) -> Optional[str]:
        top = self.top()
        return group_rank(top) if top else None

    def pledge_rank(self) -> Optional[str]:
        if not self.in_commitment:
            return None
        return self.groups[-1][0].rank

    def push(self, group: Sequence[Card]) -> None:
        self.groups.append(list(group))

    def push_all(self, groups: Sequence[Sequence[Card]]) -> None:
        for g in groups:
            self.push(g)

    def pop(self) -> Group:
        assert self.groups, "Score pile is empty"
        return self.groups.pop()

    def append_to_top(self, card: Card) -> None:
        """Add a card to the top group, re-splitting it once it holds four or more."""
        assert self.groups, "Score pile is empty"
        self.groups[-1].append(card)
        if len(self.groups[-1]) >= 4:
            self.push_all(split_into_groups(self.pop()))

    def cards(self) -> List[Card]:
        return [c for g in self.groups for c in g]


@dataclass
class Player:
    index: int
    name: str
    kind: PlayerKind  # Literal["H","AI"]
    hand: List[Card] = field(default_factory=list)
    pile: ScorePile = field(default_factory=ScorePile)

    @property
    def is_human(self) -> bool:
        return self.kind == "H"

    @property
    def total_score(self) -> int:
        return self.pile.total

    @property
    def in_commitment(self) -> bool:
        return self.pile.in_commitment

    def find_card(self, card_id: int) -> Optional[Card]:
        for c in self.hand:
            if c.id == card_id:
                return c
        return None

    def take_card(self, card_id: int) -> Card:
        for i, c in enumerate(self.hand):
            if c.id == card_id:
                return self.hand.pop(i)
        raise KeyError(card_id)

    def has_other_of_rank(self, card: Card) -> bool:
        return any(c.rank == card.rank and c.id != card.id for c in self.hand)
