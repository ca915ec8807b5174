from __future__ import annotations

from typing import Iterable, List, Sequence

from .types import Card, Group, JOKER


class GroupingError(Exception):
    """Raised when a bag of cards cannot be split without losing a card."""


def group_rank(group: Sequence[Card]) -> str:
    # Rank of the first non-joker member; an all-joker group ranks as Joker
    for card in group:
        if not card.is_joker:
            return card.rank
    return JOKER


def group_value(group: Iterable[Card]) -> int:
    return sum(card.value for card in group)


def is_all_jokers(group: Sequence[Card]) -> bool:
    return bool(group) and all(card.is_joker for card in group)


def has_joker(group: Sequence[Card]) -> bool:
    return any(card.is_joker for card in group)


def split_into_groups(cards: Sequence[Card]) -> List[Group]:
    """
    Partition a bag of same-rank cards (jokers wild) into resting groups.

    Groups are returned bottom-to-top. Normal cards pair up two at a time.
    An odd normal count is absorbed by a joker at the bottom when one is
    available, otherwise the bottom group takes three cards. Remaining
    jokers go to the front of groups that hold none yet, lowest first.
    """
    jokers: List[Card] = [c for c in cards if c.is_joker]
    normals: List[Card] = [c for c in cards if not c.is_joker]

    groups: List[Group] = []
    rest = normals
    if len(normals) % 2 == 1:
        if jokers:
            groups.append([jokers.pop(0), normals[0]])
            rest = normals[1:]
        else:
            groups.append(list(normals[:3]))
            rest = normals[3:]
    for i in range(0, len(rest) - 1, 2):
        groups.append([rest[i], rest[i + 1]])

    if not groups:
        # Only jokers in the bag
        groups.append([])

    for group in groups:
        if not jokers:
            break
        if has_joker(group):
            continue
        group.insert(0, jokers.pop(0))

    if jokers:
        raise GroupingError(
            f"{len(jokers)} joker(s) left over after splitting {len(cards)} cards into {len(groups)} groups"
        )
    return groups

