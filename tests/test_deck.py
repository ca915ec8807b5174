from collections import Counter
import random

from zlodej import CARD_VALUES, JOKER, create_deck, shuffle
from zlodej.deck import count_jokers


def test_default_deck_has_108_cards_and_4_jokers():
    deck = create_deck()
    assert len(deck) == 108
    assert count_jokers(deck) == 4


def test_deck_sizes_for_various_packs():
    for decks in (1, 2, 3):
        for jokers in (0, 1, 2, 3):
            deck = create_deck(decks, jokers)
            assert len(deck) == 52 * decks + jokers * decks
            assert count_jokers(deck) == jokers * decks
            ids = [c.id for c in deck]
            assert len(set(ids)) == len(ids)


def test_deck_order_is_suit_major_with_jokers_per_subdeck():
    deck = create_deck(2, 2)
    ids = [c.id for c in deck]
    assert ids == sorted(ids)
    assert ids[0] == 0
    # First sub-deck: 52 suited cards then its two jokers
    assert [c.rank for c in deck[:13]] == ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]
    assert all(c.suit == deck[0].suit for c in deck[:13])
    assert deck[52].rank == JOKER and deck[53].rank == JOKER
    assert deck[52].suit is None
    assert deck[54].rank == "2"


def test_card_values_follow_table():
    deck = create_deck(1, 2)
    for c in deck:
        assert c.value == CARD_VALUES[c.rank]
    assert CARD_VALUES[JOKER] == 50
    assert CARD_VALUES["A"] == 20
    assert CARD_VALUES["10"] == CARD_VALUES["K"] == 10
    assert CARD_VALUES["2"] == CARD_VALUES["9"] == 5


def test_shuffle_preserves_cards_and_is_in_place():
    deck = create_deck()
    before = Counter(c.id for c in deck)
    out = shuffle(deck, random.Random(7))
    assert out is deck
    assert Counter(c.id for c in deck) == before


def test_shuffle_is_roughly_uniform_over_permutations():
    rng = random.Random(12345)
    base = create_deck(1, 0)[:3]
    trials = 6000
    freq: Counter = Counter()
    for _ in range(trials):
        cards = list(base)
        shuffle(cards, rng)
        freq[tuple(c.id for c in cards)] += 1
    assert len(freq) == 6
    expected = trials / 6
    for count in freq.values():
        assert abs(count - expected) < expected * 0.15
