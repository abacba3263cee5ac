"""Poker hand ranking for Texas Hold'em (5 to 7 cards)."""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from core.cards import Card, Rank, Suit

MIN_CARDS = 5
MAX_CARDS = 7

WHEEL = {Rank.ACE.value, 5, 4, 3, 2}


class HandCategory(Enum):
    """Hand categories with their score offsets."""

    HIGH_CARD = (0, "High Card")
    PAIR = (1000, "Pair")
    TWO_PAIR = (2000, "Two Pair")
    THREE_OF_A_KIND = (3000, "Three of a Kind")
    STRAIGHT = (4000, "Straight")
    FLUSH = (5000, "Flush")
    FULL_HOUSE = (6000, "Full House")
    FOUR_OF_A_KIND = (7000, "Four of a Kind")
    STRAIGHT_FLUSH = (8000, "Straight Flush")

    def __init__(self, offset: int, label: str) -> None:
        self.offset = offset
        self.label = label

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True, order=True)
class HandResult:
    """
    Evaluated poker hand.

    Results order and compare equal by score alone, so two hands with the
    same score are a push even when real kickers would separate them.
    """

    score: int
    category: HandCategory = field(compare=False)

    @property
    def name(self) -> str:
        """Return the category label, e.g. 'Full House'."""
        return self.category.label

    def __str__(self) -> str:
        return f"{self.name} ({self.score})"


@dataclass(frozen=True)
class RankGroups:
    """Best ranks per multiplicity, as found by get_groups()."""

    quad: int | None = None
    triple: int | None = None
    second_triple: int | None = None
    pair: int | None = None
    second_pair: int | None = None


def evaluate(hole: Sequence[Card], community: Sequence[Card] = ()) -> HandResult:
    """
    Evaluate hole and community cards into a comparable HandResult.

    Categories are tested in strict priority order and the first match
    wins. Two simplifications are kept on purpose: a flush scores a flat
    5000 with no kicker, and a straight flush only requires a flush and a
    straight somewhere among the cards, not in the same five.

    Raises:
        ValueError: if the total number of cards is not between 5 and 7
    """
    cards = [*hole, *community]
    if not MIN_CARDS <= len(cards) <= MAX_CARDS:
        raise ValueError(f"Expected {MIN_CARDS}-{MAX_CARDS} cards, got {len(cards)}")

    ranks = sorted((card.rank_value for card in cards), reverse=True)
    high = ranks[0]

    flush_suit = get_flush_suit(cards)
    is_straight = check_straight(ranks)
    groups = get_groups(ranks)

    if flush_suit is not None and is_straight:
        return _result(HandCategory.STRAIGHT_FLUSH, high)
    if groups.quad is not None:
        return _result(HandCategory.FOUR_OF_A_KIND, groups.quad)
    if groups.triple is not None and (groups.pair is not None or groups.second_triple is not None):
        return _result(HandCategory.FULL_HOUSE, groups.triple)
    if flush_suit is not None:
        return _result(HandCategory.FLUSH, 0)
    if is_straight:
        return _result(HandCategory.STRAIGHT, high)
    if groups.triple is not None:
        return _result(HandCategory.THREE_OF_A_KIND, groups.triple)
    if groups.pair is not None and groups.second_pair is not None:
        return _result(HandCategory.TWO_PAIR, groups.pair)
    if groups.pair is not None:
        return _result(HandCategory.PAIR, groups.pair)
    return _result(HandCategory.HIGH_CARD, high)


def _result(category: HandCategory, tiebreak: int) -> HandResult:
    return HandResult(score=category.offset + tiebreak, category=category)


def get_flush_suit(cards: Sequence[Card]) -> Suit | None:
    """Return the suit held at least five times, if any."""
    counts = Counter(card.suit for card in cards)
    for suit, count in counts.items():
        if count >= 5:
            return suit
    return None


def check_straight(ranks: Sequence[int]) -> bool:
    """Check for five consecutive distinct ranks, including the A-2-3-4-5 wheel."""
    unique = sorted(set(ranks), reverse=True)

    consecutive = 0
    for higher, lower in zip(unique, unique[1:]):
        if higher - lower == 1:
            consecutive += 1
            if consecutive >= 4:
                return True
        else:
            consecutive = 0

    return WHEEL.issubset(unique)


def get_groups(ranks: Sequence[int]) -> RankGroups:
    """Group ranks by multiplicity, keeping the best two triples and pairs."""
    counts = Counter(ranks)

    quad = None
    triples: list[int] = []
    pairs: list[int] = []
    for rank in sorted(counts, reverse=True):
        count = counts[rank]
        if count == 4 and quad is None:
            quad = rank
        elif count == 3:
            triples.append(rank)
        elif count == 2:
            pairs.append(rank)

    return RankGroups(
        quad=quad,
        triple=triples[0] if triples else None,
        second_triple=triples[1] if len(triples) > 1 else None,
        pair=pairs[0] if pairs else None,
        second_pair=pairs[1] if len(pairs) > 1 else None,
    )
