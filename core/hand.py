"""Hand scoring for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from core.cards import Card

BLACKJACK = 21


def calculate_score(cards: Iterable[Card]) -> int:
    """
    Calculate the best blackjack total for a set of cards.

    Aces start at 11 and are demoted to 1, one at a time, while the
    total is over 21.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.points

    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1

    return total


@dataclass
class Hand:
    """A blackjack hand. Cards are only ever added during a round."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        """Return the ace-aware total."""
        return calculate_score(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > BLACKJACK

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_busted:
            return f"{cards_str} (BUST)"
        return f"{cards_str} ({self.value})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare player and dealer hands once the dealer has played.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    if player_hand.is_busted:
        return -1
    if dealer_hand.is_busted:
        return 1

    player_value = player_hand.value
    dealer_value = dealer_hand.value
    if player_value > dealer_value:
        return 1
    if dealer_value > player_value:
        return -1
    return 0
