"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable


class ExhaustedDeck(IndexError):
    """Raised when dealing from a deck with no cards left."""


class Color(Enum):
    """Card colors, derived from the suit."""

    RED = "red"
    BLACK = "black"

    def __str__(self) -> str:
        return self.value


class Suit(Enum):
    """Card suits, in deck enumeration order."""

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value

    @property
    def color(self) -> Color:
        """Return the suit color."""
        if self in (Suit.HEARTS, Suit.DIAMONDS):
            return Color.RED
        return Color.BLACK


class Rank(Enum):
    """Card ranks valued for poker ranking (Ace high = 14)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


_RANK_LABELS = {
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}

_SUIT_LABELS = {
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card.

    Only rank and suit are stored; color, poker rank and point value are
    always derived from them.
    """

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def face(self) -> str:
        """Return the printed value ('2'..'10', 'J', 'Q', 'K', 'A')."""
        return str(self.rank)

    @property
    def rank_value(self) -> int:
        """Return the poker rank in [2, 14]."""
        return self.rank.value

    @property
    def color(self) -> Color:
        """Return the card color."""
        return self.suit.color

    @property
    def points(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh', '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_LABELS:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_LABELS:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_LABELS[rank_str], _SUIT_LABELS[suit_str])


def parse_cards(labels: Iterable[str] | str) -> list[Card]:
    """Parse card labels, either as an iterable or a space separated string."""
    if isinstance(labels, str):
        labels = labels.split()
    return [Card.from_string(label) for label in labels]


class Deck:
    """A standard 52-card deck dealt from the end of the sequence."""

    def __init__(self, rng: Random | None = None) -> None:
        """Initialize a new, shuffled deck."""
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Rebuild all 52 cards in suit/rank order, then shuffle."""
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]
        self.shuffle()

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place (Fisher-Yates)."""
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def deal(self) -> Card:
        """Remove and return the last card of the deck."""
        if not self._cards:
            raise ExhaustedDeck("Cannot deal from an empty deck")
        return self._cards.pop()

    def __len__(self) -> int:
        return len(self._cards)
