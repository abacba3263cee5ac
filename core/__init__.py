"""Card table rule engines - 100% UI-agnostic."""

from core.cards import Card, Color, Deck, ExhaustedDeck, Rank, Suit, parse_cards
from core.hand import Hand, calculate_score
from core.poker import HandResult, evaluate

__all__ = [
    "Card",
    "Color",
    "Deck",
    "ExhaustedDeck",
    "Rank",
    "Suit",
    "parse_cards",
    "Hand",
    "calculate_score",
    "HandResult",
    "evaluate",
]
