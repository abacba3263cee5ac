"""Poker hand ranking."""

from core.poker.evaluator import (
    HandCategory,
    HandResult,
    RankGroups,
    check_straight,
    evaluate,
    get_flush_suit,
    get_groups,
)

__all__ = [
    "HandCategory",
    "HandResult",
    "RankGroups",
    "check_straight",
    "evaluate",
    "get_flush_suit",
    "get_groups",
]
