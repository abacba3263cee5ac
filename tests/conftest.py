"""Pytest fixtures for card table tests."""

import asyncio
from random import Random
from typing import Iterable

import pytest
from hypothesis import strategies as st

from config import BlackjackConfig, PokerConfig
from core.cards import Card, Deck, Rank, Suit, parse_cards
from core.game.blackjack import BlackjackGame
from core.game.poker import PokerGame
from core.game.sink import Container, Control, GameKind, PresentationSink
from core.hand import Hand


def full_deck() -> list[Card]:
    """All 52 cards in suit/rank order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class StackedDeck(Deck):
    """
    Deck that deals a prescribed sequence after every reset.

    Cards not in the sequence follow it in suit/rank order, so the deck
    always holds the full 52.
    """

    def __init__(self, order: Iterable[Card] | str) -> None:
        self._order = parse_cards(order) if isinstance(order, str) else list(order)
        super().__init__(rng=Random(0))

    def reset(self) -> None:
        rest = [card for card in full_deck() if card not in self._order]
        # deal() pops from the end
        self._cards = rest + list(reversed(self._order))

    def shuffle(self) -> None:
        pass


def poker_order(player: str, opponent: str, board: str) -> list[Card]:
    """
    Deal order for one poker round: alternating hole cards, then a burn
    before the flop, the turn and the river.
    """
    hole_p = parse_cards(player)
    hole_o = parse_cards(opponent)
    community = parse_cards(board)
    used = {*hole_p, *hole_o, *community}
    burns = [card for card in full_deck() if card not in used][:3]
    return [
        hole_p[0], hole_o[0], hole_p[1], hole_o[1],
        burns[0], *community[:3],
        burns[1], community[3],
        burns[2], community[4],
    ]


class RecordingSink(PresentationSink):
    """Sink that keeps what it was told and reveals without delay."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.areas: dict[Container, list[tuple[Card, bool]]] = {c: [] for c in Container}
        self.status = ""
        self.statuses: list[str] = []
        self.pot = 0
        self.enabled: dict[Control, bool] = {c: False for c in Control}
        # Enabled controls seen at each reveal
        self.enabled_during_reveals: list[frozenset[Control]] = []
        self.game: GameKind | None = None
        self.opponent_name = ""
        self._failing: list | None = None

    def fail_on(self, method: str, call: int = 1) -> None:
        """Make a reveal method raise once, on its call-th use from now."""
        self._failing = [method, call]

    def _check_failure(self, method: str) -> None:
        if self._failing and self._failing[0] == method:
            self._failing[1] -= 1
            if self._failing[1] == 0:
                self._failing = None
                raise RuntimeError("display gone")

    def _snapshot(self) -> None:
        self.enabled_during_reveals.append(frozenset(c for c, on in self.enabled.items() if on))

    async def reveal_card(self, container: Container, card: Card, face_down: bool = False) -> None:
        self._check_failure("reveal_card")
        self.calls.append(("reveal_card", container, card, face_down))
        self.areas[container].append((card, face_down))
        self._snapshot()
        await asyncio.sleep(0)

    async def turn_face_up(self, container: Container, index: int, card: Card) -> None:
        self._check_failure("turn_face_up")
        self.calls.append(("turn_face_up", container, index, card))
        self.areas[container][index] = (card, False)
        self._snapshot()
        await asyncio.sleep(0)

    def set_status(self, message: str) -> None:
        self.calls.append(("set_status", message))
        self.status = message
        self.statuses.append(message)

    def set_pot(self, amount: int) -> None:
        self.calls.append(("set_pot", amount))
        self.pot = amount

    def clear_table(self) -> None:
        self.calls.append(("clear_table",))
        for cards in self.areas.values():
            cards.clear()

    def set_controls_enabled(self, controls: Iterable[Control], enabled: bool) -> None:
        controls = set(controls)
        self.calls.append(("set_controls_enabled", frozenset(controls), enabled))
        for control in controls:
            self.enabled[control] = enabled

    def show_table(self, game: GameKind, opponent_name: str) -> None:
        self.calls.append(("show_table", game, opponent_name))
        self.game = game
        self.opponent_name = opponent_name

    def show_menu(self) -> None:
        self.calls.append(("show_menu",))
        self.game = None

    def cards_in(self, container: Container) -> list[Card]:
        return [card for card, _ in self.areas[container]]

    def face_down_in(self, container: Container) -> list[bool]:
        return [face_down for _, face_down in self.areas[container]]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def sink():
    """A recording presentation sink."""
    return RecordingSink()


@pytest.fixture
def poker_settings():
    """Poker settings with the standard ante."""
    return PokerConfig(ante=20)


@pytest.fixture
def blackjack_settings():
    """Blackjack settings without dealer pacing."""
    return BlackjackConfig(dealer_draw_delay=0)


@pytest.fixture
def make_poker(sink, poker_settings):
    """Build an opened poker table dealing from a stacked deck."""

    def factory(player: str, opponent: str, board: str) -> PokerGame:
        game = PokerGame(sink, settings=poker_settings, deck=StackedDeck(poker_order(player, opponent, board)))
        game.init()
        return game

    return factory


@pytest.fixture
def make_blackjack(sink, blackjack_settings):
    """Build an opened blackjack table dealing the given cards in order."""

    def factory(order: str) -> BlackjackGame:
        game = BlackjackGame(sink, settings=blackjack_settings, deck=StackedDeck(order))
        game.init()
        return game

    return factory


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    hand = Hand()
    hand.add_card(Card(Rank.ACE, Suit.SPADES))
    hand.add_card(Card(Rank.KING, Suit.HEARTS))
    return hand


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    hand = Hand()
    hand.add_card(Card(Rank.ACE, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    return hand


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    hand = Hand()
    hand.add_card(Card(Rank.TEN, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    return hand


@pytest.fixture
def bust_hand():
    """A busted hand."""
    hand = Hand()
    hand.add_card(Card(Rank.TEN, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    hand.add_card(Card(Rank.KING, Suit.CLUBS))
    return hand


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


def distinct_cards(min_size: int, max_size: int):
    """Generate a list of distinct cards."""
    return st.lists(card_strategy(), min_size=min_size, max_size=max_size, unique=True)
