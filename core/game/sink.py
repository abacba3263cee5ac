"""Presentation sink interface between the round engines and any UI."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable

from core.cards import Card


class GameKind(Enum):
    """Games available at the table."""

    POKER = "poker"
    BLACKJACK = "blackjack"


class Container(Enum):
    """Table areas cards can be revealed into."""

    PLAYER = "player-area"
    OPPONENT = "opponent-area"
    COMMUNITY = "community-area"


class Control(Enum):
    """Named action controls."""

    POKER_DEAL = "poker-deal"
    POKER_NEXT = "poker-next"
    POKER_FOLD = "poker-fold"
    BJ_DEAL = "bj-deal"
    BJ_HIT = "bj-hit"
    BJ_STAND = "bj-stand"


POKER_ACTIONS = frozenset({Control.POKER_NEXT, Control.POKER_FOLD})
BLACKJACK_ACTIONS = frozenset({Control.BJ_HIT, Control.BJ_STAND})
POKER_CONTROLS = POKER_ACTIONS | {Control.POKER_DEAL}
BLACKJACK_CONTROLS = BLACKJACK_ACTIONS | {Control.BJ_DEAL}


class PresentationSink(ABC):
    """
    Receives everything a round engine wants shown.

    The sink owns rendering and reveal timing; it holds no game state.
    Reveal calls suspend until the reveal animation has had its time, so
    an engine awaiting them is paced by the sink.
    """

    @abstractmethod
    async def reveal_card(
        self,
        container: Container,
        card: Card,
        face_down: bool = False,
    ) -> None:
        """Append a card to a table area and wait out the reveal pacing."""

    @abstractmethod
    async def turn_face_up(self, container: Container, index: int, card: Card) -> None:
        """Show the face of a card previously revealed face down."""

    @abstractmethod
    def set_status(self, message: str) -> None:
        """Replace the status line."""

    @abstractmethod
    def set_pot(self, amount: int) -> None:
        """Display the pot amount."""

    @abstractmethod
    def clear_table(self) -> None:
        """Remove every card from every area."""

    @abstractmethod
    def set_controls_enabled(self, controls: Iterable[Control], enabled: bool) -> None:
        """Enable or disable a set of controls."""

    @abstractmethod
    def show_table(self, game: GameKind, opponent_name: str) -> None:
        """Switch the display to a game table."""

    @abstractmethod
    def show_menu(self) -> None:
        """Switch the display back to game selection."""
