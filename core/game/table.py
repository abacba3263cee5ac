"""Table session: owns one engine per game and routes player commands."""

import logging
from random import Random
from typing import Awaitable, Callable

from config import AppConfig, config as default_config
from core.game.blackjack import BlackjackGame
from core.game.poker import PokerGame
from core.game.sink import GameKind, PresentationSink

logger = logging.getLogger(__name__)


class TableSession:
    """
    Game selection and command routing for one presentation sink.

    Each session builds its own poker and blackjack engines, each with its
    own deck, so independent sessions never share state.
    """

    def __init__(
        self,
        sink: PresentationSink,
        app_config: AppConfig | None = None,
        rng: Random | None = None,
    ) -> None:
        app_config = app_config or default_config
        self.sink = sink
        # Each engine shuffles from its own generator, seeded from rng
        poker_rng = Random(rng.getrandbits(64)) if rng else None
        blackjack_rng = Random(rng.getrandbits(64)) if rng else None
        self.poker = PokerGame(sink, settings=app_config.poker, rng=poker_rng)
        self.blackjack = BlackjackGame(sink, settings=app_config.blackjack, rng=blackjack_rng)
        self._active: GameKind | None = None

    @property
    def active_game(self) -> GameKind | None:
        """Currently selected game, or None at the menu."""
        return self._active

    def select(self, game: GameKind) -> bool:
        """Open a game table."""
        engine = self.poker if game is GameKind.POKER else self.blackjack
        if not engine.init():
            return False
        self._active = game
        logger.info("Selected %s", game.value)
        return True

    def exit_to_menu(self) -> None:
        """Leave the current table for game selection."""
        self._active = None
        self.sink.show_menu()

    def commands(self) -> dict[str, Callable[[], Awaitable[bool]]]:
        """Commands available at the active table, by name."""
        if self._active is GameKind.POKER:
            return {
                "deal": self.poker.start_round,
                "next": self.poker.next_phase,
                "fold": self.poker.fold,
            }
        if self._active is GameKind.BLACKJACK:
            return {
                "deal": self.blackjack.start_round,
                "hit": self.blackjack.hit,
                "stand": self.blackjack.stand,
            }
        return {}

    async def command(self, name: str) -> bool:
        """
        Run a named command against the active game.

        Raises:
            ValueError: if no game is selected or the command is unknown
        """
        if self._active is None:
            raise ValueError("No game selected")

        handlers = self.commands()
        if name not in handlers:
            raise ValueError(f"Unknown {self._active.value} command: {name}")
        return await handlers[name]()
