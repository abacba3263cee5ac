"""Presentation sink backing the pygame table scene."""

import asyncio
import logging
from typing import Iterable, Optional

from config import config
from core.cards import Card
from core.game.sink import Container, Control, GameKind, PresentationSink
from pygame_ui.components.card import CardView

logger = logging.getLogger(__name__)


class PygameTableSink(PresentationSink):
    """Keeps what the table shows; the scenes draw it every frame.

    Reveals return after the reveal delay, during which the render loop
    keeps running and the new card is already on screen.
    """

    def __init__(self, reveal_delay: Optional[float] = None):
        self.reveal_delay = config.pacing.reveal_delay if reveal_delay is None else reveal_delay
        self.areas: dict[Container, list[CardView]] = {container: [] for container in Container}
        self.status = ""
        self.pot = 0
        self.enabled: dict[Control, bool] = {control: False for control in Control}
        self.game: Optional[GameKind] = None
        self.opponent_name = ""

    async def reveal_card(self, container: Container, card: Card, face_down: bool = False) -> None:
        self.areas[container].append(CardView(card, face_up=not face_down))
        await asyncio.sleep(self.reveal_delay)

    async def turn_face_up(self, container: Container, index: int, card: Card) -> None:
        self.areas[container][index] = CardView(card, face_up=True)
        await asyncio.sleep(self.reveal_delay)

    def set_status(self, message: str) -> None:
        self.status = message

    def set_pot(self, amount: int) -> None:
        self.pot = amount

    def clear_table(self) -> None:
        for views in self.areas.values():
            views.clear()

    def set_controls_enabled(self, controls: Iterable[Control], enabled: bool) -> None:
        for control in controls:
            self.enabled[control] = enabled

    def show_table(self, game: GameKind, opponent_name: str) -> None:
        logger.debug("Showing %s table", game.value)
        self.game = game
        self.opponent_name = opponent_name

    def show_menu(self) -> None:
        self.game = None
        self.opponent_name = ""
        self.clear_table()
        self.set_controls_enabled(Control, False)
