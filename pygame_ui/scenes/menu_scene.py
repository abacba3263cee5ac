"""Game selection menu."""

from typing import Optional

import pygame

from core.game.sink import GameKind
from pygame_ui.components.button import Button
from pygame_ui.config import COLORS, DIMENSIONS
from pygame_ui.scenes.base_scene import BaseScene


class MenuScene(BaseScene):
    """Title and one button per game. P and B pick a game, Escape quits."""

    def __init__(self):
        super().__init__()
        self._title_font: Optional[pygame.font.Font] = None
        self._subtitle_font: Optional[pygame.font.Font] = None
        self.buttons: list[Button] = []

    def on_enter(self) -> None:
        super().on_enter()
        if self._title_font is None:
            self._title_font = pygame.font.Font(None, 96)
            self._subtitle_font = pygame.font.Font(None, 32)
        if not self.buttons:
            y = DIMENSIONS.SCREEN_HEIGHT // 2 + 40
            self.buttons = [
                Button(
                    x=DIMENSIONS.CENTER_X,
                    y=y,
                    text="Texas Hold'em",
                    width=240,
                    on_click=lambda: self._select(GameKind.POKER),
                ),
                Button(
                    x=DIMENSIONS.CENTER_X,
                    y=y + DIMENSIONS.BUTTON_HEIGHT + DIMENSIONS.BUTTON_GAP,
                    text="Blackjack",
                    width=240,
                    on_click=lambda: self._select(GameKind.BLACKJACK),
                ),
            ]

    def _select(self, game: GameKind) -> None:
        if self.app:
            self.app.select_game(game)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_p:
                self._select(GameKind.POKER)
                return True
            if event.key == pygame.K_b:
                self._select(GameKind.BLACKJACK)
                return True
            if event.key == pygame.K_ESCAPE and self.app:
                self.app.running = False
                return True

        return any(button.handle_event(event) for button in self.buttons)

    def update(self, dt: float) -> None:
        pass

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(COLORS.BACKGROUND)

        title = self._title_font.render("Card Table", True, COLORS.GOLD)
        surface.blit(title, title.get_rect(center=(DIMENSIONS.CENTER_X, DIMENSIONS.SCREEN_HEIGHT // 3)))

        subtitle = self._subtitle_font.render("Choose a game", True, COLORS.TEXT_MUTED)
        surface.blit(
            subtitle,
            subtitle.get_rect(center=(DIMENSIONS.CENTER_X, DIMENSIONS.SCREEN_HEIGHT // 3 + 60)),
        )

        for button in self.buttons:
            button.draw(surface)
