"""Card table scene shared by both games."""

from typing import Optional

import pygame

from core.game.sink import Container, Control, GameKind
from pygame_ui.components.button import Button, ControlButton
from pygame_ui.components.card import CardRow
from pygame_ui.config import COLORS, DIMENSIONS
from pygame_ui.scenes.base_scene import BaseScene

# (label, control, command, hotkey label, key)
POKER_BUTTONS = [
    ("Deal", Control.POKER_DEAL, "deal", "D", pygame.K_d),
    ("Next", Control.POKER_NEXT, "next", "N", pygame.K_n),
    ("Fold", Control.POKER_FOLD, "fold", "F", pygame.K_f),
]

BLACKJACK_BUTTONS = [
    ("New Deal", Control.BJ_DEAL, "deal", "D", pygame.K_d),
    ("Hit", Control.BJ_HIT, "hit", "H", pygame.K_h),
    ("Stand", Control.BJ_STAND, "stand", "S", pygame.K_s),
]


class TableScene(BaseScene):
    """Draws what the table sink holds and turns clicks into commands.

    Button enabled states mirror the sink every frame, so a command can
    only be issued while its engine has its control enabled.
    """

    def __init__(self):
        super().__init__()
        self._status_font: Optional[pygame.font.Font] = None
        self._label_font: Optional[pygame.font.Font] = None

        self.rows = {
            Container.OPPONENT: CardRow(DIMENSIONS.CENTER_X, DIMENSIONS.OPPONENT_AREA_Y),
            Container.COMMUNITY: CardRow(DIMENSIONS.CENTER_X, DIMENSIONS.COMMUNITY_AREA_Y, slots=5),
            Container.PLAYER: CardRow(DIMENSIONS.CENTER_X, DIMENSIONS.PLAYER_AREA_Y),
        }
        self.buttons: dict[GameKind, list[ControlButton]] = {}
        self.hotkeys: dict[GameKind, dict[int, Control]] = {}
        self.commands: dict[Control, str] = {}
        self.exit_button: Optional[Button] = None

    def on_enter(self) -> None:
        super().on_enter()
        if self._status_font is None:
            self._status_font = pygame.font.Font(None, 40)
            self._label_font = pygame.font.Font(None, 28)
        if not self.buttons:
            self._init_buttons()

    def _init_buttons(self) -> None:
        for game, specs in ((GameKind.POKER, POKER_BUTTONS), (GameKind.BLACKJACK, BLACKJACK_BUTTONS)):
            step = DIMENSIONS.BUTTON_WIDTH + DIMENSIONS.BUTTON_GAP
            left = DIMENSIONS.CENTER_X - step
            self.buttons[game] = [
                ControlButton(
                    x=left + i * step,
                    y=DIMENSIONS.CONTROLS_Y,
                    text=label,
                    control=control,
                    on_click=self._command_callback(command),
                    hotkey=hotkey,
                )
                for i, (label, control, command, hotkey, _) in enumerate(specs)
            ]
            self.hotkeys[game] = {key: control for _, control, _, _, key in specs}
            self.commands.update({control: command for _, control, command, _, _ in specs})

        self.exit_button = Button(
            x=DIMENSIONS.SCREEN_WIDTH - 90,
            y=DIMENSIONS.CONTROLS_Y,
            text="Exit",
            width=120,
            on_click=self._exit,
        )

    def _command_callback(self, command: str):
        def callback() -> None:
            if self.app:
                self.app.run_command(command)

        return callback

    def _exit(self) -> None:
        if self.app:
            self.app.exit_to_menu()

    def _active_buttons(self) -> list[ControlButton]:
        if not self.app or self.app.sink.game is None:
            return []
        return self.buttons[self.app.sink.game]

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.KEYDOWN and self.app and self.app.sink.game is not None:
            if event.key == pygame.K_ESCAPE:
                if self.exit_button.enabled:
                    self._exit()
                return True

            control = self.hotkeys[self.app.sink.game].get(event.key)
            if control is not None:
                if self.app.sink.enabled[control]:
                    self.app.run_command(self.commands[control])
                return True

        if self.exit_button.handle_event(event):
            return True
        return any(button.handle_event(event) for button in self._active_buttons())

    def update(self, dt: float) -> None:
        if not self.app:
            return
        for button in self._active_buttons():
            button.set_enabled(self.app.sink.enabled[button.control])
        self.exit_button.set_enabled(not self.app.busy)

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(COLORS.FELT_GREEN)
        sink = self.app.sink

        # Table outline
        felt = pygame.Rect(40, 40, DIMENSIONS.SCREEN_WIDTH - 80, DIMENSIONS.CONTROLS_Y - 80)
        pygame.draw.rect(surface, COLORS.FELT_DARK, felt, width=6, border_radius=120)

        opponent = self._label_font.render(sink.opponent_name, True, COLORS.TEXT_MUTED)
        surface.blit(opponent, opponent.get_rect(midbottom=(DIMENSIONS.CENTER_X, DIMENSIONS.OPPONENT_AREA_Y - 8)))
        player = self._label_font.render("You", True, COLORS.TEXT_MUTED)
        surface.blit(
            player,
            player.get_rect(midtop=(DIMENSIONS.CENTER_X, DIMENSIONS.PLAYER_AREA_Y + DIMENSIONS.CARD_HEIGHT + 8)),
        )

        self.rows[Container.OPPONENT].draw(surface, sink.areas[Container.OPPONENT])
        self.rows[Container.PLAYER].draw(surface, sink.areas[Container.PLAYER])

        if sink.game is GameKind.POKER:
            self.rows[Container.COMMUNITY].draw(surface, sink.areas[Container.COMMUNITY])
            pot = self._label_font.render(f"Pot: {sink.pot}", True, COLORS.GOLD)
            surface.blit(pot, pot.get_rect(topleft=(80, DIMENSIONS.COMMUNITY_AREA_Y)))

        status = self._status_font.render(sink.status, True, COLORS.TEXT_WHITE)
        status_y = DIMENSIONS.COMMUNITY_AREA_Y + DIMENSIONS.CARD_HEIGHT + 24
        surface.blit(status, status.get_rect(center=(DIMENSIONS.CENTER_X, status_y)))

        for button in self._active_buttons():
            button.draw(surface)
        self.exit_button.draw(surface)
