"""Clickable button component with hover and press states."""

from enum import Enum, auto
from typing import Callable, Optional, Tuple

import pygame

from core.game.sink import Control
from pygame_ui.config import COLORS, DIMENSIONS


class ButtonState(Enum):
    """Visual state of a button."""

    NORMAL = auto()
    HOVERED = auto()
    PRESSED = auto()
    DISABLED = auto()


class Button:
    """A centered, clickable button.

    The click callback fires on mouse release inside the button, and only
    while the button is enabled.
    """

    def __init__(
        self,
        x: float,
        y: float,
        text: str,
        on_click: Optional[Callable[[], None]] = None,
        width: int = DIMENSIONS.BUTTON_WIDTH,
        height: int = DIMENSIONS.BUTTON_HEIGHT,
        font_size: int = 28,
        enabled: bool = True,
    ):
        """Initialize a button.

        Args:
            x: Center x position
            y: Center y position
            text: Button text
            on_click: Callback function when clicked
            width: Button width
            height: Button height
            font_size: Text font size
            enabled: Whether button is interactive
        """
        self.text = text
        self.on_click = on_click
        self.width = width
        self.height = height
        self.font_size = font_size
        self.x = x - width / 2
        self.y = y - height / 2

        self.enabled = enabled
        self.state = ButtonState.NORMAL if enabled else ButtonState.DISABLED
        self._is_pressed = False
        self._font: Optional[pygame.font.Font] = None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, self.font_size)
        return self._font

    @property
    def rect(self) -> pygame.Rect:
        """Get the button's rectangle."""
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the button."""
        if enabled == self.enabled:
            return
        self.enabled = enabled
        self._is_pressed = False
        self.state = ButtonState.NORMAL if enabled else ButtonState.DISABLED

    def contains_point(self, point: Tuple[float, float]) -> bool:
        return self.rect.collidepoint(point)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Handle a pygame event.

        Returns:
            True if event was consumed (clicked)
        """
        if not self.enabled:
            return False

        if event.type == pygame.MOUSEMOTION:
            if not self._is_pressed:
                hovered = self.contains_point(event.pos)
                self.state = ButtonState.HOVERED if hovered else ButtonState.NORMAL

        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and self.contains_point(event.pos):
                self.state = ButtonState.PRESSED
                self._is_pressed = True

        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1 and self._is_pressed:
                self._is_pressed = False
                if self.contains_point(event.pos):
                    self.state = ButtonState.HOVERED
                    if self.on_click:
                        self.on_click()
                    return True
                self.state = ButtonState.NORMAL

        return False

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the button."""
        if not self.enabled:
            bg_color = COLORS.BUTTON_DISABLED
            text_color = COLORS.TEXT_MUTED
        elif self.state == ButtonState.PRESSED:
            bg_color = COLORS.BUTTON_PRESSED
            text_color = COLORS.TEXT_WHITE
        elif self.state == ButtonState.HOVERED:
            bg_color = COLORS.BUTTON_HOVER
            text_color = COLORS.TEXT_WHITE
        else:
            bg_color = COLORS.BUTTON_DEFAULT
            text_color = COLORS.TEXT_WHITE

        pygame.draw.rect(surface, bg_color, self.rect, border_radius=DIMENSIONS.BUTTON_CORNER_RADIUS)

        text_surface = self.font.render(self.text, True, text_color)
        surface.blit(text_surface, text_surface.get_rect(center=self.rect.center))


class ControlButton(Button):
    """Button bound to an engine control; its enabled state follows the sink."""

    def __init__(
        self,
        x: float,
        y: float,
        text: str,
        control: Control,
        on_click: Optional[Callable[[], None]] = None,
        hotkey: Optional[str] = None,
    ):
        super().__init__(x=x, y=y, text=text, on_click=on_click, enabled=False)
        self.control = control
        self.hotkey = hotkey

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the button with its keyboard shortcut hint."""
        super().draw(surface)

        if self.hotkey and self.enabled:
            hint_font = pygame.font.Font(None, 18)
            hint_text = hint_font.render(f"[{self.hotkey}]", True, COLORS.TEXT_MUTED)
            hint_rect = hint_text.get_rect(centerx=self.rect.centerx, bottom=self.rect.top - 4)
            surface.blit(hint_text, hint_rect)
