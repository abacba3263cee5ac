"""Card rendering: faces, backs and centered rows of cards."""

from dataclasses import dataclass
from typing import Optional, Sequence

import pygame

from core.cards import Card, Color
from pygame_ui.config import COLORS, DIMENSIONS


@dataclass(frozen=True)
class CardView:
    """A card as placed on the table."""

    card: Card
    face_up: bool = True


def _card_rect(x: int, y: int) -> pygame.Rect:
    return pygame.Rect(x, y, DIMENSIONS.CARD_WIDTH, DIMENSIONS.CARD_HEIGHT)


def render_card_face(card: Card) -> pygame.Surface:
    """Render the face-up side of a card."""
    width, height = DIMENSIONS.CARD_WIDTH, DIMENSIONS.CARD_HEIGHT
    surface = pygame.Surface((width, height), pygame.SRCALPHA)

    rect = pygame.Rect(0, 0, width, height)
    pygame.draw.rect(surface, COLORS.CARD_WHITE, rect, border_radius=DIMENSIONS.CARD_CORNER_RADIUS)
    pygame.draw.rect(surface, COLORS.CARD_BLACK, rect, width=2, border_radius=DIMENSIONS.CARD_CORNER_RADIUS)

    color = COLORS.CARD_RED if card.color is Color.RED else COLORS.CARD_BLACK

    # Corner label, then again upside down in the opposite corner
    font_size = max(16, int(height * 0.18))
    font = pygame.font.Font(None, font_size)
    corner = font.render(f"{card.face} {card.suit}", True, color)
    surface.blit(corner, (8, 6))
    flipped = pygame.transform.rotate(corner, 180)
    surface.blit(flipped, (width - 8 - flipped.get_width(), height - 6 - flipped.get_height()))

    center_font = pygame.font.Font(None, int(height * 0.45))
    center_suit = center_font.render(str(card.suit), True, color)
    surface.blit(center_suit, center_suit.get_rect(center=(width // 2, height // 2)))

    return surface


def render_card_back() -> pygame.Surface:
    """Render the face-down side of a card."""
    width, height = DIMENSIONS.CARD_WIDTH, DIMENSIONS.CARD_HEIGHT
    surface = pygame.Surface((width, height), pygame.SRCALPHA)

    rect = pygame.Rect(0, 0, width, height)
    pygame.draw.rect(surface, COLORS.CARD_BACK, rect, border_radius=DIMENSIONS.CARD_CORNER_RADIUS)

    inner = rect.inflate(-14, -14)
    pygame.draw.rect(surface, COLORS.CARD_BACK_PATTERN, inner, width=2, border_radius=4)
    for offset in range(0, inner.width + inner.height, 12):
        start = (inner.left + min(offset, inner.width), inner.top + max(0, offset - inner.width))
        end = (inner.left + max(0, offset - inner.height), inner.top + min(offset, inner.height))
        pygame.draw.line(surface, COLORS.CARD_BACK_PATTERN, start, end, 1)

    return surface


class CardRow:
    """Horizontally centered row of cards for one table area."""

    def __init__(self, center_x: int, y: int, slots: int = 0):
        """Initialize a row.

        Args:
            center_x: Horizontal center of the row
            y: Top of the cards
            slots: Number of empty placeholders to outline (community cards)
        """
        self.center_x = center_x
        self.y = y
        self.slots = slots
        self._cache: dict[CardView, pygame.Surface] = {}
        self._back: Optional[pygame.Surface] = None

    def _surface_for(self, view: CardView) -> pygame.Surface:
        if not view.face_up:
            if self._back is None:
                self._back = render_card_back()
            return self._back
        if view not in self._cache:
            self._cache[view] = render_card_face(view.card)
        return self._cache[view]

    def _left(self, count: int) -> int:
        step = DIMENSIONS.CARD_WIDTH + DIMENSIONS.CARD_GAP
        return self.center_x - (count * step - DIMENSIONS.CARD_GAP) // 2

    def draw(self, surface: pygame.Surface, views: Sequence[CardView]) -> None:
        step = DIMENSIONS.CARD_WIDTH + DIMENSIONS.CARD_GAP
        count = max(len(views), self.slots)
        left = self._left(count)

        for i in range(len(views), self.slots):
            pygame.draw.rect(
                surface,
                COLORS.SLOT_OUTLINE,
                _card_rect(left + i * step, self.y),
                width=2,
                border_radius=DIMENSIONS.CARD_CORNER_RADIUS,
            )

        for i, view in enumerate(views):
            surface.blit(self._surface_for(view), (left + i * step, self.y))
