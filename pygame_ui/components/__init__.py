"""UI components for the card table."""

from pygame_ui.components.button import Button, ButtonState, ControlButton
from pygame_ui.components.card import CardRow, CardView, render_card_back, render_card_face

__all__ = [
    "Button",
    "ButtonState",
    "ControlButton",
    "CardRow",
    "CardView",
    "render_card_back",
    "render_card_face",
]
